from backend.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from backend.app.models.user import User  # noqa: F401
from backend.app.models.user_preferences import UserPreferences  # noqa: F401
from backend.app.models.course import Course, Lesson  # noqa: F401
from backend.app.models.enrollment import Enrollment, LessonProgress  # noqa: F401
from backend.app.models.study_session import StudySession  # noqa: F401
from backend.app.models.activity_event import ActivityEvent  # noqa: F401
from backend.app.models.certificate import Certificate  # noqa: F401
