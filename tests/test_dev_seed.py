import pytest

from backend.app.core.dev_seed import DEFAULT_DEV_COURSES, ensure_dev_data, seed_dev_data
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.models.course import Course
from backend.app.models.user import User


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def test_seed_is_skipped_under_pytest():
    with SessionLocal() as db:
        ensure_dev_data(db)
        assert db.query(User).count() == 0


def test_seed_creates_student_and_catalog_once():
    with SessionLocal() as db:
        seed_dev_data(db)
        seed_dev_data(db)
        assert db.query(User).filter(User.email == "student@test.com").count() == 1
        courses = db.query(Course).all()
        assert len(courses) == len(DEFAULT_DEV_COURSES)
        assert all(course.lessons for course in courses)
