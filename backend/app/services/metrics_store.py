"""Read-only access to the records the metrics engine reduces.

``MetricsStore`` is the seam between the pure reductions and the system of
record. ``SqlMetricsStore`` implements it over the application database; any
database error is logged and re-raised as ``DataUnavailable`` so callers can
tell a failed fetch apart from a student who simply has no data yet.
"""

import logging
from typing import List, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.settings import get_settings
from backend.app.core.time import as_utc
from backend.app.models.activity_event import ActivityEvent
from backend.app.models.certificate import Certificate
from backend.app.models.enrollment import Enrollment, LessonProgress
from backend.app.models.study_session import StudySession
from backend.app.models.user_preferences import UserPreferences
from backend.app.schemas.metrics import (
    ActivityEventRecord,
    EnrollmentRecord,
    LessonCompletionRecord,
    StudySessionRecord,
)

logger = logging.getLogger(__name__)


class DataUnavailable(Exception):
    """A fetch from the system of record failed."""


class MetricsStore(Protocol):
    def fetch_enrollments(self, student_id: int) -> List[EnrollmentRecord]: ...

    def fetch_lesson_completions(self, student_id: int) -> List[LessonCompletionRecord]: ...

    def fetch_study_sessions(self, student_id: int) -> List[StudySessionRecord]: ...

    def fetch_activity_events(self, student_id: int, limit: int) -> List[ActivityEventRecord]: ...

    def fetch_weekly_goal_hours(self, student_id: int) -> float: ...

    def count_certificates(self, student_id: int) -> int: ...


class SqlMetricsStore:
    def __init__(self, db: Session):
        self.db = db

    def _run(self, label: str, student_id: int, fetch):
        try:
            return fetch()
        except SQLAlchemyError as exc:
            logger.exception("Fetching %s for student %s failed", label, student_id)
            raise DataUnavailable(f"Could not load {label}") from exc

    def fetch_enrollments(self, student_id: int) -> List[EnrollmentRecord]:
        def fetch():
            rows = self.db.query(Enrollment).filter(Enrollment.student_id == student_id).all()
            return [
                EnrollmentRecord(
                    student_id=row.student_id,
                    course_id=row.course_id,
                    enrolled_at=as_utc(row.enrolled_at),
                    completed=bool(row.completed),
                    completed_at=as_utc(row.completed_at),
                )
                for row in rows
            ]

        return self._run("enrollments", student_id, fetch)

    def fetch_lesson_completions(self, student_id: int) -> List[LessonCompletionRecord]:
        def fetch():
            rows = self.db.query(LessonProgress).filter(LessonProgress.student_id == student_id).all()
            return [
                LessonCompletionRecord(
                    student_id=row.student_id,
                    lesson_id=row.lesson_id,
                    course_id=row.course_id,
                    completed_at=as_utc(row.completed_at),
                )
                for row in rows
            ]

        return self._run("lesson progress", student_id, fetch)

    def fetch_study_sessions(self, student_id: int) -> List[StudySessionRecord]:
        def fetch():
            rows = self.db.query(StudySession).filter(StudySession.student_id == student_id).all()
            return [
                StudySessionRecord(
                    student_id=row.student_id,
                    started_at=as_utc(row.started_at),
                    duration_minutes=row.duration_minutes,
                )
                for row in rows
            ]

        return self._run("study sessions", student_id, fetch)

    def fetch_activity_events(self, student_id: int, limit: int) -> List[ActivityEventRecord]:
        def fetch():
            rows = (
                self.db.query(ActivityEvent)
                .filter(ActivityEvent.student_id == student_id)
                .order_by(ActivityEvent.occurred_at.desc().nulls_last(), ActivityEvent.id.desc())
                .limit(limit)
                .all()
            )
            return [
                ActivityEventRecord(
                    id=row.id,
                    student_id=row.student_id,
                    type=row.event_type,
                    title=row.title,
                    description=row.description,
                    occurred_at=as_utc(row.occurred_at),
                )
                for row in rows
            ]

        return self._run("activity events", student_id, fetch)

    def fetch_weekly_goal_hours(self, student_id: int) -> float:
        def fetch():
            prefs = self.db.query(UserPreferences).filter(UserPreferences.user_id == student_id).first()
            if prefs is not None and prefs.weekly_goal_hours is not None:
                return float(prefs.weekly_goal_hours)
            return get_settings().default_weekly_goal_hours

        return self._run("weekly goal", student_id, fetch)

    def count_certificates(self, student_id: int) -> int:
        return self._run(
            "certificates",
            student_id,
            lambda: self.db.query(Certificate).filter(Certificate.student_id == student_id).count(),
        )
