"""Schemas for the student progress and metrics engine.

Input records mirror the rows handed over by the metrics store. Their fields
are deliberately loose (optional timestamps and durations) so that a bad row
reaches the reductions and is skipped there instead of failing a whole fetch.
Every derived schema is frozen; a ``StudentMetrics`` snapshot is built fresh
per request and never mutated afterwards.
"""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class EnrollmentRecord(BaseModel):
    student_id: int
    course_id: int
    enrolled_at: Optional[datetime] = None
    completed: bool = False
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class LessonCompletionRecord(BaseModel):
    student_id: int
    lesson_id: int
    course_id: int
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class StudySessionRecord(BaseModel):
    student_id: int
    started_at: Optional[datetime] = None
    duration_minutes: Optional[int] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class ActivityEventRecord(BaseModel):
    id: int
    student_id: int
    type: str
    title: str
    description: Optional[str] = None
    occurred_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class ActivityKind(str, Enum):
    COURSE_ENROLLED = "course_enrolled"
    LESSON_COMPLETED = "lesson_completed"
    COURSE_COMPLETED = "course_completed"
    CERTIFICATE_EARNED = "certificate_earned"
    OTHER = "other"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ActivityKind":
        """Map a stored event type onto a known kind; anything unrecognised is OTHER."""
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER


class ActivityFeedEntry(BaseModel):
    id: int
    type: str
    kind: ActivityKind
    title: str
    description: Optional[str] = None
    occurred_at: datetime
    icon: str
    tone: str

    model_config = ConfigDict(frozen=True)


class EnrollmentSummary(BaseModel):
    enrolled_courses_count: int = 0
    completed_courses_count: int = 0
    completion_rate: float = 0.0
    completed_lessons_count: int = 0

    model_config = ConfigDict(frozen=True)


class StudyTimeSummary(BaseModel):
    total_study_time_hours: float = 0.0
    weekly_studied_hours: float = 0.0
    weekly_goal_hours: float = 0.0
    weekly_goal_progress: float = 0.0
    current_streak: int = 0
    skipped_records: int = 0

    model_config = ConfigDict(frozen=True)


class ActivityFeed(BaseModel):
    entries: Tuple[ActivityFeedEntry, ...] = ()
    skipped_records: int = 0

    model_config = ConfigDict(frozen=True)


class StudentMetrics(BaseModel):
    student_id: int
    as_of: datetime
    reporting_timezone: str
    enrolled_courses_count: int
    completed_courses_count: int
    completion_rate: float
    completed_lessons_count: int
    total_study_time_hours: float
    weekly_studied_hours: float
    weekly_goal_hours: float
    weekly_goal_progress: float
    current_streak: int
    certificates_earned: int
    recent_activity: Tuple[ActivityFeedEntry, ...]
    skipped_records: int = 0

    model_config = ConfigDict(frozen=True)


class MetricsFailure(BaseModel):
    reason: Literal["data_unavailable", "invalid_configuration"]
    detail: str

    model_config = ConfigDict(frozen=True)
