"""Enrollment and lesson progress schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_serializer

from backend.app.core.time import as_utc


class EnrollmentCreate(BaseModel):
    course_id: int


class EnrollmentRead(BaseModel):
    id: int
    student_id: int
    course_id: int
    enrolled_at: datetime
    completed: bool
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("enrolled_at", "completed_at")
    def _serialize_utc(self, value: Optional[datetime]):
        return as_utc(value)


class LessonProgressRead(BaseModel):
    id: int
    student_id: int
    lesson_id: int
    course_id: int
    completed_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("completed_at")
    def _serialize_utc(self, value: datetime):
        return as_utc(value)
