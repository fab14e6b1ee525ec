"""Study session schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from backend.app.core.time import as_utc


class StudySessionCreate(BaseModel):
    started_at: datetime
    duration_minutes: int = Field(gt=0, le=24 * 60)
    course_id: Optional[int] = None


class StudySessionRead(BaseModel):
    id: int
    student_id: int
    course_id: Optional[int] = None
    started_at: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("started_at", "created_at")
    def _serialize_utc(self, value: Optional[datetime]):
        return as_utc(value)
