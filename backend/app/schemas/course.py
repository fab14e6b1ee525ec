"""Course catalog schemas."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class LessonRead(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    order_index: int
    duration_minutes: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class CourseRead(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    lessons: List[LessonRead] = []

    model_config = ConfigDict(from_attributes=True)
