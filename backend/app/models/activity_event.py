"""Activity event model backing the student dashboard feed."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


class ActivityEvent(Base):
    __tablename__ = "activity_events"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    event_type = Column(String(50), nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    occurred_at = Column(DateTime, nullable=True, default=utc_now)

    student = relationship("User", back_populates="activity_events")
