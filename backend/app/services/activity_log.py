"""Activity services for recording student-facing events."""

from backend.app.models.activity_event import ActivityEvent
from backend.app.schemas.metrics import ActivityKind


def record_event(db, student_id: int, kind: ActivityKind, title: str, description: str | None = None) -> ActivityEvent:
    # Joins the caller's transaction; the caller commits
    event = ActivityEvent(student_id=student_id, event_type=kind.value, title=title, description=description)
    db.add(event)
    return event
