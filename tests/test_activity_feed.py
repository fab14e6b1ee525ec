from datetime import datetime, timedelta, timezone

import pytest

from backend.app.schemas.metrics import ActivityEventRecord, ActivityKind
from backend.app.services.activity_feed import build_activity_feed

BASE = datetime(2030, 6, 15, 12, 0, tzinfo=timezone.utc)


def event(event_id: int, occurred_at, event_type: str = "course_enrolled") -> ActivityEventRecord:
    return ActivityEventRecord(
        id=event_id,
        student_id=1,
        type=event_type,
        title=f"Event {event_id}",
        description=None,
        occurred_at=occurred_at,
    )


def test_newest_first_and_truncated_to_limit():
    t1 = BASE
    t2 = BASE - timedelta(days=1)
    t3 = BASE + timedelta(days=1)
    feed = build_activity_feed([event(1, t1), event(2, t2), event(3, t3)], limit=2)
    assert [e.occurred_at for e in feed.entries] == [t3, t1]
    assert [e.id for e in feed.entries] == [3, 1]


def test_ties_broken_by_id_descending():
    feed = build_activity_feed([event(4, BASE), event(9, BASE), event(7, BASE)], limit=10)
    assert [e.id for e in feed.entries] == [9, 7, 4]


def test_unknown_type_falls_back_to_generic_category():
    feed = build_activity_feed([event(1, BASE, "quiz_passed")], limit=5)
    (entry,) = feed.entries
    assert entry.kind is ActivityKind.OTHER
    assert entry.type == "quiz_passed"
    assert (entry.icon, entry.tone) == ("activity", "muted")


@pytest.mark.parametrize(
    "event_type, icon, tone",
    [
        ("course_enrolled", "book-open", "primary"),
        ("lesson_completed", "award", "success"),
        ("course_completed", "trophy", "warning"),
        ("certificate_earned", "award", "purple"),
        ("other", "activity", "muted"),
    ],
)
def test_presentation_by_kind(event_type, icon, tone):
    (entry,) = build_activity_feed([event(1, BASE, event_type)], limit=1).entries
    assert entry.kind.value == event_type
    assert (entry.icon, entry.tone) == (icon, tone)


def test_events_without_timestamp_are_skipped():
    feed = build_activity_feed(
        [event(1, BASE), event(2, None), event(3, datetime(2030, 6, 1, 9, 0))],
        limit=5,
    )
    assert [e.id for e in feed.entries] == [1]
    assert feed.skipped_records == 2


def test_empty_feed():
    feed = build_activity_feed([], limit=3)
    assert feed.entries == ()


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        build_activity_feed([event(1, BASE)], limit=0)
