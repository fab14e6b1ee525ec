"""Recent activity feed for the student dashboard."""

import logging
from typing import Dict, Iterable, Tuple

from backend.app.core.time import is_aware
from backend.app.schemas.metrics import ActivityEventRecord, ActivityFeed, ActivityFeedEntry, ActivityKind

logger = logging.getLogger(__name__)

# (icon, tone) per kind, consumed by the portal frontend
ACTIVITY_PRESENTATION: Dict[ActivityKind, Tuple[str, str]] = {
    ActivityKind.COURSE_ENROLLED: ("book-open", "primary"),
    ActivityKind.LESSON_COMPLETED: ("award", "success"),
    ActivityKind.COURSE_COMPLETED: ("trophy", "warning"),
    ActivityKind.CERTIFICATE_EARNED: ("award", "purple"),
    ActivityKind.OTHER: ("activity", "muted"),
}


def to_feed_entry(event: ActivityEventRecord) -> ActivityFeedEntry:
    kind = ActivityKind.parse(event.type)
    icon, tone = ACTIVITY_PRESENTATION[kind]
    return ActivityFeedEntry(
        id=event.id,
        type=event.type,
        kind=kind,
        title=event.title,
        description=event.description,
        occurred_at=event.occurred_at,
        icon=icon,
        tone=tone,
    )


def build_activity_feed(events: Iterable[ActivityEventRecord], *, limit: int) -> ActivityFeed:
    """Return the newest ``limit`` events, newest first, ties broken by id."""
    if limit < 1:
        raise ValueError("Feed limit must be at least 1")

    dated = []
    skipped = 0
    for event in events:
        if is_aware(event.occurred_at):
            dated.append(event)
        else:
            skipped += 1
    if skipped:
        logger.warning("Skipped %s activity events without a usable timestamp", skipped)

    dated.sort(key=lambda e: (e.occurred_at, e.id), reverse=True)
    return ActivityFeed(
        entries=tuple(to_feed_entry(e) for e in dated[:limit]),
        skipped_records=skipped,
    )
