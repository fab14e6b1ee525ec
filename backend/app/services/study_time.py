"""Study time totals, weekly goal progress and daily streaks."""

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, List, Set

from backend.app.core.time import is_aware
from backend.app.schemas.metrics import StudySessionRecord, StudyTimeSummary

logger = logging.getLogger(__name__)

WEEKLY_WINDOW = timedelta(days=7)


def is_qualifying_session(session: StudySessionRecord) -> bool:
    # Only positive-duration sessions with an aware start count toward time or streaks
    return (
        is_aware(session.started_at)
        and session.duration_minutes is not None
        and session.duration_minutes > 0
    )


def weekly_window(now: datetime) -> tuple[datetime, datetime]:
    """Return the rolling ``[start, end)`` window ending at ``now``."""
    return now - WEEKLY_WINDOW, now


def in_weekly_window(started_at: datetime, now: datetime) -> bool:
    start, end = weekly_window(now)
    return start <= started_at < end


def active_days(sessions: Iterable[StudySessionRecord], tz: tzinfo) -> Set[date]:
    return {s.started_at.astimezone(tz).date() for s in sessions}


def current_streak(days: Set[date], today: date) -> int:
    """Count consecutive active days walking back from today.

    An idle today does not break the streak while the day is still in
    progress: counting then starts from yesterday.
    """
    if today in days:
        cursor = today
    elif today - timedelta(days=1) in days:
        cursor = today - timedelta(days=1)
    else:
        return 0

    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def goal_progress(studied_hours: float, goal_hours: float) -> float:
    if goal_hours <= 0:
        return 0.0
    return studied_hours / goal_hours * 100


def summarize_study_time(
    sessions: Iterable[StudySessionRecord],
    *,
    weekly_goal_hours: float,
    now: datetime,
    tz: tzinfo,
) -> StudyTimeSummary:
    valid: List[StudySessionRecord] = []
    skipped = 0
    for sess in sessions:
        if is_qualifying_session(sess):
            valid.append(sess)
        else:
            skipped += 1
    if skipped:
        logger.warning("Skipped %s malformed study sessions", skipped)

    # Sum whole minutes before converting so the total does not depend on input order
    total_minutes = sum(s.duration_minutes for s in valid)
    weekly_minutes = sum(s.duration_minutes for s in valid if in_weekly_window(s.started_at, now))
    weekly_hours = weekly_minutes / 60

    today = now.astimezone(tz).date()
    days = {d for d in active_days(valid, tz) if d <= today}

    return StudyTimeSummary(
        total_study_time_hours=total_minutes / 60,
        weekly_studied_hours=weekly_hours,
        weekly_goal_hours=weekly_goal_hours,
        weekly_goal_progress=goal_progress(weekly_hours, weekly_goal_hours),
        current_streak=current_streak(days, today),
        skipped_records=skipped,
    )
