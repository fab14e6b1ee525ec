"""Student dashboard metrics assembled from the three independent reductions."""

import logging
from datetime import datetime

from backend.app.core.time import InvalidConfiguration, is_aware, resolve_timezone
from backend.app.schemas.metrics import MetricsFailure, StudentMetrics
from backend.app.services.activity_feed import build_activity_feed
from backend.app.services.enrollment_aggregation import aggregate_enrollments
from backend.app.services.metrics_store import DataUnavailable, MetricsStore
from backend.app.services.study_time import summarize_study_time

logger = logging.getLogger(__name__)


def compute_student_metrics(
    store: MetricsStore,
    student_id: int,
    reporting_timezone: str | None,
    feed_limit: int,
    *,
    now: datetime,
) -> StudentMetrics | MetricsFailure:
    """Build a fresh metrics snapshot for one student.

    ``now`` and ``reporting_timezone`` are explicit so that the weekly window
    and the streak are reproducible; the same inputs over unchanged data
    always give an equal snapshot. Fetch failures and bad configuration come
    back as a ``MetricsFailure`` rather than an exception.
    """
    try:
        tz = resolve_timezone(reporting_timezone)
        if not is_aware(now):
            raise InvalidConfiguration("Current instant must be timezone-aware")
        if feed_limit < 1:
            raise InvalidConfiguration("Feed limit must be at least 1")
    except InvalidConfiguration as exc:
        logger.warning("Rejected metrics request for student %s: %s", student_id, exc)
        return MetricsFailure(reason="invalid_configuration", detail=str(exc))

    try:
        enrollments = store.fetch_enrollments(student_id)
        lesson_completions = store.fetch_lesson_completions(student_id)
        sessions = store.fetch_study_sessions(student_id)
        events = store.fetch_activity_events(student_id, feed_limit)
        weekly_goal_hours = store.fetch_weekly_goal_hours(student_id)
        certificates = store.count_certificates(student_id)
    except DataUnavailable as exc:
        return MetricsFailure(reason="data_unavailable", detail=str(exc))

    enrollment_summary = aggregate_enrollments(enrollments, lesson_completions)
    study = summarize_study_time(sessions, weekly_goal_hours=weekly_goal_hours, now=now, tz=tz)
    feed = build_activity_feed(events, limit=feed_limit)

    return StudentMetrics(
        student_id=student_id,
        as_of=now,
        reporting_timezone=str(tz),
        enrolled_courses_count=enrollment_summary.enrolled_courses_count,
        completed_courses_count=enrollment_summary.completed_courses_count,
        completion_rate=enrollment_summary.completion_rate,
        completed_lessons_count=enrollment_summary.completed_lessons_count,
        total_study_time_hours=study.total_study_time_hours,
        weekly_studied_hours=study.weekly_studied_hours,
        weekly_goal_hours=study.weekly_goal_hours,
        weekly_goal_progress=study.weekly_goal_progress,
        current_streak=study.current_streak,
        certificates_earned=certificates,
        recent_activity=feed.entries,
        skipped_records=study.skipped_records + feed.skipped_records,
    )
