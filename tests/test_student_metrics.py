from datetime import datetime, timedelta, timezone

import pytest

from backend.app.schemas.metrics import (
    ActivityEventRecord,
    EnrollmentRecord,
    LessonCompletionRecord,
    MetricsFailure,
    StudentMetrics,
    StudySessionRecord,
)
from backend.app.services.metrics_store import DataUnavailable
from backend.app.services.student_metrics import compute_student_metrics

NOW = datetime(2030, 6, 15, 12, 0, tzinfo=timezone.utc)


class FakeStore:
    def __init__(self, enrollments=(), lessons=(), sessions=(), events=(), goal=10.0, certificates=0, fail_on=None):
        self.enrollments = list(enrollments)
        self.lessons = list(lessons)
        self.sessions = list(sessions)
        self.events = list(events)
        self.goal = goal
        self.certificates = certificates
        self.fail_on = fail_on
        self.calls = []

    def _check(self, name):
        self.calls.append(name)
        if self.fail_on == name:
            raise DataUnavailable(f"Could not load {name}")

    def fetch_enrollments(self, student_id):
        self._check("enrollments")
        return self.enrollments

    def fetch_lesson_completions(self, student_id):
        self._check("lessons")
        return self.lessons

    def fetch_study_sessions(self, student_id):
        self._check("sessions")
        return self.sessions

    def fetch_activity_events(self, student_id, limit):
        self._check("events")
        return self.events

    def fetch_weekly_goal_hours(self, student_id):
        self._check("goal")
        return self.goal

    def count_certificates(self, student_id):
        self._check("certificates")
        return self.certificates


def populated_store(**overrides) -> FakeStore:
    defaults = dict(
        enrollments=[
            EnrollmentRecord(student_id=1, course_id=1, enrolled_at=NOW, completed=True, completed_at=NOW),
            EnrollmentRecord(student_id=1, course_id=2, enrolled_at=NOW),
        ],
        lessons=[LessonCompletionRecord(student_id=1, lesson_id=5, course_id=1, completed_at=NOW)],
        sessions=[
            StudySessionRecord(student_id=1, started_at=NOW - timedelta(hours=2), duration_minutes=90),
            StudySessionRecord(student_id=1, started_at=NOW - timedelta(days=1), duration_minutes=60),
            StudySessionRecord(student_id=1, started_at=NOW - timedelta(days=30), duration_minutes=30),
            StudySessionRecord(student_id=1, started_at=NOW - timedelta(days=2), duration_minutes=-5),
        ],
        events=[
            ActivityEventRecord(id=1, student_id=1, type="course_enrolled", title="a", occurred_at=NOW - timedelta(days=3)),
            ActivityEventRecord(id=2, student_id=1, type="course_completed", title="b", occurred_at=NOW - timedelta(days=1)),
            ActivityEventRecord(id=3, student_id=1, type="badge_unlocked", title="c", occurred_at=NOW),
        ],
        goal=5.0,
        certificates=1,
    )
    defaults.update(overrides)
    return FakeStore(**defaults)


def test_full_snapshot():
    result = compute_student_metrics(populated_store(), 1, "UTC", 2, now=NOW)
    assert isinstance(result, StudentMetrics)
    assert result.student_id == 1
    assert result.as_of == NOW
    assert result.reporting_timezone == "UTC"
    assert result.enrolled_courses_count == 2
    assert result.completed_courses_count == 1
    assert result.completion_rate == 50.0
    assert result.completed_lessons_count == 1
    assert result.total_study_time_hours == 3.0
    assert result.weekly_studied_hours == 2.5
    assert result.weekly_goal_hours == 5.0
    assert result.weekly_goal_progress == 50.0
    assert result.current_streak == 2
    assert result.certificates_earned == 1
    assert [e.id for e in result.recent_activity] == [3, 2]
    assert result.recent_activity[0].kind.value == "other"
    assert result.skipped_records == 1


def test_empty_store_is_a_successful_zero_state():
    result = compute_student_metrics(FakeStore(), 1, "UTC", 10, now=NOW)
    assert isinstance(result, StudentMetrics)
    assert result.enrolled_courses_count == 0
    assert result.completion_rate == 0.0
    assert result.total_study_time_hours == 0.0
    assert result.current_streak == 0
    assert result.recent_activity == ()


def test_repeated_computation_is_identical():
    store = populated_store()
    first = compute_student_metrics(store, 1, "America/Sao_Paulo", 5, now=NOW)
    second = compute_student_metrics(store, 1, "America/Sao_Paulo", 5, now=NOW)
    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


def test_missing_timezone_is_invalid_configuration():
    store = populated_store()
    result = compute_student_metrics(store, 1, None, 5, now=NOW)
    assert isinstance(result, MetricsFailure)
    assert result.reason == "invalid_configuration"
    assert store.calls == []


def test_unknown_timezone_is_invalid_configuration():
    result = compute_student_metrics(populated_store(), 1, "Mars/Olympus_Mons", 5, now=NOW)
    assert isinstance(result, MetricsFailure)
    assert result.reason == "invalid_configuration"
    assert "Mars/Olympus_Mons" in result.detail


@pytest.mark.parametrize("name", ["America", "Etc", "a" * 300, "../zoneinfo"])
def test_region_and_malformed_timezone_names_are_invalid_configuration(name):
    store = populated_store()
    result = compute_student_metrics(store, 1, name, 5, now=NOW)
    assert isinstance(result, MetricsFailure)
    assert result.reason == "invalid_configuration"
    assert store.calls == []


def test_naive_now_is_invalid_configuration():
    result = compute_student_metrics(populated_store(), 1, "UTC", 5, now=datetime(2030, 6, 15, 12, 0))
    assert isinstance(result, MetricsFailure)
    assert result.reason == "invalid_configuration"


def test_non_positive_feed_limit_is_invalid_configuration():
    result = compute_student_metrics(populated_store(), 1, "UTC", 0, now=NOW)
    assert isinstance(result, MetricsFailure)
    assert result.reason == "invalid_configuration"


def test_fetch_failure_is_reported_not_zeroed():
    for name in ["enrollments", "lessons", "sessions", "events", "goal", "certificates"]:
        result = compute_student_metrics(populated_store(fail_on=name), 1, "UTC", 5, now=NOW)
        assert isinstance(result, MetricsFailure)
        assert result.reason == "data_unavailable"
