"""Enrollment aggregation for the student dashboard."""

from typing import Iterable

from backend.app.schemas.metrics import EnrollmentRecord, EnrollmentSummary, LessonCompletionRecord


def completion_rate(completed: int, enrolled: int) -> float:
    if enrolled <= 0:
        return 0.0
    return completed / enrolled * 100


def aggregate_enrollments(
    enrollments: Iterable[EnrollmentRecord],
    lesson_completions: Iterable[LessonCompletionRecord] = (),
) -> EnrollmentSummary:
    """Reduce a student's enrollments and lesson completions into dashboard counts."""
    enrolled = 0
    completed = 0
    for enrollment in enrollments:
        enrolled += 1
        if enrollment.completed:
            completed += 1

    lesson_ids = {lc.lesson_id for lc in lesson_completions}

    return EnrollmentSummary(
        enrolled_courses_count=enrolled,
        completed_courses_count=completed,
        completion_rate=completion_rate(completed, enrolled),
        completed_lessons_count=len(lesson_ids),
    )
