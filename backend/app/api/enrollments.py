"""Course enrollment and lesson completion endpoints for students."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.time import utc_now
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.certificate import Certificate
from backend.app.models.course import Course, Lesson
from backend.app.models.enrollment import Enrollment, LessonProgress
from backend.app.models.user import User
from backend.app.schemas.enrollment import EnrollmentCreate, EnrollmentRead, LessonProgressRead
from backend.app.schemas.metrics import ActivityKind
from backend.app.services.activity_log import record_event

router = APIRouter(tags=["enrollments"])


def _get_course(db: Session, course_id: int) -> Course:
    course = db.query(Course).filter(Course.id == course_id, Course.is_published.is_(True)).first()
    if not course:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return course


def _get_owned_enrollment(db: Session, enrollment_id: int, student_id: int) -> Enrollment:
    enrollment = (
        db.query(Enrollment)
        .filter(Enrollment.id == enrollment_id, Enrollment.student_id == student_id)
        .first()
    )
    if not enrollment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Enrollment not found")
    return enrollment


@router.post("/enrollments", response_model=EnrollmentRead, status_code=status.HTTP_201_CREATED)
async def enroll(
    enrollment_in: EnrollmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    course = _get_course(db, enrollment_in.course_id)
    existing = (
        db.query(Enrollment)
        .filter(Enrollment.student_id == current_user.id, Enrollment.course_id == course.id)
        .first()
    )
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already enrolled in this course")

    try:
        enrollment = Enrollment(student_id=current_user.id, course_id=course.id)
        db.add(enrollment)
        record_event(db, current_user.id, ActivityKind.COURSE_ENROLLED, f'Enrolled in "{course.title}"')
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(enrollment)
    return enrollment


@router.get("/enrollments", response_model=list[EnrollmentRead])
async def list_enrollments(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return (
        db.query(Enrollment)
        .filter(Enrollment.student_id == current_user.id)
        .order_by(Enrollment.enrolled_at.desc(), Enrollment.id.desc())
        .all()
    )


@router.post("/enrollments/{enrollment_id}/complete", response_model=EnrollmentRead)
async def complete_enrollment(
    enrollment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    enrollment = _get_owned_enrollment(db, enrollment_id, current_user.id)
    if enrollment.completed:
        return enrollment

    course = enrollment.course
    try:
        enrollment.completed = True
        enrollment.completed_at = utc_now()
        record_event(db, current_user.id, ActivityKind.COURSE_COMPLETED, f'Completed "{course.title}"')
        certificate = (
            db.query(Certificate)
            .filter(Certificate.student_id == current_user.id, Certificate.course_id == course.id)
            .first()
        )
        if certificate is None:
            db.add(Certificate(student_id=current_user.id, course_id=course.id))
            record_event(
                db,
                current_user.id,
                ActivityKind.CERTIFICATE_EARNED,
                f'Certificate earned for "{course.title}"',
            )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(enrollment)
    return enrollment


@router.post("/lessons/{lesson_id}/complete", response_model=LessonProgressRead)
async def complete_lesson(
    lesson_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    lesson = db.query(Lesson).filter(Lesson.id == lesson_id).first()
    if not lesson:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found")
    enrolled = (
        db.query(Enrollment)
        .filter(Enrollment.student_id == current_user.id, Enrollment.course_id == lesson.course_id)
        .first()
    )
    if not enrolled:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enrolled in this course")

    progress = (
        db.query(LessonProgress)
        .filter(LessonProgress.student_id == current_user.id, LessonProgress.lesson_id == lesson.id)
        .first()
    )
    if progress:
        return progress

    try:
        progress = LessonProgress(student_id=current_user.id, lesson_id=lesson.id, course_id=lesson.course_id)
        db.add(progress)
        record_event(
            db,
            current_user.id,
            ActivityKind.LESSON_COMPLETED,
            f'Completed lesson "{lesson.title}"',
            description=lesson.course.title,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(progress)
    return progress
