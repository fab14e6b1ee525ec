"""Study session endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.time import as_utc
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.course import Course
from backend.app.models.study_session import StudySession
from backend.app.models.user import User
from backend.app.schemas.study_session import StudySessionCreate, StudySessionRead

router = APIRouter(prefix="/study-sessions", tags=["study-sessions"])


@router.post("", response_model=StudySessionRead, status_code=status.HTTP_201_CREATED)
async def create_study_session(
    session_in: StudySessionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if session_in.started_at.tzinfo is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="started_at must include a timezone offset",
        )
    if session_in.course_id is not None:
        course = db.query(Course).filter(Course.id == session_in.course_id).first()
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")

    study_session = StudySession(
        student_id=current_user.id,
        course_id=session_in.course_id,
        # Stored as naive UTC
        started_at=as_utc(session_in.started_at).replace(tzinfo=None),
        duration_minutes=session_in.duration_minutes,
    )
    db.add(study_session)
    db.commit()
    db.refresh(study_session)
    return study_session


@router.get("", response_model=list[StudySessionRead])
async def list_study_sessions(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return (
        db.query(StudySession)
        .filter(StudySession.student_id == current_user.id)
        .order_by(StudySession.started_at.desc(), StudySession.id.desc())
        .all()
    )
