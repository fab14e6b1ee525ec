"""Student dashboard metrics endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from backend.app.core.settings import get_settings
from backend.app.core.time import utc_now
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.user import User
from backend.app.models.user_preferences import UserPreferences
from backend.app.schemas.metrics import ActivityFeedEntry, MetricsFailure, StudentMetrics
from backend.app.services.activity_feed import build_activity_feed
from backend.app.services.metrics_store import DataUnavailable, SqlMetricsStore
from backend.app.services.student_metrics import compute_student_metrics

router = APIRouter(prefix="/students/me", tags=["metrics"])

FAILURE_STATUS = {
    "data_unavailable": status.HTTP_503_SERVICE_UNAVAILABLE,
    "invalid_configuration": status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def _reporting_timezone(db: Session, user: User, requested: Optional[str]) -> Optional[str]:
    if requested:
        return requested
    prefs = db.query(UserPreferences).filter(UserPreferences.user_id == user.id).first()
    return prefs.timezone if prefs else None


def _feed_limit(requested: Optional[int]) -> int:
    return requested if requested is not None else get_settings().activity_feed_limit


@router.get("/metrics", response_model=StudentMetrics)
async def get_my_metrics(
    timezone: Optional[str] = Query(default=None),
    feed_limit: Optional[int] = Query(default=None, ge=1, le=get_settings().max_activity_feed_limit),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    result = compute_student_metrics(
        SqlMetricsStore(db),
        current_user.id,
        _reporting_timezone(db, current_user, timezone),
        _feed_limit(feed_limit),
        now=utc_now(),
    )
    if isinstance(result, MetricsFailure):
        raise HTTPException(status_code=FAILURE_STATUS[result.reason], detail=result.detail)
    return result


@router.get("/activity", response_model=List[ActivityFeedEntry])
async def get_my_activity(
    limit: Optional[int] = Query(default=None, ge=1, le=get_settings().max_activity_feed_limit),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    feed_limit = _feed_limit(limit)
    try:
        events = SqlMetricsStore(db).fetch_activity_events(current_user.id, feed_limit)
    except DataUnavailable as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return list(build_activity_feed(events, limit=feed_limit).entries)
