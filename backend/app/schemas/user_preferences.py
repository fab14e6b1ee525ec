"""User preferences schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.app.core.time import InvalidConfiguration, resolve_timezone


class UserPreferencesBase(BaseModel):
    timezone: Optional[str] = None
    weekly_goal_hours: Optional[float] = None
    locale: str = "pt-BR"


class UserPreferencesUpdate(BaseModel):
    timezone: Optional[str] = None
    weekly_goal_hours: Optional[float] = Field(default=None, ge=0)
    locale: Optional[str] = None

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            resolve_timezone(value)
        except InvalidConfiguration as exc:
            raise ValueError(str(exc)) from exc
        return value.strip()


class UserPreferencesRead(UserPreferencesBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
