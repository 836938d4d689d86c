"""
Account entities - users, their settings and the results of login/registration.
"""

from typing import Optional

from pydantic import BaseModel, Field

from smartshop.models.enums import UserRole, UserStatus
from smartshop.models.wire import (
    AUTH_SESSION_WIRE_NAMES,
    REGISTRATION_WIRE_NAMES,
    USER_SETTINGS_WIRE_NAMES,
    USER_WIRE_NAMES,
    EpochMillis,
    wire_config,
)


class User(BaseModel):
    """Account snapshot. Banned users cannot perform mutating operations."""

    model_config = wire_config(USER_WIRE_NAMES, "User")

    id: str = Field(..., min_length=1)
    username: str
    email: str
    is_verified: bool = False
    verification_attempts: int = Field(default=0, ge=0)
    avatar: Optional[str] = None
    created_at: Optional[EpochMillis] = None
    status: UserStatus = UserStatus.NORMAL
    role: UserRole = UserRole.USER
    favorite_apps: tuple[str, ...] = ()
    installed_apps: tuple[str, ...] = ()

    @property
    def is_banned(self) -> bool:
        return self.status == UserStatus.BANNED


class UserSettings(BaseModel):
    model_config = wire_config(USER_SETTINGS_WIRE_NAMES, "UserSettings")

    dark_mode: bool = True
    notifications_enabled: bool = True
    auto_update: bool = True
    download_over_wifi_only: bool = True
    language: str = "zh_CN"


class AuthSession(BaseModel):
    """Result of a successful login: bearer token plus the logged-in user."""

    model_config = wire_config(AUTH_SESSION_WIRE_NAMES, "AuthSession")

    token: str = Field(..., min_length=1)
    user: User


class Registration(BaseModel):
    model_config = wire_config(REGISTRATION_WIRE_NAMES, "Registration")

    token: str = Field(..., min_length=1)
    user: User
    verification_sent: bool = False
