"""
Community entities - comments on apps and abuse reports.
"""

from typing import Optional

from pydantic import BaseModel, Field

from smartshop.models.enums import ReportReason, ReportStatus, ReportType
from smartshop.models.wire import (
    COMMENT_WIRE_NAMES,
    DEVELOPER_RESPONSE_WIRE_NAMES,
    REPORT_WIRE_NAMES,
    EpochMillis,
    wire_config,
)

MIN_RATING = 1
MAX_RATING = 5


class DeveloperResponse(BaseModel):
    model_config = wire_config(DEVELOPER_RESPONSE_WIRE_NAMES, "DeveloperResponse")

    content: str
    date: EpochMillis


class Comment(BaseModel):
    """
    A user review of an app.

    One comment per (user_id, app_id) is a backend rule; nothing here enforces it.
    """

    model_config = wire_config(COMMENT_WIRE_NAMES, "Comment")

    id: str
    app_id: str
    user_id: str
    username: str = ""
    user_avatar: Optional[str] = None
    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING)
    content: str
    date: EpochMillis
    likes: int = Field(default=0, ge=0)
    dislikes: int = Field(default=0, ge=0)
    developer_response: Optional[DeveloperResponse] = None


class Report(BaseModel):
    model_config = wire_config(REPORT_WIRE_NAMES, "Report")

    id: str = ""
    report_type: ReportType
    target_id: str
    reason: ReportReason
    description: str = ""
    user_id: str = ""
    created_at: Optional[EpochMillis] = None
    status: ReportStatus = ReportStatus.PENDING
