"""
Reports Router - abuse reports against apps and comments (v1, enveloped)
"""

import logging
import secrets
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Form

from sandbox_api.dependencies import current_user, envelope, envelope_error, get_store
from sandbox_api.store import SandboxStore
from smartshop.models import Report, ReportReason, ReportType, User

router = APIRouter()
logger = logging.getLogger(__name__)

ERROR_INVALID_REPORT = 4003


@router.post("/report")
async def submit_report(
    report_type: str = Form(..., alias="reportType"),
    target_id: str = Form(..., alias="targetId"),
    reason: str = Form(...),
    description: str = Form(""),
    user: User = Depends(current_user),
    store: SandboxStore = Depends(get_store)
):
    if user.is_banned:
        return envelope_error("Account is banned", 403, status_code=403)
    try:
        parsed_type = ReportType(report_type.upper())
        parsed_reason = ReportReason(reason)
    except ValueError:
        return envelope_error(f"Invalid report: type={report_type!r} reason={reason!r}", ERROR_INVALID_REPORT)

    if parsed_type is ReportType.APP:
        known = target_id in store.apps
    else:
        known = any(c.id == target_id for comments in store.comments.values() for c in comments)
    if not known:
        return envelope_error(f"Report target {target_id} not found", 404, status_code=404)

    now = datetime.now(timezone.utc)
    report = Report(
        id=f"report-{secrets.token_hex(4)}",
        report_type=parsed_type,
        target_id=target_id,
        reason=parsed_reason,
        description=description,
        user_id=user.id,
        created_at=now.replace(microsecond=now.microsecond // 1000 * 1000),
    )
    store.reports.append(report)
    logger.info(f"User {user.id} reported {parsed_type.value} {target_id} ({parsed_reason.value})")
    return envelope(report)
