"""Report endpoints: file, list, triage (status/delete) and admin statistics."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, joinedload

from crisisconnect.api.auth import get_current_user, require_admin
from crisisconnect.core.config import get_settings
from crisisconnect.core.database import get_db
from crisisconnect.core.security import ROLE_ADMIN
from crisisconnect.models import Report
from crisisconnect.schemas.auth import CurrentUser
from crisisconnect.schemas.report import (
    STATUS_PENDING,
    MessageResponse,
    ReportCreate,
    ReportOut,
    ReportStatusUpdate,
)
from crisisconnect.schemas.stats import ReportStatsResponse
from crisisconnect.services.report_stats import (
    ReportStatsError,
    compute_report_stats,
    resolve_range_days,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_report_or_404(db: Session, report_id: int) -> Report:
    report = db.get(Report, report_id)
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Report not found.",
        )
    return report


@router.post("", response_model=ReportOut, status_code=status.HTTP_201_CREATED)
def create_report(
    body: ReportCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ReportOut:
    """File a new report owned by the caller. Every report starts as Pending."""
    report = Report(
        title=body.title,
        description=body.description,
        status=STATUS_PENDING,
        user_id=current_user.id,
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    return ReportOut.model_validate(report)


@router.get("", response_model=list[ReportOut])
def list_reports(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[ReportOut]:
    """Admins see every report; users see only their own. Newest first."""
    query = db.query(Report).options(joinedload(Report.user))
    if current_user.role != ROLE_ADMIN:
        query = query.filter(Report.user_id == current_user.id)
    reports = query.order_by(Report.created_at.desc(), Report.id.desc()).all()
    return [ReportOut.model_validate(r) for r in reports]


@router.get("/stats", response_model=ReportStatsResponse)
def get_report_stats(
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    range_days: Annotated[str | None, Query(alias="rangeDays")] = None,
) -> ReportStatsResponse:
    """
    Admin analytics: all-time totals and status buckets, a zero-filled daily
    series over the last rangeDays days (default 30, clamped to 1..365), and the
    10 newest reports.

    rangeDays is read leniently; bad values fall back to the default instead of 422.
    """
    settings = get_settings()
    effective_days = resolve_range_days(range_days)
    try:
        return compute_report_stats(db, effective_days, tz=settings.stats_tzinfo)
    except ReportStatsError as e:
        logger.error(
            "Report stats failed",
            extra={"range_days": effective_days, "reason": str(e.__cause__ or e)[:500]},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message,
        ) from e


@router.put("/{report_id}/status", response_model=ReportOut)
def update_report_status(
    report_id: int,
    body: ReportStatusUpdate,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> ReportOut:
    """Set a report's status (admin only)."""
    report = _get_report_or_404(db, report_id)
    report.status = body.status
    db.commit()
    db.refresh(report)
    return ReportOut.model_validate(report)


@router.delete("/{report_id}", response_model=MessageResponse)
def delete_report(
    report_id: int,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> MessageResponse:
    report = _get_report_or_404(db, report_id)
    db.delete(report)
    db.commit()
    return MessageResponse(message="Deleted successfully")
