"""Pydantic request/response schemas."""

from crisisconnect.schemas.auth import (
    AvatarResponse,
    CurrentUser,
    LoginRequest,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    RegisterRequest,
    TokenResponse,
    UserOut,
)
from crisisconnect.schemas.health import HealthResponse
from crisisconnect.schemas.report import (
    REPORT_STATUSES,
    STATUS_BUCKETS,
    MessageResponse,
    ReportCreate,
    ReportOut,
    ReportStatus,
    ReportStatusUpdate,
)
from crisisconnect.schemas.stats import (
    DailyCount,
    RecentReport,
    ReportStatsResponse,
    StatusCount,
)

__all__ = [
    "REPORT_STATUSES",
    "STATUS_BUCKETS",
    "AvatarResponse",
    "CurrentUser",
    "DailyCount",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "ProfileUpdateRequest",
    "ProfileUpdateResponse",
    "RecentReport",
    "RegisterRequest",
    "ReportCreate",
    "ReportOut",
    "ReportStatsResponse",
    "ReportStatus",
    "ReportStatusUpdate",
    "StatusCount",
    "TokenResponse",
    "UserOut",
]
