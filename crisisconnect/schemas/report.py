"""Pydantic schemas for incident reports and their lifecycle status."""

from datetime import datetime
from typing import Literal, get_args

from pydantic import BaseModel, Field, field_validator

# Known lifecycle statuses; anything else stored in the column is reported as "Other".
ReportStatus = Literal["Pending", "In Progress", "Resolved"]

STATUS_PENDING = "Pending"
STATUS_IN_PROGRESS = "In Progress"
STATUS_RESOLVED = "Resolved"
STATUS_OTHER = "Other"

REPORT_STATUSES: tuple[str, ...] = get_args(ReportStatus)

# Fixed order of the buckets in statusCounts.
STATUS_BUCKETS: tuple[str, ...] = (*REPORT_STATUSES, STATUS_OTHER)


def status_bucket(status: str | None) -> str:
    """Map a stored status to its summary bucket (exact match, otherwise 'Other')."""
    return status if status in REPORT_STATUSES else STATUS_OTHER


class ReportCreate(BaseModel):
    """Body for filing a new report. Status and owner are set by the server."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must be non-empty")
        return v.strip()


class ReportStatusUpdate(BaseModel):
    """Body for an admin status change."""

    status: str = Field(..., min_length=1, max_length=32)

    # Unknown values are stored as given and summarized as "Other".
    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("status must be non-empty")
        return v.strip()


class ReportOwner(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str


class ReportOut(BaseModel):
    """A report as returned by the CRUD endpoints."""

    model_config = {"from_attributes": True}

    id: int
    title: str
    description: str
    status: str
    user_id: int
    created_at: datetime | None = None
    user: ReportOwner | None = None


class MessageResponse(BaseModel):
    message: str
