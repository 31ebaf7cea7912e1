"""Schemas for the admin report statistics endpoint (camelCase on the wire)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusCount(_CamelModel):
    """One status bucket: Pending, In Progress, Resolved or Other."""

    name: str
    count: int = Field(..., ge=0)


class DailyCount(_CamelModel):
    """Reports filed on one calendar day of the range window."""

    date: str = Field(..., description="Calendar day as YYYY-MM-DD in the stats time zone")
    count: int = Field(..., ge=0)


class RecentReport(_CamelModel):
    id: int
    title: str
    status: str
    user: str = Field(..., description="Creator's display name, or 'Unknown'")
    created_at: datetime


class ReportStatsResponse(_CamelModel):
    """
    Summary of report activity.

    total_reports, pending_count, resolved_count and status_counts are all-time
    figures; only reports_over_time is limited to the last range_days days.
    """

    total_reports: int = Field(..., ge=0)
    pending_count: int = Field(..., ge=0)
    resolved_count: int = Field(..., ge=0)
    status_counts: list[StatusCount]
    reports_over_time: list[DailyCount]
    range_days: int = Field(..., ge=1, le=365)
    recent_reports: list[RecentReport]
