"""Report statistics for the admin analytics screen: status buckets, a daily series over a day range, and recent reports."""

import re
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta, timezone, tzinfo

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from crisisconnect.models import Report
from crisisconnect.schemas.report import (
    STATUS_BUCKETS,
    STATUS_PENDING,
    STATUS_RESOLVED,
    status_bucket,
)
from crisisconnect.schemas.stats import (
    DailyCount,
    RecentReport,
    ReportStatsResponse,
    StatusCount,
)

DEFAULT_RANGE_DAYS = 30
MIN_RANGE_DAYS = 1
MAX_RANGE_DAYS = 365
RECENT_REPORTS_LIMIT = 10
UNKNOWN_USER_NAME = "Unknown"

# Lenient integer prefix over ASCII digits: "14", " +7", "10days" parse; "abc", "" and non-ASCII digits do not.
# At most four significant digits are converted; longer prefixes are out of range anyway.
_LEADING_INT = re.compile(r"\s*([+-]?)0*([0-9]{1,4})([0-9]*)")


class ReportStatsError(Exception):
    """Raised when the store cannot be read; no partial statistics are returned."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def resolve_range_days(raw: str | int | None) -> int:
    """
    Turn the rangeDays query value into the effective window length.

    Missing, non-numeric, zero or negative input falls back to 30 days; the
    result is then clamped into [1, 365]. Never raises.
    """
    value: int | None = None
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    elif isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if match:
            sign, digits, overflow = match.groups()
            value = MAX_RANGE_DAYS + 1 if overflow else int(digits)
            if sign == "-":
                value = -value
    if value is None or value <= 0:
        value = DEFAULT_RANGE_DAYS
    return min(max(value, MIN_RANGE_DAYS), MAX_RANGE_DAYS)


def as_utc(ts: datetime) -> datetime:
    """Attach UTC to naive timestamps (SQLite drops tzinfo on read)."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def window_start(today: date, range_days: int, tz: tzinfo) -> datetime:
    """Midnight in tz of the first day of a window of range_days days ending today."""
    first_day = today - timedelta(days=range_days - 1)
    return datetime.combine(first_day, time.min, tzinfo=tz)


def bucket_by_day(
    created: Iterable[datetime],
    first_day: date,
    range_days: int,
    tz: tzinfo,
) -> list[DailyCount]:
    """
    Count timestamps per calendar day in tz, one entry per day of the window.

    Days without reports are present with count 0. Timestamps falling outside
    the window are ignored.
    """
    buckets: dict[str, int] = {
        (first_day + timedelta(days=offset)).isoformat(): 0 for offset in range(range_days)
    }
    for ts in created:
        key = as_utc(ts).astimezone(tz).date().isoformat()
        if key in buckets:
            buckets[key] += 1
    return [DailyCount(date=day, count=count) for day, count in buckets.items()]


def summarize_statuses(status_rows: Iterable[tuple[str | None, int]]) -> list[StatusCount]:
    """Fold (status, count) groups into Pending, In Progress, Resolved, Other in that order."""
    counts = dict.fromkeys(STATUS_BUCKETS, 0)
    for status, count in status_rows:
        counts[status_bucket(status)] += count
    return [StatusCount(name=name, count=count) for name, count in counts.items()]


def _recent_report(report: Report) -> RecentReport:
    owner = report.user
    return RecentReport(
        id=report.id,
        title=report.title,
        status=report.status,
        user=owner.name if owner is not None and owner.name else UNKNOWN_USER_NAME,
        created_at=as_utc(report.created_at),
    )


def compute_report_stats(
    db: Session,
    range_days: int,
    tz: tzinfo = timezone.utc,
    now: datetime | None = None,
) -> ReportStatsResponse:
    """
    Build the statistics payload for GET /reports/stats.

    Counts and status buckets cover all reports ever filed; only the daily
    series is limited to the last range_days days (today included) in tz.
    Raises ReportStatsError if any query fails.
    """
    local_now = as_utc(now).astimezone(tz) if now is not None else datetime.now(tz)
    start = window_start(local_now.date(), range_days, tz)

    try:
        total_reports = db.query(func.count(Report.id)).scalar() or 0
        status_rows = (
            db.query(Report.status, func.count(Report.id))
            .group_by(Report.status)
            .all()
        )
        created_rows = (
            db.query(Report.created_at)
            .filter(Report.created_at >= start.astimezone(timezone.utc))
            .all()
        )
        recent = (
            db.query(Report)
            .options(joinedload(Report.user))
            .order_by(Report.created_at.desc(), Report.id.desc())
            .limit(RECENT_REPORTS_LIMIT)
            .all()
        )
    except SQLAlchemyError as e:
        raise ReportStatsError("Failed to load report stats") from e

    status_counts = summarize_statuses(status_rows)
    by_name = {bucket.name: bucket.count for bucket in status_counts}

    return ReportStatsResponse(
        total_reports=total_reports,
        pending_count=by_name[STATUS_PENDING],
        resolved_count=by_name[STATUS_RESOLVED],
        status_counts=status_counts,
        reports_over_time=bucket_by_day(
            (row[0] for row in created_rows), start.date(), range_days, tz
        ),
        range_days=range_days,
        recent_reports=[_recent_report(r) for r in recent],
    )
