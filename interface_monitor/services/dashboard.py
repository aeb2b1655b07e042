"""Dashboard aggregates over the interface log table.

Grouping, averaging and bucketing run in the database; this module only
rounds the results and reshapes them into response models.
"""

from datetime import datetime

from sqlalchemy import Integer, case, extract, func, literal, select
from sqlalchemy.ext.asyncio import AsyncSession

from interface_monitor.core.datetime_utils import from_epoch, utc_now
from interface_monitor.core.periods import Period
from interface_monitor.models.interface_log import InterfaceLog, LogStatus
from interface_monitor.schemas.dashboard import (
    InterfaceHealth,
    InterfacesResponse,
    StatusSummary,
    SummaryResponse,
    TrendPoint,
    TrendsResponse,
)
from interface_monitor.schemas.interface_log import RecentFailure
from interface_monitor.services.log_store import LogFilters, store_operation

STATUS_ORDER = list(LogStatus)


def success_rate(success_count: int, total: int) -> float:
    """Percentage of successful runs, one decimal, 0 for an empty window."""
    if total <= 0:
        return 0.0
    return round(success_count / total * 100, 1)


def _round_avg(value: object) -> float:
    return round(float(value), 2) if value is not None else 0.0  # type: ignore[arg-type]


def _window_conditions(period: Period, filters: LogFilters | None, now: datetime | None) -> list:
    now = now or utc_now()
    conds = [InterfaceLog.timestamp >= period.cutoff(now), InterfaceLog.timestamp <= now]
    if filters is not None:
        conds.extend(filters.conditions())
    return conds


@store_operation
async def get_summary(
    db: AsyncSession,
    period: Period,
    filters: LogFilters | None = None,
    recent_failures_limit: int = 5,
    now: datetime | None = None,
) -> SummaryResponse:
    """Per-status counts, success rate and the most recent failures."""
    conds = _window_conditions(period, filters, now)

    result = await db.execute(
        select(
            InterfaceLog.status,
            func.count(InterfaceLog.id),
            func.avg(InterfaceLog.duration),
            func.sum(InterfaceLog.records_processed),
        )
        .where(*conds)
        .group_by(InterfaceLog.status)
    )
    rows = {status: (count, avg, records) for status, count, avg, records in result.all()}

    summary = [
        StatusSummary(
            status=status,
            count=rows[status][0],
            avg_duration=_round_avg(rows[status][1]),
            total_records=int(rows[status][2] or 0),
        )
        for status in STATUS_ORDER
        if status in rows
    ]
    total_logs = sum(item.count for item in summary)
    success_count = rows.get(LogStatus.SUCCESS, (0, None, None))[0]

    failures_result = await db.execute(
        select(InterfaceLog)
        .where(*conds, InterfaceLog.status == LogStatus.FAILED)
        .order_by(InterfaceLog.timestamp.desc(), InterfaceLog.id.desc())
        .limit(recent_failures_limit)
    )
    recent_failures = [RecentFailure.from_model(log) for log in failures_result.scalars()]

    return SummaryResponse(
        summary=summary,
        total_logs=total_logs,
        success_rate=success_rate(success_count, total_logs),
        recent_failures=recent_failures,
        period=period,
    )


@store_operation
async def get_trends(
    db: AsyncSession,
    period: Period,
    filters: LogFilters | None = None,
    now: datetime | None = None,
) -> TrendsResponse:
    """
    Per-status counts for each fixed-width time bucket in the window.

    Buckets are aligned to multiples of the bucket width since the Unix
    epoch. Only buckets containing at least one run are returned, in
    ascending order, with zero counts for missing statuses.
    """
    conds = _window_conditions(period, filters, now)
    width = literal(period.bucket_seconds, Integer)
    epoch = extract("epoch", InterfaceLog.timestamp)
    bucket = (epoch - (epoch % width)).label("bucket")

    result = await db.execute(
        select(bucket, InterfaceLog.status, func.count(InterfaceLog.id))
        .where(*conds)
        .group_by("bucket", InterfaceLog.status)
        .order_by("bucket")
    )

    points: dict[int, TrendPoint] = {}
    for bucket_start, status, count in result.all():
        key = int(float(bucket_start))
        point = points.get(key)
        if point is None:
            point = points[key] = TrendPoint(time=from_epoch(key))
        setattr(point, status.value, count)

    return TrendsResponse(trends=[points[key] for key in sorted(points)], period=period)


@store_operation
async def get_interface_health(
    db: AsyncSession,
    period: Period,
    filters: LogFilters | None = None,
    now: datetime | None = None,
) -> InterfacesResponse:
    """Run counts, success rate and last run per interface, most recent first."""
    conds = _window_conditions(period, filters, now)
    last_run = func.max(InterfaceLog.timestamp).label("last_run")

    result = await db.execute(
        select(
            InterfaceLog.interface_name,
            func.count(InterfaceLog.id),
            func.sum(case((InterfaceLog.status == LogStatus.SUCCESS, 1), else_=0)),
            func.sum(case((InterfaceLog.status == LogStatus.FAILED, 1), else_=0)),
            func.avg(InterfaceLog.duration),
            last_run,
        )
        .where(*conds)
        .group_by(InterfaceLog.interface_name)
        .order_by(last_run.desc())
    )

    interfaces = []
    for name, total_runs, successes, failures, avg_duration, last in result.all():
        successes = int(successes or 0)
        interfaces.append(
            InterfaceHealth(
                interface_name=name,
                total_runs=total_runs,
                success_count=successes,
                failed_count=int(failures or 0),
                success_rate=success_rate(successes, total_runs),
                avg_duration=_round_avg(avg_duration),
                last_run=last,
            )
        )

    return InterfacesResponse(interfaces=interfaces, period=period)
