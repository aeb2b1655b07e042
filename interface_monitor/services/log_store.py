"""Persistence operations for interface logs.

The log browser and the dashboard aggregates share ``LogFilters`` so a
filter set means the same thing everywhere. Driver failures are wrapped
in ``StoreError``; validation happens before any write is issued.
"""

import functools
import math
import uuid
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ParamSpec, TypeVar

from sqlalchemy import ColumnElement, delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from interface_monitor.core.datetime_utils import parse_datetime_bound, utc_now
from interface_monitor.core.errors import NotFoundError, StoreError, ValidationError
from interface_monitor.core.logging import get_logger
from interface_monitor.models.interface_log import INT32_MAX, InterfaceLog, LogSeverity, LogStatus
from interface_monitor.schemas.interface_log import InterfaceLogCreate
from interface_monitor.services.validation import validate_log_payload

logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

# Keeps (page - 1) * limit within the database integer range
MAX_PAGE = INT32_MAX

DISTINCT_FIELDS = {
    "interface_name": InterfaceLog.interface_name,
    "integration_key": InterfaceLog.integration_key,
    "status": InterfaceLog.status,
    "severity": InterfaceLog.severity,
}


def store_operation(func_: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    """Translate SQLAlchemy failures into StoreError."""

    @functools.wraps(func_)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await func_(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.bind(operation=func_.__name__, error=str(e)).error("store_error")
            raise StoreError(f"Database error during {func_.__name__}") from e

    return wrapper


@dataclass
class LogFilters:
    """Optional filters applied to log queries."""

    interface_name: str | None = None
    integration_key: str | None = None
    status: LogStatus | None = None
    severity: LogSeverity | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    search: str | None = None

    @classmethod
    def from_params(
        cls,
        interface_name: str | None = None,
        integration_key: str | None = None,
        status: str | None = None,
        severity: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
        search: str | None = None,
    ) -> "LogFilters":
        """Build filters from raw query-string values.

        Empty strings are treated as absent. Unknown enum values and
        unparseable dates raise ValidationError.
        """
        return cls(
            interface_name=interface_name or None,
            integration_key=integration_key or None,
            status=_parse_enum(LogStatus, "status", status),
            severity=_parse_enum(LogSeverity, "severity", severity),
            start_date=_parse_date("startDate", start_date),
            end_date=_parse_date("endDate", end_date, end_of_day=True),
            search=search or None,
        )

    def conditions(self) -> list[ColumnElement[bool]]:
        """SQL conditions for this filter set."""
        conds: list[ColumnElement[bool]] = []
        if self.start_date is not None:
            conds.append(InterfaceLog.timestamp >= self.start_date)
        if self.end_date is not None:
            conds.append(InterfaceLog.timestamp <= self.end_date)
        if self.interface_name:
            conds.append(InterfaceLog.interface_name.icontains(self.interface_name, autoescape=True))
        if self.integration_key:
            conds.append(
                InterfaceLog.integration_key.icontains(self.integration_key, autoescape=True)
            )
        if self.status is not None:
            conds.append(InterfaceLog.status == self.status)
        if self.severity is not None:
            conds.append(InterfaceLog.severity == self.severity)
        if self.search:
            conds.append(
                or_(
                    InterfaceLog.interface_name.icontains(self.search, autoescape=True),
                    InterfaceLog.integration_key.icontains(self.search, autoescape=True),
                    InterfaceLog.message.icontains(self.search, autoescape=True),
                )
            )
        return conds


def _parse_enum(enum_cls: Any, name: str, value: str | None) -> Any:
    if not value:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValidationError(f"{name}: must be one of {allowed}") from None


def _parse_date(name: str, value: str | None, end_of_day: bool = False) -> datetime | None:
    if not value:
        return None
    try:
        return parse_datetime_bound(value, end_of_day=end_of_day)
    except ValueError:
        raise ValidationError(f"{name}: invalid date '{value}'") from None


@dataclass
class Page:
    """Normalized pagination parameters."""

    page: int
    limit: int

    @classmethod
    def normalize(
        cls, page: int | None, limit: int | None, default_limit: int, max_limit: int
    ) -> "Page":
        """Clamp page to 1..MAX_PAGE and limit to 1..max_limit (default when <= 0)."""
        page = min(page, MAX_PAGE) if page and page > 0 else 1
        limit = limit if limit and limit > 0 else default_limit
        return cls(page=page, limit=min(limit, max_limit))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total_count: int) -> int:
        return math.ceil(total_count / self.limit)


def _parse_id(log_id: str | uuid.UUID) -> uuid.UUID:
    if isinstance(log_id, uuid.UUID):
        return log_id
    try:
        return uuid.UUID(log_id)
    except (ValueError, AttributeError, TypeError):
        raise NotFoundError("Log not found") from None


def _build_log(payload: InterfaceLogCreate) -> InterfaceLog:
    return InterfaceLog(
        interface_name=payload.interface_name,
        integration_key=payload.integration_key,
        status=payload.status,
        message=payload.message,
        severity=payload.severity,
        duration=payload.duration,
        records_processed=payload.records_processed,
        timestamp=payload.timestamp or utc_now(),
        metadata_json=payload.metadata,
    )


@store_operation
async def create_log(db: AsyncSession, data: Any) -> InterfaceLog:
    """Validate and insert a single log."""
    payload = validate_log_payload(data).unwrap()
    log = _build_log(payload)
    db.add(log)
    await db.flush()

    logger.bind(
        log_id=str(log.id),
        interface_name=log.interface_name,
        status=log.status.value,
    ).info("log_created")
    return log


@store_operation
async def create_logs(db: AsyncSession, items: Sequence[Any]) -> list[InterfaceLog]:
    """Validate every payload, then insert them all.

    Nothing is written if any payload is invalid.
    """
    payloads = []
    for index, item in enumerate(items):
        result = validate_log_payload(item)
        if not result.is_valid:
            raise ValidationError(f"logs[{index}]: {result.message}")
        payloads.append(result.unwrap())

    logs = [_build_log(payload) for payload in payloads]
    db.add_all(logs)
    await db.flush()

    logger.bind(count=len(logs)).info("logs_bulk_created")
    return logs


@store_operation
async def get_log(db: AsyncSession, log_id: str | uuid.UUID) -> InterfaceLog:
    """Fetch a log by id or raise NotFoundError."""
    log = await db.get(InterfaceLog, _parse_id(log_id))
    if log is None:
        raise NotFoundError("Log not found")
    return log


@store_operation
async def replace_log(db: AsyncSession, log_id: str | uuid.UUID, data: Any) -> InterfaceLog:
    """Replace every user-supplied field of an existing log.

    Optional fields missing from the payload reset to their defaults;
    a missing timestamp keeps the stored one.
    """
    log = await get_log(db, log_id)
    payload = validate_log_payload(data).unwrap()

    log.interface_name = payload.interface_name
    log.integration_key = payload.integration_key
    log.status = payload.status
    log.message = payload.message
    log.severity = payload.severity
    log.duration = payload.duration
    log.records_processed = payload.records_processed
    if payload.timestamp is not None:
        log.timestamp = payload.timestamp
    log.metadata_json = payload.metadata
    log.updated_at = utc_now()
    await db.flush()

    logger.bind(log_id=str(log.id), status=log.status.value).info("log_replaced")
    return log


@store_operation
async def delete_log(db: AsyncSession, log_id: str | uuid.UUID) -> None:
    """Delete a log by id or raise NotFoundError."""
    log = await get_log(db, log_id)
    await db.delete(log)
    await db.flush()

    logger.bind(log_id=str(log.id)).info("log_deleted")


@store_operation
async def delete_all_logs(db: AsyncSession) -> int:
    """Remove every log. Used by the seed command."""
    result = await db.execute(delete(InterfaceLog))
    return result.rowcount or 0  # type: ignore[attr-defined]


@store_operation
async def find_logs(
    db: AsyncSession,
    filters: LogFilters,
    offset: int = 0,
    limit: int = 50,
) -> tuple[list[InterfaceLog], int]:
    """Return one page of matching logs (newest first) and the total match count."""
    conds = filters.conditions()

    count_result = await db.execute(
        select(func.count()).select_from(InterfaceLog).where(*conds)
    )
    total_count = count_result.scalar() or 0

    result = await db.execute(
        select(InterfaceLog)
        .where(*conds)
        .order_by(InterfaceLog.timestamp.desc(), InterfaceLog.id.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all()), total_count


@store_operation
async def distinct_values(db: AsyncSession, field: str) -> list[str]:
    """Sorted distinct values currently present for a filterable field."""
    column = DISTINCT_FIELDS.get(field)
    if column is None:
        raise ValueError(f"Unsupported field: {field}")

    result = await db.execute(select(column).distinct())
    values = [v.value if isinstance(v, LogStatus | LogSeverity) else v for v in result.scalars()]
    return sorted(v for v in values if v is not None)
