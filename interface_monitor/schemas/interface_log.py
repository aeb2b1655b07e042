import uuid
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from interface_monitor.core.datetime_utils import to_naive_utc
from interface_monitor.models.interface_log import INT32_MAX, InterfaceLog, LogSeverity, LogStatus
from interface_monitor.schemas.common import CamelModel, UTCDateTime


class InterfaceLogCreate(CamelModel):
    """Request body for creating or replacing an interface log."""

    interface_name: str = Field(min_length=1, max_length=255)
    integration_key: str = Field(min_length=1, max_length=255)
    status: LogStatus
    message: str = Field(min_length=1)
    severity: LogSeverity = LogSeverity.MEDIUM
    duration: int = Field(default=0, ge=0, le=INT32_MAX)
    records_processed: int = Field(default=0, ge=0, le=INT32_MAX)
    timestamp: datetime | None = None
    metadata: dict[str, Any] | None = None

    @field_validator("timestamp")
    @classmethod
    def _naive_utc(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value) if value is not None else None


class InterfaceLogResponse(CamelModel):
    """A stored interface log."""

    id: uuid.UUID
    interface_name: str
    integration_key: str
    status: LogStatus
    message: str
    severity: LogSeverity
    duration: int
    formatted_duration: str
    records_processed: int
    timestamp: UTCDateTime
    metadata: dict[str, Any] | None = None
    created_at: UTCDateTime
    updated_at: UTCDateTime

    @classmethod
    def from_model(cls, log: InterfaceLog) -> "InterfaceLogResponse":
        return cls(
            id=log.id,
            interface_name=log.interface_name,
            integration_key=log.integration_key,
            status=log.status,
            message=log.message,
            severity=log.severity,
            duration=log.duration,
            formatted_duration=log.formatted_duration,
            records_processed=log.records_processed,
            timestamp=log.timestamp,
            metadata=log.metadata_json,
            created_at=log.created_at,
            updated_at=log.updated_at,
        )


class RecentFailure(CamelModel):
    """Summary projection of a failed run."""

    id: uuid.UUID
    interface_name: str
    integration_key: str
    message: str
    timestamp: UTCDateTime
    severity: LogSeverity

    @classmethod
    def from_model(cls, log: InterfaceLog) -> "RecentFailure":
        return cls(
            id=log.id,
            interface_name=log.interface_name,
            integration_key=log.integration_key,
            message=log.message,
            timestamp=log.timestamp,
            severity=log.severity,
        )


class LogListResponse(CamelModel):
    """One page of the log browser."""

    logs: list[InterfaceLogResponse]
    total_pages: int
    current_page: int
    total_count: int


class BulkCreateResponse(CamelModel):
    """Result of a bulk insert."""

    inserted_count: int
    ids: list[uuid.UUID]


class FilterValuesResponse(CamelModel):
    """Distinct values available for the log browser filters."""

    interface_names: list[str]
    integration_keys: list[str]
    statuses: list[str]
    severities: list[str]
