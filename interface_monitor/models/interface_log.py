"""Interface run log model."""

import enum
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Enum, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from interface_monitor.core.datetime_utils import utc_now
from interface_monitor.models.base import Base, TimestampMixin

# Upper bound of the Integer columns (32-bit on PostgreSQL)
INT32_MAX = 2_147_483_647


class LogStatus(str, enum.Enum):
    """Outcome of an interface run."""

    SUCCESS = "success"
    FAILED = "failed"
    WARNING = "warning"
    RUNNING = "running"


class LogSeverity(str, enum.Enum):
    """Operator-facing severity of a run."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


def format_duration(duration_ms: int) -> str:
    """Render a millisecond duration as ms, seconds or minutes."""
    if duration_ms < 1000:
        return f"{duration_ms}ms"
    if duration_ms < 60000:
        return f"{duration_ms / 1000:.1f}s"
    return f"{duration_ms / 60000:.1f}m"


class InterfaceLog(Base, TimestampMixin):
    """One execution attempt of a named interface job."""

    __tablename__ = "interface_logs"
    __table_args__ = (
        Index("ix_interface_logs_interface_name_timestamp", "interface_name", "timestamp"),
        Index("ix_interface_logs_integration_key_timestamp", "integration_key", "timestamp"),
        Index("ix_interface_logs_status_timestamp", "status", "timestamp"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    interface_name: Mapped[str] = mapped_column(String(255), index=True)
    integration_key: Mapped[str] = mapped_column(String(255), index=True)
    status: Mapped[LogStatus] = mapped_column(
        Enum(
            LogStatus,
            values_callable=lambda e: [x.value for x in e],
            name="log_status",
            native_enum=False,
            length=20,
        ),
        index=True,
    )
    message: Mapped[str] = mapped_column(Text)
    severity: Mapped[LogSeverity] = mapped_column(
        Enum(
            LogSeverity,
            values_callable=lambda e: [x.value for x in e],
            name="log_severity",
            native_enum=False,
            length=20,
        ),
        default=LogSeverity.MEDIUM,
        index=True,
    )
    duration: Mapped[int] = mapped_column(Integer, default=0)  # milliseconds
    records_processed: Mapped[int] = mapped_column(Integer, default=0)
    timestamp: Mapped[datetime] = mapped_column(default=utc_now, index=True)

    # sourceSystem, targetSystem, jobId, userId... no fixed schema
    metadata_json: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSON)

    @property
    def formatted_duration(self) -> str:
        return format_duration(self.duration or 0)

    def __repr__(self) -> str:
        return f"<InterfaceLog {self.interface_name} status={self.status.value} @ {self.timestamp}>"
