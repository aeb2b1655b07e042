
from interface_monitor.core.periods import Period
from interface_monitor.models.interface_log import LogStatus
from interface_monitor.schemas.common import CamelModel, UTCDateTime
from interface_monitor.schemas.interface_log import RecentFailure


class StatusSummary(CamelModel):
    """Aggregate for one status within the window."""

    status: LogStatus
    count: int
    avg_duration: float
    total_records: int


class SummaryResponse(CamelModel):
    """Response for /api/dashboard/summary."""

    summary: list[StatusSummary]
    total_logs: int
    success_rate: float
    recent_failures: list[RecentFailure]
    period: Period


class TrendPoint(CamelModel):
    """Per-status run counts for one time bucket."""

    time: UTCDateTime
    success: int = 0
    failed: int = 0
    warning: int = 0
    running: int = 0


class TrendsResponse(CamelModel):
    """Response for /api/dashboard/trends."""

    trends: list[TrendPoint]
    period: Period


class InterfaceHealth(CamelModel):
    """Health rollup for a single interface."""

    interface_name: str
    total_runs: int
    success_count: int
    failed_count: int
    success_rate: float
    avg_duration: float
    last_run: UTCDateTime


class InterfacesResponse(CamelModel):
    """Response for /api/dashboard/interfaces."""

    interfaces: list[InterfaceHealth]
    period: Period
