from interface_monitor.schemas.common import CamelModel, MessageResponse
from interface_monitor.schemas.dashboard import (
    InterfaceHealth,
    InterfacesResponse,
    StatusSummary,
    SummaryResponse,
    TrendPoint,
    TrendsResponse,
)
from interface_monitor.schemas.interface_log import (
    BulkCreateResponse,
    FilterValuesResponse,
    InterfaceLogCreate,
    InterfaceLogResponse,
    LogListResponse,
    RecentFailure,
)

__all__ = [
    "CamelModel",
    "MessageResponse",
    "InterfaceLogCreate",
    "InterfaceLogResponse",
    "LogListResponse",
    "BulkCreateResponse",
    "FilterValuesResponse",
    "RecentFailure",
    "StatusSummary",
    "SummaryResponse",
    "TrendPoint",
    "TrendsResponse",
    "InterfaceHealth",
    "InterfacesResponse",
]
