from interface_monitor.models.base import Base
from interface_monitor.models.interface_log import InterfaceLog, LogSeverity, LogStatus

__all__ = [
    "Base",
    "InterfaceLog",
    "LogSeverity",
    "LogStatus",
]
