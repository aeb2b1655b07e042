from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from interface_monitor.config import AppConfig, get_config
from interface_monitor.core.database import get_db
from interface_monitor.core.periods import Period
from interface_monitor.services.log_store import LogFilters

# Type aliases for dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db)]
Config = Annotated[AppConfig, Depends(get_config)]


def get_period(
    config: Config,
    period: str | None = Query(default=None, description="Lookback window: 1h, 24h, 7d or 30d"),
) -> Period:
    """Resolve the period selector, falling back to the configured default."""
    return Period.parse(period, default=config.dashboard.default_period)


def get_dashboard_filters(
    interface_name: str | None = Query(default=None, alias="interfaceName"),
    integration_key: str | None = Query(default=None, alias="integrationKey"),
    status: str | None = Query(default=None),
    severity: str | None = Query(default=None),
) -> LogFilters:
    """Optional filters narrowing the dashboard aggregates."""
    return LogFilters.from_params(
        interface_name=interface_name,
        integration_key=integration_key,
        status=status,
        severity=severity,
    )


def get_log_filters(
    interface_name: str | None = Query(default=None, alias="interfaceName"),
    integration_key: str | None = Query(default=None, alias="integrationKey"),
    status: str | None = Query(default=None),
    severity: str | None = Query(default=None),
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    search: str | None = Query(default=None),
) -> LogFilters:
    """Filters accepted by the log browser."""
    return LogFilters.from_params(
        interface_name=interface_name,
        integration_key=integration_key,
        status=status,
        severity=severity,
        start_date=start_date,
        end_date=end_date,
        search=search,
    )


PeriodParam = Annotated[Period, Depends(get_period)]
DashboardFilters = Annotated[LogFilters, Depends(get_dashboard_filters)]
LogFiltersParam = Annotated[LogFilters, Depends(get_log_filters)]
