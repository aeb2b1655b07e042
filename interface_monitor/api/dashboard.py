"""Dashboard aggregate endpoints."""

from fastapi import APIRouter

from interface_monitor.dependencies import Config, DashboardFilters, DBSession, PeriodParam
from interface_monitor.schemas.dashboard import InterfacesResponse, SummaryResponse, TrendsResponse
from interface_monitor.services import dashboard

router = APIRouter()


@router.get("/dashboard/summary", response_model=SummaryResponse)
async def get_summary(
    db: DBSession,
    config: Config,
    period: PeriodParam,
    filters: DashboardFilters,
) -> SummaryResponse:
    """
    Status counts for the selected period.

    Includes the success rate and the most recent failed runs.
    """
    return await dashboard.get_summary(
        db,
        period,
        filters=filters,
        recent_failures_limit=config.dashboard.recent_failures_limit,
    )


@router.get("/dashboard/trends", response_model=TrendsResponse)
async def get_trends(
    db: DBSession,
    period: PeriodParam,
    filters: DashboardFilters,
) -> TrendsResponse:
    """Per-status run counts in fixed-width time buckets."""
    return await dashboard.get_trends(db, period, filters=filters)


@router.get("/dashboard/interfaces", response_model=InterfacesResponse)
async def get_interfaces(
    db: DBSession,
    period: PeriodParam,
    filters: DashboardFilters,
) -> InterfacesResponse:
    """Health rollup per interface, most recently run first."""
    return await dashboard.get_interface_health(db, period, filters=filters)
