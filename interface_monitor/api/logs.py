"""Interface log browser and ingestion endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Query, status

from interface_monitor.core.errors import ValidationError
from interface_monitor.dependencies import Config, DBSession, LogFiltersParam
from interface_monitor.schemas.common import MessageResponse
from interface_monitor.schemas.interface_log import (
    BulkCreateResponse,
    FilterValuesResponse,
    InterfaceLogResponse,
    LogListResponse,
)
from interface_monitor.services import log_store
from interface_monitor.services.log_store import Page

router = APIRouter()


@router.get("/logs", response_model=LogListResponse)
async def list_logs(
    db: DBSession,
    config: Config,
    filters: LogFiltersParam,
    page: int | None = Query(default=None, description="1-based page number"),
    limit: int | None = Query(default=None, description="Page size"),
) -> LogListResponse:
    """
    List interface logs, newest first.

    interfaceName/integrationKey match as case-insensitive substrings,
    status/severity exactly, startDate/endDate are inclusive bounds and
    search matches name, key or message.
    """
    paging = Page.normalize(
        page,
        limit,
        default_limit=config.logs.default_page_size,
        max_limit=config.logs.max_page_size,
    )
    logs, total_count = await log_store.find_logs(
        db, filters, offset=paging.offset, limit=paging.limit
    )

    return LogListResponse(
        logs=[InterfaceLogResponse.from_model(log) for log in logs],
        total_pages=paging.total_pages(total_count),
        current_page=paging.page,
        total_count=total_count,
    )


@router.get("/logs/filters/values", response_model=FilterValuesResponse)
async def get_filter_values(db: DBSession) -> FilterValuesResponse:
    """Distinct values currently present for each filterable field."""
    return FilterValuesResponse(
        interface_names=await log_store.distinct_values(db, "interface_name"),
        integration_keys=await log_store.distinct_values(db, "integration_key"),
        statuses=await log_store.distinct_values(db, "status"),
        severities=await log_store.distinct_values(db, "severity"),
    )


@router.post(
    "/logs/bulk",
    response_model=BulkCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_logs_bulk(db: DBSession, body: Any = Body(...)) -> BulkCreateResponse:
    """Insert many logs at once. Nothing is written if any entry is invalid."""
    if not isinstance(body, list):
        raise ValidationError("body: expected a JSON array of logs")

    logs = await log_store.create_logs(db, body)
    return BulkCreateResponse(inserted_count=len(logs), ids=[log.id for log in logs])


@router.get("/logs/{log_id}", response_model=InterfaceLogResponse)
async def get_log(log_id: str, db: DBSession) -> InterfaceLogResponse:
    log = await log_store.get_log(db, log_id)
    return InterfaceLogResponse.from_model(log)


@router.post(
    "/logs",
    response_model=InterfaceLogResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_log(db: DBSession, body: Any = Body(...)) -> InterfaceLogResponse:
    """Record one interface run."""
    log = await log_store.create_log(db, body)
    return InterfaceLogResponse.from_model(log)


@router.put("/logs/{log_id}", response_model=InterfaceLogResponse)
async def replace_log(log_id: str, db: DBSession, body: Any = Body(...)) -> InterfaceLogResponse:
    """Replace an existing log (e.g. a "running" entry that has finished)."""
    log = await log_store.replace_log(db, log_id, body)
    return InterfaceLogResponse.from_model(log)


@router.delete("/logs/{log_id}", response_model=MessageResponse)
async def delete_log(log_id: str, db: DBSession) -> MessageResponse:
    await log_store.delete_log(db, log_id)
    return MessageResponse(message="Log deleted successfully")
