from fastapi import APIRouter

from interface_monitor.api.dashboard import router as dashboard_router
from interface_monitor.api.logs import router as logs_router

api_router = APIRouter()

# API routes at /api/*
api_router.include_router(logs_router, prefix="/api", tags=["logs"])
api_router.include_router(dashboard_router, prefix="/api", tags=["dashboard"])
