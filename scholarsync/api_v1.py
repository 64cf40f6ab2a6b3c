"""API v1 router: all session-authenticated JSON endpoints under /api/v1."""

from fastapi import APIRouter

from .catalog.routes import router as catalog_router
from .dashboard.routes import router as dashboard_router
from .professors.routes import router as professors_router
from .reminders.routes import router as reminders_router

api_v1_router = APIRouter(prefix="/api/v1", tags=["api-v1"])

api_v1_router.include_router(professors_router)
api_v1_router.include_router(reminders_router)
api_v1_router.include_router(catalog_router)
api_v1_router.include_router(dashboard_router)
