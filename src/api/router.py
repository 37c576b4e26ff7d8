from __future__ import annotations

from fastapi import APIRouter

from src.api.analytics import router as analytics_router
from src.api.health import router as health_router
from src.api.performance import router as performance_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(analytics_router)
api_router.include_router(performance_router)
