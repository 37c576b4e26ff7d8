from __future__ import annotations

from functools import lru_cache

from src.core.config import get_settings
from src.repositories.event_performance_repository import EventPerformanceRepository
from src.services.event_analytics_service import EventAnalyticsService


@lru_cache
def get_event_performance_repository() -> EventPerformanceRepository:
    return EventPerformanceRepository()


def get_event_analytics_service() -> EventAnalyticsService:
    return EventAnalyticsService(
        repository=get_event_performance_repository(),
        top_artists=get_settings().analytics_top_artists,
    )
