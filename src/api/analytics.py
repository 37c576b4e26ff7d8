from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_event_analytics_service
from src.core.config import get_settings
from src.schemas.analytics import AnalyticsFilters, AnalyticsReport
from src.services.event_analytics_service import EventAnalyticsService
from src.shared.response import ResponseEnvelope, build_meta
from src.shared.time import resolve_time_window


router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("")
def analytics_report(
    venue_id: str = Query(...),
    timeframe: Optional[str] = Query(default=None),
    custom_start: Optional[str] = Query(default=None),
    custom_end: Optional[str] = Query(default=None),
    service: EventAnalyticsService = Depends(get_event_analytics_service),
) -> ResponseEnvelope[AnalyticsReport]:
    filters = AnalyticsFilters(
        venue_id=venue_id,
        timeframe=timeframe or get_settings().analytics_default_timeframe,
        custom_start=custom_start,
        custom_end=custom_end,
    )
    window = resolve_time_window(filters.timeframe, filters.custom_start, filters.custom_end)
    data = service.get_analytics_report(filters.venue_id, window)
    time_window = "custom" if filters.custom_start and filters.custom_end else filters.timeframe
    meta = build_meta(
        "venue_events",
        time_window,
        generated_at=datetime.now(timezone.utc).isoformat(),
    )
    return ResponseEnvelope(data=data, meta=meta)
