from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_event_analytics_service
from src.models.event_financials import ComputedEventMetrics
from src.models.event_performance import EventPerformanceRecord
from src.schemas.event_performance import PastEventsFilters, PastEventSummary, ProfitFilter
from src.services.event_analytics_service import EventAnalyticsService
from src.shared.response import ResponseEnvelope, build_meta


router = APIRouter(prefix="/performance", tags=["performance"])


@router.post("/calculate")
def calculate_performance(
    record: EventPerformanceRecord,
    service: EventAnalyticsService = Depends(get_event_analytics_service),
) -> ResponseEnvelope[ComputedEventMetrics]:
    data = service.calculate_metrics(record)
    return ResponseEnvelope(data=data, meta=build_meta("request", "na"))


@router.post("/{performance_id}/recalculate")
def recalculate_performance(
    performance_id: str,
    service: EventAnalyticsService = Depends(get_event_analytics_service),
) -> ResponseEnvelope[ComputedEventMetrics]:
    data = service.recalculate_performance(performance_id)
    return ResponseEnvelope(data=data, meta=build_meta("venue_events", "na"))


@router.get("/events")
def list_past_events(
    venue_id: str = Query(...),
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    genre: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    profit_filter: ProfitFilter = Query(default=ProfitFilter.ALL),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=50, ge=1, le=500),
    service: EventAnalyticsService = Depends(get_event_analytics_service),
) -> ResponseEnvelope[List[PastEventSummary]]:
    filters = PastEventsFilters(
        venue_id=venue_id,
        start_date=start_date,
        end_date=end_date,
        genre=genre,
        search=search,
        profit_filter=profit_filter,
        page=page,
        page_size=page_size,
    )
    data, pagination = service.list_past_events(filters)
    time_window = "custom" if start_date or end_date else "all"
    return ResponseEnvelope(
        data=data, pagination=pagination, meta=build_meta("venue_events", time_window)
    )
