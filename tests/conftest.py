from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_event_analytics_service
from src.main import create_app
from src.models.event_financials import ComputedEventMetrics
from src.models.event_performance import EventPerformanceRecord, EventRecord
from src.schemas.analytics import AnalyticsReport, BreakdownEntry
from src.schemas.event_performance import PastEventsFilters, PastEventSummary
from src.services.event_analytics_service import EventAnalyticsService
from src.shared.response import paginate_list
from src.shared.time import TimeWindow


class FakeEventAnalyticsService:
    def __init__(self) -> None:
        self.last_window: Optional[TimeWindow] = None
        self.last_filters: Optional[PastEventsFilters] = None

    def get_analytics_report(self, venue_id: str, window: TimeWindow) -> AnalyticsReport:
        self.last_window = window
        return AnalyticsReport(
            current_window=window,
            previous_window=window.previous(),
            total_net_event_income=4000,
            total_gross_revenue=12000,
            total_events=1,
            events_with_performance=1,
            revenue_breakdown=[BreakdownEntry(name="Tickets", value=9000, percentage=75)],
        )

    def calculate_metrics(self, record: EventPerformanceRecord) -> ComputedEventMetrics:
        return EventAnalyticsService(repository=None).calculate_metrics(record)

    def recalculate_performance(self, performance_id: str) -> ComputedEventMetrics:
        from src.core.errors import NotFoundError

        if performance_id != "perf-1":
            raise NotFoundError("Event performance not found")
        return ComputedEventMetrics(net_event_income=4000, total_gross_revenue=9000)

    def list_past_events(self, filters: PastEventsFilters):
        self.last_filters = filters
        items = [
            PastEventSummary(
                event_id="event-1",
                performance_id="perf-1",
                title="Friday Night",
                artist_name="The Regulars",
                genre="Rock",
                event_date="2026-03-14",
                net_event_income=4000,
            )
        ]
        return paginate_list(items, filters.page, filters.page_size)


class StubEventPerformanceRepository:
    def __init__(self, events: Optional[List[EventRecord]] = None) -> None:
        self.events = events or []
        self.updates: List[tuple] = []

    def list_venue_events(self, venue_id: str) -> List[EventRecord]:
        _ = venue_id
        return self.events

    def get_performance(self, performance_id: str) -> Optional[EventPerformanceRecord]:
        for event in self.events:
            if event.performance is not None and event.performance.id == performance_id:
                return event.performance
        return None

    def update_calculated_fields(self, performance_id: str, fields: Dict[str, Any]) -> None:
        self.updates.append((performance_id, fields))


@pytest.fixture()
def fake_service() -> FakeEventAnalyticsService:
    return FakeEventAnalyticsService()


@pytest.fixture()
def client(fake_service: FakeEventAnalyticsService) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_event_analytics_service] = lambda: fake_service
    return TestClient(app)


@pytest.fixture()
def make_event():
    counter = {"value": 0}

    def _make_event(
        start_date: Optional[str] = "2026-03-14T20:00:00Z",
        with_performance: bool = True,
        **performance: Any,
    ) -> EventRecord:
        counter["value"] += 1
        index = counter["value"]
        payload: Dict[str, Any] = {
            "id": f"event-{index}",
            "venue_id": "venue-1",
            "title": performance.pop("title", f"Show {index}"),
            "artist_name": performance.pop("artist_name", None),
            "start_date": start_date,
        }
        if with_performance:
            payload["performance"] = {"id": f"perf-{index}", **performance}
        return EventRecord.model_validate(payload)

    return _make_event


@pytest.fixture()
def stub_repository() -> StubEventPerformanceRepository:
    return StubEventPerformanceRepository()
