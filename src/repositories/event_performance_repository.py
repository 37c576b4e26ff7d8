from __future__ import annotations

from typing import Any, Dict, List, Optional

from src.core.config import get_settings
from src.core.supabase import SupabaseClient
from src.models.event_performance import EventPerformanceRecord, EventRecord


PERFORMANCE_SELECT = (
    "*,artist:artists(id,name),ticket_levels(*),labor_costs(*),"
    "custom_expenses(*),custom_revenue_streams(*)"
)
EVENT_SELECT = f"id,venue_id,title,artist_name,start_date,performance:event_performances({PERFORMANCE_SELECT})"


class EventPerformanceRepository:
    def __init__(self, page_size: Optional[int] = None) -> None:
        self.client = SupabaseClient()
        self.page_size = page_size or get_settings().events_fetch_page_size

    def list_venue_events(self, venue_id: str) -> List[EventRecord]:
        records: List[EventRecord] = []
        offset = 0
        while True:
            rows, _ = self.client.select(
                table="events",
                select=EVENT_SELECT,
                filters=[("venue_id", f"eq.{venue_id}")],
                limit=self.page_size,
                offset=offset,
                order="start_date.asc",
            )
            records.extend(EventRecord.model_validate(row) for row in rows)
            if len(rows) < self.page_size:
                return records
            offset += self.page_size

    def get_performance(self, performance_id: str) -> Optional[EventPerformanceRecord]:
        rows, _ = self.client.select(
            table="event_performances",
            select=PERFORMANCE_SELECT,
            filters=[("id", f"eq.{performance_id}")],
            limit=1,
        )
        if not rows:
            return None
        return EventPerformanceRecord.model_validate(rows[0])

    def update_calculated_fields(self, performance_id: str, fields: Dict[str, Any]) -> None:
        self.client.update(
            table="event_performances",
            payload=fields,
            filters=[("id", f"eq.{performance_id}")],
        )
