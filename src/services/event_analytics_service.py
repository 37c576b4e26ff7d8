from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from src.analytics.dimensions import artist_display_name, genre_key, try_effective_event_datetime
from src.analytics.event_metrics import (
    calculate_record_metrics,
    resolve_event_metrics,
    to_calculated_fields,
)
from src.analytics.inputs import normalize_financial_input
from src.analytics.report import build_analytics_report
from src.core.errors import NotFoundError
from src.models.event_financials import ComputedEventMetrics, EventFinancialInput
from src.models.event_performance import EventPerformanceRecord, EventRecord
from src.repositories.event_performance_repository import EventPerformanceRepository
from src.schemas.analytics import AnalyticsReport
from src.schemas.event_performance import PastEventsFilters, PastEventSummary, ProfitFilter
from src.shared.response import Pagination, paginate_list
from src.shared.time import TimeWindow, parse_event_datetime


logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class EventAnalyticsService:
    def __init__(self, repository: EventPerformanceRepository, top_artists: int = 10) -> None:
        self.repository = repository
        self.top_artists = top_artists

    def get_analytics_report(self, venue_id: str, window: TimeWindow) -> AnalyticsReport:
        previous_window = window.previous()
        current: List[Tuple[datetime, EventRecord]] = []
        previous: List[Tuple[datetime, EventRecord]] = []
        for event in self.repository.list_venue_events(venue_id):
            moment = self._event_moment(event)
            if moment is None:
                continue
            if window.contains(moment):
                current.append((moment, event))
            if previous_window.contains(moment):
                previous.append((moment, event))
        # The repository orders by start_date; rollups need effective-date order.
        current.sort(key=lambda item: item[0])
        previous.sort(key=lambda item: item[0])
        return build_analytics_report(
            [event for _, event in current],
            [event for _, event in previous],
            top_artists=self.top_artists,
            current_window=window,
            previous_window=previous_window,
        )

    @staticmethod
    def _event_moment(event: EventRecord) -> Optional[datetime]:
        if event.performance is not None:
            return try_effective_event_datetime(event, "window selection")
        # Counted toward totalEvents only; an unusable start_date drops it quietly.
        try:
            return parse_event_datetime(event.start_date)
        except ValueError:
            logger.debug("Event %s has no performance and no usable start_date", event.id)
            return None

    def calculate_metrics(self, record: EventPerformanceRecord) -> ComputedEventMetrics:
        return calculate_record_metrics(record)

    def recalculate_performance(self, performance_id: str) -> ComputedEventMetrics:
        record = self.repository.get_performance(performance_id)
        if record is None:
            raise NotFoundError("Event performance not found")
        metrics = calculate_record_metrics(record)
        self.repository.update_calculated_fields(performance_id, to_calculated_fields(metrics))
        logger.info(
            "Recalculated performance %s: net_event_income=%s",
            performance_id,
            metrics.net_event_income,
        )
        return metrics

    def recalculate_venue(
        self, venue_id: str, apply: bool = False
    ) -> List[Tuple[str, ComputedEventMetrics]]:
        results: List[Tuple[str, ComputedEventMetrics]] = []
        for event in self.repository.list_venue_events(venue_id):
            performance = event.performance
            if performance is None or not performance.id:
                continue
            metrics = calculate_record_metrics(performance)
            if apply:
                self.repository.update_calculated_fields(
                    performance.id, to_calculated_fields(metrics)
                )
            results.append((performance.id, metrics))
        return results

    def list_past_events(
        self, filters: PastEventsFilters
    ) -> Tuple[List[PastEventSummary], Pagination]:
        matches: List[Tuple[Optional[datetime], PastEventSummary]] = []
        for event in self.repository.list_venue_events(filters.venue_id):
            performance = event.performance
            if performance is None:
                continue
            moment = try_effective_event_datetime(event, "past events listing")
            if not self._within_dates(moment, filters):
                continue
            if filters.genre and performance.genre != filters.genre:
                continue
            if filters.search and not self._matches_search(event, filters.search):
                continue
            inputs = normalize_financial_input(performance)
            metrics = resolve_event_metrics(inputs)
            if not self._matches_profit_filter(metrics.net_event_income, filters.profit_filter):
                continue
            matches.append((moment, self._to_past_event_summary(event, moment, inputs, metrics)))

        matches.sort(key=lambda item: item[0] or _OLDEST, reverse=True)
        return paginate_list([summary for _, summary in matches], filters.page, filters.page_size)

    @staticmethod
    def _within_dates(moment: Optional[datetime], filters: PastEventsFilters) -> bool:
        if filters.start_date is None and filters.end_date is None:
            return True
        if moment is None:
            return False
        if filters.start_date and moment.date() < filters.start_date:
            return False
        if filters.end_date and moment.date() > filters.end_date:
            return False
        return True

    @staticmethod
    def _matches_search(event: EventRecord, search: str) -> bool:
        needle = search.lower()
        event_name = event.performance.event_name if event.performance else None
        haystack = [event.title, event.artist_name, event_name]
        return any(value and needle in value.lower() for value in haystack)

    @staticmethod
    def _matches_profit_filter(net_event_income: float, profit_filter: ProfitFilter) -> bool:
        if profit_filter is ProfitFilter.PROFITABLE:
            return net_event_income > 0
        if profit_filter is ProfitFilter.BREAK_EVEN:
            return net_event_income == 0
        if profit_filter is ProfitFilter.LOSS:
            return net_event_income < 0
        return True

    @staticmethod
    def _to_past_event_summary(
        event: EventRecord,
        moment: Optional[datetime],
        inputs: EventFinancialInput,
        metrics: ComputedEventMetrics,
    ) -> PastEventSummary:
        performance = event.performance
        return PastEventSummary(
            event_id=event.id,
            performance_id=performance.id,
            title=event.title,
            event_name=performance.event_name,
            artist_name=artist_display_name(event),
            genre=genre_key(event),
            event_date=moment.date().isoformat() if moment else None,
            tickets_sold=inputs.tickets_sold,
            capacity=inputs.capacity,
            total_gross_revenue=metrics.total_gross_revenue,
            net_event_income=metrics.net_event_income,
            profit_margin=metrics.profit_margin,
        )
