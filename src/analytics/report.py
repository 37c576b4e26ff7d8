from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from src.analytics.breakdown import build_expense_breakdown, build_revenue_breakdown
from src.analytics.dimensions import (
    accumulate_artists,
    accumulate_genres,
    accumulate_periods,
    build_artist_performance,
    build_events_over_time,
    build_genre_performance,
    build_profit_timeline,
)
from src.analytics.event_metrics import resolve_event_metrics, safe_ratio
from src.analytics.inputs import normalize_financial_input
from src.models.event_financials import ComputedEventMetrics, EventMetricsRow
from src.models.event_performance import EventRecord
from src.schemas.analytics import AnalyticsReport
from src.shared.time import TimeWindow


def build_event_rows(events: Iterable[EventRecord]) -> List[EventMetricsRow]:
    rows: List[EventMetricsRow] = []
    for event in events:
        if event.performance is None:
            continue
        inputs = normalize_financial_input(event.performance)
        rows.append(
            EventMetricsRow(event=event, inputs=inputs, metrics=resolve_event_metrics(inputs))
        )
    return rows


def event_margin(metrics: ComputedEventMetrics) -> float:
    if metrics.total_gross_revenue <= 0:
        return 0.0
    return metrics.net_event_income / metrics.total_gross_revenue * 100


def average_net_margin(rows: Sequence[EventMetricsRow]) -> float:
    if not rows:
        return 0.0
    return sum(event_margin(row.metrics) for row in rows) / len(rows)


def percent_change(current: float, previous: float) -> float:
    if previous == 0:
        return 0.0
    return (current - previous) / abs(previous) * 100


def build_analytics_report(
    current_events: Sequence[EventRecord],
    previous_events: Sequence[EventRecord],
    top_artists: int = 10,
    current_window: Optional[TimeWindow] = None,
    previous_window: Optional[TimeWindow] = None,
) -> AnalyticsReport:
    """Roll the events of one window up into the dashboard report.

    Both event sequences must already be filtered to their windows and kept
    in chronological order; the artist trend depends on that order.
    """
    rows = build_event_rows(current_events)
    previous_rows = build_event_rows(previous_events)

    total_net_event_income = sum(row.metrics.net_event_income for row in rows)
    total_gross_revenue = sum(row.metrics.total_gross_revenue for row in rows)
    total_tickets_sold = sum(row.inputs.tickets_sold for row in rows)
    total_capacity = sum(row.inputs.capacity for row in rows)
    total_marketing_spend = sum(row.inputs.marketing_spend for row in rows)

    avg_net_margin = average_net_margin(rows)
    previous_net_event_income = sum(row.metrics.net_event_income for row in previous_rows)
    previous_avg_net_margin = average_net_margin(previous_rows)
    margin_change = avg_net_margin - previous_avg_net_margin if previous_avg_net_margin else 0.0

    return AnalyticsReport(
        current_window=current_window,
        previous_window=previous_window,
        total_net_event_income=total_net_event_income,
        total_gross_revenue=total_gross_revenue,
        total_expenses=sum(row.metrics.total_expenses for row in rows),
        total_artist_payout=sum(row.metrics.artist_payout for row in rows),
        avg_net_margin=avg_net_margin,
        net_income_change=percent_change(total_net_event_income, previous_net_event_income),
        margin_change=margin_change,
        previous_net_event_income=previous_net_event_income,
        total_events=len(current_events),
        events_with_performance=len(rows),
        total_capacity=total_capacity,
        total_tickets_sold=total_tickets_sold,
        capacity_utilization=safe_ratio(total_tickets_sold, total_capacity) * 100,
        gross_profit_over_time=build_profit_timeline(rows),
        events_over_time=build_events_over_time(accumulate_periods(rows)),
        genre_performance=build_genre_performance(accumulate_genres(rows)),
        artist_performance=build_artist_performance(accumulate_artists(rows), limit=top_artists),
        revenue_breakdown=build_revenue_breakdown(rows),
        expense_breakdown=build_expense_breakdown(rows),
        avg_cost_per_attendee=safe_ratio(total_marketing_spend, total_tickets_sold),
        avg_return_on_ad_spend=safe_ratio(total_gross_revenue, total_marketing_spend),
        total_marketing_spend=total_marketing_spend,
        total_new_customers=sum(row.inputs.new_customers_acquired for row in rows),
    )
