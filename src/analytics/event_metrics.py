from __future__ import annotations

from typing import Dict

from src.analytics.expenses import calculate_total_expenses, calculate_total_labor_cost
from src.analytics.inputs import normalize_financial_input
from src.analytics.payout import calculate_artist_payout
from src.analytics.revenue import (
    calculate_net_ticket_revenue,
    calculate_total_gross_revenue,
    calculate_venue_merch_portion,
)
from src.models.event_financials import ComputedEventMetrics, EventFinancialInput
from src.models.event_performance import EventPerformanceRecord


def safe_ratio(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator


def calculate_event_metrics(inputs: EventFinancialInput) -> ComputedEventMetrics:
    """Derive every calculated field for one event.

    Each step only reads inputs and results computed before it, so the same
    input always yields the same output.
    """
    net_ticket_revenue = calculate_net_ticket_revenue(inputs)
    venue_merch_portion = calculate_venue_merch_portion(inputs)
    total_gross_revenue = calculate_total_gross_revenue(
        inputs, net_ticket_revenue, venue_merch_portion
    )
    total_labor_cost = calculate_total_labor_cost(inputs)
    total_expenses = calculate_total_expenses(inputs, total_labor_cost)
    artist_payout = calculate_artist_payout(
        net_ticket_revenue,
        inputs.deal_type,
        inputs.artist_guarantee,
        inputs.percentage_split,
        inputs.hybrid_split_point,
    )
    gross_profit = total_gross_revenue - total_expenses
    net_event_income = gross_profit - artist_payout
    revenue_per_attendee = safe_ratio(total_gross_revenue, inputs.tickets_sold)

    return ComputedEventMetrics(
        net_ticket_revenue=net_ticket_revenue,
        venue_merch_portion=venue_merch_portion,
        artist_merch_portion=inputs.total_merch_sales - venue_merch_portion,
        total_gross_revenue=total_gross_revenue,
        total_labor_cost=total_labor_cost,
        total_expenses=total_expenses,
        artist_payout=artist_payout,
        gross_profit=gross_profit,
        net_event_income=net_event_income,
        profit_margin=safe_ratio(net_event_income, total_gross_revenue) * 100,
        capacity_utilization=safe_ratio(inputs.tickets_sold, inputs.capacity) * 100,
        revenue_per_available_capacity=safe_ratio(total_gross_revenue, inputs.capacity),
        revenue_per_attendee=revenue_per_attendee,
        cost_per_attendee=safe_ratio(total_expenses, inputs.tickets_sold),
        fb_per_cap=safe_ratio(inputs.fb_sales, inputs.tickets_sold),
        merch_per_cap=safe_ratio(venue_merch_portion, inputs.tickets_sold),
        total_per_cap=revenue_per_attendee,
    )


def metrics_from_recorded_totals(inputs: EventFinancialInput) -> ComputedEventMetrics:
    """Metrics for a historical record that only kept its summary totals."""
    recorded = inputs.recorded
    total_gross_revenue = recorded.total_gross_revenue or 0.0
    total_expenses = recorded.total_expenses or 0.0
    artist_payout = recorded.artist_payout or 0.0
    venue_merch_portion = recorded.venue_merch_portion or 0.0
    if recorded.net_event_income is not None:
        net_event_income = recorded.net_event_income
    else:
        net_event_income = total_gross_revenue - total_expenses - artist_payout
    revenue_per_attendee = safe_ratio(total_gross_revenue, inputs.tickets_sold)

    return ComputedEventMetrics(
        net_ticket_revenue=recorded.net_ticket_revenue or 0.0,
        venue_merch_portion=venue_merch_portion,
        artist_merch_portion=inputs.total_merch_sales - venue_merch_portion,
        total_gross_revenue=total_gross_revenue,
        total_expenses=total_expenses,
        artist_payout=artist_payout,
        gross_profit=net_event_income + artist_payout,
        net_event_income=net_event_income,
        profit_margin=safe_ratio(net_event_income, total_gross_revenue) * 100,
        capacity_utilization=safe_ratio(inputs.tickets_sold, inputs.capacity) * 100,
        revenue_per_available_capacity=safe_ratio(total_gross_revenue, inputs.capacity),
        revenue_per_attendee=revenue_per_attendee,
        cost_per_attendee=safe_ratio(total_expenses, inputs.tickets_sold),
        fb_per_cap=safe_ratio(inputs.fb_sales, inputs.tickets_sold),
        merch_per_cap=safe_ratio(venue_merch_portion, inputs.tickets_sold),
        total_per_cap=revenue_per_attendee,
    )


def resolve_event_metrics(inputs: EventFinancialInput) -> ComputedEventMetrics:
    recorded = inputs.recorded
    is_summary_only = not inputs.has_line_items and (
        recorded.net_event_income is not None or recorded.total_gross_revenue is not None
    )
    if is_summary_only:
        return metrics_from_recorded_totals(inputs)
    return calculate_event_metrics(inputs)


def calculate_record_metrics(record: EventPerformanceRecord) -> ComputedEventMetrics:
    return resolve_event_metrics(normalize_financial_input(record))


def to_calculated_fields(metrics: ComputedEventMetrics) -> Dict[str, float]:
    """Map metrics onto the stored performance columns."""
    return {
        "net_ticket_revenue": metrics.net_ticket_revenue,
        "merch_venue_portion": metrics.venue_merch_portion,
        "merch_artist_portion": metrics.artist_merch_portion,
        "total_gross_revenue": metrics.total_gross_revenue,
        "total_expenses": metrics.total_expenses,
        "artist_payout": metrics.artist_payout,
        "gross_profit": metrics.gross_profit,
        "net_event_income": metrics.net_event_income,
        "profit_margin": metrics.profit_margin,
        "capacity_utilization": metrics.capacity_utilization,
        "revenue_per_available_capacity": metrics.revenue_per_available_capacity,
        "revenue_per_attendee": metrics.revenue_per_attendee,
        "cost_per_attendee": metrics.cost_per_attendee,
        "fb_revenue_per_cap": metrics.fb_per_cap,
        "merch_revenue_per_cap": metrics.merch_per_cap,
        "total_per_cap": metrics.total_per_cap,
        "per_cap_fb": metrics.fb_per_cap,
        "per_cap_merch": metrics.merch_per_cap,
        "gross_per_cap": metrics.total_per_cap,
    }
