from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from src.analytics.event_metrics import safe_ratio
from src.models.event_financials import CustomLineItem, EventMetricsRow
from src.schemas.analytics import BreakdownEntry


ARTIST_PAYOUT = "Artist Payout"
OTHER = "Other"
# Custom revenue lines matching these are already inside the fixed entries.
STANDARD_REVENUE_KEYWORDS = ("f&b", "food", "beverage", "merch", "parking")


def accumulate_line_totals(lines: Iterable[CustomLineItem]) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for line in lines:
        key = line.breakdown_key
        totals[key] = totals.get(key, 0.0) + line.amount
    return totals


def merge_line_totals(left: Dict[str, float], right: Dict[str, float]) -> Dict[str, float]:
    """Reduce step for custom-line totals accumulated per shard; keys keep first-seen order."""
    merged = dict(left)
    for key, value in right.items():
        merged[key] = merged.get(key, 0.0) + value
    return merged


def is_standard_revenue_line(key: str) -> bool:
    lowered = key.lower()
    return any(keyword in lowered for keyword in STANDARD_REVENUE_KEYWORDS)


def _entry(name: str, value: float, total: float) -> BreakdownEntry:
    return BreakdownEntry(name=name, value=value, percentage=safe_ratio(value, total) * 100)


def reconcile_revenue(
    fixed: Sequence[Tuple[str, float]],
    custom_totals: Dict[str, float],
    total_gross_revenue: float,
) -> List[BreakdownEntry]:
    entries = [_entry(name, value, total_gross_revenue) for name, value in fixed]
    for key, value in custom_totals.items():
        if value > 0 and not is_standard_revenue_line(key):
            entries.append(_entry(key, value, total_gross_revenue))

    accounted = sum(entry.value for entry in entries)
    remaining = total_gross_revenue - accounted
    if remaining > 0:
        entries.append(_entry(OTHER, remaining, total_gross_revenue))

    entries.sort(key=lambda entry: entry.value, reverse=True)
    return entries


def reconcile_expenses(
    artist_payout: float,
    fixed: Sequence[Tuple[str, float]],
    custom_totals: Dict[str, float],
    total_expenses: float,
) -> List[BreakdownEntry]:
    # Payout sits outside total expenses, so its share is of expenses plus payout.
    payout_entry = _entry(ARTIST_PAYOUT, artist_payout, total_expenses + artist_payout)
    entries = [_entry(name, value, total_expenses) for name, value in fixed]
    for key, value in custom_totals.items():
        if value > 0:
            entries.append(_entry(key, value, total_expenses))

    accounted = sum(entry.value for entry in entries)
    remaining = total_expenses - accounted
    if remaining > 0:
        entries.append(_entry(OTHER, remaining, total_expenses))

    entries.sort(key=lambda entry: entry.value, reverse=True)
    return [payout_entry, *entries]


def build_revenue_breakdown(rows: Sequence[EventMetricsRow]) -> List[BreakdownEntry]:
    custom_totals = accumulate_line_totals(
        line for row in rows for line in row.inputs.custom_revenue_lines
    )
    fixed = [
        ("Tickets", sum(row.metrics.net_ticket_revenue for row in rows)),
        ("F&B", sum(row.inputs.fb_sales for row in rows)),
        ("Merch", sum(row.metrics.venue_merch_portion for row in rows)),
        ("Parking", sum(row.inputs.parking_revenue for row in rows)),
    ]
    total_gross_revenue = sum(row.metrics.total_gross_revenue for row in rows)
    return reconcile_revenue(fixed, custom_totals, total_gross_revenue)


def build_expense_breakdown(rows: Sequence[EventMetricsRow]) -> List[BreakdownEntry]:
    custom_totals = accumulate_line_totals(
        line for row in rows for line in row.inputs.custom_expense_lines
    )
    fixed = [
        ("Labor", sum(row.metrics.total_labor_cost for row in rows)),
        ("F&B COGS", sum(row.inputs.fb_cost_of_goods for row in rows)),
        (
            "Fees",
            sum(row.inputs.credit_card_fees + row.inputs.ticket_platform_fees for row in rows),
        ),
    ]
    return reconcile_expenses(
        artist_payout=sum(row.metrics.artist_payout for row in rows),
        fixed=fixed,
        custom_totals=custom_totals,
        total_expenses=sum(row.metrics.total_expenses for row in rows),
    )
