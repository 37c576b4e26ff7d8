from __future__ import annotations

from typing import Iterable

from src.models.event_financials import CustomLineItem, EventFinancialInput, MerchSplitType


def calculate_net_ticket_revenue(inputs: EventFinancialInput) -> float:
    return (
        inputs.gross_ticket_sales
        + inputs.facility_fees_kept
        - inputs.platform_fees_paid_out
        - inputs.taxes
    )


def calculate_venue_merch_portion(inputs: EventFinancialInput) -> float:
    # A flat fee is the venue's dollar amount and does not scale with sales.
    if inputs.merch_split_type is MerchSplitType.PERCENTAGE:
        return inputs.total_merch_sales * (inputs.merch_split_value / 100)
    if inputs.merch_split_type is MerchSplitType.FLAT_FEE:
        return inputs.merch_split_value
    return 0.0


def sum_line_items(lines: Iterable[CustomLineItem]) -> float:
    return sum((line.amount for line in lines), 0.0)


def calculate_total_gross_revenue(
    inputs: EventFinancialInput,
    net_ticket_revenue: float,
    venue_merch_portion: float,
) -> float:
    return (
        net_ticket_revenue
        + inputs.fb_sales
        + venue_merch_portion
        + inputs.parking_revenue
        + inputs.other_revenue
        + sum_line_items(inputs.custom_revenue_lines)
    )
