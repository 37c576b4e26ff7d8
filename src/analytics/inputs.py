from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from src.models.event_financials import (
    CustomLineItem,
    DealType,
    EventFinancialInput,
    LaborLine,
    MerchSplitType,
    RecordedTotals,
)
from src.models.event_performance import (
    CustomExpenseRecord,
    CustomRevenueStreamRecord,
    EventPerformanceRecord,
    LaborCostRecord,
    TicketLevelRecord,
)


DEFAULT_REVENUE_LINE_NAME = "Custom Revenue"
DEFAULT_EXPENSE_LINE_NAME = "Custom Expense"

_DEAL_TYPE_LOOKUP = {
    "flat guarantee": DealType.FLAT_GUARANTEE,
    "flat_guarantee": DealType.FLAT_GUARANTEE,
    "flatguarantee": DealType.FLAT_GUARANTEE,
    "guarantee": DealType.FLAT_GUARANTEE,
    "percentage": DealType.PERCENTAGE,
    "versus": DealType.VERSUS,
    "vs": DealType.VERSUS,
    "hybrid": DealType.HYBRID,
}

_MERCH_SPLIT_LOOKUP = {
    "percentage": MerchSplitType.PERCENTAGE,
    "percent": MerchSplitType.PERCENTAGE,
    "flat fee": MerchSplitType.FLAT_FEE,
    "flat_fee": MerchSplitType.FLAT_FEE,
    "flat": MerchSplitType.FLAT_FEE,
}


def first_present(*values: Optional[float]) -> Optional[float]:
    for value in values:
        if value is not None:
            return value
    return None


def _amount(*values: Optional[float]) -> float:
    resolved = first_present(*values)
    return float(resolved) if resolved is not None else 0.0


def parse_deal_type(value: Optional[str]) -> Optional[DealType]:
    if not value:
        return None
    return _DEAL_TYPE_LOOKUP.get(value.strip().lower())


def parse_merch_split_type(value: Optional[str]) -> Optional[MerchSplitType]:
    if not value:
        return None
    return _MERCH_SPLIT_LOOKUP.get(value.strip().lower())


def gross_ticket_sales_from_levels(levels: Iterable[TicketLevelRecord]) -> float:
    return sum(_amount(level.price) * _amount(level.quantity_sold) for level in levels)


def normalize_revenue_lines(
    streams: Optional[Iterable[CustomRevenueStreamRecord]],
) -> Tuple[CustomLineItem, ...]:
    return tuple(
        CustomLineItem(
            name=stream.stream_name or stream.name or DEFAULT_REVENUE_LINE_NAME,
            amount=_amount(stream.amount),
            category=stream.category or None,
        )
        for stream in streams or []
    )


def normalize_expense_lines(
    expenses: Optional[Iterable[CustomExpenseRecord]],
) -> Tuple[CustomLineItem, ...]:
    return tuple(
        CustomLineItem(
            name=expense.expense_name or expense.name or DEFAULT_EXPENSE_LINE_NAME,
            amount=_amount(expense.expense_amount, expense.amount),
            category=expense.category or None,
        )
        for expense in expenses or []
    )


def normalize_labor_lines(
    labor_costs: Optional[List[LaborCostRecord]],
) -> Optional[Tuple[LaborLine, ...]]:
    if labor_costs is None:
        return None
    return tuple(
        LaborLine(
            role=line.role,
            hours=_amount(line.hours),
            rate=_amount(line.rate),
            total=line.total,
        )
        for line in labor_costs
    )


def resolve_recorded_totals(record: EventPerformanceRecord) -> RecordedTotals:
    return RecordedTotals(
        net_event_income=first_present(record.net_event_income, record.gross_profit),
        total_gross_revenue=first_present(record.total_gross_revenue, record.gross_receipts),
        total_expenses=record.total_expenses,
        artist_payout=record.artist_payout,
        net_ticket_revenue=record.net_ticket_revenue,
        venue_merch_portion=record.merch_venue_portion,
    )


def normalize_financial_input(record: EventPerformanceRecord) -> EventFinancialInput:
    tickets_sold = _amount(record.tickets_sold)

    if record.ticket_levels:
        gross_ticket_sales = gross_ticket_sales_from_levels(record.ticket_levels)
    else:
        gross_ticket_sales = _amount(record.gross_ticket_sales)

    fb_sales = first_present(record.fb_sales, record.fbsales_total)
    if fb_sales is None and record.per_cap_fb is not None:
        fb_sales = record.per_cap_fb * tickets_sold

    return EventFinancialInput(
        deal_type=parse_deal_type(record.deal_type),
        artist_guarantee=_amount(record.artist_guarantee),
        percentage_split=_amount(record.percentage_split),
        hybrid_split_point=_amount(record.hybrid_door_split_point, record.door_price_split_point),
        gross_ticket_sales=gross_ticket_sales,
        facility_fees_kept=_amount(record.facility_fees_kept),
        platform_fees_paid_out=_amount(record.ticketing_fees_paid_to_platform),
        taxes=_amount(record.taxes),
        fb_sales=_amount(fb_sales),
        total_merch_sales=_amount(record.total_merch_sales, record.merch_sales_total),
        merch_split_type=parse_merch_split_type(
            record.merch_split_type or record.merch_commission_type
        ),
        merch_split_value=_amount(record.merch_split_value, record.merch_commission),
        parking_revenue=_amount(record.parking_revenue),
        other_revenue=_amount(record.other_revenue),
        bartender_hours=_amount(record.bartender_hours),
        bartender_rate=_amount(record.bartender_rate),
        security_hours=_amount(record.security_hours),
        security_rate=_amount(record.security_rate),
        door_box_office_hours=_amount(record.door_box_office_hours),
        door_box_office_rate=_amount(record.door_box_office_rate),
        sound_lighting_tech=_amount(record.sound_lighting_tech),
        labor_lines=normalize_labor_lines(record.labor_costs),
        fb_cost_of_goods=_amount(record.fb_cost_of_goods, record.fbcogs_dollar),
        credit_card_fees=_amount(record.credit_card_fees),
        ticket_platform_fees=_amount(
            record.ticket_platform_fees,
            record.ticket_platform_fees_total,
            record.ticketing_platform_fees,
        ),
        production_costs=_amount(record.production_costs),
        tickets_sold=tickets_sold,
        capacity=_amount(record.capacity, record.venue_capacity),
        marketing_spend=_amount(record.marketing_spend),
        new_customers_acquired=_amount(record.new_customers_acquired),
        custom_revenue_lines=normalize_revenue_lines(record.custom_revenue_streams),
        custom_expense_lines=normalize_expense_lines(record.custom_expenses),
        recorded=resolve_recorded_totals(record),
    )
