from __future__ import annotations

from typing import Any, List, Optional

from pydantic import field_validator

from src.shared.base import RecordModel


class ArtistRecord(RecordModel):
    id: Optional[str] = None
    name: Optional[str] = None


class TicketLevelRecord(RecordModel):
    tier_name: Optional[str] = None
    price: Optional[float] = None
    quantity_available: Optional[float] = None
    quantity_sold: Optional[float] = None


class LaborCostRecord(RecordModel):
    role: Optional[str] = None
    hours: Optional[float] = None
    rate: Optional[float] = None
    total: Optional[float] = None


class CustomRevenueStreamRecord(RecordModel):
    stream_name: Optional[str] = None
    name: Optional[str] = None
    amount: Optional[float] = None
    category: Optional[str] = None


class CustomExpenseRecord(RecordModel):
    expense_name: Optional[str] = None
    name: Optional[str] = None
    expense_amount: Optional[float] = None
    amount: Optional[float] = None
    category: Optional[str] = None


class EventPerformanceRecord(RecordModel):
    id: Optional[str] = None
    event_id: Optional[str] = None
    event_date: Optional[str] = None
    event_name: Optional[str] = None
    genre: Optional[str] = None
    artist_id: Optional[str] = None
    artist: Optional[ArtistRecord] = None

    capacity: Optional[float] = None
    venue_capacity: Optional[float] = None
    tickets_sold: Optional[float] = None

    deal_type: Optional[str] = None
    artist_guarantee: Optional[float] = None
    percentage_split: Optional[float] = None
    hybrid_door_split_point: Optional[float] = None
    door_price_split_point: Optional[float] = None

    gross_ticket_sales: Optional[float] = None
    facility_fees_kept: Optional[float] = None
    ticketing_fees_paid_to_platform: Optional[float] = None
    taxes: Optional[float] = None
    fb_sales: Optional[float] = None
    fbsales_total: Optional[float] = None
    per_cap_fb: Optional[float] = None
    total_merch_sales: Optional[float] = None
    merch_sales_total: Optional[float] = None
    merch_split_type: Optional[str] = None
    merch_commission_type: Optional[str] = None
    merch_split_value: Optional[float] = None
    merch_commission: Optional[float] = None
    parking_revenue: Optional[float] = None
    other_revenue: Optional[float] = None

    bartender_hours: Optional[float] = None
    bartender_rate: Optional[float] = None
    security_hours: Optional[float] = None
    security_rate: Optional[float] = None
    sound_lighting_tech: Optional[float] = None
    door_box_office_hours: Optional[float] = None
    door_box_office_rate: Optional[float] = None
    fb_cost_of_goods: Optional[float] = None
    fbcogs_dollar: Optional[float] = None
    credit_card_fees: Optional[float] = None
    ticket_platform_fees: Optional[float] = None
    ticket_platform_fees_total: Optional[float] = None
    ticketing_platform_fees: Optional[float] = None
    production_costs: Optional[float] = None

    marketing_spend: Optional[float] = None
    new_customers_acquired: Optional[float] = None

    ticket_levels: Optional[List[TicketLevelRecord]] = None
    labor_costs: Optional[List[LaborCostRecord]] = None
    custom_revenue_streams: Optional[List[CustomRevenueStreamRecord]] = None
    custom_expenses: Optional[List[CustomExpenseRecord]] = None

    # Stored calculated fields, including pre-rename columns.
    net_ticket_revenue: Optional[float] = None
    merch_venue_portion: Optional[float] = None
    total_gross_revenue: Optional[float] = None
    gross_receipts: Optional[float] = None
    total_expenses: Optional[float] = None
    artist_payout: Optional[float] = None
    gross_profit: Optional[float] = None
    net_event_income: Optional[float] = None

    @field_validator("event_date", mode="before")
    @classmethod
    def _stringify_event_date(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class EventRecord(RecordModel):
    id: str
    venue_id: Optional[str] = None
    title: Optional[str] = None
    artist_name: Optional[str] = None
    start_date: Optional[str] = None
    performance: Optional[EventPerformanceRecord] = None

    @field_validator("performance", mode="before")
    @classmethod
    def _unwrap_embedded_performance(cls, value: Any) -> Any:
        # PostgREST embeds a one-to-one relation as an object or a list.
        if isinstance(value, list):
            return value[0] if value else None
        return value

    @field_validator("start_date", mode="before")
    @classmethod
    def _stringify_start_date(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)
