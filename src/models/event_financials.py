from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from src.models.event_performance import EventRecord
from src.shared.base import FrozenSchema


class DealType(str, Enum):
    FLAT_GUARANTEE = "Flat Guarantee"
    PERCENTAGE = "Percentage"
    VERSUS = "Versus"
    HYBRID = "Hybrid"


class MerchSplitType(str, Enum):
    PERCENTAGE = "Percentage"
    FLAT_FEE = "Flat Fee"


class CustomLineItem(FrozenSchema):
    name: str
    amount: float = 0.0
    category: Optional[str] = None

    @property
    def breakdown_key(self) -> str:
        return self.category or self.name


class LaborLine(FrozenSchema):
    role: Optional[str] = None
    hours: float = 0.0
    rate: float = 0.0
    total: Optional[float] = None

    @property
    def cost(self) -> float:
        if self.total is not None:
            return self.total
        return self.hours * self.rate


class RecordedTotals(FrozenSchema):
    """Calculated fields already stored on a record, legacy names resolved."""

    net_event_income: Optional[float] = None
    total_gross_revenue: Optional[float] = None
    total_expenses: Optional[float] = None
    artist_payout: Optional[float] = None
    net_ticket_revenue: Optional[float] = None
    venue_merch_portion: Optional[float] = None


class EventFinancialInput(FrozenSchema):
    deal_type: Optional[DealType] = None
    artist_guarantee: float = 0.0
    percentage_split: float = 0.0
    hybrid_split_point: float = 0.0

    gross_ticket_sales: float = 0.0
    facility_fees_kept: float = 0.0
    platform_fees_paid_out: float = 0.0
    taxes: float = 0.0

    fb_sales: float = 0.0
    total_merch_sales: float = 0.0
    merch_split_type: Optional[MerchSplitType] = None
    merch_split_value: float = 0.0
    parking_revenue: float = 0.0
    other_revenue: float = 0.0

    bartender_hours: float = 0.0
    bartender_rate: float = 0.0
    security_hours: float = 0.0
    security_rate: float = 0.0
    door_box_office_hours: float = 0.0
    door_box_office_rate: float = 0.0
    sound_lighting_tech: float = 0.0
    labor_lines: Optional[Tuple[LaborLine, ...]] = None

    fb_cost_of_goods: float = 0.0
    credit_card_fees: float = 0.0
    ticket_platform_fees: float = 0.0
    production_costs: float = 0.0

    tickets_sold: float = 0.0
    capacity: float = 0.0

    marketing_spend: float = 0.0
    new_customers_acquired: float = 0.0

    custom_revenue_lines: Tuple[CustomLineItem, ...] = ()
    custom_expense_lines: Tuple[CustomLineItem, ...] = ()

    recorded: RecordedTotals = RecordedTotals()

    @property
    def has_line_items(self) -> bool:
        revenue_inputs = (
            self.gross_ticket_sales,
            self.facility_fees_kept,
            self.fb_sales,
            self.total_merch_sales,
            self.parking_revenue,
            self.other_revenue,
        )
        expense_inputs = (
            self.bartender_hours,
            self.security_hours,
            self.door_box_office_hours,
            self.sound_lighting_tech,
            self.fb_cost_of_goods,
            self.credit_card_fees,
            self.ticket_platform_fees,
            self.production_costs,
        )
        return (
            any(revenue_inputs)
            or any(expense_inputs)
            or bool(self.labor_lines)
            or bool(self.custom_revenue_lines)
            or bool(self.custom_expense_lines)
        )


class ComputedEventMetrics(FrozenSchema):
    net_ticket_revenue: float = 0.0
    venue_merch_portion: float = 0.0
    artist_merch_portion: float = 0.0
    total_gross_revenue: float = 0.0
    total_labor_cost: float = 0.0
    total_expenses: float = 0.0
    artist_payout: float = 0.0
    gross_profit: float = 0.0
    net_event_income: float = 0.0
    profit_margin: float = 0.0
    capacity_utilization: float = 0.0
    revenue_per_available_capacity: float = 0.0
    revenue_per_attendee: float = 0.0
    cost_per_attendee: float = 0.0
    fb_per_cap: float = 0.0
    merch_per_cap: float = 0.0
    total_per_cap: float = 0.0


class EventMetricsRow(BaseModel):
    """One event in report scope paired with its normalized inputs and metrics."""

    model_config = ConfigDict(frozen=True)

    event: EventRecord
    inputs: EventFinancialInput
    metrics: ComputedEventMetrics
