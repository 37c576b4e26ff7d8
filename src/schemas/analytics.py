from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from src.shared.base import BaseSchema
from src.shared.time import TimeWindow


class AnalyticsFilters(BaseSchema):
    venue_id: str
    timeframe: str = "month"
    custom_start: Optional[str] = None
    custom_end: Optional[str] = None


class ProfitTimelinePoint(BaseSchema):
    date: str
    profit: float
    event_name: str
    is_profitable: bool


class PeriodActivityPoint(BaseSchema):
    date: str
    count: int
    avg_profit: float


class GenrePerformance(BaseSchema):
    genre: str
    show_count: int
    avg_attendance: float
    avg_capacity: float
    avg_gross_revenue: float
    avg_net_profit: float
    avg_margin: float
    total_net_profit: float


class ArtistPerformance(BaseSchema):
    artist_name: str
    show_count: int
    avg_attendance: float
    avg_capacity: float
    avg_net_profit: float
    total_net_profit: float
    trend: str


class BreakdownEntry(BaseSchema):
    name: str
    value: float
    percentage: float


class AnalyticsReport(BaseSchema):
    current_window: Optional[TimeWindow] = None
    previous_window: Optional[TimeWindow] = None

    total_net_event_income: float = 0.0
    total_gross_revenue: float = 0.0
    total_expenses: float = 0.0
    total_artist_payout: float = 0.0
    avg_net_margin: float = 0.0

    net_income_change: float = 0.0
    margin_change: float = 0.0
    previous_net_event_income: float = 0.0

    total_events: int = 0
    events_with_performance: int = 0
    total_capacity: float = 0.0
    total_tickets_sold: float = 0.0
    capacity_utilization: float = 0.0

    gross_profit_over_time: List[ProfitTimelinePoint] = Field(default_factory=list)
    events_over_time: List[PeriodActivityPoint] = Field(default_factory=list)
    genre_performance: List[GenrePerformance] = Field(default_factory=list)
    artist_performance: List[ArtistPerformance] = Field(default_factory=list)
    revenue_breakdown: List[BreakdownEntry] = Field(default_factory=list)
    expense_breakdown: List[BreakdownEntry] = Field(default_factory=list)

    avg_cost_per_attendee: float = 0.0
    avg_return_on_ad_spend: float = 0.0
    total_marketing_spend: float = 0.0
    total_new_customers: float = 0.0
