from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import Field

from src.shared.base import BaseSchema


class ProfitFilter(str, Enum):
    ALL = "all"
    PROFITABLE = "profitable"
    BREAK_EVEN = "break-even"
    LOSS = "loss"


class PastEventsFilters(BaseSchema):
    venue_id: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    genre: Optional[str] = None
    search: Optional[str] = None
    profit_filter: ProfitFilter = ProfitFilter.ALL
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=50, ge=1, le=500)


class PastEventSummary(BaseSchema):
    event_id: str
    performance_id: Optional[str] = None
    title: Optional[str] = None
    event_name: Optional[str] = None
    artist_name: str
    genre: str
    event_date: Optional[str] = None
    tickets_sold: float = 0.0
    capacity: float = 0.0
    total_gross_revenue: float = 0.0
    net_event_income: float = 0.0
    profit_margin: float = 0.0
