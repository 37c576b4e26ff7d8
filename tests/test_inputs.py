from __future__ import annotations

import pytest

from src.analytics.inputs import (
    normalize_financial_input,
    parse_deal_type,
    parse_merch_split_type,
    resolve_recorded_totals,
)
from src.models.event_financials import DealType, MerchSplitType
from src.models.event_performance import EventPerformanceRecord


def test_missing_fields_default_to_zero_and_empty():
    inputs = normalize_financial_input(EventPerformanceRecord())

    assert inputs.deal_type is None
    assert inputs.gross_ticket_sales == 0
    assert inputs.capacity == 0
    assert inputs.labor_lines is None
    assert inputs.custom_revenue_lines == ()
    assert inputs.custom_expense_lines == ()


def test_form_payload_and_stored_row_normalize_identically():
    form = EventPerformanceRecord.model_validate(
        {
            "venueCapacity": 400,
            "hybridDoorSplitPoint": 6000,
            "merchSplitType": "Flat Fee",
            "merchSplitValue": 150,
            "fbSales": 2000,
            "totalMerchSales": 3000,
            "fbCostOfGoods": 600,
            "ticketPlatformFees": 75,
        }
    )
    stored = EventPerformanceRecord.model_validate(
        {
            "capacity": 400,
            "door_price_split_point": 6000,
            "merch_commission_type": "flat fee",
            "merch_commission": 150,
            "fbsales_total": 2000,
            "merch_sales_total": 3000,
            "fbcogs_dollar": 600,
            "ticket_platform_fees_total": 75,
        }
    )

    assert normalize_financial_input(form) == normalize_financial_input(stored)


def test_ticket_levels_override_gross_ticket_sales():
    record = EventPerformanceRecord.model_validate(
        {
            "grossTicketSales": 1,
            "ticketLevels": [
                {"tierName": "GA", "price": 25, "quantitySold": 100},
                {"tierName": "VIP", "price": 60, "quantitySold": 20},
            ],
        }
    )

    assert normalize_financial_input(record).gross_ticket_sales == 3700


def test_fb_sales_falls_back_to_per_cap_times_tickets():
    record = EventPerformanceRecord.model_validate({"per_cap_fb": 12.5, "tickets_sold": 200})

    assert normalize_financial_input(record).fb_sales == 2500


def test_custom_lines_resolve_names_and_amounts():
    record = EventPerformanceRecord.model_validate(
        {
            "customRevenueStreams": [
                {"streamName": "Sponsorship", "amount": 500},
                {"name": "Coat Check", "amount": None, "category": "Services"},
                {},
            ],
            "customExpenses": [
                {"expenseName": "Hospitality", "expenseAmount": 120},
                {"name": "Cleaning", "amount": 80},
            ],
        }
    )

    inputs = normalize_financial_input(record)

    assert [(line.name, line.amount) for line in inputs.custom_revenue_lines] == [
        ("Sponsorship", 500),
        ("Coat Check", 0),
        ("Custom Revenue", 0),
    ]
    assert inputs.custom_revenue_lines[1].breakdown_key == "Services"
    assert [(line.name, line.amount) for line in inputs.custom_expense_lines] == [
        ("Hospitality", 120),
        ("Cleaning", 80),
    ]


def test_labor_cost_rows_are_kept_in_order():
    record = EventPerformanceRecord.model_validate(
        {"laborCosts": [{"role": "Bar", "hours": 5, "rate": 20}, {"role": "Door", "total": 90}]}
    )

    lines = normalize_financial_input(record).labor_lines

    assert [line.role for line in lines] == ["Bar", "Door"]
    assert [line.cost for line in lines] == [100, 90]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Flat Guarantee", DealType.FLAT_GUARANTEE),
        ("flat_guarantee", DealType.FLAT_GUARANTEE),
        ("VERSUS", DealType.VERSUS),
        (" Hybrid ", DealType.HYBRID),
        ("percentage", DealType.PERCENTAGE),
        ("Door Deal", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_deal_type(raw, expected):
    assert parse_deal_type(raw) is expected


def test_parse_merch_split_type():
    assert parse_merch_split_type("percentage") is MerchSplitType.PERCENTAGE
    assert parse_merch_split_type("Flat Fee") is MerchSplitType.FLAT_FEE
    assert parse_merch_split_type("barter") is None


def test_recorded_totals_follow_legacy_fallback_chains():
    legacy = EventPerformanceRecord.model_validate({"gross_profit": 700, "gross_receipts": 5000})
    current = EventPerformanceRecord.model_validate(
        {
            "net_event_income": 650,
            "gross_profit": 700,
            "total_gross_revenue": 5100,
            "gross_receipts": 5000,
        }
    )

    assert resolve_recorded_totals(legacy).net_event_income == 700
    assert resolve_recorded_totals(legacy).total_gross_revenue == 5000
    assert resolve_recorded_totals(current).net_event_income == 650
    assert resolve_recorded_totals(current).total_gross_revenue == 5100
