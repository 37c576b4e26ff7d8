from __future__ import annotations

from src.analytics.revenue import sum_line_items
from src.models.event_financials import EventFinancialInput


def calculate_total_labor_cost(inputs: EventFinancialInput) -> float:
    if inputs.labor_lines:
        return sum((line.cost for line in inputs.labor_lines), 0.0)
    return (
        inputs.bartender_hours * inputs.bartender_rate
        + inputs.security_hours * inputs.security_rate
        + inputs.sound_lighting_tech
        + inputs.door_box_office_hours * inputs.door_box_office_rate
    )


def calculate_total_expenses(inputs: EventFinancialInput, total_labor_cost: float) -> float:
    return (
        total_labor_cost
        + inputs.fb_cost_of_goods
        + inputs.credit_card_fees
        + inputs.ticket_platform_fees
        + inputs.production_costs
        + sum_line_items(inputs.custom_expense_lines)
    )
