from __future__ import annotations

from typing import Optional

from src.models.event_financials import DealType


def calculate_artist_payout(
    net_ticket_revenue: float,
    deal_type: Optional[DealType],
    guarantee: float,
    percentage_split: float,
    hybrid_split_point: float,
) -> float:
    """Artist payout for one event under its deal type.

    A zero parameter counts as missing: any deal whose required terms are
    missing pays 0, as does an event with no recognized deal type. The
    payout never goes below 0, even when net ticket revenue does.
    """
    match deal_type:
        case DealType.FLAT_GUARANTEE:
            return guarantee
        case DealType.PERCENTAGE:
            if not percentage_split:
                return 0.0
            return max(0.0, net_ticket_revenue * (percentage_split / 100))
        case DealType.VERSUS:
            if not percentage_split or not guarantee:
                return 0.0
            return max(guarantee, net_ticket_revenue * (percentage_split / 100))
        case DealType.HYBRID:
            if not guarantee or not hybrid_split_point or not percentage_split:
                return 0.0
            if net_ticket_revenue <= hybrid_split_point:
                return guarantee
            overage = net_ticket_revenue - hybrid_split_point
            return guarantee + overage * (percentage_split / 100)
        case None:
            return 0.0
