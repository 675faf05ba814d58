"""Payment breakdown engine - splits volume by method, then rails by type"""

from payplus_roi.domain.models import (
    Breakdown,
    CustomerInfo,
    FxVolumes,
    MethodSplit,
    Segment,
    TypeSplit,
)
from payplus_roi.utils.numeric import round_half_up, safe_divide


def calculate_payment_breakdown(customer: CustomerInfo) -> Breakdown:
    """
    Split total payments into method and type segments.

    Order matters because counts are rounded at each step:
    1. Method split (rail vs card) of total value and count
    2. Type split (local vs cross-border) of rail value and count only
    3. Display-only type split that adds a proportional share of cards

    Every complement is taken as a remainder, so values and counts are
    conserved exactly at each level.
    """
    total_value = customer.total_payment_value
    total_count = customer.total_payment_count
    rail_percent = customer.payment_method_distribution.rail_percent
    local_percent = customer.payment_type_distribution.local_percent

    # Step 1: method split
    rail_value = total_value * rail_percent / 100
    card_value = total_value - rail_value
    rail_count = round_half_up(total_count * rail_percent / 100)
    card_count = total_count - rail_count

    # Step 2: rail-only type split (cards do not travel rails)
    local_rail_value = rail_value * local_percent / 100
    cross_border_rail_value = rail_value - local_rail_value
    local_rail_count = round_half_up(rail_count * local_percent / 100)
    cross_border_rail_count = rail_count - local_rail_count

    # Step 3: display figures, never fed into cost
    local_card_value = card_value * local_percent / 100
    local_card_count = round_half_up(card_count * local_percent / 100)

    return Breakdown(
        method=MethodSplit(
            rail=Segment(rail_value, rail_count, rail_percent),
            card=Segment(card_value, card_count, customer.payment_method_distribution.card_percent),
        ),
        type=TypeSplit(
            local=Segment(
                local_rail_value + local_card_value,
                local_rail_count + local_card_count,
                local_percent,
            ),
            cross_border=Segment(
                cross_border_rail_value + (card_value - local_card_value),
                cross_border_rail_count + (card_count - local_card_count),
                customer.payment_type_distribution.cross_border_percent,
            ),
        ),
        rails=TypeSplit(
            local=Segment(local_rail_value, local_rail_count),
            cross_border=Segment(cross_border_rail_value, cross_border_rail_count),
        ),
    )


def calculate_fx_volumes(customer: CustomerInfo, breakdown: Breakdown) -> FxVolumes:
    """FX volume is a share of cross-border rail value, split across the margin tiers"""
    total = breakdown.rails.cross_border.value * customer.fx_percent_of_cross_border / 100
    dist = customer.fx_distribution

    return FxVolumes(
        tier1=total * dist.tier1_percent / 100,
        tier2=total * dist.tier2_percent / 100,
        tier3=total * dist.tier3_percent / 100,
        total=total,
    )


def average_transaction_size(customer: CustomerInfo) -> float:
    return safe_divide(customer.total_payment_value, customer.total_payment_count)
