"""Cost model - applies one provider's fee schedule to the payment breakdown"""

from payplus_roi.domain.models import Breakdown, FeeSchedule, FxCosts, FxVolumes, ProviderCosts
from payplus_roi.utils.numeric import safe_divide


def calculate_provider_costs(
    breakdown: Breakdown,
    fx_volumes: FxVolumes,
    fees: FeeSchedule,
    total_payment_value: float,
    total_payment_count: int,
) -> ProviderCosts:
    """
    Annual cost of a provider.

    - Rails: flat fee x rail-only transaction count
    - FX: margin % x tier volume
    - Card rebate: rebate % x card value, a benefit kept out of `total`

    Per-transaction cost and effective rate fall back to 0 on empty volume.
    """
    local_rail_cost = breakdown.rails.local.count * fees.local_rail_fee
    cross_border_rail_cost = breakdown.rails.cross_border.count * fees.cross_border_fee
    rail_cost = local_rail_cost + cross_border_rail_cost

    card_rebate = breakdown.method.card.value * fees.card_rebate / 100

    fx_tier1 = fx_volumes.tier1 * fees.fx_margins.tier1 / 100
    fx_tier2 = fx_volumes.tier2 * fees.fx_margins.tier2 / 100
    fx_tier3 = fx_volumes.tier3 * fees.fx_margins.tier3 / 100
    fx_cost = fx_tier1 + fx_tier2 + fx_tier3

    total_cost = rail_cost + fx_cost

    return ProviderCosts(
        local_rail=local_rail_cost,
        cross_border_rail=cross_border_rail_cost,
        rails=rail_cost,
        card_rebate=card_rebate,
        fx=FxCosts(tier1=fx_tier1, tier2=fx_tier2, tier3=fx_tier3, total=fx_cost),
        total=total_cost,
        cost_per_transaction=safe_divide(total_cost, total_payment_count),
        effective_rate=safe_divide(total_cost, total_payment_value) * 100,
    )
