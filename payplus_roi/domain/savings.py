"""Savings and benefit aggregation across the current and alternative provider"""

from payplus_roi.domain.models import Breakdown, CostSavings, ProviderCosts, SavingsResult
from payplus_roi.utils.numeric import safe_divide


def aggregate(current: ProviderCosts, alternative: ProviderCosts) -> SavingsResult:
    """
    Compare two providers.

    Cost savings are current - alternative (a lower alternative cost is positive).
    The incentive differential is alternative - current rebate (a higher
    alternative rebate is positive). Their sum is the total annual benefit,
    which may be negative and is never clamped.
    """
    cost_savings = CostSavings(
        local_rail=current.local_rail - alternative.local_rail,
        cross_border_rail=current.cross_border_rail - alternative.cross_border_rail,
        rails=current.rails - alternative.rails,
        fx=current.fx.total - alternative.fx.total,
        total=current.total - alternative.total,
    )
    incentive_differential = alternative.card_rebate - current.card_rebate

    return SavingsResult(
        cost_savings=cost_savings,
        cost_savings_percentage=safe_divide(cost_savings.total, current.total) * 100,
        incentive_differential=incentive_differential,
        incentive_increase_percentage=safe_divide(incentive_differential, current.card_rebate) * 100,
        total_annual_benefit=cost_savings.total + incentive_differential,
    )


def freed_working_capital(breakdown: Breakdown) -> float:
    """Card volume paid on credit terms, reported apart from the annual benefit"""
    return breakdown.method.card.value
