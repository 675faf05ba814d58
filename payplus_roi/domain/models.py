"""Domain models - pure Python dataclasses for calculation inputs and results"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class PaymentTypeDistribution:
    """Geography split applied to rail payments"""

    local_percent: float
    cross_border_percent: float


@dataclass
class PaymentMethodDistribution:
    """Rail (bank transfer) vs card split of total payments"""

    rail_percent: float
    card_percent: float


@dataclass
class FxDistribution:
    """Share of FX volume falling in each margin tier"""

    tier1_percent: float
    tier2_percent: float
    tier3_percent: float

    def as_list(self) -> List[float]:
        return [self.tier1_percent, self.tier2_percent, self.tier3_percent]

    @classmethod
    def from_list(cls, values: List[float]) -> "FxDistribution":
        return cls(*values)


@dataclass
class CustomerInfo:
    """Payment profile of the customer, in `currency` units"""

    currency: str
    total_payment_value: float
    total_payment_count: int
    payment_type_distribution: PaymentTypeDistribution
    payment_method_distribution: PaymentMethodDistribution
    fx_percent_of_cross_border: float  # share of cross-border rail value needing FX
    fx_distribution: FxDistribution


@dataclass
class FxMargins:
    """FX margin percentage per tier"""

    tier1: float
    tier2: float
    tier3: float


@dataclass
class FeeSchedule:
    """Pricing of one provider"""

    local_rail_fee: float  # flat, per transaction
    cross_border_fee: float  # flat, per transaction
    fx_margins: FxMargins
    card_rebate: float  # percentage of card value paid back to the customer


@dataclass
class Snapshot:
    """The complete editable state of one calculation"""

    customer_info: CustomerInfo
    tungsten: FeeSchedule
    current_provider: FeeSchedule


@dataclass
class Segment:
    """Value/count slice of the payment volume"""

    value: float
    count: int
    percent: Optional[float] = None


@dataclass
class MethodSplit:
    rail: Segment
    card: Segment


@dataclass
class TypeSplit:
    local: Segment
    cross_border: Segment


@dataclass
class Breakdown:
    """
    Payment volume split by method and type.

    `type` includes a proportional share of card payments and is for display only.
    `rails` covers rail payments alone and is what the cost model charges.
    """

    method: MethodSplit
    type: TypeSplit
    rails: TypeSplit


@dataclass
class FxVolumes:
    """FX-eligible value per tier"""

    tier1: float
    tier2: float
    tier3: float
    total: float


@dataclass
class FxCosts:
    tier1: float
    tier2: float
    tier3: float
    total: float


@dataclass
class ProviderCosts:
    """Annual cost of one provider; card_rebate is a benefit and not part of total"""

    local_rail: float
    cross_border_rail: float
    rails: float
    card_rebate: float
    fx: FxCosts
    total: float
    cost_per_transaction: float
    effective_rate: float


@dataclass
class CostSavings:
    """Current minus alternative cost, per category"""

    local_rail: float
    cross_border_rail: float
    rails: float
    fx: float
    total: float


@dataclass
class SavingsResult:
    cost_savings: CostSavings
    cost_savings_percentage: float
    incentive_differential: float
    incentive_increase_percentage: float
    total_annual_benefit: float


@dataclass
class CostSummary:
    current: float
    tungsten: float
    savings: CostSavings
    savings_percentage: float


@dataclass
class IncentiveSummary:
    current: float
    tungsten: float
    differential: float
    increase_percentage: float


@dataclass
class DetailedCosts:
    current: ProviderCosts
    tungsten: ProviderCosts


@dataclass
class Results:
    """Output of a full calculation"""

    breakdown: Breakdown
    fx_volumes: FxVolumes
    average_transaction_size: float
    costs: CostSummary
    incentives: IncentiveSummary
    total_annual_benefit: float
    freed_working_capital: float
    detailed_costs: DetailedCosts
    currency: str
    currency_symbol: str
    snapshot: Dict[str, Any]


@dataclass
class ValidationResult:
    """Outcome of input validation; errors are human-readable messages"""

    valid: bool
    errors: List[str] = field(default_factory=list)
