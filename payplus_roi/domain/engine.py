"""ROI engine - owns one live snapshot and runs the full calculation pipeline"""

import logging
from typing import Any, Dict, List, Tuple

from payplus_roi.config import settings
from payplus_roi.domain.allocation import redistribute
from payplus_roi.domain.breakdown import (
    average_transaction_size,
    calculate_fx_volumes,
    calculate_payment_breakdown,
)
from payplus_roi.domain.costs import calculate_provider_costs
from payplus_roi.domain.currency import conversion_factor, get_symbol
from payplus_roi.domain.exceptions import MalformedSnapshot, UnknownCurrency, UnknownField, UnknownProvider
from payplus_roi.domain.models import (
    CostSummary,
    DetailedCosts,
    FeeSchedule,
    FxDistribution,
    IncentiveSummary,
    Results,
    ValidationResult,
)
from payplus_roi.domain.savings import aggregate, freed_working_capital
from payplus_roi.domain.snapshot import default_snapshot, snapshot_from_dict, snapshot_to_dict
from payplus_roi.utils.numeric import coerce_number, round_money

# Settable customer fields: UI path -> attribute chain on CustomerInfo
CUSTOMER_FIELDS: Dict[str, Tuple[str, ...]] = {
    "totalPaymentValue": ("total_payment_value",),
    "totalPaymentCount": ("total_payment_count",),
    "paymentTypeDistribution.localPercent": ("payment_type_distribution", "local_percent"),
    "paymentTypeDistribution.crossBorderPercent": ("payment_type_distribution", "cross_border_percent"),
    "paymentMethodDistribution.railPercent": ("payment_method_distribution", "rail_percent"),
    "paymentMethodDistribution.cardPercent": ("payment_method_distribution", "card_percent"),
    "fxPercentOfCrossBorder": ("fx_percent_of_cross_border",),
    "fxVolume.distribution.tier1Percent": ("fx_distribution", "tier1_percent"),
    "fxVolume.distribution.tier2Percent": ("fx_distribution", "tier2_percent"),
    "fxVolume.distribution.tier3Percent": ("fx_distribution", "tier3_percent"),
}

# Settable fee fields: UI path -> attribute chain on FeeSchedule
FEE_FIELDS: Dict[str, Tuple[str, ...]] = {
    "localRailFee": ("local_rail_fee",),
    "crossBorderFee": ("cross_border_fee",),
    "fxMargins.tier1": ("fx_margins", "tier1"),
    "fxMargins.tier2": ("fx_margins", "tier2"),
    "fxMargins.tier3": ("fx_margins", "tier3"),
    "cardRebate": ("card_rebate",),
}

# Field names sent by older UI builds
LEGACY_FEE_FIELDS: Dict[str, str] = {
    "localRail": "localRailFee",
    "crossBorder": "crossBorderFee",
}

PROVIDERS: Dict[str, str] = {
    "tungsten": "Tungsten",
    "currentProvider": "Current provider",
}


def _assign(target: Any, attrs: Tuple[str, ...], value: Any) -> None:
    for attr in attrs[:-1]:
        target = getattr(target, attr)
    setattr(target, attrs[-1], value)


class ROIEngine:
    """
    Stateful calculator behind the estimator UI.

    The UI mutates the snapshot field by field and calls compute_results()
    after each change. Exchange rates and symbols are injected so rate updates
    need no code change.
    """

    def __init__(
        self,
        exchange_rates: Dict[str, float] | None = None,
        currency_symbols: Dict[str, str] | None = None,
    ):
        self.exchange_rates = dict(exchange_rates or settings.exchange_rates)
        self.currency_symbols = dict(currency_symbols or settings.currency_symbols)
        self.snapshot = default_snapshot()

    def _fees(self, provider: str) -> FeeSchedule:
        if provider == "tungsten":
            return self.snapshot.tungsten
        if provider == "currentProvider":
            return self.snapshot.current_provider
        raise UnknownProvider(f"Unknown provider {provider!r}")

    def update_field(self, path: str, value: Any) -> None:
        """Set a customer field by its UI path; invalid numbers become 0"""
        if path not in CUSTOMER_FIELDS:
            raise UnknownField(f"Unknown customer field {path!r}")

        number = coerce_number(value)
        if path == "totalPaymentCount":
            number = int(number)
        _assign(self.snapshot.customer_info, CUSTOMER_FIELDS[path], number)

    def set_fee(self, provider: str, path: str, value: Any) -> None:
        """Set a fee field for one provider, accepting legacy field names"""
        fees = self._fees(provider)
        path = LEGACY_FEE_FIELDS.get(path, path)
        if path not in FEE_FIELDS:
            raise UnknownField(f"Unknown fee field {path!r}")

        _assign(fees, FEE_FIELDS[path], coerce_number(value))

    def adjust_fx_tier(self, tier_index: int, new_percent: float) -> None:
        """Move one FX tier slider and re-normalize the other two proportionally"""
        if tier_index not in (1, 2, 3):
            raise UnknownField(f"FX tier must be 1, 2 or 3, got {tier_index!r}")

        info = self.snapshot.customer_info
        tiers = redistribute(info.fx_distribution.as_list(), tier_index - 1, new_percent)
        info.fx_distribution = FxDistribution.from_list(tiers)

    def set_local_percent(self, local_percent: float) -> None:
        """Set the local share of rail payments; cross-border takes the rest"""
        dist = self.snapshot.customer_info.payment_type_distribution
        _, cross_border = redistribute([dist.local_percent, dist.cross_border_percent], 0, local_percent)
        dist.local_percent = local_percent
        dist.cross_border_percent = round_money(cross_border)

    def set_rail_percent(self, rail_percent: float) -> None:
        """Set the rail share of payments; cards take the rest"""
        dist = self.snapshot.customer_info.payment_method_distribution
        _, card = redistribute([dist.rail_percent, dist.card_percent], 0, rail_percent)
        dist.rail_percent = rail_percent
        dist.card_percent = round_money(card)

    def set_currency(self, new_currency: str) -> None:
        """
        Switch currency, converting every monetary field in place.

        Converts total payment value and the flat per-transaction fees of both
        providers, rounded to cents. Percentages are currency-free and untouched.
        """
        info = self.snapshot.customer_info
        old_currency = info.currency
        if old_currency == new_currency:
            return

        factor = conversion_factor(old_currency, new_currency, self.exchange_rates)

        info.total_payment_value = round_money(info.total_payment_value * factor)
        for fees in (self.snapshot.tungsten, self.snapshot.current_provider):
            fees.local_rail_fee = round_money(fees.local_rail_fee * factor)
            fees.cross_border_fee = round_money(fees.cross_border_fee * factor)

        info.currency = new_currency
        logging.info(
            "Currency changed",
            extra={"from_currency": old_currency, "to_currency": new_currency, "factor": factor},
        )

    def currency_symbol(self) -> str:
        """Symbol for the snapshot currency, falling back to the default symbol"""
        currency = self.snapshot.customer_info.currency
        try:
            return get_symbol(currency, self.currency_symbols)
        except UnknownCurrency:
            logging.warning(
                "No symbol for currency, using default",
                extra={"currency": currency, "symbol": settings.default_currency_symbol},
            )
            return settings.default_currency_symbol

    def compute_results(self) -> Results:
        """
        Run the full pipeline: breakdown -> FX volumes -> costs x 2 -> savings.

        Pure over the snapshot; repeated calls return identical results.
        """
        info = self.snapshot.customer_info
        breakdown = calculate_payment_breakdown(info)
        fx_volumes = calculate_fx_volumes(info, breakdown)

        current = calculate_provider_costs(
            breakdown, fx_volumes, self.snapshot.current_provider, info.total_payment_value, info.total_payment_count
        )
        tungsten = calculate_provider_costs(
            breakdown, fx_volumes, self.snapshot.tungsten, info.total_payment_value, info.total_payment_count
        )
        savings = aggregate(current, tungsten)

        return Results(
            breakdown=breakdown,
            fx_volumes=fx_volumes,
            average_transaction_size=average_transaction_size(info),
            costs=CostSummary(
                current=current.total,
                tungsten=tungsten.total,
                savings=savings.cost_savings,
                savings_percentage=savings.cost_savings_percentage,
            ),
            incentives=IncentiveSummary(
                current=current.card_rebate,
                tungsten=tungsten.card_rebate,
                differential=savings.incentive_differential,
                increase_percentage=savings.incentive_increase_percentage,
            ),
            total_annual_benefit=savings.total_annual_benefit,
            freed_working_capital=freed_working_capital(breakdown),
            detailed_costs=DetailedCosts(current=current, tungsten=tungsten),
            currency=info.currency,
            currency_symbol=self.currency_symbol(),
            snapshot=self.export_snapshot(),
        )

    def validate(self) -> ValidationResult:
        """Check ranges and sum invariants; problems are returned, never raised"""
        errors: List[str] = []
        info = self.snapshot.customer_info
        tolerance = settings.distribution_tolerance

        if info.total_payment_value < 0:
            errors.append("Total payment value must not be negative")
        if info.total_payment_count < 0:
            errors.append("Total payment count must not be negative")

        percentages = [
            ("Local payment percentage", info.payment_type_distribution.local_percent),
            ("Cross-border payment percentage", info.payment_type_distribution.cross_border_percent),
            ("Rail payment percentage", info.payment_method_distribution.rail_percent),
            ("Card payment percentage", info.payment_method_distribution.card_percent),
            ("FX percentage of cross-border", info.fx_percent_of_cross_border),
            ("FX tier 1 percentage", info.fx_distribution.tier1_percent),
            ("FX tier 2 percentage", info.fx_distribution.tier2_percent),
            ("FX tier 3 percentage", info.fx_distribution.tier3_percent),
        ]
        flat_fees = []
        for provider, label in PROVIDERS.items():
            fees = self._fees(provider)
            percentages += [
                (f"{label} FX margin tier 1", fees.fx_margins.tier1),
                (f"{label} FX margin tier 2", fees.fx_margins.tier2),
                (f"{label} FX margin tier 3", fees.fx_margins.tier3),
                (f"{label} card rebate", fees.card_rebate),
            ]
            flat_fees += [
                (f"{label} local payment fee", fees.local_rail_fee),
                (f"{label} cross-border payment fee", fees.cross_border_fee),
            ]

        for label, value in percentages:
            if value < 0 or value > 100:
                errors.append(f"{label} must be between 0 and 100")
        for label, value in flat_fees:
            if value < 0:
                errors.append(f"{label} must not be negative")

        sums = [
            ("Payment type distribution", info.payment_type_distribution.local_percent
             + info.payment_type_distribution.cross_border_percent),
            ("Payment method distribution", info.payment_method_distribution.rail_percent
             + info.payment_method_distribution.card_percent),
            ("FX distribution", sum(info.fx_distribution.as_list())),
        ]
        for label, total in sums:
            if abs(total - 100) > tolerance:
                errors.append(f"{label} must sum to 100%")

        return ValidationResult(valid=not errors, errors=errors)

    def export_snapshot(self) -> Dict[str, Any]:
        """Detached copy of the live snapshot in document form"""
        return snapshot_to_dict(self.snapshot)

    def import_snapshot(self, data: Dict[str, Any]) -> None:
        """
        Replace the live snapshot wholesale.

        Raises:
            MalformedSnapshot: On missing fields, non-numeric values, or an unknown currency
        """
        snapshot = snapshot_from_dict(data)
        if snapshot.customer_info.currency not in self.exchange_rates:
            raise MalformedSnapshot(f"Snapshot currency {snapshot.customer_info.currency!r} is not supported")
        self.snapshot = snapshot

    def reset(self) -> None:
        self.snapshot = default_snapshot()
