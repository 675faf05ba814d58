"""Savings report - rows, value-driver notes and number formatting for exported reports"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional

from payplus_roi.domain.models import Results

NO_SAVINGS_NOTE = "No savings in this category"
UNAVAILABLE_NOTE = "Value driver information not available"

# (min %, max %, message) bands per category; min inclusive, max exclusive
VALUE_DRIVERS: Dict[str, List[tuple[float, float, str]]] = {
    "localRail": [
        (0, 20, "Savings through Pay+ local payment routing optimization"),
        (20, 50, "Significant savings through Pay+ optimized payment processing"),
        (50, 100, "Exceptional savings from leveraging Pay+ payment processing economics"),
    ],
    "crossBorder": [
        (0, 20, "Initial cross-border payment optimization with competitive rates"),
        (20, 50, "Savings through strong Pay+ cross-border processing efficiency"),
        (50, 100, "Savings through market-leading Pay+ cross-border processing efficiency"),
    ],
    "fx": [
        (0, 20, "Competitive Pay+ FX margins providing baseline savings across tiers"),
        (20, 50, "Excellent Pay+ FX pricing with substantial margin improvements"),
        (50, 100, "Industry-leading FX rates delivering maximum savings leveraging Pay+ global network"),
    ],
    "cards": [
        (0, 20, "Improved card rebate rates through optimized processing"),
        (20, 50, "Significant card processing savings via enhanced rebate agreements"),
        (50, 100, "Exceptional card rebate value with best-in-class rates and processing"),
    ],
}


@dataclass
class ReportRow:
    """One line of the savings table"""

    label: str
    current: float
    alternative: float
    savings: float
    percent_saved: float
    note: Optional[str] = None


@dataclass
class SavingsReport:
    currency: str
    currency_symbol: str
    cost_rows: List[ReportRow]
    cost_total: ReportRow
    incentive_row: ReportRow
    total_annual_benefit: float
    cost_savings_total: float
    incentive_differential: float
    benefit_summary: str


def value_driver_note(category: str, savings_percent: float) -> str:
    """
    Pick the explanatory note for a savings percentage.

    Bands:
    - <= 0%:   no savings
    - 0-20%:   baseline improvement
    - 20-50%:  significant improvement
    - 50%+:    exceptional improvement (also used above 100%)
    """
    bands = VALUE_DRIVERS.get(category)
    if not bands:
        return UNAVAILABLE_NOTE

    if savings_percent <= 0:
        return NO_SAVINGS_NOTE

    for low, high, message in bands:
        if low <= savings_percent < high:
            return message

    return bands[-1][2]


def format_currency(value: float | None, decimals: int = 0, symbol: str = "$", use_commas: bool = False) -> str:
    """
    Format an amount for display.

    Abbreviated (default): $1.23B, $4.56M, $7.89K, or the plain amount below 1,000.
    With use_commas: $1,234,567 at the requested decimals.
    """
    if value is None or math.isnan(value):
        return f"{symbol}0"

    amount = abs(value)
    sign = "-" if value < 0 else ""

    if use_commas:
        return f"{sign}{symbol}{amount:,.{decimals}f}"

    if amount >= 1_000_000_000:
        return f"{sign}{symbol}{amount / 1_000_000_000:.2f}B"
    elif amount >= 1_000_000:
        return f"{sign}{symbol}{amount / 1_000_000:.2f}M"
    elif amount >= 1_000:
        return f"{sign}{symbol}{amount / 1_000:.2f}K"
    else:
        return f"{sign}{symbol}{amount:.{decimals}f}"


def format_percent(value: float | None) -> str:
    if value is None or math.isnan(value):
        return "0.00%"
    return f"{value:.2f}%"


def _cost_row(label: str, category: str, current: float, alternative: float, savings: float) -> ReportRow:
    percent_saved = savings / current * 100 if current > 0 else 0.0
    return ReportRow(
        label=label,
        current=current,
        alternative=alternative,
        savings=savings,
        percent_saved=percent_saved,
        note=value_driver_note(category, percent_saved),
    )


def build_report(results: Results) -> SavingsReport:
    """
    Assemble the report tables from a calculation result.

    Cost rows compare rails and FX; card rebates get their own incentive row
    whose note uses the magnitude of the rebate change.
    """
    current = results.detailed_costs.current
    tungsten = results.detailed_costs.tungsten
    savings = results.costs.savings
    symbol = results.currency_symbol

    cost_rows = [
        _cost_row("Local rail", "localRail", current.local_rail, tungsten.local_rail, savings.local_rail),
        _cost_row(
            "Cross-border", "crossBorder", current.cross_border_rail, tungsten.cross_border_rail, savings.cross_border_rail
        ),
        _cost_row("FX", "fx", current.fx.total, tungsten.fx.total, savings.fx),
    ]

    cost_total = ReportRow(
        label="TOTAL COSTS",
        current=results.costs.current,
        alternative=results.costs.tungsten,
        savings=savings.total,
        percent_saved=results.costs.savings_percentage,
    )

    incentives = results.incentives
    incentive_row = ReportRow(
        label="Card rebates",
        current=incentives.current,
        alternative=incentives.tungsten,
        savings=incentives.differential,
        percent_saved=incentives.increase_percentage,
        note=value_driver_note("cards", abs(incentives.increase_percentage)),
    )

    benefit_summary = (
        f"Cost savings: {format_currency(savings.total, 0, symbol)} + "
        f"Incentive differential: {format_currency(incentives.differential, 0, symbol)}"
    )

    return SavingsReport(
        currency=results.currency,
        currency_symbol=symbol,
        cost_rows=cost_rows,
        cost_total=cost_total,
        incentive_row=incentive_row,
        total_annual_benefit=results.total_annual_benefit,
        cost_savings_total=savings.total,
        incentive_differential=incentives.differential,
        benefit_summary=benefit_summary,
    )
