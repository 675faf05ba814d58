"""Snapshot defaults and the persisted camelCase document format"""

import math
from typing import Any, Dict

from payplus_roi.domain.exceptions import MalformedSnapshot
from payplus_roi.domain.models import (
    CustomerInfo,
    FeeSchedule,
    FxDistribution,
    FxMargins,
    PaymentMethodDistribution,
    PaymentTypeDistribution,
    Snapshot,
)


def default_snapshot() -> Snapshot:
    """Defaults shown to a new user: a mid-size USD payer"""
    return Snapshot(
        customer_info=CustomerInfo(
            currency="USD",
            total_payment_value=50_000_000,
            total_payment_count=1_100_000,
            payment_type_distribution=PaymentTypeDistribution(local_percent=60, cross_border_percent=40),
            payment_method_distribution=PaymentMethodDistribution(rail_percent=90, card_percent=10),
            fx_percent_of_cross_border=50,
            fx_distribution=FxDistribution(tier1_percent=40, tier2_percent=35, tier3_percent=25),
        ),
        tungsten=FeeSchedule(
            local_rail_fee=0.50,
            cross_border_fee=2.00,
            fx_margins=FxMargins(tier1=0.50, tier2=0.35, tier3=0.20),
            card_rebate=1.50,
        ),
        current_provider=FeeSchedule(
            local_rail_fee=1.00,
            cross_border_fee=3.50,
            fx_margins=FxMargins(tier1=0.75, tier2=0.60, tier3=0.45),
            card_rebate=1.00,
        ),
    )


def _fees_to_dict(fees: FeeSchedule) -> Dict[str, Any]:
    return {
        "localRailFee": fees.local_rail_fee,
        "crossBorderFee": fees.cross_border_fee,
        "fxMargins": {
            "tier1": fees.fx_margins.tier1,
            "tier2": fees.fx_margins.tier2,
            "tier3": fees.fx_margins.tier3,
        },
        "cardRebate": fees.card_rebate,
    }


def snapshot_to_dict(snapshot: Snapshot) -> Dict[str, Any]:
    """Serialize to the JSON document shape used by saved calculations"""
    info = snapshot.customer_info
    return {
        "customerInfo": {
            "currency": info.currency,
            "totalPaymentValue": info.total_payment_value,
            "totalPaymentCount": info.total_payment_count,
            "paymentTypeDistribution": {
                "localPercent": info.payment_type_distribution.local_percent,
                "crossBorderPercent": info.payment_type_distribution.cross_border_percent,
            },
            "paymentMethodDistribution": {
                "railPercent": info.payment_method_distribution.rail_percent,
                "cardPercent": info.payment_method_distribution.card_percent,
            },
            "fxPercentOfCrossBorder": info.fx_percent_of_cross_border,
            "fxVolume": {
                "distribution": {
                    "tier1Percent": info.fx_distribution.tier1_percent,
                    "tier2Percent": info.fx_distribution.tier2_percent,
                    "tier3Percent": info.fx_distribution.tier3_percent,
                }
            },
        },
        "fees": {
            "tungsten": _fees_to_dict(snapshot.tungsten),
            "currentProvider": _fees_to_dict(snapshot.current_provider),
        },
    }


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"expected a finite number, got {value!r}")
    return number


def _fees_from_dict(data: Dict[str, Any]) -> FeeSchedule:
    margins = data["fxMargins"]
    return FeeSchedule(
        local_rail_fee=_number(data["localRailFee"]),
        cross_border_fee=_number(data["crossBorderFee"]),
        fx_margins=FxMargins(
            tier1=_number(margins["tier1"]),
            tier2=_number(margins["tier2"]),
            tier3=_number(margins["tier3"]),
        ),
        card_rebate=_number(data["cardRebate"]),
    )


def snapshot_from_dict(data: Dict[str, Any]) -> Snapshot:
    """
    Parse a snapshot document.

    Builds fresh objects, so the result never aliases `data`.

    Raises:
        MalformedSnapshot: On missing fields or non-numeric values
    """
    try:
        info = data["customerInfo"]
        type_dist = info["paymentTypeDistribution"]
        method_dist = info["paymentMethodDistribution"]
        fx_dist = info["fxVolume"]["distribution"]

        currency = info["currency"]
        if not isinstance(currency, str):
            raise TypeError(f"currency must be a string, got {currency!r}")

        return Snapshot(
            customer_info=CustomerInfo(
                currency=currency,
                total_payment_value=_number(info["totalPaymentValue"]),
                total_payment_count=int(_number(info["totalPaymentCount"])),
                payment_type_distribution=PaymentTypeDistribution(
                    local_percent=_number(type_dist["localPercent"]),
                    cross_border_percent=_number(type_dist["crossBorderPercent"]),
                ),
                payment_method_distribution=PaymentMethodDistribution(
                    rail_percent=_number(method_dist["railPercent"]),
                    card_percent=_number(method_dist["cardPercent"]),
                ),
                fx_percent_of_cross_border=_number(info["fxPercentOfCrossBorder"]),
                fx_distribution=FxDistribution(
                    tier1_percent=_number(fx_dist["tier1Percent"]),
                    tier2_percent=_number(fx_dist["tier2Percent"]),
                    tier3_percent=_number(fx_dist["tier3Percent"]),
                ),
            ),
            tungsten=_fees_from_dict(data["fees"]["tungsten"]),
            current_provider=_fees_from_dict(data["fees"]["currentProvider"]),
        )

    except KeyError as e:
        raise MalformedSnapshot(f"Snapshot is missing required field {e}") from e
    except (ValueError, TypeError, OverflowError) as e:
        raise MalformedSnapshot(f"Snapshot holds an invalid value: {e}") from e
