"""Unit tests for payment breakdown and FX volume derivation"""

import pytest
from payplus_roi.domain.breakdown import (
    average_transaction_size,
    calculate_fx_volumes,
    calculate_payment_breakdown,
)
from payplus_roi.domain.snapshot import default_snapshot


@pytest.fixture
def customer():
    return default_snapshot().customer_info


def test_method_split_before_type_split(customer):
    """Test rails/cards split of $50M and 1.1M payments at 90% rails"""
    breakdown = calculate_payment_breakdown(customer)

    assert breakdown.method.rail.value == pytest.approx(45_000_000)
    assert breakdown.method.card.value == pytest.approx(5_000_000)
    assert breakdown.method.rail.count == 990_000
    assert breakdown.method.card.count == 110_000
    assert breakdown.method.rail.percent == 90
    assert breakdown.method.card.percent == 10
    assert breakdown.method.rail.value + breakdown.method.card.value == 50_000_000


def test_type_split_applies_to_rails_only(customer):
    """Test local/cross-border rail figures exclude cards"""
    breakdown = calculate_payment_breakdown(customer)

    assert breakdown.rails.local.value == pytest.approx(27_000_000)
    assert breakdown.rails.cross_border.value == pytest.approx(18_000_000)
    assert breakdown.rails.local.count == 594_000  # 990,000 * 60%
    assert breakdown.rails.cross_border.count == 396_000


def test_display_type_split_includes_cards(customer):
    """Test display figures add a proportional share of card payments"""
    breakdown = calculate_payment_breakdown(customer)

    # 27M rails + 60% of 5M cards
    assert breakdown.type.local.value == pytest.approx(30_000_000)
    assert breakdown.type.cross_border.value == pytest.approx(20_000_000)
    assert breakdown.type.local.count == 660_000
    assert breakdown.type.cross_border.count == 440_000
    assert breakdown.type.local.percent == 60
    assert breakdown.type.cross_border.percent == 40


def test_value_conservation(customer):
    """Test no value leaks between the method and rail type levels"""
    customer.total_payment_value = 12_345_678.91
    customer.payment_method_distribution.rail_percent = 73.3
    customer.payment_method_distribution.card_percent = 26.7
    customer.payment_type_distribution.local_percent = 41.7
    customer.payment_type_distribution.cross_border_percent = 58.3

    breakdown = calculate_payment_breakdown(customer)

    assert breakdown.method.rail.value + breakdown.method.card.value == pytest.approx(customer.total_payment_value)
    assert breakdown.rails.local.value + breakdown.rails.cross_border.value == pytest.approx(
        breakdown.method.rail.value
    )


@pytest.mark.parametrize("count", [0, 1, 3, 7, 999, 1_100_001])
def test_count_conservation(customer, count):
    """Test complements are remainders, so counts always add back up exactly"""
    customer.total_payment_count = count
    customer.payment_method_distribution.rail_percent = 33.3
    customer.payment_type_distribution.local_percent = 66.7

    breakdown = calculate_payment_breakdown(customer)

    assert breakdown.method.rail.count + breakdown.method.card.count == count
    assert breakdown.rails.local.count + breakdown.rails.cross_border.count == breakdown.method.rail.count
    assert breakdown.type.local.count + breakdown.type.cross_border.count == count


def test_counts_round_half_up(customer):
    """Test .5 counts round up rather than to even"""
    customer.total_payment_count = 5
    customer.payment_method_distribution.rail_percent = 50  # 2.5 rail payments

    breakdown = calculate_payment_breakdown(customer)

    assert breakdown.method.rail.count == 3
    assert breakdown.method.card.count == 2


def test_fx_volumes_from_cross_border_rails(customer):
    """Test FX volume is 50% of the 18M cross-border rail value, split 40/35/25"""
    breakdown = calculate_payment_breakdown(customer)
    fx = calculate_fx_volumes(customer, breakdown)

    assert fx.total == pytest.approx(9_000_000)
    assert fx.tier1 == pytest.approx(3_600_000)
    assert fx.tier2 == pytest.approx(3_150_000)
    assert fx.tier3 == pytest.approx(2_250_000)


def test_fx_volumes_zero_share(customer):
    """Test 0% FX share means no FX volume"""
    customer.fx_percent_of_cross_border = 0
    fx = calculate_fx_volumes(customer, calculate_payment_breakdown(customer))

    assert fx.total == 0
    assert fx.tier1 == fx.tier2 == fx.tier3 == 0


def test_average_transaction_size(customer):
    assert average_transaction_size(customer) == pytest.approx(50_000_000 / 1_100_000)

    customer.total_payment_count = 0
    assert average_transaction_size(customer) == 0
