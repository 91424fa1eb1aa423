"""Tests for the constant-product reserve math."""

from __future__ import annotations

from decimal import Decimal

import pytest

from lp_exposure.amm import BasicPoolModel, new_pool, withdraw
from lp_exposure.errors import DivisionByZero, InvalidPoolState


@pytest.fixture
def pool() -> BasicPoolModel:
    return new_pool(1_000_000, 500_000, 1_000)


def test_withdraw_book_value(pool):
    """Zero fee should return a proportional share of both reserves."""
    assert withdraw(pool, 100, Decimal(0)) == (100_000, 50_000)


def test_withdraw_default_fee_is_zero(pool):
    assert withdraw(pool, 100) == (100_000, 50_000)


def test_withdraw_deducts_fee(pool):
    """A 0.3% fee should be deducted before truncating."""
    assert withdraw(pool, 100, Decimal("0.003")) == (99_700, 49_850)


def test_withdraw_all_shares_at_zero_fee_returns_reserves():
    pool = new_pool(123_457, 987_651, 7_919)

    assert withdraw(pool, 7_919, Decimal(0)) == (123_457, 987_651)


def test_withdraw_truncates_after_full_numerator():
    """Truncation must happen once, not per multiplication step."""
    pool = new_pool(10, 10, 3)

    # 10 * 2 / 3 = 6.67 -> 6; truncating 2/3 first would give 0
    assert withdraw(pool, 2) == (6, 6)


def test_withdraw_fee_keeps_precision_for_large_amounts():
    """Fee math must stay exact for amounts beyond float precision."""
    reserve = 10**30 + 7
    pool = new_pool(reserve, reserve, 10**18)

    quote, _ = withdraw(pool, 10**18, Decimal("0.000000000000000001"))

    expected = reserve * (10**18 - 1) // 10**18
    assert quote == expected


def test_withdraw_full_fee_yields_nothing(pool):
    assert withdraw(pool, 1_000, Decimal("1")) == (0, 0)


@pytest.mark.parametrize("fee_rate", ["0.003", 0.003])
def test_withdraw_coerces_non_decimal_fee_rate(pool, fee_rate):
    """String and float rates should match the equivalent Decimal rate."""
    assert withdraw(pool, 100, fee_rate) == (99_700, 49_850)


def test_withdraw_conserves_reserves_across_partition():
    """Splitting all shares across holders never pays out more than reserves."""
    pool = new_pool(1_000_003, 499_999, 997)
    parts = [1, 10, 100, 3, 883]
    assert sum(parts) == 997

    legs = [withdraw(pool, part, Decimal("0.001")) for part in parts]
    total_quote = sum(q for q, _ in legs)
    total_base = sum(b for _, b in legs)

    assert total_quote <= pool.quote_reserve
    assert total_base <= pool.base_reserve


def test_withdraw_shortfall_bounded_by_call_count_at_zero_fee():
    pool = new_pool(1_000_003, 499_999, 997)
    parts = [1, 10, 100, 3, 883]

    legs = [withdraw(pool, part) for part in parts]

    assert 0 <= pool.quote_reserve - sum(q for q, _ in legs) <= len(parts)
    assert 0 <= pool.base_reserve - sum(b for _, b in legs) <= len(parts)


def test_withdraw_is_monotonic_in_share_amount():
    pool = new_pool(300, 900, 7)
    results = [withdraw(pool, amount, Decimal("0.003")) for amount in range(8)]

    for previous, current in zip(results, results[1:]):
        assert current[0] >= previous[0]
        assert current[1] >= previous[1]


def test_withdraw_more_than_supply_is_not_rejected(pool):
    assert withdraw(pool, 2_000) == (2_000_000, 1_000_000)


def test_withdraw_from_zero_supply_pool_raises():
    empty = new_pool(0, 0, 0)

    with pytest.raises(DivisionByZero):
        withdraw(empty, 1)


def test_division_by_zero_is_a_zero_division_error():
    with pytest.raises(ZeroDivisionError):
        withdraw(new_pool(0, 0, 0), 0)


def test_withdraw_from_pool_without_reserves_yields_zero():
    drained = new_pool(0, 0, 1_000)

    assert withdraw(drained, 500) == (0, 0)


@pytest.mark.parametrize("fee_rate", [Decimal("-0.1"), Decimal("1.5"), Decimal("NaN")])
def test_withdraw_rejects_fee_rate_outside_unit_interval(pool, fee_rate):
    with pytest.raises(ValueError, match="fee rate"):
        withdraw(pool, 1, fee_rate)


def test_withdraw_rejects_negative_share_amount(pool):
    with pytest.raises(ValueError, match="non-negative"):
        withdraw(pool, -1)


@pytest.mark.parametrize(
    "quote, base, supply",
    [
        (1, 0, 0),
        (0, 1, 0),
        (-1, 0, 1),
        (0, 0, -5),
    ],
)
def test_new_pool_rejects_inconsistent_state(quote, base, supply):
    with pytest.raises(InvalidPoolState) as exc_info:
        new_pool(quote, base, supply)

    assert exc_info.value.share_supply == supply


def test_new_pool_accepts_empty_pool():
    empty = new_pool(0, 0, 0)

    assert empty.is_empty
    assert not new_pool(1, 1, 1).is_empty
