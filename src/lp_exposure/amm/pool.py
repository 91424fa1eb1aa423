"""Constant-product pool math used to convert pool shares into reserves."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..errors import DivisionByZero, InvalidPoolState

ZERO_DEC = Decimal(0)
ONE_DEC = Decimal(1)


@dataclass(frozen=True)
class BasicPoolModel:
    """Reserves and share supply of a basic pool at snapshot time."""

    quote_reserve: int
    base_reserve: int
    share_supply: int

    @property
    def is_empty(self) -> bool:
        return self.share_supply == 0


def new_pool(quote_reserve: int, base_reserve: int, share_supply: int) -> BasicPoolModel:
    """Build a pool model, rejecting states no real pool can be in.

    A pool with outstanding shares but no reserves is accepted: its reserve
    account may simply be absent from the snapshot, and every withdrawal
    from it yields zero.

    Raises:
        InvalidPoolState: If any amount is negative, or if the share supply
            is zero while either reserve is not.
    """
    if quote_reserve < 0 or base_reserve < 0 or share_supply < 0:
        raise InvalidPoolState(
            "pool amounts must be non-negative",
            quote_reserve,
            base_reserve,
            share_supply,
        )
    if share_supply == 0 and (quote_reserve > 0 or base_reserve > 0):
        raise InvalidPoolState(
            f"zero share supply backing reserves ({quote_reserve}, {base_reserve})",
            quote_reserve,
            base_reserve,
            share_supply,
        )
    return BasicPoolModel(quote_reserve, base_reserve, share_supply)


def _fee_ratio(fee_rate: Decimal) -> tuple[int, int]:
    """Return ``1 - fee_rate`` as an exact (numerator, denominator) pair."""
    if not isinstance(fee_rate, Decimal):
        fee_rate = Decimal(str(fee_rate))
    if not fee_rate.is_finite() or fee_rate < ZERO_DEC or fee_rate > ONE_DEC:
        raise ValueError(f"fee rate must be within [0, 1], got {fee_rate}")
    num, den = fee_rate.as_integer_ratio()
    return den - num, den


def withdraw(
    pool: BasicPoolModel, share_amount: int, fee_rate: Decimal = ZERO_DEC
) -> tuple[int, int]:
    """Return the (quote, base) amounts redeemable for ``share_amount`` shares.

    Each leg is ``floor(reserve * share_amount * (1 - fee_rate) / share_supply)``
    computed on exact integers, so truncation happens once per leg after the
    whole numerator is formed. A zero ``fee_rate`` gives book value; the
    pool's configured withdraw fee simulates an on-chain withdrawal.

    ``share_amount`` above the pool's supply is not rejected; the result is
    simply proportionally larger than the reserves.

    Raises:
        DivisionByZero: If the pool has no shares issued.
        ValueError: If ``share_amount`` is negative or ``fee_rate`` is
            outside [0, 1].
    """
    if pool.is_empty:
        raise DivisionByZero("cannot withdraw from a pool with zero share supply")
    if share_amount < 0:
        raise ValueError(f"share amount must be non-negative, got {share_amount}")

    keep_num, keep_den = _fee_ratio(fee_rate)
    denominator = pool.share_supply * keep_den
    quote_amount = pool.quote_reserve * share_amount * keep_num // denominator
    base_amount = pool.base_reserve * share_amount * keep_num // denominator
    return quote_amount, base_amount
