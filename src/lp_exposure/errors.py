"""Exceptions raised while reconstructing account exposure."""

from __future__ import annotations


class ExposureError(Exception):
    """Base class for all lp-exposure failures."""


class InvalidPoolState(ExposureError):
    """Raised when reserves and share supply cannot describe a real pool."""

    def __init__(
        self, message: str, quote_reserve: int, base_reserve: int, share_supply: int
    ):
        super().__init__(message)
        self.quote_reserve = quote_reserve
        self.base_reserve = base_reserve
        self.share_supply = share_supply


class DivisionByZero(ExposureError, ZeroDivisionError):
    """Raised when withdrawing from a pool that has no shares issued."""


class UnsupportedPoolType(ExposureError):
    """Raised when a ranged pool is configured as a tracked pool."""


class SnapshotError(ExposureError):
    """Raised when the snapshot is missing, malformed or inconsistent."""


class MissingStakingReserve(ExposureError):
    """Raised when staked denominations have no staking reserve address configured."""

    def __init__(self, denoms: list[str]):
        super().__init__(
            "No staking reserve address configured for staked denoms "
            f"{', '.join(denoms)}; set staking_reserve_addresses so the shares "
            "held there are not counted as an account"
        )
        self.denoms = denoms
