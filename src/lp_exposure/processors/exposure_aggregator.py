from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from ..amm import withdraw
from ..domain import Snapshot, StakeRecord
from ..logger import TRACE
from .pool_index import PoolIndex

logger = logging.getLogger(__name__)


class ContributionSource(str, Enum):
    BALANCE = "balance"
    STAKING = "staking"
    QUEUED_STAKING = "queued_staking"


@dataclass(frozen=True)
class ExposureConfig:
    """Which assets to track and how pool shares are valued."""

    target_denoms: dict[str, str]  # symbol -> denom
    tracked_share_denoms: frozenset[str]
    fee_rate: Decimal = Decimal(0)


@dataclass
class AccountExposure:
    """Running totals and role flags of one account."""

    totals: dict[str, int]  # denom -> amount
    holder: bool = False
    liquidity_provider: bool = False
    farmer: bool = False

    @classmethod
    def empty(cls, target_denoms: Iterable[str]) -> AccountExposure:
        return cls(totals={denom: 0 for denom in target_denoms})

    def amount_of(self, denom: str) -> int:
        return self.totals.get(denom, 0)

    def merge(self, other: AccountExposure) -> None:
        """Fold another partial exposure of the same account into this one."""
        for denom, amount in other.totals.items():
            self.totals[denom] = self.totals.get(denom, 0) + amount
        self.holder |= other.holder
        self.liquidity_provider |= other.liquidity_provider
        self.farmer |= other.farmer


@dataclass
class ExposureResult:
    accounts: dict[str, AccountExposure] = field(default_factory=dict)
    conversions: int = 0  # withdraw calls made
    fee_withheld: dict[str, int] = field(default_factory=dict)  # denom -> amount
    skipped_reserve_records: int = 0


class ExposureAggregator:
    """Fold balances and stakes of a snapshot into per-account exposure."""

    def __init__(
        self,
        index: PoolIndex,
        reserve_accounts: frozenset[str],
        config: ExposureConfig,
    ):
        self.index = index
        self.reserve_accounts = reserve_accounts
        self.config = config
        self._tracked_targets = set(config.target_denoms.values())
        self.result = ExposureResult()

    def _account(self, address: str) -> AccountExposure:
        account = self.result.accounts.get(address)
        if account is None:
            account = AccountExposure.empty(self.config.target_denoms.values())
            self.result.accounts[address] = account
        return account

    def _convert_shares(self, share_denom: str, amount: int) -> dict[str, int]:
        """Convert pool shares into the target assets they can be redeemed for."""
        _, pair, model = self.index.underlying(share_denom)
        net = withdraw(model, amount, self.config.fee_rate)
        book = withdraw(model, amount) if self.config.fee_rate else net
        self.result.conversions += 1

        converted: dict[str, int] = {}
        fee_withheld = self.result.fee_withheld
        for denom, value, book_value in zip(pair.denoms, net, book):
            if denom in self._tracked_targets:
                converted[denom] = converted.get(denom, 0) + value
                fee_withheld[denom] = fee_withheld.get(denom, 0) + book_value - value
        return converted

    def add(
        self, address: str, denom: str, amount: int, source: ContributionSource
    ) -> None:
        """Apply a single balance or stake contribution."""
        if address in self.reserve_accounts:
            self.result.skipped_reserve_records += 1
            return

        is_stake = source is not ContributionSource.BALANCE

        if denom in self._tracked_targets:
            account = self._account(address)
            account.totals[denom] += amount
            account.holder = True
            if is_stake:
                account.farmer = True
            return

        if denom in self.config.tracked_share_denoms:
            converted = self._convert_shares(denom, amount)
            account = self._account(address)
            for target, value in converted.items():
                account.totals[target] += value
            if is_stake:
                account.farmer = True
            else:
                account.liquidity_provider = True
            return

        logger.log(TRACE, "Skipping untracked denom %s of %s", denom, address)

    def add_balances(self, balances: Mapping[str, Mapping[str, int]]) -> None:
        for address, coins in balances.items():
            for denom, amount in coins.items():
                self.add(address, denom, amount, ContributionSource.BALANCE)

    def add_stakes(
        self, records: Iterable[StakeRecord], source: ContributionSource
    ) -> None:
        for record in records:
            self.add(record.farmer, record.denom, record.amount, source)


def aggregate_exposures(
    snapshot: Snapshot,
    index: PoolIndex,
    reserve_accounts: frozenset[str],
    config: ExposureConfig,
) -> ExposureResult:
    """Compute per-account exposure to the configured target assets.

    Balances are processed first, then active stakes, then queued stakes.
    Rows are created on first contact in any pass and role flags only ever
    turn on, so the order does not affect the outcome.
    """
    aggregator = ExposureAggregator(index, reserve_accounts, config)

    aggregator.add_balances(snapshot.balances)
    logger.debug("Balances processed: %d accounts", len(aggregator.result.accounts))

    aggregator.add_stakes(snapshot.staking_records, ContributionSource.STAKING)
    aggregator.add_stakes(
        snapshot.queued_staking_records, ContributionSource.QUEUED_STAKING
    )

    result = aggregator.result
    logger.info(
        "Aggregated exposure for %d accounts (%d share conversions, %d reserve records skipped)",
        len(result.accounts),
        result.conversions,
        result.skipped_reserve_records,
    )
    return result
