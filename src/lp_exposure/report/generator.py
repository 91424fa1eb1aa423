from __future__ import annotations

from dataclasses import dataclass, field

from ..processors.exposure_aggregator import ExposureResult
from ..processors.reconciliation import ReconciliationResult


def format_coin(amount: int, denom: str) -> str:
    """Render a coin in the chain's canonical ``<amount><denom>`` form."""
    return f"{amount}{denom}"


@dataclass(frozen=True)
class ExposureRow:
    """One output row per account."""

    address: str
    coins: dict[str, str]  # symbol -> canonical coin string
    holder: bool
    liquidity_provider: bool
    farmer: bool


@dataclass(frozen=True)
class ExposureSummary:
    accounts: int
    holders: int
    liquidity_providers: int
    farmers: int
    totals: dict[str, int]  # symbol -> summed amount
    supply: dict[str, int]  # symbol -> chain supply
    residuals: dict[str, int]  # symbol -> supply - total
    fee_withheld: dict[str, int]  # symbol -> withdraw fee deducted from conversions
    conversions: int
    balanced: bool


@dataclass
class ExposureReport:
    """Exposure table plus summary, ready for publishing."""

    symbols: list[str]
    rows: list[ExposureRow] = field(default_factory=list)
    summary: ExposureSummary | None = None


def generate_report(
    target_denoms: dict[str, str],
    exposures: ExposureResult,
    reconciliation: ReconciliationResult,
) -> ExposureReport:
    """Build the per-account table and the summary counts.

    Rows are sorted by address so repeated runs emit identical files. Each
    role flag is counted independently; an account that both provides
    liquidity and farms shows up in both counts.
    """
    symbols = list(target_denoms)
    rows = [
        ExposureRow(
            address=address,
            coins={
                symbol: format_coin(account.amount_of(denom), denom)
                for symbol, denom in target_denoms.items()
            },
            holder=account.holder,
            liquidity_provider=account.liquidity_provider,
            farmer=account.farmer,
        )
        for address, account in sorted(exposures.accounts.items())
    ]

    accounts = exposures.accounts.values()
    summary = ExposureSummary(
        accounts=len(rows),
        holders=sum(1 for a in accounts if a.holder),
        liquidity_providers=sum(1 for a in accounts if a.liquidity_provider),
        farmers=sum(1 for a in accounts if a.farmer),
        totals={
            symbol: reconciliation.assets[denom].accounted
            for symbol, denom in target_denoms.items()
        },
        supply={
            symbol: reconciliation.assets[denom].supply
            for symbol, denom in target_denoms.items()
        },
        residuals={
            symbol: reconciliation.assets[denom].residual
            for symbol, denom in target_denoms.items()
        },
        fee_withheld={
            symbol: reconciliation.assets[denom].fee_withheld
            for symbol, denom in target_denoms.items()
        },
        conversions=reconciliation.conversions,
        balanced=reconciliation.balanced,
    )
    return ExposureReport(symbols=symbols, rows=rows, summary=summary)
