from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from .exposure_aggregator import AccountExposure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetReconciliation:
    denom: str
    supply: int
    accounted: int
    residual: int
    within_bound: bool
    fee_withheld: int = 0


@dataclass(frozen=True)
class ReconciliationResult:
    """Residual between chain supply and the summed per-account totals."""

    assets: dict[str, AssetReconciliation]  # denom -> reconciliation
    conversions: int

    @property
    def balanced(self) -> bool:
        return all(asset.within_bound for asset in self.assets.values())


def reconcile(
    exposures: Mapping[str, AccountExposure],
    total_supply_of: Callable[[str], int],
    target_denoms: Mapping[str, str],
    conversions: int = 0,
    fee_withheld: Mapping[str, int] | None = None,
) -> ReconciliationResult:
    """Compare per-account totals against each target asset's total supply.

    Every share conversion truncates at most one unit per leg, so once the
    withdraw fee deducted from conversions is set aside, a residual within
    ``[0, conversions]`` is rounding. Anything else is logged as a warning
    and reported through ``within_bound``.
    """
    fee_withheld = fee_withheld or {}
    assets: dict[str, AssetReconciliation] = {}
    for symbol, denom in target_denoms.items():
        accounted = sum(account.amount_of(denom) for account in exposures.values())
        supply = total_supply_of(denom)
        residual = supply - accounted
        fee = fee_withheld.get(denom, 0)
        within_bound = 0 <= residual - fee <= conversions
        assets[denom] = AssetReconciliation(
            denom=denom,
            supply=supply,
            accounted=accounted,
            residual=residual,
            within_bound=within_bound,
            fee_withheld=fee,
        )
        if within_bound:
            logger.info(
                "%s residual %d within rounding bound (fee withheld %d)",
                symbol,
                residual,
                fee,
            )
        else:
            logger.warning(
                "%s residual %d exceeds rounding bound of %d conversions (supply=%d, accounted=%d, fee withheld=%d)",
                symbol,
                residual,
                conversions,
                supply,
                accounted,
                fee,
            )
    return ReconciliationResult(assets=assets, conversions=conversions)
