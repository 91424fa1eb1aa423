from __future__ import annotations

from collections.abc import Iterable, Mapping

from ..domain import Pool
from ..errors import MissingStakingReserve


def staking_reserve_addresses_of(
    staked_denoms: Iterable[str], configured: Mapping[str, str]
) -> list[str]:
    """Return the staking reserve address of each staked denomination.

    Raises:
        MissingStakingReserve: If any denomination has no configured address.
    """
    denoms = sorted(set(staked_denoms))
    missing = [denom for denom in denoms if denom not in configured]
    if missing:
        raise MissingStakingReserve(missing)
    return [configured[denom] for denom in denoms]


def build_reserve_account_set(
    pools: Iterable[Pool],
    dust_collector_address: str,
    staking_reserve_addresses: Iterable[str],
    extra_addresses: Iterable[str] = (),
) -> frozenset[str]:
    """Collect the protocol-owned addresses excluded from per-account totals.

    Pool reserve accounts, the dust collector and the farming staking
    reserves custody assets on behalf of users; counting them as accounts
    would attribute the same assets twice.
    """
    addresses = {pool.reserve_address for pool in pools}
    if dust_collector_address:
        addresses.add(dust_collector_address)
    addresses.update(staking_reserve_addresses)
    addresses.update(extra_addresses)
    return frozenset(addresses)
