"""Invariant checkers for pool state.

Each function returns True when the invariant holds, and `check_all()` returns
the list of violated invariant IDs (empty = all pass).
"""

from __future__ import annotations

from typing import Callable

from ..kernels.python.u64 import U64_MAX
from ..state.pools import PoolState


def inv_reserves_in_range(s: PoolState) -> bool:
    return 0 <= s.reserve_a <= U64_MAX and 0 <= s.reserve_b <= U64_MAX


def inv_supply_in_range(s: PoolState) -> bool:
    return 0 <= s.pool_share_supply <= U64_MAX


def inv_reserves_backed_when_supplied(s: PoolState) -> bool:
    if s.pool_share_supply == 0:
        return True
    return s.reserve_a > 0 and s.reserve_b > 0


def inv_empty_when_unsupplied(s: PoolState) -> bool:
    if s.pool_share_supply > 0:
        return True
    return s.reserve_a == 0 and s.reserve_b == 0


INVARIANTS: dict[str, Callable[[PoolState], bool]] = {
    "reserves_in_range": inv_reserves_in_range,
    "supply_in_range": inv_supply_in_range,
    "reserves_backed_when_supplied": inv_reserves_backed_when_supplied,
    "empty_when_unsupplied": inv_empty_when_unsupplied,
}


def check_all(s: PoolState) -> list[str]:
    return [name for name, fn in INVARIANTS.items() if not fn(s)]


def check_transition(pre: PoolState, post: PoolState, *, swap: bool) -> list[str]:
    """
    Check the transition-level invariants between two states.

    Swaps must not decrease k. Deposits and withdrawals must keep the pair
    and pool identity unchanged.
    """
    violations = check_all(post)
    if (pre.pool_id, pre.asset_a, pre.asset_b) != (post.pool_id, post.asset_a, post.asset_b):
        violations.append("pool_identity_preserved")
    if swap:
        if post.pool_share_supply != pre.pool_share_supply:
            violations.append("swap_preserves_supply")
        if post.get_constant_product() < pre.get_constant_product():
            violations.append("k_non_decreasing")
    return violations
