"""
CPMM swap kernel.

Semantics:
- Fee is charged once on the gross input using floor rounding:
  `fee_total = floor(amount_in * fee_bps / 10_000)`.
- Pricing uses `net_in = amount_in - fee_total`.
- A share of the fee (`sink_share_bps`, default one half) leaves the pool for
  the fee sink; the rest stays in the input reserve.

Integer-only. Python ints give an exact wide intermediate for every product,
and every result is checked back into the u64 domain.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import EmptyPoolError, PoolInvariantError
from .u64 import (
    BPS_DENOM,
    checked_add,
    checked_sub,
    mul_div_floor,
    require_bps,
    require_u64,
)


DEFAULT_SINK_SHARE_BPS = 5_000


@dataclass(frozen=True)
class SwapExactInResult:
    amount_out: int
    fee_total: int
    sink_fee: int
    pool_fee: int
    net_in: int
    gross_in: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


def compute_fee_total(*, gross_in: int, fee_bps: int) -> int:
    """
    Compute `fee_total = floor(gross_in * fee_bps / 10_000)`.
    """
    require_u64("gross_in", gross_in)
    require_bps("fee_bps", fee_bps)
    return mul_div_floor(gross_in, fee_bps, BPS_DENOM)


def compute_sink_fee(*, fee_total: int, sink_share_bps: int) -> int:
    """
    Compute `sink_fee = floor(fee_total * sink_share_bps / 10_000)`.
    """
    require_u64("fee_total", fee_total)
    require_bps("sink_share_bps", sink_share_bps)
    return mul_div_floor(fee_total, sink_share_bps, BPS_DENOM)


def get_amount_out(*, reserve_in: int, reserve_out: int, net_in: int) -> int:
    """Constant-product output: `floor(reserve_out * net_in / (reserve_in + net_in))`."""
    denominator = reserve_in + net_in
    if denominator == 0:
        raise EmptyPoolError("cannot price against an empty reserve")
    return mul_div_floor(reserve_out, net_in, denominator)


def swap_exact_in(
    *,
    reserve_in: int,
    reserve_out: int,
    amount_in: int,
    fee_bps: int,
    sink_share_bps: int = DEFAULT_SINK_SHARE_BPS,
) -> SwapExactInResult:
    """
    Exact-in swap quote + post-state.

    Raises EmptyPoolError when either reserve is zero and the u64 arithmetic
    errors when a value would leave the domain.
    """
    require_u64("reserve_in", reserve_in)
    require_u64("reserve_out", reserve_out)
    require_u64("amount_in", amount_in)
    require_bps("fee_bps", fee_bps)
    require_bps("sink_share_bps", sink_share_bps)

    if reserve_in == 0 or reserve_out == 0:
        raise EmptyPoolError("cannot swap against an empty reserve")

    k_before = reserve_in * reserve_out

    fee_total = compute_fee_total(gross_in=amount_in, fee_bps=fee_bps)
    net_in = checked_sub(amount_in, fee_total)

    sink_fee = compute_sink_fee(fee_total=fee_total, sink_share_bps=sink_share_bps)
    pool_fee = checked_sub(fee_total, sink_fee)

    amount_out = get_amount_out(reserve_in=reserve_in, reserve_out=reserve_out, net_in=net_in)

    new_reserve_in = checked_add(checked_add(reserve_in, net_in), pool_fee)
    new_reserve_out = checked_sub(reserve_out, amount_out)

    k_after = new_reserve_in * new_reserve_out
    if k_after < k_before:
        raise PoolInvariantError(["k_non_decreasing"])

    return SwapExactInResult(
        amount_out=amount_out,
        fee_total=fee_total,
        sink_fee=sink_fee,
        pool_fee=pool_fee,
        net_in=net_in,
        gross_in=amount_in,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=k_before,
        k_after=k_after,
    )
