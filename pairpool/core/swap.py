"""
Constant-product swap against a two-asset pool.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per swap
- Invariant: after each swap, reserve_a' * reserve_b' >= reserve_a * reserve_b

Fee model: one fee, `floor(amount_in * fee_bps / 10_000)`, computed once. Half
of it (by default) is paid to the fee sink in the input asset; the remainder
stays in the input reserve.
"""

from dataclasses import replace

from ..errors import EmptyPoolError, InvalidAssetError, SlippageExceededError
from ..kernels.python.cpmm_swap import DEFAULT_SINK_SHARE_BPS, swap_exact_in
from ..kernels.python.u64 import require_bps, require_u64
from ..state.balances import AssetId, Amount
from ..state.pools import PoolState
from .types import Party, SwapResult, Transfer


def _with_reserves(pool: PoolState, asset_in: AssetId, new_reserve_in: Amount, new_reserve_out: Amount) -> PoolState:
    if asset_in == pool.asset_a:
        return replace(pool, reserve_a=new_reserve_in, reserve_b=new_reserve_out)
    return replace(pool, reserve_a=new_reserve_out, reserve_b=new_reserve_in)


def quote_swap(
    pool: PoolState,
    amount_in: Amount,
    asset_in: AssetId,
    fee_bps: int,
    *,
    sink_share_bps: int = DEFAULT_SINK_SHARE_BPS,
) -> SwapResult:
    """
    Price a swap without a slippage bound.

    The returned result carries the would-be post-state; nothing is applied.
    """
    require_u64("amount_in", amount_in)
    require_bps("fee_bps", fee_bps)
    require_bps("sink_share_bps", sink_share_bps)

    if not pool.has_asset(asset_in):
        raise InvalidAssetError(f"Asset {asset_in} not in pool {pool.pool_id}")
    if pool.is_empty:
        raise EmptyPoolError(f"Pool {pool.pool_id} has no liquidity")

    asset_out = pool.other_asset(asset_in)
    res = swap_exact_in(
        reserve_in=pool.get_reserve(asset_in),
        reserve_out=pool.get_reserve(asset_out),
        amount_in=amount_in,
        fee_bps=fee_bps,
        sink_share_bps=sink_share_bps,
    )

    transfers = [
        Transfer(asset=asset_in, source=Party.CALLER, destination=Party.POOL, amount=amount_in),
        Transfer(asset=asset_out, source=Party.POOL, destination=Party.CALLER, amount=res.amount_out),
    ]
    if res.sink_fee > 0:
        transfers.append(
            Transfer(asset=asset_in, source=Party.POOL, destination=Party.FEE_SINK, amount=res.sink_fee)
        )

    return SwapResult(
        pool=_with_reserves(pool, asset_in, res.new_reserve_in, res.new_reserve_out),
        asset_in=asset_in,
        asset_out=asset_out,
        amount_in=amount_in,
        amount_out=res.amount_out,
        fee=res.fee_total,
        sink_fee=res.sink_fee,
        pool_fee=res.pool_fee,
        transfers=tuple(transfers),
    )


def swap(
    pool: PoolState,
    amount_in: Amount,
    min_amount_out: Amount,
    asset_in: AssetId,
    fee_bps: int,
    *,
    sink_share_bps: int = DEFAULT_SINK_SHARE_BPS,
) -> SwapResult:
    """
    Swap `amount_in` of `asset_in` for the pool's other asset.

    Args:
        pool: Current pool state
        amount_in: Gross input amount (fee included)
        min_amount_out: Minimum acceptable output
        asset_in: Input asset (asset_a or asset_b of the pool)
        fee_bps: Fee in basis points (0-10000)
        sink_share_bps: Share of the fee paid to the fee sink

    Returns:
        SwapResult with the new pool state and the transfers to apply

    Raises:
        InvalidAssetError: asset_in is not in the pool
        EmptyPoolError: the pool has no liquidity
        SlippageExceededError: amount_out < min_amount_out
        ArithmeticOverflowError / ArithmeticUnderflowError: u64 domain violations
    """
    require_u64("min_amount_out", min_amount_out)
    result = quote_swap(pool, amount_in, asset_in, fee_bps, sink_share_bps=sink_share_bps)
    if result.amount_out < min_amount_out:
        raise SlippageExceededError("amount_out", result.amount_out, min_amount_out)
    return result
