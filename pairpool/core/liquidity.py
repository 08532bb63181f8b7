"""
Liquidity management operations: add/remove liquidity.
"""

from dataclasses import replace

from ..errors import (
    EmptyPoolError,
    InsufficientLiquidityError,
    InsufficientSharesError,
    SlippageExceededError,
)
from ..kernels.python.lp_math import burn_liquidity, mint_liquidity
from ..kernels.python.u64 import require_u64
from ..state.balances import Amount
from ..state.pools import PoolState
from .types import AddResult, Party, RemoveResult, ShareAction, ShareDelta, Transfer


def add_liquidity(
    pool: PoolState,
    user_amount_a: Amount,
    user_amount_b: Amount,
    min_pool_tokens: Amount,
) -> AddResult:
    """
    Deposit paired assets and mint pool shares.

    First deposit (pool_share_supply == 0):
        amounts are taken as offered, minted = isqrt(amount_a * amount_b)

    Later deposits keep the pool price fixed:
        amount_a = min(user_amount_a, floor(user_amount_b * reserve_a / reserve_b))
        amount_b = min(user_amount_b, floor(user_amount_a * reserve_b / reserve_a))
        minted = min(floor(supply * amount_a / reserve_a),
                     floor(supply * amount_b / reserve_b))

    Only the accepted amounts are taken from the caller; the excess is
    reported as a refund.

    Raises:
        SlippageExceededError: minted < min_pool_tokens
        InsufficientLiquidityError: the deposit would mint zero shares
        ArithmeticOverflowError: reserves or supply would leave the u64 range
    """
    require_u64("user_amount_a", user_amount_a)
    require_u64("user_amount_b", user_amount_b)
    require_u64("min_pool_tokens", min_pool_tokens)

    res = mint_liquidity(
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        total_supply=pool.pool_share_supply,
        amount_a_desired=user_amount_a,
        amount_b_desired=user_amount_b,
    )

    if res.liquidity_minted < min_pool_tokens:
        raise SlippageExceededError("minted", res.liquidity_minted, min_pool_tokens)
    if res.liquidity_minted == 0:
        raise InsufficientLiquidityError(
            f"deposit ({user_amount_a}, {user_amount_b}) would mint zero shares"
        )

    transfers = tuple(
        Transfer(asset=asset, source=Party.CALLER, destination=Party.POOL, amount=amount)
        for asset, amount in ((pool.asset_a, res.amount_a_used), (pool.asset_b, res.amount_b_used))
        if amount > 0
    )

    return AddResult(
        pool=replace(
            pool,
            reserve_a=res.new_reserve_a,
            reserve_b=res.new_reserve_b,
            pool_share_supply=res.new_total_supply,
        ),
        amount_a=res.amount_a_used,
        amount_b=res.amount_b_used,
        refund_a=res.amount_a_refund,
        refund_b=res.amount_b_refund,
        minted=res.liquidity_minted,
        transfers=transfers,
        share_delta=ShareDelta(action=ShareAction.MINT, amount=res.liquidity_minted),
    )


def remove_liquidity(
    pool: PoolState,
    pool_token_amount: Amount,
    min_token_a: Amount,
    min_token_b: Amount,
    caller_share_balance: Amount,
) -> RemoveResult:
    """
    Burn pool shares and withdraw the proportional reserves.

    Outputs:
        amount_a = floor(reserve_a * pool_token_amount / pool_share_supply)
        amount_b = floor(reserve_b * pool_token_amount / pool_share_supply)

    Raises:
        InsufficientSharesError: the caller (or the pool) holds fewer shares
        EmptyPoolError: pool_share_supply == 0
        InsufficientLiquidityError: pool_token_amount == 0
        SlippageExceededError: an output is below its minimum
    """
    for name, v in (
        ("pool_token_amount", pool_token_amount),
        ("min_token_a", min_token_a),
        ("min_token_b", min_token_b),
        ("caller_share_balance", caller_share_balance),
    ):
        require_u64(name, v)

    if caller_share_balance < pool_token_amount:
        raise InsufficientSharesError(
            f"caller holds {caller_share_balance} shares < {pool_token_amount}"
        )
    if pool.is_empty:
        raise EmptyPoolError(f"Pool {pool.pool_id} has no outstanding shares")
    if pool_token_amount > pool.pool_share_supply:
        raise InsufficientSharesError(
            f"Cannot burn more shares than supply: {pool_token_amount} > {pool.pool_share_supply}"
        )
    if pool_token_amount == 0:
        raise InsufficientLiquidityError("pool_token_amount must be positive")

    res = burn_liquidity(
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        total_supply=pool.pool_share_supply,
        liquidity=pool_token_amount,
    )

    if res.amount_a_out < min_token_a:
        raise SlippageExceededError("amount_a", res.amount_a_out, min_token_a)
    if res.amount_b_out < min_token_b:
        raise SlippageExceededError("amount_b", res.amount_b_out, min_token_b)

    transfers = tuple(
        Transfer(asset=asset, source=Party.POOL, destination=Party.CALLER, amount=amount)
        for asset, amount in ((pool.asset_a, res.amount_a_out), (pool.asset_b, res.amount_b_out))
        if amount > 0
    )

    return RemoveResult(
        pool=replace(
            pool,
            reserve_a=res.new_reserve_a,
            reserve_b=res.new_reserve_b,
            pool_share_supply=res.new_total_supply,
        ),
        amount_a=res.amount_a_out,
        amount_b=res.amount_b_out,
        burned=pool_token_amount,
        transfers=transfers,
        share_delta=ShareDelta(action=ShareAction.BURN, amount=pool_token_amount),
    )
