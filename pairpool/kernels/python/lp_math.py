"""
Liquidity math kernel.

Small set of pure functions with explicit floor rounding:
- `ratio_amounts`: ratio-capped deposit amounts for a non-empty pool
- `mint_liquidity_initial`: genesis mint, `isqrt(amount_a * amount_b)`
- `mint_liquidity`: proportional mint for a non-empty pool
- `burn_liquidity`: proportional withdrawal for a share burn
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import EmptyPoolError, InsufficientSharesError, PoolInvariantError
from .u64 import checked_add, checked_sub, isqrt_product, mul_div_floor, require_u64


@dataclass(frozen=True)
class RatioAmountsResult:
    amount_a_used: int
    amount_b_used: int
    amount_a_refund: int
    amount_b_refund: int


@dataclass(frozen=True)
class MintLiquidityResult:
    liquidity_minted: int
    amount_a_used: int
    amount_b_used: int
    amount_a_refund: int
    amount_b_refund: int
    new_reserve_a: int
    new_reserve_b: int
    new_total_supply: int


@dataclass(frozen=True)
class BurnLiquidityResult:
    amount_a_out: int
    amount_b_out: int
    new_reserve_a: int
    new_reserve_b: int
    new_total_supply: int


def ratio_amounts(
    *,
    reserve_a: int,
    reserve_b: int,
    amount_a_desired: int,
    amount_b_desired: int,
) -> RatioAmountsResult:
    """
    Cap each side of a deposit to the pool's current ratio.

    amount_a = min(amount_a_desired, floor(amount_b_desired * reserve_a / reserve_b))
    amount_b = min(amount_b_desired, floor(amount_a_desired * reserve_b / reserve_a))
    """
    for name, v in (
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("amount_a_desired", amount_a_desired),
        ("amount_b_desired", amount_b_desired),
    ):
        require_u64(name, v)

    if reserve_a == 0 or reserve_b == 0:
        raise EmptyPoolError("ratio is undefined for an empty reserve")

    amount_a = min(amount_a_desired, mul_div_floor(amount_b_desired, reserve_a, reserve_b))
    amount_b = min(amount_b_desired, mul_div_floor(amount_a_desired, reserve_b, reserve_a))

    return RatioAmountsResult(
        amount_a_used=amount_a,
        amount_b_used=amount_b,
        amount_a_refund=amount_a_desired - amount_a,
        amount_b_refund=amount_b_desired - amount_b,
    )


def mint_liquidity_initial(*, amount_a: int, amount_b: int) -> int:
    """Genesis mint: `floor(sqrt(amount_a * amount_b))`, computed with integer isqrt."""
    require_u64("amount_a", amount_a)
    require_u64("amount_b", amount_b)
    return isqrt_product(amount_a, amount_b)


def mint_liquidity(
    *,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
    amount_a_desired: int,
    amount_b_desired: int,
) -> MintLiquidityResult:
    """
    Mint pool shares for a deposit.

    With `total_supply == 0` the reserves must be zero and the offered amounts
    are taken as-is. Otherwise the amounts are ratio-capped and the mint is the
    smaller of the two per-asset proportional mints.
    """
    require_u64("total_supply", total_supply)

    if total_supply == 0:
        require_u64("amount_a_desired", amount_a_desired)
        require_u64("amount_b_desired", amount_b_desired)
        require_u64("reserve_a", reserve_a)
        require_u64("reserve_b", reserve_b)
        if reserve_a != 0 or reserve_b != 0:
            raise PoolInvariantError(["empty_when_unsupplied"])
        minted = mint_liquidity_initial(amount_a=amount_a_desired, amount_b=amount_b_desired)
        used = RatioAmountsResult(
            amount_a_used=amount_a_desired,
            amount_b_used=amount_b_desired,
            amount_a_refund=0,
            amount_b_refund=0,
        )
    else:
        used = ratio_amounts(
            reserve_a=reserve_a,
            reserve_b=reserve_b,
            amount_a_desired=amount_a_desired,
            amount_b_desired=amount_b_desired,
        )
        minted_a = mul_div_floor(total_supply, used.amount_a_used, reserve_a)
        minted_b = mul_div_floor(total_supply, used.amount_b_used, reserve_b)
        minted = min(minted_a, minted_b)

    return MintLiquidityResult(
        liquidity_minted=minted,
        amount_a_used=used.amount_a_used,
        amount_b_used=used.amount_b_used,
        amount_a_refund=used.amount_a_refund,
        amount_b_refund=used.amount_b_refund,
        new_reserve_a=checked_add(reserve_a, used.amount_a_used),
        new_reserve_b=checked_add(reserve_b, used.amount_b_used),
        new_total_supply=checked_add(total_supply, minted),
    )


def burn_liquidity(
    *,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
    liquidity: int,
) -> BurnLiquidityResult:
    """
    amount_a_out = floor(reserve_a * liquidity / total_supply)
    amount_b_out = floor(reserve_b * liquidity / total_supply)
    """
    for name, v in (
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_supply", total_supply),
        ("liquidity", liquidity),
    ):
        require_u64(name, v)

    if total_supply == 0:
        raise EmptyPoolError("cannot burn shares of a pool with zero supply")
    if liquidity > total_supply:
        raise InsufficientSharesError(f"cannot burn more than supply: {liquidity} > {total_supply}")

    amount_a = mul_div_floor(reserve_a, liquidity, total_supply)
    amount_b = mul_div_floor(reserve_b, liquidity, total_supply)

    return BurnLiquidityResult(
        amount_a_out=amount_a,
        amount_b_out=amount_b,
        new_reserve_a=checked_sub(reserve_a, amount_a),
        new_reserve_b=checked_sub(reserve_b, amount_b),
        new_total_supply=checked_sub(total_supply, liquidity),
    )
