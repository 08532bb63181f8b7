# [TESTER] v1

from __future__ import annotations

import pytest

from pairpool.errors import ArithmeticOverflowError, EmptyPoolError, InsufficientSharesError, PoolInvariantError
from pairpool.kernels.python.lp_math import (
    burn_liquidity,
    mint_liquidity,
    mint_liquidity_initial,
    ratio_amounts,
)
from pairpool.kernels.python.u64 import U64_MAX


def test_mint_liquidity_initial_is_isqrt_of_product() -> None:
    assert mint_liquidity_initial(amount_a=1000, amount_b=4000) == 2000
    assert mint_liquidity_initial(amount_a=2, amount_b=3) == 2
    assert mint_liquidity_initial(amount_a=0, amount_b=3) == 0


def test_ratio_amounts_caps_the_larger_side() -> None:
    res = ratio_amounts(reserve_a=1000, reserve_b=4000, amount_a_desired=100, amount_b_desired=500)
    assert (res.amount_a_used, res.amount_b_used) == (100, 400)
    assert (res.amount_a_refund, res.amount_b_refund) == (0, 100)

    res = ratio_amounts(reserve_a=1000, reserve_b=4000, amount_a_desired=300, amount_b_desired=400)
    assert (res.amount_a_used, res.amount_b_used) == (100, 400)
    assert (res.amount_a_refund, res.amount_b_refund) == (200, 0)


def test_ratio_amounts_rejects_empty_reserve() -> None:
    with pytest.raises(EmptyPoolError):
        ratio_amounts(reserve_a=0, reserve_b=10, amount_a_desired=1, amount_b_desired=1)


def test_mint_liquidity_first_deposit_takes_amounts_as_offered() -> None:
    res = mint_liquidity(reserve_a=0, reserve_b=0, total_supply=0, amount_a_desired=1000, amount_b_desired=4000)
    assert res.liquidity_minted == 2000
    assert (res.new_reserve_a, res.new_reserve_b, res.new_total_supply) == (1000, 4000, 2000)
    assert (res.amount_a_refund, res.amount_b_refund) == (0, 0)


def test_mint_liquidity_first_deposit_rejects_stranded_reserves() -> None:
    # Zero supply with reserves left behind would let one share claim them all.
    with pytest.raises(PoolInvariantError, match="empty_when_unsupplied"):
        mint_liquidity(
            reserve_a=1_000_000,
            reserve_b=1_000_000,
            total_supply=0,
            amount_a_desired=1,
            amount_b_desired=1,
        )
    with pytest.raises(PoolInvariantError):
        mint_liquidity(reserve_a=0, reserve_b=7, total_supply=0, amount_a_desired=5, amount_b_desired=5)


def test_mint_liquidity_uses_smaller_per_asset_mint() -> None:
    res = mint_liquidity(reserve_a=1000, reserve_b=4000, total_supply=2000, amount_a_desired=100, amount_b_desired=500)
    assert res.liquidity_minted == 200
    assert (res.new_reserve_a, res.new_reserve_b, res.new_total_supply) == (1100, 4400, 2200)

    # 3 of B alone would be worth 1 share, but 0 of A is accepted, so nothing is minted.
    res = mint_liquidity(reserve_a=1000, reserve_b=4000, total_supply=2000, amount_a_desired=1, amount_b_desired=3)
    assert res.amount_a_used == 0
    assert res.liquidity_minted == 0


def test_mint_liquidity_rejects_reserve_overflow() -> None:
    with pytest.raises(ArithmeticOverflowError):
        mint_liquidity(
            reserve_a=U64_MAX,
            reserve_b=U64_MAX,
            total_supply=U64_MAX,
            amount_a_desired=1,
            amount_b_desired=1,
        )


def test_burn_liquidity_is_proportional_and_floors() -> None:
    res = burn_liquidity(reserve_a=1100, reserve_b=3637, total_supply=2000, liquidity=1000)
    assert (res.amount_a_out, res.amount_b_out) == (550, 1818)
    assert (res.new_reserve_a, res.new_reserve_b, res.new_total_supply) == (550, 1819, 1000)


def test_burn_liquidity_full_supply_drains_pool() -> None:
    res = burn_liquidity(reserve_a=1100, reserve_b=3637, total_supply=2000, liquidity=2000)
    assert (res.amount_a_out, res.amount_b_out) == (1100, 3637)
    assert (res.new_reserve_a, res.new_reserve_b, res.new_total_supply) == (0, 0, 0)


def test_burn_liquidity_rejects_zero_supply_and_excess() -> None:
    with pytest.raises(EmptyPoolError):
        burn_liquidity(reserve_a=0, reserve_b=0, total_supply=0, liquidity=1)
    with pytest.raises(InsufficientSharesError):
        burn_liquidity(reserve_a=10, reserve_b=10, total_supply=10, liquidity=11)
