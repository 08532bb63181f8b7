# [TESTER] v1

from __future__ import annotations

import pytest

from pairpool.core.swap import quote_swap, swap
from pairpool.core.types import Party, Transfer
from pairpool.errors import (
    ArithmeticOverflowError,
    EmptyPoolError,
    ErrorCode,
    InvalidAssetError,
    SlippageExceededError,
)
from pairpool.kernels.python.u64 import U64_MAX
from pairpool.state.pools import PoolState, create_pool


ASSET_A = "0x" + "01" * 32
ASSET_B = "0x" + "02" * 32
ASSET_C = "0x" + "03" * 32


def _pool(reserve_a: int, reserve_b: int, supply: int) -> PoolState:
    empty = create_pool(ASSET_A, ASSET_B)
    return PoolState(
        pool_id=empty.pool_id,
        asset_a=ASSET_A,
        asset_b=ASSET_B,
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        pool_share_supply=supply,
    )


def test_swap_small_trade_matches_constant_product_quote() -> None:
    pool = _pool(1000, 4000, 2000)
    res = swap(pool, amount_in=100, min_amount_out=363, asset_in=ASSET_A, fee_bps=30)

    assert res.fee == 0
    assert res.amount_out == 363
    assert res.asset_out == ASSET_B
    assert (res.pool.reserve_a, res.pool.reserve_b) == (1100, 3637)
    assert res.pool.pool_share_supply == 2000
    assert res.transfers == (
        Transfer(asset=ASSET_A, source=Party.CALLER, destination=Party.POOL, amount=100),
        Transfer(asset=ASSET_B, source=Party.POOL, destination=Party.CALLER, amount=363),
    )
    # Input state is an immutable snapshot.
    assert (pool.reserve_a, pool.reserve_b) == (1000, 4000)


def test_swap_rejects_min_amount_out_above_quote() -> None:
    pool = _pool(1000, 4000, 2000)
    with pytest.raises(SlippageExceededError) as excinfo:
        swap(pool, amount_in=100, min_amount_out=364, asset_in=ASSET_A, fee_bps=30)
    assert excinfo.value.code is ErrorCode.SLIPPAGE_EXCEEDED
    assert excinfo.value.actual == 363
    assert excinfo.value.minimum == 364


def test_swap_in_asset_b_updates_reserves_in_the_right_order() -> None:
    pool = _pool(1000, 4000, 2000)
    res = swap(pool, amount_in=400, min_amount_out=0, asset_in=ASSET_B, fee_bps=0)
    assert res.amount_out == (1000 * 400) // (4000 + 400)
    assert res.pool.reserve_b == 4400
    assert res.pool.reserve_a == 1000 - res.amount_out


def test_swap_pays_half_the_fee_to_the_sink() -> None:
    pool = _pool(1_000_000, 1_000_000, 1_000_000)
    res = swap(pool, amount_in=11_000, min_amount_out=0, asset_in=ASSET_A, fee_bps=30)

    assert (res.fee, res.sink_fee, res.pool_fee) == (33, 16, 17)
    assert res.pool.reserve_a == 1_000_000 + 11_000 - 16
    assert Transfer(asset=ASSET_A, source=Party.POOL, destination=Party.FEE_SINK, amount=16) in res.transfers
    assert res.pool.get_constant_product() > pool.get_constant_product()


def test_swap_sink_share_is_configurable() -> None:
    pool = _pool(1_000_000, 1_000_000, 1_000_000)
    res = swap(pool, amount_in=11_000, min_amount_out=0, asset_in=ASSET_A, fee_bps=30, sink_share_bps=0)
    assert res.sink_fee == 0
    assert len(res.transfers) == 2
    assert res.pool.reserve_a == 1_011_000


def test_swap_rejects_unknown_asset() -> None:
    pool = _pool(1000, 4000, 2000)
    with pytest.raises(InvalidAssetError):
        swap(pool, amount_in=100, min_amount_out=0, asset_in=ASSET_C, fee_bps=30)


def test_swap_rejects_empty_pool() -> None:
    with pytest.raises(EmptyPoolError):
        swap(create_pool(ASSET_A, ASSET_B), amount_in=100, min_amount_out=0, asset_in=ASSET_A, fee_bps=30)


def test_swap_rejects_parameters_outside_domain() -> None:
    pool = _pool(1000, 4000, 2000)
    with pytest.raises(ArithmeticOverflowError, match="param_domain:amount_in"):
        swap(pool, amount_in=-1, min_amount_out=0, asset_in=ASSET_A, fee_bps=30)
    with pytest.raises(ArithmeticOverflowError, match="param_domain:fee_bps"):
        swap(pool, amount_in=1, min_amount_out=0, asset_in=ASSET_A, fee_bps=10_001)
    with pytest.raises(ArithmeticOverflowError, match="param_domain:min_amount_out"):
        swap(pool, amount_in=1, min_amount_out=U64_MAX + 1, asset_in=ASSET_A, fee_bps=30)


def test_swap_rejects_reserve_overflow() -> None:
    pool = _pool(U64_MAX - 10, 1000, 1)
    with pytest.raises(ArithmeticOverflowError):
        swap(pool, amount_in=100, min_amount_out=0, asset_in=ASSET_A, fee_bps=0)


def test_quote_swap_ignores_slippage_bound() -> None:
    pool = _pool(1000, 4000, 2000)
    quote = quote_swap(pool, amount_in=100, asset_in=ASSET_A, fee_bps=30)
    assert quote.amount_out == 363
    assert quote == swap(pool, amount_in=100, min_amount_out=0, asset_in=ASSET_A, fee_bps=30)
