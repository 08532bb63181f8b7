# [TESTER] v1

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from pairpool.state.pools import PoolState, compute_pool_id, compute_share_asset, create_pool
from pairpool.kernels.python.u64 import U64_MAX


ASSET_A = "0x" + "01" * 32
ASSET_B = "0x" + "02" * 32


def test_pool_id_is_deterministic_and_order_checked() -> None:
    pid = compute_pool_id(ASSET_A, ASSET_B)
    assert pid == compute_pool_id(ASSET_A, ASSET_B)
    assert pid.startswith("0x") and len(pid) == 66
    with pytest.raises(ValueError):
        compute_pool_id(ASSET_B, ASSET_A)
    with pytest.raises(ValueError):
        compute_pool_id(ASSET_A, ASSET_A)


def test_share_asset_is_distinct_per_pool() -> None:
    pid = compute_pool_id(ASSET_A, ASSET_B)
    other = compute_pool_id(ASSET_A, "0x" + "03" * 32)
    assert compute_share_asset(pid) != compute_share_asset(other)
    assert compute_share_asset(pid) not in (ASSET_A, ASSET_B, pid)


def test_create_pool_is_empty() -> None:
    pool = create_pool(ASSET_A, ASSET_B)
    assert pool.is_empty
    assert (pool.reserve_a, pool.reserve_b, pool.pool_share_supply) == (0, 0, 0)
    assert pool.get_constant_product() == 0
    assert pool.share_asset == compute_share_asset(pool.pool_id)


def test_reserve_lookup_and_other_asset() -> None:
    pool = PoolState(
        pool_id=compute_pool_id(ASSET_A, ASSET_B),
        asset_a=ASSET_A,
        asset_b=ASSET_B,
        reserve_a=7,
        reserve_b=11,
        pool_share_supply=8,
    )
    assert pool.get_reserve(ASSET_A) == 7
    assert pool.get_reserve(ASSET_B) == 11
    assert pool.other_asset(ASSET_A) == ASSET_B
    assert pool.other_asset(ASSET_B) == ASSET_A
    assert pool.get_constant_product() == 77
    assert not pool.has_asset("0x" + "09" * 32)
    with pytest.raises(ValueError):
        pool.get_reserve("0x" + "09" * 32)
    with pytest.raises(ValueError):
        pool.other_asset("0x" + "09" * 32)


def test_pool_state_is_frozen() -> None:
    pool = create_pool(ASSET_A, ASSET_B)
    with pytest.raises(FrozenInstanceError):
        pool.reserve_a = 5  # type: ignore[misc]


@pytest.mark.parametrize(
    "field, value, exc",
    [
        ("reserve_a", -1, ValueError),
        ("reserve_b", U64_MAX + 1, ValueError),
        ("pool_share_supply", 1.5, TypeError),
        ("reserve_a", True, TypeError),
    ],
)
def test_pool_state_rejects_out_of_domain_fields(field: str, value: object, exc: type) -> None:
    kwargs = {"pool_id": compute_pool_id(ASSET_A, ASSET_B), "asset_a": ASSET_A, "asset_b": ASSET_B, field: value}
    with pytest.raises(exc):
        PoolState(**kwargs)  # type: ignore[arg-type]
