"""
Pool state for a two-asset constant-product pool.
"""

from __future__ import annotations

from dataclasses import dataclass

import hashlib

from .balances import AssetId, Amount
from ..kernels.python.u64 import U64_MAX


POOL_ID_DOMAIN = b"PairPool"
SHARE_ASSET_DOMAIN = b"PairPoolShare"


def compute_pool_id(asset_a: AssetId, asset_b: AssetId) -> str:
    """
    Deterministically compute a pool_id for an asset pair.

        pool_id = H("PairPool" || asset_a || asset_b)
    """
    if asset_a >= asset_b:
        raise ValueError(f"Assets must be in canonical order: {asset_a} < {asset_b}")
    pool_id_data = POOL_ID_DOMAIN + asset_a.encode("utf-8") + asset_b.encode("utf-8")
    return "0x" + hashlib.sha256(pool_id_data).hexdigest()


def compute_share_asset(pool_id: str) -> AssetId:
    """Ledger asset id of the pool share token for `pool_id`."""
    return "0x" + hashlib.sha256(SHARE_ASSET_DOMAIN + pool_id.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class PoolState:
    """
    Immutable snapshot of a pool.

    Attributes:
        pool_id: Deterministic pool identifier (hex string)
        asset_a: First asset identifier (must be < asset_b lexicographically)
        asset_b: Second asset identifier
        reserve_a: Pool holding of asset_a
        reserve_b: Pool holding of asset_b
        pool_share_supply: Total outstanding pool shares
    """
    pool_id: str
    asset_a: AssetId
    asset_b: AssetId
    reserve_a: Amount = 0
    reserve_b: Amount = 0
    pool_share_supply: Amount = 0

    def __post_init__(self) -> None:
        if self.asset_a >= self.asset_b:
            raise ValueError(
                f"Assets must be in canonical order: {self.asset_a} < {self.asset_b}"
            )
        for name, v in (
            ("reserve_a", self.reserve_a),
            ("reserve_b", self.reserve_b),
            ("pool_share_supply", self.pool_share_supply),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 0 or v > U64_MAX:
                raise ValueError(f"{name} must be in the u64 range: {v}")

    @property
    def share_asset(self) -> AssetId:
        return compute_share_asset(self.pool_id)

    @property
    def is_empty(self) -> bool:
        return self.pool_share_supply == 0

    def has_asset(self, asset: AssetId) -> bool:
        return asset == self.asset_a or asset == self.asset_b

    def other_asset(self, asset: AssetId) -> AssetId:
        if asset == self.asset_a:
            return self.asset_b
        if asset == self.asset_b:
            return self.asset_a
        raise ValueError(f"Asset {asset} not in pool {self.pool_id}")

    def get_reserve(self, asset: AssetId) -> Amount:
        """
        Get reserve for a specific asset.

        Raises:
            ValueError: If asset is not in this pool
        """
        if asset == self.asset_a:
            return self.reserve_a
        elif asset == self.asset_b:
            return self.reserve_b
        else:
            raise ValueError(f"Asset {asset} not in pool {self.pool_id}")

    def get_constant_product(self) -> int:
        """k = reserve_a * reserve_b"""
        return self.reserve_a * self.reserve_b

    def __repr__(self) -> str:
        return (
            f"PoolState(pool_id={self.pool_id[:16]}..., "
            f"assets=({self.asset_a[:8]}..., {self.asset_b[:8]}...), "
            f"reserves=({self.reserve_a}, {self.reserve_b}), "
            f"pool_share_supply={self.pool_share_supply})"
        )


def create_pool(asset_a: AssetId, asset_b: AssetId) -> PoolState:
    """
    Create an empty pool for an asset pair.

    The pool holds nothing until the first deposit; its implied price is fixed
    by that deposit.
    """
    pool_id = compute_pool_id(asset_a, asset_b)
    return PoolState(pool_id=pool_id, asset_a=asset_a, asset_b=asset_b)
