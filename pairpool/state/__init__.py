"""
State management for pairpool
"""

from .balances import BalanceTable
from .pools import PoolState, compute_pool_id, compute_share_asset, create_pool

__all__ = [
    "BalanceTable",
    "PoolState",
    "compute_pool_id",
    "compute_share_asset",
    "create_pool",
]
