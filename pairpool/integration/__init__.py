"""
Host integration layer: ledger contract, configuration and the pool host.
"""

from .config import PoolConfig, load_pool_config
from .ledger import Ledger, LedgerError
from .pool_host import PoolHost

__all__ = [
    "PoolConfig",
    "load_pool_config",
    "Ledger",
    "LedgerError",
    "PoolHost",
]
