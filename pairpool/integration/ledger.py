"""
Balance ledger contract consumed by the pool host.

The ledger is owned by the host environment. `BalanceTable` in
`pairpool/state/balances.py` is the in-memory implementation used for local
execution and tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..errors import LedgerError
from ..state.balances import AccountId, Amount, AssetId


@runtime_checkable
class Ledger(Protocol):
    """Atomic per-call balance operations; failures raise `LedgerError`."""

    def get_balance(self, account: AccountId, asset: AssetId) -> Amount: ...

    def transfer(self, source: AccountId, destination: AccountId, asset: AssetId, amount: Amount) -> None: ...

    def mint(self, account: AccountId, asset: AssetId, amount: Amount) -> None: ...

    def burn(self, account: AccountId, asset: AssetId, amount: Amount) -> None: ...


__all__ = ["Ledger", "LedgerError"]
