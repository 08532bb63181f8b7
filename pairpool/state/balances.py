"""
Multi-asset balance ledger.

Implements BalanceTable[AccountId, AssetId] -> Amount with the transfer,
mint and burn operations a pool host needs.
"""

from typing import Dict, Tuple

from ..errors import ArithmeticOverflowError, LedgerError
from ..kernels.python.u64 import U64_MAX


# Type aliases
AccountId = str
AssetId = str  # 32-byte hex string (0x...)
Amount = int  # Non-negative integer in the u64 range


class BalanceTable:
    """
    Balance table mapping (account, asset) -> amount.

    Every mutating method either applies fully or raises `LedgerError`
    without touching the table.
    """

    def __init__(self):
        self._balances: Dict[Tuple[AccountId, AssetId], Amount] = {}

    def get_balance(self, account: AccountId, asset: AssetId) -> Amount:
        """Get balance for (account, asset). Returns 0 if not found."""
        return self._balances.get((account, asset), 0)

    def set(self, account: AccountId, asset: AssetId, amount: Amount) -> None:
        """
        Set balance for (account, asset).

        Raises:
            ValueError: If amount is outside the u64 range
        """
        if amount < 0 or amount > U64_MAX:
            raise ValueError(f"Balance must be in the u64 range: {amount}")
        if amount == 0:
            # Remove zero balances to keep table sparse
            self._balances.pop((account, asset), None)
        else:
            self._balances[(account, asset)] = amount

    def mint(self, account: AccountId, asset: AssetId, amount: Amount) -> None:
        """Credit `amount` of `asset` to `account` out of thin air."""
        self._require_amount(amount)
        current = self.get_balance(account, asset)
        if current + amount > U64_MAX:
            raise LedgerError(f"mint would overflow balance of {account}: {current} + {amount}")
        self.set(account, asset, current + amount)

    def burn(self, account: AccountId, asset: AssetId, amount: Amount) -> None:
        """Destroy `amount` of `asset` held by `account`."""
        self._require_amount(amount)
        current = self.get_balance(account, asset)
        if current < amount:
            raise LedgerError(f"Insufficient balance to burn: {current} < {amount}")
        self.set(account, asset, current - amount)

    def transfer(self, source: AccountId, destination: AccountId, asset: AssetId, amount: Amount) -> None:
        """
        Move `amount` of `asset` from `source` to `destination`.

        Raises:
            LedgerError: If `source` holds less than `amount` or the
                destination balance would leave the u64 range
        """
        self._require_amount(amount)
        src_balance = self.get_balance(source, asset)
        if src_balance < amount:
            raise LedgerError(
                f"Insufficient balance: {source} holds {src_balance} < {amount}"
            )
        if source == destination:
            return
        dst_balance = self.get_balance(destination, asset)
        if dst_balance + amount > U64_MAX:
            raise LedgerError(f"transfer would overflow balance of {destination}")
        self.set(source, asset, src_balance - amount)
        self.set(destination, asset, dst_balance + amount)

    def get_all_balances(self) -> Dict[Tuple[AccountId, AssetId], Amount]:
        return dict(self._balances)

    def total_supply(self, asset: AssetId) -> Amount:
        """Sum of all balances of `asset`."""
        return sum(amount for (_, a), amount in self._balances.items() if a == asset)

    @staticmethod
    def _require_amount(amount: Amount) -> None:
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise TypeError("amount must be an int")
        if amount < 0 or amount > U64_MAX:
            raise ArithmeticOverflowError("param_domain:amount")

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
