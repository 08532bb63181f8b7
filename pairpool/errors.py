"""Exception types for the pool engine.

Every caller-triggerable rejection is a ``PoolError`` subclass with a stable
``code``. ``step()`` in ``pairpool/core/engine.py`` turns these into ``StepResult`` values;
``step_or_raise()`` and the operation functions raise them directly.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class ErrorCode(Enum):
    INVALID_ASSET = "invalid_asset"
    SLIPPAGE_EXCEEDED = "slippage_exceeded"
    INSUFFICIENT_SHARES = "insufficient_shares"
    INSUFFICIENT_LIQUIDITY = "insufficient_liquidity"
    EMPTY_POOL = "empty_pool"
    OVERFLOW = "overflow"
    UNDERFLOW = "underflow"
    LEDGER_ERROR = "ledger_error"
    INVARIANT = "invariant"


class PoolError(Exception):
    """Base class for typed pool rejections."""

    code: ErrorCode = ErrorCode.INVARIANT


class InvalidAssetError(PoolError):
    """Raised when the input asset is not one of the pool's two assets."""

    code = ErrorCode.INVALID_ASSET


class SlippageExceededError(PoolError):
    """Raised when a computed amount is below the caller's minimum."""

    code = ErrorCode.SLIPPAGE_EXCEEDED

    def __init__(self, field: str, actual: int, minimum: int) -> None:
        self.field = field
        self.actual = actual
        self.minimum = minimum
        super().__init__(f"{field} ({actual}) < minimum ({minimum})")


class InsufficientSharesError(PoolError):
    code = ErrorCode.INSUFFICIENT_SHARES


class InsufficientLiquidityError(PoolError):
    """Raised when a deposit would mint zero shares or a burn is empty."""

    code = ErrorCode.INSUFFICIENT_LIQUIDITY


class EmptyPoolError(PoolError):
    code = ErrorCode.EMPTY_POOL


class ArithmeticOverflowError(PoolError):
    """Raised when a value leaves the u64 domain (including parameter bounds)."""

    code = ErrorCode.OVERFLOW


class ArithmeticUnderflowError(PoolError):
    code = ErrorCode.UNDERFLOW


class LedgerError(PoolError):
    """Raised by a balance ledger when a transfer, mint or burn cannot be applied."""

    code = ErrorCode.LEDGER_ERROR


class PoolInvariantError(PoolError):
    """Raised when a post-state violates one or more invariants."""

    code = ErrorCode.INVARIANT

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")
