"""
Checked unsigned 64-bit arithmetic helpers.

Every amount handled by the pool engine lives in the u64 domain. Python ints
never wrap, so products are exact "wide" intermediates; these helpers bring
results back into the domain and fail loudly instead of truncating.
"""

from __future__ import annotations

import math

from ...errors import ArithmeticOverflowError, ArithmeticUnderflowError


U64_MAX = (1 << 64) - 1
BPS_DENOM = 10_000


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_u64(name: str, value: int) -> int:
    """Validate a parameter against the u64 domain."""
    _require_int(name, value)
    if value < 0 or value > U64_MAX:
        raise ArithmeticOverflowError(f"param_domain:{name}")
    return value


def require_bps(name: str, value: int) -> int:
    _require_int(name, value)
    if not (0 <= value <= BPS_DENOM):
        raise ArithmeticOverflowError(f"param_domain:{name}")
    return value


def checked_add(a: int, b: int) -> int:
    total = a + b
    if total > U64_MAX:
        raise ArithmeticOverflowError(f"u64 overflow: {a} + {b}")
    return total


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise ArithmeticUnderflowError(f"u64 underflow: {a} - {b}")
    return a - b


def mul_div_floor(a: int, b: int, denominator: int) -> int:
    """
    Compute `floor(a * b / denominator)` exactly.

    The product is formed at full width; only the quotient must fit in u64.
    """
    if denominator <= 0:
        raise ZeroDivisionError("denominator must be positive")
    q = (a * b) // denominator
    if q > U64_MAX:
        raise ArithmeticOverflowError(f"u64 overflow: {a} * {b} // {denominator}")
    return q


def isqrt_product(a: int, b: int) -> int:
    # sqrt of a product of two u64 values always fits in u64.
    return math.isqrt(a * b)
