"""
Core pool algorithms
"""

from .engine import step, step_or_raise
from .invariants import check_all, check_transition
from .liquidity import add_liquidity, remove_liquidity
from .swap import quote_swap, swap
from .types import (
    Action,
    ActionParams,
    AddResult,
    Party,
    RemoveResult,
    ShareAction,
    ShareDelta,
    StepResult,
    SwapResult,
    Transfer,
)

__all__ = [
    "step",
    "step_or_raise",
    "check_all",
    "check_transition",
    "add_liquidity",
    "remove_liquidity",
    "quote_swap",
    "swap",
    "Action",
    "ActionParams",
    "AddResult",
    "Party",
    "RemoveResult",
    "ShareAction",
    "ShareDelta",
    "StepResult",
    "SwapResult",
    "Transfer",
]
