"""Data types for the pool engine.

All types are frozen dataclasses (immutable). The core never addresses ledger
accounts directly: transfers name symbolic parties (`Party`) that the host
resolves to concrete accounts.

Units/conventions:
- every amount is a u64 in the smallest denomination of its asset.
- `*_bps` rates are basis points (1/10_000).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional, Tuple, Union

from ..errors import ErrorCode
from ..kernels.python.cpmm_swap import DEFAULT_SINK_SHARE_BPS
from ..state.balances import AssetId
from ..state.pools import PoolState


@unique
class Action(Enum):
    SWAP = "swap"
    ADD_LIQUIDITY = "add_liquidity"
    REMOVE_LIQUIDITY = "remove_liquidity"


@unique
class Party(Enum):
    CALLER = "caller"
    POOL = "pool"
    FEE_SINK = "fee_sink"


@unique
class ShareAction(Enum):
    MINT = "mint"
    BURN = "burn"


@dataclass(frozen=True)
class Transfer:
    """Instruction for the host ledger: move `amount` of `asset` between parties."""

    asset: AssetId
    source: Party
    destination: Party
    amount: int


@dataclass(frozen=True)
class ShareDelta:
    """Pool-share change for the caller; applied by the host's share ledger."""

    action: ShareAction
    amount: int


@dataclass(frozen=True)
class SwapResult:
    pool: PoolState
    asset_in: AssetId
    asset_out: AssetId
    amount_in: int
    amount_out: int
    fee: int
    sink_fee: int
    pool_fee: int
    transfers: Tuple[Transfer, ...]
    share_delta: Optional[ShareDelta] = None


@dataclass(frozen=True)
class AddResult:
    pool: PoolState
    amount_a: int
    amount_b: int
    refund_a: int
    refund_b: int
    minted: int
    transfers: Tuple[Transfer, ...]
    share_delta: Optional[ShareDelta] = None


@dataclass(frozen=True)
class RemoveResult:
    pool: PoolState
    amount_a: int
    amount_b: int
    burned: int
    transfers: Tuple[Transfer, ...]
    share_delta: Optional[ShareDelta] = None


Effect = Union[SwapResult, AddResult, RemoveResult]


@dataclass(frozen=True)
class ActionParams:
    """Parameters for an action. Unused fields default to 0 / empty."""

    action: Action
    # swap
    amount_in: int = 0
    min_amount_out: int = 0
    asset_in: AssetId = ""
    fee_bps: int = 0
    sink_share_bps: int = DEFAULT_SINK_SHARE_BPS
    # add_liquidity
    user_amount_a: int = 0
    user_amount_b: int = 0
    min_pool_tokens: int = 0
    # remove_liquidity
    pool_token_amount: int = 0
    min_token_a: int = 0
    min_token_b: int = 0
    caller_share_balance: int = 0


@dataclass(frozen=True)
class StepResult:
    ok: bool
    state: Optional[PoolState] = None
    effect: Optional[Effect] = None
    error: Optional[str] = None
    code: Optional[ErrorCode] = None
