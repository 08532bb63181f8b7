"""
Pool execution adapter for a host ledger.

This is an imperative-shell wrapper around the functional core:
- Reads the caller's share balance from the ledger.
- Runs one operation through `core.engine` against the current `PoolState`.
- Applies the resulting transfers and share mint/burn to the ledger, all or
  nothing, and only then commits the new `PoolState`.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List, Optional, Tuple, cast

from ..core.engine import step, step_or_raise
from ..core.types import (
    Action,
    ActionParams,
    AddResult,
    Effect,
    Party,
    RemoveResult,
    ShareAction,
    StepResult,
    SwapResult,
)
from ..errors import ErrorCode, LedgerError, PoolError
from ..state.balances import AccountId, Amount, AssetId
from ..state.pools import PoolState
from .config import PoolConfig
from .ledger import Ledger

logger = logging.getLogger(__name__)

UndoFn = Callable[[], None]


class PoolHost:
    """
    Serializes operations against one pool and its ledger.

    The host is not thread-safe; callers must order operations externally so
    each one reads the state committed by the previous one.
    """

    def __init__(self, ledger: Ledger, pool: PoolState, config: Optional[PoolConfig] = None) -> None:
        self._ledger = ledger
        self._pool = pool
        self._config = config or PoolConfig()

    @property
    def pool(self) -> PoolState:
        return self._pool

    @property
    def config(self) -> PoolConfig:
        return self._config

    def share_balance(self, account: AccountId) -> Amount:
        return self._ledger.get_balance(account, self._pool.share_asset)

    # -- operations ------------------------------------------------------------

    def swap(self, caller: AccountId, amount_in: Amount, min_amount_out: Amount, asset_in: AssetId) -> SwapResult:
        params = ActionParams(
            action=Action.SWAP,
            amount_in=amount_in,
            min_amount_out=min_amount_out,
            asset_in=asset_in,
            fee_bps=self._config.fee_bps,
            sink_share_bps=self._config.sink_share_bps,
        )
        return cast(SwapResult, self._run_or_raise(caller, params))

    def add_liquidity(
        self,
        caller: AccountId,
        user_amount_a: Amount,
        user_amount_b: Amount,
        min_pool_tokens: Amount,
    ) -> AddResult:
        params = ActionParams(
            action=Action.ADD_LIQUIDITY,
            user_amount_a=user_amount_a,
            user_amount_b=user_amount_b,
            min_pool_tokens=min_pool_tokens,
        )
        return cast(AddResult, self._run_or_raise(caller, params))

    def remove_liquidity(
        self,
        caller: AccountId,
        pool_token_amount: Amount,
        min_token_a: Amount,
        min_token_b: Amount,
    ) -> RemoveResult:
        params = ActionParams(
            action=Action.REMOVE_LIQUIDITY,
            pool_token_amount=pool_token_amount,
            min_token_a=min_token_a,
            min_token_b=min_token_b,
        )
        return cast(RemoveResult, self._run_or_raise(caller, params))

    def execute(self, caller: AccountId, params: ActionParams) -> StepResult:
        """
        Run one action and return a `StepResult` instead of raising.

        `caller_share_balance` and the fee parameters are filled in by the host.
        """
        params = self._bind_params(caller, params)
        result = step(self._pool, params)
        if not result.ok:
            logger.warning("pool %s rejected %s: %s", self._pool.pool_id, params.action.value, result.error)
            return result
        try:
            self._apply_effect(caller, cast(Effect, result.effect))
        except LedgerError as exc:
            return StepResult(ok=False, error=str(exc), code=ErrorCode.LEDGER_ERROR)
        self._commit(params.action, cast(PoolState, result.state))
        return result

    # -- internals -------------------------------------------------------------

    def _bind_params(self, caller: AccountId, params: ActionParams) -> ActionParams:
        if params.action is Action.SWAP:
            return replace(params, fee_bps=self._config.fee_bps, sink_share_bps=self._config.sink_share_bps)
        if params.action is Action.REMOVE_LIQUIDITY:
            return replace(params, caller_share_balance=self.share_balance(caller))
        return params

    def _run_or_raise(self, caller: AccountId, params: ActionParams) -> Effect:
        params = self._bind_params(caller, params)
        try:
            result = step_or_raise(self._pool, params)
        except PoolError as exc:
            logger.warning("pool %s rejected %s: %s", self._pool.pool_id, params.action.value, exc)
            raise
        effect = cast(Effect, result.effect)
        self._apply_effect(caller, effect)
        self._commit(params.action, cast(PoolState, result.state))
        return effect

    def _commit(self, action: Action, state: PoolState) -> None:
        logger.debug(
            "pool %s %s committed: reserves=(%d, %d) supply=%d",
            state.pool_id,
            action.value,
            state.reserve_a,
            state.reserve_b,
            state.pool_share_supply,
        )
        self._pool = state

    def _resolve(self, caller: AccountId, party: Party) -> AccountId:
        if party is Party.CALLER:
            return caller
        if party is Party.POOL:
            return self._config.pool_account
        return self._config.fee_sink

    def _apply_effect(self, caller: AccountId, effect: Effect) -> None:
        """
        Apply an effect to the ledger.

        On `LedgerError`, every operation already applied is undone in reverse
        order before the error is re-raised.
        """
        undo: List[Tuple[str, UndoFn]] = []
        ledger = self._ledger
        share_asset = self._pool.share_asset
        try:
            for t in effect.transfers:
                src = self._resolve(caller, t.source)
                dst = self._resolve(caller, t.destination)
                ledger.transfer(src, dst, t.asset, t.amount)
                undo.append(
                    (
                        f"transfer {t.amount} {t.asset} {dst}->{src}",
                        lambda src=src, dst=dst, asset=t.asset, amount=t.amount: ledger.transfer(dst, src, asset, amount),
                    )
                )
            delta = effect.share_delta
            if delta is not None and delta.amount > 0:
                if delta.action is ShareAction.MINT:
                    ledger.mint(caller, share_asset, delta.amount)
                    undo.append(
                        (f"burn {delta.amount} shares", lambda amount=delta.amount: ledger.burn(caller, share_asset, amount))
                    )
                else:
                    ledger.burn(caller, share_asset, delta.amount)
                    undo.append(
                        (f"mint {delta.amount} shares", lambda amount=delta.amount: ledger.mint(caller, share_asset, amount))
                    )
        except LedgerError as exc:
            logger.warning("ledger rejected effect for pool %s: %s; rolling back %d step(s)", self._pool.pool_id, exc, len(undo))
            for label, fn in reversed(undo):
                try:
                    fn()
                except LedgerError as rollback_exc:
                    logger.error(
                        "rollback step failed for pool %s: %s (%s)", self._pool.pool_id, label, rollback_exc
                    )
                    raise exc from rollback_exc
            raise

    def verify_custody(self) -> List[str]:
        """
        Compare pool reserves with the pool account's ledger balances.

        Returns a list of mismatch descriptions (empty = consistent).
        """
        mismatches = []
        account = self._config.pool_account
        for asset, reserve in ((self._pool.asset_a, self._pool.reserve_a), (self._pool.asset_b, self._pool.reserve_b)):
            held = self._ledger.get_balance(account, asset)
            if held != reserve:
                mismatches.append(f"{asset}: reserve={reserve} ledger={held}")
        return mismatches
