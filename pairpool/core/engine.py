"""Dispatch-table engine for pool operations.

``step(pool, params)`` is the single entry point. It:

1. Rejects a pre-state that already violates an invariant.
2. Dispatches to the operation for ``params.action``, which validates
   parameter domains and caller bounds.
3. Checks all invariants on the post-state.
4. Returns a ``StepResult`` (accepted or rejected with a code and reason).

No step ever mutates its input: the post-state is a new ``PoolState``.
"""

from __future__ import annotations

from typing import Callable

from ..errors import ErrorCode, PoolError, PoolInvariantError
from ..state.pools import PoolState
from .invariants import check_all, check_transition
from .liquidity import add_liquidity, remove_liquidity
from .swap import swap
from .types import Action, ActionParams, Effect, StepResult

OperationFn = Callable[[PoolState, ActionParams], Effect]


def _op_swap(pool: PoolState, params: ActionParams) -> Effect:
    return swap(
        pool,
        params.amount_in,
        params.min_amount_out,
        params.asset_in,
        params.fee_bps,
        sink_share_bps=params.sink_share_bps,
    )


def _op_add_liquidity(pool: PoolState, params: ActionParams) -> Effect:
    return add_liquidity(pool, params.user_amount_a, params.user_amount_b, params.min_pool_tokens)


def _op_remove_liquidity(pool: PoolState, params: ActionParams) -> Effect:
    return remove_liquidity(
        pool,
        params.pool_token_amount,
        params.min_token_a,
        params.min_token_b,
        params.caller_share_balance,
    )


_DISPATCH: dict[Action, OperationFn] = {
    Action.SWAP: _op_swap,
    Action.ADD_LIQUIDITY: _op_add_liquidity,
    Action.REMOVE_LIQUIDITY: _op_remove_liquidity,
}


def step(pool: PoolState, params: ActionParams) -> StepResult:
    """Execute one action against the given pool.

    Returns ``StepResult`` with ``ok=True`` on success, or ``ok=False`` with
    an ``ErrorCode`` and a reason string.
    """
    op = _DISPATCH.get(params.action)
    if op is None:
        return StepResult(ok=False, error=f"unknown_action:{params.action}", code=ErrorCode.INVARIANT)

    violations = check_all(pool)
    if violations:
        return StepResult(ok=False, error=f"invariant:{','.join(violations)}", code=ErrorCode.INVARIANT)

    try:
        effect = op(pool, params)
    except PoolError as exc:
        return StepResult(ok=False, error=str(exc), code=exc.code)

    violations = check_transition(pool, effect.pool, swap=params.action is Action.SWAP)
    if violations:
        return StepResult(
            ok=False,
            error=f"invariant:{','.join(violations)}",
            code=ErrorCode.INVARIANT,
        )

    return StepResult(ok=True, state=effect.pool, effect=effect)


def step_or_raise(pool: PoolState, params: ActionParams) -> StepResult:
    """Like ``step()`` but raises on rejection instead of returning a result.

    Raises:
        PoolError: the typed rejection raised by the operation.
        PoolInvariantError: the pre-state or post-state violates one or more
            invariants.
    """
    op = _DISPATCH.get(params.action)
    if op is None:
        raise PoolInvariantError([f"unknown_action:{params.action}"])

    violations = check_all(pool)
    if violations:
        raise PoolInvariantError(violations)

    effect = op(pool, params)
    violations = check_transition(pool, effect.pool, swap=params.action is Action.SWAP)
    if violations:
        raise PoolInvariantError(violations)
    return StepResult(ok=True, state=effect.pool, effect=effect)
