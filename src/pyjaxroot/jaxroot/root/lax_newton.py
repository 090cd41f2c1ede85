# pylint: disable=invalid-name
"""Newton-Raphson search expressed with `jax.lax.while_loop`.

Follows the same guards as :func:`jaxroot.root.newton.solve` but keeps the
whole search traceable, so it can run under `jax.jit`. Errors raised while
tracing `fn` propagate, only non-finite values map to failure statuses.
"""
from __future__ import annotations

import dataclasses
import math
from typing import Callable, Optional

import jax
import jax.numpy as jnp
import tree_math

from jaxroot.base.params import NewtonParameters
from jaxroot.base.types import ArrayLike
from jaxroot.root.types import NewtonResult, Status


@dataclasses.dataclass
@tree_math.struct
class NewtonState:
    """Carried state of a traceable Newton search

    Parameters:
        iteration (jax.Array): number of iterations entered
        x (jax.Array): current iterate
        status (jax.Array): integer value of a :class:`Status`, -1 while
            the search runs
    """

    iteration: jax.Array
    x: jax.Array
    status: jax.Array


# status code of a search that has not ended yet
_RUNNING = -1


def _code(status: int) -> jax.Array:
    return jnp.asarray(int(status), dtype=jnp.int32)


def newton_1d(
    fn: Callable[[jax.Array], jax.Array],
    x0: ArrayLike,
    params: Optional[NewtonParameters] = None,
) -> NewtonState:
    params = NewtonParameters() if params is None else params
    value_and_grad = jax.value_and_grad(fn)

    initial_state = NewtonState(
        iteration=jnp.asarray(0, dtype=jnp.int32),
        x=jnp.asarray(x0, dtype=jnp.float64),
        status=_code(_RUNNING),
    )

    def cond(state):
        return (state.status == _RUNNING) & (
            state.iteration < params.max_iterations)

    def body(state):
        fx, dfx = value_and_grad(state.x)
        flat = dfx == 0.0
        step = fx / jnp.where(flat, 1.0, dfx)
        step_magnitude = jnp.where(flat, jnp.inf, jnp.abs(step))
        x_next = state.x - step

        # first matching guard wins
        status = jnp.select(
            [
                ~jnp.isfinite(state.x) | ~jnp.isfinite(fx),
                jnp.abs(fx) < params.tolerance,
                ~jnp.isfinite(dfx),
                jnp.abs(dfx) < params.derivative_threshold,
                step_magnitude > params.divergence_bound,
                jnp.abs(x_next) > params.divergence_bound,
            ],
            [
                _code(Status.EVALUATION_FAILED),
                _code(Status.CONVERGED),
                _code(Status.DERIVATIVE_FAILED),
                _code(Status.FLAT_DERIVATIVE),
                _code(Status.STEP_DIVERGED),
                _code(Status.ITERATE_DIVERGED),
            ],
            _code(_RUNNING),
        ).astype(jnp.int32)

        return NewtonState(
            iteration=state.iteration + 1,
            x=jnp.where(status == _RUNNING, x_next, state.x),
            status=status,
        )

    state = jax.lax.while_loop(cond, body, initial_state)
    return NewtonState(
        iteration=state.iteration,
        x=state.x,
        status=jnp.where(
            state.status == _RUNNING,
            _code(Status.EXHAUSTED),
            state.status,
        ),
    )


def to_result(state: NewtonState) -> NewtonResult:
    """Tagged result of a finished, concrete search state"""
    status = Status(int(state.status))
    iterations = int(state.iteration)
    x = float(state.x)
    if status is Status.CONVERGED and not math.isfinite(x):
        status = Status.EVALUATION_FAILED
    if status is Status.CONVERGED:
        return NewtonResult(x, status, iterations)
    return NewtonResult.failure(status, iterations)
