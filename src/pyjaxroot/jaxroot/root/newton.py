"""Newton-Raphson root finding with automatically differentiated derivatives.

Every failure of the search (failing or non-finite evaluations, a flat
derivative, diverging steps or iterates, an exhausted iteration budget) is
reported through :class:`Status` by :func:`solve` and collapses to NO_ROOT
in :func:`find_root`. Neither raises for numerical reasons.
"""
import math
from typing import Callable, Optional, Union

import jaxroot
from jaxroot.base.differentiable import (
    DifferentiableFunction, as_differentiable)
from jaxroot.base.params import NewtonParameters
from jaxroot.base.types import ArrayLike
from jaxroot.root.types import NewtonResult, Status

log = jaxroot.get_logger("jaxroot.root.newton")

Function = Union[DifferentiableFunction, Callable]


def _step(
    f: DifferentiableFunction, x: float, params: NewtonParameters
) -> Union[Status, float]:
    """One Newton iteration at `x`, the next iterate or the terminal status"""
    if not math.isfinite(x):
        return Status.EVALUATION_FAILED

    try:
        fx = f.evaluate(x)
    except Exception:  # pylint: disable=broad-except
        log.debug("Evaluation failed at x=%r", x, exc_info=True)
        return Status.EVALUATION_FAILED
    if not math.isfinite(fx):
        return Status.EVALUATION_FAILED

    if abs(fx) < params.tolerance:
        return Status.CONVERGED

    try:
        dfx = f.differentiate(x)
    except Exception:  # pylint: disable=broad-except
        log.debug("Differentiation failed at x=%r", x, exc_info=True)
        return Status.DERIVATIVE_FAILED
    if not math.isfinite(dfx):
        return Status.DERIVATIVE_FAILED

    if abs(dfx) < params.derivative_threshold:
        return Status.FLAT_DERIVATIVE

    step = fx / dfx if dfx != 0.0 else math.inf
    if abs(step) > params.divergence_bound:
        return Status.STEP_DIVERGED

    x_next = x - step
    if abs(x_next) > params.divergence_bound:
        return Status.ITERATE_DIVERGED

    log.debug("x=%r f(x)=%r f'(x)=%r -> %r", x, fx, dfx, x_next)
    return x_next


def solve(
    f: Function,
    initial_guess: ArrayLike,
    params: Optional[NewtonParameters] = None,
) -> NewtonResult:
    """Search a root of `f` with Newton's method, starting at `initial_guess`.

    :param f: scalar function, either a :class:`DifferentiableFunction` or a
        callable composed of `jax.numpy` operations, which is differentiated
        by JAX
    :param initial_guess: start of the search
    :param params: tolerance, iteration budget and guard thresholds

    :returns: the root together with the reason the search ended
    """
    params = NewtonParameters() if params is None else params
    f = as_differentiable(f)
    x = float(initial_guess)

    for iteration in range(1, params.max_iterations + 1):
        with f.scope():
            outcome = _step(f, x, params)

        if outcome is Status.CONVERGED:
            log.debug("Converged to %r after %d iterations", x, iteration)
            return NewtonResult(x, Status.CONVERGED, iteration)
        if isinstance(outcome, Status):
            log.debug(
                "No root from %r: %s after %d iterations",
                initial_guess, outcome.name, iteration)
            return NewtonResult.failure(outcome, iteration)
        x = outcome

    log.debug(
        "No root from %r within %d iterations",
        initial_guess, params.max_iterations)
    return NewtonResult.failure(Status.EXHAUSTED, params.max_iterations)


def find_root(
    f: Function,
    initial_guess: ArrayLike,
    tolerance: float = 1e-6,
    max_iterations: int = 100,
) -> float:
    """Root of `f` near `initial_guess`, NO_ROOT if none was found.

    See :func:`solve` for the reason a search failed.
    """
    params = NewtonParameters(
        tolerance=tolerance, max_iterations=max_iterations)
    return solve(f, initial_guess, params).root
