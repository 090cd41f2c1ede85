"""Point-wise access to a scalar function and its first derivative.

The root finders only see the :class:`DifferentiableFunction` interface, so
how the derivative is obtained (automatic differentiation through JAX, a
closed form, finite differences) is up to the implementation.
"""
import abc
import contextlib
from typing import Any, Callable, Iterator, List, Optional

import jax
import jax.numpy as jnp


class DifferentiableFunction(abc.ABC):
    """Scalar function that can be evaluated and differentiated at a point.

    Both operations may raise or return non-finite values, callers have to
    handle either.
    """

    @abc.abstractmethod
    def evaluate(self, x: float) -> float:
        """Value of the function at `x`."""

    @abc.abstractmethod
    def differentiate(self, x: float) -> float:
        """First derivative of the function at `x`."""

    def release(self) -> None:
        """Drop state kept for the last point (graphs, device buffers)."""

    @contextlib.contextmanager
    def scope(self) -> Iterator["DifferentiableFunction"]:
        """Release the per-point state on every exit from the block."""
        try:
            yield self
        finally:
            self.release()


def _delete(buffer: Any) -> None:
    if isinstance(buffer, jax.Array) and not buffer.is_deleted():
        buffer.delete()


class JaxFunction(DifferentiableFunction):
    """Differentiates `fn` with reverse-mode automatic differentiation.

    `evaluate` linearizes `fn` at the point via `jax.vjp` and keeps the
    pullback, so a following `differentiate` at the same point reuses the
    graph that produced the value instead of tracing `fn` again.

    Parameters:
        fn (Callable): maps a scalar float64 `jax.Array` to a scalar,
            composed of `jax.numpy` operations
    """

    def __init__(self, fn: Callable[[jax.Array], jax.Array]):
        self.fn = fn
        self._point: Optional[float] = None
        self._dtype = jnp.float64
        self._pullback: Optional[Callable] = None
        self._buffers: List[jax.Array] = []

    def _linearize(self, x: float) -> jax.Array:
        self.release()
        primal = jnp.asarray(x, dtype=jnp.float64)
        self._buffers.append(primal)
        value, pullback = jax.vjp(self.fn, primal)
        if jnp.ndim(value) != 0:
            raise ValueError(
                f"Expected a scalar function value, got shape "
                f"{jnp.shape(value)}")
        self._point = x
        self._dtype = jnp.result_type(value)
        self._pullback = pullback
        return value

    def evaluate(self, x: float) -> float:
        return float(self._linearize(float(x)))

    def differentiate(self, x: float) -> float:
        x = float(x)
        if self._pullback is None or self._point != x:
            self._linearize(x)
        cotangent = jnp.array(1.0, dtype=self._dtype)
        self._buffers.append(cotangent)
        (grad,) = self._pullback(cotangent)
        self._buffers.append(grad)
        return float(grad)

    def release(self) -> None:
        self._point = None
        self._pullback = None
        for buffer in self._buffers:
            _delete(buffer)
        self._buffers.clear()


class ExplicitDerivative(DifferentiableFunction):
    """Function with a caller supplied derivative.

    Parameters:
        fn (Callable): the function
        dfn (Callable): its first derivative
    """

    def __init__(self, fn: Callable[[float], Any], dfn: Callable[[float], Any]):
        self.fn = fn
        self.dfn = dfn

    def evaluate(self, x: float) -> float:
        return float(self.fn(x))

    def differentiate(self, x: float) -> float:
        return float(self.dfn(x))


def as_differentiable(f) -> DifferentiableFunction:
    """Wrap plain callables into a :class:`JaxFunction`."""
    if isinstance(f, DifferentiableFunction):
        return f
    if callable(f):
        return JaxFunction(f)
    raise TypeError(
        f"Expected a callable or DifferentiableFunction, got {type(f)}")
