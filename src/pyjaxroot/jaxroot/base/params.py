import dataclasses
import numbers
from typing import Dict


@dataclasses.dataclass(frozen=True)
class NewtonParameters:
    """
    Configuration of a Newton-Raphson root search

    :param tolerance: a point x is a root once |f(x)| < tolerance
    :param max_iterations: iteration budget
    :param derivative_threshold: derivatives with smaller magnitude are
        considered flat and end the search
    :param divergence_bound: largest admissible magnitude of a Newton step
        and of the next iterate
    """

    tolerance: float = 1e-6
    max_iterations: int = 100
    derivative_threshold: float = 1e-12
    divergence_bound: float = 1e10

    def __post_init__(self):
        if not self.tolerance > 0.0:
            raise ValueError(
                f"tolerance has to be positive, got {self.tolerance}")
        if isinstance(self.max_iterations, bool) or not isinstance(
                self.max_iterations, numbers.Integral):
            raise ValueError(
                "max_iterations has to be an integer, got "
                f"{self.max_iterations!r}")
        if self.max_iterations < 1:
            raise ValueError(
                f"max_iterations has to be at least 1, got "
                f"{self.max_iterations}")
        if not self.derivative_threshold >= 0.0:
            raise ValueError(
                "derivative_threshold must not be negative, got "
                f"{self.derivative_threshold}")
        if not self.divergence_bound > 0.0:
            raise ValueError(
                "divergence_bound has to be positive, got "
                f"{self.divergence_bound}")

    def as_dict(self) -> Dict:
        return {
            "tolerance": self.tolerance,
            "max_iterations": self.max_iterations,
            "derivative_threshold": self.derivative_threshold,
            "divergence_bound": self.divergence_bound}
