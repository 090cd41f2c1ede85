from __future__ import annotations

import dataclasses
import enum

from jaxroot.base.types import NO_ROOT, is_no_root


class Status(enum.IntEnum):
    """Terminal outcome of a Newton-Raphson search"""

    CONVERGED = 0
    EVALUATION_FAILED = 1
    DERIVATIVE_FAILED = 2
    FLAT_DERIVATIVE = 3
    STEP_DIVERGED = 4
    ITERATE_DIVERGED = 5
    EXHAUSTED = 6


@dataclasses.dataclass(frozen=True)
class NewtonResult:
    """Result of a Newton-Raphson search.

    Parameters:
        root (float): the root, NO_ROOT unless the search converged
        status (Status): why the search ended
        iterations (int): number of iterations entered
    """

    root: float
    status: Status
    iterations: int

    @property
    def converged(self) -> bool:
        return self.status is Status.CONVERGED

    @classmethod
    def failure(cls, status: Status, iterations: int) -> NewtonResult:
        return cls(NO_ROOT, status, iterations)

    def __post_init__(self):
        if self.converged == is_no_root(self.root):
            raise ValueError(
                f"Inconsistent result: root {self.root} with status "
                f"{self.status.name}")
