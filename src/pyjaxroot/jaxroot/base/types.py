from __future__ import annotations

import math
from typing import Union

import jax
import numpy as np

ArrayLike = Union[jax.Array, np.ndarray, float]

# Returned in place of a root when none was found
NO_ROOT = math.nan


def is_no_root(value: ArrayLike) -> bool:
    """Whether `value` is the NO_ROOT signal rather than a root."""
    return bool(np.isnan(value))
