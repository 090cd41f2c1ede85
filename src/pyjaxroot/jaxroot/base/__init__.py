from .differentiable import (
    DifferentiableFunction, ExplicitDerivative, JaxFunction,
    as_differentiable)
from .params import NewtonParameters
from .types import NO_ROOT, is_no_root
