from .lax_newton import NewtonState, newton_1d, to_result
from .newton import find_root, solve
from .types import NewtonResult, Status
