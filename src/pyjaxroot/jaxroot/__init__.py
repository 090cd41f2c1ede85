import logging

from jax import config

# Set up the standard logger configuration
jaxroot_logger = logging.getLogger("jaxroot")

if not jaxroot_logger.hasHandlers():
    # Configure the logger if it has no handlers
    logging.basicConfig(level=logging.WARN)
    jaxroot_logger.setLevel(logging.INFO)


def get_logger(name: str):
    if name == jaxroot_logger.name:
        return jaxroot_logger
    if name.startswith(jaxroot_logger.name + "."):
        name = name[len(jaxroot_logger.name) + 1:]
    return jaxroot_logger.getChild(name)


# iterates are double precision
config.update("jax_enable_x64", True)

# pylint: disable=wrong-import-position
from jaxroot.base.types import NO_ROOT, is_no_root
from jaxroot.base.params import NewtonParameters
from jaxroot.base.differentiable import (
    DifferentiableFunction,
    ExplicitDerivative,
    JaxFunction,
    as_differentiable,
)
from jaxroot.root.types import NewtonResult, Status
from jaxroot.root.newton import find_root, solve
from jaxroot.root.lax_newton import NewtonState, newton_1d, to_result
