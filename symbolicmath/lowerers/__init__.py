from .cvxpy import (
    CvxpyLowerer,
    bound_constraints,
    lower_linear_constraint,
    lower_to_cvxpy,
    make_variable_map,
)
from .jax import JaxLowerer, lower_to_jax

__all__ = [
    "CvxpyLowerer",
    "JaxLowerer",
    "bound_constraints",
    "lower_linear_constraint",
    "lower_to_cvxpy",
    "lower_to_jax",
    "make_variable_map",
]
