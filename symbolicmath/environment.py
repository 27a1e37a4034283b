import contextlib
import threading
from typing import Iterator, List, Optional

from symbolicmath.config import EnvironmentConfig
from symbolicmath.symbolic.variable import Variable, VarType
from symbolicmath.symbolic.variable_matrix import VariableMatrix
from symbolicmath.symbolic.variable_vector import VariableVector


class Environment:
    """Registry that allocates variables with consecutive IDs.

    Every variable belongs to exactly one environment; IDs start at 0 and grow
    by one with each allocation. IDs are only unique within an environment, so
    variables from different environments cannot be combined in one expression.
    Allocation, including a whole vector or matrix, is guarded by a lock unless
    the configuration disables it.

    Args:
        name: Label of the environment
        config: Defaults for new variables. Defaults to ``EnvironmentConfig()``.

    Example:
        env = Environment("model")
        x = env.new_continuous_variable(lower=0.0)
        z = env.new_variable_vector(3)
    """

    def __init__(self, name: str = "Environment", config: Optional[EnvironmentConfig] = None):
        self.name = name
        self.config = config if config is not None else EnvironmentConfig()
        self._variables: List[Variable] = []
        self._lock = threading.Lock() if self.config.thread_safe else contextlib.nullcontext()

    @property
    def variables(self) -> List[Variable]:
        return list(self._variables)

    def _bounds(self, var_type: VarType, lower: Optional[float], upper: Optional[float]):
        defaults = self.config.variables
        if var_type == VarType.BINARY:
            lower = 0.0 if lower is None else lower
            upper = 1.0 if upper is None else upper
        else:
            lower = defaults.lower if lower is None else lower
            upper = defaults.upper if upper is None else upper
        return lower, upper

    def _allocate(
        self,
        count: int,
        var_type: VarType,
        lower: Optional[float],
        upper: Optional[float],
        name: Optional[str] = None,
    ) -> List[Variable]:
        """Allocate ``count`` variables with consecutive IDs under a single lock.

        All variables are validated before any is registered, so a failed
        allocation consumes no IDs.
        """
        lower, upper = self._bounds(var_type, lower, upper)
        prefix = self.config.variables.name_prefix

        with self._lock:
            start = len(self._variables)
            batch = []
            for next_id in range(start, start + count):
                variable = Variable(
                    next_id,
                    lower=lower,
                    upper=upper,
                    var_type=var_type,
                    name=name if name is not None else f"{prefix}_{next_id}",
                    environment=self,
                )
                variable.check()
                batch.append(variable)
            self._variables.extend(batch)
        return batch

    def new_variable(
        self,
        var_type: VarType = VarType.CONTINUOUS,
        lower: Optional[float] = None,
        upper: Optional[float] = None,
        name: Optional[str] = None,
    ) -> Variable:
        """Allocate a variable with the next free ID.

        Unset bounds fall back to ``[0, 1]`` for binary variables and to the
        configured defaults otherwise.

        Raises:
            StructuralError: If the resulting bounds are inconsistent
        """
        return self._allocate(1, var_type, lower, upper, name)[0]

    def new_continuous_variable(
        self, lower: Optional[float] = None, upper: Optional[float] = None, name: Optional[str] = None
    ) -> Variable:
        return self.new_variable(VarType.CONTINUOUS, lower, upper, name)

    def new_binary_variable(self, name: Optional[str] = None) -> Variable:
        return self.new_variable(VarType.BINARY, name=name)

    def new_integer_variable(
        self, lower: Optional[float] = None, upper: Optional[float] = None, name: Optional[str] = None
    ) -> Variable:
        return self.new_variable(VarType.INTEGER, lower, upper, name)

    def new_variable_vector(
        self,
        n: int,
        var_type: VarType = VarType.CONTINUOUS,
        lower: Optional[float] = None,
        upper: Optional[float] = None,
    ) -> VariableVector:
        """Allocate ``n`` variables with consecutive IDs and return them as a vector."""
        if n < 1:
            raise ValueError(f"a variable vector needs at least one entry; received n={n}")
        return VariableVector(self._allocate(n, var_type, lower, upper))

    def new_variable_matrix(
        self,
        n_rows: int,
        n_cols: int,
        var_type: VarType = VarType.CONTINUOUS,
        lower: Optional[float] = None,
        upper: Optional[float] = None,
    ) -> VariableMatrix:
        """Allocate an ``n_rows x n_cols`` grid of variables, IDs increasing row by row."""
        if n_rows < 1 or n_cols < 1:
            raise ValueError(
                f"a variable matrix needs at least one row and column; received "
                f"({n_rows}, {n_cols})"
            )
        entries = self._allocate(n_rows * n_cols, var_type, lower, upper)
        return VariableMatrix([entries[ii * n_cols : (ii + 1) * n_cols] for ii in range(n_rows)])

    def find(self, id: int) -> Optional[Variable]:
        """Return the variable with the given ID, or None."""
        if 0 <= id < len(self._variables):
            return self._variables[id]
        return None

    def __len__(self):
        return len(self._variables)

    def __iter__(self) -> Iterator[Variable]:
        return iter(list(self._variables))

    def __contains__(self, variable) -> bool:
        return isinstance(variable, Variable) and self.find(variable.id) is variable

    def __repr__(self):
        return f"Environment(name={self.name!r}, n_variables={len(self._variables)})"
