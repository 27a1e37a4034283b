import math
from dataclasses import dataclass, field


@dataclass
class VariableConfig:
    """Defaults an Environment applies when a variable is created without explicit values.

    Attributes:
        lower: Default lower bound of continuous and integer variables. Defaults to -inf.
        upper: Default upper bound of continuous and integer variables. Defaults to +inf.
        name_prefix: Prefix of generated variable names; the variable ID is appended
            after an underscore, e.g. "x_3". Defaults to "x".
    """

    lower: float = -math.inf
    upper: float = math.inf
    name_prefix: str = "x"

    def __post_init__(self):
        if self.lower > self.upper:
            raise ValueError(
                f"VariableConfig lower bound ({self.lower}) must not exceed upper bound "
                f"({self.upper})"
            )


@dataclass
class EnvironmentConfig:
    """Configuration for variable environments.

    Main arguments:
    These are the arguments most commonly used day-to-day.

    Attributes:
        variables: Defaults applied to every variable created in the environment.

    Other arguments:
    These arguments are less frequently used, and for most purposes you shouldn't need
    to understand these.

    Attributes:
        thread_safe: Whether ID allocation is guarded by a lock so that several threads
            can allocate from the same environment. Defaults to True.
    """

    variables: VariableConfig = field(default_factory=VariableConfig)
    thread_safe: bool = True
