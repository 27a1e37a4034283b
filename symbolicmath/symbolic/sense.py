from enum import Enum

from symbolicmath.errors import InvalidSenseError


class ConstrSense(Enum):
    """Relational operator of a constraint.

    The values follow the byte encoding Gurobi uses for constraint senses, so a
    sense can be handed to a solver interface without translation.
    """

    EQUAL = "="
    LESS_THAN_EQUAL = "<"
    GREATER_THAN_EQUAL = ">"

    def check(self) -> None:
        ConstrSense.validate(self)

    @staticmethod
    def validate(sense) -> None:
        """Raise InvalidSenseError unless ``sense`` is a ConstrSense member."""
        if not isinstance(sense, ConstrSense):
            raise InvalidSenseError(sense)

    def __str__(self):
        return {
            ConstrSense.EQUAL: "=",
            ConstrSense.LESS_THAN_EQUAL: "<=",
            ConstrSense.GREATER_THAN_EQUAL: ">=",
        }[self]
