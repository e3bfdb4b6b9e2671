"""Integer program variables."""

from __future__ import annotations

from enum import Enum, auto
from numbers import Real
from typing import Any

from gemkit.expression import Term


class ProgramError(Exception):
    """Raised when a program or one of its variables is used inconsistently."""


class VariableType(Enum):
    """The domain of a variable."""

    BOUNDED = auto()
    BINARY = auto()
    CONTINUOUS = auto()


class Variable:
    """A variable of an integer program, with bounds, a value and matrix columns.

    Variables compare and hash by identity, so they can key expression terms.
    """

    def __init__(
        self,
        id: str,
        variable_type: VariableType = VariableType.BINARY,
        lower_bound: int = 0,
        upper_bound: int = 1,
    ) -> None:
        self.id = id
        self.type = variable_type
        self.columns: dict[str, float] = {}
        self.activate(lower_bound, upper_bound)
        self._value = self._lower_bound

    @property
    def lower_bound(self) -> int:
        return self._lower_bound

    @lower_bound.setter
    def lower_bound(self, lower_bound: int) -> None:
        if lower_bound > self._upper_bound:
            raise ProgramError(
                f"Illegal lower bound assignment for variable {self.id} : "
                f"LB={lower_bound} > UB={self._upper_bound}"
            )
        if self.type is VariableType.BINARY and lower_bound != 0:
            raise ProgramError(
                f"Illegal lower bound assignment for variable {self.id} : "
                f"LB={lower_bound} must be 0"
            )
        self._lower_bound = lower_bound

    @property
    def upper_bound(self) -> int:
        return self._upper_bound

    @upper_bound.setter
    def upper_bound(self, upper_bound: int) -> None:
        if upper_bound < self._lower_bound:
            raise ProgramError(
                f"Illegal upper bound assignment for variable {self.id} : "
                f"UB={upper_bound} < LB={self._lower_bound}"
            )
        if self.type is VariableType.BINARY and upper_bound not in (0, 1):
            raise ProgramError(
                f"Illegal upper bound assignment for variable {self.id} : "
                f"UB={upper_bound} must be 0 or 1"
            )
        self._upper_bound = upper_bound

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        if value < self._lower_bound or value > self._upper_bound:
            raise ProgramError(
                f"Illegal value assignment for variable {self.id} : {value} is out of "
                f"bounds [{self._lower_bound};{self._upper_bound}]"
            )
        self._value = value

    def activate(self, lower_bound: int = 0, upper_bound: int = 1) -> None:
        """Reset the bounds; a binary variable always gets [0;1]."""
        if self.type is VariableType.BINARY:
            lower_bound, upper_bound = 0, 1
        if lower_bound > upper_bound:
            raise ProgramError(
                f"Illegal bounds for variable {self.id} : "
                f"LB={lower_bound} > UB={upper_bound}"
            )
        self._lower_bound = lower_bound
        self._upper_bound = upper_bound

    def deactivate(self) -> None:
        """Fix the variable to zero by setting both bounds to 0."""
        self._lower_bound = 0
        self._upper_bound = 0

    def is_active(self) -> bool:
        """Tell whether the bounds are not both 0."""
        return self._lower_bound != 0 or self._upper_bound != 0

    def add_column(self, row_id: str, coefficient: float) -> None:
        """Record the coefficient of this variable in the row ``row_id``."""
        self.columns[row_id] = coefficient

    def column(self, row_id: str) -> float:
        """Return the coefficient in the row ``row_id``, 0 if absent."""
        return self.columns.get(row_id, 0.0)

    def eval(self) -> int:
        """Return the current value."""
        return self._value

    def as_term(self) -> Term:
        """Return this variable as a term with coefficient one."""
        return Term(self, 1.0)

    def __mul__(self, coefficient: Any) -> Term:
        if isinstance(coefficient, Real):
            return Term(self, float(coefficient))
        return NotImplemented

    def __rmul__(self, coefficient: Any) -> Term:
        return self.__mul__(coefficient)

    def __neg__(self) -> Term:
        return Term(self, -1.0)

    def __str__(self) -> str:
        return self.id

    def __repr__(self) -> str:
        return (
            f"Variable({self.id!r}, {self.type.name}, "
            f"[{self._lower_bound};{self._upper_bound}])"
        )