"""Base class of integer programs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum, auto

from gemkit.variable import ProgramError, Variable


class Sense(Enum):
    """The direction of the optimisation."""

    MINIMIZE = auto()
    MAXIMIZE = auto()


class ProgramType(Enum):
    """The kind of program."""

    LINEAR = auto()
    QUADRATIC = auto()


class Program(ABC):
    """An integer program: a sense and the variables used by its objective and constraints."""

    def __init__(self, sense: Sense) -> None:
        self.sense = sense
        self.variables: dict[str, Variable] = {}

    @property
    @abstractmethod
    def program_type(self) -> ProgramType:
        """The kind of this program."""

    def add_variable(self, variable: Variable) -> None:
        """Register a variable under its identifier, replacing any previous one."""
        self.variables[variable.id] = variable

    def variable(self, variable_id: str) -> Variable:
        """Return the variable with identifier ``variable_id``."""
        try:
            return self.variables[variable_id]
        except KeyError:
            raise ProgramError(
                f"The requested variable {variable_id} is not present in the program"
            ) from None