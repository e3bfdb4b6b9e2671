"""Base class of the mathematical programming formulations of graph matching problems."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from gemkit.linear_program import LinearProgram
from gemkit.program import Program
from gemkit.quad_program import QuadProgram
from gemkit.variable import ProgramError


class CutMethod(Enum):
    """How a solution already found is excluded from the program."""

    SOLUTION = "Solution"
    MATCHINGS = "Matchings"
    ELEMENTS = "Elements"

    @staticmethod
    def from_name(name: str) -> CutMethod:
        """Return the method whose name starts with ``name``, ignoring case."""
        wanted = name.casefold()
        for method in CutMethod:
            if method.value.casefold().startswith(wanted):
                return method
        raise ValueError(
            f"Cut method '{name}' not recognized, please use s(olution), "
            "m(atchings) or e(lements)."
        )

    def to_name(self) -> str:
        """Return the name of the method."""
        return self.value


class Formulation(ABC):
    """A formulation builds the program that solves a graph matching problem.

    Subclasses create ``_lp`` or ``_qp`` and fill it through the initialisation hooks.
    The problem is expected to expose ``query`` and ``target`` graphs with
    ``vertex_count``, ``edge_count`` and ``directed``.
    """

    def __init__(self, problem: Any = None, induced: bool = False) -> None:
        self.problem = problem
        self.induced = induced
        self.program: Program | None = None
        self._lp: LinearProgram | None = None
        self._qp: QuadProgram | None = None
        self.n_vp = self.n_vt = self.n_ep = self.n_et = 0
        self.is_directed = False

    @property
    def linear_program(self) -> LinearProgram | None:
        """The linear program of the formulation."""
        if isinstance(self.program, QuadProgram):
            raise ProgramError("A quadratic formulation has no linear program")
        return self._lp

    @property
    def quad_program(self) -> QuadProgram | None:
        """The quadratic program of the formulation."""
        if isinstance(self.program, LinearProgram):
            raise ProgramError("A linear formulation has no quadratic program")
        return self._qp

    def initialize(self, up: float = 1.0) -> None:
        """Build the program: variables, costs, restriction, constraints, objective."""
        if self.problem is None:
            raise ProgramError("The formulation has no problem to solve")
        query, target = self.problem.query, self.problem.target
        self.n_vp = query.vertex_count
        self.n_vt = target.vertex_count
        self.n_ep = query.edge_count
        self.n_et = target.edge_count
        self.is_directed = bool(query.directed)
        self._init_variables()
        self._init_costs()
        self._restrict_problem(up)
        self._init_constraints()
        self._init_objective()
        if self._lp is not None:
            self.program = self._lp
        elif self._qp is not None:
            self.program = self._qp
        else:
            raise ProgramError(
                "The program has not been created during formulation initialization"
            )

    @abstractmethod
    def cut(self, solution: Any, method: CutMethod) -> None:
        """Add constraints that exclude ``solution`` according to ``method``."""

    @abstractmethod
    def _init_variables(self) -> None:
        """Create the substitution variables."""

    @abstractmethod
    def _init_costs(self) -> None:
        """Compute the substitution and creation costs."""

    @abstractmethod
    def _restrict_problem(self, up: float) -> None:
        """Deactivate variables according to the costs and the approximation parameter."""

    @abstractmethod
    def _init_constraints(self) -> None:
        """Create the constraints."""

    @abstractmethod
    def _init_objective(self) -> None:
        """Create the objective function."""