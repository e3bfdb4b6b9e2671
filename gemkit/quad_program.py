"""Quadratic integer programs."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from gemkit.constraint import LinearConstraint, QuadConstraint
from gemkit.linear_program import OBJECTIVE_ROW, _TextWriter
from gemkit.program import Program, ProgramType, Sense
from gemkit.quad_expression import QuadExpression
from gemkit.variable import VariableType


class QuadProgram(Program):
    """An integer program with a quadratic objective and linear or quadratic constraints."""

    def __init__(self, sense: Sense) -> None:
        super().__init__(sense)
        self.objective = QuadExpression()
        self.linear_constraints: dict[str, LinearConstraint] = {}
        self.quad_constraints: dict[str, QuadConstraint] = {}

    @property
    def program_type(self) -> ProgramType:
        return ProgramType.QUADRATIC

    def _knows(self, constraint_id: str) -> bool:
        return constraint_id in self.linear_constraints or constraint_id in self.quad_constraints

    def add_linear_constraint(self, constraint: LinearConstraint) -> None:
        """Add a linear constraint and register its variables; one already present is ignored."""
        if self._knows(constraint.id):
            return
        for variable, coefficient in constraint.expression.terms.items():
            variable.add_column(constraint.id, coefficient)
            self.add_variable(variable)
        self.linear_constraints[constraint.id] = constraint

    def add_quad_constraint(self, constraint: QuadConstraint) -> None:
        """Add a quadratic constraint and register its variables; one already present is ignored.

        Only the linear terms contribute matrix columns.
        """
        if self._knows(constraint.id):
            return
        expression = constraint.expression
        for variable, coefficient in expression.terms.items():
            variable.add_column(constraint.id, coefficient)
            self.add_variable(variable)
        for quad in expression.quad_terms:
            self.add_variable(quad.first)
            self.add_variable(quad.second)
        self.quad_constraints[constraint.id] = constraint

    def set_objective(self, expression: QuadExpression) -> None:
        """Set the objective function and register its variables."""
        for variable, coefficient in expression.terms.items():
            variable.add_column(OBJECTIVE_ROW, coefficient)
            self.add_variable(variable)
        for quad in expression.quad_terms:
            self.add_variable(quad.first)
            self.add_variable(quad.second)
        self.objective = expression

    def __iadd__(self, other: Any) -> QuadProgram:
        if isinstance(other, LinearConstraint):
            self.add_linear_constraint(other)
            return self
        if isinstance(other, QuadConstraint):
            self.add_quad_constraint(other)
            return self
        if isinstance(other, QuadExpression):
            self.set_objective(other)
            return self
        return NotImplemented

    def render(self) -> str:
        """Return the program in the LP text format."""
        out = _TextWriter()
        out.dump("Minimize" if self.sense is Sense.MINIMIZE else "Maximize")
        out.indent()
        out.dump(str(self.objective))
        out.unindent()

        out.dump("Subject To")
        out.indent()
        for key in sorted(self.linear_constraints):
            out.dump(str(self.linear_constraints[key]))
        for key in sorted(self.quad_constraints):
            out.dump(str(self.quad_constraints[key]))
        out.unindent()

        out.dump("Bounds")
        out.indent()
        for variable in self.variables.values():
            if variable.type is VariableType.BOUNDED:
                out.dump(
                    f"{variable.lower_bound} <= {variable.id} <= {variable.upper_bound}"
                )
        out.unindent()

        out.dump("Generals")
        out.indent()
        for variable in self.variables.values():
            if variable.type is VariableType.BOUNDED:
                out.dump(variable.id)
        out.unindent()

        out.dump("Binaries")
        out.indent()
        for variable in self.variables.values():
            if variable.type is VariableType.BINARY:
                out.dump(variable.id)
        out.unindent()
        out.dump("End")
        return out.text()

    def save(self, filename: str | Path) -> None:
        """Write the program to a file."""
        Path(filename).write_text(self.render(), encoding="utf-8")