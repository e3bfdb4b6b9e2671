"""Linear integer programs and their LP and MPS text forms."""

from __future__ import annotations

from enum import Enum, auto
from pathlib import Path
from typing import Any

from gemkit.constraint import LinearConstraint, Relation
from gemkit.expression import LinearExpression, format_number
from gemkit.program import Program, ProgramType, Sense
from gemkit.variable import ProgramError, VariableType

MPS_DECIMALS = 6
"""Number of decimals written for coefficients and right-hand sides in MPS output."""

OBJECTIVE_ROW = "OBJ"
"""Name of the objective row in the constraint matrix."""

_MPS_ROW_TYPES = {
    Relation.EQUAL: "E",
    Relation.GREATER_EQ: "G",
    Relation.LESS_EQ: "L",
}


class _TextWriter:
    """Collects lines of text with a tab indentation level."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._level = 0

    def dump(self, text: str) -> None:
        self._lines.append("\t" * self._level + text)

    def new_line(self) -> None:
        self._lines.append("")

    def indent(self) -> None:
        self._level += 1

    def unindent(self) -> None:
        self._level = max(0, self._level - 1)

    def text(self) -> str:
        return "\n".join(self._lines) + "\n"


class OutputFormat(Enum):
    """The text format used to write a linear program."""

    LP = auto()
    MPS = auto()


class LinearProgram(Program):
    """An integer program with a linear objective and linear constraints."""

    def __init__(self, sense: Sense) -> None:
        super().__init__(sense)
        self.output = OutputFormat.LP
        self.objective = LinearExpression()
        self.constraints: dict[str, LinearConstraint] = {}

    @property
    def program_type(self) -> ProgramType:
        return ProgramType.LINEAR

    def add_constraint(self, constraint: LinearConstraint) -> None:
        """Add a constraint and register its variables; a constraint already present is ignored."""
        if constraint.id in self.constraints:
            return
        for variable, coefficient in constraint.expression.terms.items():
            variable.add_column(constraint.id, coefficient)
            self.add_variable(variable)
        self.constraints[constraint.id] = constraint

    def set_objective(self, expression: LinearExpression) -> None:
        """Set the objective function and register its variables."""
        for variable, coefficient in expression.terms.items():
            variable.add_column(OBJECTIVE_ROW, coefficient)
            self.add_variable(variable)
        self.objective = expression

    def __iadd__(self, other: Any) -> LinearProgram:
        if isinstance(other, LinearConstraint):
            self.add_constraint(other)
            return self
        if isinstance(other, LinearExpression):
            self.set_objective(other)
            return self
        return NotImplemented

    def _sorted_constraints(self) -> list[LinearConstraint]:
        return [self.constraints[key] for key in sorted(self.constraints)]

    def to_lp(self) -> str:
        """Return the program in the LP text format."""
        out = _TextWriter()
        out.dump("Minimize" if self.sense is Sense.MINIMIZE else "Maximize")
        out.indent()
        out.dump(str(self.objective))
        out.unindent()

        out.dump("Subject To")
        out.indent()
        for constraint in self._sorted_constraints():
            out.dump(str(constraint))
        out.unindent()

        out.dump("Bounds")
        out.indent()
        for variable in self.variables.values():
            if variable.type is not VariableType.BINARY or not variable.is_active():
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

    def to_mps(self) -> str:
        """Return the program in the MPS text format."""
        out = _TextWriter()
        out.dump("NAME\tGEM++")
        out.dump("OBJSENSE")
        out.indent()
        out.dump("MIN" if self.sense is Sense.MINIMIZE else "MAX")
        out.unindent()

        constraints = self._sorted_constraints()

        out.dump("ROWS")
        out.indent()
        if self.objective.is_set():
            out.dump(f"N\t{OBJECTIVE_ROW}")
        for constraint in constraints:
            out.dump(f"{_MPS_ROW_TYPES[constraint.relation]}\t{constraint.id}")
        out.unindent()

        out.dump("COLUMNS")
        out.indent()
        for variable in self.variables.values():
            for row, coefficient in variable.columns.items():
                space = " " if coefficient >= 0 else ""
                out.dump(f"{variable.id}\t{row}\t{space}{coefficient:.{MPS_DECIMALS}f}")
            out.new_line()
        out.unindent()

        out.dump("RHS")
        out.indent()
        for constraint in constraints:
            out.dump(f"RHS\t\t{constraint.id}\t{constraint.rhs:.{MPS_DECIMALS}f}")
        out.unindent()

        out.dump("BOUNDS")
        out.indent()
        for variable in self.variables.values():
            if variable.type is VariableType.BINARY:
                out.dump(f"BV\tBOUND\t{variable.id}")
            elif variable.type is VariableType.BOUNDED:
                out.dump(f"UI\tBOUND\t{variable.id}\t{variable.upper_bound}")
                out.dump(f"LI\tBOUND\t{variable.id}\t{variable.lower_bound}")
            else:
                out.dump(f"UP\tBOUND\t{variable.id}\t{format_number(variable.upper_bound)}")
                out.dump(f"LO\tBOUND\t{variable.id}\t{format_number(variable.lower_bound)}")
        out.unindent()
        out.dump("ENDATA")
        return out.text()

    def render(self) -> str:
        """Return the program in its current output format."""
        if self.output is OutputFormat.MPS:
            return self.to_mps()
        return self.to_lp()

    def save(self, filename: str | Path) -> None:
        """Write the program to a file, in the format given by its .lp or .mps extension."""
        name = str(filename)
        lowered = name.lower()
        if lowered.endswith(".mps"):
            self.output = OutputFormat.MPS
        elif lowered.endswith(".lp"):
            self.output = OutputFormat.LP
        else:
            raise ProgramError(f"{name} is not a *.mps nor *.lp file.")
        Path(name).write_text(self.render(), encoding="utf-8")