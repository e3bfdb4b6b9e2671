"""Solutions of graph matching formulations."""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any

from gemkit.expression import format_number
from gemkit.linear_program import _TextWriter
from gemkit.program import Sense

PRECISION_DECIMALS = 6
"""Number of decimals kept in objective values."""


def round_at_precision(value: float) -> float:
    """Round ``value`` to the working precision; infinities are kept as they are."""
    if math.isinf(value) or math.isnan(value):
        return value
    return round(value, PRECISION_DECIMALS)


class Status(Enum):
    """The status of a solution, as reported by the solver."""

    NOT_SOLVED = "not solved"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"
    SUBOPTIMAL = "suboptimal"
    OPTIMAL = "optimal"

    @staticmethod
    def from_name(name: str) -> Status:
        """Return the status whose name starts with ``name``, ignoring case."""
        wanted = name.casefold()
        for status in Status:
            if status.value.casefold().startswith(wanted):
                return status
        raise ValueError(
            f"Solution status '{name}' not recognized, please use n(ot solved),\n"
            "i(nfeasible), u(nbounded), s(uboptimal) or o(ptimal)."
        )

    def to_name(self) -> str:
        """Return the name of the status."""
        return self.value


def _edge_line(kind: str, edge: Any) -> str:
    return f'<edge type="{kind}" from="{edge.origin.index}" to="{edge.target.index}"/>'


class Solution:
    """A solution of a formulation: the variables set to a non-zero value.

    Variables named ``x_<i>,<k>`` record vertex substitutions and variables named
    ``y_<ij>,<kl>`` record edge substitutions. Rendering expects the problem of the
    formulation to expose ``query`` and ``target`` graphs (``vertex_count``,
    ``edge_count``, ``vertex(i).cost``, ``edge(ij)`` with ``cost``, ``origin.index``
    and ``target.index``), ``cost(element, i, k)`` with element ``"vertex"`` or
    ``"edge"``, and ``is_subgraph``.
    """

    def __init__(self, formulation: Any) -> None:
        self.formulation = formulation
        self.variables: dict[Any, int] = {}
        self.x_variables: dict[int, int] = {}
        self.y_variables: dict[int, int] = {}
        self.status = Status.NOT_SOLVED
        self._objective = math.inf
        self.clean()

    @property
    def objective(self) -> float:
        """The objective value, rounded at the working precision."""
        return self._objective

    @objective.setter
    def objective(self, value: float) -> None:
        self._objective = round_at_precision(float(value))

    def add_variable(self, variable: Any, value: int) -> None:
        """Record the value of a variable; zero values are ignored."""
        if not value:
            return
        self.variables[variable] = value
        identifier = variable.id
        if identifier.startswith("x_"):
            target = self.x_variables
        elif identifier.startswith("y_"):
            target = self.y_variables
        else:
            return
        first, second = identifier[2:].split(",")[:2]
        target[int(first)] = int(second)
        ordered = dict(sorted(target.items()))
        target.clear()
        target.update(ordered)

    def value(self, variable: Any) -> int:
        """Return the value of ``variable`` in the solution, 0 if it is not set."""
        return self.variables.get(variable, 0)

    def active_index(self, index: int, left: bool) -> int:
        """Return the position of the vertex substitution involving a known vertex.

        ``left`` tells whether ``index`` is a query vertex or a target vertex.
        Returns -1 when no such substitution is set.
        """
        pattern = re.compile(rf"x_{index},.+" if left else rf"x_.+,{index}")
        for position, variable in enumerate(self.variables):
            if pattern.fullmatch(variable.id):
                return position
        return -1

    def is_valid(self) -> bool:
        """Tell whether the solution is suboptimal or optimal."""
        return self.status in (Status.SUBOPTIMAL, Status.OPTIMAL)

    def clean(self) -> None:
        """Forget the variable values and reset the objective and the status."""
        self.variables.clear()
        sense = self.formulation.program.sense
        self._objective = math.inf if sense is Sense.MINIMIZE else -math.inf
        self.status = Status.NOT_SOLVED

    def render_solution(self) -> str:
        """Return the solution as XML elements."""
        out = _TextWriter()
        self._write_solution(out)
        return out.text()

    def _write_solution(self, out: _TextWriter) -> None:
        out.dump(
            f'<objective status="{self.status.to_name()}" '
            f'value="{format_number(self._objective)}"/>'
        )
        if not self.is_valid():
            return
        problem = self.formulation.problem
        query, target = problem.query, problem.target
        not_subgraph = not problem.is_subgraph

        out.dump("<nodes>")
        out.indent()
        for i, k in self.x_variables.items():
            out.dump(f'<substitution cost="{format_number(problem.cost("vertex", i, k))}">')
            out.indent()
            out.dump(f'<node type="query" index="{i}"/>')
            out.dump(f'<node type="target" index="{k}"/>')
            out.unindent()
            out.dump("</substitution>")
        matched = len(self.x_variables)
        if matched < query.vertex_count or (matched < target.vertex_count and not_subgraph):
            for i in range(query.vertex_count):
                if i not in self.x_variables:
                    out.dump(f'<insertion cost="{format_number(query.vertex(i).cost)}">')
                    out.indent()
                    out.dump(f'<node type="query" index="{i}"/>')
                    out.unindent()
                    out.dump("</insertion>")
            if not_subgraph:
                used = set(self.x_variables.values())
                for k in range(target.vertex_count):
                    if k not in used:
                        out.dump(f'<deletion cost="{format_number(target.vertex(k).cost)}">')
                        out.indent()
                        out.dump(f'<node type="target" index="{k}"/>')
                        out.unindent()
                        out.dump("</deletion>")
        out.unindent()
        out.dump("</nodes>")

        out.dump("<edges>")
        out.indent()
        for ij, kl in self.y_variables.items():
            out.dump(f'<substitution cost="{format_number(problem.cost("edge", ij, kl))}">')
            out.indent()
            out.dump(_edge_line("query", query.edge(ij)))
            out.dump(_edge_line("target", target.edge(kl)))
            out.unindent()
            out.dump("</substitution>")
        matched = len(self.y_variables)
        if matched < query.edge_count or (matched < target.edge_count and not_subgraph):
            for ij in range(query.edge_count):
                if ij not in self.y_variables:
                    edge = query.edge(ij)
                    out.dump(f'<insertion cost="{format_number(edge.cost)}">')
                    out.indent()
                    out.dump(_edge_line("query", edge))
                    out.unindent()
                    out.dump("</insertion>")
            if not_subgraph:
                used = set(self.y_variables.values())
                for kl in range(target.edge_count):
                    if kl not in used:
                        edge = target.edge(kl)
                        out.dump(f'<deletion cost="{format_number(edge.cost)}">')
                        out.indent()
                        out.dump(_edge_line("target", edge))
                        out.unindent()
                        out.dump("</deletion>")
        out.unindent()
        out.dump("</edges>")