"""Formulations of the graph edit distance problem."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from gemkit.constraint import LinearConstraint, Relation
from gemkit.expression import LinearExpression, Term
from gemkit.formulation import CutMethod, Formulation
from gemkit.linear_program import LinearProgram
from gemkit.program import Sense
from gemkit.variable import ProgramError, Variable


class GedMethod(Enum):
    """The method used to solve the graph edit distance problem."""

    LINEAR = "Linear"
    BIPARTITE = "Bipartite"

    @staticmethod
    def from_name(name: str) -> GedMethod:
        """Return the method whose name starts with ``name``, ignoring case."""
        wanted = name.casefold()
        for method in GedMethod:
            if method.value.casefold().startswith(wanted):
                return method
        raise ValueError(
            f"Formulation '{name}' not recognized, please use l(inear), "
            "q(uadratic) or b(ipartite)."
        )

    def to_name(self) -> str:
        """Return the name of the method."""
        return self.value


def _column(matrix: list[list[Any]], index: int) -> list[Any]:
    return [row[index] for row in matrix]


def _edge_ends(graph: Any, index: int) -> tuple[int, int]:
    edge = graph.edge(index)
    return edge.origin.index, edge.target.index


def _incident_edges(graph: Any, vertex_index: int) -> list[int]:
    """Return the indices of the edges entering or leaving a vertex, in edge order."""
    return [
        ij for ij in range(graph.edge_count) if vertex_index in _edge_ends(graph, ij)
    ]


def _add_assignment_constraints(lp: LinearProgram, matrix: list[list[Variable]], columns: int) -> None:
    """Allow each row and each column of ``matrix`` to hold at most one chosen variable."""
    for row in matrix:
        lp.add_constraint(LinearConstraint(LinearExpression.sum(row), Relation.LESS_EQ, 1.0))
    for index in range(columns):
        lp.add_constraint(
            LinearConstraint(
                LinearExpression.sum(_column(matrix, index)), Relation.LESS_EQ, 1.0
            )
        )


def _weighted_sum(variables: list[list[Variable]], costs: list[list[float]]) -> LinearExpression:
    expression = LinearExpression()
    for row, row_costs in zip(variables, costs):
        for variable, cost in zip(row, row_costs):
            expression.add_term(Term(variable, cost))
    return expression


class GraphEditDistance(Formulation):
    """Common part of the graph edit distance formulations.

    ``x_variables[i][k]`` tells whether query vertex ``i`` is substituted by target
    vertex ``k``; ``x_costs[i][k]`` is the substitution cost minus the costs of
    inserting ``i`` and deleting ``k``.
    """

    def __init__(self, problem: Any = None) -> None:
        super().__init__(problem)
        self.x_variables: list[list[Variable]] = []
        self.x_costs: list[list[float]] = []

    def _init_variables(self) -> None:
        self.x_variables = [
            [Variable(f"x_{i},{k}") for k in range(self.n_vt)] for i in range(self.n_vp)
        ]

    def _init_costs(self) -> None:
        query, target = self.problem.query, self.problem.target
        cost = self.problem.cost
        self.x_costs = [
            [
                cost("vertex", i, k) - query.vertex(i).cost - target.vertex(k).cost
                for k in range(self.n_vt)
            ]
            for i in range(self.n_vp)
        ]

    def _restrict_problem(self, up: float) -> None:
        if up >= 1:
            return
        for row in self.x_variables:
            for variable in row:
                variable.activate()
        for i, costs in enumerate(self.x_costs):
            if not costs:
                continue
            threshold = sorted(costs)[math.floor(self.n_vt * up)]
            for k, cost in enumerate(costs):
                if cost > threshold:
                    self.x_variables[i][k].deactivate()
        for k in range(self.n_vt):
            costs = _column(self.x_costs, k)
            if not costs:
                continue
            threshold = sorted(costs)[math.floor(self.n_vp * up)]
            for i, cost in enumerate(costs):
                if cost > threshold:
                    self.x_variables[i][k].deactivate()

    def _vertex_constant(self) -> float:
        query, target = self.problem.query, self.problem.target
        return sum(query.vertex(i).cost for i in range(self.n_vp)) + sum(
            target.vertex(k).cost for k in range(self.n_vt)
        )

    def cut(self, solution: Any, method: CutMethod) -> None:
        """Add a constraint that excludes ``solution`` according to ``method``."""
        variables = list(solution.variables)
        if method is CutMethod.SOLUTION:
            constraint = LinearConstraint(
                LinearExpression.sum(variables), Relation.LESS_EQ, len(variables) - 1
            )
        elif method is CutMethod.MATCHINGS:
            constraint = LinearConstraint(
                LinearExpression.sum(variables), Relation.EQUAL, 0
            )
        else:
            raise ProgramError(
                "Element cut-strategy does not make sense for graph edit distance."
            )
        if self._lp is not None:
            self._lp.add_constraint(constraint)
        elif self._qp is not None:
            self._qp.add_linear_constraint(constraint)


class LinearGraphEditDistance(GraphEditDistance):
    """The optimal linear programming formulation of the graph edit distance."""

    def __init__(self, problem: Any, up: float = 1.0) -> None:
        super().__init__(problem)
        self.y_variables: list[list[Variable]] = []
        self.y_costs: list[list[float]] = []
        self._lp = LinearProgram(Sense.MINIMIZE)
        self.initialize(up)

    def _init_variables(self) -> None:
        super()._init_variables()
        self.y_variables = [
            [Variable(f"y_{ij},{kl}") for kl in range(self.n_et)] for ij in range(self.n_ep)
        ]

    def _init_costs(self) -> None:
        super()._init_costs()
        query, target = self.problem.query, self.problem.target
        cost = self.problem.cost
        self.y_costs = [
            [
                cost("edge", ij, kl) - query.edge(ij).cost - target.edge(kl).cost
                for kl in range(self.n_et)
            ]
            for ij in range(self.n_ep)
        ]

    def _edge_compatible(self, i: int, j: int, k: int, l: int) -> bool:
        x = self.x_variables
        if x[i][k].is_active() and x[j][l].is_active():
            return True
        if self.is_directed:
            return False
        return x[i][l].is_active() and x[j][k].is_active()

    def _restrict_problem(self, up: float) -> None:
        super()._restrict_problem(up)
        if up >= 1:
            return
        for row in self.y_variables:
            for variable in row:
                variable.activate()
        query, target = self.problem.query, self.problem.target
        for ij in range(self.n_ep):
            i, j = _edge_ends(query, ij)
            for kl in range(self.n_et):
                k, l = _edge_ends(target, kl)
                if not self._edge_compatible(i, j, k, l):
                    self.y_variables[ij][kl].deactivate()

    def _init_constraints(self) -> None:
        _add_assignment_constraints(self._lp, self.x_variables, self.n_vt)
        _add_assignment_constraints(self._lp, self.y_variables, self.n_et)

        query, target = self.problem.query, self.problem.target
        out_edges: list[list[int]] = [[] for _ in range(self.n_vt)]
        in_edges: list[list[int]] = [[] for _ in range(self.n_vt)]
        for kl in range(self.n_et):
            k, l = _edge_ends(target, kl)
            out_edges[k].append(kl)
            in_edges[l].append(kl)
        x = self.x_variables
        for ij in range(self.n_ep):
            i, j = _edge_ends(query, ij)
            y_row = self.y_variables[ij]
            for k in range(self.n_vt):
                leaving = LinearExpression()
                entering = LinearExpression()
                for kl in out_edges[k]:
                    leaving.add_term(Term(y_row[kl], 1.0))
                for kl in in_edges[k]:
                    entering.add_term(Term(y_row[kl], 1.0))
                leaving.add_term(Term(x[i][k], -1.0))
                entering.add_term(Term(x[j][k], -1.0))
                if not self.is_directed:
                    leaving.add_term(Term(x[j][k], -1.0))
                    entering.add_term(Term(x[i][k], -1.0))
                self._lp.add_constraint(LinearConstraint(leaving, Relation.LESS_EQ, 0.0))
                self._lp.add_constraint(LinearConstraint(entering, Relation.LESS_EQ, 0.0))

    def _init_objective(self) -> None:
        objective = _weighted_sum(self.x_variables, self.x_costs)
        for row, costs in zip(self.y_variables, self.y_costs):
            for variable, cost in zip(row, costs):
                objective.add_term(Term(variable, cost))
        query, target = self.problem.query, self.problem.target
        constant = self._vertex_constant()
        constant += sum(query.edge(ij).cost for ij in range(self.n_ep))
        constant += sum(target.edge(kl).cost for kl in range(self.n_et))
        objective.add_const(constant)
        self._lp.set_objective(objective)


class BipartiteGraphMatching(GraphEditDistance):
    """The suboptimal bipartite graph matching approximation of the graph edit distance."""

    def __init__(self, problem: Any, up: float = 1.0) -> None:
        super().__init__(problem)
        self._lp = LinearProgram(Sense.MINIMIZE)
        self.initialize(up)

    def _init_constraints(self) -> None:
        _add_assignment_constraints(self._lp, self.x_variables, self.n_vt)

    def _init_objective(self) -> None:
        objective = _weighted_sum(self.x_variables, self.x_costs)
        objective.add_const(self._vertex_constant())
        self._lp.set_objective(objective)


class BipartiteEdges(Formulation):
    """The edge assignment between the edges around a query vertex and a target vertex.

    Its optimum is the edge part of the cost of substituting the two vertices in the
    bipartite graph matching.
    """

    def __init__(self, problem: Any, i: int, k: int) -> None:
        super().__init__(problem)
        self.query_vertex = i
        self.target_vertex = k
        self.query_edges = _incident_edges(problem.query, i)
        self.target_edges = _incident_edges(problem.target, k)
        self.y_variables: list[list[Variable]] = []
        self._lp = LinearProgram(Sense.MINIMIZE)
        self.initialize()

    def _init_variables(self) -> None:
        self.y_variables = [
            [Variable(f"y_{ij},{kl}") for kl in self.target_edges] for ij in self.query_edges
        ]

    def _init_costs(self) -> None:
        """Costs are read directly while building the objective."""

    def _restrict_problem(self, up: float) -> None:
        """No variable is ever restricted."""

    def _init_constraints(self) -> None:
        _add_assignment_constraints(self._lp, self.y_variables, len(self.target_edges))

    def _init_objective(self) -> None:
        query, target = self.problem.query, self.problem.target
        cost = self.problem.cost
        objective = LinearExpression()
        for row, ij in zip(self.y_variables, self.query_edges):
            for variable, kl in zip(row, self.target_edges):
                objective.add_term(
                    Term(
                        variable,
                        cost("edge", ij, kl) - query.edge(ij).cost - target.edge(kl).cost,
                    )
                )
        constant = sum(query.edge(ij).cost for ij in self.query_edges)
        constant += sum(target.edge(kl).cost for kl in self.target_edges)
        objective.add_const(constant)
        self._lp.set_objective(objective)

    def cut(self, solution: Any, method: CutMethod) -> None:
        """Cutting is not used for the edge subproblem; the program is left unchanged."""