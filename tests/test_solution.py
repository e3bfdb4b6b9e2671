import math
from types import SimpleNamespace

import pytest

from gemkit.linear_program import LinearProgram
from gemkit.program import Sense
from gemkit.solution import Solution, Status, round_at_precision
from gemkit.variable import Variable


class FakeGraph:
    def __init__(self, vertex_costs, edges):
        self._vertices = [SimpleNamespace(index=i, cost=c) for i, c in enumerate(vertex_costs)]
        self._edges = [
            SimpleNamespace(origin=self._vertices[o], target=self._vertices[t], cost=c)
            for o, t, c in edges
        ]

    @property
    def vertex_count(self):
        return len(self._vertices)

    @property
    def edge_count(self):
        return len(self._edges)

    def vertex(self, i):
        return self._vertices[i]

    def edge(self, ij):
        return self._edges[ij]


class FakeProblem:
    def __init__(self, query, target, is_subgraph):
        self.query = query
        self.target = target
        self.is_subgraph = is_subgraph

    def cost(self, element, i, k):
        return 7.0 if element == "vertex" else 4.0


def make_formulation(sense=Sense.MINIMIZE, is_subgraph=False):
    query = FakeGraph([1.0, 2.0], [(0, 1, 5.0)])
    target = FakeGraph([1.5, 2.5, 3.5], [(0, 1, 6.0), (1, 2, 8.0)])
    return SimpleNamespace(
        program=LinearProgram(sense),
        problem=FakeProblem(query, target, is_subgraph),
    )


def stripped_lines(text):
    return [line.strip() for line in text.splitlines()]


def test_status_from_name_prefixes():
    assert Status.from_name("o") is Status.OPTIMAL
    assert Status.from_name("NOT") is Status.NOT_SOLVED
    assert Status.from_name("Sub") is Status.SUBOPTIMAL


def test_status_from_name_unknown():
    with pytest.raises(ValueError):
        Status.from_name("zzz")


@pytest.mark.parametrize("status", list(Status))
def test_status_name_round_trip(status):
    assert Status.from_name(status.to_name()) is status


def test_round_at_precision_keeps_infinity_and_is_idempotent():
    assert round_at_precision(math.inf) == math.inf
    assert round_at_precision(-math.inf) == -math.inf
    value = round_at_precision(1.0 / 3.0)
    assert round_at_precision(value) == value
    assert round_at_precision(2.5) == 2.5


def test_clean_objective_depends_on_sense():
    assert Solution(make_formulation(Sense.MINIMIZE)).objective == math.inf
    assert Solution(make_formulation(Sense.MAXIMIZE)).objective == -math.inf


def test_new_solution_is_not_solved():
    solution = Solution(make_formulation())
    assert solution.status is Status.NOT_SOLVED
    assert solution.is_valid() is False


@pytest.mark.parametrize(
    "status, valid",
    [
        (Status.NOT_SOLVED, False),
        (Status.INFEASIBLE, False),
        (Status.UNBOUNDED, False),
        (Status.SUBOPTIMAL, True),
        (Status.OPTIMAL, True),
    ],
)
def test_is_valid(status, valid):
    solution = Solution(make_formulation())
    solution.status = status
    assert solution.is_valid() is valid


def test_add_variable_parses_identifiers():
    solution = Solution(make_formulation())
    x = Variable("x_1,2")
    y = Variable("y_0,1")
    z = Variable("z_3,3")
    solution.add_variable(x, 1)
    solution.add_variable(y, 1)
    solution.add_variable(z, 1)
    assert solution.x_variables == {1: 2}
    assert solution.y_variables == {0: 1}
    assert solution.value(z) == 1


def test_add_variable_ignores_zero():
    solution = Solution(make_formulation())
    x = Variable("x_0,0")
    solution.add_variable(x, 0)
    assert solution.variables == {}
    assert solution.x_variables == {}
    assert solution.value(x) == 0


def test_x_variables_sorted_by_key():
    solution = Solution(make_formulation())
    solution.add_variable(Variable("x_1,0"), 1)
    solution.add_variable(Variable("x_0,2"), 1)
    assert list(solution.x_variables) == [0, 1]


def test_active_index():
    solution = Solution(make_formulation())
    solution.add_variable(Variable("x_0,2"), 1)
    solution.add_variable(Variable("x_1,0"), 1)
    assert solution.active_index(1, True) == 1
    assert solution.active_index(2, False) == 0
    assert solution.active_index(5, True) == -1


def test_clean_resets_values():
    solution = Solution(make_formulation())
    x = Variable("x_0,0")
    solution.add_variable(x, 1)
    solution.status = Status.OPTIMAL
    solution.objective = 2.0
    solution.clean()
    assert solution.value(x) == 0
    assert solution.status is Status.NOT_SOLVED
    assert solution.objective == math.inf


def test_render_invalid_solution_has_only_objective():
    solution = Solution(make_formulation())
    solution.status = Status.INFEASIBLE
    assert stripped_lines(solution.render_solution()) == [
        '<objective status="infeasible" value="inf"/>'
    ]


def test_render_ged_solution_lists_insertions_and_deletions():
    solution = Solution(make_formulation(is_subgraph=False))
    solution.add_variable(Variable("x_0,1"), 1)
    solution.status = Status.OPTIMAL
    solution.objective = 3
    lines = stripped_lines(solution.render_solution())
    assert lines[0] == '<objective status="optimal" value="3"/>'
    assert '<node type="query" index="0"/>' in lines
    assert '<node type="target" index="1"/>' in lines
    assert lines.count("<insertion cost=\"2\">") == 1
    assert '<node type="target" index="0"/>' in lines
    assert '<node type="target" index="2"/>' in lines
    assert '<edge type="query" from="0" to="1"/>' in lines
    assert '<edge type="target" from="1" to="2"/>' in lines
    assert lines.count("</deletion>") == 4


def test_render_subgraph_solution_has_no_deletions():
    solution = Solution(make_formulation(is_subgraph=True))
    solution.add_variable(Variable("x_0,1"), 1)
    solution.add_variable(Variable("x_1,2"), 1)
    solution.add_variable(Variable("y_0,1"), 1)
    solution.status = Status.SUBOPTIMAL
    lines = stripped_lines(solution.render_solution())
    assert not any(line.startswith("<deletion") for line in lines)
    assert not any(line.startswith("<insertion") for line in lines)
    assert lines.count("</substitution>") == 3
    assert lines[-1] == "</edges>"