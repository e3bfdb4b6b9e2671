import math
from types import SimpleNamespace

import pytest

from gemkit.linear_program import LinearProgram
from gemkit.program import Sense
from gemkit.solution import Status
from gemkit.solution_list import SolutionList
from gemkit.variable import ProgramError


def make_formulation(sense=Sense.MINIMIZE):
    return SimpleNamespace(program=LinearProgram(sense), problem=None)


def test_empty_list():
    solutions = SolutionList(make_formulation())
    assert len(solutions) == 0
    assert solutions.last_solution() is None
    assert solutions.solution(0) is None
    assert list(solutions) == []


def test_render_empty_raises():
    with pytest.raises(ProgramError):
        SolutionList(make_formulation()).render_solutions()


def test_new_solution_is_appended_and_last():
    formulation = make_formulation(Sense.MAXIMIZE)
    solutions = SolutionList(formulation)
    first = solutions.new_solution()
    second = solutions.new_solution()
    assert len(solutions) == 2
    assert solutions.last_solution() is second
    assert solutions.solution(0) is first
    assert solutions.solution(1) is second
    assert list(solutions) == [first, second]
    assert first.formulation is formulation
    assert first.objective == -math.inf


def test_solution_out_of_range():
    solutions = SolutionList(make_formulation())
    solutions.new_solution()
    assert solutions.solution(1) is None
    assert solutions.solution(-1) is None


def test_render_solutions_numbers_each_solution():
    solutions = SolutionList(make_formulation())
    for _ in range(2):
        solution = solutions.new_solution()
        solution.status = Status.INFEASIBLE
    lines = [line.strip() for line in solutions.render_solutions().splitlines()]
    assert lines[0] == '<solutions count="2">'
    assert '<solution number="0">' in lines
    assert '<solution number="1">' in lines
    assert lines.count('<objective status="infeasible" value="inf"/>') == 2
    assert lines[-1] == "</solutions>"


def test_formulation_can_be_replaced():
    solutions = SolutionList()
    formulation = make_formulation()
    solutions.formulation = formulation
    assert solutions.new_solution().formulation is formulation