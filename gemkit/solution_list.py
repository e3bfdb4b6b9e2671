"""Lists of solutions found for one formulation."""

from __future__ import annotations

from typing import Any, Iterator

from gemkit.linear_program import _TextWriter
from gemkit.solution import Solution
from gemkit.variable import ProgramError


class SolutionList:
    """The solutions found, in order, for a formulation."""

    def __init__(self, formulation: Any = None) -> None:
        self.formulation = formulation
        self._solutions: list[Solution] = []

    def new_solution(self) -> Solution:
        """Create a solution of the formulation, append it and return it."""
        solution = Solution(self.formulation)
        self._solutions.append(solution)
        return solution

    def last_solution(self) -> Solution | None:
        """Return the last solution, or None when the list is empty."""
        return self._solutions[-1] if self._solutions else None

    def solution(self, index: int) -> Solution | None:
        """Return the solution at ``index``, or None when there is none."""
        if 0 <= index < len(self._solutions):
            return self._solutions[index]
        return None

    def __len__(self) -> int:
        return len(self._solutions)

    def __iter__(self) -> Iterator[Solution]:
        return iter(self._solutions)

    def render_solutions(self) -> str:
        """Return every solution as numbered XML elements."""
        if not self._solutions:
            raise ProgramError(
                "The SolutionList cannot be printed without having actual solutions."
            )
        out = _TextWriter()
        out.dump(f'<solutions count="{len(self._solutions)}">')
        out.indent()
        for number, solution in enumerate(self._solutions):
            out.dump(f'<solution number="{number}">')
            out.indent()
            solution._write_solution(out)
            out.unindent()
            out.dump("</solution>")
        out.unindent()
        out.dump("</solutions>")
        return out.text()