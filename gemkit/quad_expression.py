"""Quadratic expressions over integer program variables."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Any, Iterable

from gemkit.expression import LinearExpression, Term, format_number


def _to_term(other: Any) -> Term | None:
    """Return ``other`` as a linear term when it is one or converts to one."""
    if isinstance(other, Term):
        return other
    as_term = getattr(other, "as_term", None)
    if callable(as_term):
        return as_term()
    return None


@dataclass(frozen=True, eq=False)
class Quad:
    """The product of two variables; the order of the factors does not matter."""

    first: Any
    second: Any

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quad):
            return NotImplemented
        return (self.first is other.first and self.second is other.second) or (
            self.first is other.second and self.second is other.first
        )

    def __hash__(self) -> int:
        return hash(frozenset((id(self.first), id(self.second))))

    def __mul__(self, coefficient: Any) -> QuadTerm:
        if isinstance(coefficient, Real):
            return QuadTerm(self, float(coefficient))
        return NotImplemented

    def __rmul__(self, coefficient: Any) -> QuadTerm:
        return self.__mul__(coefficient)


@dataclass(frozen=True)
class QuadTerm:
    """A product of two variables multiplied by a coefficient."""

    quad: Quad
    coefficient: float = 1.0

    def __neg__(self) -> QuadTerm:
        return QuadTerm(self.quad, -self.coefficient)

    def __add__(self, other: Any) -> QuadExpression:
        if isinstance(other, QuadExpression):
            return other + self
        expression = QuadExpression()
        expression.add_quad_term(self)
        if isinstance(other, Real):
            expression.add_const(float(other))
            return expression
        if isinstance(other, QuadTerm):
            expression.add_quad_term(other)
            return expression
        term = _to_term(other)
        if term is None:
            return NotImplemented
        expression.add_term(term)
        return expression

    def __radd__(self, other: Any) -> QuadExpression:
        return self.__add__(other)

    def __sub__(self, other: Any) -> QuadExpression:
        if isinstance(other, Real):
            return self + (-float(other))
        if isinstance(other, (QuadTerm, QuadExpression)):
            if isinstance(other, QuadExpression):
                negated = other._copy()
                negated.multiply_by(-1.0)
                return self + negated
            return self + (-other)
        term = _to_term(other)
        if term is None:
            return NotImplemented
        return self + (-term)

    def __rsub__(self, other: Any) -> QuadExpression:
        if isinstance(other, Real) or isinstance(other, QuadTerm) or _to_term(other) is not None:
            return (-self) + other
        return NotImplemented


def quad_term_is_active(term: QuadTerm) -> bool:
    """Tell whether both variables of a quadratic term are active."""
    return term.quad.first.is_active() and term.quad.second.is_active()


class QuadExpression(LinearExpression):
    """A linear expression plus a sum of variable products weighted by coefficients.

    Each product appears at most once; adding it again updates its coefficient.
    """

    def __init__(self, constant: float = 0.0) -> None:
        super().__init__(constant)
        self.quad_terms: dict[Quad, float] = {}

    def _copy(self) -> QuadExpression:
        copy = QuadExpression(self.constant)
        copy.terms = dict(self.terms)
        copy.quad_terms = dict(self.quad_terms)
        return copy

    def add_quad_term(self, term: QuadTerm) -> None:
        """Add a quadratic term; terms with a zero coefficient are ignored."""
        if term.coefficient:
            self.quad_terms[term.quad] = self.quad_terms.get(term.quad, 0.0) + term.coefficient

    def multiply_by(self, factor: float) -> None:
        """Multiply the constant, the linear and the quadratic coefficients by ``factor``."""
        super().multiply_by(factor)
        self.quad_terms = {quad: c * factor for quad, c in self.quad_terms.items()}

    def eval(self) -> float:
        """Evaluate the expression on the current values of its variables."""
        return super().eval() + sum(
            quad.first.eval() * quad.second.eval() * coefficient
            for quad, coefficient in self.quad_terms.items()
        )

    def is_set(self) -> bool:
        """Tell whether the expression holds at least one linear or quadratic term."""
        return super().is_set() or bool(self.quad_terms)

    def __iadd__(self, other: Any) -> QuadExpression:
        if isinstance(other, QuadTerm):
            self.add_quad_term(other)
            return self
        return super().__iadd__(other)

    def __isub__(self, other: Any) -> QuadExpression:
        if isinstance(other, QuadTerm):
            self.add_quad_term(-other)
            return self
        return super().__isub__(other)

    def __add__(self, other: Any) -> QuadExpression:
        result = self._copy()
        if isinstance(other, QuadExpression):
            result.add_const(other.constant)
            for variable, coefficient in other.terms.items():
                result.add_term(Term(variable, coefficient))
            for quad, coefficient in other.quad_terms.items():
                result.add_quad_term(QuadTerm(quad, coefficient))
            return result
        outcome = result.__iadd__(other)
        return NotImplemented if outcome is NotImplemented else result

    def __radd__(self, other: Any) -> QuadExpression:
        return self.__add__(other)

    def __sub__(self, other: Any) -> QuadExpression:
        result = self._copy()
        outcome = result.__isub__(other)
        return NotImplemented if outcome is NotImplemented else result

    def __str__(self) -> str:
        parts = [super().__str__()]
        for quad, coefficient in self.quad_terms.items():
            sign = "-" if coefficient < 0 else "+"
            parts.append(
                f"{sign} {format_number(abs(coefficient))} {quad.first.id} {quad.second.id}"
            )
        return " ".join(parts)

    @staticmethod
    def sum_variables(variables: Iterable[Any]) -> QuadExpression:
        """Return the sum of ``variables``, each with coefficient one."""
        expression = QuadExpression()
        for variable in variables:
            expression.add_term(Term(variable, 1.0))
        return expression

    @staticmethod
    def sum_quads(quads: Iterable[Quad]) -> QuadExpression:
        """Return the sum of the variable products ``quads``, each with coefficient one."""
        expression = QuadExpression()
        for quad in quads:
            expression.add_quad_term(QuadTerm(quad, 1.0))
        return expression