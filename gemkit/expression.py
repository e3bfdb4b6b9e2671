"""Constant and linear expressions over integer program variables."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Any, Iterable


def format_number(value: float) -> str:
    """Format a number compactly, with at most six significant digits."""
    return f"{value:g}"


def _as_term(other: Any) -> Term | None:
    """Return ``other`` as a term when it is a term or converts to one."""
    if isinstance(other, Term):
        return other
    as_term = getattr(other, "as_term", None)
    if callable(as_term):
        return as_term()
    return None


@dataclass(frozen=True)
class Term:
    """A variable multiplied by a coefficient."""

    variable: Any
    coefficient: float = 1.0

    def __neg__(self) -> Term:
        return Term(self.variable, -self.coefficient)

    def __add__(self, other: Any) -> LinearExpression:
        expression = LinearExpression()
        expression.add_term(self)
        if isinstance(other, Real):
            expression.add_const(float(other))
            return expression
        term = _as_term(other)
        if term is None:
            return NotImplemented
        expression.add_term(term)
        return expression

    def __radd__(self, other: Any) -> LinearExpression:
        if isinstance(other, Real):
            return self + other
        term = _as_term(other)
        if term is None:
            return NotImplemented
        expression = LinearExpression()
        expression.add_term(term)
        expression.add_term(self)
        return expression

    def __sub__(self, other: Any) -> LinearExpression:
        if isinstance(other, Real):
            return self + (-float(other))
        term = _as_term(other)
        if term is None:
            return NotImplemented
        return self + (-term)

    def __rsub__(self, other: Any) -> LinearExpression:
        if isinstance(other, Real):
            return (-self) + other
        term = _as_term(other)
        if term is None:
            return NotImplemented
        return term + (-self)


class Expression:
    """An expression holding only a constant part."""

    def __init__(self, constant: float = 0.0) -> None:
        self.constant = float(constant)

    def add_const(self, value: float) -> None:
        """Add ``value`` to the constant part."""
        self.constant += value

    def multiply_by(self, factor: float) -> None:
        """Multiply the constant part by ``factor``."""
        self.constant *= factor

    def eval(self) -> float:
        """Return the value of the expression."""
        return self.constant

    def __iadd__(self, other: Any) -> Expression:
        if isinstance(other, Real):
            self.add_const(float(other))
            return self
        return NotImplemented

    def __isub__(self, other: Any) -> Expression:
        if isinstance(other, Real):
            self.add_const(-float(other))
            return self
        return NotImplemented

    def __str__(self) -> str:
        return format_number(self.constant)


class LinearExpression(Expression):
    """A constant plus a sum of variables weighted by coefficients.

    Each variable appears at most once; adding it again updates its coefficient.
    """

    def __init__(self, constant: float = 0.0) -> None:
        super().__init__(constant)
        self.terms: dict[Any, float] = {}

    def _copy(self) -> LinearExpression:
        copy = type(self)(self.constant)
        copy.terms = dict(self.terms)
        return copy

    def add_term(self, term: Term) -> None:
        """Add a term; terms with a zero coefficient are ignored."""
        if term.coefficient:
            self.terms[term.variable] = self.terms.get(term.variable, 0.0) + term.coefficient

    def multiply_by(self, factor: float) -> None:
        """Multiply the constant and every coefficient by ``factor``."""
        super().multiply_by(factor)
        self.terms = {variable: c * factor for variable, c in self.terms.items()}

    def eval(self) -> float:
        """Evaluate the expression on the current values of its variables."""
        return super().eval() + sum(
            variable.eval() * coefficient for variable, coefficient in self.terms.items()
        )

    def is_set(self) -> bool:
        """Tell whether the expression holds at least one term."""
        return bool(self.terms)

    def __iadd__(self, other: Any) -> LinearExpression:
        if isinstance(other, Real):
            self.add_const(float(other))
            return self
        term = _as_term(other)
        if term is None:
            return NotImplemented
        self.add_term(term)
        return self

    def __isub__(self, other: Any) -> LinearExpression:
        if isinstance(other, Real):
            self.add_const(-float(other))
            return self
        term = _as_term(other)
        if term is None:
            return NotImplemented
        self.add_term(-term)
        return self

    def __add__(self, other: Any) -> LinearExpression:
        result = self._copy()
        outcome = result.__iadd__(other)
        return NotImplemented if outcome is NotImplemented else result

    def __sub__(self, other: Any) -> LinearExpression:
        result = self._copy()
        outcome = result.__isub__(other)
        return NotImplemented if outcome is NotImplemented else result

    def __str__(self) -> str:
        parts = [super().__str__()]
        for variable, coefficient in self.terms.items():
            sign = "-" if coefficient < 0 else "+"
            parts.append(f"{sign} {format_number(abs(coefficient))} {variable.id}")
        return " ".join(parts)

    @staticmethod
    def sum(variables: Iterable[Any]) -> LinearExpression:
        """Return the sum of ``variables``, each with coefficient one."""
        expression = LinearExpression()
        for variable in variables:
            expression.add_term(Term(variable, 1.0))
        return expression