"""Linear and quadratic constraints of integer programs."""

from __future__ import annotations

import itertools
from enum import Enum

from gemkit.expression import Expression, LinearExpression, format_number
from gemkit.quad_expression import QuadExpression

EQUALITY_TOLERANCE = 1e-6
"""Largest difference between both sides for which an equality holds."""

_counter = itertools.count()


class Relation(Enum):
    """The relation between the expression and the right-hand side."""

    EQUAL = "="
    LESS_EQ = "<="
    GREATER_EQ = ">="

    @property
    def symbol(self) -> str:
        return self.value


class Constraint:
    """An expression compared with a constant right-hand side.

    Each constraint gets a unique identifier of the form ``_C<n>``.
    """

    def __init__(self, expression: Expression, relation: Relation, rhs: float) -> None:
        self.expression = expression
        self.relation = relation
        self.rhs = float(rhs)
        self.id = f"_C{next(_counter)}"

    def eval(self) -> bool:
        """Tell whether the constraint holds for the current variable values."""
        lhs = self.expression.eval()
        if self.relation is Relation.LESS_EQ:
            return lhs <= self.rhs
        if self.relation is Relation.GREATER_EQ:
            return lhs >= self.rhs
        return abs(lhs - self.rhs) < EQUALITY_TOLERANCE

    def _lhs_without_constant(self) -> str:
        tokens = str(self.expression).split(" ")[1:]
        if tokens and tokens[0] == "+":
            tokens = tokens[1:]
        return " ".join(tokens) if tokens else "0"

    def _str_moving_constant(self) -> str:
        rhs = self.rhs - self.expression.constant
        return f"{self._lhs_without_constant()} {self.relation.symbol} {format_number(rhs)}"

    def __str__(self) -> str:
        return f"{self.expression} {self.relation.symbol} {format_number(self.rhs)}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id}: {self})"


class LinearConstraint(Constraint):
    """A constraint whose expression is linear."""

    expression: LinearExpression

    def __init__(self, expression: LinearExpression, relation: Relation, rhs: float) -> None:
        if not isinstance(expression, LinearExpression):
            raise TypeError("a linear constraint needs a linear expression")
        super().__init__(expression, relation, rhs)

    def __str__(self) -> str:
        """Write the constraint with the constant moved to the right-hand side."""
        return self._str_moving_constant()


class QuadConstraint(Constraint):
    """A constraint whose expression is quadratic."""

    expression: QuadExpression

    def __init__(self, expression: QuadExpression, relation: Relation, rhs: float) -> None:
        if not isinstance(expression, QuadExpression):
            raise TypeError("a quadratic constraint needs a quadratic expression")
        super().__init__(expression, relation, rhs)

    def __str__(self) -> str:
        """Write the constraint with the constant moved to the right-hand side."""
        return self._str_moving_constant()