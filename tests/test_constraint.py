import pytest

from gemkit.constraint import (
    Constraint,
    LinearConstraint,
    QuadConstraint,
    Relation,
)
from gemkit.expression import Expression, LinearExpression, Term
from gemkit.quad_expression import Quad, QuadExpression
from gemkit.variable import Variable, VariableType


@pytest.fixture
def xy():
    return Variable("x"), Variable("y")


@pytest.mark.parametrize(
    "relation, text",
    [
        (Relation.EQUAL, "1 = 2"),
        (Relation.LESS_EQ, "1 <= 2"),
        (Relation.GREATER_EQ, "1 >= 2"),
    ],
)
def test_relation_symbols(relation, text):
    constraint = Constraint(Expression(1.0), relation, 2.0)
    assert str(constraint) == text
    assert relation.symbol in str(constraint)


def test_ids_are_unique_and_prefixed(xy):
    first = LinearConstraint(LinearExpression.sum(xy), Relation.LESS_EQ, 1)
    second = LinearConstraint(LinearExpression.sum(xy), Relation.LESS_EQ, 1)
    assert first.id.startswith("_C")
    assert second.id.startswith("_C")
    assert first.id != second.id
    assert int(second.id[2:]) > int(first.id[2:])


def test_less_equal_eval(xy):
    x, y = xy
    constraint = LinearConstraint(LinearExpression.sum(xy), Relation.LESS_EQ, 1)
    assert constraint.eval()
    x.value = 1
    assert constraint.eval()
    y.value = 1
    assert not constraint.eval()


def test_greater_equal_eval(xy):
    x, _ = xy
    constraint = LinearConstraint(LinearExpression.sum(xy), Relation.GREATER_EQ, 1)
    assert not constraint.eval()
    x.value = 1
    assert constraint.eval()


def test_equal_eval(xy):
    x, y = xy
    constraint = LinearConstraint(LinearExpression.sum(xy), Relation.EQUAL, 1)
    assert not constraint.eval()
    x.value = 1
    assert constraint.eval()
    y.value = 1
    assert not constraint.eval()


def test_equal_eval_tolerates_rounding():
    expression = Expression(0.1 + 0.2)
    constraint = Constraint(expression, Relation.EQUAL, 0.3)
    assert constraint.eval()


def test_base_constraint_str():
    constraint = Constraint(Expression(2.0), Relation.LESS_EQ, 5.0)
    assert str(constraint) == "2 <= 5"


def test_linear_constraint_moves_constant(xy):
    expression = LinearExpression.sum(xy) + 1
    constraint = LinearConstraint(expression, Relation.LESS_EQ, 3)
    assert str(constraint) == "1 x + 1 y <= 2"


def test_linear_constraint_keeps_leading_minus(xy):
    x, y = xy
    expression = Term(x, -1.0) + Term(y, 1.0)
    constraint = LinearConstraint(expression, Relation.GREATER_EQ, 0)
    text = str(constraint)
    assert text.startswith("- 1 x")
    assert text.endswith(">= 0")


def test_linear_constraint_empty_expression():
    constraint = LinearConstraint(LinearExpression(), Relation.EQUAL, 0)
    assert str(constraint).startswith("0 =")
    assert constraint.eval()


def test_linear_constraint_rejects_plain_expression():
    with pytest.raises(TypeError):
        LinearConstraint(Expression(1.0), Relation.LESS_EQ, 1)


def test_quad_constraint_rejects_linear_expression(xy):
    with pytest.raises(TypeError):
        QuadConstraint(LinearExpression.sum(xy), Relation.LESS_EQ, 1)


def test_quad_constraint_eval(xy):
    x, y = xy
    expression = QuadExpression.sum_quads([Quad(x, y)])
    constraint = QuadConstraint(expression, Relation.LESS_EQ, 0)
    assert constraint.eval()
    x.value = 1
    y.value = 1
    assert not constraint.eval()


def test_quad_constraint_str_contains_product(xy):
    x, y = xy
    expression = Term(x, 1.0) + Quad(x, y) * 2
    constraint = QuadConstraint(expression, Relation.LESS_EQ, 1)
    text = str(constraint)
    assert "2 x y" in text
    assert text.startswith("1 x")
    assert text.endswith("<= 1")


def test_quad_constraint_moves_constant(xy):
    x, y = xy
    expression = Quad(x, y) * 1 + 4
    constraint = QuadConstraint(expression, Relation.GREATER_EQ, 4)
    assert str(constraint).endswith(">= 0")


def test_eval_with_bounded_variable():
    z = Variable("z", VariableType.BOUNDED, 0, 10)
    z.value = 7
    constraint = LinearConstraint(LinearExpression.sum([z]), Relation.LESS_EQ, 7)
    assert constraint.eval()
    z.value = 8
    assert not constraint.eval()