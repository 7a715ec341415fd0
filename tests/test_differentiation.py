import math

import numpy as np
import pytest

from symbolic_calculus.parser import parse
from symbolic_calculus.expression_tree.core.node import (
    ErrorNode, NumberNode, VariableNode, OperatorNode, EqualsNode, DifferentialNode, FunctionNode
)
from symbolic_calculus.expression_tree.utils.sympy_utils import SymPyBridge


def derivative(text, variable="x"):
    return parse(text).differentiate(variable).simplify()


class TestBasicRules:
    def test_constants_and_numbers(self):
        assert parse("5").differentiate("x") == NumberNode(0)
        assert parse("pi").differentiate("x") == NumberNode(0)

    def test_variable(self):
        assert parse("x").differentiate("x") == NumberNode(1)

    def test_other_variable_becomes_differential(self):
        assert parse("y").differentiate("x") == DifferentialNode("y", "x")

    def test_power_rule(self):
        result = derivative("x^3")

        assert result.to_string() == "3(x^2)"
        assert result.evaluate({"x": 2}) == 12

    def test_square(self):
        assert derivative("x^2").to_string() == "2x"

    def test_zero_and_first_powers(self):
        assert parse("x^0").differentiate("x") == NumberNode(0)
        assert parse("x^1").differentiate("x") == NumberNode(1)

    def test_sum_and_difference(self):
        assert derivative("x^2 + 3*x - 7").evaluate({"x": 1.5}) == pytest.approx(6.0)

    def test_product_rule(self):
        result = derivative("sin(x)*x")

        assert result.to_string() == "cos(x)x + sin(x)"
        assert result.evaluate({"x": math.pi / 2}) == pytest.approx(1.0)

    def test_quotient_with_constant_numerator(self):
        assert derivative("1/x").evaluate({"x": 2}) == pytest.approx(-0.25)

    def test_quotient_with_constant_denominator(self):
        assert derivative("x/2").evaluate({"x": 7}) == pytest.approx(0.5)

    def test_general_quotient(self):
        assert derivative("x/(x + 1)").evaluate({"x": 1}) == pytest.approx(0.25)

    def test_numeric_base(self):
        assert derivative("2^x").evaluate({"x": 3}) == pytest.approx(8 * math.log(2))

    def test_variable_to_variable_power(self):
        assert derivative("x^x").evaluate({"x": 2}) == pytest.approx(4 * (1 + math.log(2)))

    def test_derivative_of_a_constant_modulus_is_plain_zero(self):
        result = derivative("|-3|")

        assert result == NumberNode(0)
        assert result.to_string() == "0"

    def test_unknown_operator_is_an_error(self):
        result = OperatorNode("%", VariableNode("x"), NumberNode(2)).differentiate("x")

        assert isinstance(result, ErrorNode)
        assert result.message == "Unknown operator %"


class TestAgainstSympy:
    @pytest.mark.parametrize("text", [
        "sin(2*x + 1)", "cos(2*x + 1)", "tan(2*x + 1)", "cot(2*x + 1)",
        "sec(2*x + 1)", "csc(2*x + 1)", "sinh(2*x + 1)", "cosh(2*x + 1)",
        "tanh(2*x + 1)", "coth(2*x + 1)", "sech(2*x + 1)", "csch(2*x + 1)",
        "log(2*x + 1)", "ln(2*x + 1)", "exp(2*x + 1)", "sqrt(2*x + 1)",
        "abs(2*x - 3)",
    ])
    def test_chain_rule_for_every_function(self, text):
        node = parse(text)

        assert SymPyBridge.matches_sympy_derivative(node, node.differentiate("x"))

    @pytest.mark.parametrize("text", [
        "x^2*sin(x)",
        "x^x",
        "e^x",
        "x^e",
        "2^(x^2)",
        "sin(x)/x",
        "(x^2 + 1)/(x - 3)",
        "(x + 1)^3",
        "sqrt(x^2 + 1)*exp(-1*x)",
        "|x - 1|/x",
    ])
    def test_composite_expressions(self, text):
        node = parse(text)

        assert SymPyBridge.matches_sympy_derivative(node, node.differentiate("x"))

    def test_simplified_derivative_still_matches(self):
        node = parse("(x + 1)*(x - 1)*sin(x)")

        assert SymPyBridge.matches_sympy_derivative(node, node.differentiate("x").simplify())


class TestImplicitDifferentiation:
    def test_product_with_other_variable(self):
        result = derivative("x*y")

        assert result == OperatorNode(
            "+", VariableNode("y"), OperatorNode("*", VariableNode("x"), DifferentialNode("y", "x")))

    def test_power_of_other_variable_uses_chain_rule(self):
        result = derivative("y^2")

        assert result == OperatorNode(
            "*", OperatorNode("*", NumberNode(2), VariableNode("y")), DifferentialNode("y", "x"))

    def test_higher_order_differential(self):
        assert DifferentialNode("y", "x").differentiate("x") == DifferentialNode("y", "x", 2)

    def test_differential_with_respect_to_another_variable(self):
        result = DifferentialNode("y", "x").differentiate("t")

        assert result == OperatorNode("*", DifferentialNode("y", "x", 2), DifferentialNode("x", "t"))

    def test_equation_is_differentiated_on_both_sides(self):
        result = parse("y = x^2").differentiate("x").simplify()

        assert isinstance(result, EqualsNode)
        assert result.to_string() == "dy/dx = 2x"


class TestSharing:
    def test_derivative_shares_the_argument(self):
        node = parse("sin(x^2)")
        result = node.differentiate("x")

        assert isinstance(result.right, FunctionNode)
        assert result.right.argument is node.argument

    def test_inputs_are_not_modified(self):
        node = parse("x^3 + sin(x)")
        before = node.to_string()

        node.differentiate("x").simplify()

        assert node.to_string() == before


class TestSecondDerivatives:
    def test_cubic(self):
        second = derivative("x^3").differentiate("x").simplify()

        assert second.to_string() == "3(2x)"
        assert second.evaluate({"x": 12.46}) == pytest.approx(74.76)

    def test_vectorised_second_derivative(self):
        second = derivative("sin(x)").differentiate("x").simplify()
        points = np.linspace(0.0, 3.0, 7)

        np.testing.assert_allclose(second.evaluate({"x": points}), -np.sin(points))
