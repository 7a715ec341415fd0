from ..core.node import (
  Node, ErrorNode, NumberNode, VariableNode, ConstantNode, OperatorNode, FunctionNode
)
from ..core.functions import BUILTIN_FUNCTIONS


class ExpressionDifferentiator:
  """Derivative rules for binary operator nodes"""

  @staticmethod
  def differentiate_operator_node(node: OperatorNode, diff_left: Node, diff_right: Node) -> Node:
    """Combine the operands' derivatives into the derivative of `node`"""
    if isinstance(diff_left, ErrorNode):
      return diff_left
    if isinstance(diff_right, ErrorNode):
      return diff_right

    rule = _RULES.get(node.operator)
    if rule is None:
      return ErrorNode(f"Unknown operator {node.operator}")
    return rule(node, diff_left, diff_right)

  @staticmethod
  def _sum_rule(node: OperatorNode, diff_left: Node, diff_right: Node) -> Node:
    return OperatorNode(node.operator, diff_left, diff_right)

  @staticmethod
  def _product_rule(node: OperatorNode, diff_left: Node, diff_right: Node) -> Node:
    # d(ab) = a'b + ab'
    return OperatorNode('+',
      OperatorNode('*', diff_left, node.right),
      OperatorNode('*', node.left, diff_right))

  @staticmethod
  def _quotient_rule(node: OperatorNode, diff_left: Node, diff_right: Node) -> Node:
    numerator, denominator = node.left, node.right

    # d/dx a/f(x) = -a * f'(x)/f(x)^2
    if isinstance(numerator, (NumberNode, ConstantNode)):
      return OperatorNode('*', NumberNode(-1),
        OperatorNode('*', numerator,
          OperatorNode('/', diff_right, OperatorNode('^', denominator, NumberNode(2)))))

    # d/dx f(x)/a = f'(x)/a
    if isinstance(denominator, (NumberNode, ConstantNode)):
      return OperatorNode('/', diff_left, denominator)

    return OperatorNode('/',
      OperatorNode('-',
        OperatorNode('*', denominator, diff_left),
        OperatorNode('*', numerator, diff_right)),
      OperatorNode('^', denominator, NumberNode(2)))

  @staticmethod
  def _power_rule(node: OperatorNode, diff_left: Node, diff_right: Node) -> Node:
    base, exponent = node.left, node.right

    if isinstance(base, VariableNode):
      if isinstance(exponent, NumberNode):
        if exponent.value == 0:
          return NumberNode(0)
        if exponent.value == 1:
          return diff_left
        power = OperatorNode('*', exponent,
          OperatorNode('^', base, NumberNode(exponent.value - 1)))
        return _chain(power, diff_left)
      if isinstance(exponent, ConstantNode):
        # d/dx x^e = e*x^(e-1)
        power = OperatorNode('*', exponent,
          OperatorNode('^', base, OperatorNode('-', exponent, NumberNode(1))))
        return _chain(power, diff_left)

    ln = BUILTIN_FUNCTIONS['ln']

    # d/dx a^f(x) = ln(a)*a^f(x)*f'(x)
    if isinstance(base, (NumberNode, ConstantNode)):
      return OperatorNode('*', FunctionNode(ln, base), OperatorNode('*', node, diff_right))

    # d/dx f^g = f^g * (g*f'/f + ln(f)*g')
    base_fraction = OperatorNode('/', diff_left, base)
    first_term = OperatorNode('*', exponent, base_fraction)
    second_term = OperatorNode('*', FunctionNode(ln, base), diff_right)
    return OperatorNode('*', node, OperatorNode('+', first_term, second_term))


def _chain(outer: Node, inner_derivative: Node) -> Node:
  if isinstance(inner_derivative, NumberNode) and inner_derivative.value == 1:
    return outer
  return OperatorNode('*', outer, inner_derivative)


_RULES = {
  '+': ExpressionDifferentiator._sum_rule,
  '-': ExpressionDifferentiator._sum_rule,
  '*': ExpressionDifferentiator._product_rule,
  '/': ExpressionDifferentiator._quotient_rule,
  '^': ExpressionDifferentiator._power_rule,
}
