import numpy as np
from typing import Optional
from ..core.node import (
  Node, ErrorNode, NumberNode, VariableNode, ConstantNode, OperatorNode, FunctionNode
)
from ..core.operators import ADDITIVE_OPERATORS


def _is_number(node: Node, value: Optional[float] = None) -> bool:
  if not isinstance(node, NumberNode):
    return False
  return value is None or node.value == value

def _is_sum(node: Node) -> bool:
  return isinstance(node, OperatorNode) and node.operator in ADDITIVE_OPERATORS

# operands that are multiplied into a sum term by term
_DISTRIBUTABLE = (NumberNode, ConstantNode, FunctionNode)


class ExpressionSimplifier:
  """Best-effort algebraic rewrites for operator nodes, applied bottom-up"""

  @staticmethod
  def simplify_operator_node(node: OperatorNode, left: Node, right: Node) -> Node:
    """Rebuild `node` from its simplified operands and rewrite it"""
    if isinstance(left, ErrorNode):
      return left
    if isinstance(right, ErrorNode):
      return right

    simplified = ExpressionSimplifier.apply_rules(node.operator, left, right)
    if simplified is None:
      if left is node.left and right is node.right:
        return node
      return OperatorNode(node.operator, left, right)
    return simplified

  @staticmethod
  def apply_rules(operator: str, left: Node, right: Node) -> Optional[Node]:
    """Rewrite `left operator right` whose operands are already simplified.

    Returns None when no rule applies.
    """
    rule = _RULES.get(operator)
    if rule is None:
      return None
    return rule(left, right)

  @staticmethod
  def combine(operator: str, left: Node, right: Node) -> Node:
    simplified = ExpressionSimplifier.apply_rules(operator, left, right)
    return simplified if simplified is not None else OperatorNode(operator, left, right)

  @staticmethod
  def _simplify_sum(left: Node, right: Node) -> Optional[Node]:
    if _is_number(left):
      if left.value == 0:
        return right
      if _is_number(right):
        return NumberNode(left.value + right.value)
    if _is_number(right, 0):
      return left
    return None

  @staticmethod
  def _simplify_difference(left: Node, right: Node) -> Optional[Node]:
    if _is_number(left):
      if _is_number(right):
        return NumberNode(left.value - right.value)
      if left.value == 0:
        return OperatorNode('*', NumberNode(-1), right)
    if _is_number(right, 0):
      return left
    return None

  @staticmethod
  def _simplify_product(left: Node, right: Node) -> Optional[Node]:
    if _is_number(left, 1):
      return right
    if _is_number(right, 1):
      return left
    if _is_number(left, 0) or _is_number(right, 0):
      return NumberNode(0)
    if _is_number(left) and _is_number(right):
      return NumberNode(left.value * right.value)

    # x*x = x^2, e*e = e^2
    if isinstance(left, (VariableNode, ConstantNode)) and type(left) is type(right):
      if left.name == right.name:
        return OperatorNode('^', left, NumberNode(2))

    if _is_sum(right):
      if _is_sum(left):
        return ExpressionSimplifier._expand(left, right)
      if isinstance(left, _DISTRIBUTABLE):
        return ExpressionSimplifier._distribute(left, right)
    if _is_sum(left) and isinstance(right, _DISTRIBUTABLE):
      return ExpressionSimplifier._distribute(right, left)
    return None

  @staticmethod
  def _distribute(factor: Node, total: OperatorNode) -> Node:
    # a(b + c) = ab + ac, a(b - c) = ab - ac
    combine = ExpressionSimplifier.combine
    return combine(total.operator,
      combine('*', factor, total.left),
      combine('*', factor, total.right))

  @staticmethod
  def _expand(left: OperatorNode, right: OperatorNode) -> Node:
    combine = ExpressionSimplifier.combine
    a, b = left.left, left.right
    c, d = right.left, right.right
    ac = combine('*', a, c)
    ad = combine('*', a, d)
    bc = combine('*', b, c)
    bd = combine('*', b, d)

    if left.operator == '+' and right.operator == '+':
      # (a + b)(c + d) = ac + ad + bc + bd
      return combine('+', combine('+', ac, ad), combine('+', bc, bd))
    if left.operator == '+':
      # (a + b)(c - d) = ac - ad + bc - bd
      return combine('+', combine('-', ac, ad), combine('-', bc, bd))
    if right.operator == '+':
      # (a - b)(c + d) = ac - bc + ad - bd
      return combine('+', combine('-', ac, bc), combine('-', ad, bd))
    # (a - b)(c - d) = ac - ad + bd - bc
    return combine('+', combine('-', ac, ad), combine('-', bd, bc))

  @staticmethod
  def _simplify_quotient(left: Node, right: Node) -> Optional[Node]:
    if _is_number(right, 1):
      return left
    if _is_number(left, 0):
      return left
    if _is_number(left) and _is_number(right) and right.value != 0:
      return NumberNode(left.value / right.value)
    return None

  @staticmethod
  def _simplify_power(left: Node, right: Node) -> Optional[Node]:
    if _is_number(left):
      if left.value == 0 and _is_number(right) and right.value != 0:
        return NumberNode(0)
      if left.value == 1:
        return NumberNode(1)
    if _is_number(right):
      if right.value == 1:
        return left
      if right.value == 0:
        return NumberNode(1)
    if _is_number(left) and _is_number(right):
      with np.errstate(all='ignore'):
        value = np.power(left.value, right.value)
      if np.isfinite(value):
        return NumberNode(value)
    return None


_RULES = {
  '+': ExpressionSimplifier._simplify_sum,
  '-': ExpressionSimplifier._simplify_difference,
  '*': ExpressionSimplifier._simplify_product,
  '/': ExpressionSimplifier._simplify_quotient,
  '^': ExpressionSimplifier._simplify_power,
}
