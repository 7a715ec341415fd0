import numpy as np
from typing import Optional
from ..core.node import Node, FunctionNode, Bindings
from .tree_utils import find_first_error, get_all_nodes


class ExpressionValidator:

  @staticmethod
  def is_valid_expression(node: Node, bindings: Optional[Bindings] = None) -> bool:
    if not ExpressionValidator._is_structurally_valid(node):
      return False

    if bindings is not None:
      return ExpressionValidator._test_evaluation(node, bindings)

    return True

  @staticmethod
  def _is_structurally_valid(node: Node) -> bool:
    if find_first_error(node) is not None:
      return False
    return all(n.function is not None for n in get_all_nodes(node) if isinstance(n, FunctionNode))

  @staticmethod
  def _test_evaluation(node: Node, bindings: Bindings) -> bool:
    result = node.evaluate(bindings)
    return bool(np.all(np.isfinite(result)))
