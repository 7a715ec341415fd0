import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Mapping, Tuple, Union, TYPE_CHECKING
from .operators import NodeType, ADDITIVE_OPERATORS, evaluate_binary

if TYPE_CHECKING:
  from .functions import Function
  from ...configuration import Configuration

Value = Union[float, np.ndarray]
Bindings = Mapping[str, Value]

# Significant digits used when rendering numbers
NUMBER_PRECISION = 15

SYMPY_CONSTANTS = {'e': sp.E, 'pi': sp.pi}


def format_number(value: float) -> str:
  # adding 0.0 turns -0.0 into 0.0
  return f"{value + 0.0:.{NUMBER_PRECISION}g}"


def _as_value(value) -> Value:
  if np.ndim(value) == 0:
    return np.float64(value)
  return np.asarray(value, dtype=np.float64)


def _resolve_configuration(configuration: Optional['Configuration']) -> 'Configuration':
  from ...configuration import resolve_configuration
  return resolve_configuration(configuration)


def fold_post_order(node: 'Node', visit: Callable[['Node', tuple], Any]) -> Any:
  """
  Combine results bottom-up without recursion.

  `visit(node, child_results)` is called once per distinct node object, after
  all of its children; shared subtrees are visited once and their result reused.
  """
  results: Dict[int, Any] = {}
  stack = [(node, False)]

  while stack:
    current, expanded = stack.pop()
    key = id(current)
    if key in results:
      continue
    children = current.children()
    if expanded:
      results[key] = visit(current, tuple(results[id(child)] for child in children))
    else:
      stack.append((current, True))
      stack.extend((child, False) for child in reversed(children) if id(child) not in results)

  return results[id(node)]


class Node(ABC):
  """
  Immutable expression node; children may be shared by several parents.

  The public transforms walk the node DAG iteratively and call the per-node
  hooks (`_evaluate`, `_differentiate`, `_simplify`, `_render`) with the
  already computed results of the children, so depth is bounded only by memory.
  """

  __slots__ = ('_hash_cache',)

  node_type: NodeType

  def __init__(self):
    self._hash_cache: Optional[int] = None

  def __setattr__(self, name, value):
    if name != '_hash_cache':
      try:
        getattr(self, name)
      except AttributeError:
        object.__setattr__(self, name, value)
        return
      raise AttributeError(f"{type(self).__name__} is immutable")
    object.__setattr__(self, name, value)

  def differentiate(self, variable: str) -> 'Node':
    return fold_post_order(self, lambda node, derivatives: node._differentiate(variable, derivatives))

  def evaluate(self, bindings: Optional[Bindings] = None) -> Value:
    return fold_post_order(self, lambda node, values: node._evaluate(bindings, values))

  def simplify(self) -> 'Node':
    return fold_post_order(self, lambda node, simplified: node._simplify(simplified))

  def to_string(self) -> str:
    """Render the expression, or the message of the first Error found in it"""
    from ..utils.tree_utils import find_first_error
    error = find_first_error(self)
    if error is not None:
      return error.message
    return fold_post_order(self, lambda node, parts: node._render(parts))

  @abstractmethod
  def _differentiate(self, variable: str, derivatives: tuple) -> 'Node':
    pass

  @abstractmethod
  def _evaluate(self, bindings: Optional[Bindings], values: tuple) -> Value:
    pass

  def _simplify(self, simplified: tuple) -> 'Node':
    return self

  @abstractmethod
  def _render(self, parts: tuple) -> str:
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  @abstractmethod
  def _key(self) -> tuple:
    pass

  def children(self) -> Tuple['Node', ...]:
    return ()

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self.to_string()!r})"

  def __eq__(self, other) -> bool:
    if self is other:
      return True
    if type(self) is not type(other):
      return NotImplemented
    pending = [(self, other)]
    while pending:
      left, right = pending.pop()
      if left is right:
        continue
      if type(left) is not type(right) or hash(left) != hash(right):
        return False
      left_key, right_key = left._key(), right._key()
      if len(left_key) != len(right_key):
        return False
      for a, b in zip(left_key, right_key):
        if isinstance(a, Node) and isinstance(b, Node):
          pending.append((a, b))
        elif a is not b and a != b:
          return False
    return True

  def __hash__(self) -> int:
    if self._hash_cache is None:
      # children first, so every nested hash below is already cached
      fold_post_order(self, lambda node, _: node._cache_hash())
    return self._hash_cache

  def _cache_hash(self) -> int:
    if self._hash_cache is None:
      self._hash_cache = hash((self.node_type, self._key()))
    return self._hash_cache


def _first_error(nodes: tuple) -> Optional['ErrorNode']:
  for node in nodes:
    if isinstance(node, ErrorNode):
      return node
  return None


class ErrorNode(Node):
  __slots__ = ('message',)

  node_type = NodeType.ERROR

  def __init__(self, message: str):
    super().__init__()
    self.message = message

  def _differentiate(self, variable, derivatives):
    return self

  def _evaluate(self, bindings, values):
    return np.nan

  def to_sympy(self):
    raise ValueError(self.message)

  def _render(self, parts):
    return self.message

  def _key(self) -> tuple:
    return (self.message,)


class NumberNode(Node):
  __slots__ = ('value',)

  node_type = NodeType.NUMBER

  def __init__(self, value: float):
    super().__init__()
    self.value = float(value)

  def _differentiate(self, variable, derivatives):
    return NumberNode(0)

  def _evaluate(self, bindings, values):
    return self.value

  def to_sympy(self):
    if self.value.is_integer():
      return sp.Integer(int(self.value))
    return sp.Float(self.value)

  def _render(self, parts):
    return format_number(self.value)

  def _key(self) -> tuple:
    return (self.value,)


class VariableNode(Node):
  __slots__ = ('name',)

  node_type = NodeType.VARIABLE

  def __init__(self, name: str):
    super().__init__()
    self.name = name

  def _differentiate(self, variable, derivatives):
    if self.name == variable:
      return NumberNode(1)
    return DifferentialNode(self.name, variable)

  def _evaluate(self, bindings, values):
    if not bindings or self.name not in bindings:
      return np.nan
    return _as_value(bindings[self.name])

  def to_sympy(self):
    return sp.Symbol(self.name, real=True)

  def _render(self, parts):
    return self.name

  def _key(self) -> tuple:
    return (self.name,)


class ConstantNode(Node):
  """Named constant; its value is looked up once, NaN when the name is not registered"""

  __slots__ = ('name', 'value')

  node_type = NodeType.CONSTANT

  def __init__(self, name: str, value: Optional[float] = None,
               configuration: Optional['Configuration'] = None):
    super().__init__()
    if value is None:
      value = _resolve_configuration(configuration).get_constant_value(name)
    self.name = name
    self.value = float(value)

  def _differentiate(self, variable, derivatives):
    return NumberNode(0)

  def _evaluate(self, bindings, values):
    return self.value

  def to_sympy(self):
    return SYMPY_CONSTANTS.get(self.name, sp.Symbol(self.name, real=True))

  def _render(self, parts):
    return self.name

  def _key(self) -> tuple:
    return (self.name,)


class OperatorNode(Node):
  __slots__ = ('operator', 'left', 'right')

  node_type = NodeType.OPERATOR

  def __init__(self, operator: str, left: Node, right: Node):
    super().__init__()
    self.operator = operator
    self.left = left
    self.right = right

  def children(self) -> Tuple[Node, ...]:
    return (self.left, self.right)

  def _differentiate(self, variable, derivatives):
    from ..utils.differentiator import ExpressionDifferentiator
    diff_left, diff_right = derivatives
    return ExpressionDifferentiator.differentiate_operator_node(self, diff_left, diff_right)

  def _evaluate(self, bindings, values):
    left_val, right_val = values
    return evaluate_binary(left_val, right_val, self.operator)

  def _simplify(self, simplified):
    from ..utils.simplifier import ExpressionSimplifier
    left, right = simplified
    return ExpressionSimplifier.simplify_operator_node(self, left, right)

  def to_sympy(self):
    left = self.left.to_sympy()
    right = self.right.to_sympy()
    if self.operator == '+':
      return sp.Add(left, right)
    elif self.operator == '-':
      return sp.Add(left, sp.Mul(-1, right))
    elif self.operator == '*':
      return sp.Mul(left, right)
    elif self.operator == '/':
      return sp.Mul(left, sp.Pow(right, -1))
    elif self.operator == '^':
      return sp.Pow(left, right)
    raise ValueError(f"to_sympy reached unknown operator {self.operator}")

  def _render(self, parts):
    left, right = self.left, self.right
    left_text, right_text = parts
    if self.operator == '*':
      if isinstance(left, OperatorNode):
        if isinstance(right, OperatorNode):
          return f"({left_text})({right_text})"
        # (x + y) * z renders as z(x + y)
        return f"{right_text}({left_text})"
      if isinstance(right, OperatorNode):
        return f"{left_text}({right_text})"
      if isinstance(right, NumberNode):
        return f"{left_text}*{right_text}"
      return f"{left_text}{right_text}"
    elif self.operator == '/':
      return f"({_quotient_operand(left, left_text)} / {_quotient_operand(right, right_text)})"
    elif self.operator == '+':
      return f"{left_text} + {right_text}"
    elif self.operator == '-':
      if isinstance(right, OperatorNode) and right.operator in ADDITIVE_OPERATORS:
        return f"{left_text} - ({right_text})"
      return f"{left_text} - {right_text}"
    elif self.operator == '^':
      return f"{_power_operand(left, left_text)}^{_power_operand(right, right_text)}"
    return f"({left_text} {self.operator} {right_text})"

  def _key(self) -> tuple:
    return (self.operator, self.left, self.right)


def _power_operand(node: Node, text: str) -> str:
  if isinstance(node, (OperatorNode, EqualsNode, DifferentialNode)):
    return f"({text})"
  if isinstance(node, NumberNode) and node.value < 0:
    return f"({text})"
  return text


def _quotient_operand(node: Node, text: str) -> str:
  # powers bind tighter and quotients carry their own parentheses
  if isinstance(node, OperatorNode) and node.operator not in ('^', '/'):
    return f"({text})"
  return text


class EqualsNode(Node):
  """Equation between two sides; only rendered, simplified and differentiated"""

  __slots__ = ('left', 'right')

  node_type = NodeType.EQUALS

  def __init__(self, left: Node, right: Node):
    super().__init__()
    self.left = left
    self.right = right

  def children(self) -> Tuple[Node, ...]:
    return (self.left, self.right)

  def _differentiate(self, variable, derivatives):
    error = _first_error(derivatives)
    if error is not None:
      return error
    return EqualsNode(*derivatives)

  def _evaluate(self, bindings, values):
    return np.nan

  def _simplify(self, simplified):
    error = _first_error(simplified)
    if error is not None:
      return error
    return EqualsNode(*simplified)

  def to_sympy(self):
    return sp.Eq(self.left.to_sympy(), self.right.to_sympy(), evaluate=False)

  def _render(self, parts):
    return f"{parts[0]} = {parts[1]}"

  def _key(self) -> tuple:
    return (self.left, self.right)


class DifferentialNode(Node):
  """Unevaluated derivative d^n(variable)/d(respect_to)^n"""

  __slots__ = ('variable', 'respect_to', 'order')

  node_type = NodeType.DIFFERENTIAL

  def __init__(self, variable: str, respect_to: str, order: int = 1):
    super().__init__()
    if int(order) != order or order < 1:
      raise ValueError(f"order must be a positive integer, got {order!r}")
    self.variable = variable
    self.respect_to = respect_to
    self.order = int(order)

  def _differentiate(self, variable, derivatives):
    higher = DifferentialNode(self.variable, self.respect_to, self.order + 1)
    if variable == self.respect_to:
      return higher
    # d/dt (dy/dx) = d^2y/dx^2 * dx/dt
    return OperatorNode('*', higher, DifferentialNode(self.respect_to, variable))

  def _evaluate(self, bindings, values):
    return np.nan

  def to_sympy(self):
    respect_to = sp.Symbol(self.respect_to, real=True)
    return sp.Derivative(sp.Function(self.variable)(respect_to), (respect_to, self.order))

  def _render(self, parts):
    if self.order == 1:
      return f"d{self.variable}/d{self.respect_to}"
    return f"d^{self.order}{self.variable}/d{self.respect_to}^{self.order}"

  def _key(self) -> tuple:
    return (self.variable, self.respect_to, self.order)


class FunctionNode(Node):
  """Application of a registered unary function to one argument"""

  __slots__ = ('function', 'identifier', 'argument')

  node_type = NodeType.FUNCTION

  def __init__(self, function: Union['Function', str], argument: Node,
               configuration: Optional['Configuration'] = None):
    from .functions import Function
    super().__init__()
    if isinstance(function, Function):
      identifier = function.identifier
    else:
      identifier = function
      function = _resolve_configuration(configuration).get_function(identifier)
      if function is None:
        argument = ErrorNode(f"Could not find function {identifier}")
    self.function = function
    self.identifier = identifier
    self.argument = argument

  def children(self) -> Tuple[Node, ...]:
    return (self.argument,)

  def _differentiate(self, variable, derivatives):
    if isinstance(self.argument, ErrorNode):
      return self.argument
    return self.function.apply_chain_rule(self.argument, derivatives[0])

  def _evaluate(self, bindings, values):
    if self.function is None:
      return np.nan
    return self.function.execute(values[0])

  def _simplify(self, simplified):
    argument = simplified[0]
    if isinstance(argument, ErrorNode):
      return argument
    return self.function.fold_argument(argument)

  def to_sympy(self):
    if isinstance(self.argument, ErrorNode):
      raise ValueError(self.argument.message)
    return self.function.to_sympy(self.argument.to_sympy())

  def _render(self, parts):
    return f"{self.identifier}({parts[0]})"

  def _key(self) -> tuple:
    return (self.identifier, self.argument)
