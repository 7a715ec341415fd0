import sympy as sp
from typing import List, Optional, TYPE_CHECKING

from .core.node import Node, Bindings, Value
from .utils.tree_utils import count_nodes, calculate_tree_depth, find_first_error, get_variables
from .utils.validator import ExpressionValidator
from ..logging_system import debug_enabled, log_debug

if TYPE_CHECKING:
  from ..configuration import Configuration


class Expression:
  """Parsed expression with cached rendering"""

  __slots__ = ('root', '_string_cache')

  def __init__(self, root: Node):
    self.root = root
    self._string_cache: Optional[str] = None

  @classmethod
  def parse(cls, text: str, configuration: Optional['Configuration'] = None,
            strict: bool = False) -> 'Expression':
    from ..parser import parse
    return cls(parse(text, configuration=configuration, strict=strict))

  def evaluate(self, bindings: Optional[Bindings] = None, **values) -> Value:
    if values:
      bindings = {**(bindings or {}), **values}
    return self.root.evaluate(bindings)

  def differentiate(self, variable: str = 'x', simplify: bool = True) -> 'Expression':
    derivative = self.root.differentiate(variable)
    if simplify:
      derivative = derivative.simplify()
    result = Expression(derivative)
    if debug_enabled():
      log_debug(f"d/d{variable} [{self.to_string()}] = {result.to_string()}")
    return result

  def simplify(self) -> 'Expression':
    simplified = self.root.simplify()
    if simplified is self.root:
      return self
    return Expression(simplified)

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy()

  def size(self) -> int:
    """Node count of the expression viewed as a tree"""
    return count_nodes(self.root)

  def depth(self) -> int:
    return calculate_tree_depth(self.root)

  def variables(self) -> List[str]:
    return get_variables(self.root)

  @property
  def is_error(self) -> bool:
    return find_first_error(self.root) is not None

  @property
  def error_message(self) -> Optional[str]:
    error = find_first_error(self.root)
    return error.message if error is not None else None

  def is_valid(self, bindings: Optional[Bindings] = None) -> bool:
    return ExpressionValidator.is_valid_expression(self.root, bindings)

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.to_string()!r})"

  def __hash__(self) -> int:
    return hash(self.root)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    return self.root == other.root
