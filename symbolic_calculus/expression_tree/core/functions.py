import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Dict, Optional
from .node import Node, ErrorNode, NumberNode, ConstantNode, OperatorNode, FunctionNode, Value


def _mul(left: Node, right: Node) -> Node:
  return OperatorNode('*', left, right)

def _div(left: Node, right: Node) -> Node:
  return OperatorNode('/', left, right)

def _square(node: Node) -> Node:
  return OperatorNode('^', node, NumberNode(2))

def _negate(node: Node) -> Node:
  return OperatorNode('*', NumberNode(-1), node)

def _call(identifier: str, argument: Node) -> Node:
  return FunctionNode(BUILTIN_FUNCTIONS[identifier], argument)

def _is_number(node: Node, value: float) -> bool:
  return isinstance(node, NumberNode) and node.value == value


class Function(ABC):
  """Stateless unary function that knows its own derivative and simplifications"""

  identifier: str = ''
  sympy_function = None
  # value of f(0) when it folds to a number
  value_at_zero: Optional[float] = None

  def execute(self, x: Value) -> Value:
    with np.errstate(all='ignore'):
      return self._execute(x)

  @abstractmethod
  def _execute(self, x: Value) -> Value:
    pass

  def differentiate(self, variable: str, argument: Node) -> Node:
    return self.apply_chain_rule(argument, argument.differentiate(variable))

  def apply_chain_rule(self, argument: Node, argument_derivative: Node) -> Node:
    """Chain rule: the argument's derivative times f'(argument)"""
    if isinstance(argument_derivative, ErrorNode):
      return argument_derivative
    return self._apply_chain_rule(argument, argument_derivative)

  @abstractmethod
  def _apply_chain_rule(self, argument: Node, argument_derivative: Node) -> Node:
    pass

  def simplify(self, argument: Node) -> Node:
    return self.fold_argument(argument.simplify())

  def fold_argument(self, simplified: Node) -> Node:
    """Reduce f(simplified) where the argument is already simplified"""
    if isinstance(simplified, ErrorNode):
      return simplified
    if self.value_at_zero is not None and _is_number(simplified, 0):
      return NumberNode(self.value_at_zero)
    folded = self._simplify_argument(simplified)
    if folded is not None:
      return folded
    return FunctionNode(self, simplified)

  def _simplify_argument(self, argument: Node) -> Optional[Node]:
    return None

  def to_sympy(self, argument: sp.Expr) -> sp.Expr:
    return self.sympy_function(argument)

  def to_string(self) -> str:
    return self.identifier

  def __repr__(self) -> str:
    return f"{type(self).__name__}()"


class SineFunction(Function):
  identifier = 'sin'
  sympy_function = staticmethod(sp.sin)
  value_at_zero = 0.0

  def _execute(self, x):
    return np.sin(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _mul(argument_derivative, _call('cos', argument))


class CosineFunction(Function):
  identifier = 'cos'
  sympy_function = staticmethod(sp.cos)
  value_at_zero = 1.0

  def _execute(self, x):
    return np.cos(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _negate(_mul(argument_derivative, _call('sin', argument)))


class TangentFunction(Function):
  identifier = 'tan'
  sympy_function = staticmethod(sp.tan)
  value_at_zero = 0.0

  def _execute(self, x):
    return np.tan(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _mul(argument_derivative, _square(_call('sec', argument)))


class CotangentFunction(Function):
  identifier = 'cot'
  sympy_function = staticmethod(sp.cot)

  def _execute(self, x):
    return np.cos(x) / np.sin(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _negate(_mul(argument_derivative, _square(_call('csc', argument))))


class SecantFunction(Function):
  identifier = 'sec'
  sympy_function = staticmethod(sp.sec)
  value_at_zero = 1.0

  def _execute(self, x):
    return 1.0 / np.cos(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _mul(argument_derivative, _mul(_call('tan', argument), _call('sec', argument)))


class CosecantFunction(Function):
  identifier = 'csc'
  sympy_function = staticmethod(sp.csc)

  def _execute(self, x):
    return 1.0 / np.sin(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _negate(_mul(argument_derivative, _mul(_call('cot', argument), _call('csc', argument))))


class HyperbolicSineFunction(Function):
  identifier = 'sinh'
  sympy_function = staticmethod(sp.sinh)
  value_at_zero = 0.0

  def _execute(self, x):
    return np.sinh(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _mul(argument_derivative, _call('cosh', argument))


class HyperbolicCosineFunction(Function):
  identifier = 'cosh'
  sympy_function = staticmethod(sp.cosh)
  value_at_zero = 1.0

  def _execute(self, x):
    return np.cosh(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _mul(argument_derivative, _call('sinh', argument))


class HyperbolicTangentFunction(Function):
  identifier = 'tanh'
  sympy_function = staticmethod(sp.tanh)
  value_at_zero = 0.0

  def _execute(self, x):
    return np.tanh(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _mul(argument_derivative, _square(_call('sech', argument)))


class HyperbolicCotangentFunction(Function):
  identifier = 'coth'
  sympy_function = staticmethod(sp.coth)

  def _execute(self, x):
    return np.cosh(x) / np.sinh(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _negate(_mul(argument_derivative, _square(_call('csch', argument))))


class HyperbolicSecantFunction(Function):
  identifier = 'sech'
  sympy_function = staticmethod(sp.sech)
  value_at_zero = 1.0

  def _execute(self, x):
    return 1.0 / np.cosh(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _negate(_mul(argument_derivative, _mul(_call('tanh', argument), _call('sech', argument))))


class HyperbolicCosecantFunction(Function):
  identifier = 'csch'
  sympy_function = staticmethod(sp.csch)

  def _execute(self, x):
    return 1.0 / np.sinh(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _negate(_mul(argument_derivative, _mul(_call('coth', argument), _call('csch', argument))))


class Base10LogarithmFunction(Function):
  identifier = 'log'

  def _execute(self, x):
    return np.log10(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _div(argument_derivative, _mul(_call('ln', NumberNode(10)), argument))

  def _simplify_argument(self, argument):
    if _is_number(argument, 1):
      return NumberNode(0)
    if _is_number(argument, 10):
      return NumberNode(1)
    return None

  def to_sympy(self, argument):
    return sp.log(argument, 10)


class NaturalLogarithmFunction(Function):
  identifier = 'ln'
  sympy_function = staticmethod(sp.log)

  def _execute(self, x):
    return np.log(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _div(argument_derivative, argument)

  def _simplify_argument(self, argument):
    if _is_number(argument, 1):
      return NumberNode(0)
    if _is_number(argument, np.e):
      return NumberNode(1)
    if isinstance(argument, ConstantNode) and argument.name == 'e':
      return NumberNode(1)
    return None


class ExponentialFunction(Function):
  identifier = 'exp'
  sympy_function = staticmethod(sp.exp)
  value_at_zero = 1.0

  def _execute(self, x):
    return np.exp(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _mul(argument_derivative, _call('exp', argument))

  def _simplify_argument(self, argument):
    if _is_number(argument, 1):
      return ConstantNode('e', np.e)
    return None


class SquareRootFunction(Function):
  identifier = 'sqrt'
  sympy_function = staticmethod(sp.sqrt)

  def _execute(self, x):
    return np.sqrt(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _div(argument_derivative, _mul(NumberNode(2), _call('sqrt', argument)))

  def _simplify_argument(self, argument):
    if isinstance(argument, NumberNode) and argument.value >= 0:
      root = np.sqrt(argument.value)
      # perfect squares only
      if np.isfinite(root) and float(root).is_integer():
        return NumberNode(root)
    return None


class ModulusFunction(Function):
  identifier = 'abs'
  sympy_function = staticmethod(sp.Abs)

  def _execute(self, x):
    return np.abs(x)

  def _apply_chain_rule(self, argument, argument_derivative):
    return _div(_mul(argument, argument_derivative), _call('abs', argument))

  def _simplify_argument(self, argument):
    if isinstance(argument, NumberNode):
      return NumberNode(abs(argument.value))
    return None


BUILTIN_FUNCTIONS: Dict[str, Function] = {
  function.identifier: function for function in (
    SineFunction(), CosineFunction(), TangentFunction(),
    CotangentFunction(), SecantFunction(), CosecantFunction(),
    HyperbolicSineFunction(), HyperbolicCosineFunction(), HyperbolicTangentFunction(),
    HyperbolicCotangentFunction(), HyperbolicSecantFunction(), HyperbolicCosecantFunction(),
    Base10LogarithmFunction(), NaturalLogarithmFunction(), ExponentialFunction(),
    SquareRootFunction(), ModulusFunction(),
  )
}
