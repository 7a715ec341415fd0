import numpy as np
import sympy as sp
from typing import Sequence

from ..core.node import Node


class SymPyBridge:
  """Export expression nodes to SymPy and check results against it"""

  @staticmethod
  def to_sympy(node: Node) -> sp.Expr:
    return node.to_sympy()

  @staticmethod
  def latex_representation(node: Node) -> str:
    """Get LaTeX representation of the expression, or its plain rendering"""
    try:
      return sp.latex(node.to_sympy())
    except ValueError:
      return node.to_string()

  @staticmethod
  def matches_sympy_derivative(node: Node, derivative: Node, variable: str = 'x',
                               samples: Sequence[float] = (0.3, 0.7, 1.3, 2.1),
                               rtol: float = 1e-7) -> bool:
    """
    Compare a derivative produced by this package with SymPy's on sample points.

    Both sides are evaluated on the whole sample vector; NaN must coincide.
    """
    symbol = sp.Symbol(variable, real=True)
    reference = sp.diff(node.to_sympy(), symbol)

    points = np.asarray(samples, dtype=np.float64)
    expected = np.array([SymPyBridge._evaluate_real(reference, symbol, point) for point in points])
    with np.errstate(all='ignore'):
      actual = np.broadcast_to(np.asarray(derivative.evaluate({variable: points}), dtype=np.float64), points.shape)
    return bool(np.allclose(actual, expected, rtol=rtol, equal_nan=True))

  @staticmethod
  def numerically_equivalent(first: Node, second: Node, variable: str = 'x',
                             samples: Sequence[float] = (0.3, 0.7, 1.3, 2.1),
                             rtol: float = 1e-9) -> bool:
    points = np.asarray(samples, dtype=np.float64)
    with np.errstate(all='ignore'):
      a = np.broadcast_to(np.asarray(first.evaluate({variable: points}), dtype=np.float64), points.shape)
      b = np.broadcast_to(np.asarray(second.evaluate({variable: points}), dtype=np.float64), points.shape)
    return bool(np.allclose(a, b, rtol=rtol, equal_nan=True))

  @staticmethod
  def _evaluate_real(expr: sp.Expr, symbol: sp.Symbol, point: float) -> float:
    try:
      value = complex(expr.subs(symbol, point).evalf())
    except TypeError:
      # zoo / nan have no complex() conversion
      return np.nan
    if abs(value.imag) > 1e-12:
      return np.nan
    return value.real
