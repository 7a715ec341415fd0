import numpy as np
import numba
from enum import IntEnum

class NodeType(IntEnum):
  ERROR = 0
  NUMBER = 1
  VARIABLE = 2
  CONSTANT = 3
  OPERATOR = 4
  EQUALS = 5
  DIFFERENTIAL = 6
  FUNCTION = 7

# Binary operator symbols understood by OperatorNode
BINARY_OPERATORS = ('+', '-', '*', '/', '^')
ADDITIVE_OPERATORS = ('+', '-')

@numba.njit(cache=True, error_model='numpy')
def evaluate_binary_op(left_val, right_val, operator):
  if operator == '+':
    return left_val + right_val
  elif operator == '-':
    return left_val - right_val
  elif operator == '*':
    return left_val * right_val
  elif operator == '/':
    return left_val / right_val
  elif operator == '^':
    return np.power(left_val, right_val)
  return left_val * np.nan

def evaluate_binary(left_val, right_val, operator: str):
  """Apply a binary operator to scalars or arrays, yielding NaN/inf instead of raising"""
  if operator not in BINARY_OPERATORS:
    return np.nan
  if isinstance(left_val, np.ndarray) or isinstance(right_val, np.ndarray):
    left_val, right_val = np.broadcast_arrays(
      np.asarray(left_val, dtype=np.float64), np.asarray(right_val, dtype=np.float64))
    # broadcast views are read-only and may be strided
    left_val = np.array(left_val, dtype=np.float64)
    right_val = np.array(right_val, dtype=np.float64)
  else:
    left_val = float(left_val)
    right_val = float(right_val)
  return evaluate_binary_op(left_val, right_val, operator)
