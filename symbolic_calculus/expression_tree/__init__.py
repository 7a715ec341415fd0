"""Expression Tree Module

Immutable expression nodes, the built-in functions and the rules to
differentiate, simplify, evaluate and render them.
"""

from .expression import Expression
from .core.node import (
    Node,
    ErrorNode,
    NumberNode,
    VariableNode,
    ConstantNode,
    OperatorNode,
    EqualsNode,
    DifferentialNode,
    FunctionNode
)
from .core.operators import NodeType, BINARY_OPERATORS, evaluate_binary_op, evaluate_binary
from .core.functions import Function, BUILTIN_FUNCTIONS
from .utils import ExpressionDifferentiator, ExpressionSimplifier, SymPyBridge, ExpressionValidator

__all__ = [
    "Expression",
    "Node", "ErrorNode", "NumberNode", "VariableNode", "ConstantNode",
    "OperatorNode", "EqualsNode", "DifferentialNode", "FunctionNode",
    "NodeType", "BINARY_OPERATORS", "evaluate_binary_op", "evaluate_binary",
    "Function", "BUILTIN_FUNCTIONS",
    "ExpressionDifferentiator", "ExpressionSimplifier", "SymPyBridge", "ExpressionValidator"
]
