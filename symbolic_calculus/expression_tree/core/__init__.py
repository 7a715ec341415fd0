"""Core expression tree components."""

from .node import (
    Node, ErrorNode, NumberNode, VariableNode, ConstantNode,
    OperatorNode, EqualsNode, DifferentialNode, FunctionNode, format_number
)
from .operators import (
    NodeType, BINARY_OPERATORS, ADDITIVE_OPERATORS,
    evaluate_binary_op, evaluate_binary
)
from .functions import Function, BUILTIN_FUNCTIONS

__all__ = [
    'Node', 'ErrorNode', 'NumberNode', 'VariableNode', 'ConstantNode',
    'OperatorNode', 'EqualsNode', 'DifferentialNode', 'FunctionNode', 'format_number',
    'NodeType', 'BINARY_OPERATORS', 'ADDITIVE_OPERATORS',
    'evaluate_binary_op', 'evaluate_binary',
    'Function', 'BUILTIN_FUNCTIONS'
]
