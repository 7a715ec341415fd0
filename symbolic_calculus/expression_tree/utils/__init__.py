"""Utilities for expression trees."""

from .differentiator import ExpressionDifferentiator
from .simplifier import ExpressionSimplifier
from .sympy_utils import SymPyBridge
from .tree_utils import (
    get_all_nodes, calculate_tree_depth, count_nodes, count_unique_nodes,
    find_first_error, find_nodes_by_type, get_variables
)
from .validator import ExpressionValidator

__all__ = [
    'ExpressionDifferentiator', 'ExpressionSimplifier', 'SymPyBridge',
    'get_all_nodes', 'calculate_tree_depth', 'count_nodes', 'count_unique_nodes',
    'find_first_error', 'find_nodes_by_type', 'get_variables',
    'ExpressionValidator'
]
