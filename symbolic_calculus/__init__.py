"""Symbolic Calculus Package

Parses single-variable expressions, differentiates and simplifies them
symbolically and evaluates the results numerically.
"""

from .logging_system import LogLevel, configure_logging, get_logger, set_log_level
from .configuration import Configuration, get_global_configuration, init, shutdown
from .tokenizer import Token, TokenType, Tokenizer, tokenize
from .parser import Parser, parse
from .expression_tree import (
  Expression, Node, ErrorNode, NumberNode, VariableNode, ConstantNode,
  OperatorNode, EqualsNode, DifferentialNode, FunctionNode, NodeType,
  Function, BUILTIN_FUNCTIONS
)

__version__ = "0.1.0"
__all__ = [
  "LogLevel", "configure_logging", "get_logger", "set_log_level",
  "Configuration", "get_global_configuration", "init", "shutdown",
  "Token", "TokenType", "Tokenizer", "tokenize",
  "Parser", "parse",
  "Expression", "Node", "ErrorNode", "NumberNode", "VariableNode", "ConstantNode",
  "OperatorNode", "EqualsNode", "DifferentialNode", "FunctionNode", "NodeType",
  "Function", "BUILTIN_FUNCTIONS"
]
