from typing import Callable, List, Optional, Sequence, Tuple

from .configuration import Configuration
from .logging_system import log_debug
from .tokenizer import Token, TokenType, tokenize
from .expression_tree.core.node import (
  Node, ErrorNode, NumberNode, VariableNode, ConstantNode, OperatorNode, EqualsNode, FunctionNode
)


class Parser:
  """
  Recursive descent parser, loosest binding first:

    Expression = Equality
    Equality   = Sum ("=" Sum)*
    Sum        = Product (("+" | "-") Product)*
    Product    = Power (("*" | "/") Power)*
    Power      = Primary ("^" Primary)*
    Primary    = number | constant | variable | function "(" Expression ")"
               | "|" Expression "|" | "(" Expression ")"

  Failures are returned as ErrorNode and abort the parse. Tokens left over
  after a complete expression are ignored unless `strict` is set.
  """

  def __init__(self, tokens: Sequence[Token], configuration: Optional[Configuration] = None,
               strict: bool = False):
    self.tokens: List[Token] = list(tokens)
    self.position = 0
    self.configuration = configuration
    self.strict = strict

  def parse_expression(self) -> Node:
    node = self._parse_equality()
    if self.strict and not isinstance(node, ErrorNode):
      trailing = self._peek()
      if trailing is not None:
        return self._error(f"unexpected trailing token {trailing.value}")
    return node

  def _peek(self) -> Optional[Token]:
    return self.tokens[self.position] if self.position < len(self.tokens) else None

  def _consume(self) -> Optional[Token]:
    token = self._peek()
    if token is not None:
      self.position += 1
    return token

  def _error(self, message: str) -> ErrorNode:
    log_debug(f"Parse error at token {self.position}: {message}")
    return ErrorNode(message)

  def _parse_chain(self, parse_operand: Callable[[], Node], symbols: Tuple[str, ...],
                   build: Callable[[str, Node, Node], Node]) -> Node:
    left = parse_operand()
    if isinstance(left, ErrorNode):
      return left

    while True:
      token = self._peek()
      if token is None or token.value not in symbols:
        break

      self._consume()
      right = parse_operand()
      if isinstance(right, ErrorNode):
        return right

      left = build(token.value, left, right)

    return left

  def _parse_equality(self) -> Node:
    return self._parse_chain(self._parse_sum, ('=',), lambda _, left, right: EqualsNode(left, right))

  def _parse_sum(self) -> Node:
    return self._parse_chain(self._parse_product, ('+', '-'), OperatorNode)

  def _parse_product(self) -> Node:
    return self._parse_chain(self._parse_power, ('*', '/'), OperatorNode)

  def _parse_power(self) -> Node:
    return self._parse_chain(self._parse_primary, ('^',), OperatorNode)

  def _expect(self, value: str, message: str) -> Optional[ErrorNode]:
    token = self._peek()
    if token is None or token.value != value:
      return self._error(message)
    self._consume()
    return None

  def _parse_primary(self) -> Node:
    token = self._peek()

    if token is None:
      return self._error("Unexpected end of tokens")

    if token.type == TokenType.NUMBER:
      self._consume()
      return NumberNode(float(token.value))

    if token.type == TokenType.CONSTANT:
      self._consume()
      return ConstantNode(token.value, configuration=self.configuration)

    if token.type == TokenType.VARIABLE:
      self._consume()
      return VariableNode(token.value)

    if token.type == TokenType.FUNCTION:
      self._consume()
      error = self._expect('(', "expected '(' after function")
      if error is not None:
        return error

      argument = self._parse_equality()
      if isinstance(argument, ErrorNode):
        return argument

      error = self._expect(')', "expected ')' after function argument")
      if error is not None:
        return error

      return FunctionNode(token.value, argument, configuration=self.configuration)

    if token.type == TokenType.MODULUS_DELIMITER:
      self._consume()
      argument = self._parse_equality()
      if isinstance(argument, ErrorNode):
        return argument

      error = self._expect('|', "expected '|' to close modulus expression")
      if error is not None:
        return error

      return FunctionNode('abs', argument, configuration=self.configuration)

    if token.type == TokenType.PARENTHESIS and token.value == '(':
      self._consume()
      expression = self._parse_equality()
      if isinstance(expression, ErrorNode):
        return expression

      error = self._expect(')', "expected ')'")
      if error is not None:
        return error

      return expression

    return self._error(f"unexpected token {token.value} (type = {token.type.name})")


def parse(text: str, configuration: Optional[Configuration] = None, strict: bool = False) -> Node:
  """Tokenize and parse `text` in one step"""
  return Parser(tokenize(text, configuration), configuration=configuration, strict=strict).parse_expression()
