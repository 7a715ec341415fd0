import re
from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from typing import List, Optional, Tuple

from .configuration import Configuration, resolve_configuration
from .logging_system import log_debug


class TokenType(IntEnum):
  NUMBER = 0
  OPERATOR = 1
  VARIABLE = 2
  CONSTANT = 3
  FUNCTION = 4
  PARENTHESIS = 5
  MODULUS_DELIMITER = 6
  EQUALS = 7
  UNKNOWN = 8


@dataclass(frozen=True)
class Token:
  type: TokenType
  value: str


NUMBER_PATTERN = r'\d+(?:\.\d+)?'
OPERATOR_PATTERN = r'[+\-*/^]'
EQUALS_PATTERN = r'='
VARIABLE_PATTERN = r'[A-Za-z]+'
PARENTHESIS_PATTERN = r'[()]'
MODULUS_DELIMITER_PATTERN = r'\|'


def _word_alternation(names: Tuple[str, ...]) -> str:
  # longest first so that e.g. sinh wins over sin
  ordered = sorted(names, key=len, reverse=True)
  return r'\b(?:' + '|'.join(re.escape(name) for name in ordered) + r')\b'


@lru_cache(maxsize=32)
def _compile_token_pattern(function_names: Tuple[str, ...], constant_names: Tuple[str, ...]) -> re.Pattern:
  parts = []
  if function_names:
    parts.append(f"(?P<FUNCTION>{_word_alternation(function_names)})")
  if constant_names:
    parts.append(f"(?P<CONSTANT>{_word_alternation(constant_names)})")
  parts += [
    f"(?P<NUMBER>{NUMBER_PATTERN})",
    f"(?P<OPERATOR>{OPERATOR_PATTERN})",
    f"(?P<EQUALS>{EQUALS_PATTERN})",
    f"(?P<VARIABLE>{VARIABLE_PATTERN})",
    f"(?P<PARENTHESIS>{PARENTHESIS_PATTERN})",
    f"(?P<MODULUS_DELIMITER>{MODULUS_DELIMITER_PATTERN})",
    r"(?P<WHITESPACE>\s+)",
    r"(?P<UNKNOWN>.)",
  ]
  return re.compile('|'.join(parts), re.DOTALL)


class Tokenizer:
  """Splits expression text into typed tokens using the registered names"""

  @staticmethod
  def tokenize(text: str, configuration: Optional[Configuration] = None) -> List[Token]:
    configuration = resolve_configuration(configuration)
    pattern = _compile_token_pattern(
      tuple(configuration.function_names()), tuple(configuration.constant_names()))

    tokens: List[Token] = []
    inside_modulus = False
    pending_minus = False

    for match in pattern.finditer(text):
      kind = match.lastgroup
      if kind == 'WHITESPACE':
        continue
      token_type = TokenType[kind]
      value = match.group()

      if pending_minus:
        pending_minus = False
        if token_type == TokenType.NUMBER:
          tokens.append(Token(TokenType.NUMBER, '-' + value))
          continue
        tokens.append(Token(TokenType.OPERATOR, '-'))

      if token_type == TokenType.OPERATOR and value == '-' \
          and Tokenizer._is_negative_sign(tokens, inside_modulus):
        pending_minus = True
        continue

      if token_type == TokenType.MODULUS_DELIMITER:
        inside_modulus = not inside_modulus
      elif token_type == TokenType.UNKNOWN:
        log_debug(f"Unrecognized character {value!r} at position {match.start()}")

      tokens.append(Token(token_type, value))

    if pending_minus:
      tokens.append(Token(TokenType.OPERATOR, '-'))

    return tokens

  @staticmethod
  def _is_negative_sign(tokens: List[Token], inside_modulus: bool) -> bool:
    if not tokens:
      return True

    previous = tokens[-1]
    return (previous.type == TokenType.OPERATOR
            or (previous.type == TokenType.PARENTHESIS and previous.value == '(')
            or (previous.type == TokenType.MODULUS_DELIMITER and inside_modulus))


def tokenize(text: str, configuration: Optional[Configuration] = None) -> List[Token]:
  return Tokenizer.tokenize(text, configuration)
