import re
import threading
import numpy as np
from typing import Dict, List, Optional

from .expression_tree.core.functions import Function, BUILTIN_FUNCTIONS
from .logging_system import log_debug, log_warning

BUILTIN_CONSTANTS: Dict[str, float] = {
  'e': float(np.e),
  'pi': float(np.pi),
}

# Only letter runs can be tokenized as function or constant names
_NAME_RE = re.compile(r'[A-Za-z]+')


class Configuration:
  """Registry of the named functions and constants known to the tokenizer, parser and nodes.

  Lookups on an uninitialized (or shut down) registry report "not found"
  rather than raising. Reads are safe from several threads; init() and
  shutdown() must be serialized by the caller.
  """

  def __init__(self):
    self._functions: Dict[str, Function] = {}
    self._constants: Dict[str, float] = {}
    self._initialized = False

  @property
  def is_initialized(self) -> bool:
    return self._initialized

  def init(self):
    if self._initialized:
      log_debug("Configuration.init called twice, ignoring")
      return

    for function in BUILTIN_FUNCTIONS.values():
      self.add_function(function)
    for name, value in BUILTIN_CONSTANTS.items():
      self.add_constant(name, value)

    self._initialized = True
    log_debug(f"Configuration initialized: {len(self._functions)} functions, "
              f"{len(self._constants)} constants")

  def shutdown(self):
    self._functions.clear()
    self._constants.clear()
    self._initialized = False
    log_debug("Configuration shut down")

  def add_function(self, function: Function):
    if not isinstance(function, Function):
      raise TypeError(f"expected a Function, got {type(function).__name__}")
    if not _NAME_RE.fullmatch(function.identifier):
      raise ValueError(f"invalid function identifier: {function.identifier!r}")
    registered = self._functions.setdefault(function.identifier, function)
    if registered is not function:
      log_warning(f"Function {function.identifier} is already registered, keeping {registered!r}")

  def add_constant(self, name: str, value: float):
    if not _NAME_RE.fullmatch(name):
      raise ValueError(f"invalid constant name: {name!r}")
    self._constants[name] = float(value)

  def get_function(self, name: str) -> Optional[Function]:
    return self._functions.get(name)

  def get_constant_value(self, name: str) -> float:
    return self._constants.get(name, np.nan)

  def function_names(self) -> List[str]:
    return list(self._functions)

  def constant_names(self) -> List[str]:
    return list(self._constants)

  def get_stats(self) -> dict:
    return {
      'initialized': self._initialized,
      'function_count': len(self._functions),
      'constant_count': len(self._constants),
    }


# Process-wide instance used when no configuration is passed explicitly
_GLOBAL_CONFIGURATION: Optional[Configuration] = None
_CONFIGURATION_LOCK = threading.Lock()


def get_global_configuration() -> Configuration:
  global _GLOBAL_CONFIGURATION

  if _GLOBAL_CONFIGURATION is not None:
    return _GLOBAL_CONFIGURATION

  with _CONFIGURATION_LOCK:
    if _GLOBAL_CONFIGURATION is None:
      _GLOBAL_CONFIGURATION = Configuration()

  return _GLOBAL_CONFIGURATION


def resolve_configuration(configuration: Optional[Configuration] = None) -> Configuration:
  return configuration if configuration is not None else get_global_configuration()


def init():
  """Populate the process-wide registry with the built-in functions and constants"""
  get_global_configuration().init()


def shutdown():
  """Release every registered function and constant of the process-wide registry"""
  get_global_configuration().shutdown()
