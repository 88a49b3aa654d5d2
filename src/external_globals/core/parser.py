"""
Module Parser.

Adapts the ``esprima`` parser to the plain-dictionary ESTree shape the
rewriter works on. Each node becomes a ``dict`` with its ``type``, its child
fields, and ``start`` / ``end`` character offsets taken from ``range``.

Conversion never shares dictionaries between parents: when the parser reuses
one object for two fields (shorthand ``{ a }`` key and value), each field gets
its own dictionary with the same span.
"""

import logging
from typing import Any, List, Tuple

import esprima
from esprima.error_handler import Error as EsprimaError

from external_globals.core.estree import Node
from external_globals.exceptions import ModuleParseError

logger = logging.getLogger(__name__)

_PARSE_OPTIONS = {"range": True}


def _is_parser_object(value: Any) -> bool:
  return hasattr(value, "__dict__") and not isinstance(value, type)


def _convert(value: Any, pending: List[Tuple[Any, Node]]) -> Any:
  if isinstance(value, list):
    return [_convert(item, pending) for item in value]
  if _is_parser_object(value):
    target: Node = {}
    pending.append((value, target))
    return target
  return value


def to_estree(parsed: Any) -> Node:
  """
  Converts an esprima syntax tree into nested ESTree dictionaries.

  Args:
      parsed: The object returned by ``esprima.parseModule``.

  Returns:
      Node: The ``Program`` dictionary.
  """
  root: Node = {}
  pending: List[Tuple[Any, Node]] = [(parsed, root)]

  # Iterative, so long expression chains do not hit the recursion limit
  while pending:
    source, target = pending.pop()
    for key, value in vars(source).items():
      target[key] = _convert(value, pending)

    node_range = target.get("range")
    if isinstance(node_range, (list, tuple)) and len(node_range) == 2:
      target.setdefault("start", node_range[0])
      target.setdefault("end", node_range[1])

  return root


def parse_module(code: str) -> Node:
  """
  Parses ECMAScript module source text.

  Args:
      code (str): The module source.

  Returns:
      Node: ESTree ``Program`` whose offsets index `code`.

  Raises:
      ModuleParseError: If the text is not a valid module.
  """
  try:
    parsed = esprima.parseModule(code, _PARSE_OPTIONS)
  except EsprimaError as e:
    raise ModuleParseError(str(e)) from e

  tree = to_estree(parsed)
  logger.debug("Parsed module with %d top-level statements", len(tree.get("body", [])))
  return tree
