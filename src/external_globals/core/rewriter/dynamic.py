"""
Dynamic Import Mixin.

Replaces ``import("g")`` of a globalized module with the configured wrapper
expression. Both tree shapes are recognised: the standard ``ImportExpression``
and the older ``CallExpression`` whose callee is an ``Import`` node. Only a
single plain string literal specifier qualifies; template literals and
computed specifiers are left to the module loader.
"""

from typing import Optional

from external_globals.core.estree import Node, node_kind, span, string_literal_value
from external_globals.enums import NodeKind


def default_dynamic_wrapper(global_path: str) -> str:
  """Wraps the global in an already-resolved promise: ``Promise.resolve(<path>)``."""
  return f"Promise.resolve({global_path})"


def dynamic_import_source(node: Node) -> Optional[str]:
  """
  Extracts the module name of a dynamic import.

  Args:
      node: Any node.

  Returns:
      Optional[str]: The string specifier, or None if `node` is not a dynamic
      import with a single string literal argument.
  """
  kind = node_kind(node)
  if kind == NodeKind.IMPORT_EXPRESSION:
    if node.get("options") is not None:
      return None
    return string_literal_value(node.get("source"))

  if kind == NodeKind.CALL_EXPRESSION and node_kind(node.get("callee")) == NodeKind.IMPORT:
    arguments = node.get("arguments") or []
    if len(arguments) == 1:
      return string_literal_value(arguments[0])

  return None


class DynamicImportMixin:
  """
  Mixin for rewriting dynamic imports of globalized modules.
  """

  def _rewrite_dynamic_import(self, node: Node) -> bool:
    """
    Returns:
        bool: True if `node` was replaced (its children must not be walked).
    """
    ctx = self.context
    global_path = ctx.lookup_global(dynamic_import_source(node))
    if global_path is None:
      return False

    replacement = ctx.dynamic_wrapper(global_path)
    if not replacement:
      return False

    start, end = span(node)
    ctx.buffer.overwrite(start, end, replacement)
    ctx.record(f"wrap_dynamic_import [{start}, {end})", ctx.buffer.original[start:end], replacement)
    return True
