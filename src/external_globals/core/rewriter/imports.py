"""
Imports Mixin.

Phase A handling of static ``import`` statements that name a globalized
module: every specifier becomes an entry of the binding table and the
statement itself is deleted.

.. code-block:: javascript

    import React, { useState as us } from "react";   // react -> window.Vendor.React
    // bindings: React -> window.Vendor.React, us -> window.Vendor.React.useState
"""

import json
import logging
import re

from external_globals.core.estree import Node, identifier_name, node_kind, span, string_literal_value
from external_globals.core.rewriter.context import global_root_of
from external_globals.enums import ImportKind, NodeKind

logger = logging.getLogger(__name__)

_PLAIN_MEMBER = re.compile(r"^[A-Za-z_$][\w$]*$")

_SPECIFIER_KINDS = {
  NodeKind.IMPORT_DEFAULT_SPECIFIER: ImportKind.DEFAULT,
  NodeKind.IMPORT_NAMESPACE_SPECIFIER: ImportKind.NAMESPACE,
  NodeKind.IMPORT_SPECIFIER: ImportKind.NAMED,
}


def make_global_name(member: str, global_path: str) -> str:
  """
  Builds the expression for one export of a globalized module.

  Args:
      member: Exported name; ``default`` means the module value itself.
      global_path: Path of the module value, e.g. ``window.Vendor.React``.

  Returns:
      str: ``window.Vendor.React``, ``window.Vendor.React.useState`` or
      ``window.Vendor.React["a-b"]`` for names that are not identifiers.
  """
  if member == "default":
    return global_path
  if _PLAIN_MEMBER.match(member):
    return f"{global_path}.{member}"
  return f"{global_path}[{json.dumps(member)}]"


class ImportsMixin:
  """
  Mixin for removing globalized imports and recording their bindings.
  """

  def _analyze_import(self, statement: Node) -> None:
    ctx = self.context
    module_name = string_literal_value(statement.get("source"))
    global_path = ctx.lookup_global(module_name)
    if global_path is None:
      return

    for specifier in statement.get("specifiers", []):
      kind = _SPECIFIER_KINDS.get(node_kind(specifier))
      local_name = identifier_name(specifier.get("local"))
      if kind is None or local_name is None:
        continue
      if kind == ImportKind.NAMED:
        target = make_global_name(identifier_name(specifier.get("imported")) or local_name, global_path)
      else:
        target = global_path
      ctx.bindings[local_name] = target
      logger.debug("Bound %s -> %s", local_name, target)

    root = global_root_of(global_path)
    if root is not None:
      ctx.global_roots.add(root)

    start, end = span(statement)
    ctx.buffer.remove(start, end)
    ctx.record(f"remove_import [{start}, {end})", ctx.buffer.original[start:end], "")
