"""
Conflicts Mixin.

A local declaration that reuses the root name of a global path (``window``,
``moment``) would capture the emitted global-path expressions. Every
occurrence of such a local is renamed to ``_local_<name>``. Inline exports of
the renamed declaration keep their public name:

.. code-block:: javascript

    export const window = 1;
    // const _local_window = 1;
    // export { _local_window as window };
"""

from typing import List, Optional

from external_globals.core.estree import Node, span
from external_globals.core.rewriter.scopes import inline_export_bindings

LOCAL_PREFIX = "_local_"


class ConflictsMixin:
  """
  Mixin for renaming locals that collide with global roots.
  """

  def _rename_conflict(self, node: Node, parent: Optional[Node]) -> None:
    name = node["name"]
    renamed = f"{LOCAL_PREFIX}{name}"
    self._write_identifier(node, parent, renamed, "rename_conflict")
    if self._is_export_binding(node):
      self._reexport_renamed(name, renamed)

  def _reexport_renamed(self, name: str, renamed: str) -> None:
    """
    Re-exports `renamed` under `name` after the statement.

    The inline ``export`` keyword is stripped once per statement; sibling
    bindings of that statement that keep their name are re-exported as-is.
    """
    ctx = self.context
    statement = ctx.top_statement
    start, end = span(statement)

    clause = f"\nexport {{ {renamed} as {name} }};"
    ctx.buffer.append_left(end, clause)
    ctx.record(f"reexport_renamed @{end}", "", clause)

    if not ctx.claim_export_strip(statement):
      return

    declaration_start = span(statement["declaration"])[0]
    ctx.buffer.remove(start, declaration_start)
    ctx.record(f"strip_export [{start}, {declaration_start})", ctx.buffer.original[start:declaration_start], "")

    kept: List[str] = []
    for identifier in inline_export_bindings(statement):
      if identifier["name"] not in ctx.global_roots and identifier["name"] not in kept:
        kept.append(identifier["name"])
    if kept:
      kept_clause = f"\nexport {{ {', '.join(kept)} }};"
      ctx.buffer.append_left(end, kept_clause)
      ctx.record(f"reexport_kept @{end}", "", kept_clause)
