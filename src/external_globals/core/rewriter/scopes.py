"""
Scoping Mixin.

Keeps ``context.scope`` pointing at the innermost lexical scope of the node
being visited, using the scopes pre-computed by ``attach_scopes``, and tracks
which identifiers are the declared names of an inline top-level export
(``export const a = 1``, ``export function a() {}``).
"""

from typing import List

from external_globals.core.estree import Node, node_kind
from external_globals.core.scopes import extract_binding_identifiers
from external_globals.enums import NodeKind


class ScopingMixin:
  """
  Mixin for entering and exiting lexical scopes during the walk.
  """

  def _enter_scope(self, node: Node) -> None:
    scope = self.context.scopes.for_node(node)
    if scope is not None:
      self.context.scope = scope

  def _exit_scope(self, node: Node) -> None:
    ctx = self.context
    if ctx.scopes.for_node(node) is not None and ctx.scope.parent is not None:
      ctx.scope = ctx.scope.parent

  def _set_top_statement(self, statement: Node) -> None:
    """Records the current top-level statement and the names it exports inline."""
    ctx = self.context
    ctx.top_statement = statement
    ctx.export_bindings = {id(identifier) for identifier in inline_export_bindings(statement)}

  def _is_export_binding(self, node: Node) -> bool:
    return id(node) in self.context.export_bindings


def inline_export_bindings(statement: Node) -> List[Node]:
  """Identifiers declared by an inline ``export const|let|var|function|class`` statement."""
  if node_kind(statement) != NodeKind.EXPORT_NAMED_DECLARATION:
    return []

  declaration = statement.get("declaration")
  kind = node_kind(declaration)
  if kind == NodeKind.VARIABLE_DECLARATION:
    found: List[Node] = []
    for declarator in declaration.get("declarations", []):
      found.extend(extract_binding_identifiers(declarator.get("id")))
    return found
  if kind in (NodeKind.FUNCTION_DECLARATION, NodeKind.CLASS_DECLARATION) and declaration.get("id") is not None:
    return [declaration["id"]]
  return []
