"""
Base Rewriter Implementation.

This module provides the ``BaseRewriter`` class, the foundation for the
``GlobalsRewriter``. It handles:

1.  **Phase ordering**: the top-level statement scan (Phase A) runs to
    completion before the reference walk (Phase B) starts.
2.  **Walk bookkeeping**: the ancestor stack, the enclosing top-level statement
    and the current lexical scope are updated on every entry/exit.
3.  **Edit primitives**: the syntax-aware identifier replacement shared by the
    binding rewrite and the conflict renamer.

The specific rules live in the mixins (imports, exports, references,
conflicts, dynamic imports) and only talk to each other through the
``RewriteContext``.
"""

from typing import Callable, Optional

from external_globals.core.estree import Node, node_kind, same_span, span
from external_globals.core.rewriter.context import RewriteContext
from external_globals.core.walker import TreeVisitor, walk
from external_globals.enums import NodeKind


class BaseRewriter(TreeVisitor):
  """
  The base class for the rewrite traversal.

  Provides the phase driver, the per-node bookkeeping and the edit helpers
  used by the Mixins (ImportsMixin, ReferencesMixin, etc.).
  """

  def __init__(self, context: RewriteContext, is_reference: Callable[[Node, Optional[Node]], bool]):
    """
    Initializes the rewriter.

    Args:
        context: Fresh per-module state (buffer, lookup, scopes).
        is_reference: Reference classifier from the walk toolkit.
    """
    self.context = context
    self._is_reference = is_reference

  def run(self, tree: Node) -> bool:
    """
    Executes both phases over a ``Program`` node.

    Args:
        tree: The module root.

    Returns:
        bool: True if any edit was recorded.

    Raises:
        UnsupportedExportError: On ``export * from`` a globalized module.
    """
    for statement in tree.get("body", []):
      kind = node_kind(statement)
      if kind == NodeKind.IMPORT_DECLARATION:
        self._analyze_import(statement)
      elif kind == NodeKind.EXPORT_NAMED_DECLARATION:
        self._analyze_export_named(statement)
      elif kind == NodeKind.EXPORT_ALL_DECLARATION:
        self._analyze_export_all(statement)

    walk(tree, self)
    return self.context.touched

  # --- Traversal Hooks ---

  def on_visit(self, node: Node, parent: Optional[Node]) -> bool:
    ctx = self.context
    ctx.ancestors.append(node)

    if node_kind(parent) == NodeKind.PROGRAM:
      self._set_top_statement(node)

    kind = node_kind(node)
    if kind == NodeKind.IMPORT_DECLARATION:
      return False
    # Re-export specifiers name the source module's exports, not local bindings
    if kind == NodeKind.EXPORT_NAMED_DECLARATION and node.get("source") is not None:
      return False

    self._enter_scope(node)

    if kind == NodeKind.IDENTIFIER and self._is_reference(node, parent):
      self._handle_reference(node, parent)

    if self._rewrite_dynamic_import(node):
      return False

    return super().on_visit(node, parent)

  def on_leave(self, node: Node, parent: Optional[Node]) -> None:
    super().on_leave(node, parent)
    self._exit_scope(node)
    self.context.ancestors.pop()

  # --- Helpers ---

  @property
  def grandparent(self) -> Optional[Node]:
    """Parent of the current node's parent, while visiting."""
    ancestors = self.context.ancestors
    return ancestors[-3] if len(ancestors) >= 3 else None

  def _source_of(self, node: Node) -> str:
    start, end = span(node)
    return self.context.buffer.original[start:end]

  def _write_identifier(self, node: Node, parent: Optional[Node], replacement: str, action: str) -> None:
    """
    Replaces one identifier occurrence while keeping shorthand syntax valid.

    * ``{ R }`` / ``{ R = 1 }`` -> ``{ R: <replacement> }`` (key kept).
    * ``export { R }`` -> ``export { <replacement> as R }``.
    * anything else: the token is overwritten.

    Args:
        node: The Identifier being rewritten.
        parent: Its parent node.
        replacement: New text for the reference.
        action: Trace label for the edit.
    """
    ctx = self.context
    if ctx.is_overwritten(node):
      return
    original = self._source_of(node)
    if replacement == original:
      return

    start, end = span(node)
    parent_kind = node_kind(parent)
    shorthand_owner = parent
    if parent_kind == NodeKind.ASSIGNMENT_PATTERN and parent.get("left") is node:
      shorthand_owner = self.grandparent

    if node_kind(shorthand_owner) == NodeKind.PROPERTY and shorthand_owner.get("shorthand"):
      ctx.buffer.append_left(end, f": {replacement}")
    elif parent_kind == NodeKind.EXPORT_SPECIFIER and same_span(parent.get("local"), parent.get("exported")):
      ctx.buffer.append_left(start, f"{replacement} as ")
    else:
      ctx.buffer.overwrite(start, end, replacement)

    ctx.mark_overwritten(node)
    ctx.record(f"{action} [{start}, {end})", original, replacement)
