"""
Depth-First Tree Walker.

Provides `TreeVisitor`, a dispatch base modelled on LibCST visitors: for a node
of type ``T`` the walker calls ``visit_T(node, parent)`` on entry and
``leave_T(node, parent)`` on exit. Returning ``False`` from a visit method skips
the node's children; the matching leave method still runs, so entry/exit
bookkeeping stays balanced.

The walk is iterative, so deeply nested expressions (long ``a + b + ...``
chains in bundled code) cannot exhaust the interpreter stack.
"""

from typing import List, Optional, Tuple

from external_globals.core.estree import Node, iter_children

_ENTER = 0
_LEAVE = 1


class TreeVisitor:
  """
  Base class for ESTree visitors.

  Subclasses either define per-kind ``visit_<Type>`` / ``leave_<Type>`` methods
  or override `on_visit` / `on_leave` for logic that applies to every node.
  """

  def on_visit(self, node: Node, parent: Optional[Node]) -> bool:
    """
    Called when entering a node.

    Args:
        node: The node being entered.
        parent: Its parent, or None for the root.

    Returns:
        bool: False to skip the node's children.
    """
    handler = getattr(self, f"visit_{node['type']}", None)
    if handler is None:
      return True
    return handler(node, parent) is not False

  def on_leave(self, node: Node, parent: Optional[Node]) -> None:
    """Called when leaving a node (also for nodes whose children were skipped)."""
    handler = getattr(self, f"leave_{node['type']}", None)
    if handler is not None:
      handler(node, parent)


def walk(root: Node, visitor: TreeVisitor) -> None:
  """
  Traverses `root` depth-first in source order.

  Args:
      root: Tree (or sub-tree) to traverse.
      visitor: Receives enter/leave callbacks.
  """
  stack: List[Tuple[int, Node, Optional[Node]]] = [(_ENTER, root, None)]

  while stack:
    action, node, parent = stack.pop()

    if action == _LEAVE:
      visitor.on_leave(node, parent)
      continue

    descend = visitor.on_visit(node, parent)
    stack.append((_LEAVE, node, parent))
    if not descend:
      continue

    children = list(iter_children(node))
    for _, child in reversed(children):
      stack.append((_ENTER, child, node))
