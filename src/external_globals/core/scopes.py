"""
Lexical Scope Model.

`attach_scopes` runs once over a module before rewriting and records, for every
node that opens a lexical scope, a `Scope` seeded with the names declared
directly inside it. Because the pre-pass sees the whole module, hoisted
declarations (``var``, function declarations) are visible to references that
appear before them in the text.

Scope-opening nodes:
  - Functions (declarations, expressions, arrows): params, plus the name of a
    named function expression.
  - Named class expressions: the class name, visible only inside the class.
  - ``for`` / ``for-in`` / ``for-of`` statements (block scope).
  - Block statements that are not a function body (block scope).
  - ``catch`` clauses: the caught parameter (block scope).
"""

from typing import Dict, Iterable, List, Optional, Set

from external_globals.core.estree import Node, node_kind
from external_globals.core.walker import TreeVisitor, walk
from external_globals.enums import NodeKind

_FUNCTION_KINDS = frozenset(
  {
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.FUNCTION_EXPRESSION,
    NodeKind.ARROW_FUNCTION_EXPRESSION,
  }
)
_FOR_KINDS = frozenset({NodeKind.FOR_STATEMENT, NodeKind.FOR_IN_STATEMENT, NodeKind.FOR_OF_STATEMENT})
_BLOCK_DECLARATION_KINDS = frozenset({"const", "let"})


def extract_binding_identifiers(pattern: Optional[Node]) -> List[Node]:
  """
  Lists every Identifier node bound by a declaration pattern.

  Handles plain identifiers, object/array destructuring, rest elements and
  default values, e.g. ``{ a, b: [c, ...d], e = 1 }`` -> nodes for ``a, c, d, e``.
  Default value expressions are not bindings and are never returned.

  Args:
      pattern: The ``id`` of a declarator, a parameter, or a catch param.

  Returns:
      List[Node]: Bound Identifier nodes in source order.
  """
  found: List[Node] = []
  pending: List[Optional[Node]] = [pattern]

  while pending:
    current = pending.pop(0)
    kind = node_kind(current)
    if kind == NodeKind.IDENTIFIER:
      found.append(current)
    elif kind == NodeKind.OBJECT_PATTERN:
      nested = []
      for prop in current.get("properties", []):
        if node_kind(prop) == NodeKind.REST_ELEMENT:
          nested.append(prop.get("argument"))
        else:
          nested.append(prop.get("value"))
      pending[0:0] = nested
    elif kind == NodeKind.ARRAY_PATTERN:
      pending[0:0] = [el for el in current.get("elements", []) if el is not None]
    elif kind == NodeKind.REST_ELEMENT:
      pending.insert(0, current.get("argument"))
    elif kind == NodeKind.ASSIGNMENT_PATTERN:
      pending.insert(0, current.get("left"))

  return found


def extract_assigned_names(pattern: Optional[Node]) -> List[str]:
  """Names of `extract_binding_identifiers`, e.g. ``["a", "c", "d", "e"]``."""
  return [identifier["name"] for identifier in extract_binding_identifiers(pattern)]


class Scope:
  """
  A lexical scope in a parent-linked chain.

  Attributes:
      parent (Optional[Scope]): Enclosing scope, None for the module scope.
      is_block_scope (bool): Block scopes forward ``var``/function declarations to their parent.
      declarations (Set[str]): Names declared directly in this scope.
  """

  def __init__(self, parent: Optional["Scope"] = None, block: bool = False, params: Iterable[Node] = ()):
    """
    Initializes the scope.

    Args:
        parent: The enclosing scope.
        block: True for block scopes (blocks, loops, catch clauses).
        params: Parameter patterns whose names are declared here.
    """
    self.parent = parent
    self.is_block_scope = block
    self.declarations: Set[str] = set()
    for param in params:
      self.declarations.update(extract_assigned_names(param))

  def add_declaration(self, node: Node, is_block_declaration: bool) -> None:
    """
    Declares the names bound by `node` (a declarator, function, or class).

    Args:
        node: Node carrying an ``id`` pattern.
        is_block_declaration: False for ``var`` and function declarations, which
            hoist out of block scopes.
    """
    if not is_block_declaration and self.is_block_scope and self.parent is not None:
      self.parent.add_declaration(node, is_block_declaration)
    elif node.get("id") is not None:
      self.declarations.update(extract_assigned_names(node["id"]))

  def contains(self, name: str) -> bool:
    """True if `name` is declared in this scope or any enclosing one."""
    scope: Optional[Scope] = self
    while scope is not None:
      if name in scope.declarations:
        return True
      scope = scope.parent
    return False


class AttachedScopes:
  """
  Result of `attach_scopes`: the module scope plus a node -> scope index.

  Nodes are indexed by identity, so the index is only valid while the tree it
  was built from is alive and unmodified.
  """

  def __init__(self, root: Scope):
    self.root = root
    self._by_node: Dict[int, Scope] = {}

  def bind(self, node: Node, scope: Scope) -> None:
    self._by_node[id(node)] = scope

  def for_node(self, node: Node) -> Optional[Scope]:
    """Returns the scope opened by `node`, or None if it opens none."""
    return self._by_node.get(id(node))

  def __len__(self) -> int:
    return len(self._by_node)


class _ScopeAttacher(TreeVisitor):
  """Single pass that creates scopes and records declarations."""

  def __init__(self, attached: AttachedScopes):
    self.attached = attached
    self.scope = attached.root

  def on_visit(self, node: Node, parent: Optional[Node]) -> bool:
    kind = node_kind(node)

    if kind == NodeKind.FUNCTION_DECLARATION:
      self.scope.add_declaration(node, is_block_declaration=False)
    elif kind == NodeKind.CLASS_DECLARATION:
      self.scope.add_declaration(node, is_block_declaration=True)
    elif kind == NodeKind.VARIABLE_DECLARATION:
      is_block = node.get("kind") in _BLOCK_DECLARATION_KINDS
      for declarator in node.get("declarations", []):
        self.scope.add_declaration(declarator, is_block_declaration=is_block)

    new_scope: Optional[Scope] = None
    if kind in _FUNCTION_KINDS:
      new_scope = Scope(parent=self.scope, params=node.get("params", []))
      if kind == NodeKind.FUNCTION_EXPRESSION and node.get("id") is not None:
        new_scope.add_declaration(node, is_block_declaration=False)
    elif kind == NodeKind.CLASS_EXPRESSION and node.get("id") is not None:
      new_scope = Scope(parent=self.scope, block=True)
      new_scope.add_declaration(node, is_block_declaration=True)
    elif kind in _FOR_KINDS:
      new_scope = Scope(parent=self.scope, block=True)
    elif kind == NodeKind.BLOCK_STATEMENT and node_kind(parent) not in _FUNCTION_KINDS:
      new_scope = Scope(parent=self.scope, block=True)
    elif kind == NodeKind.STATIC_BLOCK:
      new_scope = Scope(parent=self.scope)
    elif kind == NodeKind.CATCH_CLAUSE:
      param = node.get("param")
      new_scope = Scope(parent=self.scope, block=True, params=[param] if param is not None else [])

    if new_scope is not None:
      self.attached.bind(node, new_scope)
      self.scope = new_scope
    return True

  def on_leave(self, node: Node, parent: Optional[Node]) -> None:
    if self.attached.for_node(node) is not None and self.scope.parent is not None:
      self.scope = self.scope.parent


def attach_scopes(tree: Node) -> AttachedScopes:
  """
  Builds the scope chain for a module.

  Args:
      tree: The ``Program`` node.

  Returns:
      AttachedScopes: Module scope and the scope of every scope-opening node.
  """
  attached = AttachedScopes(Scope())
  walk(tree, _ScopeAttacher(attached))
  return attached
