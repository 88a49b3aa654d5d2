"""
Rewriter Context Module.

This module provides the `RewriteContext` container, which holds every piece of
mutable state for one module rewrite. The rewriter mixins only communicate
through this object, so one context per call keeps invocations independent
of each other (no module-level state, safe to run files concurrently).
"""

import re
from typing import Callable, Dict, List, Optional, Set

from external_globals.core.edit_buffer import EditBuffer
from external_globals.core.estree import Node
from external_globals.core.scopes import AttachedScopes, Scope
from external_globals.core.tracer import TraceLogger

NameLookup = Callable[[str], Optional[str]]
DynamicWrapper = Callable[[str], str]

_ROOT_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*")


def global_root_of(global_path: str) -> Optional[str]:
  """
  Extracts the leading identifier of a global path expression.

  Args:
      global_path: e.g. ``window.vendor.lib``.

  Returns:
      Optional[str]: e.g. ``window``; None if the expression does not start with an identifier.
  """
  match = _ROOT_IDENTIFIER.match(global_path.strip())
  return match.group(0) if match else None


class RewriteContext:
  """
  Shared state for the two rewrite phases of a single module.

  Attributes:
      buffer (EditBuffer): Receives every text edit.
      get_name (NameLookup): Module name -> global path, or None if not globalized.
      dynamic_wrapper (DynamicWrapper): Global path -> replacement for ``import()``.
      const_bindings (bool): Declare synthetic temps with ``const`` instead of ``var``.
      scopes (AttachedScopes): Pre-computed lexical scopes of the module.
      bindings (Dict[str, str]): Local import name -> global path expression.
      global_roots (Set[str]): Root identifiers of every globalized path in use.
      temp_names (Set[str]): Synthetic ``_global_*`` names already declared.
      scope (Scope): Scope of the node currently being visited.
      ancestors (List[Node]): Path from the Program down to the current node.
      top_statement (Optional[Node]): Top-level statement containing the current node.
      export_bindings (Set[int]): Identities of the names declared by `top_statement` if it is an inline export.
      touched (bool): True once any edit was made.
  """

  def __init__(
    self,
    buffer: EditBuffer,
    get_name: NameLookup,
    dynamic_wrapper: DynamicWrapper,
    const_bindings: bool,
    scopes: AttachedScopes,
    tracer: Optional[TraceLogger] = None,
  ):
    self.buffer = buffer
    self.get_name = get_name
    self.dynamic_wrapper = dynamic_wrapper
    self.const_bindings = const_bindings
    self.scopes = scopes
    self.tracer = tracer

    # -- Phase A tables (read-only during the walk) --
    self.bindings: Dict[str, str] = {}
    self.global_roots: Set[str] = set()

    # -- Synthetic bindings --
    self.temp_names: Set[str] = set()

    # -- Walk state --
    self.scope: Scope = scopes.root
    self.ancestors: List[Node] = []
    self.top_statement: Optional[Node] = None
    self.export_bindings: Set[int] = set()

    # Node identities already rewritten, and export statements already unwrapped
    self._overwritten: Set[int] = set()
    self._stripped_exports: Set[int] = set()

    self.touched = False

  def lookup_global(self, module_name: Optional[str]) -> Optional[str]:
    """Returns the global path for a module specifier, or None."""
    if not module_name:
      return None
    return self.get_name(module_name) or None

  def is_overwritten(self, node: Node) -> bool:
    return id(node) in self._overwritten

  def mark_overwritten(self, *nodes: Optional[Node]) -> None:
    for node in nodes:
      if node is not None:
        self._overwritten.add(id(node))

  def claim_export_strip(self, statement: Node) -> bool:
    """Returns True exactly once per export statement whose keyword gets removed."""
    key = id(statement)
    if key in self._stripped_exports:
      return False
    self._stripped_exports.add(key)
    return True

  @property
  def temp_keyword(self) -> str:
    return "const" if self.const_bindings else "var"

  def record(self, action: str, before: str, after: str) -> None:
    """Flags the module as touched and reports the edit to the tracer."""
    self.touched = True
    if self.tracer is not None:
      self.tracer.log_edit(action, before, after)
