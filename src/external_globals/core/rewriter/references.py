"""
References Mixin.

Phase B rewrite of identifier references. A reference is rewritten to its
global path when its name is an imported binding that no enclosing scope
redeclares:

.. code-block:: javascript

    import R from "react";            // removed
    R.render();                       // window.Vendor.React.render();
    function f(R) { return R; }       // untouched, `R` is a parameter here
"""

from typing import Optional

from external_globals.core.estree import Node, node_kind
from external_globals.enums import NodeKind


class ReferencesMixin:
  """
  Mixin for dispatching each identifier reference to the binding rewrite or the conflict renamer.
  """

  def _handle_reference(self, node: Node, parent: Optional[Node]) -> None:
    ctx = self.context
    name = node["name"]
    global_path = ctx.bindings.get(name)

    if global_path is not None and not ctx.scope.contains(name):
      if node_kind(parent) == NodeKind.EXPORT_SPECIFIER:
        # `export { R }` cannot export an expression directly
        if not ctx.is_overwritten(node):
          self._write_spec_local(ctx.top_statement, parent, global_path)
      else:
        self._write_identifier(node, parent, global_path, "rewrite_reference")
    elif name in ctx.global_roots and ctx.scope.contains(name):
      self._rename_conflict(node, parent)
