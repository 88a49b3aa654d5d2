"""
Rewriter Package.

This package provides the `GlobalsRewriter` class, composed of several mixins
to handle specific aspects of the module rewrite:
- Imports: Binding table from globalized static imports.
- Exports: Re-exports through synthetic temp bindings.
- References: Scope-aware replacement of imported bindings.
- Conflicts: Renaming locals that collide with global roots.
- DynamicImport: ``import("g")`` wrapping.
- Scoping: Current lexical scope and inline export tracking.

`rewrite` is the public entry point.
"""

from typing import Optional

from external_globals.core.edit_buffer import EditBuffer
from external_globals.core.estree import Node
from external_globals.core.rewriter.base import BaseRewriter
from external_globals.core.rewriter.conflicts import LOCAL_PREFIX, ConflictsMixin
from external_globals.core.rewriter.context import DynamicWrapper, NameLookup, RewriteContext
from external_globals.core.rewriter.dynamic import DynamicImportMixin, default_dynamic_wrapper, dynamic_import_source
from external_globals.core.rewriter.exports import TEMP_PREFIX, ExportsMixin
from external_globals.core.rewriter.imports import ImportsMixin, make_global_name
from external_globals.core.rewriter.references import ReferencesMixin
from external_globals.core.rewriter.scopes import ScopingMixin
from external_globals.core.toolkit import load_walk_toolkit
from external_globals.core.tracer import TraceLogger


class GlobalsRewriter(
  ConflictsMixin,
  ReferencesMixin,
  DynamicImportMixin,
  ExportsMixin,
  ImportsMixin,
  ScopingMixin,
  BaseRewriter,
):
  """
  The module rewriter for external-globals.

  Inherits functionality from the component Mixins and the base traversal
  logic. One instance handles exactly one module.
  """

  pass


def rewrite(
  tree: Node,
  buffer: EditBuffer,
  get_name: NameLookup,
  dynamic_wrapper: DynamicWrapper = default_dynamic_wrapper,
  const_bindings: bool = False,
  tracer: Optional[TraceLogger] = None,
) -> bool:
  """
  Rewrites a parsed module so globalized imports become global-path accesses.

  Args:
      tree: ESTree ``Program`` whose node offsets index `buffer.original`.
      buffer: Receives the edits.
      get_name: Module name -> global path, or None if not globalized.
      dynamic_wrapper: Global path -> replacement text for ``import()``.
      const_bindings: Declare synthetic temps with ``const`` instead of ``var``.
      tracer: Optional recorder for every edit.

  Returns:
      bool: True if anything was edited.

  Raises:
      UnsupportedExportError: If the module contains ``export * from`` a globalized module.
  """
  toolkit = load_walk_toolkit()
  context = RewriteContext(
    buffer=buffer,
    get_name=get_name,
    dynamic_wrapper=dynamic_wrapper,
    const_bindings=const_bindings,
    scopes=toolkit.attach_scopes(tree),
    tracer=tracer,
  )
  return GlobalsRewriter(context, toolkit.is_reference).run(tree)


__all__ = [
  "GlobalsRewriter",
  "LOCAL_PREFIX",
  "RewriteContext",
  "TEMP_PREFIX",
  "default_dynamic_wrapper",
  "dynamic_import_source",
  "make_global_name",
  "rewrite",
]
