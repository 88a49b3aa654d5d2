"""
Exports Mixin.

Handles the export forms that reference a globalized module:

*   ``export { a, b as c } from "g"`` is turned into a closed export list over
    synthetic temp bindings declared right before the statement::

        var _global_window_G_a = window.G.a;
        var _global_window_G_b = window.G.b;
        export { _global_window_G_a as a, _global_window_G_b as c };

*   ``export * from "g"`` has no equivalent for a global value and is rejected.

The temp-binding writer is shared with the reference walk, which needs it for
``export { R }`` of an imported binding.
"""

from external_globals.core.estree import Node, identifier_name, same_span, span, string_literal_value
from external_globals.core.references import make_legal_identifier
from external_globals.core.rewriter.context import global_root_of
from external_globals.core.rewriter.imports import make_global_name
from external_globals.exceptions import UnsupportedExportError

TEMP_PREFIX = "_global_"


class ExportsMixin:
  """
  Mixin for re-export statements and export-specifier temp bindings.
  """

  def _analyze_export_named(self, statement: Node) -> None:
    ctx = self.context
    source = statement.get("source")
    global_path = ctx.lookup_global(string_literal_value(source))
    if global_path is None:
      return

    root = global_root_of(global_path)
    if root is not None:
      ctx.global_roots.add(root)

    specifiers = statement.get("specifiers", [])
    for specifier in specifiers:
      member = identifier_name(specifier.get("local")) or "default"
      self._write_spec_local(statement, specifier, make_global_name(member, global_path))

    if specifiers:
      # Closes the list right after the last specifier, dropping `from "g"`
      start = span(specifiers[-1])[1]
      end = span(source)[1]
      ctx.buffer.overwrite(start, end, "}")
      ctx.record(f"drop_reexport_source [{start}, {end})", ctx.buffer.original[start:end], "}")
    else:
      start, end = span(statement)
      ctx.buffer.remove(start, end)
      ctx.record(f"remove_empty_reexport [{start}, {end})", ctx.buffer.original[start:end], "")

  def _analyze_export_all(self, statement: Node) -> None:
    module_name = string_literal_value(statement.get("source"))
    if self.context.lookup_global(module_name) is not None:
      raise UnsupportedExportError(module_name)

  def _declare_temp(self, statement: Node, global_path: str) -> str:
    """
    Returns the synthetic binding for `global_path`, declaring it before `statement` on first use.
    """
    ctx = self.context
    temp_name = f"{TEMP_PREFIX}{make_legal_identifier(global_path)}"
    if temp_name not in ctx.temp_names:
      ctx.temp_names.add(temp_name)
      declaration = f"{ctx.temp_keyword} {temp_name} = {global_path};\n"
      position = span(statement)[0]
      ctx.buffer.append_right(position, declaration)
      ctx.record(f"declare_temp @{position}", "", declaration)
    return temp_name

  def _write_spec_local(self, statement: Node, specifier: Node, global_path: str) -> None:
    """
    Points an export specifier at the temp binding for `global_path`.

    Args:
        statement: Top-level statement holding the specifier.
        specifier: The ``ExportSpecifier``.
        global_path: Expression the specifier should export.
    """
    ctx = self.context
    local = specifier["local"]
    exported = specifier.get("exported")
    temp_name = self._declare_temp(statement, global_path)

    start, end = span(local)
    original = ctx.buffer.original[start:end]
    if same_span(local, exported):
      ctx.buffer.append_right(start, f"{temp_name} as ")
      ctx.record(f"export_temp_shorthand @{start}", original, f"{temp_name} as {original}")
    else:
      ctx.buffer.overwrite(start, end, temp_name)
      ctx.record(f"export_temp [{start}, {end})", original, temp_name)

    ctx.mark_overwritten(specifier, local, exported)
