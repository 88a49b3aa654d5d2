"""
Orchestration Engine for Module Rewrites.

This module provides the `RewriteEngine`, the driver that takes one module's
source text through the pipeline:

1.  **Pre-check**: Skip the file unless its text mentions a globalized module name.
2.  **Parsing**: Source text -> ESTree dictionaries (``esprima``).
3.  **Rewrite**: Binding scan and reference walk into an `EditBuffer`.
4.  **Serialization**: Edited text plus a Source Map v3 document.

Every stage is recorded as a phase of a `TraceLogger` created for the run.
"""

import logging
from typing import Optional, Tuple

from external_globals.config import RuntimeConfig
from external_globals.core.edit_buffer import EditBuffer
from external_globals.core.estree import Node
from external_globals.core.normalizer import create_name_lookup
from external_globals.core.parser import parse_module
from external_globals.core.rewriter import DynamicWrapper, rewrite
from external_globals.core.source_map import SourceMap
from external_globals.core.tracer import TraceLogger
from external_globals.core.transform_result import TransformResult

logger = logging.getLogger(__name__)


class RewriteEngine:
  """
  The main rewrite unit.

  Holds the normalized lookup for one configuration; `run` may be called for
  any number of files, concurrently, since each call allocates its own state.
  """

  def __init__(self, config: RuntimeConfig, dynamic_wrapper: Optional[DynamicWrapper] = None):
    """
    Initializes the Engine.

    Args:
        config (RuntimeConfig): The runtime configuration object.
        dynamic_wrapper (DynamicWrapper, optional): Callable overriding the
            configured dynamic import template.

    Raises:
        ConfigError: If the globals mapping or the wrapper template is invalid.
    """
    self.config = config
    self.get_name = create_name_lookup(config.globals)
    self.dynamic_wrapper = dynamic_wrapper or config.make_dynamic_wrapper()

  def parse(self, code: str) -> Node:
    """
    Parses source string into an ESTree Program.

    Args:
        code (str): ECMAScript module source.

    Returns:
        Node: The parsed tree.

    Raises:
        ModuleParseError: If the input is not a valid module.
    """
    return parse_module(code)

  def should_process(self, code: str) -> bool:
    """True if `code` mentions any globalized module name."""
    return self.get_name.mentioned_in(code)

  def run(self, code: str, file_id: Optional[str] = None) -> TransformResult:
    """
    Executes the full rewrite pipeline.

    Args:
        code (str): The input source string.
        file_id (str, optional): Name recorded as the map's source.

    Returns:
        TransformResult: The rewritten code and map, or the input unchanged
        (``edited=False``, no map) when nothing applied.

    Raises:
        ModuleParseError: If the input mentions a globalized module but cannot be parsed.
        UnsupportedExportError: On ``export * from`` a globalized module.
    """
    tracer = TraceLogger()
    with tracer.phase("Rewrite Pipeline", file_id or "<input>"):
      rewritten = self._run_phases(code, file_id, tracer)

    if rewritten is None:
      return TransformResult(code=code, edited=False, trace_events=tracer.export())

    output, source_map = rewritten
    return TransformResult(code=output, map=source_map, edited=True, trace_events=tracer.export())

  def _run_phases(
    self, code: str, file_id: Optional[str], tracer: TraceLogger
  ) -> Optional[Tuple[str, SourceMap]]:
    """Returns the new code and its map, or None when the input stays as is."""
    label = file_id or "<input>"

    with tracer.phase("Pre-check", "Containment of globalized module names"):
      mentioned = self.should_process(code)
    if not mentioned:
      logger.debug("Skipping %s: no globalized module mentioned", label)
      tracer.log_warning("No globalized module mentioned; input returned unchanged")
      return None

    with tracer.phase("Parsing", "Source -> ESTree"):
      tree = self.parse(code)

    buffer = EditBuffer(code)
    with tracer.phase("Rewrite", "Binding scan and reference walk"):
      edited = rewrite(
        tree,
        buffer,
        self.get_name,
        dynamic_wrapper=self.dynamic_wrapper,
        const_bindings=self.config.const_bindings,
        tracer=tracer,
      )
    if not edited:
      return None

    with tracer.phase("Serialization", "Edit buffer -> code and source map"):
      output = buffer.to_string()
      source_map = buffer.generate_map(source=file_id, file=file_id, include_content=True)

    logger.debug("Rewrote %s (%d edits)", label, len(buffer.replacements) + len(buffer.insertions))
    return output, source_map
