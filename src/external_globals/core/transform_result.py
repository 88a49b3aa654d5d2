"""
Data structures representing the output of the rewrite pipeline.

This module defines the `TransformResult` Pydantic model, which encapsulates
the rewritten code, its source map, and the execution trace logs.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from external_globals.core.source_map import SourceMap


class TransformResult(BaseModel):
  """
  Container for the result of rewriting one module.
  """

  code: str = Field(default="", description="The rewritten source code (the input when nothing changed).")
  map: Optional[SourceMap] = Field(default=None, description="Source map from `code` back to the input.")
  edited: bool = Field(default=False, description="True if any edit was applied.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_map(self) -> bool:
    return self.map is not None
