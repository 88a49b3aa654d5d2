"""
Rewrite Trace Logger.

Records what happened while one module was rewritten:

1. Phases (Pre-check, Parsing, Rewrite, Serialization), possibly nested.
2. Edits applied to the text (import removed, reference rewritten, temp declared).
3. Warnings (file skipped, nothing to do).

Events are numbered in emission order and carry the number of the phase they
belong to, so the exported list can be rebuilt into a tree. A logger is owned
by a single run and never shared between files.
"""

import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  EDIT = "edit"
  WARNING = "warning"


@dataclass(frozen=True)
class TraceEvent:
  seq: int
  kind: TraceEventType
  label: str
  parent: Optional[int] = None
  elapsed_ms: float = 0.0
  data: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Collects trace events for a single rewrite run.

  Attributes:
      events (List[TraceEvent]): Everything recorded so far, in order.
  """

  def __init__(self) -> None:
    self.events: List[TraceEvent] = []
    self._open: List[int] = []
    self._started = time.perf_counter()

  def _emit(self, kind: TraceEventType, label: str, parent: Optional[int], data: Optional[Dict[str, Any]] = None) -> int:
    seq = len(self.events) + 1
    elapsed = round((time.perf_counter() - self._started) * 1000, 3)
    self.events.append(TraceEvent(seq, kind, label, parent, elapsed, data or {}))
    return seq

  @property
  def current_phase(self) -> Optional[int]:
    return self._open[-1] if self._open else None

  def start_phase(self, name: str, detail: str = "") -> int:
    """Opens a phase nested in the current one and returns its number."""
    seq = self._emit(TraceEventType.PHASE_START, name, self.current_phase, {"detail": detail})
    self._open.append(seq)
    return seq

  def end_phase(self) -> None:
    """Closes the innermost open phase; a no-op when none is open."""
    if self._open:
      seq = self._open.pop()
      self._emit(TraceEventType.PHASE_END, self.events[seq - 1].label, seq)

  @contextmanager
  def phase(self, name: str, detail: str = "") -> Iterator[int]:
    """``with tracer.phase("Parsing"):`` closes the phase however the block exits."""
    seq = self.start_phase(name, detail)
    try:
      yield seq
    finally:
      self.end_phase()

  def log_edit(self, action: str, before: str, after: str) -> None:
    self._emit(TraceEventType.EDIT, action, self.current_phase, {"before": before, "after": after})

  def log_warning(self, message: str) -> None:
    self._emit(TraceEventType.WARNING, message, self.current_phase)

  def export(self) -> List[Dict[str, Any]]:
    """Returns the events as JSON-ready dicts."""
    return [asdict(event) for event in self.events]
