"""
Tests for the rewrite trace logger.
"""

import json

import pytest

from external_globals.core.tracer import TraceEventType, TraceLogger


def test_phase_nesting():
  logger = TraceLogger()

  outer = logger.start_phase("Parent")
  inner = logger.start_phase("Child")
  logger.end_phase()
  logger.end_phase()

  events = logger.export()
  assert [e["kind"] for e in events] == [
    TraceEventType.PHASE_START,
    TraceEventType.PHASE_START,
    TraceEventType.PHASE_END,
    TraceEventType.PHASE_END,
  ]
  assert events[1]["parent"] == outer
  assert events[2]["parent"] == inner
  assert events[2]["label"] == "Child"
  assert events[3]["parent"] == outer


def test_sequence_numbers_follow_emission_order():
  logger = TraceLogger()
  logger.start_phase("A")
  logger.log_warning("w")
  logger.end_phase()
  assert [e["seq"] for e in logger.export()] == [1, 2, 3]


def test_end_phase_without_start_is_ignored():
  logger = TraceLogger()
  logger.end_phase()
  assert logger.export() == []


def test_phase_context_closes_on_error():
  logger = TraceLogger()
  with pytest.raises(RuntimeError):
    with logger.phase("Parsing"):
      raise RuntimeError("boom")

  assert logger.current_phase is None
  assert logger.export()[-1]["kind"] == TraceEventType.PHASE_END


def test_edit_data():
  logger = TraceLogger()
  with logger.phase("Rewrite") as phase:
    logger.log_edit("rewrite_reference [5, 6)", "R", "window.React")

  event = logger.export()[1]
  assert event["kind"] == TraceEventType.EDIT
  assert event["parent"] == phase
  assert event["data"] == {"before": "R", "after": "window.React"}


def test_warning_event():
  logger = TraceLogger()
  logger.log_warning("skipped")
  event = logger.export()[0]
  assert event["kind"] == TraceEventType.WARNING
  assert event["label"] == "skipped"
  assert event["parent"] is None


def test_export_is_json_serializable():
  logger = TraceLogger()
  with logger.phase("Pre-check", "detail"):
    pass
  decoded = json.loads(json.dumps(logger.export()))
  assert decoded[0]["kind"] == "phase_start"
  assert decoded[0]["data"] == {"detail": "detail"}
  assert decoded[1]["elapsed_ms"] >= decoded[0]["elapsed_ms"]


def test_loggers_are_independent():
  first, second = TraceLogger(), TraceLogger()
  first.log_warning("only here")
  assert second.export() == []
