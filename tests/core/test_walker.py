"""
Tests for the depth-first walker and the shared walk toolkit.

Verifies:
1. Enter/leave callbacks are balanced and in source order.
2. Returning False from a visit method skips children but still leaves.
3. Deep trees do not exhaust the interpreter stack.
4. The toolkit is built exactly once, even under concurrent first access.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from external_globals.core import toolkit as toolkit_module
from external_globals.core.estree import VISITOR_KEYS
from external_globals.core.parser import parse_module
from external_globals.core.toolkit import WalkToolkit, load_walk_toolkit
from external_globals.core.walker import TreeVisitor, walk
from external_globals.enums import NodeKind


class RecordingVisitor(TreeVisitor):
  def __init__(self):
    self.events = []

  def on_visit(self, node, parent):
    self.events.append(("enter", node["type"]))
    return super().on_visit(node, parent)

  def on_leave(self, node, parent):
    self.events.append(("leave", node["type"]))
    super().on_leave(node, parent)


class SkippingVisitor(RecordingVisitor):
  def __init__(self):
    super().__init__()
    self.left_calls = 0

  def visit_CallExpression(self, node, parent):
    return False

  def leave_CallExpression(self, node, parent):
    self.left_calls += 1


def test_enter_leave_order():
  visitor = RecordingVisitor()
  walk(parse_module("a;"), visitor)
  assert visitor.events == [
    ("enter", "Program"),
    ("enter", "ExpressionStatement"),
    ("enter", "Identifier"),
    ("leave", "Identifier"),
    ("leave", "ExpressionStatement"),
    ("leave", "Program"),
  ]


def test_children_in_source_order():
  visitor = RecordingVisitor()
  walk(parse_module("x = y;"), visitor)
  entered = [kind for action, kind in visitor.events if action == "enter"]
  assert entered == ["Program", "ExpressionStatement", "AssignmentExpression", "Identifier", "Identifier"]


def test_skip_children_still_leaves():
  visitor = SkippingVisitor()
  walk(parse_module("f(a, b);"), visitor)
  entered = [kind for action, kind in visitor.events if action == "enter"]
  assert "Identifier" not in entered
  assert visitor.left_calls == 1
  enters = sum(1 for action, _ in visitor.events if action == "enter")
  leaves = sum(1 for action, _ in visitor.events if action == "leave")
  assert enters == leaves


def test_deep_tree_is_walked_iteratively():
  depth = 5000
  tree = {"type": "Identifier", "name": "leaf", "start": 0, "end": 1}
  for _ in range(depth):
    tree = {"type": "UnaryExpression", "operator": "!", "argument": tree, "start": 0, "end": 1}

  visitor = RecordingVisitor()
  walk(tree, visitor)
  assert len(visitor.events) == 2 * (depth + 1)


def test_visitor_keys_cover_every_kind():
  assert set(VISITOR_KEYS) == set(NodeKind)


def test_toolkit_is_shared():
  first = load_walk_toolkit()
  assert isinstance(first, WalkToolkit)
  assert load_walk_toolkit() is first
  assert first.visitor_keys[NodeKind.PROGRAM] == ("body",)


def test_toolkit_built_once_under_concurrency():
  barrier = threading.Barrier(8)
  real_build = toolkit_module._build_toolkit

  def first_call():
    barrier.wait()
    return load_walk_toolkit()

  with patch.object(toolkit_module, "_TOOLKIT", None), patch.object(
    toolkit_module, "_build_toolkit", side_effect=real_build
  ) as mock_build:
    with ThreadPoolExecutor(max_workers=8) as pool:
      results = list(pool.map(lambda _: first_call(), range(8)))

    assert mock_build.call_count == 1
    assert all(result is results[0] for result in results)


def test_toolkit_rejects_incomplete_key_table():
  partial = {NodeKind.PROGRAM: ("body",)}
  with patch.object(toolkit_module, "VISITOR_KEYS", partial):
    with pytest.raises(RuntimeError, match="Visitor keys missing"):
      toolkit_module._build_toolkit()
