"""
Tests for the lexical scope model.

Verifies:
1. Pattern extraction (destructuring, defaults, rest).
2. Function, block, loop and catch scopes.
3. Hoisting of `var` and function declarations out of blocks.
"""

from external_globals.core.parser import parse_module
from external_globals.core.scopes import Scope, attach_scopes, extract_assigned_names, extract_binding_identifiers


def _first_declarator_id(code: str):
  return parse_module(code)["body"][0]["declarations"][0]["id"]


def test_extract_names_from_patterns():
  pattern = _first_declarator_id("const { a, b: [c, ...d], e = 1 } = obj;")
  assert extract_assigned_names(pattern) == ["a", "c", "d", "e"]


def test_default_values_are_not_bindings():
  pattern = _first_declarator_id("const { a = fallback } = obj;")
  identifiers = extract_binding_identifiers(pattern)
  assert [ident["name"] for ident in identifiers] == ["a"]


def test_array_holes_skipped():
  pattern = _first_declarator_id("const [, x, , y] = arr;")
  assert extract_assigned_names(pattern) == ["x", "y"]


def test_function_scope_declarations():
  tree = parse_module("function f(a, { b, c: [d] }) { var e; { let g; var h; } }")
  scopes = attach_scopes(tree)

  fn = tree["body"][0]
  fn_scope = scopes.for_node(fn)
  assert fn_scope.declarations == {"a", "b", "d", "e", "h"}
  assert scopes.root.declarations == {"f"}

  inner_block = fn["body"]["body"][1]
  block_scope = scopes.for_node(inner_block)
  assert block_scope.is_block_scope
  assert block_scope.declarations == {"g"}
  assert block_scope.parent is fn_scope


def test_function_body_opens_no_extra_scope():
  tree = parse_module("function f() { let a; }")
  scopes = attach_scopes(tree)
  fn = tree["body"][0]
  assert scopes.for_node(fn["body"]) is None
  assert "a" in scopes.for_node(fn).declarations


def test_named_function_expression_binds_own_name():
  tree = parse_module("const x = function inner() {};")
  scopes = attach_scopes(tree)
  expression = tree["body"][0]["declarations"][0]["init"]
  assert scopes.for_node(expression).declarations == {"inner"}
  assert scopes.root.declarations == {"x"}


def test_named_class_expression_binds_own_name():
  tree = parse_module("const K = class Inner {}; const A = class {};")
  scopes = attach_scopes(tree)
  named = tree["body"][0]["declarations"][0]["init"]
  anonymous = tree["body"][1]["declarations"][0]["init"]
  assert scopes.for_node(named).declarations == {"Inner"}
  assert scopes.for_node(anonymous) is None
  assert scopes.root.declarations == {"K", "A"}


def test_loop_and_catch_scopes():
  tree = parse_module("for (let i = 0; i < 1; i++) {} try {} catch (err) {}")
  scopes = attach_scopes(tree)
  loop = tree["body"][0]
  handler = tree["body"][1]["handler"]
  assert scopes.for_node(loop).declarations == {"i"}
  assert scopes.for_node(handler).declarations == {"err"}
  assert not scopes.root.contains("i")


def test_class_declaration_is_block_scoped():
  tree = parse_module("{ class K {} } class Top {}")
  scopes = attach_scopes(tree)
  block = tree["body"][0]
  assert scopes.for_node(block).declarations == {"K"}
  assert scopes.root.declarations == {"Top"}


def test_contains_walks_parent_chain():
  root = Scope()
  root.declarations.add("outer")
  child = Scope(parent=root, block=True)
  child.declarations.add("inner")
  assert child.contains("outer")
  assert child.contains("inner")
  assert not root.contains("inner")


def test_var_in_block_hoists_to_function():
  root = Scope()
  block = Scope(parent=root, block=True)
  block.add_declaration({"id": {"type": "Identifier", "name": "v"}}, is_block_declaration=False)
  block.add_declaration({"id": {"type": "Identifier", "name": "l"}}, is_block_declaration=True)
  assert root.declarations == {"v"}
  assert block.declarations == {"l"}
