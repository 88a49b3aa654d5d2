"""
Tests for wrapping dynamic imports of globalized modules.

Most trees are built by hand over the matching source text, covering both the
``ImportExpression`` shape and the ``CallExpression(Import)`` shape the parser emits.
"""

import pytest

from external_globals.core.rewriter import default_dynamic_wrapper, dynamic_import_source

CODE = 'const m = import("g");'


def _module(make_node, init):
  identifier = make_node("Identifier", 6, 7, name="m")
  declarator = make_node("VariableDeclarator", 6, 21, id=identifier, init=init)
  declaration = make_node("VariableDeclaration", 0, 22, kind="const", declarations=[declarator])
  return make_node("Program", 0, 22, sourceType="module", body=[declaration])


def _literal(make_node, value="g"):
  return make_node("Literal", 17, 20, value=value, raw=f'"{value}"')


@pytest.fixture
def import_expression(make_node):
  return make_node("ImportExpression", 10, 21, source=_literal(make_node))


@pytest.fixture
def import_call(make_node):
  callee = make_node("Import", 10, 16)
  return make_node("CallExpression", 10, 21, callee=callee, arguments=[_literal(make_node)])


def test_import_expression_wrapped(run_rewrite, make_node, import_expression):
  output, edited = run_rewrite.tree(_module(make_node, import_expression), CODE, {"g": "G"})
  assert edited
  assert output == "const m = Promise.resolve(G);"


def test_import_call_wrapped(run_rewrite, make_node, import_call):
  output, _ = run_rewrite.tree(_module(make_node, import_call), CODE, {"g": ["Vendor", "G"]})
  assert output == "const m = Promise.resolve(window.Vendor.G);"


def test_custom_wrapper(run_rewrite, make_node, import_expression):
  output, _ = run_rewrite.tree(
    _module(make_node, import_expression),
    CODE,
    {"g": "G"},
    dynamic_wrapper=lambda path: f"Promise.resolve({{ default: {path} }})",
  )
  assert output == "const m = Promise.resolve({ default: G });"


def test_empty_wrapper_output_leaves_import(run_rewrite, make_node, import_expression):
  output, edited = run_rewrite.tree(_module(make_node, import_expression), CODE, {"g": "G"}, dynamic_wrapper=lambda _: "")
  assert not edited
  assert output == CODE


def test_non_global_dynamic_import_untouched(run_rewrite, make_node, import_expression):
  output, edited = run_rewrite.tree(_module(make_node, import_expression), CODE, {"other": "O"})
  assert not edited
  assert output == CODE


def test_dynamic_import_source_shapes(make_node):
  literal = _literal(make_node)
  assert dynamic_import_source(make_node("ImportExpression", 10, 21, source=literal)) == "g"
  assert dynamic_import_source(make_node("ImportExpression", 10, 21, source=literal, options=literal)) is None

  template = make_node("TemplateLiteral", 17, 20, quasis=[], expressions=[])
  assert dynamic_import_source(make_node("ImportExpression", 10, 21, source=template)) is None

  callee = make_node("Import", 10, 16)
  call = make_node("CallExpression", 10, 21, callee=callee, arguments=[literal, literal])
  assert dynamic_import_source(call) is None

  other_call = make_node("CallExpression", 10, 21, callee=make_node("Identifier", 10, 16, name="load"), arguments=[literal])
  assert dynamic_import_source(other_call) is None


def test_default_wrapper():
  assert default_dynamic_wrapper("window.G") == "Promise.resolve(window.G)"


def test_parsed_dynamic_import_wrapped(run_rewrite):
  code = 'function f() { return import("react"); }'
  output, edited = run_rewrite(code, {"react": ["Vendor", "React"]})
  assert edited
  assert output == "function f() { return Promise.resolve(window.Vendor.React); }"
