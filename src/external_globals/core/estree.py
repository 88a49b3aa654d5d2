"""
ESTree Node Helpers.

The rewriter consumes syntax trees as plain dictionaries in the standard ESTree
shape (``{"type": "Identifier", "name": "x", "start": 0, "end": 1}``). Source
offsets are read from ``start``/``end`` (acorn style) or from ``range``
(esprima style), always as indices into the original text.

This module centralises node access so that the rest of the package never
inspects raw keys directly:

- `node_kind` / `is_node`: tagging.
- `span`: source offsets.
- `iter_children`: ordered child traversal driven by `VISITOR_KEYS`.
- `identifier_name` / `string_literal_value`: typed accessors.
"""

from typing import Any, Dict, Iterator, Optional, Tuple

from external_globals.enums import NodeKind

Node = Dict[str, Any]

# Keys that never hold child nodes.
_META_KEYS = frozenset({"type", "start", "end", "range", "loc", "raw", "leadingComments", "trailingComments"})

# Ordered child keys per node kind, in source order.
VISITOR_KEYS: Dict[NodeKind, Tuple[str, ...]] = {
  NodeKind.PROGRAM: ("body",),
  NodeKind.IMPORT_DECLARATION: ("specifiers", "source"),
  NodeKind.IMPORT_SPECIFIER: ("imported", "local"),
  NodeKind.IMPORT_DEFAULT_SPECIFIER: ("local",),
  NodeKind.IMPORT_NAMESPACE_SPECIFIER: ("local",),
  NodeKind.EXPORT_NAMED_DECLARATION: ("declaration", "specifiers", "source"),
  NodeKind.EXPORT_DEFAULT_DECLARATION: ("declaration",),
  NodeKind.EXPORT_ALL_DECLARATION: ("exported", "source"),
  NodeKind.EXPORT_SPECIFIER: ("local", "exported"),
  NodeKind.FUNCTION_DECLARATION: ("id", "params", "body"),
  NodeKind.CLASS_DECLARATION: ("id", "superClass", "body"),
  NodeKind.VARIABLE_DECLARATION: ("declarations",),
  NodeKind.VARIABLE_DECLARATOR: ("id", "init"),
  NodeKind.EXPRESSION_STATEMENT: ("expression",),
  NodeKind.DIRECTIVE: ("expression",),
  NodeKind.BLOCK_STATEMENT: ("body",),
  NodeKind.STATIC_BLOCK: ("body",),
  NodeKind.EMPTY_STATEMENT: (),
  NodeKind.DEBUGGER_STATEMENT: (),
  NodeKind.WITH_STATEMENT: ("object", "body"),
  NodeKind.RETURN_STATEMENT: ("argument",),
  NodeKind.LABELED_STATEMENT: ("label", "body"),
  NodeKind.BREAK_STATEMENT: ("label",),
  NodeKind.CONTINUE_STATEMENT: ("label",),
  NodeKind.IF_STATEMENT: ("test", "consequent", "alternate"),
  NodeKind.SWITCH_STATEMENT: ("discriminant", "cases"),
  NodeKind.SWITCH_CASE: ("test", "consequent"),
  NodeKind.THROW_STATEMENT: ("argument",),
  NodeKind.TRY_STATEMENT: ("block", "handler", "finalizer"),
  NodeKind.CATCH_CLAUSE: ("param", "body"),
  NodeKind.WHILE_STATEMENT: ("test", "body"),
  NodeKind.DO_WHILE_STATEMENT: ("body", "test"),
  NodeKind.FOR_STATEMENT: ("init", "test", "update", "body"),
  NodeKind.FOR_IN_STATEMENT: ("left", "right", "body"),
  NodeKind.FOR_OF_STATEMENT: ("left", "right", "body"),
  NodeKind.IDENTIFIER: (),
  NodeKind.PRIVATE_IDENTIFIER: (),
  NodeKind.LITERAL: (),
  NodeKind.THIS_EXPRESSION: (),
  NodeKind.SUPER: (),
  NodeKind.ARRAY_EXPRESSION: ("elements",),
  NodeKind.OBJECT_EXPRESSION: ("properties",),
  NodeKind.PROPERTY: ("key", "value"),
  NodeKind.FUNCTION_EXPRESSION: ("id", "params", "body"),
  NodeKind.ARROW_FUNCTION_EXPRESSION: ("params", "body"),
  NodeKind.CLASS_EXPRESSION: ("id", "superClass", "body"),
  NodeKind.CLASS_BODY: ("body",),
  NodeKind.METHOD_DEFINITION: ("key", "value"),
  NodeKind.PROPERTY_DEFINITION: ("key", "value"),
  NodeKind.UNARY_EXPRESSION: ("argument",),
  NodeKind.UPDATE_EXPRESSION: ("argument",),
  NodeKind.BINARY_EXPRESSION: ("left", "right"),
  NodeKind.ASSIGNMENT_EXPRESSION: ("left", "right"),
  NodeKind.LOGICAL_EXPRESSION: ("left", "right"),
  NodeKind.MEMBER_EXPRESSION: ("object", "property"),
  NodeKind.CHAIN_EXPRESSION: ("expression",),
  NodeKind.CONDITIONAL_EXPRESSION: ("test", "consequent", "alternate"),
  NodeKind.CALL_EXPRESSION: ("callee", "arguments"),
  NodeKind.NEW_EXPRESSION: ("callee", "arguments"),
  NodeKind.SEQUENCE_EXPRESSION: ("expressions",),
  NodeKind.YIELD_EXPRESSION: ("argument",),
  NodeKind.AWAIT_EXPRESSION: ("argument",),
  NodeKind.TEMPLATE_LITERAL: ("quasis", "expressions"),
  NodeKind.TAGGED_TEMPLATE_EXPRESSION: ("tag", "quasi"),
  NodeKind.TEMPLATE_ELEMENT: (),
  NodeKind.SPREAD_ELEMENT: ("argument",),
  NodeKind.META_PROPERTY: ("meta", "property"),
  NodeKind.IMPORT_EXPRESSION: ("source",),
  NodeKind.IMPORT: (),
  NodeKind.OBJECT_PATTERN: ("properties",),
  NodeKind.ARRAY_PATTERN: ("elements",),
  NodeKind.REST_ELEMENT: ("argument",),
  NodeKind.ASSIGNMENT_PATTERN: ("left", "right"),
}


def is_node(value: Any) -> bool:
  """Returns True if `value` looks like an ESTree node (a dict with a string ``type``)."""
  return isinstance(value, dict) and isinstance(value.get("type"), str)


def node_kind(node: Optional[Node]) -> Optional[NodeKind]:
  """
  Tags a node with its `NodeKind`.

  Args:
      node: The node to inspect (may be None).

  Returns:
      Optional[NodeKind]: The kind, or None for missing/unknown nodes.
  """
  if not is_node(node):
    return None
  return NodeKind.of(node["type"])


def span(node: Node) -> Tuple[int, int]:
  """
  Returns the ``(start, end)`` offsets of a node in the original text.

  Args:
      node: A node carrying ``start``/``end`` or ``range`` positions.

  Returns:
      Tuple[int, int]: Half-open offset range.

  Raises:
      ValueError: If the node carries no position information.
  """
  start = node.get("start")
  end = node.get("end")
  if start is None or end is None:
    rng = node.get("range")
    if not rng:
      raise ValueError(f"Node '{node.get('type')}' has no source position")
    start, end = rng[0], rng[1]
  return int(start), int(end)


def same_span(a: Optional[Node], b: Optional[Node]) -> bool:
  """True if both nodes exist and cover the exact same source range."""
  if not is_node(a) or not is_node(b):
    return False
  return span(a) == span(b)


def iter_children(node: Node) -> Iterator[Tuple[str, Node]]:
  """
  Yields ``(key, child)`` pairs in source order.

  Known kinds use `VISITOR_KEYS`. Unknown kinds fall back to scanning every
  non-meta field for nested nodes, in field order.

  Args:
      node: Parent node.

  Yields:
      Tuple[str, Node]: Field name and child node.
  """
  kind = node_kind(node)
  keys = VISITOR_KEYS.get(kind) if kind is not None else None
  if keys is None:
    keys = tuple(k for k in node.keys() if k not in _META_KEYS)

  for key in keys:
    value = node.get(key)
    if isinstance(value, list):
      for item in value:
        if is_node(item):
          yield key, item
    elif is_node(value):
      yield key, value


def identifier_name(node: Optional[Node]) -> Optional[str]:
  """
  Returns the name carried by an Identifier, or the value of a string Literal
  used in identifier position (``export { "a-b" as c }``).
  """
  kind = node_kind(node)
  if kind == NodeKind.IDENTIFIER:
    return node.get("name")
  if kind == NodeKind.LITERAL and isinstance(node.get("value"), str):
    return node["value"]
  return None


def string_literal_value(node: Optional[Node]) -> Optional[str]:
  """Returns the value of a string Literal node, otherwise None."""
  if node_kind(node) != NodeKind.LITERAL:
    return None
  value = node.get("value")
  return value if isinstance(value, str) else None
