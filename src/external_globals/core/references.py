"""
Reference Classification and Identifier Sanitizing.

`is_reference` decides whether an Identifier sits in a position where its name
is resolved through the scope chain. Declaration sites (variable ids, params)
count as references on purpose: the conflict renamer has to rewrite them too,
and the scope check keeps the binding rewriter away from them.

`make_legal_identifier` turns an arbitrary string (a global path such as
``window.vendor.lib``) into a valid identifier for synthetic bindings.
"""

import re
from typing import Optional

from external_globals.core.estree import Node, node_kind
from external_globals.enums import NodeKind

_RESERVED_WORDS = (
  "break case class catch const continue debugger default delete do else export extends finally for function "
  "if import in instanceof let new return super switch this throw try typeof var void while with yield enum "
  "await implements package protected static interface private public"
)
_BUILTINS = (
  "arguments Infinity NaN undefined null true false eval uneval isFinite isNaN parseFloat parseInt decodeURI "
  "decodeURIComponent encodeURI encodeURIComponent escape unescape Object Function Boolean Symbol Error "
  "EvalError InternalError RangeError ReferenceError SyntaxError TypeError URIError Number Math Date String "
  "RegExp Array Int8Array Uint8Array Uint8ClampedArray Int16Array Uint16Array Int32Array Uint32Array "
  "Float32Array Float64Array Map Set WeakMap WeakSet SIMD ArrayBuffer DataView JSON Promise Generator "
  "GeneratorFunction Reflect Proxy Intl"
)
FORBIDDEN_IDENTIFIERS = frozenset(f"{_RESERVED_WORDS} {_BUILTINS}".split()) | {""}

_DASH_LETTER = re.compile(r"-(\w)")
_ILLEGAL_CHARS = re.compile(r"[^$_a-zA-Z0-9]")


def make_legal_identifier(text: str) -> str:
  """
  Converts a string into a legal JavaScript identifier.

  Dashes followed by a word character are camel-cased, any other illegal
  character becomes ``_``, and names starting with a digit or colliding with a
  reserved word/builtin get a leading underscore.

  Args:
      text (str): Arbitrary input, e.g. ``window.ralWindows.React``.

  Returns:
      str: e.g. ``window_ralWindows_React``.
  """
  identifier = _DASH_LETTER.sub(lambda m: m.group(1).upper(), text)
  identifier = _ILLEGAL_CHARS.sub("_", identifier)
  if (identifier and identifier[0].isdigit()) or identifier in FORBIDDEN_IDENTIFIERS:
    identifier = f"_{identifier}"
  return identifier or "_"


def is_reference(node: Node, parent: Optional[Node]) -> bool:
  """
  Determines if `node` is an identifier reference within `parent`.

  Args:
      node: The node being visited.
      parent: Its direct parent (None at the root).

  Returns:
      bool: True for identifiers resolved through lexical scope.
  """
  kind = node_kind(node)
  if kind == NodeKind.MEMBER_EXPRESSION:
    return not node.get("computed") and is_reference(node["object"], node)

  if kind != NodeKind.IDENTIFIER:
    return False

  if parent is None:
    return True

  parent_kind = node_kind(parent)

  # `bar` in `foo.bar`
  if parent_kind == NodeKind.MEMBER_EXPRESSION:
    return bool(parent.get("computed")) or node is parent.get("object")

  # `foo` in `class { foo() {} }`, but not `class { [foo]() {} }`
  if parent_kind == NodeKind.METHOD_DEFINITION:
    return bool(parent.get("computed"))

  # `foo` in `class { foo = bar }` / `{ foo: bar }`, kept when computed or the value
  if parent_kind in (NodeKind.PROPERTY_DEFINITION, NodeKind.PROPERTY):
    return bool(parent.get("computed")) or node is parent.get("value")

  # `bar` in `export { foo as bar }` / `foo` in `import { foo as bar }`
  if parent_kind in (NodeKind.EXPORT_SPECIFIER, NodeKind.IMPORT_SPECIFIER):
    return node is parent.get("local")

  # `ns` in `export * as ns from "mod"`
  if parent_kind == NodeKind.EXPORT_ALL_DECLARATION:
    return False

  # labels
  if parent_kind in (NodeKind.LABELED_STATEMENT, NodeKind.BREAK_STATEMENT, NodeKind.CONTINUE_STATEMENT):
    return False

  # `new.target`, `import.meta`
  if parent_kind == NodeKind.META_PROPERTY:
    return False

  return True
