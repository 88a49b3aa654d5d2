"""
Enumerations for external-globals-chain.

This module defines the closed set of syntax node kinds the walker understands,
plus small tags used by the edit buffer and the binding table.
"""

from enum import Enum
from typing import Optional


class NodeKind(str, Enum):
  """
  ESTree node types (ES2022 module grammar).

  Values match the ``type`` field of parsed nodes. Types outside this set are
  still traversed generically but never trigger a rewrite rule.
  """

  PROGRAM = "Program"

  # Declarations
  IMPORT_DECLARATION = "ImportDeclaration"
  IMPORT_SPECIFIER = "ImportSpecifier"
  IMPORT_DEFAULT_SPECIFIER = "ImportDefaultSpecifier"
  IMPORT_NAMESPACE_SPECIFIER = "ImportNamespaceSpecifier"
  EXPORT_NAMED_DECLARATION = "ExportNamedDeclaration"
  EXPORT_DEFAULT_DECLARATION = "ExportDefaultDeclaration"
  EXPORT_ALL_DECLARATION = "ExportAllDeclaration"
  EXPORT_SPECIFIER = "ExportSpecifier"
  FUNCTION_DECLARATION = "FunctionDeclaration"
  CLASS_DECLARATION = "ClassDeclaration"
  VARIABLE_DECLARATION = "VariableDeclaration"
  VARIABLE_DECLARATOR = "VariableDeclarator"

  # Statements
  EXPRESSION_STATEMENT = "ExpressionStatement"
  DIRECTIVE = "Directive"
  BLOCK_STATEMENT = "BlockStatement"
  STATIC_BLOCK = "StaticBlock"
  EMPTY_STATEMENT = "EmptyStatement"
  DEBUGGER_STATEMENT = "DebuggerStatement"
  WITH_STATEMENT = "WithStatement"
  RETURN_STATEMENT = "ReturnStatement"
  LABELED_STATEMENT = "LabeledStatement"
  BREAK_STATEMENT = "BreakStatement"
  CONTINUE_STATEMENT = "ContinueStatement"
  IF_STATEMENT = "IfStatement"
  SWITCH_STATEMENT = "SwitchStatement"
  SWITCH_CASE = "SwitchCase"
  THROW_STATEMENT = "ThrowStatement"
  TRY_STATEMENT = "TryStatement"
  CATCH_CLAUSE = "CatchClause"
  WHILE_STATEMENT = "WhileStatement"
  DO_WHILE_STATEMENT = "DoWhileStatement"
  FOR_STATEMENT = "ForStatement"
  FOR_IN_STATEMENT = "ForInStatement"
  FOR_OF_STATEMENT = "ForOfStatement"

  # Expressions
  IDENTIFIER = "Identifier"
  PRIVATE_IDENTIFIER = "PrivateIdentifier"
  LITERAL = "Literal"
  THIS_EXPRESSION = "ThisExpression"
  SUPER = "Super"
  ARRAY_EXPRESSION = "ArrayExpression"
  OBJECT_EXPRESSION = "ObjectExpression"
  PROPERTY = "Property"
  FUNCTION_EXPRESSION = "FunctionExpression"
  ARROW_FUNCTION_EXPRESSION = "ArrowFunctionExpression"
  CLASS_EXPRESSION = "ClassExpression"
  CLASS_BODY = "ClassBody"
  METHOD_DEFINITION = "MethodDefinition"
  PROPERTY_DEFINITION = "PropertyDefinition"
  UNARY_EXPRESSION = "UnaryExpression"
  UPDATE_EXPRESSION = "UpdateExpression"
  BINARY_EXPRESSION = "BinaryExpression"
  ASSIGNMENT_EXPRESSION = "AssignmentExpression"
  LOGICAL_EXPRESSION = "LogicalExpression"
  MEMBER_EXPRESSION = "MemberExpression"
  CHAIN_EXPRESSION = "ChainExpression"
  CONDITIONAL_EXPRESSION = "ConditionalExpression"
  CALL_EXPRESSION = "CallExpression"
  NEW_EXPRESSION = "NewExpression"
  SEQUENCE_EXPRESSION = "SequenceExpression"
  YIELD_EXPRESSION = "YieldExpression"
  AWAIT_EXPRESSION = "AwaitExpression"
  TEMPLATE_LITERAL = "TemplateLiteral"
  TAGGED_TEMPLATE_EXPRESSION = "TaggedTemplateExpression"
  TEMPLATE_ELEMENT = "TemplateElement"
  SPREAD_ELEMENT = "SpreadElement"
  META_PROPERTY = "MetaProperty"
  IMPORT_EXPRESSION = "ImportExpression"
  # Legacy callee of call-style dynamic imports: CallExpression(callee=Import)
  IMPORT = "Import"

  # Patterns
  OBJECT_PATTERN = "ObjectPattern"
  ARRAY_PATTERN = "ArrayPattern"
  REST_ELEMENT = "RestElement"
  ASSIGNMENT_PATTERN = "AssignmentPattern"

  @classmethod
  def of(cls, type_name: Optional[str]) -> Optional["NodeKind"]:
    """
    Resolves a raw ``type`` string to a member.

    Args:
        type_name (Optional[str]): The ``type`` field of a node.

    Returns:
        Optional[NodeKind]: The member, or None for unknown/extension node types.
    """
    if type_name is None:
      return None
    try:
      return cls(type_name)
    except ValueError:
      return None


class InsertSide(str, Enum):
  """
  Anchoring side of a text insertion in the edit buffer.

  LEFT content belongs to the text ending at the position, RIGHT content to the
  text starting at it. At a shared position LEFT is emitted first.
  """

  LEFT = "left"
  RIGHT = "right"


class ImportKind(str, Enum):
  """How an import specifier addresses the global value."""

  DEFAULT = "default"  # the global path itself
  NAMESPACE = "namespace"  # the whole global path, no further access
  NAMED = "named"  # <path>.<imported>
