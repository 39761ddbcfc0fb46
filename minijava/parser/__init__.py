"""
minijava Parser Package

Implements a recursive descent parser for the minijava language.
Produces an AST made of a closed family of node classes, plus diagnostics.

Key Features:
- Classes, methods (parameter lists skipped), declarations, while/if,
  blocks, assignments, increments and qualified method calls
- Arithmetic and comparison expressions with precedence
- Checkpointed lookahead to tell methods from variable declarations
- Error recovery: parsing always continues past malformed input
"""

from .ast_nodes import *
from .parser import Parser, ParseResult, parse_string, parse_file
from .printer import TreePrinter, format_tree, format_tokens
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser", "ParseResult", "parse_string", "parse_file",

    # AST nodes
    "NodeType", "ASTNode", "ASTVisitor", "Statement", "Expression", "Wrapper",
    "Program", "ClassDecl", "MethodDecl", "Declaration", "Modifier", "ReturnType",
    "WhileLoop", "IfStatement", "Block", "MethodCall", "Assignment",
    "Increment", "Decrement", "Condition", "Body", "Then", "Else", "Argument",
    "BinaryOp", "Comparison", "Identifier", "Number", "StringLiteral",
    "PostIncrement", "PostDecrement", "ErrorNode",

    # Rendering
    "TreePrinter", "format_tree", "format_tokens",

    # Error handling
    "ParseError",
]
