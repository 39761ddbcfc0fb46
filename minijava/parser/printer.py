"""
Text rendering of token lists and syntax trees.

Purely cosmetic; nothing in the lexer or parser depends on it.
"""

from typing import Iterable, List

from ..lexer.tokens import Token, TokenType
from .ast_nodes import ASTNode, ASTVisitor


class TreePrinter(ASTVisitor):
    """
    Renders a tree one node per line:

        ├─ PROGRAM
          ├─ DECLARATION [int x] (@1)
            ├─ NUMBER [1] (@1)
    """

    INDENT = "  "
    MARKER = "├─ "

    def __init__(self):
        self.lines: List[str] = []
        self._depth = 0

    def visit(self, node: ASTNode):
        text = self.INDENT * self._depth + self.MARKER + node.node_type.value
        if node.value:
            text += f" [{node.value}]"
        if node.line > 0:
            text += f" (@{node.line})"
        self.lines.append(text)

        self._depth += 1
        for child in node.children():
            child.accept(self)
        self._depth -= 1

    def render(self, root: ASTNode) -> str:
        self.lines = []
        self._depth = 0
        root.accept(self)
        return "\n".join(self.lines)


def format_tree(root: ASTNode) -> str:
    return TreePrinter().render(root)


def format_tokens(tokens: Iterable[Token], include_eof: bool = False) -> str:
    """One ``[KIND: 'text' @line:col]`` entry per line."""
    return "\n".join(
        str(token) for token in tokens
        if include_eof or token.type != TokenType.EOF
    )
