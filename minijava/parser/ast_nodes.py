"""
Abstract Syntax Tree node definitions for minijava.

Every node kind the parser can produce has its own class carrying only the
fields it needs. All nodes share a small generic surface used for traversal
and rendering:

- ``node_type``: member of the closed ``NodeType`` enumeration
- ``value``: text payload ("" when the kind has none)
- ``line``: source line, 0 when unset
- ``children()``: ordered child nodes

Children are owned exclusively: a node can be attached to at most one
parent, and nodes keep no reference back to their parent.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Optional
from enum import Enum


class NodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level
    PROGRAM = "PROGRAM"

    # Declarations
    CLASS = "CLASS"
    METHOD = "METHOD"
    DECLARATION = "DECLARATION"
    MODIFIER = "MODIFIER"
    RETURN_TYPE = "RETURN_TYPE"

    # Statements
    WHILE = "WHILE"
    IF = "IF"
    BLOCK = "BLOCK"
    METHOD_CALL = "METHOD_CALL"
    ASSIGNMENT = "ASSIGNMENT"
    INCREMENT = "INCREMENT"
    DECREMENT = "DECREMENT"

    # Wrappers
    CONDITION = "CONDITION"
    BODY = "BODY"
    THEN = "THEN"
    ELSE = "ELSE"
    ARGUMENT = "ARGUMENT"

    # Expressions
    BINARY_OP = "BINARY_OP"
    COMPARISON = "COMPARISON"
    POST_INCREMENT = "POST_INCREMENT"
    POST_DECREMENT = "POST_DECREMENT"
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    STRING_LITERAL = "STRING_LITERAL"
    ERROR = "ERROR"


class ASTVisitor(ABC):
    """Abstract visitor interface for traversing AST nodes."""

    @abstractmethod
    def visit(self, node: 'ASTNode') -> Any:
        """Visit a generic AST node."""
        pass


class ASTNode(ABC):
    """Base class for all AST nodes."""

    def __init__(self, node_type: NodeType, line: int = 0):
        self.node_type = node_type
        self.line = line
        self._attached = False

    @property
    def value(self) -> str:
        """Text payload of the node; empty for kinds without one."""
        return ""

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    def walk(self) -> Iterator['ASTNode']:
        """Yield this node and all its descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def _own(self, child: 'ASTNode') -> 'ASTNode':
        """Take ownership of ``child``; a node may only have one parent."""
        if child._attached:
            raise ValueError(f"{child!r} is already attached to another node")
        child._attached = True
        return child

    def _own_all(self, nodes: Optional[List['ASTNode']]) -> List['ASTNode']:
        return [self._own(node) for node in nodes or []]

    def __str__(self) -> str:
        text = self.node_type.value
        if self.value:
            text += f"[{self.value}]"
        return text

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(value={self.value!r}, line={self.line})"


class Statement(ASTNode):
    """Base class for statement-level nodes."""
    pass


class Expression(ASTNode):
    """Base class for expression nodes."""
    pass


# ============================================================================
# Top-level
# ============================================================================

class Program(ASTNode):
    """Root AST node representing a complete compilation unit."""

    def __init__(self, statements: Optional[List[Statement]] = None):
        super().__init__(NodeType.PROGRAM)
        self.statements = self._own_all(statements)

    def append(self, statement: Statement):
        self.statements.append(self._own(statement))

    def children(self) -> List[ASTNode]:
        return list(self.statements)


# ============================================================================
# Declarations
# ============================================================================

class Modifier(ASTNode):
    """An access or storage modifier such as ``public`` or ``static``."""

    def __init__(self, name: str, line: int = 0):
        super().__init__(NodeType.MODIFIER, line)
        self.name = name

    @property
    def value(self) -> str:
        return self.name

    def children(self) -> List[ASTNode]:
        return []


class ReturnType(ASTNode):
    """The declared return type of a method."""

    def __init__(self, name: str, line: int = 0):
        super().__init__(NodeType.RETURN_TYPE, line)
        self.name = name

    @property
    def value(self) -> str:
        return self.name

    def children(self) -> List[ASTNode]:
        return []


class ClassDecl(Statement):
    """``class Name { ... }``; modifiers come before body statements."""

    def __init__(self, name: str, modifiers: Optional[List[Modifier]] = None,
                 body: Optional[List[Statement]] = None, line: int = 0):
        super().__init__(NodeType.CLASS, line)
        self.name = name
        self.modifiers = self._own_all(modifiers)
        self.body = self._own_all(body)

    @property
    def value(self) -> str:
        return self.name

    def append(self, statement: Statement):
        self.body.append(self._own(statement))

    def children(self) -> List[ASTNode]:
        return self.modifiers + self.body


class MethodDecl(Statement):
    """
    ``Type name(...) { ... }``.

    The parameter list is not represented: the parser skips it.
    """

    def __init__(self, name: str, return_type: ReturnType,
                 modifiers: Optional[List[Modifier]] = None,
                 body: Optional[List[Statement]] = None, line: int = 0):
        super().__init__(NodeType.METHOD, line)
        self.name = name
        self.return_type = self._own(return_type)
        self.modifiers = self._own_all(modifiers)
        self.body = self._own_all(body)

    @property
    def value(self) -> str:
        return self.name

    def append(self, statement: Statement):
        self.body.append(self._own(statement))

    def children(self) -> List[ASTNode]:
        return [self.return_type] + self.modifiers + self.body


class Declaration(Statement):
    """``Type name [= initializer];``"""

    def __init__(self, type_name: str, name: str,
                 initializer: Optional[Expression] = None, line: int = 0):
        super().__init__(NodeType.DECLARATION, line)
        self.type_name = type_name
        self.name = name
        self.initializer = self._own(initializer) if initializer is not None else None

    @property
    def value(self) -> str:
        return f"{self.type_name} {self.name}"

    def children(self) -> List[ASTNode]:
        return [self.initializer] if self.initializer is not None else []


# ============================================================================
# Wrappers
# ============================================================================

class Wrapper(ASTNode):
    """A node that labels the role of exactly one child."""

    def __init__(self, node_type: NodeType, inner: ASTNode, line: int = 0):
        super().__init__(node_type, line or inner.line)
        self.inner = self._own(inner)

    def children(self) -> List[ASTNode]:
        return [self.inner]


class Condition(Wrapper):
    def __init__(self, inner: Expression, line: int = 0):
        super().__init__(NodeType.CONDITION, inner, line)


class Body(Wrapper):
    def __init__(self, inner: Statement, line: int = 0):
        super().__init__(NodeType.BODY, inner, line)


class Then(Wrapper):
    def __init__(self, inner: Statement, line: int = 0):
        super().__init__(NodeType.THEN, inner, line)


class Else(Wrapper):
    def __init__(self, inner: Statement, line: int = 0):
        super().__init__(NodeType.ELSE, inner, line)


class Argument(Wrapper):
    def __init__(self, inner: Expression, line: int = 0):
        super().__init__(NodeType.ARGUMENT, inner, line)


# ============================================================================
# Statements
# ============================================================================

class WhileLoop(Statement):
    """``while (condition) body``; the body is absent if it failed to parse."""

    def __init__(self, condition: Condition, body: Optional[Body] = None, line: int = 0):
        super().__init__(NodeType.WHILE, line)
        self.condition = self._own(condition)
        self.body = self._own(body) if body is not None else None

    def children(self) -> List[ASTNode]:
        nodes: List[ASTNode] = [self.condition]
        if self.body is not None:
            nodes.append(self.body)
        return nodes


class IfStatement(Statement):
    """``if (condition) then [else orelse]``"""

    def __init__(self, condition: Condition, then: Optional[Then] = None,
                 orelse: Optional[Else] = None, line: int = 0):
        super().__init__(NodeType.IF, line)
        self.condition = self._own(condition)
        self.then = self._own(then) if then is not None else None
        self.orelse = self._own(orelse) if orelse is not None else None

    def children(self) -> List[ASTNode]:
        nodes: List[ASTNode] = [self.condition]
        if self.then is not None:
            nodes.append(self.then)
        if self.orelse is not None:
            nodes.append(self.orelse)
        return nodes


class Block(Statement):
    """``{ statements }``"""

    def __init__(self, statements: Optional[List[Statement]] = None, line: int = 0):
        super().__init__(NodeType.BLOCK, line)
        self.statements = self._own_all(statements)

    def append(self, statement: Statement):
        self.statements.append(self._own(statement))

    def children(self) -> List[ASTNode]:
        return list(self.statements)


class MethodCall(Statement):
    """``a.b.c(arg, ...);`` with the dotted name kept as one string."""

    def __init__(self, name: str, arguments: Optional[List[Argument]] = None, line: int = 0):
        super().__init__(NodeType.METHOD_CALL, line)
        self.name = name
        self.arguments = self._own_all(arguments)

    @property
    def value(self) -> str:
        return self.name

    def append(self, argument: Argument):
        self.arguments.append(self._own(argument))

    def children(self) -> List[ASTNode]:
        return list(self.arguments)


class Assignment(Statement):
    """``name = expression;``"""

    def __init__(self, name: str, expression: Expression, line: int = 0):
        super().__init__(NodeType.ASSIGNMENT, line)
        self.name = name
        self.expression = self._own(expression)

    @property
    def value(self) -> str:
        return self.name

    def children(self) -> List[ASTNode]:
        return [self.expression]


class Increment(Statement):
    """``name++;``"""

    def __init__(self, name: str, line: int = 0):
        super().__init__(NodeType.INCREMENT, line)
        self.name = name

    @property
    def value(self) -> str:
        return self.name

    def children(self) -> List[ASTNode]:
        return []


class Decrement(Statement):
    """``name--;``"""

    def __init__(self, name: str, line: int = 0):
        super().__init__(NodeType.DECREMENT, line)
        self.name = name

    @property
    def value(self) -> str:
        return self.name

    def children(self) -> List[ASTNode]:
        return []


# ============================================================================
# Expressions
# ============================================================================

class BinaryOp(Expression):
    """Arithmetic operation: ``left op right`` with op in + - * / %."""

    def __init__(self, operator: str, left: Expression, right: Expression, line: int = 0):
        super().__init__(NodeType.BINARY_OP, line or left.line)
        self.operator = operator
        self.left = self._own(left)
        self.right = self._own(right)

    @property
    def value(self) -> str:
        return self.operator

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


class Comparison(BinaryOp):
    """Relational operation: ``left op right`` with op in == != < > <= >=."""

    def __init__(self, operator: str, left: Expression, right: Expression, line: int = 0):
        super().__init__(operator, left, right, line)
        self.node_type = NodeType.COMPARISON


class Identifier(Expression):
    def __init__(self, name: str, line: int = 0):
        super().__init__(NodeType.IDENTIFIER, line)
        self.name = name

    @property
    def value(self) -> str:
        return self.name

    def children(self) -> List[ASTNode]:
        return []


class Number(Expression):
    """Decimal integer literal, kept as its source text."""

    def __init__(self, text: str, line: int = 0):
        super().__init__(NodeType.NUMBER, line)
        self.text = text

    @property
    def value(self) -> str:
        return self.text

    def children(self) -> List[ASTNode]:
        return []


class StringLiteral(Expression):
    """String literal; ``text`` is the decoded contents without quotes."""

    def __init__(self, text: str, line: int = 0):
        super().__init__(NodeType.STRING_LITERAL, line)
        self.text = text

    @property
    def value(self) -> str:
        return self.text

    def children(self) -> List[ASTNode]:
        return []


class PostIncrement(Expression):
    """``name++`` used as an expression."""

    def __init__(self, operand: Identifier, line: int = 0):
        super().__init__(NodeType.POST_INCREMENT, line or operand.line)
        self.operand = self._own(operand)

    def children(self) -> List[ASTNode]:
        return [self.operand]


class PostDecrement(Expression):
    """``name--`` used as an expression."""

    def __init__(self, operand: Identifier, line: int = 0):
        super().__init__(NodeType.POST_DECREMENT, line or operand.line)
        self.operand = self._own(operand)

    def children(self) -> List[ASTNode]:
        return [self.operand]


class ErrorNode(Expression):
    """Placeholder for an expression that could not be parsed."""

    def __init__(self, line: int = 0):
        super().__init__(NodeType.ERROR, line)

    def children(self) -> List[ASTNode]:
        return []

