"""Abstract Syntax Tree (AST) definitions for the Monkey language.

The AST classes defined in this module represent the syntactic structure
of parsed Monkey programs. Nodes are immutable; every node keeps the
token it started at. `str(node)` renders the canonical, fully
parenthesized form used by diagnostics and by the parser tests, for
example `1 + 2 * 3` renders as `(1 + (2 * 3))`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .tokens import Token


def _render(node: Optional['Node']) -> str:
    # children left empty by a failed parse render as nothing
    return '' if node is None else str(node)


def _render_sequence(statements: Tuple['Statement', ...], sep: str) -> str:
    # an expression statement followed by another statement keeps its `;`
    parts = []
    for i, stmt in enumerate(statements):
        text = str(stmt)
        if isinstance(stmt, ExpressionStatement) and i < len(statements) - 1:
            text += ';'
        parts.append(text)
    return sep.join(parts)


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    token: Token

    def token_literal(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class Statement(Node):
    pass


@dataclass(frozen=True)
class Expression(Node):
    pass


@dataclass(frozen=True)
class Program(Node):
    statements: Tuple[Statement, ...]

    def token_literal(self) -> str:
        if not self.statements:
            return ''
        return self.statements[0].token_literal()

    def __str__(self) -> str:
        return _render_sequence(self.statements, '')


# Statements

@dataclass(frozen=True)
class LetStatement(Statement):
    name: 'Identifier'
    value: Optional[Expression]

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {_render(self.value)};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    value: Optional[Expression]

    def __str__(self) -> str:
        return f"{self.token_literal()} {_render(self.value)};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    value: Optional[Expression]

    def __str__(self) -> str:
        return _render(self.value)


@dataclass(frozen=True)
class BlockStatement(Statement):
    statements: Tuple[Statement, ...]

    def __str__(self) -> str:
        if not self.statements:
            return '{ }'
        return '{ ' + _render_sequence(self.statements, ' ') + ' }'


# Expressions

@dataclass(frozen=True)
class Identifier(Expression):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int

    def __str__(self) -> str:
        return self.token_literal()


@dataclass(frozen=True)
class StringLiteral(Expression):
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool

    def __str__(self) -> str:
        return self.token_literal()


@dataclass(frozen=True)
class PrefixExpression(Expression):
    operator: str
    right: Optional[Expression]

    def __str__(self) -> str:
        return f"({self.operator}{_render(self.right)})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    operator: str
    left: Expression
    right: Optional[Expression]

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {_render(self.right)})"


@dataclass(frozen=True)
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    callee: Expression
    arguments: Tuple[Expression, ...]

    def __str__(self) -> str:
        args = ', '.join(str(a) for a in self.arguments)
        return f"{self.callee}({args})"


@dataclass(frozen=True)
class ArrayLiteral(Expression):
    elements: Tuple[Expression, ...]

    def __str__(self) -> str:
        return '[' + ', '.join(str(e) for e in self.elements) + ']'


@dataclass(frozen=True)
class HashLiteral(Expression):
    pairs: Tuple[Tuple[Expression, Expression], ...]

    def __str__(self) -> str:
        return '{' + ', '.join(f"{k}: {v}" for k, v in self.pairs) + '}'


@dataclass(frozen=True)
class IndexExpression(Expression):
    target: Expression
    index: Expression

    def __str__(self) -> str:
        return f"({self.target}[{self.index}])"
