from dataclasses import FrozenInstanceError

import pytest

from monkey import tokens
from monkey.ast import (
    Program, LetStatement, ReturnStatement, ExpressionStatement,
    BlockStatement, Identifier, StringLiteral, IndexExpression,
)
from monkey.tokens import Token


def ident(name):
    return Identifier(Token(tokens.IDENT, name), name)


def test_let_statement_string():
    program = Program(Token(tokens.LET, 'let'), (
        LetStatement(Token(tokens.LET, 'let'), ident('myVar'), ident('anotherVar')),
    ))
    assert str(program) == 'let myVar = anotherVar;'
    assert program.token_literal() == 'let'


def test_program_concatenates_statements():
    program = Program(Token(tokens.RETURN, 'return'), (
        ReturnStatement(Token(tokens.RETURN, 'return'), ident('x')),
        ExpressionStatement(Token(tokens.IDENT, 'y'), ident('y')),
    ))
    assert str(program) == 'return x;y'


def test_empty_program():
    program = Program(Token(tokens.EOF, ''), ())
    assert str(program) == ''
    assert program.token_literal() == ''


def test_missing_children_render_empty():
    stmt = LetStatement(Token(tokens.LET, 'let'), ident('x'), None)
    assert str(stmt) == 'let x = ;'


def test_blocks():
    empty = BlockStatement(Token(tokens.LBRACE, '{'), ())
    assert str(empty) == '{ }'
    block = BlockStatement(Token(tokens.LBRACE, '{'), (
        ExpressionStatement(Token(tokens.IDENT, 'a'), ident('a')),
        ReturnStatement(Token(tokens.RETURN, 'return'), ident('b')),
    ))
    assert str(block) == '{ a; return b; }'


def test_string_and_index_rendering():
    key = StringLiteral(Token(tokens.STRING, 'name'), 'name')
    index = IndexExpression(Token(tokens.PERIOD, '.'), ident('person'), key)
    assert str(key) == '"name"'
    assert str(index) == '(person["name"])'


def test_nodes_are_immutable():
    node = ident('x')
    with pytest.raises(FrozenInstanceError):
        node.name = 'y'
