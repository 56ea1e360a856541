"""Scanner for the Monkey language.

Source text is split into tokens by lark's basic (non-contextual) lexer.
The grammar below exists only to declare the terminals; the parser in
`monkey.parser` is hand written and consumes the tokens one at a time
through `Lexer.next_token()`.
"""

from __future__ import annotations

from typing import Iterator, List

from lark import Lark

from . import tokens
from .tokens import Token


MONKEY_TOKENS = r"""
    start: _token*
    _token: IDENT | INT | STRING
          | EQ | NOT_EQ | ASSIGN | PLUS | MINUS | BANG | ASTERISK | SLASH | LT | GT
          | PERIOD | COMMA | COLON | SEMICOLON
          | LPAREN | RPAREN | LBRACE | RBRACE | LBRACKET | RBRACKET
          | ILLEGAL

    IDENT: /[A-Za-z_][A-Za-z0-9_]*/
    INT: /[0-9]+/
    // no escapes; an unterminated string runs to end of input
    STRING: /"[^"]*"?/

    EQ: "=="
    NOT_EQ: "!="
    ASSIGN: "="
    PLUS: "+"
    MINUS: "-"
    BANG: "!"
    ASTERISK: "*"
    SLASH: "/"
    LT: "<"
    GT: ">"

    PERIOD: "."
    COMMA: ","
    COLON: ":"
    SEMICOLON: ";"
    LPAREN: "("
    RPAREN: ")"
    LBRACE: "{"
    RBRACE: "}"
    LBRACKET: "["
    RBRACKET: "]"

    // any single character no other terminal can start with
    ILLEGAL: /[^\sA-Za-z0-9_"=+\-!*\/<>.,:;(){}\[\]]/

    WS: /\s+/
    %ignore WS
"""


MONKEY_LEXER = Lark(
    MONKEY_TOKENS,
    parser='lalr',
    lexer='basic',
)


# lark terminal name -> token kind
TERMINAL_KINDS = {
    'INT': tokens.INT,
    'STRING': tokens.STRING,
    'EQ': tokens.EQ,
    'NOT_EQ': tokens.NOT_EQ,
    'ASSIGN': tokens.ASSIGN,
    'PLUS': tokens.PLUS,
    'MINUS': tokens.MINUS,
    'BANG': tokens.BANG,
    'ASTERISK': tokens.ASTERISK,
    'SLASH': tokens.SLASH,
    'LT': tokens.LT,
    'GT': tokens.GT,
    'PERIOD': tokens.PERIOD,
    'COMMA': tokens.COMMA,
    'COLON': tokens.COLON,
    'SEMICOLON': tokens.SEMICOLON,
    'LPAREN': tokens.LPAREN,
    'RPAREN': tokens.RPAREN,
    'LBRACE': tokens.LBRACE,
    'RBRACE': tokens.RBRACE,
    'LBRACKET': tokens.LBRACKET,
    'RBRACKET': tokens.RBRACKET,
    'ILLEGAL': tokens.ILLEGAL,
}


def _convert(raw) -> Token:
    value = str(raw)
    if raw.type == 'IDENT':
        return Token(tokens.lookup_ident(value), value, raw.line, raw.column)
    if raw.type == 'STRING':
        body = value[1:]
        if body.endswith('"'):
            body = body[:-1]
        return Token(tokens.STRING, body, raw.line, raw.column)
    return Token(TERMINAL_KINDS[raw.type], value, raw.line, raw.column)


class Lexer:
    """Pull-based token source over a piece of source text.

    Once the input is exhausted every further call to `next_token()`
    returns an EOF token.
    """

    def __init__(self, source: str):
        self.source = source
        self._raw = MONKEY_LEXER.lex(source)
        self._line = 1
        self._column = 1

    def next_token(self) -> Token:
        raw = next(self._raw, None)
        if raw is None:
            return Token(tokens.EOF, '', self._line, self._column)
        tok = _convert(raw)
        self._line = raw.end_line if raw.end_line is not None else raw.line
        self._column = raw.end_column if raw.end_column is not None else raw.column
        return tok

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == tokens.EOF:
                return


def tokenize(source: str) -> List[Token]:
    """Return every token of `source`, ending with a single EOF token."""
    return list(Lexer(source))
