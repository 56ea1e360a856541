"""Token kinds and the token record produced by the scanner.

Kinds are plain strings. Operators and delimiters use their own source
text as the kind, keywords and literal classes use upper-case names.
"""

from __future__ import annotations

from dataclasses import dataclass


ILLEGAL = 'ILLEGAL'
EOF = 'EOF'

# Identifiers and literals
IDENT = 'IDENT'
INT = 'INT'
STRING = 'STRING'

# Operators
ASSIGN = '='
PLUS = '+'
MINUS = '-'
BANG = '!'
ASTERISK = '*'
SLASH = '/'
LT = '<'
GT = '>'
EQ = '=='
NOT_EQ = '!='

# Delimiters
PERIOD = '.'
COMMA = ','
COLON = ':'
SEMICOLON = ';'
LPAREN = '('
RPAREN = ')'
LBRACE = '{'
RBRACE = '}'
LBRACKET = '['
RBRACKET = ']'

# Keywords
FUNCTION = 'FUNCTION'
LET = 'LET'
TRUE = 'TRUE'
FALSE = 'FALSE'
IF = 'IF'
ELSE = 'ELSE'
RETURN = 'RETURN'


KEYWORDS = {
    'fn': FUNCTION,
    'let': LET,
    'true': TRUE,
    'false': FALSE,
    'if': IF,
    'else': ELSE,
    'return': RETURN,
}


@dataclass(frozen=True)
class Token:
    kind: str
    literal: str
    line: int = 0
    column: int = 0

    def __repr__(self) -> str:
        return f"Token({self.kind!r}, {self.literal!r})"


def lookup_ident(ident: str) -> str:
    """Return the keyword kind for `ident`, or IDENT for user names."""
    return KEYWORDS.get(ident, IDENT)
