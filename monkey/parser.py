"""Parser for the Monkey language.

Expressions are parsed with operator precedence (Pratt) parsing. Every
token kind that can start an expression has a prefix parse function, and
every token kind that can continue one has an infix parse function plus
a binding power in `PRECEDENCES`. `parse_expression` keeps folding the
expression built so far into infix rules for as long as the next token
binds tighter than the caller, which gives left associativity and the
usual operator priorities without backtracking.

The parser does not raise on bad input. Each problem is appended to
`Parser.errors`, the node at the failure point is left as None and the
parser skips ahead to the next statement boundary.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from . import tokens
from .ast import (
    Program, Statement, Expression, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral,
    StringLiteral, BooleanLiteral, PrefixExpression, InfixExpression,
    IfExpression, FunctionLiteral, CallExpression, ArrayLiteral,
    HashLiteral, IndexExpression,
)
from .tokens import Token


# binding powers, weakest first
LOWEST = 1
EQUALS = 2       # ==
LESSGREATER = 3  # > or <
SUM = 4          # +
PRODUCT = 5      # *
PREFIX = 6       # -x or !x
CALL = 7         # f(x)
INDEX = 8        # a[0], a.b

PRECEDENCES: Dict[str, int] = {
    tokens.EQ: EQUALS,
    tokens.NOT_EQ: EQUALS,
    tokens.LT: LESSGREATER,
    tokens.GT: LESSGREATER,
    tokens.PLUS: SUM,
    tokens.MINUS: SUM,
    tokens.SLASH: PRODUCT,
    tokens.ASTERISK: PRODUCT,
    tokens.LPAREN: CALL,
    tokens.LBRACKET: INDEX,
    tokens.PERIOD: INDEX,
}

INT64_MAX = 2 ** 63 - 1

PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Expression], Optional[Expression]]


class _TokenFeed:
    """Adapts an already scanned token sequence to the `next_token()` protocol."""

    def __init__(self, toks: Iterable[Token]):
        self._it = iter(toks)
        self._last: Optional[Token] = None

    def next_token(self) -> Token:
        tok = next(self._it, None)
        if tok is None:
            line = self._last.line if self._last else 0
            return Token(tokens.EOF, '', line, 0)
        self._last = tok
        return tok


class Parser:
    def __init__(self, lexer):
        self.lexer = lexer
        self.errors: List[str] = []
        self.cur_token: Token = Token(tokens.EOF, '')
        self.peek_token: Token = Token(tokens.EOF, '')

        self.prefix_parse_fns: Dict[str, PrefixParseFn] = {}
        self.infix_parse_fns: Dict[str, InfixParseFn] = {}

        self.register_prefix(tokens.IDENT, self.parse_identifier)
        self.register_prefix(tokens.INT, self.parse_integer_literal)
        self.register_prefix(tokens.STRING, self.parse_string_literal)
        self.register_prefix(tokens.TRUE, self.parse_boolean)
        self.register_prefix(tokens.FALSE, self.parse_boolean)
        self.register_prefix(tokens.BANG, self.parse_prefix_expression)
        self.register_prefix(tokens.MINUS, self.parse_prefix_expression)
        self.register_prefix(tokens.LPAREN, self.parse_grouped_expression)
        self.register_prefix(tokens.IF, self.parse_if_expression)
        self.register_prefix(tokens.FUNCTION, self.parse_function_literal)
        self.register_prefix(tokens.LBRACKET, self.parse_array_literal)
        self.register_prefix(tokens.LBRACE, self.parse_hash_literal)

        for kind in (tokens.PLUS, tokens.MINUS, tokens.ASTERISK, tokens.SLASH,
                     tokens.EQ, tokens.NOT_EQ, tokens.LT, tokens.GT):
            self.register_infix(kind, self.parse_infix_expression)
        self.register_infix(tokens.LPAREN, self.parse_call_expression)
        self.register_infix(tokens.LBRACKET, self.parse_index_expression)
        self.register_infix(tokens.PERIOD, self.parse_property_expression)

        # fill cur_token and peek_token
        self.next_token()
        self.next_token()

    def register_prefix(self, kind: str, fn: PrefixParseFn):
        self.prefix_parse_fns[kind] = fn

    def register_infix(self, kind: str, fn: InfixParseFn):
        self.infix_parse_fns[kind] = fn

    # Token cursor

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: str) -> bool:
        return self.cur_token.kind == kind

    def peek_token_is(self, kind: str) -> bool:
        return self.peek_token.kind == kind

    def expect_peek(self, kind: str) -> bool:
        """Advance if the next token has the given kind, otherwise record an error."""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self) -> int:
        return PRECEDENCES.get(self.peek_token.kind, LOWEST)

    def cur_precedence(self) -> int:
        return PRECEDENCES.get(self.cur_token.kind, LOWEST)

    # Errors

    def peek_error(self, kind: str):
        self.errors.append(
            f"expected next token to be {kind}, got {self.peek_token.kind} instead")

    def no_prefix_parse_fn_error(self, kind: str):
        self.errors.append(f"no prefix parse function for {kind} found")

    def synchronize(self, *stop: str):
        # skip the rest of a broken statement
        stop = (tokens.SEMICOLON, tokens.EOF) + stop
        while self.cur_token.kind not in stop:
            self.next_token()

    # Statements

    def parse_program(self) -> Program:
        first = self.cur_token
        statements: List[Statement] = []
        while not self.cur_token_is(tokens.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            else:
                self.synchronize()
            self.next_token()
        return Program(first, tuple(statements))

    def parse_statement(self) -> Optional[Statement]:
        if self.cur_token_is(tokens.LET):
            return self.parse_let_statement()
        if self.cur_token_is(tokens.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def skip_semicolons(self):
        while self.peek_token_is(tokens.SEMICOLON):
            self.next_token()

    def parse_let_statement(self) -> Optional[LetStatement]:
        token = self.cur_token
        if not self.expect_peek(tokens.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)
        if not self.expect_peek(tokens.ASSIGN):
            return None
        self.next_token()
        value = self.parse_expression(LOWEST)
        if value is None:
            return None
        self.skip_semicolons()
        return LetStatement(token, name, value)

    def parse_return_statement(self) -> Optional[ReturnStatement]:
        token = self.cur_token
        self.next_token()
        value = self.parse_expression(LOWEST)
        if value is None:
            return None
        self.skip_semicolons()
        return ReturnStatement(token, value)

    def parse_expression_statement(self) -> Optional[ExpressionStatement]:
        token = self.cur_token
        value = self.parse_expression(LOWEST)
        if value is None:
            return None
        self.skip_semicolons()
        return ExpressionStatement(token, value)

    def parse_block_statement(self) -> BlockStatement:
        # cur_token is the opening brace
        token = self.cur_token
        statements: List[Statement] = []
        self.next_token()
        while not self.cur_token_is(tokens.RBRACE):
            if self.cur_token_is(tokens.EOF):
                self.errors.append(
                    f"expected next token to be {tokens.RBRACE}, got {tokens.EOF} instead")
                break
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            else:
                self.synchronize(tokens.RBRACE)
                if self.cur_token_is(tokens.RBRACE):
                    break
            self.next_token()
        return BlockStatement(token, tuple(statements))

    # Expressions

    def parse_expression(self, precedence: int) -> Optional[Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.kind)
            return None
        left = prefix()

        while (left is not None and not self.peek_token_is(tokens.SEMICOLON)
               and precedence < self.peek_precedence()):
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)
        return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Optional[Expression]:
        literal = self.cur_token.literal
        try:
            value = int(literal)
        except ValueError:
            value = None
        if value is None or value > INT64_MAX:
            self.errors.append(f'could not parse "{literal}" as integer')
            return None
        return IntegerLiteral(self.cur_token, value)

    def parse_string_literal(self) -> Expression:
        return StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self) -> Expression:
        return BooleanLiteral(self.cur_token, self.cur_token_is(tokens.TRUE))

    def parse_prefix_expression(self) -> Optional[Expression]:
        token = self.cur_token
        self.next_token()
        right = self.parse_expression(PREFIX)
        if right is None:
            return None
        return PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left: Expression) -> Optional[Expression]:
        token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(token, token.literal, left, right)

    def parse_grouped_expression(self) -> Optional[Expression]:
        self.next_token()
        exp = self.parse_expression(LOWEST)
        if exp is None or not self.expect_peek(tokens.RPAREN):
            return None
        return exp

    def parse_if_expression(self) -> Optional[Expression]:
        token = self.cur_token
        if not self.expect_peek(tokens.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(tokens.RPAREN):
            return None
        if not self.expect_peek(tokens.LBRACE):
            return None
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(tokens.ELSE):
            self.next_token()
            if not self.expect_peek(tokens.LBRACE):
                return None
            alternative = self.parse_block_statement()
        return IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self) -> Optional[Expression]:
        token = self.cur_token
        if not self.expect_peek(tokens.LPAREN):
            return None
        parameters = self.parse_list(tokens.RPAREN, self.parse_parameter)
        if parameters is None:
            return None
        if not self.expect_peek(tokens.LBRACE):
            return None
        body = self.parse_block_statement()
        return FunctionLiteral(token, tuple(parameters), body)

    def parse_parameter(self) -> Optional[Identifier]:
        if not self.cur_token_is(tokens.IDENT):
            self.errors.append(
                f"expected next token to be {tokens.IDENT}, got {self.cur_token.kind} instead")
            return None
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_call_expression(self, callee: Expression) -> Optional[Expression]:
        token = self.cur_token
        arguments = self.parse_list(tokens.RPAREN, self.parse_list_element)
        if arguments is None:
            return None
        return CallExpression(token, callee, tuple(arguments))

    def parse_array_literal(self) -> Optional[Expression]:
        token = self.cur_token
        elements = self.parse_list(tokens.RBRACKET, self.parse_list_element)
        if elements is None:
            return None
        return ArrayLiteral(token, tuple(elements))

    def parse_hash_literal(self) -> Optional[Expression]:
        token = self.cur_token
        pairs = self.parse_list(tokens.RBRACE, self.parse_hash_pair)
        if pairs is None:
            return None
        return HashLiteral(token, tuple(pairs))

    def parse_hash_pair(self) -> Optional[Tuple[Expression, Expression]]:
        key = self.parse_expression(LOWEST)
        if key is None or not self.expect_peek(tokens.COLON):
            return None
        self.next_token()
        value = self.parse_expression(LOWEST)
        if value is None:
            return None
        return key, value

    def parse_list_element(self) -> Optional[Expression]:
        return self.parse_expression(LOWEST)

    def parse_list(self, end: str, parse_item: Callable[[], Optional[object]]) -> Optional[list]:
        """Parse `item, item, ...` up to the closing `end` token.

        On entry cur_token is the opening delimiter; on success cur_token is
        the closing one. Returns None if an item or a separator is broken.
        """
        items: list = []
        if self.peek_token_is(end):
            self.next_token()
            return items

        self.next_token()
        item = parse_item()
        if item is None:
            return None
        items.append(item)

        while self.peek_token_is(tokens.COMMA):
            self.next_token()
            self.next_token()
            item = parse_item()
            if item is None:
                return None
            items.append(item)

        if not self.expect_peek(end):
            return None
        return items

    def parse_index_expression(self, target: Expression) -> Optional[Expression]:
        token = self.cur_token
        self.next_token()
        index = self.parse_expression(LOWEST)
        if index is None or not self.expect_peek(tokens.RBRACKET):
            return None
        return IndexExpression(token, target, index)

    def parse_property_expression(self, target: Expression) -> Optional[Expression]:
        # a.b is sugar for a["b"]
        token = self.cur_token
        if not self.expect_peek(tokens.IDENT):
            return None
        key = StringLiteral(self.cur_token, self.cur_token.literal)
        return IndexExpression(token, target, key)


def parse(toks: Iterable[Token]) -> Tuple[Program, List[str]]:
    """Parse an already scanned token sequence.

    The sequence does not need to end with an EOF token; running out of
    tokens is treated as end of input.
    """
    parser = Parser(_TokenFeed(toks))
    program = parser.parse_program()
    return program, parser.errors
