"""Tree-walking interpreter for the Monkey language.

`Interpreter.evaluate(node, env)` maps one AST node and one environment
to one runtime object. Language errors are not raised: they are `Error`
objects returned like any other value, and every recursive evaluation
checks for them and hands them straight back to its caller. `return`
works the same way with `ReturnValue`, which blocks pass upward untouched
until the enclosing function call unwraps it.

Host exceptions only signal faults a program cannot recover from: an
`EvaluatorFault` for node types the parser never produces, and Python's
own `RecursionError` when a program recurses without bound.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, TextIO, Tuple, Union

from .ast import (
    Node, Program, LetStatement, ReturnStatement, ExpressionStatement,
    BlockStatement, Identifier, IntegerLiteral, StringLiteral,
    BooleanLiteral, PrefixExpression, InfixExpression, IfExpression,
    FunctionLiteral, CallExpression, ArrayLiteral, HashLiteral,
    IndexExpression, Expression, Statement,
)
from .environment import Environment
from .errors import EvaluatorFault, ParseErrors
from .lexer import Lexer
from .objects import (
    Object, Integer, String, Boolean, ReturnValue, Error, Function,
    Builtin, Array, Hash, HashPair, Hashable, TRUE, FALSE, NULL,
    INTEGER_OBJ, STRING_OBJ, BOOLEAN_OBJ, native_bool, is_error, wrap_int64,
)
from .parser import Parser
from .std import load_builtins
from .std.io import Console


def parse_program(source: str) -> Tuple[Program, List[str]]:
    """Scan and parse Monkey source code.

    Returns the program together with the parser's error messages. A
    program with errors should not be evaluated.
    """
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors


class Interpreter:
    """Core interpreter that evaluates Monkey ASTs."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 output: Optional[TextIO] = None):
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp: Optional[TextIO] = None
        self.console = Console(output)
        self.builtins = load_builtins(self.console)

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp is None:
                self.debug_fp = open(self.debug_file, 'w', encoding='utf-8')
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp is not None:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Object:
        if env is None:
            env = self.global_env
        if self.debug_level >= 1:
            self.debug(f"run program: {len(program.statements)} statements")
        result = self.evaluate(program, env)
        if self.debug_level >= 1 and is_error(result):
            self.debug(f"program error: {result.message}")
        return result

    def evaluate(self, node: Node, env: Environment) -> Object:
        # Statements
        if isinstance(node, Program):
            return self.eval_program(node.statements, env)
        if isinstance(node, ExpressionStatement):
            return self.evaluate(node.value, env)
        if isinstance(node, BlockStatement):
            return self.eval_block_statement(node.statements, env)
        if isinstance(node, LetStatement):
            value = self.evaluate(node.value, env)
            if is_error(value):
                return value
            if self.debug_level >= 2:
                self.debug(f"let {node.name.name} = {value.inspect()}")
            return env.set(node.name.name, value)
        if isinstance(node, ReturnStatement):
            value = self.evaluate(node.value, env)
            if is_error(value):
                return value
            return ReturnValue(value)

        # Literals
        if isinstance(node, IntegerLiteral):
            return Integer(node.value)
        if isinstance(node, StringLiteral):
            return String(node.value)
        if isinstance(node, BooleanLiteral):
            return native_bool(node.value)

        # Expressions
        if isinstance(node, PrefixExpression):
            right = self.evaluate(node.right, env)
            if is_error(right):
                return right
            return self.eval_prefix_expression(node.operator, right)
        if isinstance(node, InfixExpression):
            left = self.evaluate(node.left, env)
            if is_error(left):
                return left
            right = self.evaluate(node.right, env)
            if is_error(right):
                return right
            return self.eval_infix_expression(node.operator, left, right)
        if isinstance(node, IfExpression):
            return self.eval_if_expression(node, env)
        if isinstance(node, Identifier):
            return self.eval_identifier(node, env)
        if isinstance(node, FunctionLiteral):
            return Function(node.parameters, node.body, env)
        if isinstance(node, CallExpression):
            function = self.evaluate(node.callee, env)
            if is_error(function):
                return function
            args = self.eval_expressions(node.arguments, env)
            if isinstance(args, Error):
                return args
            return self.apply_function(function, args)
        if isinstance(node, ArrayLiteral):
            elements = self.eval_expressions(node.elements, env)
            if isinstance(elements, Error):
                return elements
            return Array(elements)
        if isinstance(node, HashLiteral):
            return self.eval_hash_literal(node, env)
        if isinstance(node, IndexExpression):
            target = self.evaluate(node.target, env)
            if is_error(target):
                return target
            index = self.evaluate(node.index, env)
            if is_error(index):
                return index
            return self.eval_index_expression(target, index)

        raise EvaluatorFault(node)

    def eval_program(self, statements: Sequence[Statement], env: Environment) -> Object:
        result: Object = NULL
        for stmt in statements:
            result = self.evaluate(stmt, env)
            if isinstance(result, ReturnValue):
                return result.value
            if isinstance(result, Error):
                return result
        return result

    def eval_block_statement(self, statements: Sequence[Statement], env: Environment) -> Object:
        # unlike a program, a block hands ReturnValue up unchanged
        result: Object = NULL
        for stmt in statements:
            result = self.evaluate(stmt, env)
            if isinstance(result, (ReturnValue, Error)):
                return result
        return result

    def eval_expressions(self, exps: Sequence[Expression], env: Environment) -> Union[List[Object], Error]:
        """Evaluate `exps` left to right, stopping at the first error."""
        results: List[Object] = []
        for exp in exps:
            evaluated = self.evaluate(exp, env)
            if isinstance(evaluated, Error):
                return evaluated
            results.append(evaluated)
        return results

    # Operators

    def eval_prefix_expression(self, operator: str, right: Object) -> Object:
        if operator == '!':
            return FALSE if self.is_truthy(right) else TRUE
        if operator == '-':
            if not isinstance(right, Integer):
                return Error(f"unknown operator: -{right.type()}")
            # a fresh object, the operand may be shared
            return Integer(wrap_int64(-right.value))
        return Error(f"unknown operator: {operator}{right.type()}")

    def eval_infix_expression(self, operator: str, left: Object, right: Object) -> Object:
        ltype, rtype = left.type(), right.type()
        if ltype == INTEGER_OBJ and rtype == INTEGER_OBJ:
            return self.eval_integer_infix_expression(operator, left, right)
        if ltype == BOOLEAN_OBJ and rtype == BOOLEAN_OBJ:
            return self.eval_boolean_infix_expression(operator, left, right)
        if ltype == STRING_OBJ and rtype == STRING_OBJ:
            return self.eval_string_infix_expression(operator, left, right)
        if ltype == STRING_OBJ and rtype == INTEGER_OBJ and operator == '*':
            # negative counts repeat nothing
            try:
                return String(left.value * right.value)
            except (OverflowError, MemoryError):
                return Error(f"string repetition too large: {right.value}")
        if ltype != rtype:
            return Error(f"type mismatch: {ltype} {operator} {rtype}")
        return Error(f"unknown operator: {ltype} {operator} {rtype}")

    def eval_integer_infix_expression(self, operator: str, left: Integer, right: Integer) -> Object:
        a, b = left.value, right.value
        if operator == '+':
            return Integer(wrap_int64(a + b))
        if operator == '-':
            return Integer(wrap_int64(a - b))
        if operator == '*':
            return Integer(wrap_int64(a * b))
        if operator == '/':
            if b == 0:
                return Error('division by zero')
            # integer division truncating toward zero
            quotient = abs(a) // abs(b)
            if (a < 0) != (b < 0):
                quotient = -quotient
            return Integer(wrap_int64(quotient))
        if operator == '==':
            return native_bool(a == b)
        if operator == '!=':
            return native_bool(a != b)
        if operator == '<':
            return native_bool(a < b)
        if operator == '>':
            return native_bool(a > b)
        return Error(f"unknown operator: {left.type()} {operator} {right.type()}")

    def eval_string_infix_expression(self, operator: str, left: String, right: String) -> Object:
        if operator == '+':
            return String(left.value + right.value)
        if operator == '==':
            return native_bool(left.value == right.value)
        if operator == '!=':
            return native_bool(left.value != right.value)
        return Error(f"unknown operator: {left.type()} {operator} {right.type()}")

    def eval_boolean_infix_expression(self, operator: str, left: Boolean, right: Boolean) -> Object:
        if operator == '==':
            return native_bool(left is right)
        if operator == '!=':
            return native_bool(left is not right)
        # false orders before true
        if operator == '<':
            return native_bool(int(left.value) < int(right.value))
        if operator == '>':
            return native_bool(int(left.value) > int(right.value))
        return Error(f"unknown operator: {left.type()} {operator} {right.type()}")

    # Control flow

    def eval_if_expression(self, node: IfExpression, env: Environment) -> Object:
        condition = self.evaluate(node.condition, env)
        if is_error(condition):
            return condition
        truthy = self.is_truthy(condition)
        if self.debug_level >= 3:
            self.debug(f"if condition {condition.inspect()} -> {truthy}")
        if truthy:
            return self.evaluate(node.consequence, env)
        if node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return NULL

    def is_truthy(self, value: Object) -> bool:
        # only false and null are falsy, 0 and "" are truthy
        return not (value is FALSE or value is NULL)

    # Names and functions

    def eval_identifier(self, node: Identifier, env: Environment) -> Object:
        value, found = env.get(node.name)
        if found:
            return value
        builtin = self.builtins.get(node.name)
        if builtin is not None:
            return builtin
        return Error(f"identifier not found: {node.name}")

    def apply_function(self, func: Object, args: List[Object]) -> Object:
        if isinstance(func, Function):
            if len(args) != len(func.parameters):
                return Error(f"wrong number of arguments. got={len(args)}, want={len(func.parameters)}")
            if self.debug_level >= 2:
                self.debug(f"call fn({', '.join(p.name for p in func.parameters)}) "
                           f"with {len(args)} arguments")
            # the call scope encloses the definition scope, not the caller's
            call_env = Environment.enclosed(func.env)
            for param, arg in zip(func.parameters, args):
                call_env.set(param.name, arg)
            result = self.evaluate(func.body, call_env)
            if isinstance(result, ReturnValue):
                return result.value
            return result
        if isinstance(func, Builtin):
            if self.debug_level >= 2:
                self.debug(f"call builtin {func.name} with {len(args)} arguments")
            return func.fn(*args)
        return Error(f"not a function: {func.type()}")

    # Collections

    def eval_hash_literal(self, node: HashLiteral, env: Environment) -> Object:
        pairs = {}
        for key_node, value_node in node.pairs:
            key = self.evaluate(key_node, env)
            if is_error(key):
                return key
            if not isinstance(key, Hashable):
                return Error(f"unusable as hash key: {key.type()}")
            value = self.evaluate(value_node, env)
            if is_error(value):
                return value
            pairs[key.hash_key()] = HashPair(key, value)
        return Hash(pairs)

    def eval_index_expression(self, target: Object, index: Object) -> Object:
        if isinstance(target, Array) and isinstance(index, Integer):
            i = index.value
            if i < 0 or i >= len(target.elements):
                return NULL
            return target.elements[i]
        if isinstance(target, Hash):
            if not isinstance(index, Hashable):
                return Error(f"unusable as hash key: {index.type()}")
            value = target.get(index)
            return value if value is not None else NULL
        return Error(f"index operator not supported: {target.type()}")


def run_program(source: str, debug_level: int = 0) -> Object:
    """Convenience function to parse and evaluate a Monkey program from source.

    Raises `ParseErrors` if the source does not parse.
    """
    program, errors = parse_program(source)
    if errors:
        raise ParseErrors(errors)
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run(program)
    finally:
        interpreter.close()
