"""Runtime values of the Monkey interpreter.

Every value produced by evaluation is an `Object` with a type tag
(`type()`) and a printable form (`inspect()`). `TRUE`, `FALSE` and `NULL`
are shared singletons and the evaluator compares them by identity, so
code that needs a boolean must go through `native_bool` rather than
constructing a new `Boolean`.

`ReturnValue` and `Error` are signal objects: they travel through the
evaluator like ordinary values and stop statement sequences early. A
`ReturnValue` never leaves a function call; an `Error` travels all the
way out to the caller of the interpreter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from .ast import BlockStatement, Identifier

if TYPE_CHECKING:
    from .environment import Environment


INTEGER_OBJ = 'INTEGER'
STRING_OBJ = 'STRING'
BOOLEAN_OBJ = 'BOOLEAN'
NULL_OBJ = 'NULL'
RETURN_VALUE_OBJ = 'RETURN_VALUE'
ERROR_OBJ = 'ERROR'
FUNCTION_OBJ = 'FUNCTION'
BUILTIN_OBJ = 'BUILTIN'
ARRAY_OBJ = 'ARRAY'
HASH_OBJ = 'HASH'


def wrap_int64(value: int) -> int:
    """Fold an arbitrary Python int into the signed 64-bit range."""
    value &= 0xFFFFFFFFFFFFFFFF
    if value >= 0x8000000000000000:
        value -= 0x10000000000000000
    return value


@dataclass(frozen=True)
class HashKey:
    """Identity of a hashable object inside a `Hash`."""
    type: str
    value: object


class Object:
    """Base class for all runtime values."""

    def type(self) -> str:
        raise NotImplementedError

    def inspect(self) -> str:
        raise NotImplementedError


class Hashable(Object):
    """Objects that can be used as hash keys."""

    def hash_key(self) -> HashKey:
        raise NotImplementedError


@dataclass
class Integer(Hashable):
    value: int

    def type(self) -> str:
        return INTEGER_OBJ

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(INTEGER_OBJ, self.value)


@dataclass
class String(Hashable):
    value: str

    def type(self) -> str:
        return STRING_OBJ

    def inspect(self) -> str:
        return self.value

    def hash_key(self) -> HashKey:
        return HashKey(STRING_OBJ, self.value)


@dataclass(eq=False)
class Boolean(Hashable):
    value: bool

    def type(self) -> str:
        return BOOLEAN_OBJ

    def inspect(self) -> str:
        return 'true' if self.value else 'false'

    def hash_key(self) -> HashKey:
        return HashKey(BOOLEAN_OBJ, self.value)


class Null(Object):
    def type(self) -> str:
        return NULL_OBJ

    def inspect(self) -> str:
        return 'null'

    def __repr__(self) -> str:
        return 'NULL'


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value: bool) -> Boolean:
    return TRUE if value else FALSE


@dataclass
class ReturnValue(Object):
    value: Object

    def type(self) -> str:
        return RETURN_VALUE_OBJ

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass
class Error(Object):
    message: str

    def type(self) -> str:
        return ERROR_OBJ

    def inspect(self) -> str:
        return 'ERROR: ' + self.message


@dataclass(eq=False)
class Function(Object):
    """A user function closed over the environment it was defined in."""
    parameters: Tuple[Identifier, ...]
    body: BlockStatement
    env: 'Environment' = field(repr=False)

    def type(self) -> str:
        return FUNCTION_OBJ

    def inspect(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        body = '\n'.join(str(s) for s in self.body.statements)
        return f"fn({params}) {{\n{body}\n}}"


BuiltinFn = Callable[..., Object]


@dataclass(eq=False)
class Builtin(Object):
    name: str
    fn: BuiltinFn

    def type(self) -> str:
        return BUILTIN_OBJ

    def inspect(self) -> str:
        return 'builtin function'

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


@dataclass
class Array(Object):
    elements: List[Object]

    def type(self) -> str:
        return ARRAY_OBJ

    def inspect(self) -> str:
        return '[' + ', '.join(e.inspect() for e in self.elements) + ']'


@dataclass
class HashPair:
    key: Object
    value: Object


@dataclass
class Hash(Object):
    pairs: Dict[HashKey, HashPair]

    def type(self) -> str:
        return HASH_OBJ

    def inspect(self) -> str:
        entries = ', '.join(f"{p.key.inspect()}: {p.value.inspect()}" for p in self.pairs.values())
        return '{' + entries + '}'

    def get(self, key: Hashable) -> Optional[Object]:
        pair = self.pairs.get(key.hash_key())
        return pair.value if pair is not None else None


def is_error(obj: Optional[Object]) -> bool:
    return obj is not None and obj.type() == ERROR_OBJ
