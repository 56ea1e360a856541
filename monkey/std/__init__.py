"""Builtin functions available to every Monkey program.

Builtins validate their own arguments and report violations as `Error`
values. The table handed to the interpreter is read-only; programs can
shadow a builtin with `let` but never replace it.
"""

from types import MappingProxyType
from typing import Mapping, Optional

from monkey.objects import Array, Builtin, Error, Integer, Object, String
from .io import Console, populate_io_builtins


def std_len(*args: Object) -> Object:
    if len(args) != 1:
        return Error(f"wrong number of arguments. got={len(args)}, want=1")
    arg = args[0]
    if isinstance(arg, String):
        return Integer(len(arg.value))
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    return Error(f"argument to `len` is not supported. got {arg.type()}")


def load_builtins(console: Optional[Console] = None) -> Mapping[str, Builtin]:
    table = {'len': Builtin('len', std_len)}
    table.update(populate_io_builtins(console if console is not None else Console()))
    return MappingProxyType(table)
