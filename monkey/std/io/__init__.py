from typing import Dict

from .console import Console, expand_format
from monkey.objects import Builtin, Error, Object, NULL


def populate_io_builtins(console: Console) -> Dict[str, Builtin]:
    """Create the console output builtins bound to `console`."""

    def std_println(*args: Object) -> Object:
        if len(args) == 0:
            return Error(f"wrong number of arguments. got={len(args)}")
        console.println([a.inspect() for a in args])
        return NULL

    def std_printf(*args: Object) -> Object:
        if len(args) == 0:
            return Error(f"wrong number of arguments. got={len(args)}")
        fmt = args[0].inspect()
        texts = [a.inspect() for a in args[1:]]
        written, wanted = console.printf(fmt, texts)
        if not written:
            return Error(f"wrong number of arguments for format. got={len(texts)}, want={wanted}")
        return NULL

    return {
        'println': Builtin('println', std_println),
        'printf': Builtin('printf', std_printf),
    }


__all__ = ['Console', 'expand_format', 'populate_io_builtins']
