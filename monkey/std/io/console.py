import re
import sys
from typing import List, Optional, TextIO, Tuple


# %s %d %v %t take the next argument as is, %q quotes it, %% is a literal percent
FORMAT_VERB = re.compile(r'%([%sdvtq])')


def expand_format(fmt: str, args: List[str]) -> Tuple[Optional[str], int]:
    """Substitute `args` into `fmt`.

    Returns the expanded text and the number of arguments the format asks
    for. The text is None when that number differs from `len(args)`.
    """
    wanted = sum(1 for m in FORMAT_VERB.finditer(fmt) if m.group(1) != '%')
    if wanted != len(args):
        return None, wanted
    remaining = iter(args)

    def substitute(m: re.Match) -> str:
        verb = m.group(1)
        if verb == '%':
            return '%'
        text = next(remaining)
        if verb == 'q':
            return '"' + text + '"'
        return text

    return FORMAT_VERB.sub(substitute, fmt), wanted


class Console:
    """Text sink used by the console builtins.

    Without an explicit stream the current `sys.stdout` is looked up on
    every write, so redirections made after construction are honoured.
    """
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def write(self, text: str):
        out = self.stream if self.stream is not None else sys.stdout
        out.write(text)
        out.flush()

    def println(self, texts: List[str]):
        self.write(' '.join(texts) + '\n')

    def printf(self, fmt: str, texts: List[str]) -> Tuple[bool, int]:
        expanded, wanted = expand_format(fmt, texts)
        if expanded is None:
            return False, wanted
        self.write(expanded)
        return True, wanted
