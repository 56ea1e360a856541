"""CLI entry point for the Monkey interpreter.

Usage:
    python -m monkey [-v|-vv|-vvv] <program_file>
    python -m monkey [-v...] --print-ast <program_file>
    python -m monkey [-v...]

Options:
  -v                   Increase debug verbosity (can be repeated)
  --debug-file PATH    Where debug output goes (default: debug.txt)
  --print-ast          Parse the program and print its canonical form
  --recursion-limit N  Host recursion limit for deeply nested programs

Without a program file an interactive session is started. Bindings made
with `let` persist for the whole session.
"""

import argparse
import getpass
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .environment import Environment
from .errors import MonkeyError
from .interpreter import parse_program, Interpreter

PROMPT = '>> '


def print_parser_errors(out: TextIO, errors: List[str]):
    for msg in errors:
        out.write('\t' + msg + '\n')


def execute(source: str, interpreter: Interpreter, env: Environment, out: TextIO) -> bool:
    """Parse and evaluate one unit of input, printing the result to `out`.

    Returns False if the source had parse errors and was not evaluated.
    """
    program, errors = parse_program(source)
    if errors:
        print_parser_errors(out, errors)
        return False
    result = interpreter.run(program, env)
    if result is not None:
        out.write(result.inspect() + '\n')
    return True


def start_repl(stdin: TextIO, out: TextIO, interpreter: Interpreter):
    env = Environment()
    while True:
        out.write(PROMPT)
        out.flush()
        line = stdin.readline()
        if not line:
            return
        if not line.strip():
            continue
        execute(line, interpreter, env, out)


def greeting() -> str:
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = 'there'
    return f"Hello {user}! this is the Monkey programming language!\nFeel free to type in commands\n"


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Monkey language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', default='debug.txt', help='file receiving debug output')
    parser.add_argument('--print-ast', action='store_true', help='print the parsed program instead of running it')
    parser.add_argument('--recursion-limit', type=int, default=10000, metavar='N',
                        help='host recursion limit (default: 10000)')
    parser.add_argument('program', nargs='?', help='Monkey program file to execute; omit for a REPL')
    args = parser.parse_args(argv)

    sys.setrecursionlimit(args.recursion_limit)
    interpreter = Interpreter(debug_level=args.v, debug_file=args.debug_file)
    try:
        # Interactive session
        if not args.program:
            if args.print_ast:
                parser.error('--print-ast needs a program file')
            sys.stdout.write(greeting())
            start_repl(sys.stdin, sys.stdout, interpreter)
            return

        program_file = Path(args.program)
        if not program_file.exists():
            print(f"Error: file {program_file} not found", file=sys.stderr)
            sys.exit(1)
        with open(program_file, 'r', encoding='utf-8') as f:
            source = f.read()

        if args.print_ast:
            program, errors = parse_program(source)
            if errors:
                print_parser_errors(sys.stdout, errors)
                sys.exit(1)
            for stmt in program.statements:
                print(stmt)
            return

        if not execute(source, interpreter, Environment(), sys.stdout):
            sys.exit(1)
    except (RecursionError, MonkeyError) as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
