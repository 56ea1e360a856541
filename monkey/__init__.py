# Monkey language package
# This package provides a parser and tree-walking interpreter for the Monkey language.
from .interpreter import run_program, parse_program, Interpreter
from .environment import Environment
from .errors import MonkeyError, ParseErrors, EvaluatorFault

__all__ = [
    'run_program',
    'parse_program',
    'Interpreter',
    'Environment',
    'MonkeyError',
    'ParseErrors',
    'EvaluatorFault',
]
