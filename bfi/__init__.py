# bf interpreter package
# This package provides a parser and interpreter for the eight-instruction tape language.
from .errors import Fault, SyntaxFault, BoundsFault, format_diagnostic, report
from .ops import OpKind, Operation, Program
from .parser import parse, parse_program
from .interpreter import DEFAULT_MEMORY, Interpreter, run, run_program

__all__ = [
    'parse',
    'parse_program',
    'run',
    'run_program',
    'Interpreter',
    'DEFAULT_MEMORY',
    'OpKind',
    'Operation',
    'Program',
    'Fault',
    'SyntaxFault',
    'BoundsFault',
    'format_diagnostic',
    'report',
]
