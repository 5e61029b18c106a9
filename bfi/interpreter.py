"""Execution engine for the tape language.

The interpreter owns a fixed-length tape of integer cells, a cursor
into it and an instruction pointer into the parsed program. Cells are
unbounded Python ints: arithmetic never wraps, and a value is reduced
modulo 256 only when it is written out. Loop targets are found by
scanning the program with a bracket counter each time a jump is taken.
"""

from __future__ import annotations

from typing import Any, List, Optional

from .byte_io import ByteSink, ByteSource
from .errors import BoundsFault, Fault, SyntaxFault, report
from .ops import OpKind, Program
from .parser import parse_program

DEFAULT_MEMORY = 2000


class Interpreter:
    """Runs a Program against a fresh tape."""
    def __init__(self, capacity: int = DEFAULT_MEMORY, stdin: Optional[Any] = None,
                 stdout: Optional[Any] = None, debug_level: int = 0,
                 debug_file: str = 'debug.txt'):
        if capacity < 1:
            raise ValueError(f'capacity must be positive, got {capacity}')
        self.capacity = capacity
        self.source = ByteSource(stdin)
        self.sink = ByteSink(stdout)
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None
        self.tape: List[int] = []
        self.cursor = 0
        self.ip = 0

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def reset(self):
        self.tape = [0] * self.capacity
        self.cursor = 0
        self.ip = 0

    # Public API
    def run(self, program: Program) -> None:
        """Execute `program` from a zeroed tape.

        Raises BoundsFault when the cursor leaves the tape and SyntaxFault
        when a loop has no partner to jump to.
        """
        self.reset()
        if self.debug_level > 0 and self.debug_fp is None:
            self.debug_fp = open(self.debug_file, 'w', encoding='utf-8')
        try:
            self.debug(f"run {len(program)} ops, capacity {self.capacity}")
            while self.ip < len(program):
                self.step(program)
                self.ip += 1
            self.debug(f"halt cursor={self.cursor}")
        except Fault as e:
            self.debug(f"fault: {e}")
            raise
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def step(self, program: Program) -> None:
        op = program[self.ip]
        if self.debug_level >= 3:
            self.debug(f"ip={self.ip} {op!r} cursor={self.cursor} cell={self.tape[self.cursor]}")
        kind = op.kind
        if kind is OpKind.ADD:
            self.tape[self.cursor] += op.repeat
        elif kind is OpKind.SUB:
            self.tape[self.cursor] -= op.repeat
        elif kind is OpKind.FORWARD:
            cursor = self.cursor + op.repeat
            if cursor >= self.capacity:
                raise BoundsFault.overflow(op.position)
            self.cursor = cursor
        elif kind is OpKind.BACK:
            cursor = self.cursor - op.repeat
            if cursor < 0:
                raise BoundsFault.underflow(op.position)
            self.cursor = cursor
        elif kind is OpKind.INPUT:
            self.tape[self.cursor] = self.source.read_byte()
        elif kind is OpKind.OUTPUT:
            self.sink.write_byte(self.tape[self.cursor] % 256)
        elif kind is OpKind.LOOP:
            if self.tape[self.cursor] == 0:
                self.ip = self.find_endloop(program, self.ip)
        elif kind is OpKind.ENDLOOP:
            if self.tape[self.cursor] != 0:
                self.ip = self.find_loop(program, self.ip)

    def find_endloop(self, program: Program, start: int) -> int:
        depth = 1
        ip = start
        while depth > 0:
            ip += 1
            if ip >= len(program):
                raise SyntaxFault.unmatched_braces(program[start].position)
            kind = program[ip].kind
            if kind is OpKind.LOOP:
                depth += 1
            elif kind is OpKind.ENDLOOP:
                depth -= 1
        if self.debug_level >= 2:
            self.debug(f"skip loop {start} -> {ip}")
        return ip

    def find_loop(self, program: Program, start: int) -> int:
        depth = 1
        ip = start
        while depth > 0:
            ip -= 1
            if ip < 0:
                raise SyntaxFault.unmatched_braces(program[start].position)
            kind = program[ip].kind
            if kind is OpKind.ENDLOOP:
                depth += 1
            elif kind is OpKind.LOOP:
                depth -= 1
        if self.debug_level >= 2:
            self.debug(f"repeat loop {start} -> {ip}")
        return ip


def run(program: Program, interactive: bool = False, capacity: int = DEFAULT_MEMORY,
        stdin: Optional[Any] = None, stdout: Optional[Any] = None,
        debug_level: int = 0, stderr: Optional[Any] = None) -> Optional[Fault]:
    """Run `program` on a fresh tape, reporting any fault.

    A fault that is fatal in this mode exits the process with status 1.
    Otherwise the fault is returned so the caller can abandon the run.
    """
    interpreter = Interpreter(capacity, stdin=stdin, stdout=stdout, debug_level=debug_level)
    try:
        interpreter.run(program)
    except Fault as e:
        report(e, interactive, stream=stderr)
        return e
    return None


def run_program(source: str, capacity: int = DEFAULT_MEMORY, stdin: Optional[Any] = None,
                stdout: Optional[Any] = None, debug_level: int = 0) -> Interpreter:
    """Convenience function to parse and run source text, returning the interpreter."""
    program = parse_program(source)
    interpreter = Interpreter(capacity, stdin=stdin, stdout=stdout, debug_level=debug_level)
    interpreter.run(program)
    return interpreter
