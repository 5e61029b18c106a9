"""Interactive session: accumulate source lines and run them on request.

Commands are whole lines: ``R`` runs the buffer, ``X`` clears it and
``Q`` quits. Any other line is appended to the buffer. Every run starts
from a zeroed tape; a bounds fault is reported and the session carries
on, while unbalanced brackets end the session like they end a batch run.
"""

from __future__ import annotations

import sys
from typing import Any, List, Optional

from .byte_io import ByteSink
from .interpreter import DEFAULT_MEMORY, run
from .parser import parse_program
from .errors import SyntaxFault, report

BANNER = (
    "bf repl\n"
    "write R and hit enter to run the code\n"
    "write X and to clear the program\n"
    "write Q and hit enter to quit\n\n"
)


class Repl:
    def __init__(self, capacity: int = DEFAULT_MEMORY, stdin: Optional[Any] = None,
                 stdout: Optional[Any] = None, stderr: Optional[Any] = None,
                 debug_level: int = 0):
        self.capacity = capacity
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr
        self.debug_level = debug_level
        self.sink = ByteSink(stdout)
        self.buffer: List[str] = []

    @property
    def source(self) -> str:
        return ''.join(self.buffer)

    def write(self, text: str) -> None:
        self.sink.write_text(text)

    def readline(self) -> Optional[str]:
        stream = self.stdin if self.stdin is not None else sys.stdin
        line = stream.readline()
        if not line:
            return None
        if isinstance(line, bytes):
            line = line.decode('latin-1')
        return line.strip()

    def run_buffer(self) -> None:
        try:
            program = parse_program(self.source)
        except SyntaxFault as e:
            report(e, interactive=True, stream=self.stderr)
            return
        # program input shares the line stream
        stdin = self.stdin if self.stdin is not None else sys.stdin
        run(program, interactive=True, capacity=self.capacity, stdin=stdin,
            stdout=self.stdout, debug_level=self.debug_level, stderr=self.stderr)

    def handle(self, line: str) -> bool:
        """Process one input line. Returns False when the session should end."""
        if line == 'Q':
            self.write("QUIT\n")
            return False
        if line == 'R':
            self.write("RUN\n")
            self.run_buffer()
            self.write("\nEND\n\n")
        elif line == 'X':
            self.write("CLEAR\n\n")
            self.buffer.clear()
        else:
            self.buffer.append(line)
        return True

    def run(self) -> int:
        self.write(BANNER)
        while True:
            line = self.readline()
            if line is None:
                break
            if not self.handle(line):
                break
        return 0