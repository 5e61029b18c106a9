import sys
from typing import NoReturn, Optional, TextIO

PROGRAM_NAME = 'bf'


def format_diagnostic(message: str, position: Optional[int] = None) -> str:
    if position is None:
        return f"error: {message}"
    return f"error at character position {position}: {message}"


class Fault(Exception):
    """Base class for faults raised while parsing or running a program."""
    always_fatal = False

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(format_diagnostic(message, position))
        self.message = message
        self.position = position

    def is_fatal(self, interactive: bool) -> bool:
        return self.always_fatal or not interactive


class SyntaxFault(Fault):
    """Unbalanced brackets. Fatal in every mode."""
    always_fatal = True

    @classmethod
    def unmatched_braces(cls, position: Optional[int] = None) -> 'SyntaxFault':
        return cls('unmatched braces in program', position)


class BoundsFault(Fault):
    """The cursor left the tape. Fatal only outside an interactive session."""

    @classmethod
    def overflow(cls, position: int) -> 'BoundsFault':
        return cls('memory overflow', position)

    @classmethod
    def underflow(cls, position: int) -> 'BoundsFault':
        return cls('memory underflow', position)


def warn(message: str, stream: Optional[TextIO] = None) -> None:
    out = stream if stream is not None else sys.stderr
    print(f"{PROGRAM_NAME}: warning: {message}", file=out)


def report(fault: Fault, interactive: bool, stream: Optional[TextIO] = None) -> None:
    """Write the diagnostic for `fault` and exit if it is fatal in this mode.

    In an interactive session a recoverable fault only prints; the caller
    drops the current run and keeps accepting input.
    """
    out = stream if stream is not None else sys.stderr
    print(f"{PROGRAM_NAME}: {format_diagnostic(fault.message, fault.position)}", file=out)
    if fault.is_fatal(interactive):
        sys.exit(1)


def fail(message: str, stream: Optional[TextIO] = None) -> NoReturn:
    """Report a front-end error (bad file, bad flag) and exit with status 1."""
    out = stream if stream is not None else sys.stderr
    print(f"{PROGRAM_NAME}: {format_diagnostic(message)}", file=out)
    sys.exit(1)
