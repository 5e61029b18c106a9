"""JSON serialization for parsed programs.

A Program is stored as ``{"version": 1, "ops": [...]}`` where each
entry carries the operation kind label, repeat count and source
position. Loading re-checks the entries and the bracket count, so a
hand-edited file cannot hand the interpreter an unbalanced program.
"""

from __future__ import annotations

from typing import Any, Dict

from .errors import SyntaxFault
from .ops import Operation, OpKind, Program

FORMAT_VERSION = 1


def op_to_obj(op: Operation) -> Dict[str, Any]:
    return {"kind": op.kind.label, "repeat": op.repeat, "position": op.position}


def op_from_obj(o: Dict[str, Any]) -> Operation:
    if not isinstance(o, dict) or not isinstance(o.get("kind"), str):
        raise ValueError(f"malformed operation entry: {o!r}")
    repeat = o.get("repeat", 1)
    position = o.get("position", 0)
    if not isinstance(repeat, int) or not isinstance(position, int):
        raise ValueError(f"repeat and position must be integers: {o!r}")
    return Operation(OpKind.from_label(o["kind"]), repeat, position)


def program_to_obj(program: Program) -> Dict[str, Any]:
    return {"version": FORMAT_VERSION, "ops": [op_to_obj(op) for op in program]}


def program_from_obj(data: Any) -> Program:
    if not isinstance(data, dict) or not isinstance(data.get("ops"), list):
        raise ValueError("expected an object with an 'ops' list")
    if data.get("version", FORMAT_VERSION) != FORMAT_VERSION:
        raise ValueError(f"unsupported ops format version {data.get('version')!r}")
    program = Program(tuple(op_from_obj(o) for o in data["ops"]))
    if program.bracket_balance() != 0:
        raise SyntaxFault.unmatched_braces()
    return program
