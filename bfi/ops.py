"""Operation model for the tape language.

A parsed program is a flat sequence of :class:`Operation` values. Each
operation records its instruction kind, how many identical source
characters were folded into it and where in the source it ended. The
set of kinds is closed: the interpreter dispatches over exactly the
eight members of :class:`OpKind`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple


class OpKind(Enum):
    ADD = '+'
    SUB = '-'
    FORWARD = '>'
    BACK = '<'
    INPUT = ','
    OUTPUT = '.'
    LOOP = '['
    ENDLOOP = ']'

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def foldable(self) -> bool:
        return self in _FOLDABLE

    @property
    def label(self) -> str:
        """Name used in diagnostics and JSON, e.g. ``Endloop``."""
        return self.name.capitalize()

    @staticmethod
    def from_symbol(symbol: str) -> 'OpKind':
        return OpKind(symbol)

    @staticmethod
    def from_label(label: str) -> 'OpKind':
        try:
            return OpKind[label.upper()]
        except KeyError:
            raise ValueError(f'unknown operation kind {label!r}') from None


_FOLDABLE = frozenset({OpKind.ADD, OpKind.SUB, OpKind.FORWARD, OpKind.BACK})


@dataclass(frozen=True)
class Operation:
    """One parsed instruction.

    `position` is the zero-based offset of the last source character
    consumed for this operation and is only used for diagnostics.
    """
    kind: OpKind
    repeat: int = 1
    position: int = 0

    def __post_init__(self):
        if self.repeat < 1:
            raise ValueError(f'repeat must be positive, got {self.repeat}')
        if self.repeat != 1 and not self.kind.foldable:
            raise ValueError(f'{self.kind.label} cannot carry a repeat count')

    def __repr__(self) -> str:
        if self.repeat > 1:
            return f"{self.kind.label} x{self.repeat} @{self.position}"
        return f"{self.kind.label} @{self.position}"


@dataclass(frozen=True)
class Program:
    """An immutable, index-addressable sequence of operations."""
    ops: Tuple[Operation, ...] = ()

    def __len__(self) -> int:
        return len(self.ops)

    def __getitem__(self, index: int) -> Operation:
        return self.ops[index]

    def __iter__(self) -> Iterator[Operation]:
        return iter(self.ops)

    @property
    def kinds(self) -> Tuple[OpKind, ...]:
        return tuple(op.kind for op in self.ops)

    def bracket_balance(self) -> int:
        """Return the running `[`/`]` counter after the whole program."""
        balance = 0
        for op in self.ops:
            if op.kind is OpKind.LOOP:
                balance += 1
            elif op.kind is OpKind.ENDLOOP:
                balance -= 1
        return balance
