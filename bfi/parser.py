"""Parser for the tape language.

Source text is tokenized by a Lark parser whose terminals match whole
runs of a foldable symbol (`+`, `-`, `>`, `<`) or a single structural
symbol (`.`, `,`, `[`, `]`). Every other character is ignored. The
resulting tokens are turned into :class:`~bfi.ops.Operation` values by
a transformer, folding each run into a single operation whose repeat
count is the run length.

Bracket balance is checked by counting: the program is rejected when
the numbers of `[` and `]` differ.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Token, Transformer

from .errors import SyntaxFault
from .ops import Operation, OpKind, Program


BF_GRAMMAR = r"""
    start: _op*

    _op: ADD | SUB | FORWARD | BACK | INPUT | OUTPUT | LOOP | ENDLOOP

    ADD: /\++/
    SUB: /-+/
    FORWARD: />+/
    BACK: /<+/
    INPUT: ","
    OUTPUT: "."
    LOOP: "["
    ENDLOOP: "]"

    COMMENT: /[^+\-<>.,\[\]]+/
    %ignore COMMENT
"""


BF_PARSER = Lark(
    BF_GRAMMAR,
    parser='lalr',
    lexer='basic',
    maybe_placeholders=False,
)


TOKEN_KINDS = {
    'ADD': OpKind.ADD,
    'SUB': OpKind.SUB,
    'FORWARD': OpKind.FORWARD,
    'BACK': OpKind.BACK,
    'INPUT': OpKind.INPUT,
    'OUTPUT': OpKind.OUTPUT,
    'LOOP': OpKind.LOOP,
    'ENDLOOP': OpKind.ENDLOOP,
}


class OpTransformer(Transformer):
    """Turns the flat token tree into a Program."""

    def start(self, tokens: List[Token]) -> Program:
        return Program(tuple(self.token_to_op(tok) for tok in tokens))

    @staticmethod
    def token_to_op(tok: Token) -> Operation:
        kind = TOKEN_KINDS[tok.type]
        # end_pos is exclusive; position names the last character of the run
        return Operation(kind, len(tok), tok.end_pos - 1)


def parse_program(source: str) -> Program:
    """Parse source text into a Program.

    Raises SyntaxFault (without a position) when the bracket counts do
    not balance; such a program is never returned.
    """
    tree = BF_PARSER.parse(source)
    program = OpTransformer().transform(tree)
    if program.bracket_balance() != 0:
        raise SyntaxFault.unmatched_braces()
    return program


parse = parse_program
