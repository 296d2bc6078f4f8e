from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class OpCode(Enum):
    INC_PTR = '>'
    DEC_PTR = '<'
    INC_PTD = '+'
    DEC_PTD = '-'
    WRITE = '.'
    READ = ','
    BRANCH_START = '['
    BRANCH_END = ']'


OPCODES: Dict[str, OpCode] = {op.value: op for op in OpCode}


@dataclass(frozen=True)
class Token:
    op: OpCode
    count: int = 1
    # Offset of the first character of the run; diagnostics only.
    pos: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f"{self.op.name}({self.count})"


def is_code_char(ch: str) -> bool:
    return ch in OPCODES


def tokenize(source: str) -> List[Token]:
    """
    Collapse the source into run-length encoded tokens.

    Each run of identical operator characters becomes one Token carrying the
    run length. Brackets are collapsed too: "[[" is BRANCH_START(2).
    Anything outside the operator alphabet is a comment and is skipped.
    """
    tokens: List[Token] = []
    i = 0
    n = len(source)
    while i < n:
        ch = source[i]
        op = OPCODES.get(ch)
        if op is None:
            i += 1
            continue

        j = i + 1
        while j < n and source[j] == ch:
            j += 1
        tokens.append(Token(op, j - i, i))
        i = j

    return tokens
