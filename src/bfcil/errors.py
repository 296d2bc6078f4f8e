from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


def _line_col(source: str, pos: int) -> Tuple[int, int]:
    pos = max(0, min(pos, len(source)))
    line = source.count('\n', 0, pos) + 1
    col = pos - (source.rfind('\n', 0, pos) + 1) + 1
    return line, col


def _build_context(lines: List[str], line_no_1: int, col_1: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (col_1 - 1)}^")
    return "\n".join(out)


def _hint_for(message: str) -> Optional[str]:
    msg = message.lower()
    if 'unmatched' in msg and ']' in msg:
        return 'This "]" closes no open loop. Remove it or add a "[" before it.'
    if 'unclosed' in msg:
        return 'Add a matching "]" after the loop body.'
    if 'missing square brackets' in msg:
        return 'Every "[" needs a matching "]". Compile with --strict to locate the culprit.'
    return None


@dataclass
class BFCError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFSyntaxError(BFCError):
    line: int = 0
    column: int = 0
    context: str = ''


@dataclass
class InternalConsistencyError(BFCError):
    pass


@dataclass
class ToolchainError(BFCError):
    pass


@dataclass
class SimulationError(BFCError):
    pc: int = -1


def make_syntax_error(*, message: str, source: str, pos: Optional[int] = None) -> BFSyntaxError:
    """Build a syntax error; with a position it carries a source excerpt."""
    hint = _hint_for(message)
    hint_block = f"\nHint: {hint}" if hint else ""
    if pos is None:
        return BFSyntaxError(message=f"{message}{hint_block}")

    line, col = _line_col(source, pos)
    ctx = _build_context(source.split('\n'), line, col)
    return BFSyntaxError(
        message=f"{message} (line {line}, column {col})\n{ctx}{hint_block}",
        line=line,
        column=col,
        context=ctx,
    )
