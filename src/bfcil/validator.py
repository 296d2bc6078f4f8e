from __future__ import annotations

from typing import List

from .errors import make_syntax_error

MISSING_BRACKETS = 'There are some missing square brackets.'


def check_brackets(source: str, *, strict: bool = False) -> None:
    """
    Check loop delimiters over the raw character stream.

    The default check only compares the number of "[" and "]" characters,
    so an ordering such as "][" passes. With strict=True every "]" must close
    an open "[" at the point it appears, and the error points at the
    offending bracket.
    """
    if strict:
        _check_nesting(source)
        return

    branches = 0
    for c in source:
        if c == '[':
            branches += 1
        elif c == ']':
            branches -= 1

    if branches != 0:
        raise make_syntax_error(message=MISSING_BRACKETS, source=source)


def _check_nesting(source: str) -> None:
    open_positions: List[int] = []
    for pos, c in enumerate(source):
        if c == '[':
            open_positions.append(pos)
        elif c == ']':
            if not open_positions:
                raise make_syntax_error(message='Unmatched "]"', source=source, pos=pos)
            open_positions.pop()

    if open_positions:
        raise make_syntax_error(message='Unclosed "["', source=source, pos=open_positions[-1])
