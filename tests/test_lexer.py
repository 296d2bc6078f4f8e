#!/usr/bin/env python3
"""
Tokenizer tests: run-length collapsing and comment elision.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfcil import OpCode, Token, tokenize
from bfcil.lexer import is_code_char


def test_run_collapses_to_single_token():
    for k in range(1, 20):
        tokens = tokenize('>' * k)
        assert tokens == [Token(OpCode.INC_PTR, k)]


def test_plus_run():
    assert tokenize("+++") == [Token(OpCode.INC_PTD, 3)]


def test_alternating_chars_are_not_merged():
    assert tokenize("+-+") == [
        Token(OpCode.INC_PTD, 1),
        Token(OpCode.DEC_PTD, 1),
        Token(OpCode.INC_PTD, 1),
    ]


def test_comments_are_elided_without_merging_runs():
    assert tokenize("+ hi +") == [Token(OpCode.INC_PTD, 1), Token(OpCode.INC_PTD, 1)]


def test_brackets_collapse_too():
    assert tokenize("[[-]]") == [
        Token(OpCode.BRANCH_START, 2),
        Token(OpCode.DEC_PTD, 1),
        Token(OpCode.BRANCH_END, 2),
    ]


def test_all_eight_operators():
    ops = [t.op for t in tokenize("><+-.,[]")]
    assert ops == [
        OpCode.INC_PTR, OpCode.DEC_PTR, OpCode.INC_PTD, OpCode.DEC_PTD,
        OpCode.WRITE, OpCode.READ, OpCode.BRANCH_START, OpCode.BRANCH_END,
    ]


def test_positions_point_at_run_start():
    tokens = tokenize("ab++\n..")
    assert [t.pos for t in tokens] == [2, 5]


def test_empty_and_comment_only_sources():
    assert tokenize("") == []
    assert tokenize("This is a comment only, no wait.") == [
        Token(OpCode.READ, 1),
        Token(OpCode.WRITE, 1),
    ]
    assert tokenize("hello world") == []


def test_is_code_char():
    assert all(is_code_char(c) for c in "><+-.,[]")
    assert not any(is_code_char(c) for c in "abc \n#!")


if __name__ == '__main__':
    test_run_collapses_to_single_token()
    test_plus_run()
    test_alternating_chars_are_not_merged()
    test_comments_are_elided_without_merging_runs()
    test_brackets_collapse_too()
    test_all_eight_operators()
    test_positions_point_at_run_start()
    test_empty_and_comment_only_sources()
    test_is_code_char()
    print("✓ lexer tests passed")
