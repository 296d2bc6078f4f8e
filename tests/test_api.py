#!/usr/bin/env python3
"""
compile_string / compile_file / build_executable entry points.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfcil import (
    BFSyntaxError,
    CompileOptions,
    OpCode,
    ToolchainError,
    build_executable,
    compile_file,
    compile_string,
)


def test_compile_string_result():
    result = compile_string("++[>+<-].", options=CompileOptions(program_name="Demo"))
    assert result.program_name == "Demo"
    assert result.label_count == 1
    assert [t.op for t in result.tokens][:2] == [OpCode.INC_PTD, OpCode.BRANCH_START]
    assert result.body in result.il_code
    assert ".assembly 'Demo' {}" in result.il_code


def test_compile_string_defaults():
    result = compile_string("")
    assert result.program_name == "Program"
    assert result.body == ""
    assert result.tokens == []


def test_compile_file_names_program_after_file(tmp_path):
    src = tmp_path / "hello world.bf"
    src.write_text("+.")
    result = compile_file(src)
    assert result.program_name == "hello_world"
    assert "'hello_world'.Program::Memory" in result.body


def test_compile_file_falls_back_to_txt(tmp_path):
    (tmp_path / "prog.txt").write_text("[-]")
    result = compile_file(tmp_path / "prog")
    assert result.program_name == "prog"
    assert result.label_count == 1


def test_compile_file_explicit_name_wins(tmp_path):
    src = tmp_path / "x.bf"
    src.write_text("+")
    result = compile_file(src, options=CompileOptions(program_name="Named"))
    assert result.program_name == "Named"


def test_compile_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        compile_file(tmp_path / "nope.bf")


def test_compile_file_tolerates_non_ascii_comments(tmp_path):
    src = tmp_path / "u.bf"
    src.write_bytes("café +.".encode("utf-8"))
    assert compile_file(src).tokens[0].op is OpCode.INC_PTD


def test_strict_option():
    with pytest.raises(BFSyntaxError):
        compile_string("][", options=CompileOptions(strict=True))


def test_build_executable_without_assembler(tmp_path, monkeypatch):
    monkeypatch.setenv("BFCIL_ILASM", str(tmp_path / "missing-ilasm"))
    src = tmp_path / "a.bf"
    src.write_text("+.")
    with pytest.raises(ToolchainError):
        build_executable(src)
    assert not (tmp_path / "a.il").exists()
