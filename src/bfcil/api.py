from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional

from .compiler import BrainfuckCompiler
from .lexer import Token
from .scaffold import MEMORY_SIZE, program_name_for
from .toolchain import assemble


@dataclass(frozen=True)
class CompileOptions:
    program_name: Optional[str] = None
    strict: bool = False
    memory_size: int = MEMORY_SIZE
    ilasm: Optional[str] = None
    keep_il: bool = False


@dataclass(frozen=True)
class CompileResult:
    il_code: str
    body: str
    program_name: str
    tokens: List[Token]
    label_count: int


def compile_string(source: str, *, options: Optional[CompileOptions] = None) -> CompileResult:
    options = options or CompileOptions()
    name = options.program_name or 'Program'
    compiler = BrainfuckCompiler(name, strict=options.strict, memory_size=options.memory_size)
    body = compiler.compile(source)
    return CompileResult(
        il_code=compiler.get_il_code(),
        body=body,
        program_name=name,
        tokens=list(compiler.tokens),
        label_count=compiler.state.branch_counter,
    )


def resolve_source(path: str | Path) -> Path:
    """Return the source path, falling back to `<path>.txt` when it does not exist."""
    p = Path(path)
    if not p.exists():
        txt = p.with_name(p.name + '.txt')
        if txt.is_file():
            return txt
    return p


def compile_file(path: str | Path, *, options: Optional[CompileOptions] = None,
                 encoding: str = "ascii") -> CompileResult:
    options = options or CompileOptions()
    p = resolve_source(path)
    # Undecodable bytes can only appear in comments.
    source = p.read_text(encoding=encoding, errors='replace')
    if options.program_name is None:
        options = replace(options, program_name=program_name_for(p))
    return compile_string(source, options=options)


def build_executable(path: str | Path, *, options: Optional[CompileOptions] = None) -> Path:
    """Compile a source file and assemble it into `<source stem>.exe` next to it."""
    options = options or CompileOptions()
    result = compile_file(path, options=options)
    p = resolve_source(path)
    return assemble(result.il_code, p.with_suffix(''), ilasm=options.ilasm, keep_il=options.keep_il)
