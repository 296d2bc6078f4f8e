
from .compiler import BrainfuckCompiler
from .lexer import OpCode, Token, tokenize
from .validator import check_brackets
from .scaffold import MEMORY_SIZE, emit_program, program_name_for
from .errors import BFCError, BFSyntaxError, InternalConsistencyError, SimulationError, ToolchainError
from .api import CompileOptions, CompileResult, build_executable, compile_file, compile_string

__all__ = [
    'BrainfuckCompiler',
    'OpCode',
    'Token',
    'tokenize',
    'check_brackets',
    'MEMORY_SIZE',
    'emit_program',
    'program_name_for',
    'BFCError',
    'BFSyntaxError',
    'InternalConsistencyError',
    'SimulationError',
    'ToolchainError',
    'CompileOptions',
    'CompileResult',
    'compile_string',
    'compile_file',
    'build_executable',
]
