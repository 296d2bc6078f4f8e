from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .api import CompileOptions, build_executable, compile_file
from .errors import BFSyntaxError
from .scaffold import MEMORY_SIZE
from .simulator import run_body


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfc",
        description="Compile Brainfuck source into a .NET executable via ilasm.",
        epilog="Exit status is 0 on success and 1 when a syntax, file or assembler error was reported.",
    )
    parser.add_argument("source", help="Brainfuck source file (<source>.txt is tried if it does not exist)")
    parser.add_argument("--strict", action="store_true", help="Reject a ']' that closes no open loop")
    parser.add_argument("--memory-size", type=int, default=MEMORY_SIZE,
                        help=f"Tape size in bytes (default {MEMORY_SIZE})")
    parser.add_argument("--ilasm", help="Path to the ilasm assembler")
    parser.add_argument("--keep-il", action="store_true", help="Keep the intermediate .il file")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--emit-il", action="store_true", help="Print the CIL program instead of assembling it")
    mode.add_argument("--run", action="store_true",
                      help="Simulate the generated code with stdin as input instead of assembling it")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log toolchain activity")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if not (args.emit_il or args.run):
        print("Brainfuck compiler")

    options = CompileOptions(
        strict=args.strict,
        memory_size=args.memory_size,
        ilasm=args.ilasm,
        keep_il=args.keep_il,
    )

    try:
        if args.emit_il:
            sys.stdout.write(compile_file(args.source, options=options).il_code)
        elif args.run:
            result = compile_file(args.source, options=options)
            sys.stdout.write(run_body(result.body, sys.stdin.read(), memory_size=args.memory_size))
            sys.stdout.flush()
        else:
            build_executable(args.source, options=options)
            print("Done")
    except BFSyntaxError as e:
        print(f"Syntax error: {e}")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        return 1
    return 0
