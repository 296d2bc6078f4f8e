"""Program scaffold around a generated instruction body.

The emitted text is CIL assembly for ilasm: one `Program` class holding a
static byte array `Memory` (the tape) and a static int32 `Counter` (the
cursor). Memory is allocated by the static constructor and the instruction
body runs inside `Main`, which declares the single `char` local the body
uses as scratch.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Union

# Tape capacity in bytes.
MEMORY_SIZE = 0x26e8f0


def cil_name(name: str) -> str:
    """Single-quote a name so ilasm never reads it as a keyword (add, nop, class...)."""
    return "'" + name.replace('\\', '\\\\').replace("'", "\\'") + "'"


def program_name_for(path: Union[str, Path]) -> str:
    """Derive a program/assembly name from a source file path."""
    name = Path(path).stem.replace(' ', '_')
    name = re.sub(r'[^A-Za-z0-9_]', '_', name)
    if not name:
        return 'Program'
    if name[0].isdigit():
        name = '_' + name
    return name


def emit_program(instruction_body: str, program_name: str, *, memory_size: int = MEMORY_SIZE) -> str:
    if memory_size <= 0:
        raise ValueError(f"memory_size must be positive, got {memory_size}")

    name = cil_name(program_name)
    module = cil_name(program_name + ".exe")
    return (
        ".assembly extern mscorlib\n"
        "{\n"
        "  auto\n"
        "}\n"
        f".assembly {name} {{}}\n"
        f".module {module}\n"
        "\n"
        f".class private auto ansi beforefieldinit {name}.Program\n"
        "       extends [mscorlib]System.Object\n"
        "{\n"
        "  .field private static initonly uint8[] Memory\n"
        "  .field private static int32 Counter\n"
        "\n"
        "  .method public hidebysig specialname rtspecialname\n"
        "          instance void  .ctor() cil managed\n"
        "  {\n"
        "    .maxstack  8\n"
        "    ldarg.0\n"
        "    call       instance void [mscorlib]System.Object::.ctor()\n"
        "    nop\n"
        "    ret\n"
        "  }\n"
        "\n"
        "  .method private hidebysig specialname rtspecialname static\n"
        "          void  .cctor() cil managed\n"
        "  {\n"
        "    .maxstack  8\n"
        f"    ldc.i4     {memory_size:#x}\n"
        "    newarr     [mscorlib]System.Byte\n"
        f"    stsfld     uint8[] {name}.Program::Memory\n"
        "    ret\n"
        "  }\n"
        "\n"
        "  .method private hidebysig static void  Main(string[] args) cil managed\n"
        "  {\n"
        "    .entrypoint\n"
        "    .maxstack  8\n"
        "    .locals init ([0] char c)\n"
        "\n"
        f"{instruction_body}"
        "    ret\n"
        "  }\n"
        "}\n"
    )
