"""Minimal simulator for generated instruction bodies.

Executes the CIL subset that BrainfuckCompiler emits, over a bytearray tape,
so compiled programs can be checked without a .NET toolchain. It is not a
general CIL interpreter: the only field references it understands are
`'<name>'.Program::Memory` and `'<name>'.Program::Counter`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .errors import SimulationError
from .scaffold import MEMORY_SIZE

DEFAULT_MAX_STEPS = 10_000_000


@dataclass(frozen=True)
class _Address:
    index: int


_MEMORY = object()


def _int32(v: int) -> int:
    v &= 0xFFFFFFFF
    return v - 0x100000000 if v & 0x80000000 else v


def parse_body(body: str) -> Tuple[List[Tuple[str, str]], Dict[str, int]]:
    """Split an instruction body into (opcode, operand) pairs and a label table."""
    program: List[Tuple[str, str]] = []
    labels: Dict[str, int] = {}
    for raw in body.split('\n'):
        line = raw.strip()
        if not line:
            continue
        parts = line.split(None, 1)
        if parts[0].endswith(':'):
            labels[parts[0][:-1]] = len(program)
            if len(parts) == 1:
                continue
            parts = parts[1].split(None, 1)
        program.append((parts[0], parts[1].strip() if len(parts) > 1 else ''))
    return program, labels


class ILSimulator:
    def __init__(self, memory_size: int = MEMORY_SIZE, max_steps: int = DEFAULT_MAX_STEPS) -> None:
        self.memory = bytearray(memory_size)
        self.counter = 0
        self.local = 0
        self.max_steps = max_steps
        self.steps = 0
        self.output: List[str] = []
        self._input = ''
        self._input_pos = 0

    def _read_char(self) -> int:
        if self._input_pos >= len(self._input):
            return -1
        ch = self._input[self._input_pos]
        self._input_pos += 1
        return ord(ch)

    def _check_index(self, idx: int, pc: int) -> int:
        if not 0 <= idx < len(self.memory):
            raise SimulationError(message=f"Memory index {idx} out of range", pc=pc)
        return idx

    def _field(self, operand: str, pc: int) -> str:
        if operand.endswith('::Memory'):
            return 'Memory'
        if operand.endswith('::Counter'):
            return 'Counter'
        raise SimulationError(message=f"Unknown field {operand!r}", pc=pc)

    def run(self, body: str, input_data: str = '') -> str:
        program, labels = parse_body(body)
        self._input = input_data
        self._input_pos = 0
        stack: list = []

        def pop(pc):
            if not stack:
                raise SimulationError(message='Evaluation stack underflow', pc=pc)
            return stack.pop()

        def jump(target, pc):
            if target not in labels:
                raise SimulationError(message=f"Unknown label {target!r}", pc=pc)
            return labels[target]

        pc = 0
        while pc < len(program):
            self.steps += 1
            if self.steps > self.max_steps:
                raise SimulationError(message=f"Step limit of {self.max_steps} exceeded", pc=pc)

            op, arg = program[pc]
            next_pc = pc + 1

            if op == 'nop':
                pass
            elif op == 'ret':
                break
            elif op == 'ldsfld':
                stack.append(_MEMORY if self._field(arg, pc) == 'Memory' else self.counter)
            elif op == 'stsfld':
                if self._field(arg, pc) != 'Counter':
                    raise SimulationError(message='Memory field is read-only', pc=pc)
                self.counter = _int32(pop(pc))
            elif op == 'ldc.i4':
                stack.append(_int32(int(arg, 0)))
            elif op in ('add', 'sub'):
                b = pop(pc)
                a = pop(pc)
                stack.append(_int32(a + b if op == 'add' else a - b))
            elif op == 'conv.u1':
                stack.append(pop(pc) & 0xFF)
            elif op == 'dup':
                v = pop(pc)
                stack.extend((v, v))
            elif op == 'ldelema':
                idx = pop(pc)
                pop(pc)
                stack.append(_Address(self._check_index(idx, pc)))
            elif op == 'ldind.u1':
                stack.append(self.memory[pop(pc).index])
            elif op == 'stind.i1':
                v = pop(pc)
                self.memory[pop(pc).index] = v & 0xFF
            elif op == 'ldelem.u1':
                idx = pop(pc)
                pop(pc)
                stack.append(self.memory[self._check_index(idx, pc)])
            elif op == 'stelem.i1':
                v = pop(pc)
                idx = pop(pc)
                pop(pc)
                self.memory[self._check_index(idx, pc)] = v & 0xFF
            elif op == 'stloc.0':
                # The local is declared as char.
                self.local = pop(pc) & 0xFFFF
            elif op == 'ldloc.0':
                stack.append(self.local)
            elif op == 'call':
                if arg.endswith('Console::Write(char)'):
                    self.output.append(chr(pop(pc)))
                elif arg.endswith('Console::Read()'):
                    stack.append(self._read_char())
                else:
                    raise SimulationError(message=f"Unsupported call {arg!r}", pc=pc)
            elif op == 'brfalse':
                if pop(pc) == 0:
                    next_pc = jump(arg, pc)
            elif op == 'br':
                next_pc = jump(arg, pc)
            else:
                raise SimulationError(message=f"Unsupported instruction {op!r}", pc=pc)

            pc = next_pc

        return ''.join(self.output)


def run_body(body: str, input_data: str = '', *, memory_size: int = MEMORY_SIZE,
             max_steps: int = DEFAULT_MAX_STEPS) -> str:
    return ILSimulator(memory_size=memory_size, max_steps=max_steps).run(body, input_data)
