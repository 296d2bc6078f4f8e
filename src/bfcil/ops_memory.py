from __future__ import annotations

from .scaffold import cil_name


class MemoryOpsMixin:
    def _memory_field(self):
        return f"uint8[] {cil_name(self.state.program_name)}.Program::Memory"

    def _counter_field(self):
        return f"int32 {cil_name(self.state.program_name)}.Program::Counter"

    def _load_cell_address(self):
        return (
            f"ldsfld     {self._memory_field()}",
            f"ldsfld     {self._counter_field()}",
        )

    def _change_pointer(self, count, instr):
        self.state.emit(
            f"ldsfld     {self._counter_field()}",
            f"ldc.i4 {count}",
            instr,
            f"stsfld {self._counter_field()}",
        )

    def _change_pointed_value(self, count, instr):
        # ldelema + dup lets a single element address serve both the load
        # and the store; conv.u1 wraps the result to a byte.
        self.state.emit(
            *self._load_cell_address(),
            "ldelema    [mscorlib]System.Byte",
            "dup",
            "ldind.u1",
            f"ldc.i4 {count}",
            instr,
            "conv.u1",
            "stind.i1",
        )

    def increment_pointer(self, count):
        self._change_pointer(count, "add")

    def decrement_pointer(self, count):
        self._change_pointer(count, "sub")

    def increment_pointed_value(self, count):
        self._change_pointed_value(count, "add")

    def decrement_pointed_value(self, count):
        self._change_pointed_value(count, "sub")
