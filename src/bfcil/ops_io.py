from __future__ import annotations


class IoOpsMixin:
    def write(self):
        self.state.emit(
            *self._load_cell_address(),
            "ldelem.u1",
            "stloc.0",
            "ldloc.0",
            "call       void [mscorlib]System.Console::Write(char)",
        )

    def read(self):
        # Console.Read returns -1 at end of input; conv.u1 narrows it to 255.
        self.state.emit(
            "call       int32 [mscorlib]System.Console::Read()",
            "stloc.0",
            *self._load_cell_address(),
            "ldloc.0",
            "conv.u1",
            "stelem.i1",
        )
