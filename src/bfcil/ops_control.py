from __future__ import annotations

from .errors import InternalConsistencyError


class ControlFlowMixin:
    def open_branch(self):
        name = self.state.next_label()
        self.state.branch_stack.append(name)

        self.state.emit(
            f"BranchStart{name}: nop",
            *self._load_cell_address(),
            "ldelem.u1",
            "stloc.0",
            "ldloc.0",
            f"brfalse BranchEnd{name}",
        )

    def close_branch(self):
        if not self.state.branch_stack:
            raise InternalConsistencyError(
                message='Loop end without an open loop (label stack is empty).'
            )
        name = self.state.branch_stack.pop()
        self.state.emit(
            f"br BranchStart{name}",
            f"BranchEnd{name}: nop",
        )
