from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class GenerationState:
    program_name: str
    il_code: List[str] = field(default_factory=list)
    branch_stack: List[str] = field(default_factory=list)
    branch_counter: int = 0

    def reset(self) -> None:
        self.il_code.clear()
        self.branch_stack.clear()
        self.branch_counter = 0

    def next_label(self) -> str:
        # Never reused within a run, even after the loop is closed.
        name = f"Branch{self.branch_counter}"
        self.branch_counter += 1
        return name

    def emit(self, *lines: str) -> None:
        self.il_code.append('\n'.join(lines) + '\n\n')

    @property
    def body(self) -> str:
        return ''.join(self.il_code)
