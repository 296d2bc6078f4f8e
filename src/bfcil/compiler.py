import logging

from .errors import BFCError, InternalConsistencyError
from .lexer import OpCode, tokenize
from .ops_control import ControlFlowMixin
from .ops_io import IoOpsMixin
from .ops_memory import MemoryOpsMixin
from .scaffold import MEMORY_SIZE, emit_program
from .state import GenerationState
from .validator import check_brackets

logger = logging.getLogger(__name__)


class BrainfuckCompiler(MemoryOpsMixin, IoOpsMixin, ControlFlowMixin):
    """
    Brainfuck to CIL compiler

    Translates Brainfuck source into CIL assembly text for ilasm.

    Memory Layout (of the generated program):
    - Memory: static uint8[] of fixed capacity, allocated in .cctor
    - Counter: static int32 cursor into Memory, starts at 0

    Code Generation Strategy:
    - Runs of > < + - become a single add/sub with the run length as operand
    - Runs of . , [ ] are expanded into one block per character
    - Loops get a fresh BranchN label pair; open labels live on a stack
    """

    def __init__(self, program_name='Program', *, strict=False, memory_size=MEMORY_SIZE):
        self.strict = strict
        self.memory_size = memory_size
        self.state = GenerationState(program_name=program_name)
        self.tokens = []
        self.compiled = False

    @property
    def program_name(self):
        return self.state.program_name

    # ===== Main Compilation Pipeline =====

    def compile(self, source):
        """
        Main compilation method.

        Steps:
        1. Validate: check loop delimiters on the raw source
        2. Tokenize: collapse runs into tokens
        3. Generate: emit CIL for each token

        Args:
            source: Brainfuck source string

        Returns:
            The CIL instruction body (without the program scaffold)
        """
        self.state.reset()
        self.tokens = []
        self.compiled = False
        try:
            check_brackets(source, strict=self.strict)
            self.tokens = tokenize(source)
            logger.debug("%s: %d tokens", self.program_name, len(self.tokens))

            for token in self.tokens:
                self._process_token(token)

            if self.state.branch_stack:
                raise InternalConsistencyError(
                    message=f"Loops left open after generation: {', '.join(self.state.branch_stack)}"
                )
        except BFCError:
            # A failed run leaves nothing behind to wrap.
            self.state.reset()
            self.tokens = []
            raise

        self.compiled = True
        logger.debug("%s: %d loops emitted", self.program_name, self.state.branch_counter)
        return self.state.body

    def get_il_code(self):
        """Wrap the last compiled body in the program scaffold."""
        if not self.compiled:
            raise BFCError(message='No successfully compiled program to wrap; call compile() first.')
        return emit_program(self.state.body, self.program_name, memory_size=self.memory_size)

    def _process_token(self, token):
        op = token.op
        if op is OpCode.INC_PTR:
            self.increment_pointer(token.count)
        elif op is OpCode.DEC_PTR:
            self.decrement_pointer(token.count)
        elif op is OpCode.INC_PTD:
            self.increment_pointed_value(token.count)
        elif op is OpCode.DEC_PTD:
            self.decrement_pointed_value(token.count)
        elif op is OpCode.WRITE:
            for _ in range(token.count):
                self.write()
        elif op is OpCode.READ:
            for _ in range(token.count):
                self.read()
        elif op is OpCode.BRANCH_START:
            for _ in range(token.count):
                self.open_branch()
        elif op is OpCode.BRANCH_END:
            for _ in range(token.count):
                self.close_branch()
