"""
AEOLIS Machine
==============

Responsibilities:
- Own the variable store, binding accumulator and call queue
- Run `_entry` synchronously, then drain the queue
- Dispatch dequeued calls to intrinsics or to user functions
- Detect deadlock

Execution is single-threaded. A `call` inside a function body only
appends to the shared queue; it never recurses into execution.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Union

from aeolis.errors import Deadlocked, DispatchLimitExceeded
from aeolis.il.contract import ENTRY_FUNCTION, Binding, PendingCall
from aeolis.il.parser import parse_program
from aeolis.il.registry import FunctionRegistry
from aeolis.runtime.commands import execute_instruction
from aeolis.runtime.intrinsics import resolve_intrinsic, run_intrinsic
from aeolis.runtime.scheduler import CallQueue, ScanStatus
from aeolis.runtime.store import VariableStore


logger = logging.getLogger(__name__)


class MachineState(str, Enum):
    INITIALIZING = "initializing"
    RUNNING = "running"
    DRAINING = "draining"
    HALTED = "halted"
    DEADLOCKED = "deadlocked"
    FAILED = "failed"


TERMINAL_STATES = (MachineState.HALTED, MachineState.DEADLOCKED, MachineState.FAILED)


class Machine:
    def __init__(
        self,
        registry: FunctionRegistry,
        *,
        emit: Optional[Callable[[Any], None]] = None,
        max_dispatches: int = 0,
    ) -> None:
        self.state = MachineState.INITIALIZING
        self.registry = registry
        self.registry.require_entry()

        self.store = VariableStore()
        self.queue = CallQueue()
        self.bindlist: List[Binding] = []

        self.output: List[Any] = []
        self._emit = emit
        self.max_dispatches = max_dispatches
        self.dispatches = 0

    @classmethod
    def from_source(
        cls,
        source: Union[str, Iterable[str]],
        *,
        skip_blank_lines: bool = False,
        emit: Optional[Callable[[Any], None]] = None,
        max_dispatches: int = 0,
    ) -> "Machine":
        registry = parse_program(source, skip_blank_lines=skip_blank_lines)
        return cls(registry, emit=emit, max_dispatches=max_dispatches)

    # ------------------------------------------------------------------
    # Observation channel
    # ------------------------------------------------------------------

    def emit(self, value: Any) -> None:
        self.output.append(value)
        if self._emit is not None:
            self._emit(value)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run_function(self, name: str) -> None:
        """Run a user function body to completion, in order."""
        fn = self.registry.get(name)
        logger.debug("Running function %s", name)
        for instr in fn.body:
            execute_instruction(self, instr)

    def dispatch(self, call: PendingCall) -> None:
        """Execute one dequeued call. Intrinsics shadow user functions."""
        if self.max_dispatches and self.dispatches >= self.max_dispatches:
            raise DispatchLimitExceeded(self.max_dispatches)
        self.dispatches += 1

        logger.debug("Dispatch #%d: %s", self.dispatches, call.describe())

        intrinsic = resolve_intrinsic(call.function_name)
        if intrinsic is not None:
            run_intrinsic(self, intrinsic, call)
        else:
            self.run_function(call.function_name)

    def run(self) -> MachineState:
        """
        Drive the machine to a terminal state.

        Returns:
            MachineState.HALTED on success.

        Raises:
            Deadlocked if queued calls remain but none can run.
            Any other AeolisError raised by an instruction or intrinsic.
        """
        if self.state != MachineState.INITIALIZING:
            raise RuntimeError(f"Machine already ran (state={self.state.value})")

        try:
            self._transition(MachineState.RUNNING)
            self.run_function(ENTRY_FUNCTION)

            self._transition(MachineState.DRAINING)
            self._drain()
        except Exception:
            if self.state not in TERMINAL_STATES:
                self._transition(MachineState.FAILED)
            raise

        self._transition(MachineState.HALTED)
        return self.state

    def _drain(self) -> None:
        while True:
            result = self.queue.pop_runnable(self.store)

            if result.status == ScanStatus.EMPTY:
                return

            if result.status == ScanStatus.NONE_RUNNABLE:
                self._transition(MachineState.DEADLOCKED)
                raise Deadlocked(len(self.queue))

            self.dispatch(result.call)

    def _transition(self, state: MachineState) -> None:
        logger.debug("State %s -> %s", self.state.value, state.value)
        self.state = state
