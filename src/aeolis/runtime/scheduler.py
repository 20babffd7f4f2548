"""
Readiness-gated Scheduler
=========================

Responsibilities:
- Hold pending calls in insertion order
- Find the first call whose `in` bindings are all ready
- Tell "queue empty" apart from "nothing runnable"

Non-responsibilities:
- No execution
- No waiting; an ineligible call simply stays queued
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from aeolis.il.contract import PendingCall
from aeolis.runtime.store import VariableStore


logger = logging.getLogger(__name__)


class ScanStatus(str, Enum):
    EMPTY = "empty"
    NONE_RUNNABLE = "none_runnable"
    RUNNABLE = "runnable"


@dataclass(frozen=True)
class ScanResult:
    status: ScanStatus
    index: Optional[int] = None
    call: Optional[PendingCall] = None

    @property
    def runnable(self) -> bool:
        return self.status == ScanStatus.RUNNABLE


def is_eligible(call: PendingCall, store: VariableStore) -> bool:
    """
    A call is eligible iff every variable it binds exists and is not
    reserved, and every `in` variable is ready. `out` bindings impose
    no readiness precondition.

    Raises:
        UnknownVariable if a binding names a missing variable.
    """
    for binding in call.bindings:
        var = store.get(binding.name)

        if var.bound:
            return False

        if binding.is_input and not var.ready:
            return False

    return True


class CallQueue:
    def __init__(self) -> None:
        self._calls: List[PendingCall] = []

    def enqueue(self, call: PendingCall) -> None:
        self._calls.append(call)
        logger.debug("Enqueued %s (queue=%d)", call.describe(), len(self._calls))

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def select_runnable(self, store: VariableStore) -> ScanResult:
        if not self._calls:
            return ScanResult(ScanStatus.EMPTY)

        for idx, call in enumerate(self._calls):
            if is_eligible(call, store):
                return ScanResult(ScanStatus.RUNNABLE, idx, call)
            logger.debug("Skipping %s: not eligible", call.describe())

        return ScanResult(ScanStatus.NONE_RUNNABLE)

    def pop_runnable(self, store: VariableStore) -> ScanResult:
        result = self.select_runnable(store)
        if result.runnable:
            # list.pop keeps the relative order of the remaining calls
            self._calls.pop(result.index)
        return result

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def pending(self) -> List[PendingCall]:
        return list(self._calls)

    def __len__(self) -> int:
        return len(self._calls)

