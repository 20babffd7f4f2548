from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from aeolis.errors import IntrinsicArity, InvalidOperand
from aeolis.il.contract import PendingCall

if TYPE_CHECKING:
    from aeolis.runtime.machine import Machine


logger = logging.getLogger(__name__)


class Intrinsic(str, Enum):
    ADD = "add"
    PRINT = "print"


def _require_bindings(call: PendingCall, expected: int) -> None:
    if len(call.bindings) < expected:
        raise IntrinsicArity(call.function_name, expected, len(call.bindings))


def _as_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidOperand(name, value) from None


# ---------------------------------------------------------------------------
# Handlers
#
# Bindings are positional; the in/out tags only matter to the scheduler.
# ---------------------------------------------------------------------------

def _add(machine: "Machine", call: PendingCall) -> None:
    _require_bindings(call, 3)
    lhs, rhs, dst = call.bindings[:3]

    a = _as_int(lhs.name, machine.store.read(lhs.name))
    b = _as_int(rhs.name, machine.store.read(rhs.name))
    machine.store.write(dst.name, a + b, ready=True)


def _print(machine: "Machine", call: PendingCall) -> None:
    _require_bindings(call, 1)
    machine.emit(machine.store.read(call.bindings[0].name))


INTRINSICS: Dict[Intrinsic, Callable[["Machine", PendingCall], None]] = {
    Intrinsic.ADD: _add,
    Intrinsic.PRINT: _print,
}


def resolve_intrinsic(name: str) -> Optional[Intrinsic]:
    try:
        return Intrinsic(name)
    except ValueError:
        return None


def run_intrinsic(machine: "Machine", intrinsic: Intrinsic, call: PendingCall) -> None:
    logger.debug("intrinsic %s", call.describe())
    INTRINSICS[intrinsic](machine, call)
