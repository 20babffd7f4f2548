"""
Command Layer
=============

One handler per IL instruction kind. Each handler mutates the
machine's variable store, its binding accumulator or its call queue.

Dispatch goes through the explicit COMMANDS table; there is no
name-based lookup.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict

from aeolis.errors import AeolisError
from aeolis.il.contract import Binding, Direction, Instruction, InstructionKind, PendingCall

if TYPE_CHECKING:
    from aeolis.runtime.machine import Machine


logger = logging.getLogger(__name__)


def _declare(machine: "Machine", instr: Instruction) -> None:
    name, type_ = instr.args
    machine.store.declare(name, type_)


def _assign(machine: "Machine", instr: Instruction) -> None:
    name, literal = instr.args
    machine.store.write(name, literal, ready=True)


def _bind(machine: "Machine", instr: Instruction) -> None:
    direction, name = instr.args
    machine.bindlist.append(Binding(name=name, direction=Direction(direction)))


def _call(machine: "Machine", instr: Instruction) -> None:
    (fn_name,) = instr.args
    machine.queue.enqueue(
        PendingCall(function_name=fn_name, bindings=tuple(machine.bindlist))
    )
    machine.bindlist.clear()


def _copy(machine: "Machine", instr: Instruction) -> None:
    dst, src = instr.args
    source = machine.store.get(src)
    machine.store.write(dst, source.value, ready=source.ready)


def _delete(machine: "Machine", instr: Instruction) -> None:
    (name,) = instr.args
    machine.store.delete(name)


COMMANDS: Dict[InstructionKind, Callable[["Machine", Instruction], None]] = {
    InstructionKind.DECLARE: _declare,
    InstructionKind.ASSIGN: _assign,
    InstructionKind.BIND: _bind,
    InstructionKind.CALL: _call,
    InstructionKind.COPY: _copy,
    InstructionKind.DELETE: _delete,
}


def execute_instruction(machine: "Machine", instr: Instruction) -> None:
    """
    Execute one decoded instruction against the machine state.

    Errors raised by the store are tagged with the instruction's
    source line and propagated.
    """
    logger.debug("exec %s", instr.source or f"{instr.kind.value} {' '.join(instr.args)}")

    handler = COMMANDS[instr.kind]
    try:
        handler(machine, instr)
    except AeolisError as e:
        if instr.line_no:
            e.at_line(instr.line_no)
        raise
