"""
IL Contract
===========

This file defines the data shapes shared between the IL decoder, the
function registry and the runtime.

Key guarantees:
- Instructions are decoded once, at registry build time
- Pending calls capture their bindings by value
- Bindings name global variables directly (no renaming, no frames)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


ENTRY_FUNCTION = "_entry"

DEFINITION_OPEN = "-"
DEFINITION_CLOSE = "---"


# ---------------------------------------------------------------------------
# Instruction kinds
# ---------------------------------------------------------------------------

class InstructionKind(str, Enum):
    DECLARE = "var"
    ASSIGN = "assg"
    BIND = "bind"
    CALL = "call"
    COPY = "copy"
    DELETE = "del"


# operand count per instruction keyword
INSTRUCTION_ARITY = {
    InstructionKind.DECLARE: 2,
    InstructionKind.ASSIGN: 2,
    InstructionKind.BIND: 2,
    InstructionKind.CALL: 1,
    InstructionKind.COPY: 2,
    InstructionKind.DELETE: 1,
}


class Direction(str, Enum):
    IN = "in"
    OUT = "out"


# ---------------------------------------------------------------------------
# Decoded IL
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Instruction:
    """
    One decoded IL line.

    `args` are the raw operand tokens in source order, e.g.
    `copy dst src` -> ("dst", "src").
    """

    kind: InstructionKind
    args: Tuple[str, ...]
    source: str = ""
    line_no: int = 0


@dataclass(frozen=True)
class Function:
    name: str
    lines: Tuple[str, ...]
    body: Tuple[Instruction, ...]
    line_no: int = 0


# ---------------------------------------------------------------------------
# Scheduling metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Binding:
    name: str
    direction: Direction

    @property
    def is_input(self) -> bool:
        return self.direction == Direction.IN


@dataclass(frozen=True)
class PendingCall:
    function_name: str
    bindings: Tuple[Binding, ...] = field(default_factory=tuple)

    def describe(self) -> str:
        parts = [f"{b.direction.value} {b.name}" for b in self.bindings]
        return f"{self.function_name}({', '.join(parts)})"
