"""
IL Parsing
==========

Purpose:
- Split IL source into function definitions
- Decode every body line into a typed Instruction
- Reject malformed IL before anything executes

This module:
- DOES NOT execute instructions
- DOES NOT touch the variable store
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Union

from aeolis.errors import (
    AlreadyInDefinition,
    MalformedInstruction,
    NotInDefinition,
    UnknownInstruction,
    UnterminatedDefinition,
)
from aeolis.il.contract import (
    DEFINITION_CLOSE,
    DEFINITION_OPEN,
    INSTRUCTION_ARITY,
    Direction,
    Function,
    Instruction,
    InstructionKind,
)
from aeolis.il.registry import FunctionRegistry


# ---------------------------------------------------------------------------
# Instructions
# ---------------------------------------------------------------------------

def decode_instruction(line: str, line_no: int = 0) -> Instruction:
    """
    Decode a single IL line.

    Raises:
        UnknownInstruction if the keyword is not part of the IL.
        MalformedInstruction on a wrong operand count or bind direction.
    """
    tokens = line.split()
    keyword = tokens[0] if tokens else ""

    try:
        kind = InstructionKind(keyword)
    except ValueError:
        raise UnknownInstruction(keyword, line_no=line_no) from None

    args = tuple(tokens[1:])
    expected = INSTRUCTION_ARITY[kind]
    if len(args) != expected:
        raise MalformedInstruction(
            line,
            f"'{kind.value}' takes {expected} operand(s), got {len(args)}",
            line_no=line_no,
        )

    if kind == InstructionKind.BIND:
        try:
            Direction(args[0])
        except ValueError:
            raise MalformedInstruction(
                line,
                f"bind direction must be 'in' or 'out', got '{args[0]}'",
                line_no=line_no,
            ) from None

    return Instruction(kind=kind, args=args, source=line, line_no=line_no)


# ---------------------------------------------------------------------------
# Function definitions
# ---------------------------------------------------------------------------

def parse_program(
    source: Union[str, Iterable[str]],
    *,
    skip_blank_lines: bool = False,
) -> FunctionRegistry:
    """
    Build a FunctionRegistry from IL source.

    `- name` opens a definition, `---` closes it, every other line
    belongs to the open definition.

    Raises:
        AlreadyInDefinition, NotInDefinition, UnterminatedDefinition,
        DuplicateFunction, UnknownInstruction, MalformedInstruction.
    """
    lines = source.splitlines() if isinstance(source, str) else list(source)
    registry = FunctionRegistry()

    current: Optional[str] = None
    opened_at = 0
    raw: List[str] = []
    body: List[Instruction] = []

    for line_no, line in enumerate(lines, start=1):
        tokens = line.split()

        if not tokens and skip_blank_lines:
            continue

        head = tokens[0] if tokens else ""

        if head == DEFINITION_OPEN:
            if current is not None:
                raise AlreadyInDefinition(current, line_no=line_no)
            if len(tokens) != 2:
                raise MalformedInstruction(
                    line, "definition header is '- <name>'", line_no=line_no
                )
            current = tokens[1]
            opened_at = line_no

        elif head == DEFINITION_CLOSE:
            if current is None:
                raise NotInDefinition(line, line_no=line_no)
            if len(tokens) != 1:
                raise MalformedInstruction(
                    line, "definition terminator takes no operands", line_no=line_no
                )

            registry.register(
                Function(
                    name=current,
                    lines=tuple(raw),
                    body=tuple(body),
                    line_no=opened_at,
                )
            )
            current = None
            raw = []
            body = []

        else:
            if current is None:
                raise NotInDefinition(line, line_no=line_no)

            raw.append(line)
            body.append(decode_instruction(line, line_no))

    if current is not None:
        raise UnterminatedDefinition(current)

    return registry
