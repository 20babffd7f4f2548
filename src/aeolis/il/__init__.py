from aeolis.il.contract import (
    ENTRY_FUNCTION,
    Binding,
    Direction,
    Function,
    Instruction,
    InstructionKind,
    PendingCall,
)
from aeolis.il.parser import decode_instruction, parse_program
from aeolis.il.registry import FunctionRegistry

__all__ = [
    "ENTRY_FUNCTION",
    "Binding",
    "Direction",
    "Function",
    "FunctionRegistry",
    "Instruction",
    "InstructionKind",
    "PendingCall",
    "decode_instruction",
    "parse_program",
]
