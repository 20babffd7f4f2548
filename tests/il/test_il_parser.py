import pytest

from aeolis.errors import (
    AlreadyInDefinition,
    DuplicateFunction,
    MalformedInstruction,
    NotInDefinition,
    UnknownFunction,
    UnknownInstruction,
    UnterminatedDefinition,
)
from aeolis.il.contract import InstructionKind
from aeolis.il.parser import decode_instruction, parse_program


# --------------------------------------------------
# Instructions
# --------------------------------------------------

@pytest.mark.parametrize(
    "line, kind, args",
    [
        ("var x int", InstructionKind.DECLARE, ("x", "int")),
        ("assg x 42", InstructionKind.ASSIGN, ("x", "42")),
        ("bind in x", InstructionKind.BIND, ("in", "x")),
        ("bind out y", InstructionKind.BIND, ("out", "y")),
        ("call add", InstructionKind.CALL, ("add",)),
        ("copy b a", InstructionKind.COPY, ("b", "a")),
        ("del x", InstructionKind.DELETE, ("x",)),
    ],
)
def test_decode_each_instruction(line, kind, args):
    instr = decode_instruction(line, 7)

    assert instr.kind == kind
    assert instr.args == args
    assert instr.source == line
    assert instr.line_no == 7


def test_decode_tolerates_repeated_spaces():
    instr = decode_instruction("  copy   b  a ")
    assert instr.args == ("b", "a")


def test_unknown_keyword_rejected():
    with pytest.raises(UnknownInstruction) as exc:
        decode_instruction("jump somewhere", 3)

    assert exc.value.token == "jump"
    assert exc.value.line_no == 3
    assert exc.value.code == "UNKNOWN_INSTRUCTION"


def test_blank_line_is_unknown_instruction():
    with pytest.raises(UnknownInstruction) as exc:
        decode_instruction("   ")
    assert exc.value.token == ""


def test_wrong_operand_count_rejected():
    with pytest.raises(MalformedInstruction):
        decode_instruction("var x")

    with pytest.raises(MalformedInstruction):
        decode_instruction("call add extra")


def test_bad_bind_direction_rejected():
    with pytest.raises(MalformedInstruction) as exc:
        decode_instruction("bind inout x")
    assert "direction" in exc.value.reason


# --------------------------------------------------
# Function definitions
# --------------------------------------------------

def test_parse_registers_functions_in_order():
    source = "\n".join([
        "- _entry",
        "var a int",
        "call helper",
        "---",
        "- helper",
        "assg a 1",
        "---",
    ])

    registry = parse_program(source)

    assert registry.names() == ["_entry", "helper"]
    entry = registry.get("_entry")
    assert entry.lines == ("var a int", "call helper")
    assert [i.kind for i in entry.body] == [InstructionKind.DECLARE, InstructionKind.CALL]
    assert entry.line_no == 1
    assert registry.get("helper").body[0].line_no == 6


def test_empty_function_allowed():
    registry = parse_program(["- _entry", "---"])
    assert registry.get("_entry").body == ()


def test_nested_definition_rejected():
    with pytest.raises(AlreadyInDefinition) as exc:
        parse_program(["- _entry", "- inner", "---", "---"])

    assert exc.value.name == "_entry"
    assert exc.value.line_no == 2


def test_close_without_open_rejected():
    with pytest.raises(NotInDefinition):
        parse_program(["---"])


def test_line_outside_definition_rejected():
    with pytest.raises(NotInDefinition) as exc:
        parse_program(["var x int"])
    assert exc.value.line_no == 1


def test_unterminated_definition_rejected():
    with pytest.raises(UnterminatedDefinition) as exc:
        parse_program(["- _entry", "var x int"])
    assert exc.value.name == "_entry"


def test_duplicate_function_rejected():
    with pytest.raises(DuplicateFunction):
        parse_program(["- f", "---", "- f", "---"])


def test_malformed_body_line_fails_at_parse_time():
    with pytest.raises(UnknownInstruction) as exc:
        parse_program(["- _entry", "var x int", "nope", "---"])
    assert exc.value.line_no == 3


def test_blank_lines_are_errors_by_default():
    with pytest.raises(UnknownInstruction):
        parse_program(["- _entry", "", "---"])

    with pytest.raises(NotInDefinition):
        parse_program(["", "- _entry", "---"])


def test_blank_lines_skipped_when_enabled():
    registry = parse_program(
        ["", "- _entry", "  ", "var x int", "---", ""],
        skip_blank_lines=True,
    )
    assert registry.get("_entry").lines == ("var x int",)


def test_missing_entry_detected():
    registry = parse_program(["- helper", "---"])

    assert "_entry" not in registry
    with pytest.raises(UnknownFunction) as exc:
        registry.require_entry()
    assert exc.value.name == "_entry"
