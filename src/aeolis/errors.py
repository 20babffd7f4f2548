from __future__ import annotations

from typing import Any, Optional


class AeolisError(Exception):
    """
    User-facing, structured error.

    Every failure the interpreter can hit is fatal and surfaces as one
    of these. `code` is stable and machine-readable, `message` names the
    offending identifier.
    """

    code = "AEOLIS_ERROR"

    def __init__(self, message: str, *, line_no: Optional[int] = None):
        self.message = message
        self.line_no = line_no
        super().__init__(message)

    def at_line(self, line_no: int) -> "AeolisError":
        if self.line_no is None:
            self.line_no = line_no
        return self

    def __str__(self) -> str:
        where = f" (line {self.line_no})" if self.line_no is not None else ""
        return f"[{self.code}] {self.message}{where}"


# ---------------------------------------------------------------------------
# Variable store
# ---------------------------------------------------------------------------

class AlreadyDeclared(AeolisError):
    code = "ALREADY_DECLARED"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Variable '{name}' already declared")


class UnknownVariable(AeolisError):
    code = "UNKNOWN_VARIABLE"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No such variable '{name}'")


# ---------------------------------------------------------------------------
# IL decoding / function registry
# ---------------------------------------------------------------------------

class UnknownInstruction(AeolisError):
    code = "UNKNOWN_INSTRUCTION"

    def __init__(self, token: str, *, line_no: Optional[int] = None):
        self.token = token
        super().__init__(f"Unknown instruction '{token}'", line_no=line_no)


class MalformedInstruction(AeolisError):
    code = "MALFORMED_INSTRUCTION"

    def __init__(self, line: str, reason: str, *, line_no: Optional[int] = None):
        self.line = line
        self.reason = reason
        super().__init__(f"Malformed instruction '{line}': {reason}", line_no=line_no)


class UnknownFunction(AeolisError):
    code = "UNKNOWN_FUNCTION"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No such function '{name}'")


class AlreadyInDefinition(AeolisError):
    code = "ALREADY_IN_DEFINITION"

    def __init__(self, name: str, *, line_no: Optional[int] = None):
        self.name = name
        super().__init__(
            f"Cannot open a definition while '{name}' is still open",
            line_no=line_no,
        )


class NotInDefinition(AeolisError):
    code = "NOT_IN_DEFINITION"

    def __init__(self, line: str, *, line_no: Optional[int] = None):
        self.line = line
        super().__init__(f"Line outside of any definition: '{line}'", line_no=line_no)


class UnterminatedDefinition(AeolisError):
    code = "UNTERMINATED_DEFINITION"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Definition '{name}' is never closed with '---'")


class DuplicateFunction(AeolisError):
    code = "DUPLICATE_FUNCTION"

    def __init__(self, name: str, *, line_no: Optional[int] = None):
        self.name = name
        super().__init__(f"Function '{name}' defined more than once", line_no=line_no)


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------

class InvalidOperand(AeolisError):
    code = "INVALID_OPERAND"

    def __init__(self, name: str, value: Any):
        self.name = name
        self.value = value
        super().__init__(f"Variable '{name}' holds non-integer value {value!r}")


class IntrinsicArity(AeolisError):
    code = "INTRINSIC_ARITY"

    def __init__(self, name: str, expected: int, got: int):
        self.name = name
        self.expected = expected
        self.got = got
        super().__init__(
            f"Intrinsic '{name}' needs {expected} bindings, got {got}"
        )


class Deadlocked(AeolisError):
    code = "DEADLOCKED"

    def __init__(self, queue_size: int):
        self.queue_size = queue_size
        super().__init__(f"No runnable call with {queue_size} queued")


class DispatchLimitExceeded(AeolisError):
    code = "DISPATCH_LIMIT"

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Dispatch limit of {limit} exceeded")


# ---------------------------------------------------------------------------
# Input / configuration
# ---------------------------------------------------------------------------

class InvalidEncoding(AeolisError):
    code = "INVALID_ENCODING"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"IL file '{path}' is not valid UTF-8: {reason}")


class InvalidSettings(AeolisError):
    code = "INVALID_SETTINGS"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Setting '{field}': {reason}")
