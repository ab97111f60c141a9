"""
Shared constants for the QuickAccount report DSL.

Exports:
    - ErrorKind: The fixed set of messages a failing parse can report.
    - MAX_ACCOUNT_NUMBER: Largest account number a range bound may hold.
    - DEFAULT_MAX_DEPTH: Default ceiling on span nesting.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated parse failures. The value is the message shown to the user."""

    INVALID_RANGE_SYNTAX = "Invalid range syntax"
    INVALID_RANGE = "Invalid range"
    INVALID_SYNTAX_AFTER_EQ = "Invalid syntax after ="
    UNEXPECTED_SYNTAX = "Unexpected syntax"
    UNEXPECTED_EOF = "Unexpected EOF"
    EXPECTED_CLOSE_ARROW = "Expected >"
    EXPECTED_ARROW_AFTER_PAREN = "Expected => after )"
    RANGE_OVERFLOW = "Range bound out of bounds"
    NESTING_TOO_DEEP = "Nesting too deep"
    EXPECTED_BLOCK_END = "Expected ) => to close block"

    def __str__(self) -> str:
        return self.value


# account numbers are unsigned 32-bit
MAX_ACCOUNT_NUMBER = 2**32 - 1

DEFAULT_MAX_DEPTH = 512

__all__ = ["DEFAULT_MAX_DEPTH", "MAX_ACCOUNT_NUMBER", "ErrorKind"]
