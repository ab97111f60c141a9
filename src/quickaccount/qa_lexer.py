"""
Character-level input handling for the QuickAccount report DSL.

The DSL is small enough that the parser works directly on characters instead of
a token stream. This module provides the cursor it consumes from, plus the few
lexical helpers the grammar needs.

Classes:
    SourceCursor: Random-access character buffer with a single advancing position.

Features:
    - One-based lookahead (`peek(1)` is the next unconsumed character)
    - Whitespace skipping with and without newlines
    - ASCII digit-run extraction for range bounds
    - CRLF-aware reading up to the end of a line

Example:
    >>> cursor = SourceCursor("3010..4000 => Sales")
    >>> cursor.read_digits()
    '3010'
    >>> cursor.peek()
    '.'

Exports:
    - SourceCursor
"""

import unicodedata


class SourceCursor:
    """
    A character buffer with a cursor position used by the QuickAccount parser.

    The position only moves forward during normal consumption and keeps counting
    past the end of the source, so error placement stays monotonic even after
    the input is exhausted.

    Attributes:
        source (str): The complete input text.
        position (int): Index of the next character to consume.
    """

    def __init__(self, source: str, position: int = 0) -> None:
        self.source = source
        self.position = position

    def advance(self) -> str | None:
        """
        Consumes and returns the character at the cursor.

        The position is incremented even when the cursor is already past the end.

        Returns:
            str | None: The consumed character, or None at end of input.
        """
        char = self.current()
        self.position += 1
        return char

    def peek(self, n: int = 1) -> str | None:
        """
        Returns the character `n` positions ahead without consuming it.

        Args:
            n (int, optional): One-based lookahead distance. Defaults to 1.

        Returns:
            str | None: The character, or None past the end of the source.
        """
        index = self.position + n - 1
        if index < 0 or index >= len(self.source):
            return None
        return self.source[index]

    def current(self) -> str | None:
        """Returns the next unconsumed character, or None at end of input."""
        return self.peek(1)

    def end_of_file(self) -> bool:
        """Checks whether every character has been consumed."""
        return self.position >= len(self.source)

    def rewind(self, n: int = 1) -> None:
        """Moves the cursor back `n` characters, never before the start."""
        self.position = max(0, self.position - n)

    def skip_whitespace(self) -> None:
        """Skips spaces and tabs, stopping before anything else."""
        while self.peek() in (" ", "\t"):
            self.advance()

    def skip_whitespace_and_newlines(self) -> None:
        """Skips whitespace, newlines and other control characters."""
        while True:
            char = self.peek()
            if char is None or not (char.isspace() or unicodedata.category(char) == "Cc"):
                break
            self.advance()

    def read_digits(self) -> str | None:
        """
        Consumes a run of ASCII digits.

        Returns:
            str | None: The digit run, or None (without moving) if the next
            character is not a digit.
        """
        if not _is_digit(self.peek()):
            return None
        start = self.position
        while _is_digit(self.peek()):
            self.advance()
        return self.source[start : self.position]

    def read_to_end_of_line(self) -> str:
        """
        Consumes characters up to and including the next line terminator.

        Both `\\n` and `\\r\\n` end a line; a lone `\\r` is kept as text.

        Returns:
            str: The text before the terminator, untrimmed.
        """
        chars: list[str] = []
        while not self.end_of_file():
            char = self.source[self.position]
            self.position += 1
            if char == "\n":
                break
            if char == "\r" and self.peek() == "\n":
                self.advance()
                break
            chars.append(char)
        return "".join(chars)


def _is_digit(char: str | None) -> bool:
    return char is not None and "0" <= char <= "9"


__all__ = ["SourceCursor"]
