"""
Compiler-style diagnostics for QuickAccount parse failures.

Given the source text, the cursor offset where a grammar rule failed and the
error kind, this module reconstructs the offending line and renders it with a
caret under the failing character:

    line: 5, pos: 22
                    6020.6100 => Office supplies
    ---------------------^

    ERROR: Invalid range syntax

Functions:
    locate(source, offset) -> tuple[int, int, int]
    build_diagnostic(source, offset, kind) -> Diagnostic

Classes:
    Diagnostic: The computed position and line text, with `render()`.
"""

from dataclasses import dataclass

from quickaccount.qa_constants import ErrorKind


@dataclass(frozen=True)
class Diagnostic:
    """
    A single located parse error.

    Attributes:
        kind (ErrorKind): What went wrong.
        line (int): 1-based line number.
        column (int): 1-based column number.
        source_line (str): The full text of the offending line.
        indicator (str): Dashes up to the error column followed by a caret.
    """

    kind: ErrorKind
    line: int
    column: int
    source_line: str
    indicator: str

    @property
    def message(self) -> str:
        return self.kind.value

    def render(self) -> str:
        return (
            f"\nline: {self.line}, pos: {self.column}\n"
            f"{self.source_line}\n{self.indicator}\n\nERROR: {self.message}\n"
        )

    def __str__(self) -> str:
        return self.render()


def locate(source: str, offset: int) -> tuple[int, int, int]:
    """
    Replays the consumed part of `source` to find where `offset` sits.

    Offsets past the end are clamped to the end of the source.

    Returns:
        tuple[int, int, int]: Zero-based line, zero-based column and the absolute
        offset at which that line starts.
    """
    consumed = source[: max(0, offset)]
    line = consumed.count("\n")
    line_start = consumed.rfind("\n") + 1
    return line, len(consumed) - line_start, line_start


def build_diagnostic(source: str, offset: int, kind: ErrorKind) -> Diagnostic:
    """
    Builds the diagnostic for an error raised with the cursor at `offset`.

    The indicator gets a `-` under every character of the line before the
    offset and a `^` under the character at the offset. When the offset is past
    the end of the line no caret is drawn.
    """
    line, column, line_start = locate(source, offset)

    line_end = source.find("\n", line_start)
    if line_end == -1:
        line_end = len(source)
    elif line_end > line_start and source[line_end - 1] == "\r":
        # CRLF: the "\r" belongs to the line terminator
        line_end -= 1
    text = source[line_start:line_end]

    indicator: list[str] = []
    for pos in range(line_start, line_end):
        if pos < offset:
            indicator.append("-")
        elif pos == offset:
            indicator.append("^")
        else:
            break

    return Diagnostic(
        kind=kind,
        line=line + 1,
        column=column + 1,
        source_line=text,
        indicator="".join(indicator),
    )


__all__ = ["Diagnostic", "build_diagnostic", "locate"]
