"""
QuickAccount Report DSL Parser

Parses the QuickAccount report language into a forest of `Span` nodes.

The language describes the layout of a financial report as nested groups of
account-number ranges:

    Other costs (
        6000..6010 => Leasing
        (
            6020..6100 => Office supplies
            6100..6200 => Consumables
        ) => Sum misc. costs
    ) => Sum other costs

Grammar
-------
    document    := block*
    block       := header "(" range* block* terminator
    header      := free text up to "(" (optional title)
    range       := WS* DIGIT+ ".." DIGIT+ WS* "=>" WS* text-to-EOL
    terminator  := WS/NL* ")" SP* "=>" SP* text-to-EOL

A header is only a header if a `(` comes before any `)` or `=`; otherwise the
text belongs to an enclosing terminator or a range, and the block loop stops.

Parser Behavior
---------------
- Works directly on characters through a `SourceCursor`; there is no token stream.
- Spans at the top level get a `SumTotal` sum row, nested spans a `SubTotal`.
- The first violated rule aborts the parse. Grammar procedures raise
  `GrammarError`; `parse()` turns it into a `ParseError` whose message shows the
  offending line with a caret under the failing character.
- Nesting is parsed recursively and capped by `max_depth`.
- A block whose closing `) =>` cannot be found ends without a sum label instead
  of failing. Pass `strict=True` to make that an error.

Entry Points
------------
- `Parser(source).parse()`: Parse a complete document.
- `parse(source, **options)`: Shorthand for the above.

Raises
------
ParseError
    Raised when the document is malformed.
"""

from __future__ import annotations

import logging

from quickaccount.qa_ast import Range, Span, SubTotal, SumTotal, SumType
from quickaccount.qa_constants import DEFAULT_MAX_DEPTH, MAX_ACCOUNT_NUMBER, ErrorKind
from quickaccount.qa_diagnostics import build_diagnostic
from quickaccount.qa_errors import GrammarError, ParseError
from quickaccount.qa_lexer import SourceCursor

logger = logging.getLogger(__name__)


class Parser:
    """
    QuickAccount Parser Class

    Turns one complete source text into a list of top-level spans. Each instance
    owns its cursor, so separate parsers never share state.

    Attributes
    ----------
    source : str
        The document being parsed.
    cursor : SourceCursor
        Current read position in `source`.
    strict : bool
        Raise instead of silently ending a block with no sum label when the
        closing `) =>` is missing or malformed.
    max_depth : int
        Maximum number of nested span levels, top level included.

    Methods
    -------
    parse() -> list[Span]
        Parse the whole document.
    parse_block(depth: int) -> Span | None
        Parse one span and everything nested inside it.
    parse_block_header() -> str | None
        Consume an optional title and the opening `(`.
    parse_range() -> Range | None
        Parse one `from..to => title` line.
    parse_block_terminator() -> str | None
        Consume `) => label` and return the label.
    """

    def __init__(
        self,
        source: str,
        *,
        strict: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.source: str = source
        self.cursor: SourceCursor = SourceCursor(source)
        self.strict: bool = strict
        self.max_depth: int = max_depth

    def parse(self) -> list[Span]:
        """Parse the full document and return its top-level spans.

        Raises:
            ParseError: On the first grammar violation.
        """
        self.cursor = SourceCursor(self.source)
        spans: list[Span] = []
        try:
            while True:
                span = self.parse_block(depth=0)
                if span is None:
                    break
                spans.append(span)
        except GrammarError as e:
            raise self._error(e.kind) from None
        except RecursionError:
            raise self._error(ErrorKind.NESTING_TOO_DEEP) from None

        logger.debug(
            "parsed %d top-level spans (%d spans total)",
            len(spans),
            sum(1 for span in spans for _ in span.walk()),
        )
        return spans

    def parse_block(self, depth: int) -> Span | None:
        """Parse a span starting at the cursor, or return None if there is none.

        `depth` is 0 for spans at the top level of the document.
        """
        if not self.is_block_start():
            return None

        name = self.parse_block_header()
        if depth >= self.max_depth:
            # point at the "(" that opened one level too many
            self.cursor.rewind()
            raise GrammarError(ErrorKind.NESTING_TOO_DEEP)

        ranges: list[Range] = []
        while True:
            range_ = self.parse_range()
            if range_ is None:
                break
            ranges.append(range_)

        subspans: list[Span] = []
        while True:
            sub = self.parse_block(depth + 1)
            if sub is None:
                break
            subspans.append(sub)

        label = self.parse_block_terminator()
        sum_type: SumType = SubTotal(label) if depth > 0 else SumTotal(label)

        logger.debug(
            "span %r at depth %d: %d ranges, %d subspans, label %r",
            name,
            depth,
            len(ranges),
            len(subspans),
            label,
        )
        return Span(
            name=name,
            ranges=tuple(ranges),
            subspans=tuple(subspans),
            sum_type=sum_type,
        )

    def is_block_start(self) -> bool:
        """Look ahead, without consuming, for a `(` before any `)` or `=`."""
        for index in range(self.cursor.position, len(self.source)):
            char = self.source[index]
            if char == "(":
                return True
            if char in ")=":
                return False
        return False

    def parse_block_header(self) -> str | None:
        """Consume the text before `(` and the `(` itself.

        Only call this after `is_block_start()` returned True.

        Returns:
            The trimmed title, or None if the header is empty.
        """
        self.cursor.skip_whitespace_and_newlines()
        chars: list[str] = []
        while True:
            char = self.cursor.advance()
            if char is None or char == "(":
                break
            chars.append(char)
        return "".join(chars).rstrip() or None

    def parse_range(self) -> Range | None:
        """Parse `from..to => title`.

        Returns:
            The range, or None if the next non-blank character is not a digit.

        Raises:
            GrammarError: If the line starts with digits but is not a valid range.
        """
        self.cursor.skip_whitespace_and_newlines()
        from_ = self._account_number()
        if from_ is None:
            return None

        for _ in range(2):
            if self.cursor.advance() != ".":
                # step back onto the character that should have been a "."
                self.cursor.rewind()
                raise GrammarError(ErrorKind.INVALID_RANGE_SYNTAX)

        to = self._account_number()
        if to is None:
            raise GrammarError(ErrorKind.INVALID_RANGE)

        self.cursor.skip_whitespace()
        self._expect_range_arrow()
        self.cursor.skip_whitespace()
        title = self.cursor.read_to_end_of_line().rstrip()

        return Range(title=title, from_=from_, to=to)

    def parse_block_terminator(self) -> str | None:
        """Consume `) => label` and return the label.

        Returns None when the block ends without a usable terminator, either
        because the label is empty or (outside strict mode) because `)` or `=>`
        is missing.

        Raises:
            GrammarError: If `=` after `)` is not followed by `>`, or in strict
                mode when `)` or `=>` is missing.
        """
        self.cursor.skip_whitespace_and_newlines()
        if self.cursor.advance() != ")":
            if self.strict:
                self.cursor.rewind()
                raise GrammarError(ErrorKind.EXPECTED_BLOCK_END)
            logger.debug(
                "no ')' at offset %d, block ends without a sum label",
                self.cursor.position - 1,
            )
            return None

        while self.cursor.peek() == " ":
            self.cursor.advance()

        if self.cursor.peek() != "=":
            if self.strict:
                raise GrammarError(ErrorKind.EXPECTED_ARROW_AFTER_PAREN)
            logger.debug(
                "no '=>' after ')' at offset %d, block ends without a sum label",
                self.cursor.position,
            )
            self.cursor.advance()
            return None

        self.cursor.advance()
        char = self.cursor.peek()
        if char is None:
            raise GrammarError(ErrorKind.EXPECTED_ARROW_AFTER_PAREN)
        if char != ">":
            raise GrammarError(ErrorKind.EXPECTED_CLOSE_ARROW)
        self.cursor.advance()

        self.cursor.skip_whitespace()
        return self.cursor.read_to_end_of_line().rstrip() or None

    def _expect_range_arrow(self) -> None:
        char = self.cursor.peek()
        if char is None:
            raise GrammarError(ErrorKind.UNEXPECTED_EOF)
        if char != "=":
            raise GrammarError(ErrorKind.UNEXPECTED_SYNTAX)
        self.cursor.advance()

        char = self.cursor.peek()
        if char is None:
            raise GrammarError(ErrorKind.UNEXPECTED_EOF)
        if char != ">":
            raise GrammarError(ErrorKind.INVALID_SYNTAX_AFTER_EQ)
        self.cursor.advance()

    def _account_number(self) -> int | None:
        start = self.cursor.position
        digits = self.cursor.read_digits()
        if digits is None:
            return None
        # int() refuses very long digit strings, so check the length first
        significant = digits.lstrip("0") or "0"
        if (
            len(significant) > len(str(MAX_ACCOUNT_NUMBER))
            or int(significant) > MAX_ACCOUNT_NUMBER
        ):
            self.cursor.position = start
            raise GrammarError(ErrorKind.RANGE_OVERFLOW)
        return int(significant)

    def _error(self, kind: ErrorKind) -> ParseError:
        diagnostic = build_diagnostic(self.source, self.cursor.position, kind)
        logger.debug(
            "parse failed at line %d, pos %d: %s",
            diagnostic.line,
            diagnostic.column,
            kind.value,
        )
        return ParseError(diagnostic)


def parse(
    source: str, *, strict: bool = False, max_depth: int = DEFAULT_MAX_DEPTH
) -> list[Span]:
    """Parse `source` and return its top-level spans.

    Raises:
        ParseError: If the document is malformed.
    """
    return Parser(source, strict=strict, max_depth=max_depth).parse()


__all__ = ["ParseError", "Parser", "parse"]
