"""
Exceptions raised by the QuickAccount parser.

Classes:
    - QuickAccountError: Base class for everything this package raises.
    - GrammarError: Internal signal from the grammar procedures. Carries only the
      error kind; the cursor position is read by the parser when it catches it.
    - ParseError: What `Parser.parse()` raises. Its message is the rendered
      diagnostic, so printing the exception prints the caret display.
"""

from quickaccount.qa_constants import ErrorKind
from quickaccount.qa_diagnostics import Diagnostic


class QuickAccountError(Exception):
    """Base class for QuickAccount errors."""


class GrammarError(QuickAccountError):
    """A grammar rule was violated at the current cursor position."""

    def __init__(self, kind: ErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


class ParseError(QuickAccountError, SyntaxError):
    """
    Raised when a document cannot be parsed.

    Attributes:
        diagnostic (Diagnostic): Location and line text of the failure.
        kind (ErrorKind): Shortcut for `diagnostic.kind`.

    Example:
        try:
            Parser(text).parse()
        except ParseError as e:
            print(e)  # line/pos header, source line, caret, ERROR message
    """

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.render())
        self.diagnostic = diagnostic
        self.kind = diagnostic.kind
        # SyntaxError attributes, so tooling that knows SyntaxError can use them
        self.lineno = diagnostic.line
        self.offset = diagnostic.column
        self.text = diagnostic.source_line

    def __str__(self) -> str:
        return self.diagnostic.render()


__all__ = ["GrammarError", "ParseError", "QuickAccountError"]
