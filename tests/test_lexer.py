from hypothesis import given
from hypothesis import strategies as st

from quickaccount.qa_lexer import SourceCursor


def test_advance_and_peek() -> None:
    cursor = SourceCursor("abc")
    assert cursor.peek() == "a"
    assert cursor.peek(2) == "b"
    assert cursor.advance() == "a"
    assert cursor.current() == "b"
    assert cursor.position == 1


def test_peek_past_end_returns_none() -> None:
    cursor = SourceCursor("ab")
    assert cursor.peek(3) is None
    assert SourceCursor("").peek() is None


def test_advance_past_end_keeps_counting() -> None:
    cursor = SourceCursor("a")
    assert cursor.advance() == "a"
    assert cursor.advance() is None
    assert cursor.advance() is None
    assert cursor.position == 3
    assert cursor.end_of_file()


def test_rewind_never_goes_before_start() -> None:
    cursor = SourceCursor("abc", position=2)
    cursor.rewind()
    assert cursor.position == 1
    cursor.rewind(5)
    assert cursor.position == 0


def test_skip_whitespace_stops_at_newline() -> None:
    cursor = SourceCursor(" \t \nx")
    cursor.skip_whitespace()
    assert cursor.peek() == "\n"


def test_skip_whitespace_and_newlines() -> None:
    cursor = SourceCursor(" \t\r\n\n  x")
    cursor.skip_whitespace_and_newlines()
    assert cursor.peek() == "x"


def test_skip_whitespace_and_newlines_skips_control_characters() -> None:
    cursor = SourceCursor("\x00\x0b x")
    cursor.skip_whitespace_and_newlines()
    assert cursor.peek() == "x"


def test_read_digits() -> None:
    cursor = SourceCursor("3010..4000")
    assert cursor.read_digits() == "3010"
    assert cursor.peek() == "."


def test_read_digits_returns_none_without_moving() -> None:
    cursor = SourceCursor("x10")
    assert cursor.read_digits() is None
    assert cursor.position == 0


def test_read_digits_ignores_non_ascii_digits() -> None:
    # Arabic-Indic digits and superscripts are not account numbers
    assert SourceCursor("٣٤").read_digits() is None
    assert SourceCursor("12²").read_digits() == "12"


def test_read_digits_at_end_of_input() -> None:
    cursor = SourceCursor("42")
    assert cursor.read_digits() == "42"
    assert cursor.end_of_file()


def test_read_to_end_of_line_lf() -> None:
    cursor = SourceCursor("Webshop  \nnext")
    assert cursor.read_to_end_of_line() == "Webshop  "
    assert cursor.peek() == "n"


def test_read_to_end_of_line_crlf() -> None:
    cursor = SourceCursor("Webshop\r\nnext")
    assert cursor.read_to_end_of_line() == "Webshop"
    assert cursor.peek() == "n"


def test_read_to_end_of_line_keeps_lone_carriage_return() -> None:
    cursor = SourceCursor("a\rb\n")
    assert cursor.read_to_end_of_line() == "a\rb"


def test_read_to_end_of_line_at_eof() -> None:
    cursor = SourceCursor("tail")
    assert cursor.read_to_end_of_line() == "tail"
    assert cursor.position == 4


@given(st.text(alphabet=" \t\r\n", max_size=20), st.text(min_size=1, alphabet="abc("))  # type: ignore[misc]
def test_skip_whitespace_and_newlines_lands_on_content(blank: str, rest: str) -> None:
    cursor = SourceCursor(blank + rest)
    cursor.skip_whitespace_and_newlines()
    assert cursor.position == len(blank)


@given(st.text(alphabet="0123456789", min_size=1), st.text(alphabet=". =>a"))  # type: ignore[misc]
def test_read_digits_reads_whole_run(digits: str, rest: str) -> None:
    cursor = SourceCursor(digits + rest)
    assert cursor.read_digits() == digits
    assert cursor.position == len(digits)
