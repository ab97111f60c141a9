"""
QuickAccount CLI Entrypoint.

Parses a QuickAccount report definition and prints the resulting span tree as JSON,
or reports the first syntax error in compiler style.

Features:
    - Read source from `.qa` files or inline strings.
    - Print the parsed forest as JSON, write it to a file, or only validate.
    - Strict terminator checking and a configurable nesting ceiling.

Example usage:
    quickaccount report.qa
    quickaccount report.qa --indent 0
    quickaccount report.qa --check --strict
    quickaccount report.qa -o report.json -v

Functions:
    run_quickaccount(source: str, is_string: bool = False, out: str | None = None,
                     check: bool = False, strict: bool = False,
                     max_depth: int = DEFAULT_MAX_DEPTH, indent: int = 2) -> None:
        Loads and parses the source, then prints or writes the result.

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments, runs the parser and returns the exit status.
"""

import argparse
import contextlib
import json
import logging
import sys
from collections.abc import Iterator

from quickaccount.qa_constants import DEFAULT_MAX_DEPTH
from quickaccount.qa_errors import ParseError
from quickaccount.qa_parser import Parser

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def _json_headroom(depth: int) -> Iterator[None]:
    """Raise the recursion limit enough for json to encode `depth` span levels."""
    # the encoder recurses once for each span dict and once for its subspans list
    limit = sys.getrecursionlimit()
    sys.setrecursionlimit(limit + 2 * depth + 50)
    try:
        yield
    finally:
        sys.setrecursionlimit(limit)


def run_quickaccount(
    source: str,
    is_string: bool = False,
    out: str | None = None,
    check: bool = False,
    strict: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
    indent: int = 2,
) -> None:
    """
    Parse a QuickAccount document and print or write the span tree.

    Args:
        source (str): The document text or a path to a `.qa` file.
        is_string (bool): If True, treats `source` as document text. Defaults to False.
        out (str | None): Optional path to write the JSON to instead of stdout.
        check (bool): If True, only validate and print `ok`. Defaults to False.
        strict (bool): Reject blocks without a proper `) =>` terminator.
        max_depth (int): Maximum span nesting depth.
        indent (int): JSON indentation; 0 prints compact JSON on one line.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.qa'.
        ParseError: If the document is malformed.
    """
    if not is_string and not source.endswith(".qa"):
        raise ValueError("Only .qa files are supported.")
    if not is_string:
        logger.debug("reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    spans = Parser(source, strict=strict, max_depth=max_depth).parse()

    if check:
        print("ok")
        return

    payload = [span.to_dict() for span in spans]
    depth = max((span.depth() for span in spans), default=0)
    with _json_headroom(depth):
        text = json.dumps(payload, indent=indent or None, ensure_ascii=False)

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        logger.info("wrote %d spans to %s", len(spans), out)
    else:
        print(text)


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the QuickAccount CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as document text instead of a file path.
        - `-o`, `--out`: Write the JSON tree to a file.
        - `--check`: Only validate the document.
        - `--strict`: Treat a missing or malformed `) =>` as an error.
        - `--max-depth`: Maximum span nesting depth.
        - `--indent`: JSON indentation (0 for compact output).
        - `-v`, `--verbose`: Log parser progress to stderr.

    Returns:
        int: 0 on success, 1 if the document failed to parse, 2 if it could
        not be read.
    """
    parser = argparse.ArgumentParser(prog="quickaccount")
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--check", action="store_true", help="Validate only, print 'ok' on success"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on blocks that are not closed with ') =>'",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum nesting depth (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "--indent", type=int, default=2, help="JSON indentation (default: 2)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log parser progress to stderr"
    )

    args = parser.parse_args(argv)
    if args.max_depth < 1:
        parser.error("--max-depth must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        run_quickaccount(
            source=args.source,
            is_string=args.string,
            out=args.out,
            check=args.check,
            strict=args.strict,
            max_depth=args.max_depth,
            indent=args.indent,
        )
    except ParseError as e:
        print(e, file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
