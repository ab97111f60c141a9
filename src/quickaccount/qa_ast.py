"""
Defines the syntax tree produced by the QuickAccount parser.

A parsed document is a list of top-level `Span` nodes (a forest, no wrapping root).

Classes:
    Range:
        One `from..to => title` line: an account-number interval and its display title.

    Span:
        A parenthesized group of ranges and nested spans, with an optional header
        title and a sum label.

    SumTotal, SubTotal:
        The two variants of `SumType`. A span at the top level of the document sums
        into a `SumTotal`; a span nested inside another span sums into a `SubTotal`.

    RangeDict, SpanDict, SumTypeDict:
        TypedDict shapes returned by `to_dict()` for JSON output and inspection.

All nodes are frozen; the tree is built once by the parser and never mutated.

Example:
    Sales (
        3010..3010 => Webshop
    ) => Sum sales

    parses to

    Span(name="Sales", ranges=(Range("Webshop", 3010, 3010),), subspans=(),
         sum_type=SumTotal("Sum sales"))
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Literal, TypedDict, Union


# "from" is a keyword, so the dict keeps the source spelling while the
# dataclass field is from_.
RangeDict = TypedDict("RangeDict", {"title": str, "from": int, "to": int})


class SumTypeDict(TypedDict):
    kind: Literal["sum_total", "sub_total"]
    label: str | None


class SpanDict(TypedDict):
    """
    Serialized form of a Span.

    Fields:
        name (str | None): Optional header title.
        ranges (list[RangeDict]): Ranges in source order.
        subspans (list[SpanDict]): Nested spans in source order.
        sum_type (SumTypeDict): Sum variant and its label.
    """

    name: str | None
    ranges: list[RangeDict]
    subspans: list["SpanDict"]
    sum_type: SumTypeDict


@dataclass(frozen=True)
class Range:
    """
    A range of account numbers and its title, e.g. `3000..3050 => Sales`.

    No ordering is enforced between `from_` and `to`.

    Attributes:
        title (str): Display title, trailing whitespace removed. May be empty.
        from_ (int): Lower account number as written.
        to (int): Upper account number as written.
    """

    title: str
    from_: int
    to: int

    def contains(self, account: int) -> bool:
        """Returns True if `account` lies within the inclusive interval."""
        return self.from_ <= account <= self.to

    def to_dict(self) -> RangeDict:
        return {"title": self.title, "from": self.from_, "to": self.to}


@dataclass(frozen=True)
class SumTotal:
    """Sum row of a top-level span. `label` is None when the span has no label."""

    label: str | None = None

    def to_dict(self) -> SumTypeDict:
        return {"kind": "sum_total", "label": self.label}


@dataclass(frozen=True)
class SubTotal:
    """Sum row of a span nested inside another span."""

    label: str | None = None

    def to_dict(self) -> SumTypeDict:
        return {"kind": "sub_total", "label": self.label}


SumType = Union[SumTotal, SubTotal]
"""Tagged union of the two sum variants."""


@dataclass(frozen=True)
class Span:
    """
    A group of ranges and nested spans.

    Attributes:
        name (str | None): Header title before `(`, or None when there is none.
        ranges (tuple[Range, ...]): Ranges in source order.
        subspans (tuple[Span, ...]): Nested spans in source order.
        sum_type (SumType): `SumTotal` at the top level, `SubTotal` when nested.
    """

    name: str | None
    ranges: tuple[Range, ...] = ()
    subspans: tuple["Span", ...] = ()
    sum_type: SumType = field(default_factory=SumTotal)

    @property
    def label(self) -> str | None:
        """The label of the span's sum row."""
        return self.sum_type.label

    def walk(self) -> Iterator["Span"]:
        """Yields this span and every nested span, depth first in source order."""
        stack: list[Span] = [self]
        while stack:
            span = stack.pop()
            yield span
            stack.extend(reversed(span.subspans))

    def depth(self) -> int:
        """Number of span levels from this span down to its deepest descendant."""
        # no recursion: chains may be nested deeper than the interpreter stack
        deepest = 0
        stack: list[tuple[Span, int]] = [(self, 1)]
        while stack:
            span, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((sub, level + 1) for sub in span.subspans)
        return deepest

    def to_dict(self) -> SpanDict:
        root = self._shallow_dict()
        stack: list[tuple[Span, SpanDict]] = [(self, root)]
        while stack:
            span, node = stack.pop()
            for sub in span.subspans:
                child = sub._shallow_dict()
                node["subspans"].append(child)
                stack.append((sub, child))
        return root

    def _shallow_dict(self) -> SpanDict:
        return {
            "name": self.name,
            "ranges": [r.to_dict() for r in self.ranges],
            "subspans": [],
            "sum_type": self.sum_type.to_dict(),
        }


__all__ = [
    "Range",
    "RangeDict",
    "Span",
    "SpanDict",
    "SubTotal",
    "SumTotal",
    "SumType",
    "SumTypeDict",
]
