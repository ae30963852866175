"""Delimiter grammars for the embed layouts.

Every layout is plain data: an ordered list of :class:`FieldRule` objects, each
pairing a field name with a locator and a value kind.  Two locators cover all
known layouts:

* :class:`Between` slices the text between a start and an end delimiter, both
  searched left to right from the first occurrence of ``start``.
* :class:`Token` splits on a separator and picks the n-th piece.

Rules raise :class:`RowMalformed` on a missing delimiter, an empty value or a
count that is not a base-10 integer.  Callers decide what a failure means.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from .models import LayoutTag

_COUNT_RE = re.compile(r"-?(?:[0-9]{1,3}(?:,[0-9]{3})+|[0-9]+)")


class RowMalformed(ValueError):
    """A row did not fit the grammar of its layout."""

    def __init__(
        self,
        reason: str,
        *,
        field: Optional[str] = None,
        delimiter: Optional[str] = None,
    ) -> None:
        super().__init__(reason)
        self.reason = reason
        self.field = field
        self.delimiter = delimiter


def slice_between(text: str, start: str, end: str) -> str:
    """Return the text after the first ``start`` and before the next ``end``."""
    head = text.find(start)
    if head == -1:
        raise RowMalformed(f"missing delimiter {start!r}", delimiter=start)
    rest = text[head + len(start) :]
    tail = rest.find(end)
    if tail == -1:
        raise RowMalformed(f"missing delimiter {end!r}", delimiter=end)
    return rest[:tail]


def parse_count(raw: str) -> int:
    """Parse a displayed count such as ``12`` or ``1,234``."""
    value = raw.strip()
    if not _COUNT_RE.fullmatch(value):
        raise RowMalformed(f"not an integer: {raw!r}")
    return int(value.replace(",", ""))


@dataclass(frozen=True)
class Between:
    start: str
    end: str

    def locate(self, text: str) -> str:
        return slice_between(text, self.start, self.end)


@dataclass(frozen=True)
class Token:
    separator: str
    index: int

    def locate(self, text: str) -> str:
        parts = text.split(self.separator)
        if len(parts) <= self.index:
            raise RowMalformed(
                f"expected at least {self.index + 1} pieces around {self.separator!r}",
                delimiter=self.separator,
            )
        return parts[self.index]


Locator = Union[Between, Token]


@dataclass(frozen=True)
class FieldRule:
    """Locate one field in a line and convert it to ``kind``."""

    name: str
    locator: Locator
    kind: type = str

    def apply(self, text: str) -> Any:
        try:
            raw = self.locator.locate(text).strip()
            if not raw:
                raise RowMalformed("empty value")
            if self.kind is int:
                return parse_count(raw)
            return raw
        except RowMalformed as exc:
            raise RowMalformed(exc.reason, field=self.name, delimiter=exc.delimiter) from exc


@dataclass(frozen=True)
class RowGrammar:
    """Ordered field rules applied to a single line."""

    fields: Tuple[FieldRule, ...]

    def parse(self, row: str) -> Dict[str, Any]:
        return {rule.name: rule.apply(row) for rule in self.fields}


@dataclass(frozen=True)
class PositionalRule:
    """Apply ``rule`` to the line at ``row`` (negative counts from the end)."""

    row: int
    rule: FieldRule

    def apply(self, rows: Tuple[str, ...]) -> Any:
        try:
            line = rows[self.row]
        except IndexError:
            raise RowMalformed(
                f"only {len(rows)} rows, no row {self.row}", field=self.rule.name
            ) from None
        return self.rule.apply(line)


WISHLIST_COUNT = FieldRule("wishlist_count", Between("> `", "`"), int)

SORTED_BY_WISHLIST = RowGrammar(
    (
        WISHLIST_COUNT,
        FieldRule("name", Between("**", "**")),
        FieldRule("series", Between("•  *", "*")),
    )
)

LEADERBOARD_CHARACTERS = RowGrammar(
    (
        WISHLIST_COUNT,
        FieldRule("name", Between("` • **", "** • *")),
        FieldRule("series", Between("** • *", "*")),
    )
)

LEADERBOARD_SERIES = RowGrammar(
    (
        WISHLIST_COUNT,
        FieldRule("series", Between("` • **", "**")),
    )
)

COLLECTION_ROW = RowGrammar(
    (
        FieldRule("wishlist_count", Between("\u2764\ufe0f `", "`"), int),
        FieldRule("name", Between("**", "**")),
    )
)

COLLECTION_TOTAL = FieldRule("wishlist_count", Between("*Total Wishlist:* **", "**"), int)

_STAT = "➜** `"

CHARACTER_PROFILE: Tuple[PositionalRule, ...] = (
    PositionalRule(0, FieldRule("series", Token("**", 2))),
    PositionalRule(1, FieldRule("category", Token("**", 2))),
    PositionalRule(2, FieldRule("wishlist_count", Between(_STAT, "`"), int)),
    PositionalRule(3, FieldRule("generated_count", Between(_STAT, "`"), int)),
    PositionalRule(4, FieldRule("burned_count", Between(_STAT, "`"), int)),
    PositionalRule(5, FieldRule("three_dee_count", Between(_STAT, "`"), int)),
    PositionalRule(-1, FieldRule("id", Between("** `", "`"))),
)

ROW_GRAMMARS: Dict[LayoutTag, RowGrammar] = {
    LayoutTag.WISHLIST_SORTED_BY_WISHLIST: SORTED_BY_WISHLIST,
    LayoutTag.WISHLIST_LEADERBOARD_CHARACTERS: LEADERBOARD_CHARACTERS,
    LayoutTag.WISHLIST_LEADERBOARD_SERIES: LEADERBOARD_SERIES,
    LayoutTag.SERIES_COLLECTION_SUMMARY: COLLECTION_ROW,
}
