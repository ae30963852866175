"""Turn a classified embed into wishlist records.

Rows that do not fit their layout are skipped; the rest of the document is
still extracted.  Each skipped row produces a :class:`RowDiagnostic` that is
logged and handed to the optional ``on_malformed`` callback.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from pydantic import ValidationError

from .grammar import (
    CHARACTER_PROFILE,
    COLLECTION_TOTAL,
    ROW_GRAMMARS,
    RowGrammar,
    RowMalformed,
)
from .models import (
    CardRecord,
    CharacterProfileRecord,
    Document,
    LayoutTag,
    Record,
    SeriesRecord,
)
from .utils import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class RowDiagnostic:
    """Why a row (or a document-level record) was dropped."""

    layout: LayoutTag
    row_index: Optional[int]
    field: Optional[str]
    delimiter: Optional[str]
    reason: str


@dataclass
class ExtractionReport:
    layout: LayoutTag
    records: List[Record] = field(default_factory=list)
    diagnostics: List[RowDiagnostic] = field(default_factory=list)


DiagnosticHook = Callable[[RowDiagnostic], None]


class _RowReporter:
    """Reports malformed rows for one extraction run."""

    def __init__(self, layout: LayoutTag, hook: Optional[DiagnosticHook]) -> None:
        self.layout = layout
        self.hook = hook

    def malformed(self, row_index: Optional[int], exc: Exception) -> None:
        if isinstance(exc, RowMalformed):
            diagnostic = RowDiagnostic(
                self.layout, row_index, exc.field, exc.delimiter, exc.reason
            )
        else:
            diagnostic = RowDiagnostic(self.layout, row_index, None, None, str(exc))
        LOGGER.warning(
            "Skipping %s row %s: %s (field=%s)",
            self.layout.value,
            "-" if row_index is None else row_index,
            diagnostic.reason,
            diagnostic.field,
        )
        if self.hook is not None:
            self.hook(diagnostic)


def split_rows(blob: Optional[str]) -> List[Tuple[int, str]]:
    """Return ``(line_number, line)`` for every non-blank line of ``blob``."""
    if not blob:
        return []
    return [(index, line) for index, line in enumerate(blob.split("\n")) if line.strip()]


def _tabular(
    blob: Optional[str],
    grammar: RowGrammar,
    build: Callable[..., Record],
    reporter: _RowReporter,
    **extra: str,
) -> Iterator[Record]:
    for index, line in split_rows(blob):
        try:
            yield build(**grammar.parse(line), **extra)
        except (RowMalformed, ValidationError) as exc:
            reporter.malformed(index, exc)


def _card_rows(document: Document, tag: LayoutTag, reporter: _RowReporter) -> Iterator[Record]:
    return _tabular(document.description, ROW_GRAMMARS[tag], CardRecord, reporter)


def _series_rows(document: Document, tag: LayoutTag, reporter: _RowReporter) -> Iterator[Record]:
    return _tabular(document.description, ROW_GRAMMARS[tag], SeriesRecord, reporter)


def _collection_summary(
    document: Document, tag: LayoutTag, reporter: _RowReporter
) -> Iterator[Record]:
    series = (document.title or "").strip()

    if document.fields:
        yield from _tabular(
            document.fields[0].value, ROW_GRAMMARS[tag], CardRecord, reporter, series=series
        )
    else:
        reporter.malformed(None, RowMalformed("embed has no field block"))

    if not series:
        LOGGER.debug("No series title, skipping the total wishlist record")
        return

    try:
        total = COLLECTION_TOTAL.apply(document.description or "")
        yield SeriesRecord(wishlist_count=total, series=series)
    except (RowMalformed, ValidationError) as exc:
        reporter.malformed(None, exc)


def _character_profile(
    document: Document, tag: LayoutTag, reporter: _RowReporter
) -> Iterator[Record]:
    lines = tuple(line for _, line in split_rows(document.description))
    try:
        values = {rule.rule.name: rule.apply(lines) for rule in CHARACTER_PROFILE}
        name = (document.title or "").strip()
        if not name:
            raise RowMalformed("embed has no title", field="name")
        yield CharacterProfileRecord(name=name, **values)
    except (RowMalformed, ValidationError) as exc:
        reporter.malformed(None, exc)


_LAYOUTS: Dict[LayoutTag, Callable[[Document, LayoutTag, _RowReporter], Iterator[Record]]] = {
    LayoutTag.WISHLIST_SORTED_BY_WISHLIST: _card_rows,
    LayoutTag.WISHLIST_LEADERBOARD_CHARACTERS: _card_rows,
    LayoutTag.WISHLIST_LEADERBOARD_SERIES: _series_rows,
    LayoutTag.SERIES_COLLECTION_SUMMARY: _collection_summary,
    LayoutTag.CHARACTER_PROFILE: _character_profile,
}


def iter_records(
    document: Document,
    tag: LayoutTag,
    on_malformed: Optional[DiagnosticHook] = None,
) -> Iterator[Record]:
    """Lazily yield the records of ``document`` in row order."""
    handler = _LAYOUTS.get(tag)
    if handler is None:
        return iter(())
    return handler(document, tag, _RowReporter(tag, on_malformed))


def extract(document: Document, tag: LayoutTag) -> List[Record]:
    """Return every record ``document`` yields under ``tag``."""
    return list(iter_records(document, tag))


def extract_report(document: Document, tag: LayoutTag) -> ExtractionReport:
    """Like :func:`extract` but keep the diagnostics of skipped rows."""
    report = ExtractionReport(layout=tag)
    report.records.extend(iter_records(document, tag, report.diagnostics.append))
    LOGGER.debug(
        "%s: %s records, %s skipped",
        tag.value,
        len(report.records),
        len(report.diagnostics),
    )
    return report
