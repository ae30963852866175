"""In-memory record store with the matching rules used for card lookups.

Names shown by the leaderboard are sometimes cut off with ``...``; a cut-off
name or series matches a stored card by prefix and never creates a new entry.
Cards read off drop images are matched more loosely: one differing character
is accepted when the two characters are a common OCR confusion.
"""
from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from .models import CardRecord, CharacterProfileRecord, DropCard, SeriesRecord
from .utils import get_logger

LOGGER = get_logger(__name__)

CONFUSABLE_PAIRS: FrozenSet[FrozenSet[str]] = frozenset(
    frozenset(pair)
    for pair in (
        ("o", "0"),
        ("l", "i"),
        ("1", "]"),
        ("y", "v"),
        ("$", "s"),
        ("i", "!"),
        ("s", "5"),
        ("©", "o"),
        ("1", "i"),
        ("a", "é"),
    )
)

# Punctuation that OCR produces in place of letters; kept so the pairs above can match.
_KEEP = frozenset("$!]©")


def normalize_key(text: str) -> Tuple[bool, str]:
    """Return ``(truncated, key)`` for a displayed name or series."""
    stripped = text.strip()
    truncated = stripped.endswith("..")
    body = stripped.rstrip(".") if truncated else stripped
    key = "".join(c for c in body.lower() if c.isalnum() or c in _KEEP)
    return truncated, key


def keys_match(stored: str, wanted: str, truncated: bool, tolerant: bool = False) -> bool:
    """Compare normalized keys; ``truncated`` compares ``wanted`` as a prefix."""
    if truncated and not wanted:
        # A bare "..." says nothing about the card.
        return False
    if truncated:
        stored = stored[: len(wanted)]
    if stored == wanted:
        return True
    if not tolerant or len(stored) != len(wanted):
        return False
    diffs = [(a, b) for a, b in zip(stored, wanted) if a != b]
    return len(diffs) == 1 and frozenset(diffs[0]) in CONFUSABLE_PAIRS


class CardStore:
    """Upsert sink that keeps the latest wishlist numbers in memory."""

    def __init__(self) -> None:
        self.cards: Dict[Tuple[str, str], CardRecord] = {}
        self.series: Dict[str, SeriesRecord] = {}
        self.profiles: Dict[str, CharacterProfileRecord] = {}

    def _find(
        self, name: str, series: str, tolerant: bool = False
    ) -> Optional[Tuple[str, str]]:
        name_cut, name_key = normalize_key(name)
        series_cut, series_key = normalize_key(series)
        if not (name_cut or series_cut or tolerant):
            key = (name_key, series_key)
            return key if key in self.cards else None
        for stored_name, stored_series in self.cards:
            if keys_match(stored_name, name_key, name_cut, tolerant) and keys_match(
                stored_series, series_key, series_cut, tolerant
            ):
                return stored_name, stored_series
        return None

    def upsert_card(self, record: CardRecord) -> Optional[CardRecord]:
        key = self._find(record.name, record.series)
        if key is not None:
            existing = self.cards[key]
            updated = existing.model_copy(update={"wishlist_count": record.wishlist_count})
            self.cards[key] = updated
            return updated

        name_cut, name_key = normalize_key(record.name)
        series_cut, series_key = normalize_key(record.series)
        if name_cut or series_cut:
            LOGGER.debug("No stored card for truncated %s / %s", record.name, record.series)
            return None
        self.cards[(name_key, series_key)] = record
        return record

    def upsert_series(self, record: SeriesRecord) -> SeriesRecord:
        self.series[normalize_key(record.series)[1]] = record
        return record

    def upsert_character_profile(
        self, record: CharacterProfileRecord
    ) -> CharacterProfileRecord:
        self.profiles[record.id] = record
        return record

    def lookup(self, cards: Iterable[DropCard]) -> List[DropCard]:
        """Return ``cards`` with ``wishlist_count`` filled in where a card is known."""
        found: List[DropCard] = []
        for card in cards:
            key = self._find(card.name, card.series, tolerant=True)
            if key is None:
                found.append(card)
                continue
            stored = self.cards[key]
            found.append(card.model_copy(update={"wishlist_count": stored.wishlist_count}))
        return found
