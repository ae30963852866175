"""Pick the layout of an embed from its title and description markers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .models import Document, LayoutTag


@dataclass(frozen=True)
class ClassificationRule:
    """Match ``marker`` against one text attribute of a document.

    ``exact`` compares the whole attribute, otherwise a substring is enough.
    """

    tag: LayoutTag
    attribute: str  # "title" | "description"
    marker: str
    exact: bool = False

    def matches(self, document: Document) -> bool:
        text: Optional[str] = getattr(document, self.attribute)
        if text is None:
            return False
        if self.exact:
            return text == self.marker
        return self.marker in text


# Order is priority: markers overlap between layouts and the first hit wins.
CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(LayoutTag.WISHLIST_SORTED_BY_WISHLIST, "title", "(Sort By: Wishlist)"),
    ClassificationRule(
        LayoutTag.WISHLIST_LEADERBOARD_CHARACTERS,
        "title",
        "WISHLIST LEADERBOARD - CHARACTERS",
        exact=True,
    ),
    ClassificationRule(
        LayoutTag.WISHLIST_LEADERBOARD_SERIES,
        "title",
        "WISHLIST LEADERBOARD - SERIES",
        exact=True,
    ),
    ClassificationRule(LayoutTag.SERIES_COLLECTION_SUMMARY, "description", "Cards Collected:"),
    ClassificationRule(LayoutTag.CHARACTER_PROFILE, "description", "Card ID:"),
)


def classify(document: Document) -> LayoutTag:
    """Return the layout of ``document``, or ``LayoutTag.NO_MATCH``."""
    for rule in CLASSIFICATION_RULES:
        if rule.matches(document):
            return rule.tag
    return LayoutTag.NO_MATCH


def is_eligible(document: Document) -> bool:
    """True when some layout rule matches, i.e. the document is worth extracting."""
    return classify(document) is not LayoutTag.NO_MATCH
