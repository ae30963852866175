from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class LayoutTag(str, Enum):
    """Rendering formats the extractor understands."""

    WISHLIST_SORTED_BY_WISHLIST = "WishlistSortedByWishlist"
    WISHLIST_LEADERBOARD_CHARACTERS = "WishlistLeaderboardCharacters"
    WISHLIST_LEADERBOARD_SERIES = "WishlistLeaderboardSeries"
    SERIES_COLLECTION_SUMMARY = "SeriesCollectionSummary"
    CHARACTER_PROFILE = "CharacterProfile"
    NO_MATCH = "NoMatch"


class FieldBlock(BaseModel):
    """A labelled text blob attached to an embed."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    value: str = ""
    inline: bool = False


class Document(BaseModel):
    """Embed-shaped input unit.

    - title / description: optional text; the description holds one row per line.
    - fields: ordered field blocks, as rendered below the description.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    fields: List[FieldBlock] = Field(default_factory=list)


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class CardRecord(_Record):
    """Wishlist count of a single character card."""

    wishlist_count: int = Field(..., ge=0)
    name: str = Field(..., min_length=1)
    # Taken from the embed title for collection summaries, which may be empty.
    series: str


class SeriesRecord(_Record):
    """Wishlist count of a whole series."""

    wishlist_count: int = Field(..., ge=0)
    series: str = Field(..., min_length=1)


class CharacterProfileRecord(_Record):
    """Statistics shown on a character lookup."""

    series: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    wishlist_count: int
    generated_count: int
    burned_count: int
    three_dee_count: int
    id: str = Field(..., min_length=1)


Record = Union[CardRecord, SeriesRecord, CharacterProfileRecord]


class DropCard(BaseModel):
    """One card read off a drop image, optionally annotated with its wishlist."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str
    series: str
    edition: Optional[str] = None
    wishlist_count: Optional[int] = None


class DropMessage(BaseModel):
    """The parts of a chat message the drop trigger looks at."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    content: str = ""
    guild_id: Optional[str] = None
    attachments: List[str] = Field(default_factory=list)
