"""Detect card drop messages and hand their image to OCR.

This sits next to the extraction engine but shares nothing with it: the
trigger has its own predicate and only calls its collaborators.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from .models import DropCard, DropMessage
from .store import CardStore
from .utils import get_logger

LOGGER = get_logger(__name__)

DROP_SUFFIX = "is dropping the cards"
EXTRA_DROP_TEXT = "Your extra drop is being used."
ALL_SCOPE = "_all"

OcrExtract = Callable[[str], Any]
ConfigLookup = Callable[[Optional[str], str], Any]


def is_drop_message(content: Optional[str]) -> bool:
    if not content:
        return False
    return content.endswith(DROP_SUFFIX) or content == EXTRA_DROP_TEXT


def dropper_id(content: Optional[str]) -> Optional[str]:
    """Return the user id mentioned as ``<@id>``, if any."""
    if not content:
        return None
    head = content.find("<@")
    if head == -1:
        return None
    tail = content.find(">", head + 2)
    if tail == -1:
        return None
    return content[head + 2 : tail] or None


@dataclass
class DropResult:
    dropper: Optional[str]
    url: str
    ocr: Any
    server_config: Any = None


class DropTrigger:
    """Run OCR on drop images and fetch the guild configuration.

    ``ocr_extract`` receives the image URL; ``config_lookup`` receives the
    guild id and the ``"_all"`` scope.  When a :class:`CardStore` is given and
    OCR returns :class:`DropCard` entries, they are annotated with the stored
    wishlist counts.
    """

    def __init__(
        self,
        ocr_extract: OcrExtract,
        config_lookup: ConfigLookup,
        store: Optional[CardStore] = None,
    ) -> None:
        self.ocr_extract = ocr_extract
        self.config_lookup = config_lookup
        self.store = store

    def filter(self, message: DropMessage) -> bool:
        return is_drop_message(message.content)

    def run(self, message: DropMessage, url: Optional[str] = None) -> Optional[DropResult]:
        if not (message.attachments or url):
            LOGGER.debug("Drop message without image, nothing to read")
            return None
        url = url or message.attachments[0]
        if not url:
            return None

        LOGGER.info("Reading drop image %s", url)
        ocr = self.ocr_extract(url)
        if self.store is not None and isinstance(ocr, list):
            cards: List[DropCard] = [card for card in ocr if isinstance(card, DropCard)]
            if len(cards) == len(ocr):
                ocr = self.store.lookup(cards)

        server_config = self.config_lookup(message.guild_id, ALL_SCOPE)
        return DropResult(
            dropper=dropper_id(message.content),
            url=url,
            ocr=ocr,
            server_config=server_config,
        )
