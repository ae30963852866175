"""Hand extracted records to a storage backend."""
from __future__ import annotations

import json
import pathlib
from typing import Dict, Iterable, Protocol

from .models import CardRecord, CharacterProfileRecord, Record, SeriesRecord
from .utils import get_logger

LOGGER = get_logger(__name__)


class RecordSink(Protocol):
    def upsert_card(self, record: CardRecord) -> object: ...

    def upsert_series(self, record: SeriesRecord) -> object: ...

    def upsert_character_profile(self, record: CharacterProfileRecord) -> object: ...


def emit(records: Iterable[Record], sink: RecordSink) -> int:
    """Send each record to the matching ``sink`` entry point, in order.

    Return values of the sink are ignored.  Returns the number of records sent.
    """
    count = 0
    for record in records:
        if isinstance(record, CardRecord):
            sink.upsert_card(record)
        elif isinstance(record, SeriesRecord):
            sink.upsert_series(record)
        elif isinstance(record, CharacterProfileRecord):
            sink.upsert_character_profile(record)
        else:
            raise TypeError(f"Unsupported record type: {type(record).__name__}")
        count += 1
    return count


class JsonLinesSink:
    """Append records to one ``.jsonl`` file per record kind."""

    FILENAMES: Dict[type, str] = {
        CardRecord: "cards.jsonl",
        SeriesRecord: "series.jsonl",
        CharacterProfileRecord: "characters.jsonl",
    }

    def __init__(self, output_dir: str | pathlib.Path) -> None:
        self.output_dir = pathlib.Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def _append(self, record: Record) -> pathlib.Path:
        output_path = self.output_dir / self.FILENAMES[type(record)]
        with output_path.open("a", encoding="utf8") as handle:
            json.dump(record.model_dump(), handle, ensure_ascii=False)
            handle.write("\n")
        LOGGER.debug("Appended %s to %s", type(record).__name__, output_path)
        return output_path

    def upsert_card(self, record: CardRecord) -> pathlib.Path:
        return self._append(record)

    def upsert_series(self, record: SeriesRecord) -> pathlib.Path:
        return self._append(record)

    def upsert_character_profile(self, record: CharacterProfileRecord) -> pathlib.Path:
        return self._append(record)
