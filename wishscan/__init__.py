"""Wishlist embed scanning package."""

from .models import (
    CardRecord,
    CharacterProfileRecord,
    Document,
    DropCard,
    DropMessage,
    FieldBlock,
    LayoutTag,
    Record,
    SeriesRecord,
)
from .classifier import CLASSIFICATION_RULES, ClassificationRule, classify, is_eligible
from .grammar import RowMalformed, parse_count, slice_between
from .extractor import ExtractionReport, RowDiagnostic, extract, extract_report, iter_records
from .sink import JsonLinesSink, RecordSink, emit
from .store import CardStore
from .drop_trigger import DropResult, DropTrigger, dropper_id, is_drop_message
from .ocr import OcrClient, image_to_data_url
from .config import ScanConfig, load_config
from .utils import ScanError, get_logger
from .cli import main

__all__ = [
    "CardRecord",
    "CharacterProfileRecord",
    "Document",
    "DropCard",
    "DropMessage",
    "FieldBlock",
    "LayoutTag",
    "Record",
    "SeriesRecord",
    "CLASSIFICATION_RULES",
    "ClassificationRule",
    "classify",
    "is_eligible",
    "RowMalformed",
    "parse_count",
    "slice_between",
    "ExtractionReport",
    "RowDiagnostic",
    "extract",
    "extract_report",
    "iter_records",
    "JsonLinesSink",
    "RecordSink",
    "emit",
    "CardStore",
    "DropResult",
    "DropTrigger",
    "dropper_id",
    "is_drop_message",
    "OcrClient",
    "image_to_data_url",
    "ScanConfig",
    "load_config",
    "ScanError",
    "get_logger",
    "main",
]
