"""Logging and error helpers shared by the scanner modules."""
from __future__ import annotations

import json
import logging
import pathlib
from typing import Any, Iterator, List, Optional

LOGGER_NAME = "wishscan"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module level logger configured for the scanner."""
    logger_name = name or LOGGER_NAME
    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "[%(levelname)s] %(name)s: %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def set_log_level(level: str | int) -> None:
    """Apply *level* to every logger created through :func:`get_logger`."""
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if isinstance(logger, logging.Logger) and name.startswith(LOGGER_NAME):
            logger.setLevel(level)


class ScanError(RuntimeError):
    """Raised when an input file cannot be turned into embeds."""


def load_embeds(path: pathlib.Path) -> List[dict]:
    """Read the embed payloads stored in a JSON file.

    Three shapes are accepted: a single embed object, a list of embeds, or a
    message object carrying an ``embeds`` list.
    """
    try:
        with path.open("r", encoding="utf8") as handle:
            data: Any = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise ScanError(f"Could not read {path}: {exc}") from exc

    if isinstance(data, dict) and isinstance(data.get("embeds"), list):
        data = data["embeds"]
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ScanError(f"{path} does not contain an embed object or list")

    embeds = [item for item in data if isinstance(item, dict)]
    if not embeds:
        raise ScanError(f"{path} does not contain any embeds")
    return embeds


def iter_json_files(target: pathlib.Path) -> Iterator[pathlib.Path]:
    """Yield *target* itself or the ``.json`` files of a directory, sorted."""
    if target.is_dir():
        yield from sorted(p for p in target.iterdir() if p.suffix.lower() == ".json")
    else:
        yield target
