import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class ScanConfig:
    """Runtime settings for the scanner CLI and OCR client."""

    out_dir: Path
    log_level: str = "INFO"
    ocr_model: str = "gpt-4o"
    openai_api_key: Optional[str] = None


def load_config(
    out_dir: Optional[str] = None,
    log_level: Optional[str] = None,
    ocr_model: Optional[str] = None,
) -> ScanConfig:
    root = Path(out_dir or os.getenv("WISHSCAN_OUT_DIR", "output")).expanduser().resolve()

    cfg = ScanConfig(
        out_dir=root,
        log_level=(log_level or os.getenv("WISHSCAN_LOG_LEVEL", "INFO")).upper(),
        ocr_model=ocr_model or os.getenv("WISHSCAN_OCR_MODEL", "gpt-4o"),
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
    )
    return cfg
