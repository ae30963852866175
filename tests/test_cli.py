import json
import logging
from pathlib import Path

from typer.testing import CliRunner

from wishscan.cli import app
from wishscan.ocr import OcrClient
from wishscan.utils import set_log_level

runner = CliRunner()

EMBEDS = {
    "content": "",
    "embeds": [
        {
            "title": "WISHLIST LEADERBOARD - SERIES",
            "description": "> `7` • **Arcview**\n> `oops` • **Broken**",
        },
        {
            "title": "Arcview",
            "description": "**Cards Collected:** 1/9\n*Total Wishlist:* **42**",
            "fields": [{"name": "Cards", "value": "❤️ `3` **Nocturne**"}],
            "color": 16777215,
        },
        {"title": "Unrelated", "description": "hello"},
    ],
}


def _write(tmp_path: Path, payload) -> Path:
    path = tmp_path / "message.json"
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf8")
    return path


def test_scan_writes_records_per_kind(tmp_path: Path):
    path = _write(tmp_path, EMBEDS)
    out_dir = tmp_path / "out"

    result = runner.invoke(app, ["scan", str(path), "--out-dir", str(out_dir)])

    assert result.exit_code == 0, result.output
    assert "Extracted 3 records (1 rows skipped)." in result.output
    series_lines = (out_dir / "series.jsonl").read_text(encoding="utf8").splitlines()
    assert [json.loads(line) for line in series_lines] == [
        {"wishlist_count": 7, "series": "Arcview"},
        {"wishlist_count": 42, "series": "Arcview"},
    ]
    card = json.loads((out_dir / "cards.jsonl").read_text(encoding="utf8"))
    assert card == {"wishlist_count": 3, "name": "Nocturne", "series": "Arcview"}


def test_scan_dry_run_prints_without_writing(tmp_path: Path):
    path = _write(tmp_path, EMBEDS["embeds"][0])
    out_dir = tmp_path / "out"

    result = runner.invoke(app, ["scan", str(path), "--out-dir", str(out_dir), "--dry-run"])

    assert result.exit_code == 0, result.output
    assert '{"kind": "SeriesRecord", "wishlist_count": 7, "series": "Arcview"}' in result.output
    assert not out_dir.exists()


def test_scan_skips_unreadable_files(tmp_path: Path):
    (tmp_path / "broken.json").write_text("{not json", encoding="utf8")
    _write(tmp_path, [EMBEDS["embeds"][0]])

    result = runner.invoke(app, ["scan", str(tmp_path), "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "Extracted 1 records" in result.output


def test_classify_prints_layout_per_embed(tmp_path: Path):
    path = _write(tmp_path, EMBEDS)

    result = runner.invoke(app, ["classify", str(path)])

    assert result.exit_code == 0, result.output
    assert "message.json#0: WishlistLeaderboardSeries" in result.output
    assert "message.json#1: SeriesCollectionSummary" in result.output
    assert "message.json#2: NoMatch" in result.output


def test_scan_rejects_missing_path(tmp_path: Path):
    result = runner.invoke(app, ["scan", str(tmp_path / "missing.json")])

    assert result.exit_code != 0


def test_drop_requires_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    result = runner.invoke(app, ["drop", "https://cdn.example/drop.webp"])

    assert result.exit_code == 1
    assert "OPENAI_API_KEY is not set." in result.output


def test_drop_reports_ocr_failures(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    def fail(self, source):
        raise RuntimeError("Model output was not valid JSON")

    monkeypatch.setattr(OcrClient, "read_drop", fail)

    result = runner.invoke(app, ["drop", "https://x/y.png"])

    assert result.exit_code == 1
    assert "ERROR while reading https://x/y.png: Model output was not valid JSON" in result.output


def test_classify_applies_configured_log_level(monkeypatch, tmp_path: Path):
    path = _write(tmp_path, EMBEDS)
    monkeypatch.setenv("WISHSCAN_LOG_LEVEL", "error")

    try:
        result = runner.invoke(app, ["classify", str(path)])

        assert result.exit_code == 0, result.output
        assert logging.getLogger("wishscan.cli").level == logging.ERROR
    finally:
        set_log_level("INFO")
