"""Shared pytest fixtures for convlog tests."""

import json
from pathlib import Path

import pytest

from convlog.utils.config import Settings
from convlog.utils.schemas import TimestampedLine

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def s3_log(fixtures_dir):
    """Archive log with three conversations, one incomplete message."""
    return fixtures_dir / "201709" / "01" / "05" / "3022.69933758693960.log"


@pytest.fixture
def s3_glob(fixtures_dir):
    """Both archive logs, in path order."""
    return str(fixtures_dir / "2017*" / "**" / "*.log")


@pytest.fixture
def heroku_log(fixtures_dir):
    return fixtures_dir / "heroku" / "drain.log"


@pytest.fixture
def s3_settings():
    return Settings(heroku=False, user_id=False)


@pytest.fixture
def heroku_settings():
    return Settings(heroku=True, user_id=False)


@pytest.fixture
def disclose_settings():
    return Settings(heroku=False, user_id=True)


@pytest.fixture(autouse=True)
def default_settings(monkeypatch, s3_settings):
    """Keep the process environment out of entry points that use the global settings."""
    monkeypatch.setattr("convlog.pipeline.dag.default_settings", s3_settings)
    return s3_settings


@pytest.fixture
def payload():
    """Build a conversation payload; keyword overrides replace whole sections."""

    def _build(**sections):
        data = {
            "CONTEXT": {
                "state": "__INIT__",
                "issuedAt": 1504242188000,
                "data": {"searchedText": "hello\nworld", "selectedArticleId": None},
            },
            "INPUT": {"userId": "U1234", "message": {"type": "text", "text": "hello\nworld"}},
            "OUTPUT": {
                "context": {"state": "CHOOSING_ARTICLE", "data": {"selectedArticleId": "AV-1"}},
                "replies": [{"type": "text", "text": "ok"}],
            },
        }
        data.update(sections)
        return data

    return _build


def framed(payload_obj, timestamp="2017-09-01T05:03:08Z", split_at=None):
    """TimestampedLines for one conversation between markers, JSON split into fragments."""
    text = json.dumps(payload_obj)
    if split_at is None:
        split_at = len(text) // 2
    fragments = [text[:split_at], text[split_at:]]
    texts = ["<----------", *fragments, "---------->"]
    return [TimestampedLine(text=t, timestamp=timestamp) for t in texts]


def write_log(root: Path, rel_path: str, lines) -> Path:
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
