"""Attach a timestamp to every log line.

Two log layouts are supported:

- S3 archive (path mode): lines are pure content and the timestamp lives in
  the directory structure, e.g. ``201709/01/05/0308.70025261277880.log``.
- Heroku drain (embedded mode): every line carries a syslog prefix, e.g.
  ``112 <190>1 2018-07-16T17:32:16.082803+00:00 app web.1 - - ||LOG||<----------``.
  Lines without the ``||LOG||`` marker are other app output and are dropped.
"""
import re
from typing import Iterable, Iterator, Optional

from convlog.utils.config import Settings, settings as default_settings
from convlog.utils.schemas import RawLine, TimestampedLine

LOG_MARKER = "||LOG||"

PATH_PATTERN = re.compile(r"(\d{4})(\d{2})/(\d{2})/(\d{2})/(\d{2})(\d{2})\.\d+\.log$")
EMBEDDED_PATTERN = re.compile(
    r".*(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{6}\+\d{2}:\d{2}) .+ \|\|LOG\|\|(.*)"
)


class TimestampError(ValueError):
    """A file path or log line does not carry a timestamp in the expected form."""


def timestamp_from_path(source_id: str) -> str:
    match = PATH_PATTERN.search(source_id)
    if not match:
        raise TimestampError(f"Cannot derive timestamp from file path: {source_id}")
    year, month, day, hour, minute, second = match.groups()
    return f"{year}-{month}-{day}T{hour}:{minute}:{second}Z"


def split_embedded(text: str) -> Optional[TimestampedLine]:
    """Return the content after the log marker with its prefix timestamp, or None if unmarked."""
    if LOG_MARKER not in text:
        return None
    match = EMBEDDED_PATTERN.match(text)
    if not match:
        raise TimestampError(f"Malformed log line: {text!r}")
    timestamp, content = match.groups()
    return TimestampedLine(text=content, timestamp=timestamp)


class TimestampExtractor:
    """Turns RawLines into TimestampedLines in the configured mode."""

    def __init__(self, settings: Settings | None = None):
        self.embedded = (settings or default_settings).heroku

    def extract(self, lines: Iterable[RawLine]) -> Iterator[TimestampedLine]:
        if self.embedded:
            for line in lines:
                stamped = split_embedded(line.text)
                if stamped is not None:
                    yield stamped
            return

        # Path mode: every line of a file shares the same timestamp
        current_source, current_ts = None, ""
        for line in lines:
            if line.source_id != current_source:
                current_source, current_ts = line.source_id, timestamp_from_path(line.source_id)
            yield TimestampedLine(text=line.text, timestamp=current_ts)
