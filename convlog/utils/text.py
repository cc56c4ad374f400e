"""Text helpers shared by record projection and export."""
import hashlib
from datetime import datetime, timezone
from typing import Any

RETURN_SYMBOL = "↵"


def sha256_hex(value: str | None) -> str:
    """Lowercase hex SHA-256 of the UTF-8 bytes; empty string for falsy input."""
    if not value:
        return ""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def collapse_lines(value: str | None) -> str:
    """Replace every CR or LF with the return symbol so a CSV row stays on one line."""
    return (value or "").replace("\r", RETURN_SYMBOL).replace("\n", RETURN_SYMBOL)


def to_iso_millis(dt: datetime) -> str:
    """UTC ISO-8601 with millisecond precision, e.g. 2017-09-01T05:03:08.000Z."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{dt.microsecond // 1000:03d}Z"


def parse_timestamp(ts: str) -> datetime:
    """Parse an ISO-8601 timestamp; raises ValueError when malformed."""
    return datetime.fromisoformat(ts.replace("Z", "+00:00"))


def format_issued_at(value: Any) -> str:
    """Render CONTEXT.issuedAt (epoch millis or date string); empty string if unparseable."""
    if value is None or isinstance(value, bool):
        return ""
    try:
        if isinstance(value, (int, float)):
            return to_iso_millis(datetime.fromtimestamp(value / 1000, tz=timezone.utc))
        if isinstance(value, str):
            return to_iso_millis(parse_timestamp(value.strip()))
    except (ValueError, OverflowError, OSError):
        return ""
    return ""
