"""Reassemble conversation payloads framed by log markers into flat records.

The bot logs each turn as a JSON document split over several lines::

    <----------
    {"CONTEXT": {...},
    "INPUT": {...},
    "OUTPUT": {...}}
    ---------->

Fragments between the markers are concatenated without separator and parsed
when the closing marker arrives.
"""
import json
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from pydantic import ValidationError

from convlog.utils.config import Settings, settings as default_settings
from convlog.utils.logger import logger
from convlog.utils.schemas import Conversation, Record, TimestampedLine
from convlog.utils.text import (
    RETURN_SYMBOL,
    collapse_lines,
    format_issued_at,
    parse_timestamp,
    sha256_hex,
    to_iso_millis,
)

OPEN_MARKER = "<----------"
CLOSE_MARKER = "---------->"


@dataclass
class AccumulatorState:
    """Fragments collected since the last marker. One per pipeline run (or per file)."""

    fragments: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.fragments)

    def is_empty(self) -> bool:
        return not any(self.fragments)

    def append(self, fragment: str) -> None:
        self.fragments.append(fragment)

    def clear(self) -> None:
        self.fragments.clear()


def project_record(conversation: Conversation, timestamp: str, disclose_user_id: bool = False) -> Record:
    """Flatten a parsed conversation into a Record stamped with the log line's time."""
    context, user_input, output = conversation.context, conversation.input, conversation.output
    context_data = context.data
    output_data = output.context.data
    replies = RETURN_SYMBOL.join(r.text or r.alt_text or "" for r in output.replies or [])

    return Record(
        timestamp=to_iso_millis(parse_timestamp(timestamp)),
        user_id=user_input.user_id if disclose_user_id else None,
        user_id_sha256=sha256_hex(user_input.user_id),
        input_message_text=collapse_lines(user_input.message and user_input.message.text),
        context_issued_at=format_issued_at(context.issued_at),
        context_data_searched_text=collapse_lines(context_data and context_data.searched_text),
        context_state=context.state,
        context_data_selected_article_id=context_data and context_data.selected_article_id,
        context_data_selected_reply_id=context_data and context_data.selected_reply_id,
        output_context_state=output.context.state,
        output_context_data_selected_article_id=output_data and output_data.selected_article_id,
        output_context_data_selected_reply_id=output_data and output_data.selected_reply_id,
        output_replies=collapse_lines(replies),
    )


class ConversationAssembler:
    """Stateful marker-driven accumulator; emits a Record per well-formed payload."""

    def __init__(self, state: AccumulatorState | None = None, settings: Settings | None = None):
        self.state = state if state is not None else AccumulatorState()
        self.disclose_user_id = (settings or default_settings).user_id

    def feed(self, line: TimestampedLine) -> Optional[Record]:
        if line.text == OPEN_MARKER:
            if not self.state.is_empty():
                logger.info("incomplete_message", timestamp=line.timestamp, detail="ignoring")
            self.state.clear()
            return None

        if line.text == CLOSE_MARKER:
            try:
                return self._close(line.timestamp)
            finally:
                self.state.clear()

        self.state.append(line.text)
        return None

    def _close(self, timestamp: str) -> Optional[Record]:
        try:
            payload = json.loads(self.state.text)
        except json.JSONDecodeError:
            logger.error("message_parse_failed", timestamp=timestamp, detail="skipping")
            return None

        try:
            conversation = Conversation.model_validate(payload)
            return project_record(conversation, timestamp, self.disclose_user_id)
        except (ValidationError, ValueError, TypeError, AttributeError) as e:
            logger.error("message_invalid", timestamp=timestamp, error=str(e))
            return None

    def assemble(self, lines: Iterable[TimestampedLine]) -> Iterator[Record]:
        for line in lines:
            record = self.feed(line)
            if record is not None:
                yield record
