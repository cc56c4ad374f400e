"""Schemas for log lines, conversation payloads and output records."""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class RawLine(BaseModel):
    """One physical line of a log file."""

    source_id: str
    text: str


class TimestampedLine(BaseModel):
    """Line text with the timestamp it was logged at."""

    text: str
    timestamp: str


# ---------------------------------------------------------------------------
# Conversation payload, as written between the log markers.
# Lenient: unknown keys are kept, only the sections a record needs are required.
# ---------------------------------------------------------------------------


class _Payload(BaseModel):
    # Numeric ids and states are passed through as text
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)


class ContextData(_Payload):
    searched_text: Optional[str] = Field(default=None, alias="searchedText")
    selected_article_id: Optional[str] = Field(default=None, alias="selectedArticleId")
    selected_reply_id: Optional[str] = Field(default=None, alias="selectedReplyId")


class ConversationContext(_Payload):
    state: Optional[str] = None
    issued_at: Any = Field(default=None, alias="issuedAt")
    data: Optional[ContextData] = None


class InputMessage(_Payload):
    text: Optional[str] = None


class ConversationInput(_Payload):
    # userId is hashed, so it must really be a string
    model_config = ConfigDict(coerce_numbers_to_str=False)

    user_id: Optional[str] = Field(default=None, alias="userId")
    message: Optional[InputMessage] = None


class OutputContext(_Payload):
    state: Optional[str] = None
    data: Optional[ContextData] = None


class Reply(_Payload):
    text: Optional[str] = None
    alt_text: Optional[str] = Field(default=None, alias="altText")


class ConversationOutput(_Payload):
    context: OutputContext
    replies: Optional[list[Reply]] = None


class Conversation(_Payload):
    """One bot turn: the state before, the user input, and the bot output."""

    context: ConversationContext = Field(..., alias="CONTEXT")
    input: ConversationInput = Field(..., alias="INPUT")
    output: ConversationOutput = Field(..., alias="OUTPUT")


# ---------------------------------------------------------------------------
# Output record
# ---------------------------------------------------------------------------


class Record(BaseModel):
    """Flat record projected from one conversation; keys follow the dotted payload paths."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: str
    user_id: Optional[str] = Field(default=None, alias="userId")
    user_id_sha256: str = Field(default="", alias="userIdSha256")
    input_message_text: str = Field(default="", alias="input.message.text")
    context_issued_at: str = Field(default="", alias="context.issuedAt")
    context_data_searched_text: str = Field(default="", alias="context.data.searchedText")
    context_state: Optional[str] = Field(default=None, alias="context.state")
    context_data_selected_article_id: Optional[str] = Field(default=None, alias="context.data.selectedArticleId")
    context_data_selected_reply_id: Optional[str] = Field(default=None, alias="context.data.selectedReplyId")
    output_context_state: Optional[str] = Field(default=None, alias="output.context.state")
    output_context_data_selected_article_id: Optional[str] = Field(
        default=None, alias="output.context.data.selectedArticleId"
    )
    output_context_data_selected_reply_id: Optional[str] = Field(
        default=None, alias="output.context.data.selectedReplyId"
    )
    output_replies: str = Field(default="", alias="output.replies")

    def to_dict(self) -> dict[str, Any]:
        """External mapping; `userId` is left out unless it was disclosed."""
        data = self.model_dump(by_alias=True)
        if self.user_id is None:
            data.pop("userId")
        return data

    def __getitem__(self, key: str) -> Any:
        return self.to_dict()[key]
