"""
Agent message converter - role-tagged dict history <-> transcript.

Wire format (as stored by agent session files):

    {"role": "user", "content": ...}
    {"role": "assistant", "content": [{"type": "text", "text": ...},
                                      {"type": "toolCall", "id", "name", "arguments"}]}
    {"role": "toolResult", "toolCallId", "toolName", "content", "isError"}

Dicts with any other role are passed through untouched.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from pairguard.core.protocols import TranscriptConverter
from pairguard.transcript.types import (
    AssistantMessage,
    TextBlock,
    ToolCallBlock,
    ToolResultMessage,
    Transcript,
    UserMessage,
)

logger = logging.getLogger(__name__)

# Type alias for role-tagged dict history
AgentMessages = list[dict[str, Any]]


# Using Pydantic for runtime validation of stored payloads


class TextBlockPayload(BaseModel):
    """Text block inside an assistant message."""

    model_config = ConfigDict(extra="allow")

    type: Literal["text"]
    text: str = ""


class ToolCallPayload(BaseModel):
    """Tool call block inside an assistant message."""

    model_config = ConfigDict(extra="allow")

    type: Literal["toolCall"]
    id: Optional[str] = None  # malformed payloads may omit it
    name: str = "unknown"
    arguments: dict[str, Any] = Field(default_factory=dict)


class UserPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: Literal["user"]
    content: Any = None


class AssistantPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: Literal["assistant"]
    content: list[dict[str, Any]] | str = Field(default_factory=list)


class ToolResultPayload(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    role: Literal["toolResult"]
    tool_call_id: str = Field(alias="toolCallId")
    tool_name: str = Field(default="unknown", alias="toolName")
    content: Any = None
    is_error: bool = Field(default=False, alias="isError")


class AgentMessageConverter(TranscriptConverter[AgentMessages]):
    """
    Converts role-tagged dict history to transcript messages and back.

    Raises:
        pydantic.ValidationError: If a user/assistant/toolResult dict is
            malformed (e.g. a toolResult without toolCallId).

    Note:
    - Extra keys on known roles (timestamps, usage) are not preserved
    - Unknown assistant block types are kept as raw dicts
    """

    def to_transcript(self, raw: AgentMessages) -> list[Any]:
        """Convert dict history to transcript messages."""
        messages: list[Any] = []

        for item in raw:
            role = item.get("role") if isinstance(item, dict) else None

            if role == "user":
                payload = UserPayload.model_validate(item)
                messages.append(UserMessage(content=payload.content))

            elif role == "assistant":
                payload = AssistantPayload.model_validate(item)
                messages.append(
                    AssistantMessage(content=_parse_blocks(payload.content))
                )

            elif role == "toolResult":
                payload = ToolResultPayload.model_validate(item)
                messages.append(
                    ToolResultMessage(
                        tool_call_id=payload.tool_call_id,
                        tool_name=payload.tool_name,
                        content=payload.content,
                        is_error=payload.is_error,
                    )
                )

            else:
                logger.debug(f"Passing through message with role={role!r}")
                messages.append(item)

        return messages

    def from_transcript(self, messages: Transcript) -> AgentMessages:
        """Convert transcript messages back to role-tagged dicts."""
        raw: AgentMessages = []

        for msg in messages:
            if isinstance(msg, UserMessage):
                raw.append({"role": "user", "content": msg.content})

            elif isinstance(msg, AssistantMessage):
                raw.append(
                    {
                        "role": "assistant",
                        "content": [_dump_block(block) for block in msg.content],
                    }
                )

            elif isinstance(msg, ToolResultMessage):
                raw.append(
                    {
                        "role": "toolResult",
                        "toolCallId": msg.tool_call_id,
                        "toolName": msg.tool_name,
                        "content": msg.content,
                        "isError": msg.is_error,
                    }
                )

            else:
                raw.append(msg)

        return raw


def _parse_blocks(content: list[dict[str, Any]] | str) -> list[Any]:
    if isinstance(content, str):
        return [TextBlock(text=content)] if content else []

    blocks: list[Any] = []
    for block in content:
        block_type = block.get("type")
        if block_type == "text":
            text = TextBlockPayload.model_validate(block)
            blocks.append(TextBlock(text=text.text))
        elif block_type == "toolCall":
            call = ToolCallPayload.model_validate(block)
            blocks.append(
                ToolCallBlock(id=call.id, name=call.name, arguments=call.arguments)
            )
        else:
            blocks.append(block)
    return blocks


def _dump_block(block: Any) -> Any:
    if isinstance(block, TextBlock):
        return {"type": "text", "text": block.text}
    if isinstance(block, ToolCallBlock):
        dumped: dict[str, Any] = {"type": "toolCall"}
        if block.id is not None:
            dumped["id"] = block.id
        dumped["name"] = block.name
        dumped["arguments"] = block.arguments
        return dumped
    return block
