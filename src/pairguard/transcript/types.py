"""
Transcript message types for tool call/result pairing repair.

A transcript is the ordered message sequence a driver sends to an LLM
backend. Only two shapes matter to the repair engine:

    AssistantMessage  - may carry ToolCallBlocks (each with an id)
    ToolResultMessage - answers exactly one tool call by id

Everything else (UserMessage, other roles, raw dicts) is opaque and passed
through in order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Sequence


@dataclass
class TextBlock:
    """Plain text inside an assistant message."""

    type: Literal["text"] = field(default="text", init=False)
    text: str


@dataclass
class ToolCallBlock:
    """
    A tool call issued by the assistant.

    ``id`` may be None when the upstream payload was malformed; such a call
    can never be resolved to a real result.
    """

    type: Literal["toolCall"] = field(default="toolCall", init=False)
    id: str | None
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


ContentBlock = TextBlock | ToolCallBlock


@dataclass
class UserMessage:
    """A user turn. Content is opaque."""

    role: Literal["user"] = field(default="user", init=False)
    content: Any


@dataclass
class AssistantMessage:
    """
    An assistant turn made of text and tool call blocks.

    Blocks of other kinds (thinking, images) are kept as raw dicts.
    """

    role: Literal["assistant"] = field(default="assistant", init=False)
    content: list[ContentBlock | dict[str, Any]] = field(default_factory=list)

    @property
    def tool_calls(self) -> list[ToolCallBlock]:
        """Tool call blocks in the order they appear."""
        return [block for block in self.content if isinstance(block, ToolCallBlock)]


@dataclass
class ToolResultMessage:
    """The outcome of one tool call, referenced by ``tool_call_id``."""

    role: Literal["toolResult"] = field(default="toolResult", init=False)
    tool_call_id: str
    tool_name: str
    content: Any
    is_error: bool = False


Message = UserMessage | AssistantMessage | ToolResultMessage

# Order is conversation turn order. Items that are not one of the
# Message types above are carried through untouched.
Transcript = Sequence[Any]
