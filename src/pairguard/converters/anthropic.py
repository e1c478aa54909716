"""
Anthropic converter - Messages API history <-> transcript.

Handles:
- assistant tool_use blocks -> ToolCallBlock
- user tool_result blocks -> one ToolResultMessage each (tool name recovered
  from the matching tool_use)
- Back to Anthropic: tool results become user tool_result blocks, and
  consecutive same-role messages are batched (Anthropic requires
  alternating roles)
"""

from __future__ import annotations

import logging
from typing import Any

from anthropic.types import (
    MessageParam,
    TextBlockParam,
    ToolResultBlockParam,
    ToolUseBlockParam,
)

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

# Type alias for Anthropic message history
AnthropicMessages = list[MessageParam]


class AnthropicMessageConverter(TranscriptConverter[AnthropicMessages]):
    """
    Converts Anthropic MessageParam history to transcript messages and back.

    Blocks may be plain dicts or SDK response objects (ToolUseBlock, etc.).

    Example:
        converter = AnthropicMessageConverter()
        result = repair_tool_use_result_pairing(converter.to_transcript(history))
        history = converter.from_transcript(result.messages)
    """

    def to_transcript(self, raw: AnthropicMessages) -> list[Any]:
        """Convert Anthropic history to transcript messages."""
        messages: list[Any] = []
        tool_names: dict[str, str] = {}

        for msg in raw:
            role = msg.get("role")
            content = msg.get("content", "")

            if role == "assistant":
                messages.append(
                    AssistantMessage(content=_assistant_blocks(content, tool_names))
                )
                continue

            if role != "user":
                logger.debug(f"Passing through message with role={role!r}")
                messages.append(msg)
                continue

            if isinstance(content, str):
                messages.append(UserMessage(content=content))
                continue

            # Split tool_result blocks out of the user turn
            remaining: list[Any] = []
            for block in content:
                data = _as_dict(block)
                if data.get("type") != "tool_result":
                    remaining.append(block)
                    continue
                tool_use_id = data.get("tool_use_id", "")
                messages.append(
                    ToolResultMessage(
                        tool_call_id=tool_use_id,
                        tool_name=tool_names.get(tool_use_id, "unknown"),
                        content=data.get("content", ""),
                        is_error=bool(data.get("is_error", False)),
                    )
                )
            # An empty user turn is kept; only turns emptied by the split vanish
            if remaining or not content:
                messages.append(UserMessage(content=remaining))

        return messages

    def from_transcript(self, messages: Transcript) -> AnthropicMessages:
        """
        Convert transcript messages to Anthropic MessageParam format.

        Empty text blocks are dropped; an assistant message left with no
        blocks is skipped, since the API rejects empty content.
        """
        params: list[MessageParam] = []

        for msg in messages:
            if isinstance(msg, UserMessage):
                params.append({"role": "user", "content": msg.content})

            elif isinstance(msg, AssistantMessage):
                blocks = _assistant_params(msg)
                if not blocks:
                    logger.debug("Skipping assistant message with no content blocks")
                    continue
                params.append({"role": "assistant", "content": blocks})

            elif isinstance(msg, ToolResultMessage):
                tool_result_block: ToolResultBlockParam = {
                    "type": "tool_result",
                    "tool_use_id": msg.tool_call_id,
                    "content": msg.content,
                    "is_error": msg.is_error,
                }
                params.append({"role": "user", "content": [tool_result_block]})

            else:
                params.append(msg)

        return _batch_consecutive_messages(params)


def _as_dict(block: Any) -> dict[str, Any]:
    if isinstance(block, dict):
        return block
    if hasattr(block, "model_dump"):
        return block.model_dump()
    return {}


def _assistant_blocks(content: Any, tool_names: dict[str, str]) -> list[Any]:
    if isinstance(content, str):
        return [TextBlock(text=content)] if content else []

    blocks: list[Any] = []
    for block in content:
        data = _as_dict(block)
        block_type = data.get("type")
        if block_type == "text":
            blocks.append(TextBlock(text=data.get("text", "")))
        elif block_type == "tool_use":
            call = ToolCallBlock(
                id=data.get("id") or None,
                name=data.get("name", "unknown"),
                arguments=data.get("input") or {},
            )
            if call.id:
                tool_names[call.id] = call.name
            blocks.append(call)
        else:
            # thinking, redacted_thinking, etc. are kept verbatim
            blocks.append(data)
    return blocks


def _assistant_params(msg: AssistantMessage) -> list[Any]:
    blocks: list[Any] = []
    for block in msg.content:
        if isinstance(block, TextBlock):
            if block.text:
                text_block: TextBlockParam = {"type": "text", "text": block.text}
                blocks.append(text_block)
        elif isinstance(block, ToolCallBlock):
            tool_use_block: ToolUseBlockParam = {
                "type": "tool_use",
                "id": block.id or "",
                "name": block.name,
                "input": block.arguments,
            }
            blocks.append(tool_use_block)
        else:
            blocks.append(block)
    return blocks


def _batch_consecutive_messages(
    messages: list[MessageParam],
) -> list[MessageParam]:
    """
    Batch consecutive same-role messages into single messages.

    Anthropic requires alternating user/assistant roles. This merges
    consecutive messages with the same role into a single message
    with multiple content blocks.
    """
    if not messages:
        return messages

    batched: list[MessageParam] = []
    current: MessageParam | None = None

    for msg in messages:
        role = msg.get("role")
        if role not in ("user", "assistant"):
            # Unknown shapes are never merged
            if current:
                batched.append(current)
                current = None
            batched.append(msg)
            continue

        if current and current["role"] == role:
            # Same role - merge into a fresh list, never the caller's
            merged = _as_block_list(current["content"]) + _as_block_list(
                msg.get("content", "")
            )
            current = {"role": role, "content": merged}
        else:
            if current:
                batched.append(current)
            current = {"role": role, "content": msg.get("content", "")}

    if current:
        batched.append(current)

    return batched


def _as_block_list(content: Any) -> list[Any]:
    if isinstance(content, str):
        text_block: TextBlockParam = {"type": "text", "text": content}
        return [text_block]
    return list(content)
