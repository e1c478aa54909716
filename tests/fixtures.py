"""Transcript factories for unit tests.

Builds transcript messages with short, readable calls:

    factory.assistant(factory.call("call_1", "read"))
    factory.result("call_1", "ok")
"""

from typing import Any, Optional

from pairguard.transcript import (
    AssistantMessage,
    TextBlock,
    ToolCallBlock,
    ToolResultMessage,
    UserMessage,
)


class TranscriptFactory:
    """Factory for creating transcript messages."""

    @staticmethod
    def user(content: Any = "hello") -> UserMessage:
        return UserMessage(content=content)

    @staticmethod
    def call(
        id: Optional[str], name: str = "read", arguments: Optional[dict] = None
    ) -> ToolCallBlock:
        return ToolCallBlock(id=id, name=name, arguments=arguments or {})

    @staticmethod
    def assistant(*blocks: Any) -> AssistantMessage:
        return AssistantMessage(content=list(blocks))

    @staticmethod
    def text(text: str = "ok") -> AssistantMessage:
        """Assistant message with a single text block."""
        return AssistantMessage(content=[TextBlock(text=text)])

    @staticmethod
    def result(
        tool_call_id: str,
        text: str = "ok",
        tool_name: str = "read",
        is_error: bool = False,
    ) -> ToolResultMessage:
        return ToolResultMessage(
            tool_call_id=tool_call_id,
            tool_name=tool_name,
            content=[{"type": "text", "text": text}],
            is_error=is_error,
        )


factory = TranscriptFactory()


def result_text(msg: ToolResultMessage) -> str:
    """First text of a tool result's content."""
    return msg.content[0]["text"]
