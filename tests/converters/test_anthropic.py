"""Tests for AnthropicMessageConverter."""

from anthropic.types import TextBlock as AnthropicTextBlock
from anthropic.types import ToolUseBlock

from pairguard.converters import AnthropicMessageConverter
from pairguard.transcript import (
    AssistantMessage,
    TextBlock,
    ToolCallBlock,
    ToolResultMessage,
    UserMessage,
    sanitize_tool_use_result_pairing,
)


class TestToTranscript:
    """Tests for Anthropic history -> transcript."""

    def test_splits_tool_results_out_of_user_turns(self):
        """Each tool_result block becomes its own ToolResultMessage."""
        converter = AnthropicMessageConverter()
        raw = [
            {
                "role": "assistant",
                "content": [
                    {"type": "tool_use", "id": "toolu_1", "name": "search", "input": {"q": "x"}},
                    {"type": "tool_use", "id": "toolu_2", "name": "fetch", "input": {}},
                ],
            },
            {
                "role": "user",
                "content": [
                    {"type": "tool_result", "tool_use_id": "toolu_1", "content": "found"},
                    {"type": "tool_result", "tool_use_id": "toolu_2", "content": "boom", "is_error": True},
                    {"type": "text", "text": "thanks"},
                ],
            },
        ]

        result = converter.to_transcript(raw)

        assert result == [
            AssistantMessage(
                content=[
                    ToolCallBlock(id="toolu_1", name="search", arguments={"q": "x"}),
                    ToolCallBlock(id="toolu_2", name="fetch", arguments={}),
                ]
            ),
            ToolResultMessage(tool_call_id="toolu_1", tool_name="search", content="found"),
            ToolResultMessage(
                tool_call_id="toolu_2", tool_name="fetch", content="boom", is_error=True
            ),
            UserMessage(content=[{"type": "text", "text": "thanks"}]),
        ]

    def test_unknown_tool_name_for_orphan_result(self):
        converter = AnthropicMessageConverter()
        raw = [
            {
                "role": "user",
                "content": [{"type": "tool_result", "tool_use_id": "toolu_x", "content": "?"}],
            }
        ]

        result = converter.to_transcript(raw)

        assert result == [
            ToolResultMessage(tool_call_id="toolu_x", tool_name="unknown", content="?")
        ]

    def test_string_content(self):
        converter = AnthropicMessageConverter()
        raw = [
            {"role": "user", "content": "hello"},
            {"role": "assistant", "content": "hi there"},
        ]

        result = converter.to_transcript(raw)

        assert result == [
            UserMessage(content="hello"),
            AssistantMessage(content=[TextBlock(text="hi there")]),
        ]

    def test_accepts_sdk_response_blocks(self):
        """Blocks straight from a Message response are understood."""
        converter = AnthropicMessageConverter()
        raw = [
            {
                "role": "assistant",
                "content": [
                    AnthropicTextBlock(type="text", text="checking"),
                    ToolUseBlock(type="tool_use", id="toolu_9", name="calc", input={"a": 1}),
                ],
            }
        ]

        result = converter.to_transcript(raw)

        assert result[0].content == [
            TextBlock(text="checking"),
            ToolCallBlock(id="toolu_9", name="calc", arguments={"a": 1}),
        ]

    def test_keeps_thinking_blocks(self):
        converter = AnthropicMessageConverter()
        thinking = {"type": "thinking", "thinking": "hmm", "signature": "sig"}

        result = converter.to_transcript([{"role": "assistant", "content": [thinking]}])

        assert result[0].content == [thinking]

    def test_keeps_empty_user_turn(self):
        """A user turn with an empty block list is not dropped."""
        converter = AnthropicMessageConverter()
        raw = [
            {"role": "user", "content": []},
            {"role": "assistant", "content": "ok"},
        ]

        result = converter.to_transcript(raw)

        assert result == [
            UserMessage(content=[]),
            AssistantMessage(content=[TextBlock(text="ok")]),
        ]


class TestFromTranscript:
    """Tests for transcript -> Anthropic history."""

    def test_batches_tool_results_into_one_user_turn(self):
        converter = AnthropicMessageConverter()
        messages = [
            AssistantMessage(
                content=[
                    TextBlock(text="working"),
                    ToolCallBlock(id="toolu_1", name="a", arguments={}),
                    ToolCallBlock(id="toolu_2", name="b", arguments={}),
                ]
            ),
            ToolResultMessage(tool_call_id="toolu_1", tool_name="a", content="1"),
            ToolResultMessage(tool_call_id="toolu_2", tool_name="b", content="2"),
            UserMessage(content="next"),
        ]

        result = converter.from_transcript(messages)

        assert result == [
            {
                "role": "assistant",
                "content": [
                    {"type": "text", "text": "working"},
                    {"type": "tool_use", "id": "toolu_1", "name": "a", "input": {}},
                    {"type": "tool_use", "id": "toolu_2", "name": "b", "input": {}},
                ],
            },
            {
                "role": "user",
                "content": [
                    {"type": "tool_result", "tool_use_id": "toolu_1", "content": "1", "is_error": False},
                    {"type": "tool_result", "tool_use_id": "toolu_2", "content": "2", "is_error": False},
                    {"type": "text", "text": "next"},
                ],
            },
        ]

    def test_keeps_single_string_messages_as_strings(self):
        converter = AnthropicMessageConverter()
        messages = [UserMessage(content="hi"), AssistantMessage(content=[TextBlock(text="yo")])]

        result = converter.from_transcript(messages)

        assert result == [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": [{"type": "text", "text": "yo"}]},
        ]

    def test_skips_assistant_messages_without_blocks(self):
        """Empty text blocks are dropped; an empty assistant turn is skipped."""
        converter = AnthropicMessageConverter()
        messages = [
            UserMessage(content="a"),
            AssistantMessage(content=[TextBlock(text="")]),
            UserMessage(content="b"),
        ]

        result = converter.from_transcript(messages)

        assert result == [
            {
                "role": "user",
                "content": [{"type": "text", "text": "a"}, {"type": "text", "text": "b"}],
            }
        ]

    def test_does_not_mutate_user_content(self):
        converter = AnthropicMessageConverter()
        content = [{"type": "text", "text": "a"}]
        messages = [UserMessage(content=content), UserMessage(content="b")]

        converter.from_transcript(messages)

        assert content == [{"type": "text", "text": "a"}]

    def test_passes_through_dicts_without_role(self):
        """Raw items without a role are kept as-is and split the batching."""
        converter = AnthropicMessageConverter()
        marker = {"type": "compaction", "summary": "earlier turns"}
        messages = [UserMessage(content="a"), marker, UserMessage(content="b")]

        result = converter.from_transcript(messages)

        assert result == [
            {"role": "user", "content": "a"},
            marker,
            {"role": "user", "content": "b"},
        ]


class TestRepairRoundTrip:
    """Anthropic history repaired through the transcript model."""

    def test_orphan_result_removed_and_missing_result_added(self):
        converter = AnthropicMessageConverter()
        raw = [
            {"role": "user", "content": "start"},
            {
                "role": "user",
                "content": [{"type": "tool_result", "tool_use_id": "toolu_gone", "content": "stale"}],
            },
            {
                "role": "assistant",
                "content": [{"type": "tool_use", "id": "toolu_1", "name": "read", "input": {}}],
            },
            {"role": "user", "content": "did it work?"},
        ]

        repaired = converter.from_transcript(
            sanitize_tool_use_result_pairing(converter.to_transcript(raw))
        )

        assert [m["role"] for m in repaired] == ["user", "assistant", "user"]
        tool_result, text = repaired[2]["content"]
        assert tool_result["type"] == "tool_result"
        assert tool_result["tool_use_id"] == "toolu_1"
        assert tool_result["is_error"] is True
        assert text == {"type": "text", "text": "did it work?"}
        assert "toolu_gone" not in str(repaired)
