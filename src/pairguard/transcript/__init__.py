"""
Transcript types and tool call/result pairing repair.

Example:
    from pairguard.transcript import repair_tool_use_result_pairing

    result = repair_tool_use_result_pairing(messages)
    if result.report.dropped_orphan_count:
        logger.info(f"Dropped orphans: {result.report.dropped_orphan_ids}")
    messages = result.messages
"""

from .repair import (
    MISSING_TOOL_RESULT_TEXT,
    RepairReport,
    RepairResult,
    repair_tool_use_result_pairing,
    sanitize_tool_use_result_pairing,
)
from .types import (
    AssistantMessage,
    ContentBlock,
    Message,
    TextBlock,
    ToolCallBlock,
    ToolResultMessage,
    Transcript,
    UserMessage,
)

__all__ = [
    "sanitize_tool_use_result_pairing",
    "repair_tool_use_result_pairing",
    "RepairReport",
    "RepairResult",
    "MISSING_TOOL_RESULT_TEXT",
    "Message",
    "UserMessage",
    "AssistantMessage",
    "ToolResultMessage",
    "ContentBlock",
    "TextBlock",
    "ToolCallBlock",
    "Transcript",
]
