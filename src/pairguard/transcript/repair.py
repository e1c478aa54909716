"""
Tool call/result pairing repair.

This is the single source of truth for restoring the invariant LLM
backends enforce on tool-augmented transcripts:

    every tool call is answered by exactly one tool result, placed
    directly after the assistant message that issued it, in call order.

The repair walks the transcript once, left to right:
- After each assistant message, results for its calls are pulled forward
  from anywhere later in the transcript (first unconsumed match wins)
- Calls with no result anywhere get a synthesized error result
- Results reached by the walk without having been pulled forward are
  dropped: duplicates if their id was already answered, orphans otherwise

Results are located through a per-id queue of positions built in one
preliminary pass, so repair stays linear in transcript length.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from .types import AssistantMessage, ToolResultMessage, Transcript

logger = logging.getLogger(__name__)

MISSING_TOOL_RESULT_TEXT = (
    "[pairguard] No result was recorded for this tool call; "
    "it was inserted during transcript repair."
)


@dataclass
class RepairReport:
    """
    What a repair pass changed.

    Attributes:
        dropped_orphan_count: Results dropped because their id matched no
            resolvable tool call.
        dropped_orphan_ids: Ids of those results, in the order dropped.
        inserted_placeholder_count: Error results synthesized for calls
            that had no result anywhere in the transcript.
        inserted_placeholder_ids: Call ids that received a placeholder.
        duplicates_dropped_count: Results dropped because their id had
            already been answered.
        moved: True if any kept message changed relative order.
    """

    dropped_orphan_count: int = 0
    dropped_orphan_ids: list[str] = field(default_factory=list)
    inserted_placeholder_count: int = 0
    inserted_placeholder_ids: list[str] = field(default_factory=list)
    duplicates_dropped_count: int = 0
    moved: bool = False

    @property
    def changed(self) -> bool:
        return bool(
            self.dropped_orphan_count
            or self.inserted_placeholder_count
            or self.duplicates_dropped_count
            or self.moved
        )

    def summary(self) -> str:
        return (
            f"dropped {self.dropped_orphan_count} orphan(s), "
            f"{self.duplicates_dropped_count} duplicate(s); "
            f"inserted {self.inserted_placeholder_count} placeholder(s); "
            f"moved={self.moved}"
        )


@dataclass
class RepairResult:
    """Repaired transcript plus the report describing the changes."""

    messages: list[Any]
    report: RepairReport


def sanitize_tool_use_result_pairing(
    messages: Transcript,
    *,
    placeholder_text: str = MISSING_TOOL_RESULT_TEXT,
) -> list[Any]:
    """
    Rewrite a transcript so every tool call has exactly one adjacent result.

    Args:
        messages: Transcript in conversation order. Not modified.
        placeholder_text: Content for synthesized results.

    Returns:
        New list of messages satisfying the pairing invariant.
    """
    return repair_tool_use_result_pairing(
        messages, placeholder_text=placeholder_text
    ).messages


def repair_tool_use_result_pairing(
    messages: Transcript,
    *,
    placeholder_text: str = MISSING_TOOL_RESULT_TEXT,
) -> RepairResult:
    """
    Repair tool call/result pairing and report what changed.

    Example:
        >>> result = repair_tool_use_result_pairing(transcript)
        >>> if result.report.changed:
        ...     transcript = result.messages
    """
    source = list(messages)
    report = RepairReport()
    output: list[Any] = []

    pending = _index_tool_results(source)
    consumed = [False] * len(source)
    used: set[str] = set()
    # Input positions of kept messages, in output order (placeholders excluded)
    emitted: list[int] = []

    for i, msg in enumerate(source):
        if consumed[i]:
            continue

        if isinstance(msg, AssistantMessage):
            output.append(msg)
            emitted.append(i)
            for call in msg.tool_calls:
                position = _take_result(pending, call.id, after=i)
                if position is not None:
                    consumed[position] = True
                    used.add(call.id)
                    output.append(source[position])
                    emitted.append(position)
                    continue

                output.append(
                    ToolResultMessage(
                        tool_call_id=call.id or "",
                        tool_name=call.name,
                        content=[{"type": "text", "text": placeholder_text}],
                        is_error=True,
                    )
                )
                if call.id:
                    used.add(call.id)
                report.inserted_placeholder_count += 1
                report.inserted_placeholder_ids.append(call.id or "")
                logger.debug(
                    f"Inserted placeholder result: name={call.name}, id={call.id}"
                )

        elif isinstance(msg, ToolResultMessage):
            if msg.tool_call_id in used:
                report.duplicates_dropped_count += 1
                logger.debug(f"Dropped duplicate tool result: id={msg.tool_call_id}")
            else:
                report.dropped_orphan_count += 1
                report.dropped_orphan_ids.append(msg.tool_call_id)
                logger.debug(f"Dropped orphan tool result: id={msg.tool_call_id}")

        else:
            output.append(msg)
            emitted.append(i)

    report.moved = any(a > b for a, b in zip(emitted, emitted[1:]))

    if report.changed:
        logger.info(f"Repaired tool_use/tool_result pairing: {report.summary()}")

    return RepairResult(messages=output, report=report)


def _index_tool_results(messages: list[Any]) -> dict[str, deque[int]]:
    """Map each tool_call_id to the positions of its results, ascending."""
    index: dict[str, deque[int]] = {}
    for position, msg in enumerate(messages):
        if isinstance(msg, ToolResultMessage) and msg.tool_call_id:
            index.setdefault(msg.tool_call_id, deque()).append(position)
    return index


def _take_result(
    pending: dict[str, deque[int]], call_id: str | None, *, after: int
) -> int | None:
    """
    Pop the first result position for call_id that lies after ``after``.

    Positions at or before ``after`` were already passed by the main walk
    and are discarded.
    """
    if not call_id:
        return None
    queue = pending.get(call_id)
    if not queue:
        return None
    while queue and queue[0] <= after:
        queue.popleft()
    if not queue:
        return None
    return queue.popleft()
