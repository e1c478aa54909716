"""
Reference recovery driver: classify -> repair -> retry.

Backends answer a broken tool call/result pairing with an opaque 400.
TranscriptRecovery recognizes that failure, repairs the whole transcript,
and resends it, at most ``max_repair_attempts`` times per transcript key.

The transport is the caller's: ``send`` is any async callable that takes
the transcript and raises on rejection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, TypeVar

from pairguard.config.loader import RepairConfig
from pairguard.errors.classifier import (
    match_orphan_error_rule,
    parse_orphan_tool_result_error,
)
from pairguard.transcript.repair import (
    RepairReport,
    RepairResult,
    repair_tool_use_result_pairing,
)
from pairguard.transcript.types import Transcript

from .retry_tracker import RepairAttemptTracker

logger = logging.getLogger(__name__)

R = TypeVar("R")

SendFn = Callable[[list[Any]], Awaitable[R]]


@dataclass
class RecoveryOutcome(Generic[R]):
    """
    Result of a request that may have needed transcript repair.

    ``messages`` is the transcript that was finally accepted; callers should
    store it in place of the original when ``reports`` is non-empty.
    """

    response: R
    messages: list[Any]
    reports: list[RepairReport] = field(default_factory=list)


class TranscriptRecovery:
    """
    Repairs transcripts rejected for tool call/result pairing violations.

    Example:
        recovery = TranscriptRecovery(load_repair_config())

        async def send(messages):
            return await client.messages.create(
                model=model, max_tokens=1024,
                messages=converter.from_transcript(messages),
            )

        outcome = await recovery.run(send, transcript, key=room_id)
    """

    def __init__(
        self,
        config: RepairConfig | None = None,
        tracker: RepairAttemptTracker | None = None,
    ):
        self.config = config or RepairConfig()
        self.tracker = tracker or RepairAttemptTracker(
            max_attempts=self.config.max_repair_attempts
        )

    def maybe_repair(
        self,
        error: BaseException | str | None,
        messages: Transcript,
        *,
        key: str = "",
    ) -> RepairResult | None:
        """
        Repair ``messages`` if ``error`` is a pairing violation.

        Returns:
            RepairResult, or None when the error is unrelated, attempts for
            ``key`` are exhausted, or repair changed nothing (a retry would
            fail the same way).
        """
        text = _error_text(error)
        rule = match_orphan_error_rule(text)
        if rule is None:
            return None

        parsed = parse_orphan_tool_result_error(text)
        if parsed:
            location = (
                f" at messages.{parsed.message_index}.content.{parsed.content_index}"
                if parsed.message_index is not None
                else ""
            )
            logger.warning(
                f"Transcript {key!r} rejected ({rule.name}): "
                f"tool_use_id={parsed.tool_use_id}{location}"
            )
        else:
            logger.warning(f"Transcript {key!r} rejected ({rule.name})")

        _, exceeded = self.tracker.record_attempt(key)
        if exceeded:
            return None

        result = repair_tool_use_result_pairing(
            messages, placeholder_text=self.config.placeholder_text
        )
        if not result.report.changed:
            logger.error(f"Transcript {key!r}: repair found nothing to fix")
            return None

        if self.config.log_reports:
            logger.info(f"Transcript {key!r} repaired: {result.report.summary()}")
            if result.report.dropped_orphan_ids:
                logger.info(f"Dropped orphan ids: {result.report.dropped_orphan_ids}")

        return result

    async def run(
        self,
        send: SendFn[R],
        messages: Transcript,
        *,
        key: str = "",
    ) -> RecoveryOutcome[R]:
        """
        Send the transcript, repairing and resending on pairing violations.

        Raises:
            Exception: Whatever ``send`` raised, when repair cannot help.
        """
        current = list(messages)
        reports: list[RepairReport] = []

        # Attempts are counted per run; a failed run leaves no budget spent
        try:
            while True:
                try:
                    response = await send(current)
                except Exception as e:
                    result = self.maybe_repair(e, current, key=key)
                    if result is None:
                        raise
                    reports.append(result.report)
                    current = result.messages
                    continue

                return RecoveryOutcome(
                    response=response, messages=current, reports=reports
                )
        finally:
            self.tracker.reset(key)


def _error_text(error: BaseException | str | None) -> str | None:
    if error is None or isinstance(error, str):
        return error
    return str(error)
