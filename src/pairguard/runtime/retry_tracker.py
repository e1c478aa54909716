"""Repair attempt tracking. Sync, unit-testable."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class RepairAttemptTracker:
    """
    Tracks transcript repair attempts per transcript key.

    Used by TranscriptRecovery to:
    - Prevent infinite repair/retry loops
    - Stop repairing transcripts that keep failing after repair
    """

    def __init__(self, max_attempts: int = 1):
        self._max_attempts = max_attempts
        self._attempts: dict[str, int] = {}

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def attempts(self, key: str) -> int:
        return self._attempts.get(key, 0)

    def record_attempt(self, key: str) -> tuple[int, bool]:
        """
        Record a repair attempt.

        Returns:
            Tuple of (attempt_count, exceeded_max_attempts)
        """
        attempts = self._attempts.get(key, 0) + 1
        self._attempts[key] = attempts

        exceeded = attempts > self._max_attempts
        if exceeded:
            logger.error(
                f"Transcript {key!r} exceeded max repair attempts ({self._max_attempts})"
            )

        return attempts, exceeded

    def reset(self, key: str) -> None:
        """Clear tracking once a run for this key has finished."""
        self._attempts.pop(key, None)
