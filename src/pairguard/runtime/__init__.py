"""
Runtime helpers for recovering from pairing rejections.

Usage:
    from pairguard.runtime import TranscriptRecovery

    outcome = await TranscriptRecovery().run(send, transcript)
"""

from .recovery import RecoveryOutcome, TranscriptRecovery
from .retry_tracker import RepairAttemptTracker

__all__ = [
    "TranscriptRecovery",
    "RecoveryOutcome",
    "RepairAttemptTracker",
]
