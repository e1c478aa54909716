"""Core protocols."""

from pairguard.core.protocols import TranscriptConverter

__all__ = ["TranscriptConverter"]
