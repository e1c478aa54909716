"""Core protocols shared by transcript converters."""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

from pairguard.transcript.types import Transcript

T = TypeVar("T")


@runtime_checkable
class TranscriptConverter(Protocol[T]):
    """
    Maps a wire-format message history to and from a Transcript.

    Drivers store history in whatever shape their backend speaks.
    Converters let the repair engine work on any of them.
    """

    def to_transcript(self, raw: T) -> list:
        """
        Convert wire-format history to transcript messages.

        Args:
            raw: History in the converter's wire format

        Returns:
            Messages in conversation order
        """
        ...

    def from_transcript(self, messages: Transcript) -> T:
        """Convert transcript messages back to the wire format."""
        ...
