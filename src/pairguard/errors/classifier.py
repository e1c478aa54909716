"""
Classifier for vendor errors signalling a broken tool call/result pairing.

Backends reject a transcript outright when a tool_result references a
tool_use they cannot see, and only tell us so through an error string.
Detection and extraction are table-driven:

- ORPHAN_ERROR_RULES: ordered phrasings that identify the failure
- TOOL_USE_ID_PATTERNS: ordered ways an offending id appears in the text
- LOCATION_PATTERN: the ``messages.<N>.content.<M>`` path fragment

Extraction runs on the whole message, independent of which rule matched,
so a new vendor phrasing only needs a new rule.

Pure functions; never raise.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_Q = "[`'\"]?"  # vendors sometimes quote identifiers


@dataclass(frozen=True)
class OrphanErrorRule:
    """A known phrasing of the orphan tool_result rejection."""

    name: str
    pattern: re.Pattern[str]

    def matches(self, message: str) -> bool:
        return self.pattern.search(message) is not None


@dataclass
class ParsedOrphanError:
    """
    Structured view of an orphan tool_result error.

    Attributes:
        tool_use_id: The offending id, verbatim.
        message_index: N from ``messages.N.content.M``, if present.
        content_index: M from ``messages.N.content.M``, if present.
    """

    tool_use_id: str
    message_index: int | None = None
    content_index: int | None = None


ORPHAN_ERROR_RULES: tuple[OrphanErrorRule, ...] = (
    OrphanErrorRule(
        name="unexpected_tool_use_id",
        pattern=re.compile(
            rf"unexpected\s+{_Q}tool_use_id{_Q}\s+found\s+in\s+{_Q}tool_result{_Q}\s+blocks?",
            re.IGNORECASE,
        ),
    ),
    OrphanErrorRule(
        name="missing_corresponding_tool_use",
        pattern=re.compile(
            rf"{_Q}tool_result{_Q}\s+(?:block\s+)?must\s+have\s+(?:a\s+)?"
            rf"corresponding\s+{_Q}tool_use{_Q}",
            re.IGNORECASE,
        ),
    ),
    OrphanErrorRule(
        name="tool_use_id_not_found",
        pattern=re.compile(
            rf"{_Q}tool_result{_Q}\s+(?:block\s+)?references\s+{_Q}tool_use_id{_Q}"
            rf".*?not\s+found",
            re.IGNORECASE | re.DOTALL,
        ),
    ),
)

TOOL_USE_ID_PATTERNS: tuple[re.Pattern[str], ...] = (
    # tool_use_id "toolu_abc123"
    re.compile(rf"tool_use_id{_Q}\s*[:=]?\s*[`'\"]([^`'\"\s]+)[`'\"]", re.IGNORECASE),
    # tool_use_id: toolu_abc123 / tool_use_id=toolu_abc123
    re.compile(rf"tool_use_id{_Q}\s*[:=]\s*([\w\-]+)", re.IGNORECASE),
    # references tool_use_id toolu_abc123 not found
    re.compile(rf"references\s+{_Q}tool_use_id{_Q}\s+([\w\-]+)", re.IGNORECASE),
    # ...found in tool_result blocks: toolu_abc123. Each tool_result...
    re.compile(rf"tool_result{_Q}\s+blocks?\s*:\s*{_Q}([\w\-]+)", re.IGNORECASE),
    # trailing ": toolu_abc123"
    re.compile(rf":\s*{_Q}([\w\-]+){_Q}\s*\.?\s*$"),
)

LOCATION_PATTERN = re.compile(r"messages\.(\d+)\.content\.(\d+)", re.IGNORECASE)


def match_orphan_error_rule(message: str | None) -> OrphanErrorRule | None:
    """Return the first rule matching ``message``, or None."""
    if not message or not isinstance(message, str):
        return None
    for rule in ORPHAN_ERROR_RULES:
        if rule.matches(message):
            return rule
    return None


def is_orphan_tool_result_error(message: str | None) -> bool:
    """
    Check whether a vendor error reports an orphan tool_result.

    Case-insensitive. None and empty strings never match.
    """
    return match_orphan_error_rule(message) is not None


def parse_orphan_tool_result_error(message: str | None) -> ParsedOrphanError | None:
    """
    Extract the offending tool_use_id and location from a vendor error.

    Returns:
        ParsedOrphanError, or None if the message is not an orphan error
        or carries no identifiable tool_use_id.

    Example:
        >>> parse_orphan_tool_result_error(
        ...     'unexpected tool_use_id found in tool_result blocks at '
        ...     'messages.5.content.2: tool_use_id "toolu_def456"'
        ... )
        ParsedOrphanError(tool_use_id='toolu_def456', message_index=5, content_index=2)
    """
    if not is_orphan_tool_result_error(message):
        return None

    tool_use_id = _extract_tool_use_id(message)
    if tool_use_id is None:
        return None

    parsed = ParsedOrphanError(tool_use_id=tool_use_id)
    location = LOCATION_PATTERN.search(message)
    if location:
        parsed.message_index = int(location.group(1))
        parsed.content_index = int(location.group(2))
    return parsed


def _extract_tool_use_id(message: str) -> str | None:
    for pattern in TOOL_USE_ID_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group(1)
    return None
