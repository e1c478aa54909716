"""
Vendor error classification for tool call/result pairing violations.

Usage:
    from pairguard.errors import (
        is_orphan_tool_result_error,
        parse_orphan_tool_result_error,
    )

    if is_orphan_tool_result_error(str(exc)):
        parsed = parse_orphan_tool_result_error(str(exc))
"""

from pairguard.errors.classifier import (
    LOCATION_PATTERN,
    ORPHAN_ERROR_RULES,
    TOOL_USE_ID_PATTERNS,
    OrphanErrorRule,
    ParsedOrphanError,
    is_orphan_tool_result_error,
    match_orphan_error_rule,
    parse_orphan_tool_result_error,
)

__all__ = [
    "is_orphan_tool_result_error",
    "parse_orphan_tool_result_error",
    "match_orphan_error_rule",
    "ParsedOrphanError",
    "OrphanErrorRule",
    "ORPHAN_ERROR_RULES",
    "TOOL_USE_ID_PATTERNS",
    "LOCATION_PATTERN",
]
