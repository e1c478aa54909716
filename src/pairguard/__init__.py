"""
pairguard - keep tool call/result pairing valid in LLM transcripts.

Backends reject a transcript when a tool call is not answered by exactly
one tool result directly after it. pairguard has two independent parts:

Errors:
    is_orphan_tool_result_error: Recognize the vendor rejection
    parse_orphan_tool_result_error: Extract the offending id and location

Transcript:
    sanitize_tool_use_result_pairing: Rewrite a transcript to be valid
    repair_tool_use_result_pairing: Same, plus a RepairReport

Converters (pairguard.converters) map Anthropic and dict histories to the
transcript model; TranscriptRecovery (pairguard.runtime) wires
classify -> repair -> retry for a caller-supplied send function.

Example:
    from pairguard import (
        is_orphan_tool_result_error,
        repair_tool_use_result_pairing,
    )

    try:
        response = await send(messages)
    except BadRequestError as e:
        if not is_orphan_tool_result_error(str(e)):
            raise
        messages = repair_tool_use_result_pairing(messages).messages
        response = await send(messages)
"""

from .config import RepairConfig, load_repair_config
from .errors import (
    ParsedOrphanError,
    is_orphan_tool_result_error,
    parse_orphan_tool_result_error,
)
from .runtime import RecoveryOutcome, RepairAttemptTracker, TranscriptRecovery
from .transcript import (
    MISSING_TOOL_RESULT_TEXT,
    AssistantMessage,
    RepairReport,
    RepairResult,
    TextBlock,
    ToolCallBlock,
    ToolResultMessage,
    UserMessage,
    repair_tool_use_result_pairing,
    sanitize_tool_use_result_pairing,
)

__all__ = [
    # Errors
    "is_orphan_tool_result_error",
    "parse_orphan_tool_result_error",
    "ParsedOrphanError",
    # Transcript
    "sanitize_tool_use_result_pairing",
    "repair_tool_use_result_pairing",
    "RepairReport",
    "RepairResult",
    "MISSING_TOOL_RESULT_TEXT",
    "UserMessage",
    "AssistantMessage",
    "ToolResultMessage",
    "TextBlock",
    "ToolCallBlock",
    # Runtime
    "TranscriptRecovery",
    "RecoveryOutcome",
    "RepairAttemptTracker",
    # Config
    "RepairConfig",
    "load_repair_config",
]

__version__ = "0.0.1"
