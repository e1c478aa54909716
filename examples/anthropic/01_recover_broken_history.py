"""
Recover a rejected Anthropic conversation.

The history below is broken the way real ones get broken: a tool_result
survives whose tool_use was compacted away, and a later tool_use never got
its result. Anthropic rejects it with a 400; TranscriptRecovery repairs the
transcript and resends.

Run with:
    ANTHROPIC_API_KEY=xxx python 01_recover_broken_history.py
"""

import asyncio
import logging

from anthropic import AsyncAnthropic
from dotenv import load_dotenv

from pairguard.config import RepairConfig, load_repair_config
from pairguard.converters import AnthropicMessageConverter
from pairguard.runtime import TranscriptRecovery
from setup_logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

MODEL = "claude-sonnet-4-5-20250929"

TOOLS = [
    {
        "name": "get_weather",
        "description": "Get the current weather for a city.",
        "input_schema": {
            "type": "object",
            "properties": {"city": {"type": "string"}},
            "required": ["city"],
        },
    }
]

BROKEN_HISTORY = [
    {"role": "user", "content": "What's the weather in Paris and Oslo?"},
    {
        "role": "user",
        "content": [
            {"type": "tool_result", "tool_use_id": "toolu_compacted", "content": "12C"}
        ],
    },
    {
        "role": "assistant",
        "content": [
            {"type": "text", "text": "Let me check Oslo."},
            {
                "type": "tool_use",
                "id": "toolu_oslo",
                "name": "get_weather",
                "input": {"city": "Oslo"},
            },
        ],
    },
    {"role": "user", "content": "Any luck?"},
]


def load_config() -> RepairConfig:
    try:
        return load_repair_config("default")
    except FileNotFoundError:
        logger.info("No pairguard.yaml found, using defaults")
        return RepairConfig()


async def main():
    load_dotenv()

    client = AsyncAnthropic()
    converter = AnthropicMessageConverter()
    recovery = TranscriptRecovery(load_config())

    async def send(messages):
        return await client.messages.create(
            model=MODEL,
            max_tokens=512,
            tools=TOOLS,
            messages=converter.from_transcript(messages),
        )

    outcome = await recovery.run(
        send, converter.to_transcript(BROKEN_HISTORY), key="example"
    )

    for report in outcome.reports:
        logger.info(f"Repair: {report.summary()}")
    for block in outcome.response.content:
        if block.type == "text":
            print(block.text)


if __name__ == "__main__":
    asyncio.run(main())
