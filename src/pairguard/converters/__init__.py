"""Built-in transcript converters."""

from pairguard.converters.agent_messages import AgentMessageConverter, AgentMessages
from pairguard.converters.anthropic import AnthropicMessageConverter, AnthropicMessages

__all__ = [
    "AgentMessageConverter",
    "AgentMessages",
    "AnthropicMessageConverter",
    "AnthropicMessages",
]
