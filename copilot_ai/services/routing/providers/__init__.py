"""
Provider implementations for different LLM services.

Each provider implements a consistent interface for:
- Single-prompt completion
- Multi-turn chat
- Streaming chat
"""

from .base_provider import BaseProvider, PreparedConversation, prepare_conversation
from .claude_provider import ClaudeProvider
from .gemini_provider import GeminiProvider
from .openai_provider import OpenAIProvider

__all__ = [
    "BaseProvider",
    "PreparedConversation",
    "prepare_conversation",
    "ClaudeProvider",
    "GeminiProvider",
    "OpenAIProvider",
]
