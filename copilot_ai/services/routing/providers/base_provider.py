"""
Base Provider - Common interface for all LLM providers

This module defines the standard interface that all provider adapters must
implement, so the router can dispatch without knowing any vendor's wire format.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

from ....core.exceptions import InvalidRequestError, ProviderError, ProviderUnavailableError
from ..types import AIResponse, ChatMessage, MessageRole, Provider

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7


@dataclass(frozen=True)
class PreparedConversation:
    """History split into one merged system instruction plus the dialogue turns."""
    system: Optional[str]
    turns: List[ChatMessage]


def prepare_conversation(
    messages: Sequence[ChatMessage],
    system_instruction: Optional[str] = None
) -> PreparedConversation:
    """
    Merge system text for providers with a dedicated system channel.

    The resolved instruction comes first, then every caller ``system``-role
    message in history order, joined by blank lines. Nothing is dropped.

    Raises:
        InvalidRequestError: If no user/assistant turn remains
    """
    system_parts = [system_instruction] if system_instruction else []
    turns = []
    for message in messages:
        if message.role == MessageRole.SYSTEM:
            if message.content:
                system_parts.append(message.content)
        else:
            turns.append(message)

    if not turns:
        raise InvalidRequestError("Conversation must contain at least one user or assistant message")

    return PreparedConversation(
        system="\n\n".join(system_parts) if system_parts else None,
        turns=turns,
    )


class BaseProvider(ABC):
    """
    Base class for all LLM provider adapters.

    Defines the standard interface that all providers must implement:
    - Single-prompt completion
    - Multi-turn chat
    - Streaming chat

    The client handle is built once and only read afterwards; every
    per-call parameter is passed as a call-local argument.
    """

    provider: Provider
    credential_name: str

    def __init__(self, client: Optional[Any] = None):
        """
        Initialize provider with a prebuilt client.

        Args:
            client: Vendor SDK client, or None when no credential is configured
        """
        self.client = client

        if client is None:
            logger.warning(f"{self.credential_name} not set - {self.provider.value} unavailable")
        else:
            logger.info(f"{self.provider.value} provider initialized")

    @property
    def is_available(self) -> bool:
        return self.client is not None

    def _require_client(self) -> Any:
        """Return the client or fail before any network work."""
        if self.client is None:
            raise ProviderUnavailableError(self.provider, credential_name=self.credential_name)
        return self.client

    @abstractmethod
    async def complete(
        self,
        model: str,
        prompt: str,
        system_instruction: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> AIResponse:
        """
        Generate a completion for a single prompt.

        Raises:
            ProviderUnavailableError: If no client is configured
            ProviderError: If the vendor call fails
        """
        pass

    @abstractmethod
    async def chat(
        self,
        model: str,
        messages: Sequence[ChatMessage],
        system_instruction: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> AIResponse:
        """
        Generate the next assistant turn for a full conversation.

        Raises:
            ProviderUnavailableError: If no client is configured
            ProviderError: If the vendor call fails
        """
        pass

    @abstractmethod
    def stream(
        self,
        model: str,
        messages: Sequence[ChatMessage],
        system_instruction: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> AsyncIterator[str]:
        """
        Stream the next assistant turn as text fragments.

        Yields:
            Non-empty text fragments in emission order

        Raises:
            ProviderUnavailableError: If no client is configured
            ProviderError: If the vendor call or stream fails
        """
        pass

    def _provider_error(self, action: str, model: str, error: Exception) -> ProviderError:
        message = f"{self.provider.value} {action} failed: {error}"
        logger.error(message, extra={"provider": self.provider.value, "model": model})
        return ProviderError(message, provider=self.provider, model=model, original_error=error)

    def _log_request(self, model: str, response: AIResponse) -> None:
        """Log request details for monitoring."""
        log_data: Dict[str, Any] = {
            "provider": self.provider.value,
            "model": model,
            "input_tokens": response.usage.input_tokens,
            "output_tokens": response.usage.output_tokens,
            "success": True
        }
        logger.info("Provider request", extra=log_data)
