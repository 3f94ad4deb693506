"""
Claude Provider - High-quality reasoning and content generation

This provider implements the Anthropic Messages API for campaign copy and
multi-step analysis.
"""

import logging
from typing import Any, AsyncIterator, Dict, Optional, Sequence

from anthropic import AsyncAnthropic

from ..types import AIResponse, ChatMessage, MessageRole, Provider, TokenUsage
from .base_provider import DEFAULT_TEMPERATURE, BaseProvider, prepare_conversation

logger = logging.getLogger(__name__)

# The Messages API requires max_tokens on every call
DEFAULT_MAX_TOKENS = 1024


class ClaudeProvider(BaseProvider):
    """
    Claude provider for high-quality reasoning and content generation.

    System handling: the Messages API only accepts ``user``/``assistant``
    turns, so the merged system instruction goes to the ``system`` parameter.
    """

    provider = Provider.ANTHROPIC
    credential_name = "ANTHROPIC_API_KEY"

    @classmethod
    def from_api_key(cls, api_key: Optional[str]) -> "ClaudeProvider":
        """Build the adapter; no client is created without a credential."""
        return cls(AsyncAnthropic(api_key=api_key) if api_key else None)

    async def complete(
        self,
        model: str,
        prompt: str,
        system_instruction: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> AIResponse:
        """Generate text completion using Claude."""
        return await self.chat(
            model,
            [ChatMessage(role=MessageRole.USER, content=prompt)],
            system_instruction=system_instruction,
            max_tokens=max_tokens,
            temperature=temperature,
        )

    async def chat(
        self,
        model: str,
        messages: Sequence[ChatMessage],
        system_instruction: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> AIResponse:
        """Generate the next assistant turn using Claude."""
        client = self._require_client()
        params = self._build_params(model, messages, system_instruction, max_tokens, temperature)

        try:
            response = await client.messages.create(**params)
        except Exception as e:
            raise self._provider_error("generation", model, e) from e

        # First text block; tool-use blocks are not requested
        content = next(
            (block.text for block in response.content if block.type == "text"),
            ""
        )

        input_tokens = response.usage.input_tokens
        output_tokens = response.usage.output_tokens
        total_tokens = None
        if input_tokens is not None and output_tokens is not None:
            total_tokens = input_tokens + output_tokens

        result = AIResponse(
            content=content,
            usage=TokenUsage(
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                total_tokens=total_tokens,
            ),
            provider=self.provider,
            model=model,
        )
        self._log_request(model, result)
        return result

    async def stream(
        self,
        model: str,
        messages: Sequence[ChatMessage],
        system_instruction: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> AsyncIterator[str]:
        """Generate streaming text completion using Claude."""
        client = self._require_client()
        params = self._build_params(model, messages, system_instruction, max_tokens, temperature)

        try:
            async with client.messages.stream(**params) as message_stream:
                async for text in message_stream.text_stream:
                    if text:
                        yield text

        except Exception as e:
            raise self._provider_error("streaming", model, e) from e

    def _build_params(
        self,
        model: str,
        messages: Sequence[ChatMessage],
        system_instruction: Optional[str],
        max_tokens: Optional[int],
        temperature: float,
    ) -> Dict[str, Any]:
        conversation = prepare_conversation(messages, system_instruction)

        params: Dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens or DEFAULT_MAX_TOKENS,
            "temperature": temperature,
            "messages": [
                {"role": m.role.value, "content": m.content} for m in conversation.turns
            ],
        }
        if conversation.system:
            params["system"] = conversation.system
        return params
