"""
Gemini Provider - Cheapest per-token model for chat, pricing and insights

Implements Google's Gemini API through the google-genai SDK's native async
client.
"""

import logging
from contextlib import aclosing
from typing import Any, AsyncIterator, Dict, Optional, Sequence

from google import genai
from google.genai import types as genai_types

from ..types import AIResponse, ChatMessage, MessageRole, Provider, TokenUsage
from .base_provider import DEFAULT_TEMPERATURE, BaseProvider, prepare_conversation

logger = logging.getLogger(__name__)


class GeminiProvider(BaseProvider):
    """
    Google Gemini provider.

    System handling: the merged system instruction goes to the dedicated
    ``system_instruction`` field. Assistant turns map to the ``model`` role.
    """

    provider = Provider.GOOGLE
    credential_name = "GOOGLE_AI_API_KEY"

    @classmethod
    def from_api_key(cls, api_key: Optional[str]) -> "GeminiProvider":
        """Build the adapter; no client is created without a credential."""
        return cls(genai.Client(api_key=api_key) if api_key else None)

    async def complete(
        self,
        model: str,
        prompt: str,
        system_instruction: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> AIResponse:
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
        client = self._require_client()
        request = self._build_request(model, messages, system_instruction, max_tokens, temperature)

        try:
            response = await client.aio.models.generate_content(**request)
        except Exception as e:
            raise self._provider_error("generation", model, e) from e

        usage = response.usage_metadata
        result = AIResponse(
            content=response.text or "",
            usage=TokenUsage(
                input_tokens=usage.prompt_token_count if usage else None,
                output_tokens=usage.candidates_token_count if usage else None,
                total_tokens=usage.total_token_count if usage else None,
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
        client = self._require_client()
        request = self._build_request(model, messages, system_instruction, max_tokens, temperature)

        try:
            response_stream = await client.aio.models.generate_content_stream(**request)

            async with aclosing(response_stream) as chunks:
                async for chunk in chunks:
                    text = chunk.text
                    if text:
                        yield text

        except Exception as e:
            raise self._provider_error("streaming", model, e) from e

    def _build_request(
        self,
        model: str,
        messages: Sequence[ChatMessage],
        system_instruction: Optional[str],
        max_tokens: Optional[int],
        temperature: float,
    ) -> Dict[str, Any]:
        conversation = prepare_conversation(messages, system_instruction)

        contents = [
            genai_types.Content(
                role="model" if m.role == MessageRole.ASSISTANT else "user",
                parts=[genai_types.Part(text=m.content)],
            )
            for m in conversation.turns
        ]

        return {
            "model": model,
            "contents": contents,
            "config": genai_types.GenerateContentConfig(
                system_instruction=conversation.system,
                max_output_tokens=max_tokens,
                temperature=temperature,
            ),
        }
