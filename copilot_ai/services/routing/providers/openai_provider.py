"""
OpenAI Provider - Fast, low-cost classification and extraction

This provider implements the OpenAI chat-completions API. It serves the
high-volume, short-output tasks (intent classification, entity extraction,
voice commands).
"""

import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

from openai import AsyncOpenAI

from ..types import AIResponse, ChatMessage, MessageRole, Provider, TokenUsage
from .base_provider import DEFAULT_TEMPERATURE, BaseProvider, prepare_conversation

logger = logging.getLogger(__name__)


class OpenAIProvider(BaseProvider):
    """
    OpenAI provider for chat completions.

    System handling: the merged system instruction (router instruction first,
    then caller ``system`` messages in order) is sent as one leading
    ``system`` message; remaining turns keep their roles.
    """

    provider = Provider.OPENAI
    credential_name = "OPENAI_API_KEY"

    @classmethod
    def from_api_key(cls, api_key: Optional[str]) -> "OpenAIProvider":
        """Build the adapter; no client is created without a credential."""
        return cls(AsyncOpenAI(api_key=api_key) if api_key else None)

    async def complete(
        self,
        model: str,
        prompt: str,
        system_instruction: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> AIResponse:
        """Generate a completion for a single user prompt."""
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
        """Generate the next assistant turn using OpenAI."""
        client = self._require_client()
        params = self._build_params(model, messages, system_instruction, max_tokens, temperature)

        try:
            response = await client.chat.completions.create(**params)
        except Exception as e:
            raise self._provider_error("chat completion", model, e) from e

        result = self._to_response(model, response)
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
        """Stream the next assistant turn using OpenAI."""
        client = self._require_client()
        params = self._build_params(model, messages, system_instruction, max_tokens, temperature)

        try:
            response_stream = await client.chat.completions.create(**params, stream=True)

            # Closing the stream closes the HTTP response
            async with response_stream:
                async for chunk in response_stream:
                    if chunk.choices and chunk.choices[0].delta.content:
                        yield chunk.choices[0].delta.content

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

        wire_messages: List[Dict[str, str]] = []
        if conversation.system:
            wire_messages.append({"role": "system", "content": conversation.system})
        wire_messages.extend(
            {"role": m.role.value, "content": m.content} for m in conversation.turns
        )

        params: Dict[str, Any] = {
            "model": model,
            "messages": wire_messages,
            "temperature": temperature,
        }
        if max_tokens is not None:
            params["max_tokens"] = max_tokens
        return params

    def _to_response(self, model: str, response: Any) -> AIResponse:
        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        usage = response.usage
        return AIResponse(
            content=content,
            usage=TokenUsage(
                input_tokens=usage.prompt_tokens if usage else None,
                output_tokens=usage.completion_tokens if usage else None,
                total_tokens=usage.total_tokens if usage else None,
            ),
            provider=self.provider,
            model=model,
        )
