"""
Pytest configuration and fixtures for the routing test suite.

Provides a scripted fake adapter with call counters and a closed-stream flag,
plus routers wired to fakes so no test touches the network.
"""

import asyncio
from typing import Dict, List, Optional, Sequence

import pytest

from copilot_ai.core.config import get_settings
from copilot_ai.core.exceptions import ProviderError
from copilot_ai.services.routing.providers.base_provider import BaseProvider
from copilot_ai.services.routing.router import AIModelRouter
from copilot_ai.services.routing.types import AIResponse, ChatMessage, Provider, TokenUsage


class FakeProvider(BaseProvider):
    """
    Scripted adapter for router tests.

    Records every call, returns a fixed reply, streams it as the configured
    fragments and marks each stream closed when the generator finishes.
    """

    def __init__(
        self,
        provider: Provider,
        available: bool = True,
        content: str = "Hello from the fake provider",
        fragments: Optional[Sequence[str]] = None,
        usage: Optional[TokenUsage] = None,
        fail_with: Optional[Exception] = None,
        fail_after: Optional[int] = None,
        attach_identity: bool = True,
    ):
        self.provider = provider
        self.credential_name = f"{provider.value.upper()}_API_KEY"
        self.content = content
        self.fragments = list(fragments) if fragments is not None else [content]
        self.usage = usage or TokenUsage(input_tokens=10, output_tokens=5, total_tokens=15)
        self.fail_with = fail_with
        self.fail_after = fail_after
        self.attach_identity = attach_identity

        self.calls: List[Dict] = []
        self.network_calls = 0
        self.streams_opened = 0
        self.streams_closed = 0
        self.fragments_sent = 0
        super().__init__(client=object() if available else None)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def closed(self) -> bool:
        return self.streams_opened > 0 and self.streams_closed == self.streams_opened

    def _record(self, operation: str, model: str, payload, system_instruction, max_tokens, temperature):
        self.calls.append({
            "operation": operation,
            "model": model,
            "payload": payload,
            "system_instruction": system_instruction,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })

    def _response(self, model: str) -> AIResponse:
        if self.attach_identity:
            return AIResponse(content=self.content, usage=self.usage, provider=self.provider, model=model)
        return AIResponse(content=self.content, usage=self.usage)

    async def complete(self, model, prompt, system_instruction=None, max_tokens=None, temperature=0.7):
        self._record("complete", model, prompt, system_instruction, max_tokens, temperature)
        self._require_client()
        self.network_calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        await asyncio.sleep(0)
        return self._response(model)

    async def chat(self, model, messages, system_instruction=None, max_tokens=None, temperature=0.7):
        self._record("chat", model, list(messages), system_instruction, max_tokens, temperature)
        self._require_client()
        self.network_calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        await asyncio.sleep(0)
        return self._response(model)

    async def stream(self, model, messages, system_instruction=None, max_tokens=None, temperature=0.7):
        self._record("stream", model, list(messages), system_instruction, max_tokens, temperature)
        self._require_client()
        self.network_calls += 1
        self.streams_opened += 1
        try:
            for index, fragment in enumerate(self.fragments):
                if self.fail_after is not None and index == self.fail_after:
                    raise ProviderError("stream dropped", provider=self.provider, model=model)
                # Suspend between fragments so concurrent streams interleave in time
                await asyncio.sleep(0)
                self.fragments_sent += 1
                yield fragment
        finally:
            self.streams_closed += 1


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached; reset around every test so env patches apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_providers() -> Dict[Provider, FakeProvider]:
    """One available fake adapter per provider."""
    return {
        Provider.OPENAI: FakeProvider(Provider.OPENAI),
        Provider.GOOGLE: FakeProvider(Provider.GOOGLE),
        Provider.ANTHROPIC: FakeProvider(Provider.ANTHROPIC),
    }


@pytest.fixture
def router(fake_providers) -> AIModelRouter:
    """Router wired to the fake adapters."""
    return AIModelRouter(fake_providers)


@pytest.fixture
def conversation() -> List[ChatMessage]:
    return [
        ChatMessage(role="user", content="How did we do last month?"),
        ChatMessage(role="assistant", content="Revenue was $12,400."),
        ChatMessage(role="user", content="And this month?"),
    ]
