"""
AI Model Router - Single entry point for all copilot model calls

Routing flow:
    caller → resolve(task) → Task Registry (model config)
                           → Prompt Catalog (default instruction)
           → Provider adapter (dispatch) → vendor → AIResponse / fragments

The task-to-provider mapping is static. There is no retry, no fallback to
another provider and no default timeout: failures surface immediately,
annotated with the task type and provider that were attempted.
"""

from contextlib import aclosing
from dataclasses import dataclass, replace
from typing import Any, AsyncIterator, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ...core.config import Settings, get_settings
from ...core.exceptions import CopilotAIException, InvalidRequestError, ProviderUnavailableError
from ...core.logging import setup_logging
from .prompts import default_instruction_for_task
from .providers import BaseProvider, ClaudeProvider, GeminiProvider, OpenAIProvider
from .task_registry import MODEL_ROUTING, resolve_task_type, validate_routing_table
from .types import (
    AIResponse,
    ChatMessage,
    MessageInput,
    MessageRole,
    ModelConfig,
    Provider,
    RouteOptions,
    TaskType,
    coerce_messages,
)

logger = setup_logging(__name__)


OptionsInput = Union[RouteOptions, Mapping[str, Any], None]


@dataclass(frozen=True)
class ResolvedRoute:
    """Everything needed to dispatch one call."""
    task_type: TaskType
    config: ModelConfig
    adapter: BaseProvider
    system_instruction: str
    max_tokens: int
    temperature: float


class AIModelRouter:
    """
    Routes abstract tasks to provider adapters behind one uniform contract.

    Operations:
    - complete: single prompt in, AIResponse out
    - chat: message history in, AIResponse out
    - stream: message history in, async iterator of text fragments out

    Adapters are injected, so tests can pass fakes and production code builds
    real clients once via ``create_router``.
    """

    def __init__(
        self,
        adapters: Mapping[Provider, BaseProvider],
        routing_table: Mapping[TaskType, ModelConfig] = MODEL_ROUTING,
        default_temperature: Optional[float] = None
    ):
        """
        Initialize router.

        Args:
            adapters: One adapter per provider; a missing entry is treated as unavailable
            routing_table: Task routing table (must cover every TaskType)
            default_temperature: Temperature for calls that pass none (default: DEFAULT_TEMPERATURE from settings)
        """
        validate_routing_table(routing_table)
        self.adapters: Dict[Provider, BaseProvider] = dict(adapters)
        self.routing_table = routing_table
        self.default_temperature = (
            default_temperature if default_temperature is not None
            else get_settings().DEFAULT_TEMPERATURE
        )

        logger.info(
            "AI model router initialized",
            extra={"available_providers": [p.value for p in self.available_providers()]}
        )

    # ========== Public operations ==========

    async def complete(
        self,
        task_type: Union[TaskType, str],
        prompt: str,
        options: OptionsInput = None
    ) -> AIResponse:
        """
        Single-shot completion routed by task type.

        Raises:
            UnknownTaskTypeError: If task_type is outside the closed set
            InvalidRequestError: If options contain unknown or invalid fields
            ProviderUnavailableError: If the routed provider has no credential
            ProviderError: If the vendor call fails
        """
        if not isinstance(prompt, str):
            raise InvalidRequestError("prompt must be a string")
        route = self._resolve(task_type, options)
        self._log_dispatch("complete", route)

        try:
            response = await route.adapter.complete(
                route.config.model,
                prompt,
                system_instruction=route.system_instruction,
                max_tokens=route.max_tokens,
                temperature=route.temperature,
            )
        except CopilotAIException as e:
            self._log_failure("complete", route, e)
            e.annotate(task_type=route.task_type, provider=route.config.provider)
            raise

        return self._finalize(route, response)

    async def chat(
        self,
        task_type: Union[TaskType, str],
        messages: Iterable[MessageInput],
        options: OptionsInput = None
    ) -> AIResponse:
        """
        Multi-turn chat routed by task type.

        Raises:
            Same as ``complete``.
        """
        route = self._resolve(task_type, options)
        history = self._coerce_history(messages)
        self._log_dispatch("chat", route, message_count=len(history))

        try:
            response = await route.adapter.chat(
                route.config.model,
                history,
                system_instruction=route.system_instruction,
                max_tokens=route.max_tokens,
                temperature=route.temperature,
            )
        except CopilotAIException as e:
            self._log_failure("chat", route, e)
            e.annotate(task_type=route.task_type, provider=route.config.provider)
            raise

        return self._finalize(route, response)

    def stream(
        self,
        task_type: Union[TaskType, str],
        messages: Iterable[MessageInput],
        options: OptionsInput = None
    ) -> AsyncIterator[str]:
        """
        Streaming chat routed by task type.

        Resolution happens eagerly, so configuration errors raise here rather
        than on the first fragment. The returned iterator forwards fragments
        as produced; closing it closes the provider stream.

        Raises:
            UnknownTaskTypeError, InvalidRequestError, ProviderUnavailableError
            at call time; ProviderError while iterating.
        """
        route = self._resolve(task_type, options)
        history = self._coerce_history(messages)
        self._log_dispatch("stream", route, message_count=len(history))
        return self._forward_stream(route, history)

    # ========== Availability ==========

    def is_provider_available(self, provider: Union[Provider, str]) -> bool:
        """Whether the provider has a configured client. Unknown providers are never available."""
        try:
            provider = Provider(provider)
        except ValueError:
            return False
        adapter = self.adapters.get(provider)
        return adapter is not None and adapter.is_available

    def available_providers(self) -> List[Provider]:
        return [p for p in Provider if self.is_provider_available(p)]

    def is_task_available(self, task_type: Union[TaskType, str]) -> bool:
        """Whether a task can be served without a ProviderUnavailableError."""
        config = self.get_config(task_type)
        return self.is_provider_available(config.provider)

    def get_config(self, task_type: Union[TaskType, str]) -> ModelConfig:
        """Get the model configuration for a specific task type."""
        return self.routing_table[resolve_task_type(task_type)]

    # ========== Internals ==========

    def _resolve(self, task_type: Union[TaskType, str], options: OptionsInput) -> ResolvedRoute:
        task = resolve_task_type(task_type)
        opts = self._coerce_options(options)
        config = self.routing_table[task]

        adapter = self.adapters.get(config.provider)
        if adapter is None or not adapter.is_available:
            credential = getattr(adapter, "credential_name", None)
            error = ProviderUnavailableError(config.provider, credential_name=credential)
            error.annotate(task_type=task, provider=config.provider)
            raise error

        return ResolvedRoute(
            task_type=task,
            config=config,
            adapter=adapter,
            system_instruction=(
                opts.system_instruction
                if opts.system_instruction is not None
                else default_instruction_for_task(task)
            ),
            max_tokens=opts.max_tokens if opts.max_tokens is not None else config.max_tokens,
            temperature=opts.temperature if opts.temperature is not None else self.default_temperature,
        )

    @staticmethod
    def _coerce_history(messages: Iterable[MessageInput]) -> List[ChatMessage]:
        history = coerce_messages(messages)
        if not any(m.role != MessageRole.SYSTEM for m in history):
            raise InvalidRequestError("messages must contain at least one user or assistant message")
        return history

    @staticmethod
    def _coerce_options(options: OptionsInput) -> RouteOptions:
        if options is None:
            return RouteOptions()
        if isinstance(options, RouteOptions):
            return options
        if not isinstance(options, Mapping):
            raise InvalidRequestError(f"options must be RouteOptions or a mapping, got {type(options).__name__}")
        try:
            return RouteOptions.model_validate(dict(options))
        except PydanticValidationError as e:
            raise InvalidRequestError(
                f"Invalid routing options: {e.error_count()} error(s)",
                details={"errors": [
                    {"field": ".".join(str(p) for p in err["loc"]), "type": err["type"]}
                    for err in e.errors()
                ]}
            ) from e

    async def _forward_stream(self, route: ResolvedRoute, history: List[ChatMessage]) -> AsyncIterator[str]:
        fragments = route.adapter.stream(
            route.config.model,
            history,
            system_instruction=route.system_instruction,
            max_tokens=route.max_tokens,
            temperature=route.temperature,
        )
        try:
            async with aclosing(fragments) as source:
                async for fragment in source:
                    yield fragment
        except CopilotAIException as e:
            self._log_failure("stream", route, e)
            e.annotate(task_type=route.task_type, provider=route.config.provider)
            raise

    def _finalize(self, route: ResolvedRoute, response: AIResponse) -> AIResponse:
        if response.provider is None:
            response = replace(response, provider=route.config.provider)
        if response.model is None:
            response = replace(response, model=route.config.model)
        return response

    def _log_dispatch(self, operation: str, route: ResolvedRoute, **extra: Any) -> None:
        logger.info(
            f"Routing {operation}: {route.task_type.value} -> {route.config.provider.value}/{route.config.model}",
            extra={
                "operation": operation,
                "task_type": route.task_type.value,
                "provider": route.config.provider.value,
                "model": route.config.model,
                "max_tokens": route.max_tokens,
                **extra,
            }
        )

    def _log_failure(self, operation: str, route: ResolvedRoute, error: Exception) -> None:
        logger.error(
            f"Task routing failed: {error}",
            extra={
                "operation": operation,
                "task_type": route.task_type.value,
                "provider": route.config.provider.value,
            }
        )


def build_adapters(settings: Optional[Settings] = None) -> Dict[Provider, BaseProvider]:
    """Construct one adapter per provider; providers without a key get no client."""
    settings = settings or get_settings()
    return {
        Provider.OPENAI: OpenAIProvider.from_api_key(settings.api_key_for(Provider.OPENAI)),
        Provider.GOOGLE: GeminiProvider.from_api_key(settings.api_key_for(Provider.GOOGLE)),
        Provider.ANTHROPIC: ClaudeProvider.from_api_key(settings.api_key_for(Provider.ANTHROPIC)),
    }


def create_router(settings: Optional[Settings] = None) -> AIModelRouter:
    """Build a router with long-lived client handles. Call once at process start."""
    settings = settings or get_settings()
    return AIModelRouter(build_adapters(settings), default_temperature=settings.DEFAULT_TEMPERATURE)
