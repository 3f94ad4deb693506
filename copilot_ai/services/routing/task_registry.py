"""
Task Registry - Static, cost-optimized task-to-model routing

Cheap tasks are assigned to cheap models ahead of time:
- Classification, extraction, voice commands: gpt-4o-mini (fast, cheap)
- Pricing, chat, insights: gemini-2.0-flash (cheapest per token)
- Campaign copy, multi-step analysis: Claude Sonnet (highest quality)

There is no runtime re-routing; changing a route means changing this table.
"""

import logging
from types import MappingProxyType
from typing import Mapping, Union

from ...core.exceptions import ConfigurationError, UnknownTaskTypeError
from .types import ModelConfig, Provider, TaskType

logger = logging.getLogger(__name__)


_GPT_4O_MINI = dict(
    provider=Provider.OPENAI,
    model="gpt-4o-mini",
    cost_per_1m_input=0.15,
    cost_per_1m_output=0.60,
)

_GEMINI_FLASH = dict(
    provider=Provider.GOOGLE,
    model="gemini-2.0-flash",
    cost_per_1m_input=0.10,
    cost_per_1m_output=0.40,
)

_CLAUDE_SONNET = dict(
    provider=Provider.ANTHROPIC,
    model="claude-sonnet-4-20250514",
    cost_per_1m_input=3.00,
    cost_per_1m_output=15.00,
)


MODEL_ROUTING: Mapping[TaskType, ModelConfig] = MappingProxyType({
    TaskType.INTENT_CLASSIFICATION: ModelConfig(**_GPT_4O_MINI, max_tokens=200),
    TaskType.ENTITY_EXTRACTION: ModelConfig(**_GPT_4O_MINI, max_tokens=200),
    TaskType.PRICING_SUGGESTION: ModelConfig(**_GEMINI_FLASH, max_tokens=500),
    TaskType.CHAT_RESPONSE: ModelConfig(**_GEMINI_FLASH, max_tokens=1000),
    TaskType.BUSINESS_INSIGHTS: ModelConfig(**_GEMINI_FLASH, max_tokens=1500),
    TaskType.CAMPAIGN_GENERATION: ModelConfig(**_CLAUDE_SONNET, max_tokens=2000),
    TaskType.COMPLEX_ANALYSIS: ModelConfig(**_CLAUDE_SONNET, max_tokens=2000),
    TaskType.VOICE_COMMAND: ModelConfig(**_GPT_4O_MINI, max_tokens=200),
})


def validate_routing_table(table: Mapping[TaskType, ModelConfig]) -> None:
    """
    Check that a routing table covers every TaskType exactly.

    Raises:
        ConfigurationError: If any task is missing or an entry is malformed
    """
    missing = [t.value for t in TaskType if t not in table]
    if missing:
        raise ConfigurationError(
            f"Routing table missing task types: {', '.join(missing)}",
            details={"missing": missing}
        )

    for task_type, config in table.items():
        if not isinstance(task_type, TaskType):
            raise ConfigurationError(f"Routing table key is not a TaskType: {task_type!r}")
        if config.max_tokens <= 0:
            raise ConfigurationError(f"max_tokens must be positive for {task_type.value}")
        if config.cost_per_1m_input < 0 or config.cost_per_1m_output < 0:
            raise ConfigurationError(f"Token costs must be non-negative for {task_type.value}")


def resolve_task_type(task_type: Union[TaskType, str]) -> TaskType:
    """
    Coerce a task identifier to TaskType.

    Raises:
        UnknownTaskTypeError: If the identifier is outside the closed set
    """
    if isinstance(task_type, TaskType):
        return task_type
    try:
        return TaskType(task_type)
    except ValueError:
        raise UnknownTaskTypeError(task_type) from None


def get_model_config(task_type: Union[TaskType, str]) -> ModelConfig:
    """Get the model configuration for a task type."""
    return MODEL_ROUTING[resolve_task_type(task_type)]


# Fail at import, not at request time, if a task has no route
validate_routing_table(MODEL_ROUTING)
