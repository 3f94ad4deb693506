"""
Usage/Cost Calculator

Pure functions over the Task Registry's per-million-token rates. Invoked by
callers after a response arrives; never on the dispatch path.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Union

from .task_registry import MODEL_ROUTING, resolve_task_type
from .types import AIResponse, Provider, TaskType

logger = logging.getLogger(__name__)

TOKENS_PER_MILLION = 1_000_000
CHARS_PER_TOKEN = 4


def calculate_cost(
    task_type: Union[TaskType, str],
    input_tokens: Optional[int],
    output_tokens: Optional[int]
) -> Optional[float]:
    """
    Calculate USD cost of a call from observed token counts.

    Args:
        task_type: Task whose model rates apply
        input_tokens: Prompt tokens reported by the provider
        output_tokens: Completion tokens reported by the provider

    Returns:
        Cost in USD, or None when either count is unknown. A partial cost
        from only one side is never computed.

    Raises:
        ValueError: If a token count is negative
    """
    config = MODEL_ROUTING[resolve_task_type(task_type)]

    if input_tokens is None or output_tokens is None:
        return None
    if input_tokens < 0 or output_tokens < 0:
        raise ValueError("Token counts must be non-negative")

    input_cost = (input_tokens / TOKENS_PER_MILLION) * config.cost_per_1m_input
    output_cost = (output_tokens / TOKENS_PER_MILLION) * config.cost_per_1m_output
    return input_cost + output_cost


def estimate_tokens(text: str) -> int:
    """Rough token estimate: ~4 characters per token, rounded up."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def estimate_cost(task_type: Union[TaskType, str], input_text: str, output_text: str) -> float:
    """Estimated cost for calls (typically streams) that report no usage."""
    return calculate_cost(task_type, estimate_tokens(input_text), estimate_tokens(output_text))


@dataclass(frozen=True)
class UsageRecord:
    """One usage-log row for the caller to persist."""
    task_type: TaskType
    provider: Optional[Provider]
    model: Optional[str]
    input_tokens: Optional[int]
    output_tokens: Optional[int]
    cost_usd: Optional[float]
    recorded_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "feature": self.task_type.value,
            "provider": self.provider.value if self.provider else None,
            "model": self.model,
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "cost_usd": self.cost_usd,
            "recorded_at": self.recorded_at.isoformat(),
        }


def record_usage(task_type: Union[TaskType, str], response: AIResponse) -> UsageRecord:
    """Build a usage record from a response. Cost stays None if usage is incomplete."""
    task_type = resolve_task_type(task_type)
    config = MODEL_ROUTING[task_type]
    usage = response.usage

    record = UsageRecord(
        task_type=task_type,
        provider=response.provider or config.provider,
        model=response.model or config.model,
        input_tokens=usage.input_tokens,
        output_tokens=usage.output_tokens,
        cost_usd=calculate_cost(task_type, usage.input_tokens, usage.output_tokens),
    )

    if record.cost_usd is None:
        logger.warning(
            f"Usage incomplete for {task_type.value}; cost unknown",
            extra={"task_type": task_type.value, "provider": record.provider.value}
        )
    else:
        logger.info(
            f"Tracked cost: ${record.cost_usd:.6f} for {task_type.value}",
            extra={
                "task_type": task_type.value,
                "provider": record.provider.value,
                "model": record.model,
                "input_tokens": record.input_tokens,
                "output_tokens": record.output_tokens,
            }
        )

    return record
