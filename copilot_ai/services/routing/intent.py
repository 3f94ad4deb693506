"""
Intent routing helper

Runs the cheap intent-classification task and maps the classified intent to
the task type that should serve the follow-up reply.
"""

import json
import logging
import re
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ...core.exceptions import InvalidRequestError
from .types import RouteOptions, TaskType

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL)


INTENT_TASK_ROUTING: Mapping[str, TaskType] = MappingProxyType({
    "campaign_request": TaskType.CAMPAIGN_GENERATION,
    "marketing": TaskType.CAMPAIGN_GENERATION,
    "pricing_help": TaskType.PRICING_SUGGESTION,
    "pricing": TaskType.PRICING_SUGGESTION,
    "revenue_summary": TaskType.BUSINESS_INSIGHTS,
    "top_customers": TaskType.BUSINESS_INSIGHTS,
    "cleaner_performance": TaskType.BUSINESS_INSIGHTS,
})


class IntentResult(BaseModel):
    """Parsed output of the intent-classification task."""
    intent: str
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    entities: Dict[str, Any] = Field(default_factory=dict)


def parse_intent(content: str) -> IntentResult:
    """
    Parse a classifier reply, tolerating a Markdown code fence around the JSON.

    Raises:
        InvalidRequestError: If the reply is not a JSON object with an intent
    """
    match = _CODE_FENCE.match(content)
    payload = match.group(1) if match else content.strip()

    try:
        data = json.loads(payload)
        if not isinstance(data, dict):
            raise ValueError("classifier reply is not a JSON object")
        # Models emit explicit nulls for absent entities
        if data.get("entities") is None:
            data["entities"] = {}
        return IntentResult.model_validate(data)
    except (ValueError, PydanticValidationError) as e:
        raise InvalidRequestError(
            "Unparseable intent classification",
            details={"content": content[:200]}
        ) from e


def task_for_intent(intent: str) -> TaskType:
    """Task type that should answer a message with this intent."""
    return INTENT_TASK_ROUTING.get(intent, TaskType.CHAT_RESPONSE)


async def classify_intent(router, message: str, options: Optional[RouteOptions] = None) -> IntentResult:
    """
    Classify a user message with the intent-classification task.

    Provider errors propagate unchanged; the caller decides whether to fall
    back to ``TaskType.CHAT_RESPONSE``.
    """
    response = await router.complete(TaskType.INTENT_CLASSIFICATION, message, options)
    result = parse_intent(response.content)
    logger.info(
        f"Classified intent: {result.intent}",
        extra={"intent": result.intent, "confidence": result.confidence}
    )
    return result
