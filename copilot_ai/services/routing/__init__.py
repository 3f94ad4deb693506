"""
Routing Module

Multi-provider language-model task router for the CleanDay AI Copilot.

Architecture:
- Task Registry: static TaskType -> ModelConfig routing table
- Prompt Catalog: default system instruction per task category
- Providers: OpenAI, Gemini and Claude adapters behind one interface
- AIModelRouter: complete / chat / stream entry point
- Usage: cost calculation and usage records
"""

from .intent import IntentResult, classify_intent, parse_intent, task_for_intent
from .prompts import PromptCategory, get_system_prompt
from .router import AIModelRouter, build_adapters, create_router
from .task_registry import MODEL_ROUTING, get_model_config, resolve_task_type
from .types import (
    AIResponse,
    ChatMessage,
    MessageRole,
    ModelConfig,
    Provider,
    RouteOptions,
    TaskType,
    TokenUsage,
)
from .usage import UsageRecord, calculate_cost, estimate_cost, estimate_tokens, record_usage

__all__ = [
    "AIModelRouter",
    "build_adapters",
    "create_router",
    "MODEL_ROUTING",
    "get_model_config",
    "resolve_task_type",
    "PromptCategory",
    "get_system_prompt",
    "AIResponse",
    "ChatMessage",
    "MessageRole",
    "ModelConfig",
    "Provider",
    "RouteOptions",
    "TaskType",
    "TokenUsage",
    "UsageRecord",
    "calculate_cost",
    "estimate_cost",
    "estimate_tokens",
    "record_usage",
    "IntentResult",
    "classify_intent",
    "parse_intent",
    "task_for_intent",
]
