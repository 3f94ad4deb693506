"""
CleanDay AI Copilot - multi-provider language-model task router.
"""

__version__ = "0.1.0"

from .core.exceptions import (
    CopilotAIException,
    ProviderError,
    ProviderUnavailableError,
    UnknownTaskTypeError,
)
from .services.routing import (
    AIModelRouter,
    AIResponse,
    ChatMessage,
    Provider,
    RouteOptions,
    TaskType,
    calculate_cost,
    create_router,
)

__all__ = [
    "AIModelRouter",
    "AIResponse",
    "ChatMessage",
    "Provider",
    "RouteOptions",
    "TaskType",
    "calculate_cost",
    "create_router",
    "CopilotAIException",
    "ProviderError",
    "ProviderUnavailableError",
    "UnknownTaskTypeError",
]
