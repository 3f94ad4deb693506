"""
Routing Types - Task identifiers, provider identifiers and call payloads

Everything here is either static configuration (TaskType, Provider,
ModelConfig) or an ephemeral per-call value (ChatMessage, AIResponse).
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ...core.exceptions import InvalidRequestError


class TaskType(str, Enum):
    """Why a model call is being made. Closed set; used only as a lookup key."""
    INTENT_CLASSIFICATION = "intent_classification"  # Cheap, fast, JSON out
    ENTITY_EXTRACTION = "entity_extraction"
    PRICING_SUGGESTION = "pricing_suggestion"
    CHAT_RESPONSE = "chat_response"
    BUSINESS_INSIGHTS = "business_insights"
    CAMPAIGN_GENERATION = "campaign_generation"      # Long-form, high quality
    COMPLEX_ANALYSIS = "complex_analysis"
    VOICE_COMMAND = "voice_command"


class Provider(str, Enum):
    """External language-model vendors."""
    OPENAI = "openai"
    GOOGLE = "google"
    ANTHROPIC = "anthropic"


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass(frozen=True)
class ModelConfig:
    """Static route for one task: which model serves it and what it costs."""
    provider: Provider
    model: str
    cost_per_1m_input: float   # USD per 1M input tokens
    cost_per_1m_output: float  # USD per 1M output tokens
    max_tokens: int            # Default output-token ceiling


@dataclass
class ChatMessage:
    """One turn of a conversation."""
    role: MessageRole
    content: str
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        try:
            self.role = MessageRole(self.role)
        except ValueError:
            raise InvalidRequestError(
                f"Invalid message role: {self.role!r}",
                details={"allowed_roles": [r.value for r in MessageRole]}
            ) from None
        if not isinstance(self.content, str):
            raise InvalidRequestError("Message content must be a string")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatMessage":
        if "role" not in data or "content" not in data:
            raise InvalidRequestError("Message must have 'role' and 'content'")
        return cls(role=data["role"], content=data["content"], timestamp=data.get("timestamp"))


MessageInput = Union[ChatMessage, Mapping[str, Any]]


def coerce_messages(messages: Iterable[MessageInput]) -> List[ChatMessage]:
    """Normalize caller-supplied history (dataclasses or dicts) to ChatMessage."""
    if messages is None or isinstance(messages, (str, bytes)):
        raise InvalidRequestError("messages must be a sequence of chat messages")
    return [m if isinstance(m, ChatMessage) else ChatMessage.from_dict(m) for m in messages]


@dataclass(frozen=True)
class TokenUsage:
    """Token counts reported by a provider. None means unknown, never zero."""
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return self.input_tokens is not None and self.output_tokens is not None


@dataclass(frozen=True)
class AIResponse:
    """Normalized response from any provider."""
    content: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    provider: Optional[Provider] = None
    model: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "content": self.content,
            "usage": {
                "input_tokens": self.usage.input_tokens,
                "output_tokens": self.usage.output_tokens,
                "total_tokens": self.usage.total_tokens,
            },
            "provider": self.provider.value if self.provider else None,
            "model": self.model,
        }


class RouteOptions(BaseModel):
    """Per-call options. Unknown fields are rejected to catch caller typos."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    system_instruction: Optional[str] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
