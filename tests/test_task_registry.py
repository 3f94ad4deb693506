"""
Tests for the static task routing table and the prompt catalog.
"""

from types import MappingProxyType

import pytest

from copilot_ai.core.exceptions import ConfigurationError, UnknownTaskTypeError
from copilot_ai.services.routing.prompts import (
    SYSTEM_PROMPTS,
    PromptCategory,
    category_for_task,
    default_instruction_for_task,
    get_system_prompt,
)
from copilot_ai.services.routing.task_registry import (
    MODEL_ROUTING,
    get_model_config,
    resolve_task_type,
    validate_routing_table,
)
from copilot_ai.services.routing.types import Provider, TaskType


class TestModelRouting:

    @pytest.mark.unit
    def test_every_task_type_has_a_route(self):
        for task_type in TaskType:
            config = MODEL_ROUTING[task_type]
            assert config.max_tokens > 0
            assert config.cost_per_1m_input >= 0
            assert config.cost_per_1m_output >= 0

    @pytest.mark.unit
    def test_cheap_tasks_go_to_cheap_models(self):
        assert MODEL_ROUTING[TaskType.INTENT_CLASSIFICATION].provider == Provider.OPENAI
        assert MODEL_ROUTING[TaskType.ENTITY_EXTRACTION].model == "gpt-4o-mini"
        assert MODEL_ROUTING[TaskType.VOICE_COMMAND].max_tokens == 200
        assert MODEL_ROUTING[TaskType.PRICING_SUGGESTION].provider == Provider.GOOGLE
        assert MODEL_ROUTING[TaskType.CHAT_RESPONSE].max_tokens == 1000
        assert MODEL_ROUTING[TaskType.BUSINESS_INSIGHTS].max_tokens == 1500

    @pytest.mark.unit
    def test_quality_tasks_go_to_claude(self):
        for task_type in (TaskType.CAMPAIGN_GENERATION, TaskType.COMPLEX_ANALYSIS):
            config = MODEL_ROUTING[task_type]
            assert config.provider == Provider.ANTHROPIC
            assert config.cost_per_1m_input == 3.00
            assert config.cost_per_1m_output == 15.00
            assert config.max_tokens == 2000

    @pytest.mark.unit
    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            MODEL_ROUTING[TaskType.CHAT_RESPONSE] = MODEL_ROUTING[TaskType.CAMPAIGN_GENERATION]

    @pytest.mark.unit
    def test_validate_rejects_missing_task(self):
        partial = {t: c for t, c in MODEL_ROUTING.items() if t != TaskType.VOICE_COMMAND}

        with pytest.raises(ConfigurationError) as exc_info:
            validate_routing_table(MappingProxyType(partial))

        assert exc_info.value.details["missing"] == ["voice_command"]

    @pytest.mark.unit
    def test_resolve_task_type(self):
        assert resolve_task_type("business_insights") is TaskType.BUSINESS_INSIGHTS
        assert resolve_task_type(TaskType.CHAT_RESPONSE) is TaskType.CHAT_RESPONSE

    @pytest.mark.unit
    def test_unknown_task_type(self):
        with pytest.raises(UnknownTaskTypeError) as exc_info:
            get_model_config("write_poem")

        assert exc_info.value.error_code == "UNKNOWN_TASK_TYPE"


class TestPromptCatalog:

    @pytest.mark.unit
    def test_every_category_has_text(self):
        for category in PromptCategory:
            assert SYSTEM_PROMPTS[category].strip()

    @pytest.mark.unit
    def test_unknown_category_falls_back_to_chat(self):
        assert get_system_prompt("does_not_exist") == SYSTEM_PROMPTS[PromptCategory.CHAT]

    @pytest.mark.unit
    def test_tasks_share_category_defaults(self):
        assert category_for_task(TaskType.ENTITY_EXTRACTION) == PromptCategory.INTENT_CLASSIFICATION
        assert category_for_task(TaskType.VOICE_COMMAND) == PromptCategory.INTENT_CLASSIFICATION
        assert category_for_task(TaskType.COMPLEX_ANALYSIS) == PromptCategory.INSIGHTS
        assert default_instruction_for_task(TaskType.CAMPAIGN_GENERATION) == SYSTEM_PROMPTS[PromptCategory.CAMPAIGN]
