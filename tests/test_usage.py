"""
Tests for cost calculation, token estimates and usage records.
"""

import logging

import pytest

from copilot_ai.services.routing.task_registry import MODEL_ROUTING
from copilot_ai.services.routing.types import AIResponse, Provider, TaskType, TokenUsage
from copilot_ai.services.routing.usage import (
    calculate_cost,
    estimate_cost,
    estimate_tokens,
    record_usage,
)


class TestCalculateCost:

    @pytest.mark.unit
    def test_one_million_each_way_costs_sum_of_rates(self):
        cost = calculate_cost(TaskType.CAMPAIGN_GENERATION, 1_000_000, 1_000_000)

        assert cost == pytest.approx(18.00)

    @pytest.mark.unit
    @pytest.mark.parametrize("task_type", list(TaskType))
    def test_one_million_on_one_side_costs_exactly_that_rate(self, task_type):
        config = MODEL_ROUTING[task_type]

        assert calculate_cost(task_type, 1_000_000, 0) == config.cost_per_1m_input
        assert calculate_cost(task_type, 0, 1_000_000) == config.cost_per_1m_output

    @pytest.mark.unit
    def test_intent_classification(self):
        cost = calculate_cost("intent_classification", 40, 12)

        assert cost == pytest.approx(40 * 0.15 / 1e6 + 12 * 0.60 / 1e6)

    @pytest.mark.unit
    def test_zero_tokens_cost_nothing(self):
        assert calculate_cost(TaskType.CHAT_RESPONSE, 0, 0) == 0

    @pytest.mark.unit
    @pytest.mark.parametrize("input_tokens,output_tokens", [(None, 10), (10, None), (None, None)])
    def test_unknown_counts_give_unknown_cost(self, input_tokens, output_tokens):
        assert calculate_cost(TaskType.CHAT_RESPONSE, input_tokens, output_tokens) is None

    @pytest.mark.unit
    def test_negative_counts_rejected(self):
        with pytest.raises(ValueError):
            calculate_cost(TaskType.CHAT_RESPONSE, -1, 10)


class TestEstimates:

    @pytest.mark.unit
    def test_estimate_rounds_up(self):
        assert estimate_tokens("") == 0
        assert estimate_tokens("abcd") == 1
        assert estimate_tokens("abcde") == 2

    @pytest.mark.unit
    def test_estimate_cost(self):
        cost = estimate_cost(TaskType.PRICING_SUGGESTION, "a" * 400, "b" * 800)

        assert cost == pytest.approx(100 * 0.10 / 1e6 + 200 * 0.40 / 1e6)


class TestRecordUsage:

    @pytest.mark.unit
    def test_complete_usage(self, caplog):
        response = AIResponse(
            content="ok",
            usage=TokenUsage(input_tokens=1000, output_tokens=500, total_tokens=1500),
            provider=Provider.GOOGLE,
            model="gemini-2.0-flash",
        )

        with caplog.at_level(logging.INFO, logger="copilot_ai.services.routing.usage"):
            record = record_usage(TaskType.BUSINESS_INSIGHTS, response)

        assert record.cost_usd == pytest.approx(1000 * 0.10 / 1e6 + 500 * 0.40 / 1e6)
        data = record.to_dict()
        assert data["feature"] == "business_insights"
        assert data["provider"] == "google"
        assert "Tracked cost" in caplog.text

    @pytest.mark.unit
    def test_incomplete_usage_warns(self, caplog):
        response = AIResponse(content="ok", usage=TokenUsage(input_tokens=20))

        with caplog.at_level(logging.WARNING, logger="copilot_ai.services.routing.usage"):
            record = record_usage("chat_response", response)

        assert record.cost_usd is None
        assert record.provider == Provider.GOOGLE
        assert record.model == "gemini-2.0-flash"
        assert "cost unknown" in caplog.text
