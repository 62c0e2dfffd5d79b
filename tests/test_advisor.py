"""Tests for the narrative advisor and its fallback behaviour."""

import asyncio
import pytest
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

from oracle.advisor.responder import (
    FALLBACK_ADVICE,
    NarrativeAdvisor,
    OpenAIAdvisor,
    ask_advisor,
)
from oracle.config import settings
from oracle.simulation.engine import build_comparison_context, run_simulation
from oracle.simulation.errors import AdvisorUnavailable
from oracle.simulation.records import TaskRecord
from oracle.simulation.types import SimulationScenario


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def mock_client(content=None, side_effect=None):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=completion(content), side_effect=side_effect)
    return client


class SlowAdvisor(NarrativeAdvisor):
    async def advise(self, context: str, prompt: str) -> str:
        await asyncio.sleep(5)
        return "too late"


class FixedAdvisor(NarrativeAdvisor):
    def __init__(self, advice):
        self.advice = advice
        self.calls = []

    async def advise(self, context: str, prompt: str) -> str:
        self.calls.append((context, prompt))
        return self.advice


class TestOpenAIAdvisor:

    @pytest.mark.asyncio
    async def test_returns_stripped_advice(self):
        client = mock_client("  Cut the Director hire until Q3.\n")
        advisor = OpenAIAdvisor(client=client)

        advice = await advisor.advise("Month 12 cash: $40,000", "Should we hire?")

        assert advice == "Cut the Director hire until Q3."
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == settings.OPENAI_MODEL
        assert kwargs["messages"][0]["role"] == "system"
        assert "Month 12 cash: $40,000" in kwargs["messages"][1]["content"]
        assert "Should we hire?" in kwargs["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_missing_api_key_is_unavailable(self):
        with patch.object(settings, "OPENAI_API_KEY", ""):
            with pytest.raises(AdvisorUnavailable):
                await OpenAIAdvisor().advise("ctx", "prompt")

    @pytest.mark.asyncio
    async def test_empty_completion_is_unavailable(self):
        advisor = OpenAIAdvisor(client=mock_client("   "))
        with pytest.raises(AdvisorUnavailable):
            await advisor.advise("ctx", "prompt")


class TestAskAdvisor:

    @pytest.mark.asyncio
    async def test_passes_through_advice(self):
        advisor = FixedAdvisor("Hold hiring.")
        assert await ask_advisor(advisor, "ctx", "What now?") == "Hold hiring."
        assert advisor.calls == [("ctx", "What now?")]

    @pytest.mark.asyncio
    async def test_timeout_returns_fallback(self):
        assert await ask_advisor(SlowAdvisor(), "ctx", "prompt", timeout=0.05) == FALLBACK_ADVICE

    @pytest.mark.asyncio
    async def test_backend_error_returns_fallback(self):
        advisor = OpenAIAdvisor(client=mock_client(side_effect=RuntimeError("rate limited")))
        assert await ask_advisor(advisor, "ctx", "prompt") == FALLBACK_ADVICE

    @pytest.mark.asyncio
    async def test_unconfigured_advisor_returns_fallback(self):
        with patch.object(settings, "OPENAI_API_KEY", ""):
            assert await ask_advisor(OpenAIAdvisor(), "ctx", "prompt") == FALLBACK_ADVICE

    def test_fallback_message(self):
        assert FALLBACK_ADVICE == "The Oracle is currently unreachable."


class TestComparisonContext:

    def test_context_summarizes_month_twelve(self, reference_records, as_of):
        outcome = run_simulation(
            reference_records, SimulationScenario(client_churn_rate=Decimal("100")), as_of
        )

        context = build_comparison_context(outcome)

        assert "Starting cash: $100,000" in context
        assert "Month 12 (Jan 2027) baseline: revenue $20,000, expenses $25,000, cash $40,000" in context
        assert "cash $-200,000" in context
        assert "(CRITICAL)" in context
        assert outcome.prediction in context
        assert "missing data" not in context
        assert outcome.advisor_context == context

    def test_context_lists_burnout_and_missing_data(self, reference_records, as_of):
        reference_records.unavailable["leads"] = "timeout"
        reference_records.tasks = reference_records.tasks + [
            TaskRecord(id=f"extra_{i}", status="TODO", assigned_to_id="user_ana")
            for i in range(4)
        ]

        context = build_comparison_context(run_simulation(reference_records, SimulationScenario(), as_of))

        # 10 open tasks -> 125% utilization
        assert "Burnout risk: Ana (100%)" in context
        assert "Note: missing data for pipeline_value" in context
