"""Advisor responder - asks an external text model for strategic advice.

The engine depends only on NarrativeAdvisor. ask_advisor bounds every call
with a timeout and turns any failure into FALLBACK_ADVICE; errors never
reach the caller.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from openai import AsyncOpenAI

from oracle.config import settings
from oracle.simulation.errors import AdvisorUnavailable

logger = logging.getLogger(__name__)

FALLBACK_ADVICE = "The Oracle is currently unreachable."

ORACLE_SYSTEM_PROMPT = """ACT AS: The Strategic Oracle (CFO/COO AI) for a creative agency.
You receive a 12-month financial simulation comparing a baseline with a hypothetical strategy.
Analyze the financial data and provide concise strategic advice.
Do NOT invent figures that are not in the context."""


class NarrativeAdvisor(ABC):
    """Capability interface for a free-text advice backend."""

    @abstractmethod
    async def advise(self, context: str, prompt: str) -> str:
        """Return advice text, or raise AdvisorUnavailable."""
        pass


class OpenAIAdvisor(NarrativeAdvisor):
    """NarrativeAdvisor backed by the OpenAI chat completions API."""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        self._client = client

    def get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        return self._client

    async def advise(self, context: str, prompt: str) -> str:
        if not settings.OPENAI_API_KEY and self._client is None:
            raise AdvisorUnavailable("OPENAI_API_KEY not configured")

        user_message = f"""
CONTEXT:
{context}

USER QUESTION:
{prompt}
"""

        response = await self.get_client().chat.completions.create(
            model=settings.OPENAI_MODEL,
            messages=[
                {"role": "system", "content": ORACLE_SYSTEM_PROMPT},
                {"role": "user", "content": user_message},
            ],
            max_tokens=settings.OPENAI_MAX_TOKENS,
            temperature=0.4,
        )

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise AdvisorUnavailable("Empty response from model")
        return content.strip()


async def ask_advisor(
    advisor: NarrativeAdvisor,
    context: str,
    prompt: str,
    timeout: Optional[float] = None,
) -> str:
    """
    Ask the advisor, bounded by a timeout.

    Returns FALLBACK_ADVICE on timeout or on any advisor error.
    """
    timeout = settings.ADVISOR_TIMEOUT_SECONDS if timeout is None else timeout

    try:
        return await asyncio.wait_for(advisor.advise(context, prompt), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Advisor timed out after {timeout}s")
        return FALLBACK_ADVICE
    except Exception as e:
        logger.error(f"Advisor failed: {e}")
        return FALLBACK_ADVICE

