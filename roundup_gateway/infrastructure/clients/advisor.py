"""Language-model client producing advisory text for scores and forecasts"""

import logging
from decimal import Decimal
from typing import List, Optional

from openai import AsyncOpenAI, OpenAIError

from roundup_gateway.config import settings
from roundup_gateway.domain.exceptions import DependencyUnavailableError
from roundup_gateway.domain.models import CreditScoreResult, IncomePoint
from roundup_gateway.infrastructure.observability.metrics import advisor_fallback_counter

logger = logging.getLogger(__name__)

DEFAULT_ADVICE = "Focus on building consistent savings habits and maintaining stable income."
DEFAULT_EXPLANATION = "Income trend analysis completed."

ADVICE_SYSTEM_PROMPT = (
    "You are a helpful financial advisor providing specific, actionable advice to improve credit scores."
)
EXPLANATION_SYSTEM_PROMPT = (
    "You are a helpful financial advisor providing clear, encouraging insights about income trends."
)


def _format_points(points: List[IncomePoint]) -> str:
    return ", ".join(f"{p.date.isoformat()}: ₹{p.amount:.2f}" for p in points)


def build_advice_prompt(result: CreditScoreResult, total_savings: Decimal, round_up_percent: Decimal) -> str:
    b = result.breakdown
    return (
        "Based on the following credit score analysis, provide personalized financial advice:\n\n"
        f"Credit Score: {result.score}/100\n"
        "Breakdown:\n"
        f"- Savings Score: {b.savings}/100 (Current Balance: ₹{total_savings:,.2f})\n"
        f"- Round-up Consistency: {b.roundup}/100 ({round_up_percent:.1f}% of transactions)\n"
        f"- Income Stability: {b.stability}/100\n"
        f"- Community Engagement: {b.community}/100\n\n"
        "Please provide 2-3 actionable recommendations to improve the credit score. "
        "Be specific and encouraging."
    )


def build_explanation_prompt(historical: List[IncomePoint], forecast: List[IncomePoint], trend: str) -> str:
    return (
        "Based on the following income data, provide a brief, friendly explanation "
        "of the income trend and forecast:\n\n"
        f"Historical Income (last 8 periods): {_format_points(historical[-8:])}\n"
        f"Forecast (next 4 periods): {_format_points(forecast[:4])}\n"
        f"Trend: {trend}\n\n"
        "Please provide a 2-3 sentence explanation that's easy to understand and encouraging. "
        "Focus on the trend and what it means for the user's financial future."
    )


class AdvisorClient:
    """Client for the OpenAI chat completions API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_model
        self.timeout = timeout or settings.http_timeout_seconds
        self._client: Optional[AsyncOpenAI] = None

    def _openai(self) -> AsyncOpenAI:
        """Lazily built SDK client, shared by every completion this advisor runs"""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def _complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str:
        """
        Run one chat completion and return its text.

        Raises:
            DependencyUnavailableError: No API key, API error, or empty completion
        """
        if not self.api_key:
            raise DependencyUnavailableError("OpenAI API key is not configured")

        try:
            completion = await self._openai().chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=max_tokens,
                temperature=settings.llm_temperature,
            )
        except OpenAIError as e:
            raise DependencyUnavailableError(f"OpenAI request failed: {e}") from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise DependencyUnavailableError("OpenAI returned an empty completion")
        return content

    async def credit_advice(
        self,
        result: CreditScoreResult,
        total_savings: Decimal,
        round_up_percent: Decimal,
    ) -> str:
        """Advice for improving the score; falls back to a neutral default"""
        try:
            return await self._complete(
                ADVICE_SYSTEM_PROMPT,
                build_advice_prompt(result, total_savings, round_up_percent),
                settings.advice_max_tokens,
            )
        except DependencyUnavailableError as e:
            logger.warning(f"Advice generation unavailable: {e}")
            advisor_fallback_counter.labels(kind="advice").inc()
            return DEFAULT_ADVICE

    async def forecast_explanation(
        self,
        historical: List[IncomePoint],
        forecast: List[IncomePoint],
        trend: str,
    ) -> str:
        """Plain-language summary of a forecast; falls back to a neutral default"""
        try:
            return await self._complete(
                EXPLANATION_SYSTEM_PROMPT,
                build_explanation_prompt(historical, forecast, trend),
                settings.explanation_max_tokens,
            )
        except DependencyUnavailableError as e:
            logger.warning(f"Forecast explanation unavailable: {e}")
            advisor_fallback_counter.labels(kind="explanation").inc()
            return DEFAULT_EXPLANATION
