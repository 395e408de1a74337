"""Personalised trading insights generated by the configured LLM."""
from __future__ import annotations

import logging

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_core.output_parsers import PydanticOutputParser

from app.models import InsightsRequest, TradingInsights
from app.services.llm import chat_completion

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are an AI-powered trading insights generator. Your goal is to provide traders with "
    "personalized insights and summaries based on current market conditions and their "
    "trading preferences."
)

_USER_PROMPT = """Market Conditions: {market_conditions}
Trading Preferences: {trading_preferences}
Past Trades: {past_trades}

Provide a concise summary of potential trading opportunities and risks, and a list of key insights.

Format your output as a JSON object with 'summary' and 'insights' fields.

Include a disclaimer stating that the insights are AI-generated and not financial advice.

{format_instructions}"""

DEFAULT_DISCLAIMER = (
    "These insights are AI-generated for informational purposes only and do not constitute "
    "financial advice. Trading CFDs and forex carries a high level of risk."
)


class InsightsUnavailableError(RuntimeError):
    """Raised when the model call fails or returns unparseable output."""


def build_messages(request: InsightsRequest) -> list:
    parser = PydanticOutputParser(pydantic_object=TradingInsights)
    prompt = _USER_PROMPT.format(
        market_conditions=request.market_conditions.strip(),
        trading_preferences=(request.trading_preferences or "").strip() or "No specific preferences provided.",
        past_trades=(request.past_trades or "").strip() or "No past trades provided.",
        format_instructions=parser.get_format_instructions(),
    )
    return [SystemMessage(content=SYSTEM_PROMPT), HumanMessage(content=prompt)]


def generate_trading_insights(request: InsightsRequest) -> TradingInsights:
    try:
        result = chat_completion(build_messages(request), response_model=TradingInsights)
    except Exception as exc:
        logger.exception("Trading insights generation failed")
        raise InsightsUnavailableError("Could not generate trading insights right now.") from exc

    output = result.output
    if not isinstance(output, TradingInsights):
        raise InsightsUnavailableError("The model returned an unexpected response.")

    logger.info(
        "Generated %d trading insights with %s (%s tokens)",
        len(output.insights),
        result.model,
        result.usage.get("total_tokens", "?"),
    )
    if not output.disclaimer:
        output = output.model_copy(update={"disclaimer": DEFAULT_DISCLAIMER})
    return output
