from __future__ import annotations

from pydantic import BaseModel, Field


class InsightsRequest(BaseModel):
    market_conditions: str = Field(..., min_length=1, description="The current market conditions and trends.")
    trading_preferences: str | None = Field(
        default=None,
        description="The user's trading preferences, risk tolerance, and preferred instruments.",
    )
    past_trades: str | None = Field(default=None, description="The user's past trades, for insight personalization.")


class TradingInsights(BaseModel):
    summary: str = Field(..., description="A summary of potential trading opportunities and risks.")
    insights: list[str] = Field(
        default_factory=list,
        description="A list of key insights based on market conditions and user preferences.",
    )
    disclaimer: str | None = Field(
        default=None,
        description="Important disclaimer to display to the user about AI-generated content.",
    )
