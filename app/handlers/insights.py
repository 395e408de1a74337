"""AI trading insights endpoint."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException

from app.models import InsightsRequest, TradingInsights
from app.services.insights import InsightsUnavailableError, generate_trading_insights

router = APIRouter()


@router.post("/insights", response_model=TradingInsights)
def create_insights(request: InsightsRequest):
    try:
        return generate_trading_insights(request)
    except InsightsUnavailableError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
