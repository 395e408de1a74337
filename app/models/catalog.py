from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from .images import ImageSlot


class MarketQuote(BaseModel):
    instrument: str
    price: str
    change: str
    change_percent: str
    is_up: bool


class MarketTab(BaseModel):
    value: str
    label: str


class PricingRow(BaseModel):
    instrument: str
    min_spread: str
    avg_spread: str
    swap_long: str
    swap_short: str
    trading_hours: str


class TradingPlan(BaseModel):
    id: int
    name: str
    minimum_deposit_usd: Decimal
    description: str
    leverage: str
    max_open_trades: int | None = None
    allow_copy_trading: bool = False
    features: list[str] = []


class Trader(BaseModel):
    id: str
    name: str
    strategy: str
    risk_level: int = Field(..., ge=1, le=10)
    return_12m_percent: float
    followers: int
    markets: list[str] = []


class ResourceItem(BaseModel):
    title: str
    kind: str
    description: str
    slot: ImageSlot


class ResourceSection(BaseModel):
    title: str
    description: str
    items: list[ResourceItem]
