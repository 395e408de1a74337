"""Static content rendered by the public pages.

Quotes and spreads are display values, not a live feed. Every page image
slot is declared here so the page endpoints and the warm-up script agree on
the context tags.
"""
from __future__ import annotations

from decimal import Decimal

from app.models import (
    ImageSlot,
    MarketQuote,
    MarketTab,
    PricingRow,
    ResourceItem,
    ResourceSection,
    Trader,
    TradingPlan,
)

DEFAULT_MINIMUM_DEPOSIT_USD = Decimal("500")


def _q(instrument: str, price: str, change: str, change_percent: str) -> MarketQuote:
    return MarketQuote(
        instrument=instrument,
        price=price,
        change=change,
        change_percent=change_percent,
        is_up=not change.startswith("-"),
    )


MARKET_DATA: dict[str, list[MarketQuote]] = {
    "forex": [
        _q("EUR/USD", "1.0725", "+0.0012", "+0.11%"),
        _q("GBP/USD", "1.2580", "-0.0005", "-0.04%"),
        _q("USD/JPY", "157.10", "+0.25", "+0.16%"),
        _q("AUD/USD", "0.6650", "+0.0008", "+0.12%"),
        _q("USD/CAD", "1.3690", "-0.0010", "-0.07%"),
    ],
    "shares": [
        _q("AAPL", "190.50", "+1.75", "+0.93%"),
        _q("GOOGL", "175.20", "-0.80", "-0.45%"),
        _q("MSFT", "425.10", "+2.40", "+0.57%"),
        _q("AMZN", "185.00", "-1.20", "-0.64%"),
        _q("TSLA", "178.60", "+3.10", "+1.76%"),
    ],
    "metals": [
        _q("Gold (XAU/USD)", "2350.50", "+10.20", "+0.44%"),
        _q("Silver (XAG/USD)", "30.15", "-0.25", "-0.82%"),
        _q("Platinum", "1050.00", "+5.50", "+0.53%"),
        _q("Copper", "4.50", "-0.02", "-0.44%"),
    ],
    "commodities": [
        _q("Crude Oil (WTI)", "78.50", "+1.20", "+1.55%"),
        _q("Brent Oil", "82.60", "+1.10", "+1.35%"),
        _q("Natural Gas", "2.95", "-0.05", "-1.67%"),
        _q("Corn", "450.25", "+2.75", "+0.61%"),
    ],
    "indices": [
        _q("S&P 500", "5250.00", "+25.50", "+0.49%"),
        _q("Dow Jones", "39800.00", "-50.00", "-0.13%"),
        _q("NASDAQ", "16400.00", "+120.75", "+0.74%"),
        _q("FTSE 100", "8200.00", "+30.25", "+0.37%"),
    ],
    "crypto": [
        _q("Bitcoin (BTC)", "68,500.00", "+1200.00", "+1.78%"),
        _q("Ethereum (ETH)", "3,800.00", "-50.00", "-1.30%"),
        _q("Solana (SOL)", "165.50", "+5.20", "+3.24%"),
        _q("Ripple (XRP)", "0.5200", "-0.0050", "-0.95%"),
    ],
    "bonds": [
        _q("US 10-Year", "4.45%", "-0.02", "-0.45%"),
        _q("German 10-Year", "2.55%", "+0.01", "+0.39%"),
    ],
    "etfs": [
        _q("SPY", "524.50", "+2.50", "+0.48%"),
        _q("QQQ", "450.20", "+3.80", "+0.85%"),
    ],
}

MARKET_TABS: list[MarketTab] = [
    MarketTab(value="forex", label="Forex"),
    MarketTab(value="shares", label="Shares"),
    MarketTab(value="metals", label="Metals"),
    MarketTab(value="commodities", label="Commodities"),
    MarketTab(value="indices", label="Indices"),
    MarketTab(value="crypto", label="Digital Currencies"),
    MarketTab(value="bonds", label="Bonds"),
    MarketTab(value="etfs", label="ETFs"),
]

PRICING: list[PricingRow] = [
    PricingRow(instrument="EUR/USD", min_spread="0.1 pips", avg_spread="0.2 pips", swap_long="-8.56", swap_short="+4.52", trading_hours="24/5"),
    PricingRow(instrument="GBP/USD", min_spread="0.3 pips", avg_spread="0.5 pips", swap_long="-6.21", swap_short="+2.11", trading_hours="24/5"),
    PricingRow(instrument="USD/JPY", min_spread="0.1 pips", avg_spread="0.3 pips", swap_long="+15.40", swap_short="-22.80", trading_hours="24/5"),
    PricingRow(instrument="Gold (XAU/USD)", min_spread="1.5 pips", avg_spread="2.5 pips", swap_long="-35.10", swap_short="+15.80", trading_hours="23/5"),
    PricingRow(instrument="S&P 500", min_spread="0.4 pts", avg_spread="0.6 pts", swap_long="-3.20", swap_short="-3.80", trading_hours="23/5"),
    PricingRow(instrument="Bitcoin (BTC)", min_spread="10.0", avg_spread="15.0", swap_long="-0.075%", swap_short="-0.075%", trading_hours="24/7"),
    PricingRow(instrument="AAPL", min_spread="0.02", avg_spread="0.05", swap_long="N/A", swap_short="N/A", trading_hours="16:30-23:00"),
]

TRADING_PLANS: list[TradingPlan] = [
    TradingPlan(
        id=1,
        name="Starter",
        minimum_deposit_usd=Decimal("500"),
        description="Everything you need to place your first trades.",
        leverage="1:100",
        max_open_trades=10,
        features=["Standard spreads", "Email support", "Resource center access"],
    ),
    TradingPlan(
        id=2,
        name="Silver",
        minimum_deposit_usd=Decimal("2500"),
        description="Tighter spreads for regular traders.",
        leverage="1:200",
        max_open_trades=25,
        features=["Reduced spreads", "Priority email support", "Weekly market outlook"],
    ),
    TradingPlan(
        id=3,
        name="Gold",
        minimum_deposit_usd=Decimal("10000"),
        description="Copy trading and AI insights for active traders.",
        leverage="1:300",
        max_open_trades=50,
        allow_copy_trading=True,
        features=["Copy trading", "AI trading insights", "Dedicated account manager"],
    ),
    TradingPlan(
        id=4,
        name="Platinum",
        minimum_deposit_usd=Decimal("25000"),
        description="Raw spreads and personal coaching.",
        leverage="1:400",
        max_open_trades=100,
        allow_copy_trading=True,
        features=["Raw spreads", "1-on-1 coaching", "Exclusive webinars"],
    ),
    TradingPlan(
        id=5,
        name="Diamond",
        minimum_deposit_usd=Decimal("50000"),
        description="Institutional conditions for professional traders.",
        leverage="1:500",
        allow_copy_trading=True,
        features=["Institutional pricing", "API trading", "24/7 personal support"],
    ),
]

TRADERS: list[Trader] = [
    Trader(id="trader_001", name="Elena Marquez", strategy="Swing trading major FX pairs", risk_level=4, return_12m_percent=38.2, followers=2410, markets=["forex"]),
    Trader(id="trader_002", name="Kenji Watanabe", strategy="Momentum on Asian session JPY crosses", risk_level=6, return_12m_percent=52.7, followers=1875, markets=["forex", "indices"]),
    Trader(id="trader_003", name="Amara Okafor", strategy="Gold and silver trend following", risk_level=5, return_12m_percent=27.9, followers=964, markets=["metals"]),
    Trader(id="trader_004", name="Lukas Becker", strategy="Index mean reversion", risk_level=3, return_12m_percent=18.4, followers=1322, markets=["indices"]),
    Trader(id="trader_005", name="Priya Nair", strategy="Large-cap tech earnings plays", risk_level=7, return_12m_percent=61.3, followers=2087, markets=["shares"]),
    Trader(id="trader_006", name="Omar Haddad", strategy="Energy commodities breakout", risk_level=8, return_12m_percent=74.5, followers=745, markets=["commodities"]),
    Trader(id="trader_007", name="Sofia Rossi", strategy="Low-drawdown FX carry", risk_level=2, return_12m_percent=14.6, followers=3120, markets=["forex", "bonds"]),
    Trader(id="trader_008", name="Daniel Kim", strategy="Crypto majors swing trading", risk_level=9, return_12m_percent=96.1, followers=2654, markets=["crypto"]),
]

FEATURED_TRADER_IDS = ("trader_001", "trader_002", "trader_007", "trader_008")
HOME_PLAN_IDS = (1, 3, 4)


def _resource(title: str, kind: str, description: str, tag: str) -> ResourceItem:
    return ResourceItem(
        title=title,
        kind=kind,
        description=description,
        slot=ImageSlot(context_tag=tag, hint=tag.removeprefix("resource_").replace("_", " ")),
    )


RESOURCE_SECTIONS: list[ResourceSection] = [
    ResourceSection(
        title="Educational Material",
        description="Expand your knowledge with our expert-led courses, tutorials, and publications.",
        items=[
            _resource("Trading for Beginners", "Course", "A comprehensive course covering the fundamentals of trading.", "resource_course_beginners"),
            _resource("Advanced Technical Analysis", "Video", "Deep dive into chart patterns, indicators, and strategies.", "resource_video_analysis"),
            _resource("Weekly Market Outlook", "Webinar", "Join our experts live as they analyze upcoming market events.", "resource_webinar_outlook"),
            _resource("The Trader's Mindset", "Podcast", "Listen to interviews with successful traders and psychologists.", "resource_podcast_mindset"),
            _resource("Upcoming Trading Summit", "Event", "Connect with fellow traders and learn from industry leaders.", "resource_event_summit"),
            _resource("Risk Management Guide", "E-book", "A practical guide to protecting your capital while trading.", "resource_ebook_risk"),
        ],
    ),
    ResourceSection(
        title="Platform Information",
        description="Get the most out of Apexora with guides on our trading platforms and tools.",
        items=[
            _resource("Apexora WebTrader", "Platform", "Master our powerful, browser-based trading platform.", "resource_platform_webtrader"),
            _resource("Apexora API Docs", "Tutorial", "Build your own automated trading strategies with our API.", "resource_tutorial_api"),
            _resource("Trading Glossary", "Glossary", "Your guide to all the essential trading terminology.", "resource_glossary"),
        ],
    ),
]

# Hero and section images per page, keyed by page slug
PAGE_IMAGE_SLOTS: dict[str, list[ImageSlot]] = {
    "home": [ImageSlot(context_tag="trading_platforms_overview_main", hint="trading dashboard")],
    "about": [ImageSlot(context_tag="about_page_generic_promo", hint="modern office")],
    "pricing": [ImageSlot(context_tag="pricing_page_hero", hint="financial charts")],
    "markets": [ImageSlot(context_tag="markets_page_hero", hint="global financial markets")],
    "copy-trading": [ImageSlot(context_tag="copy_trading_hero", hint="social trading network")],
    "ai-insights": [ImageSlot(context_tag="ai_insights_hero", hint="artificial intelligence data")],
    "resources": [item.slot for section in RESOURCE_SECTIONS for item in section.items],
    "dashboard": [ImageSlot(context_tag="dashboard_article_promo", hint="market analysis article")],
}


def get_plan(plan_id: int) -> TradingPlan | None:
    return next((plan for plan in TRADING_PLANS if plan.id == plan_id), None)


def get_trader(trader_id: str) -> Trader | None:
    return next((trader for trader in TRADERS if trader.id == trader_id), None)


def all_image_slots() -> list[ImageSlot]:
    """Every distinct slot across all pages, first declaration wins."""

    seen: dict[str, ImageSlot] = {}
    for slots in PAGE_IMAGE_SLOTS.values():
        for slot in slots:
            seen.setdefault(slot.context_tag, slot)
    return list(seen.values())


def get_image_slot(context_tag: str) -> ImageSlot | None:
    return next((slot for slot in all_image_slots() if slot.context_tag == context_tag), None)
