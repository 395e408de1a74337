"""Public page data: cached imagery plus the static catalog each page renders."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from app import catalog
from app.config import get_settings
from app.models import MarketQuote, MarketTab, PricingRow, ResolvedImage, Trader, TradingPlan
from app.services.image_resolver import DEFAULT_ALT_TEXT, ImageResolver, get_image_resolver

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)


def with_placeholder(image: ResolvedImage | None) -> ResolvedImage:
    if image is not None:
        return image
    return ResolvedImage(image_url=settings.placeholder_image_url, alt_text=DEFAULT_ALT_TEXT)


def _page_content(page: str) -> dict[str, Any]:
    if page == "home":
        return {"plans": [p for p in catalog.TRADING_PLANS if p.id in catalog.HOME_PLAN_IDS]}
    if page == "pricing":
        return {"pricing": catalog.PRICING, "plans": catalog.TRADING_PLANS}
    if page == "markets":
        return {"tabs": catalog.MARKET_TABS, "markets": catalog.MARKET_DATA}
    if page == "copy-trading":
        return {"traders": [t for t in catalog.TRADERS if t.id in catalog.FEATURED_TRADER_IDS]}
    if page == "resources":
        return {"sections": catalog.RESOURCE_SECTIONS}
    return {}


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------


@router.get("/images/{context_tag}", response_model=ResolvedImage)
def get_image(context_tag: str, resolver: ImageResolver = Depends(get_image_resolver)):
    """Serve the image for a catalog slot, generating it from the slot's own hint.

    Tags outside the catalog are served from the store only.
    """

    slot = catalog.get_image_slot(context_tag)
    if slot is None:
        return with_placeholder(resolver.resolve(context_tag))
    return with_placeholder(resolver.resolve(slot.context_tag, slot.hint))


@router.get("/pages/{page}")
def get_page(page: str, resolver: ImageResolver = Depends(get_image_resolver)):
    slots = catalog.PAGE_IMAGE_SLOTS.get(page)
    if slots is None:
        raise HTTPException(status_code=404, detail=f"Unknown page '{page}'")
    images = {tag: with_placeholder(image) for tag, image in resolver.resolve_many(slots).items()}
    logger.debug("Rendered page data for %s with %d images", page, len(images))
    return {"page": page, "images": images, "content": _page_content(page)}


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@router.get("/markets")
def get_markets() -> dict[str, Any]:
    return {"tabs": catalog.MARKET_TABS, "markets": catalog.MARKET_DATA}


@router.get("/markets/{category}", response_model=list[MarketQuote])
def get_market_category(category: str):
    quotes = catalog.MARKET_DATA.get(category)
    if quotes is None:
        raise HTTPException(status_code=404, detail=f"Unknown market '{category}'")
    return quotes


@router.get("/pricing", response_model=list[PricingRow])
def get_pricing():
    return catalog.PRICING


@router.get("/plans", response_model=list[TradingPlan])
def get_plans():
    return catalog.TRADING_PLANS


@router.get("/traders", response_model=list[Trader])
def get_traders():
    return catalog.TRADERS


@router.get("/traders/{trader_id}", response_model=Trader)
def get_trader(trader_id: str):
    trader = catalog.get_trader(trader_id)
    if trader is None:
        raise HTTPException(status_code=404, detail="Trader not found")
    return trader
