from .accounts import (
    ActionResult,
    AppUser,
    CompleteProfile,
    CreateUserRequest,
    DashboardData,
    DepositRequest,
    DepositStatus,
    PinSetup,
    ProfileUpdate,
    TransactionEntry,
)
from .catalog import MarketQuote, MarketTab, PricingRow, ResourceItem, ResourceSection, Trader, TradingPlan
from .contact import ContactForm
from .images import GeneratedImage, ImageSlot, ResolvedImage
from .insights import InsightsRequest, TradingInsights

__all__ = [
    "ActionResult",
    "AppUser",
    "CompleteProfile",
    "CreateUserRequest",
    "DashboardData",
    "DepositRequest",
    "DepositStatus",
    "PinSetup",
    "ProfileUpdate",
    "TransactionEntry",
    "MarketQuote",
    "MarketTab",
    "PricingRow",
    "ResourceItem",
    "ResourceSection",
    "Trader",
    "TradingPlan",
    "ContactForm",
    "GeneratedImage",
    "ImageSlot",
    "ResolvedImage",
    "InsightsRequest",
    "TradingInsights",
]
