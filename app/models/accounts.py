from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


class AppUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    firebase_auth_uid: str
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    country_code: str | None = None
    trading_plan_id: int
    profile_completed_at: datetime | None = None
    pin_setup_completed_at: datetime | None = None
    is_active: bool = True
    is_email_verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ActionResult(BaseModel):
    """Outcome of a form action; failures carry a user-facing message."""

    success: bool
    message: str | None = None
    user_id: str | None = None
    user: AppUser | None = None


class CreateUserRequest(BaseModel):
    firebase_uid: str = Field(..., min_length=1)
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=20, pattern=USERNAME_PATTERN)


class ProfileUpdate(BaseModel):
    first_name: str | None = Field(default=None, min_length=2, max_length=100)
    last_name: str | None = Field(default=None, min_length=2, max_length=100)
    username: str | None = Field(default=None, min_length=3, max_length=20, pattern=USERNAME_PATTERN)
    phone_number: str | None = Field(default=None, max_length=50)
    country_code: str | None = Field(default=None, min_length=2, max_length=2)


class CompleteProfile(BaseModel):
    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)
    phone_number: str = Field(..., min_length=5, max_length=50)
    country_code: str = Field(..., min_length=2, max_length=2)
    trading_plan_id: int = Field(1, ge=1)


class PinSetup(BaseModel):
    pin: str = Field(..., pattern=r"^\d{4,6}$")
    confirm_pin: str

    @model_validator(mode="after")
    def _pins_match(self) -> "PinSetup":
        if self.pin != self.confirm_pin:
            raise ValueError("PINs do not match.")
        return self


class TransactionEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    transaction_type: str
    amount_usd_equivalent: Decimal
    amount_crypto: Decimal | None = None
    asset_name: str | None = None
    status: str
    created_at: datetime | None = None
    processed_at: datetime | None = None


class DashboardData(BaseModel):
    username: str
    total_assets: Decimal
    total_deposited: Decimal
    profit_loss: Decimal
    total_withdrawn: Decimal
    active_copy_trades: int
    recent_transactions: list[TransactionEntry] = []


class DepositRequest(BaseModel):
    crypto: Literal["BTC", "ETH", "USDT"]
    amount_usd: Decimal = Field(..., gt=0, max_digits=18, decimal_places=2)


class DepositStatus(BaseModel):
    is_first_deposit: bool
    minimum_deposit_usd: Decimal
    plan_name: str | None = None
