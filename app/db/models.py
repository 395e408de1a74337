"""Relational tables backing the site and the customer dashboard.

/images                 one cached promotional image per context tag
/users                  application user linked to a Firebase Auth uid
/wallets                one balance row per user
/transactions           deposits, withdrawals and P/L adjustments
/user_copied_traders    traders a user currently copies
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from app.db.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _uuid() -> str:
    return str(uuid.uuid4())


class ImageRecord(Base):
    __tablename__ = "images"

    id = Column(Integer, primary_key=True)
    context_tag = Column(String(255), unique=True, nullable=False, index=True)
    # Remote URL or inline "data:image/...;base64," URI
    image_url = Column(Text, nullable=False)
    alt_text = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<ImageRecord(context_tag='{self.context_tag}')>"


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="users_email_key"),
        UniqueConstraint("username", name="users_username_key"),
        UniqueConstraint("firebase_auth_uid", name="users_firebase_auth_uid_key"),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    firebase_auth_uid = Column(String(128), nullable=False, index=True)
    username = Column(String(20), nullable=False)
    email = Column(String(320), nullable=False)
    first_name = Column(String(100))
    last_name = Column(String(100))
    phone_number = Column(String(50))
    country_code = Column(String(2))
    trading_plan_id = Column(Integer, nullable=False, default=1)
    profile_completed_at = Column(DateTime(timezone=True))
    pin_setup_completed_at = Column(DateTime(timezone=True))
    # salted PBKDF2 hash, never the raw PIN
    admin_pin = Column(String(255))
    is_active = Column(Boolean, nullable=False, default=True)
    is_email_verified = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Wallet(Base):
    __tablename__ = "wallets"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    balance = Column(Numeric(18, 2), nullable=False, default=0)
    profit_loss_balance = Column(Numeric(18, 2), nullable=False, default=0)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # DEPOSIT / WITHDRAWAL / COPY_TRADE_PNL / COPY_TRADE_FEE / PNL_ADJUSTMENT
    transaction_type = Column(String(32), nullable=False)
    amount_usd_equivalent = Column(Numeric(18, 2), nullable=False)
    amount_crypto = Column(Numeric(28, 10))
    asset_name = Column(String(16))
    # PENDING / COMPLETED / FAILED
    status = Column(String(16), nullable=False, default="PENDING")

    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)
    processed_at = Column(DateTime(timezone=True))


class UserCopiedTrader(Base):
    __tablename__ = "user_copied_traders"
    __table_args__ = (UniqueConstraint("user_id", "trader_id", name="uq_user_copied_trader"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    trader_id = Column(String(32), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
