"""User accounts, wallets, deposits and copy-trading selections.

Every action takes the request's SQLAlchemy session. Failures are logged and
reported back as ``ActionResult(success=False, message=...)`` (or ``None``
for reads) so the dashboard can show a message instead of an error page.
"""
from __future__ import annotations

import hashlib
import logging
import os
from datetime import datetime, timezone
from decimal import Decimal
from typing import List

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app import catalog
from app.db.models import Transaction, User, UserCopiedTrader, Wallet
from app.models import (
    ActionResult,
    AppUser,
    CompleteProfile,
    DashboardData,
    DepositRequest,
    DepositStatus,
    ProfileUpdate,
    TransactionEntry,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "An internal error occurred. Please try again."
USERNAME_TAKEN = "This username is already taken."
EMAIL_TAKEN = "An account with this email already exists."

RECENT_TRANSACTIONS_LIMIT = 5
_PIN_ITERATIONS = 200_000


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _conflicting_field(exc: IntegrityError) -> str | None:
    """Map a unique violation to the offending users column.

    PostgreSQL reports the constraint name, SQLite the ``table.column``.
    """

    text = str(exc.orig)
    for field in ("email", "username", "firebase_auth_uid"):
        if f"users_{field}_key" in text or f"users.{field}" in text:
            return field
    return None


def _hash_pin(pin: str) -> str:
    salt = os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", pin.encode(), salt, _PIN_ITERATIONS)
    return f"pbkdf2_sha256${_PIN_ITERATIONS}${salt.hex()}${digest.hex()}"


def _get_user(db: Session, firebase_uid: str) -> User | None:
    return db.execute(select(User).where(User.firebase_auth_uid == firebase_uid)).scalar_one_or_none()


# ---------------------------------------------------------------------------
# Sign-up & profile
# ---------------------------------------------------------------------------


def create_user(db: Session, *, firebase_uid: str, email: str, username: str) -> ActionResult:
    """Create a user on the default plan together with an empty wallet."""

    try:
        user = User(firebase_auth_uid=firebase_uid, email=email, username=username.lower(), trading_plan_id=1)
        db.add(user)
        db.flush()
        db.add(Wallet(user_id=user.id))
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.error("Database error creating user: %s", exc.orig)
        field = _conflicting_field(exc)
        if field == "email":
            return ActionResult(success=False, message=EMAIL_TAKEN)
        if field == "username":
            return ActionResult(success=False, message=USERNAME_TAKEN)
        return ActionResult(success=False, message=INTERNAL_ERROR)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error creating user")
        return ActionResult(success=False, message=INTERNAL_ERROR)

    logger.info("Created user %s (%s)", user.id, user.username)
    return ActionResult(success=True, user_id=user.id)


def username_exists(db: Session, username: str) -> bool:
    stmt = select(func.count()).select_from(User).where(func.lower(User.username) == username.lower())
    return db.execute(stmt).scalar_one() > 0


def get_user_by_firebase_uid(db: Session, firebase_uid: str) -> AppUser | None:
    if not firebase_uid:
        return None
    try:
        user = _get_user(db, firebase_uid)
    except SQLAlchemyError:
        logger.exception("Database error fetching user by Firebase UID")
        return None
    return AppUser.model_validate(user) if user else None


def update_user_profile(db: Session, firebase_uid: str, update: ProfileUpdate) -> ActionResult:
    fields = update.model_dump(exclude_unset=True, exclude_none=True)
    if not fields:
        return ActionResult(success=True, message="No changes were made.")
    if "username" in fields:
        fields["username"] = fields["username"].lower()
    if "country_code" in fields:
        fields["country_code"] = fields["country_code"].upper()

    try:
        user = _get_user(db, firebase_uid)
        if user is None:
            return ActionResult(success=False, message="User not found or no update was made.")
        for name, value in fields.items():
            setattr(user, name, value)
        db.commit()
        db.refresh(user)
    except IntegrityError as exc:
        db.rollback()
        logger.error("Database error updating user profile: %s", exc.orig)
        if _conflicting_field(exc) == "username":
            return ActionResult(success=False, message=USERNAME_TAKEN)
        return ActionResult(success=False, message=INTERNAL_ERROR)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error updating user profile")
        return ActionResult(success=False, message=INTERNAL_ERROR)

    return ActionResult(success=True, user=AppUser.model_validate(user))


def complete_user_profile(db: Session, firebase_uid: str, form: CompleteProfile) -> ActionResult:
    if catalog.get_plan(form.trading_plan_id) is None:
        return ActionResult(success=False, message="Please choose a valid trading plan.")
    try:
        user = _get_user(db, firebase_uid)
        if user is None:
            return ActionResult(success=False, message="User not found.")
        user.first_name = form.first_name
        user.last_name = form.last_name
        user.phone_number = form.phone_number
        user.country_code = form.country_code.upper()
        user.trading_plan_id = form.trading_plan_id
        user.profile_completed_at = _now()
        db.commit()
        db.refresh(user)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error completing user profile")
        return ActionResult(success=False, message=INTERNAL_ERROR)
    return ActionResult(success=True, user=AppUser.model_validate(user))


def complete_pin_setup(db: Session, firebase_uid: str, pin: str) -> ActionResult:
    """Store a salted hash of *pin* and mark the PIN step complete."""

    try:
        user = _get_user(db, firebase_uid)
        if user is None:
            return ActionResult(success=False, message="User not found.")
        user.admin_pin = _hash_pin(pin)
        user.pin_setup_completed_at = _now()
        db.commit()
        db.refresh(user)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error completing PIN setup")
        return ActionResult(success=False, message=INTERNAL_ERROR)
    return ActionResult(success=True, user=AppUser.model_validate(user))


# ---------------------------------------------------------------------------
# Dashboard & transactions
# ---------------------------------------------------------------------------


def _completed_total(db: Session, user_id: str, transaction_type: str) -> Decimal:
    stmt = select(func.coalesce(func.sum(Transaction.amount_usd_equivalent), 0)).where(
        Transaction.user_id == user_id,
        Transaction.transaction_type == transaction_type,
        Transaction.status == "COMPLETED",
    )
    return Decimal(str(db.execute(stmt).scalar_one()))


def get_dashboard_data(db: Session, firebase_uid: str) -> DashboardData | None:
    if not firebase_uid:
        return None
    try:
        user = _get_user(db, firebase_uid)
        if user is None:
            logger.error("No user found with firebase_auth_uid: %s", firebase_uid)
            return None

        wallet = db.execute(select(Wallet).where(Wallet.user_id == user.id)).scalar_one_or_none()
        balance = Decimal(wallet.balance) if wallet else Decimal("0")
        profit_loss = Decimal(wallet.profit_loss_balance) if wallet else Decimal("0")

        recent = db.execute(
            select(Transaction)
            .where(Transaction.user_id == user.id)
            .order_by(Transaction.created_at.desc())
            .limit(RECENT_TRANSACTIONS_LIMIT)
        ).scalars().all()

        active_copy_trades = db.execute(
            select(func.count()).select_from(UserCopiedTrader).where(UserCopiedTrader.user_id == user.id)
        ).scalar_one()

        return DashboardData(
            username=user.username,
            total_assets=balance + profit_loss,
            total_deposited=_completed_total(db, user.id, "DEPOSIT"),
            profit_loss=profit_loss,
            total_withdrawn=_completed_total(db, user.id, "WITHDRAWAL"),
            active_copy_trades=active_copy_trades,
            recent_transactions=[TransactionEntry.model_validate(t) for t in recent],
        )
    except SQLAlchemyError:
        logger.exception("Database error fetching dashboard data")
        return None


def get_transaction_history(db: Session, user_id: str) -> List[TransactionEntry]:
    rows = db.execute(
        select(Transaction).where(Transaction.user_id == user_id).order_by(Transaction.created_at.desc())
    ).scalars().all()
    return [TransactionEntry.model_validate(t) for t in rows]


# ---------------------------------------------------------------------------
# Deposits
# ---------------------------------------------------------------------------


def check_if_first_deposit(db: Session, user_id: str) -> bool:
    stmt = select(func.count()).select_from(Transaction).where(
        Transaction.user_id == user_id,
        Transaction.transaction_type == "DEPOSIT",
        Transaction.status != "FAILED",
    )
    return db.execute(stmt).scalar_one() == 0


def get_deposit_status(db: Session, user: AppUser) -> DepositStatus:
    plan = catalog.get_plan(user.trading_plan_id)
    return DepositStatus(
        is_first_deposit=check_if_first_deposit(db, user.id),
        minimum_deposit_usd=plan.minimum_deposit_usd if plan else catalog.DEFAULT_MINIMUM_DEPOSIT_USD,
        plan_name=plan.name if plan else None,
    )


def create_deposit_transaction(db: Session, user: AppUser, request: DepositRequest) -> ActionResult:
    """Record a pending crypto deposit; the first one must meet the plan minimum."""

    try:
        status = get_deposit_status(db, user)
        if status.is_first_deposit and request.amount_usd < status.minimum_deposit_usd:
            return ActionResult(
                success=False,
                message=(
                    f"Minimum first deposit for your {status.plan_name or 'current'} plan "
                    f"is ${status.minimum_deposit_usd:,.0f}."
                ),
            )
        db.add(
            Transaction(
                user_id=user.id,
                transaction_type="DEPOSIT",
                amount_usd_equivalent=request.amount_usd,
                asset_name=request.crypto,
                status="PENDING",
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error creating deposit for user %s", user.id)
        return ActionResult(success=False, message=INTERNAL_ERROR)

    logger.info("Deposit of %s USD via %s pending for user %s", request.amount_usd, request.crypto, user.id)
    return ActionResult(
        success=True,
        message=f"Your {request.crypto} deposit of ${request.amount_usd:,.2f} is now pending confirmation.",
    )


# ---------------------------------------------------------------------------
# Copy trading
# ---------------------------------------------------------------------------


def get_copied_trader_ids(db: Session, user_id: str) -> List[str]:
    rows = db.execute(
        select(UserCopiedTrader.trader_id)
        .where(UserCopiedTrader.user_id == user_id)
        .order_by(UserCopiedTrader.id)
    ).scalars().all()
    return list(rows)


def copy_trader(db: Session, user_id: str, trader_id: str) -> ActionResult:
    trader = catalog.get_trader(trader_id)
    if trader is None:
        return ActionResult(success=False, message="Trader not found.")
    if trader_id in get_copied_trader_ids(db, user_id):
        return ActionResult(success=True, message=f"You are already copying {trader.name}.")
    try:
        db.add(UserCopiedTrader(user_id=user_id, trader_id=trader_id))
        db.commit()
    except IntegrityError:
        # Concurrent copy request already inserted the row
        db.rollback()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error copying trader %s for user %s", trader_id, user_id)
        return ActionResult(success=False, message=INTERNAL_ERROR)
    return ActionResult(success=True, message=f"You are now copying {trader.name}.")


def stop_copying_trader(db: Session, user_id: str, trader_id: str) -> ActionResult:
    try:
        result = db.execute(
            delete(UserCopiedTrader).where(
                UserCopiedTrader.user_id == user_id,
                UserCopiedTrader.trader_id == trader_id,
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error removing copied trader %s for user %s", trader_id, user_id)
        return ActionResult(success=False, message=INTERNAL_ERROR)

    if result.rowcount == 0:
        return ActionResult(success=True, message="You were not copying this trader.")
    return ActionResult(success=True, message="Stopped copying trader.")
