"""Authenticated customer dashboard endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app import catalog
from app.db.database import get_db
from app.handlers.pages import with_placeholder
from app.models import (
    ActionResult,
    AppUser,
    CompleteProfile,
    DashboardData,
    DepositRequest,
    DepositStatus,
    PinSetup,
    ProfileUpdate,
    ResolvedImage,
    TransactionEntry,
)
from app.services import accounts
from app.services.auth import AuthenticatedUser, current_user
from app.services.image_resolver import ImageResolver, get_image_resolver

router = APIRouter(prefix="/dashboard")
logger = logging.getLogger(__name__)


def app_user(
    auth_user: AuthenticatedUser = Depends(current_user),
    db: Session = Depends(get_db),
) -> AppUser:
    user = accounts.get_user_by_firebase_uid(db, auth_user.uid)
    if user is None:
        raise HTTPException(status_code=404, detail="Account not found")
    return user


# ---------------------------------------------------------------------------
# Overview
# ---------------------------------------------------------------------------


@router.get("", response_model=DashboardData)
def get_dashboard(auth_user: AuthenticatedUser = Depends(current_user), db: Session = Depends(get_db)):
    data = accounts.get_dashboard_data(db, auth_user.uid)
    if data is None:
        raise HTTPException(status_code=404, detail="Dashboard data unavailable")
    return data


@router.get("/promo", response_model=ResolvedImage)
def get_promo_image(
    _: AuthenticatedUser = Depends(current_user),
    resolver: ImageResolver = Depends(get_image_resolver),
):
    (slot,) = catalog.PAGE_IMAGE_SLOTS["dashboard"]
    return with_placeholder(resolver.resolve(slot.context_tag, slot.hint))


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


@router.get("/profile", response_model=AppUser)
def get_profile(user: AppUser = Depends(app_user)):
    return user


@router.patch("/profile", response_model=ActionResult)
def patch_profile(
    update: ProfileUpdate,
    auth_user: AuthenticatedUser = Depends(current_user),
    db: Session = Depends(get_db),
):
    return accounts.update_user_profile(db, auth_user.uid, update)


@router.post("/profile/complete", response_model=ActionResult)
def complete_profile(
    form: CompleteProfile,
    auth_user: AuthenticatedUser = Depends(current_user),
    db: Session = Depends(get_db),
):
    return accounts.complete_user_profile(db, auth_user.uid, form)


@router.post("/pin", response_model=ActionResult)
def setup_pin(
    form: PinSetup,
    auth_user: AuthenticatedUser = Depends(current_user),
    db: Session = Depends(get_db),
):
    return accounts.complete_pin_setup(db, auth_user.uid, form.pin)


# ---------------------------------------------------------------------------
# Transactions & deposits
# ---------------------------------------------------------------------------


@router.get("/transactions", response_model=list[TransactionEntry])
def list_transactions(user: AppUser = Depends(app_user), db: Session = Depends(get_db)):
    return accounts.get_transaction_history(db, user.id)


@router.get("/deposits/status", response_model=DepositStatus)
def deposit_status(user: AppUser = Depends(app_user), db: Session = Depends(get_db)):
    return accounts.get_deposit_status(db, user)


@router.post("/deposits", response_model=ActionResult)
def create_deposit(request: DepositRequest, user: AppUser = Depends(app_user), db: Session = Depends(get_db)):
    return accounts.create_deposit_transaction(db, user, request)


# ---------------------------------------------------------------------------
# Copy trading
# ---------------------------------------------------------------------------


@router.get("/copy-trading", response_model=list[str])
def list_copied_traders(user: AppUser = Depends(app_user), db: Session = Depends(get_db)):
    return accounts.get_copied_trader_ids(db, user.id)


@router.post("/copy-trading/{trader_id}", response_model=ActionResult)
def start_copying(trader_id: str, user: AppUser = Depends(app_user), db: Session = Depends(get_db)):
    if catalog.get_trader(trader_id) is None:
        raise HTTPException(status_code=404, detail="Trader not found")
    return accounts.copy_trader(db, user.id, trader_id)


@router.delete("/copy-trading/{trader_id}", response_model=ActionResult)
def stop_copying(trader_id: str, user: AppUser = Depends(app_user), db: Session = Depends(get_db)):
    return accounts.stop_copying_trader(db, user.id, trader_id)
