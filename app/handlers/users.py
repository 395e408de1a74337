"""Sign-up endpoints used before the dashboard session exists."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.models import ActionResult, CreateUserRequest
from app.services import accounts
from app.services.auth import AuthenticatedUser, current_user

router = APIRouter(prefix="/users")
logger = logging.getLogger(__name__)


@router.post("", response_model=ActionResult)
def create_user(
    request: CreateUserRequest,
    db: Session = Depends(get_db),
    auth_user: AuthenticatedUser = Depends(current_user),
):
    if auth_user.uid != request.firebase_uid:
        logger.warning("Sign-up uid mismatch: token=%s body=%s", auth_user.uid, request.firebase_uid)
        raise HTTPException(status_code=403, detail="Token does not match the account being created")
    return accounts.create_user(
        db,
        firebase_uid=request.firebase_uid,
        email=str(request.email),
        username=request.username,
    )


@router.get("/exists/{username}")
def check_username(username: str, db: Session = Depends(get_db)):
    return {"exists": accounts.username_exists(db, username)}
