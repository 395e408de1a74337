"""Firebase Authentication helpers.

The browser signs users in with Firebase Auth and sends the ID token as a
bearer token. The Admin SDK verifies it; the ``uid`` claim links the caller
to ``users.firebase_auth_uid``.
"""
from __future__ import annotations

import json
import logging
import threading

import firebase_admin
from fastapi import Header, HTTPException
from firebase_admin import auth, credentials
from pydantic import BaseModel

from app.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

_init_lock = threading.Lock()


class AuthError(Exception):
    """Raised when an ID token is missing, malformed, expired or revoked."""


class AuthenticatedUser(BaseModel):
    uid: str
    email: str | None = None
    email_verified: bool = False


# ---------------------------------------------------------------------------
# Initialise the Firebase Admin SDK exactly once, on first use.
# ---------------------------------------------------------------------------


def _firebase_app() -> firebase_admin.App:
    with _init_lock:
        if firebase_admin._apps:  # type: ignore[attr-defined]
            return firebase_admin.get_app()

        if settings.firebase_credentials_json:
            # Accept path or JSON string
            cred_obj: credentials.Base = (
                credentials.Certificate(settings.firebase_credentials_json)
                if settings.firebase_credentials_json.endswith(".json")
                else credentials.Certificate(json.loads(settings.firebase_credentials_json))
            )
        else:
            # Attempt default credentials (useful on Cloud Run with workload identity)
            cred_obj = credentials.ApplicationDefault()

        options = {"projectId": settings.project_id} if settings.project_id else None
        app = firebase_admin.initialize_app(cred_obj, options)
        logger.info("Firebase Admin SDK initialised.")
        return app


def verify_id_token(id_token: str) -> AuthenticatedUser:
    try:
        claims = auth.verify_id_token(id_token, app=_firebase_app(), check_revoked=True)
    except (auth.InvalidIdTokenError, auth.UserDisabledError, auth.CertificateFetchError, ValueError) as exc:
        raise AuthError(str(exc)) from exc
    return AuthenticatedUser(
        uid=claims["uid"],
        email=claims.get("email"),
        email_verified=bool(claims.get("email_verified", False)),
    )


def _bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Bad Authorization header")
    return token.strip()


def current_user(authorization: str | None = Header(None)) -> AuthenticatedUser:
    """FastAPI dependency resolving the signed-in Firebase user.

    Declared sync so token verification runs in the threadpool.
    """

    token = _bearer_token(authorization)
    try:
        return verify_id_token(token)
    except AuthError as exc:
        logger.warning("Rejected ID token: %s", exc)
        raise HTTPException(status_code=401, detail="Invalid or expired session") from exc
