"""Resend transactional email API wrapper.

Only single-recipient HTML messages are needed: the contact form forwards
each submission to the support inbox.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Optional

import httpx

from app.config import get_settings

logger = logging.getLogger(__name__)


class ResendAPIError(Exception):
    """Raised when the Resend API returns an error status."""

    def __init__(self, status: int, message: str, response_json: Optional[dict[str, Any]] = None):
        super().__init__(f"Resend API error {status}: {message}")
        self.status = status
        self.response_json = response_json or {}


class ResendClient:  # pylint: disable=too-few-public-methods
    """Minimal async client for the Resend REST API."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://api.resend.com",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers = {"Authorization": f"Bearer {api_key}"}
        self._client = httpx.AsyncClient(timeout=10.0, headers=self._headers, transport=transport)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def send_email(
        self,
        *,
        sender: str,
        to: list[str],
        subject: str,
        html: str,
        reply_to: str | None = None,
    ) -> str:
        """Send one email and return the provider message id."""

        payload: dict[str, Any] = {"from": sender, "to": to, "subject": subject, "html": html}
        if reply_to:
            payload["reply_to"] = reply_to

        url = f"{self._base_url}/emails"
        logger.debug("POST %s subject=%r", url, subject)
        resp = await self._client.post(url, json=payload)
        if resp.status_code >= 400:
            try:
                err_json = resp.json()
            except ValueError:
                err_json = None
            raise ResendAPIError(resp.status_code, resp.text, err_json)
        return resp.json().get("id", "")

    async def close(self) -> None:
        await self._client.aclose()


@lru_cache()
def get_resend_client() -> ResendClient:
    settings = get_settings()
    if not settings.resend_api_key:
        raise RuntimeError("RESEND_API_KEY is not configured")
    return ResendClient(api_key=settings.resend_api_key, base_url=settings.resend_base_url)
