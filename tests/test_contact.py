import asyncio
import json

import httpx

from app.models import ContactForm
from app.services import contact as contact_service
from app.services.contact import render_contact_email, submit_contact_form
from app.services.email import ResendClient

FORM = {
    "name": "Jane Trader",
    "email": "jane@apexora.com",
    "subject": "Account question",
    "message": "Hello,\nhow do I verify my account?",
}


def _client(status=200, body=None):
    sent = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(request)
        return httpx.Response(status, json=body if body is not None else {"id": "email-123"})

    return ResendClient(api_key="re_test", transport=httpx.MockTransport(handler)), sent


def test_submit_contact_form_sends_to_support_inbox():
    client, sent = _client()

    result = asyncio.run(submit_contact_form(ContactForm(**FORM), client=client))

    assert result.success is True
    assert result.message == "Message sent successfully!"
    (request,) = sent
    assert request.url.path == "/emails"
    assert request.headers["Authorization"] == "Bearer re_test"
    payload = json.loads(request.content)
    assert payload["to"] == ["support@apexora.com"]
    assert payload["reply_to"] == "jane@apexora.com"
    assert payload["subject"] == "New Contact Form Submission: Account question"
    assert "Hello,<br>how do I verify my account?" in payload["html"]


def test_provider_error_returns_retry_message():
    client, _ = _client(status=422, body={"message": "Invalid `to` field"})

    result = asyncio.run(submit_contact_form(ContactForm(**FORM), client=client))

    assert result.success is False
    assert result.message == "Failed to send the message. Please try again later."


def test_unexpected_error_returns_internal_message(monkeypatch):
    def missing_client():
        raise RuntimeError("RESEND_API_KEY is not configured")

    monkeypatch.setattr(contact_service, "get_resend_client", missing_client)

    result = asyncio.run(submit_contact_form(ContactForm(**FORM)))

    assert result.success is False
    assert result.message == "An internal error occurred. Please try again."


def test_email_body_escapes_user_input():
    form = ContactForm(**{**FORM, "name": "<script>x</script>", "message": "a <b>bold</b> claim"})

    html = render_contact_email(form)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "a &lt;b&gt;bold&lt;/b&gt; claim" in html


def test_contact_endpoint(client, monkeypatch):
    resend, sent = _client()
    monkeypatch.setattr(contact_service, "get_resend_client", lambda: resend)

    response = client.post("/contact", json=FORM)

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert len(sent) == 1


def test_contact_endpoint_validates_form(client):
    response = client.post("/contact", json={**FORM, "email": "not-an-email", "message": "short"})

    assert response.status_code == 422
