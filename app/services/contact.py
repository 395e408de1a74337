"""Contact form submission forwarded to the support inbox."""
from __future__ import annotations

import html
import logging

from app.config import get_settings
from app.models import ActionResult, ContactForm
from app.services.email import ResendAPIError, ResendClient, get_resend_client

logger = logging.getLogger(__name__)
settings = get_settings()


def render_contact_email(form: ContactForm) -> str:
    name = html.escape(form.name)
    email = html.escape(str(form.email))
    subject = html.escape(form.subject)
    message = html.escape(form.message).replace("\n", "<br>")
    return f"""
      <div style="font-family: Arial, sans-serif; line-height: 1.6;">
        <h2 style="color: #3B82F6;">New Message from Apexora Contact Form</h2>
        <p>You have received a new message from your website's contact form.</p>
        <hr>
        <p><strong>Name:</strong> {name}</p>
        <p><strong>Email:</strong> <a href="mailto:{email}">{email}</a></p>
        <p><strong>Subject:</strong> {subject}</p>
        <hr>
        <p><strong>Message:</strong></p>
        <p>{message}</p>
      </div>
    """


async def submit_contact_form(form: ContactForm, client: ResendClient | None = None) -> ActionResult:
    try:
        client = client or get_resend_client()
        message_id = await client.send_email(
            sender=settings.contact_from_address,
            to=[settings.support_inbox],
            subject=f"New Contact Form Submission: {form.subject}",
            html=render_contact_email(form),
            reply_to=str(form.email),
        )
    except ResendAPIError as exc:
        logger.error("Resend error: %s", exc)
        return ActionResult(success=False, message="Failed to send the message. Please try again later.")
    except Exception:
        logger.exception("Error sending contact email")
        return ActionResult(success=False, message="An internal error occurred. Please try again.")

    logger.info("Contact form forwarded to %s (id=%s)", settings.support_inbox, message_id)
    return ActionResult(success=True, message="Message sent successfully!")
