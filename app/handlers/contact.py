"""Contact form endpoint."""
from __future__ import annotations

from fastapi import APIRouter

from app.models import ActionResult, ContactForm
from app.services.contact import submit_contact_form

router = APIRouter()


@router.post("/contact", response_model=ActionResult)
async def post_contact(form: ContactForm):
    return await submit_contact_form(form)
