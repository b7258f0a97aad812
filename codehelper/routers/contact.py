"""Public contact form."""
from typing import Annotated

from fastapi import APIRouter, Depends

from codehelper.core.config import Settings
from codehelper.core.errors import InternalError
from codehelper.routers.deps import DbSession, get_email_sender, get_settings_dep
from codehelper.schemas.contact import ContactOutSchema, ContactSchema
from codehelper.services.contact import submit_contact
from codehelper.services.email import EmailDeliveryError, EmailSender

router = APIRouter(prefix="/api/contact", tags=["contact"])


@router.post("", response_model=ContactOutSchema)
async def send_message(
    body: ContactSchema,
    db: DbSession,
    sender: Annotated[EmailSender, Depends(get_email_sender)],
    settings: Annotated[Settings, Depends(get_settings_dep)],
):
    try:
        await submit_contact(db, sender, settings.contact_email, body)
    except EmailDeliveryError as e:
        raise InternalError("Failed to send message. Please try again later.") from e
    return ContactOutSchema(success=True, message="Message sent successfully")
