"""Contact form: store the submission, then forward it by email."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from codehelper.models.contact import ContactMessage
from codehelper.schemas.contact import ContactSchema
from codehelper.services.email import EmailDeliveryError, EmailSender, render_contact_email

logger = logging.getLogger(__name__)


async def submit_contact(db: AsyncSession, sender: EmailSender, to: str, body: ContactSchema) -> ContactMessage:
    """The stored row ends up sent or failed; delivery errors propagate."""
    record = ContactMessage(
        name=body.name,
        email=body.email,
        subject=body.subject,
        message=body.message,
        status="pending",
    )
    db.add(record)
    await db.commit()

    try:
        await sender.send(
            to,
            f"[Contact] {body.subject}",
            render_contact_email(body.name, body.email, body.subject, body.message),
            reply_to=body.email,
        )
    except EmailDeliveryError:
        record.status = "failed"
        await db.commit()
        logger.exception("Contact message %s could not be delivered", record.id)
        raise

    record.status = "sent"
    await db.commit()
    logger.info("Contact message %s delivered", record.id)
    return record
