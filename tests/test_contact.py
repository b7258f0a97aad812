import json

import httpx
import pytest
from sqlalchemy import select

from codehelper.models.contact import ContactMessage
from codehelper.schemas.contact import ContactSchema
from codehelper.services.contact import submit_contact
from codehelper.services.email import RESEND_API_URL, EmailDeliveryError, EmailSender

FORM = {
    "name": "Ada",
    "email": "Ada@Example.com ",
    "subject": "Feedback",
    "message": "Loving it.\n<b>Thanks</b>",
}


def _sender(handler, api_key="re_test"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return EmailSender(api_key, "Helper <noreply@example.com>", client=client)


def test_contact_without_api_key_is_accepted(client):
    r = client.post("/api/contact", json=FORM)
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Message sent successfully"}


def test_contact_validates_email(client):
    r = client.post("/api/contact", json={**FORM, "email": "not-an-email"})
    assert r.status_code == 422


def test_contact_delivery_failure_is_internal_error(app, client):
    app.state.email_sender = _sender(lambda request: httpx.Response(500, json={"message": "down"}))
    r = client.post("/api/contact", json=FORM)
    assert r.status_code == 500
    assert r.json()["code"] == "INTERNAL_SERVER_ERROR"


@pytest.mark.anyio
async def test_sent_message_is_posted_to_resend(db):
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json={"id": "email_1"})

    record = await submit_contact(db, _sender(handler), "support@example.com", ContactSchema(**FORM))
    assert record.status == "sent"

    request = seen[0]
    assert str(request.url) == RESEND_API_URL
    assert request.headers["Authorization"] == "Bearer re_test"
    payload = json.loads(request.content)
    assert payload["reply_to"] == "ada@example.com"
    assert payload["to"] == ["support@example.com"]
    assert "&lt;b&gt;Thanks&lt;/b&gt;" in payload["html"]


@pytest.mark.anyio
async def test_failed_delivery_marks_record(db):
    sender = _sender(lambda request: httpx.Response(422, json={"message": "bad"}))
    with pytest.raises(EmailDeliveryError):
        await submit_contact(db, sender, "support@example.com", ContactSchema(**FORM))

    stored = (await db.execute(select(ContactMessage))).scalar_one()
    assert stored.status == "failed"
    assert stored.email == "ada@example.com"
