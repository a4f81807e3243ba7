"""
Tests for the notifiers, using httpx.MockTransport instead of a mail service.
"""

import json

import httpx
import pytest

from films.errors import DeliveryError
from films.service.mail import LogNotifier, MailNotifier, Notifier, create_notifier

URL = "http://mail-service:8000/mail"


@pytest.mark.asyncio
async def test_mail_posts_subject_and_body():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"status": "queued"})

    notifier = MailNotifier(URL, transport=httpx.MockTransport(handler))
    await notifier.send("Neuer Film 1", "Alien")

    assert len(requests) == 1
    assert str(requests[0].url) == URL
    assert json.loads(requests[0].content) == {"subject": "Neuer Film 1", "body": "Alien"}


@pytest.mark.asyncio
async def test_mail_error_status():
    notifier = MailNotifier(URL, transport=httpx.MockTransport(lambda r: httpx.Response(503)))

    with pytest.raises(DeliveryError) as exc_info:
        await notifier.send("Neuer Film 1", "Alien")
    assert exc_info.value.url == URL


@pytest.mark.asyncio
async def test_mail_unreachable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    notifier = MailNotifier(URL, transport=httpx.MockTransport(handler))

    with pytest.raises(DeliveryError):
        await notifier.send("Neuer Film 1", "Alien")


@pytest.mark.asyncio
async def test_log_notifier_does_not_fail(caplog):
    caplog.set_level("INFO")

    await LogNotifier().send("Neuer Film 1", "Alien")

    assert "Neuer Film 1" in caplog.text


def test_create_notifier():
    assert isinstance(create_notifier(URL), MailNotifier)
    assert isinstance(create_notifier(None), LogNotifier)


def test_notifier_is_abstract():
    with pytest.raises(TypeError):
        Notifier()
