from abc import ABC, abstractmethod
from typing import Optional
import logging

import httpx

from films.errors import DeliveryError

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Sends a short message about a change in the catalog."""

    @abstractmethod
    async def send(self, subject: str, body: str) -> None:
        """Deliver the message, raise DeliveryError on failure."""


class LogNotifier(Notifier):
    """Used when no mail service is configured."""

    def __init__(self, logger: logging.Logger = logger):
        self.logger = logger

    async def send(self, subject: str, body: str) -> None:
        self.logger.info(f"Mail not sent (no mail service configured): {subject}: {body}")


class MailNotifier(Notifier):
    """Posts the message to an HTTP mail service."""

    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: logging.Logger = logger,
    ):
        self.url = url
        self.timeout = timeout
        self.transport = transport
        self.logger = logger

    async def send(self, subject: str, body: str) -> None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.post(self.url, json={"subject": subject, "body": body})
        except httpx.HTTPError as e:
            raise DeliveryError(f"Mail service unreachable: {type(e).__name__}", url=self.url) from e
        if r.is_error:
            raise DeliveryError(f"Mail service answered {r.status_code}", url=self.url)
        self.logger.info(f"Mail sent: {subject}")


def create_notifier(mail_url: Optional[str], timeout: float = 5.0) -> Notifier:
    if mail_url:
        return MailNotifier(mail_url, timeout=timeout)
    return LogNotifier()
