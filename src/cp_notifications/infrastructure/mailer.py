"""Outbound email seam.

Every module sends mail through the ``Mailer`` protocol. The default
``LoggingMailer`` records messages in a bounded in-process outbox and logs
recipient and subject only; bodies may carry credentials or signing links
and are never logged.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from config.settings import settings
from src.cp_common.datetime_utils import utc_now

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    async def send(self, to: str, subject: str, html: str) -> bool: ...


@dataclass
class SentEmail:
    to: str
    subject: str
    html: str
    sender: str
    sent_at: datetime = field(default_factory=utc_now)


class LoggingMailer:
    def __init__(self, sender: str | None = None, outbox_size: int = 500) -> None:
        self.sender = sender or settings.EMAIL_FROM
        self.outbox: deque[SentEmail] = deque(maxlen=outbox_size)

    async def send(self, to: str, subject: str, html: str) -> bool:
        self.outbox.append(SentEmail(to=to, subject=subject, html=html, sender=self.sender))
        logger.info("Email queued to=%s subject=%r", to, subject)
        return True


_mailer: Mailer = LoggingMailer()


def get_mailer() -> Mailer:
    return _mailer


def set_mailer(mailer: Mailer) -> None:
    """Swap the process-wide mailer (SMTP/API integrations, tests)."""
    global _mailer  # noqa: PLW0603
    _mailer = mailer
