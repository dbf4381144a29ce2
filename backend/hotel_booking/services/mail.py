from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)


class MailDeliveryError(RuntimeError):
    """An outgoing message could not be handed over."""


@dataclass(frozen=True)
class OutgoingMessage:
    sender: str
    to: str
    subject: str
    text: str
    reply_to: str | None = None


class MailOutbox(Protocol):
    async def send(self, message: OutgoingMessage) -> None: ...


class LoggingOutbox:
    """Outbox that only writes messages to the log."""

    async def send(self, message: OutgoingMessage) -> None:
        if not message.to:
            raise MailDeliveryError(f"No recipient for {message.subject!r}")
        logger.info(
            "Mail to=%s reply_to=%s subject=%r (%d chars)",
            message.to,
            message.reply_to,
            message.subject,
            len(message.text),
        )
        logger.debug("Mail body:\n%s", message.text)


def format_address(name: str | None, email: str) -> str:
    if name:
        return f'"{name}" <{email}>'
    return email


async def dispatch_all(outbox: MailOutbox, messages: Sequence[OutgoingMessage]) -> None:
    """Sends messages concurrently; the first failure is raised."""

    results = await asyncio.gather(
        *(outbox.send(message) for message in messages), return_exceptions=True
    )
    failures = [result for result in results if isinstance(result, BaseException)]
    for failure in failures:
        logger.error("Mail delivery failed: %s", failure)
    if failures:
        first = failures[0]
        if isinstance(first, MailDeliveryError):
            raise first
        raise MailDeliveryError(str(first)) from first


__all__ = [
    "MailDeliveryError",
    "OutgoingMessage",
    "MailOutbox",
    "LoggingOutbox",
    "format_address",
    "dispatch_all",
]
