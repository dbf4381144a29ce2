"""Integrations with external services."""

from .mail import LoggingOutbox, MailDeliveryError, MailOutbox, OutgoingMessage, dispatch_all
from .turnstile import TurnstileError, TurnstileVerifier

__all__ = [
    "LoggingOutbox",
    "MailDeliveryError",
    "MailOutbox",
    "OutgoingMessage",
    "dispatch_all",
    "TurnstileError",
    "TurnstileVerifier",
]
