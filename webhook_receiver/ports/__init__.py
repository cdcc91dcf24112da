"""Port interfaces (Hexagonal Architecture)."""

from webhook_receiver.ports.inbound import WebhookRequest
from webhook_receiver.ports.outbound import EventLogPort

__all__ = [
    "WebhookRequest",
    "EventLogPort",
]
