"""Inbound port — transport-agnostic webhook request representation."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class WebhookRequest:
    """A webhook delivery after the hosting layer has parsed the payload."""

    receiver: str
    id: str = "default"
    event: str = ""
    data: Any = field(default_factory=dict)
