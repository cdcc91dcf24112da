"""Outbound ports — interfaces for external system adapters."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class EventLogPort(Protocol):
    """Interface for recording structured receiver events.

    ``template`` uses ``str.format`` placeholders named after ``fields``.
    """

    def record(self, event_id: int, template: str, /, **fields: Any) -> None: ...
