"""stdlib logging adapter — implements EventLogPort."""

import logging
from typing import Any, Optional


class LoggingEventLog:
    """Renders event templates and emits them through a stdlib logger.

    The raw fields ride along in ``extra`` so handlers and formatters can
    use them without re-parsing the message.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._logger = logger or logging.getLogger("webhook_receiver.events")
        self._level = level

    def record(self, event_id: int, template: str, /, **fields: Any) -> None:
        try:
            message = template.format(**fields)
        except (KeyError, IndexError):
            # Unknown placeholder: log the bare template
            message = template
        self._logger.log(
            self._level,
            message,
            extra={"event_id": event_id, "fields": fields},
        )
