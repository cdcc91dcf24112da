"""Configuration loaded from the environment."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass, field
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

SUPPORTED_RECEIVERS = (
    "azurealert",
    "bitbucket",
    "dropbox",
    "dynamicscrm",
    "github",
    "kudu",
    "mailchimp",
    "pusher",
    "salesforce",
    "slack",
    "stripe",
)

DEFAULT_ATTACHMENT_COLOR = "#439FE0"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        _stderr_print(f"Unknown LOG_LEVEL {raw!r}, using INFO")
        return "INFO"
    return level


def _parse_receivers(raw: str) -> Tuple[str, ...]:
    """Parse a comma list of receiver names, dropping unknown ones."""
    if not raw.strip():
        return SUPPORTED_RECEIVERS
    receivers = []
    for name in raw.split(","):
        name = name.strip().lower()
        if not name:
            continue
        if name not in SUPPORTED_RECEIVERS:
            _stderr_print(f"Unsupported receiver {name!r} in WEBHOOK_RECEIVERS, ignoring")
            continue
        if name not in receivers:
            receivers.append(name)
    return tuple(receivers)


@dataclass
class SlackConfig:
    strict_parameters: bool = True
    attachment_color: str = DEFAULT_ATTACHMENT_COLOR


@dataclass
class AppConfig:
    """Typed application configuration."""

    port: int = 3000
    log_level: str = "INFO"
    receivers: Tuple[str, ...] = SUPPORTED_RECEIVERS
    slack: SlackConfig = field(default_factory=SlackConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            port=int(os.getenv("PORT", "3000")),
            log_level=_parse_log_level(os.getenv("LOG_LEVEL", "INFO")),
            receivers=_parse_receivers(os.getenv("WEBHOOK_RECEIVERS", "")),
            slack=SlackConfig(
                strict_parameters=_env_bool("SLACK_STRICT_PARAMETERS", True),
                attachment_color=os.getenv("SLACK_ATTACHMENT_COLOR", DEFAULT_ATTACHMENT_COLOR),
            ),
        )

    def is_enabled(self, receiver: str) -> bool:
        return receiver.lower() in self.receivers


CONFIG = AppConfig.from_env()
