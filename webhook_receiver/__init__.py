"""Webhook Receiver — logs third-party webhook deliveries and answers Slack commands."""

from webhook_receiver.config import CONFIG, AppConfig, SlackConfig, SUPPORTED_RECEIVERS, __version__
from webhook_receiver.domain.command_parser import (
    get_normalized_parameter_string,
    parse_action_with_value,
    parse_command,
    try_parse_parameters,
)
from webhook_receiver.domain.receivers import WebhookReceivers
from webhook_receiver.adapters.log import LoggingEventLog

__all__ = [
    "CONFIG",
    "AppConfig",
    "SlackConfig",
    "SUPPORTED_RECEIVERS",
    "__version__",
    "get_normalized_parameter_string",
    "parse_action_with_value",
    "parse_command",
    "try_parse_parameters",
    "WebhookReceivers",
    "LoggingEventLog",
]
