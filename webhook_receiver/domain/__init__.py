"""Domain layer — pure Python, no framework dependencies."""

from webhook_receiver.domain.models import (
    ParsedCommand,
    SlashCommand,
    SlackAttachment,
    SlackField,
    SlackReply,
)
from webhook_receiver.domain.command_parser import (
    parse_action_with_value,
    try_parse_parameters,
    get_normalized_parameter_string,
    parse_command,
)
from webhook_receiver.domain.errors import UnknownReceiverError, WebhookPayloadError
from webhook_receiver.domain.receivers import WebhookReceivers

__all__ = [
    "ParsedCommand",
    "SlashCommand",
    "SlackAttachment",
    "SlackField",
    "SlackReply",
    "parse_action_with_value",
    "try_parse_parameters",
    "get_normalized_parameter_string",
    "parse_command",
    "UnknownReceiverError",
    "WebhookPayloadError",
    "WebhookReceivers",
]
