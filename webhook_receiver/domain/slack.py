"""Slack outgoing webhook and slash command replies.

Pure Python, no framework dependencies.
"""

from __future__ import annotations

from typing import Mapping

from webhook_receiver.domain.command_parser import (
    get_normalized_parameter_string,
    parse_action_with_value,
    parse_command,
)
from webhook_receiver.domain.errors import WebhookPayloadError
from webhook_receiver.domain.models import SlackAttachment, SlackField, SlackReply

# Slack form field names
COMMAND_FIELD = "command"
TEXT_FIELD = "text"
TRIGGER_FIELD = "trigger_word"
CHANNEL_FIELD = "channel_name"

# Max fields per attachment
MAX_ATTACHMENT_FIELDS = 5

DEFAULT_COLOR = "#439FE0"


class SlackCommandError(WebhookPayloadError):
    """Raised when slash command parameters are malformed."""


def get_subtext(text: str, trigger_word: str = "") -> str:
    """Return the message text with a leading trigger word removed."""
    text = text.strip()
    if trigger_word and text.lower().startswith(trigger_word.lower()):
        text = text[len(trigger_word):]
    return text.strip()


def get_event_name(data: Mapping[str, str]) -> str:
    """Slash commands are named by their command, outgoing webhooks by trigger word."""
    return data.get(COMMAND_FIELD) or data.get(TRIGGER_FIELD) or ""


class SlackCommandHandler:
    """Builds a SlackReply from the already-parsed Slack form fields."""

    def __init__(self, strict_parameters: bool = True, color: str = DEFAULT_COLOR):
        self.strict_parameters = strict_parameters
        self.color = color

    def build_reply(self, data: Mapping[str, str]) -> SlackReply:
        command = (data.get(COMMAND_FIELD) or "").strip()
        subtext = get_subtext(data.get(TEXT_FIELD) or "", data.get(TRIGGER_FIELD) or "")
        if command:
            return self.slash_reply(command, subtext)
        return self.outgoing_reply(subtext)

    def outgoing_reply(self, subtext: str) -> SlackReply:
        parsed = parse_action_with_value(subtext)
        if not parsed.action:
            return SlackReply(text="Nothing to do.")
        return SlackReply(
            text=f"Received action '{parsed.action}' with value '{parsed.value}'."
        )

    def slash_reply(self, command: str, subtext: str) -> SlackReply:
        """Reply to a slash command with an attachment listing its parameters.

        Raises SlackCommandError when a parameter is malformed so the caller
        can reject the request.
        """
        slash = parse_command(subtext, strict=self.strict_parameters)
        if not slash.action:
            return SlackReply(
                text=f"Usage: {command} <action> [name=value, ...]",
                response_type="ephemeral",
            )
        if not slash.ok:
            raise SlackCommandError(slash.error)

        normalized = get_normalized_parameter_string(slash.parameters)
        fields = [
            SlackField(title=name, value=value)
            for name, value in list(slash.parameters.items())[:MAX_ATTACHMENT_FIELDS]
        ]
        attachment = SlackAttachment(
            title=slash.action,
            text=normalized,
            fallback=f"{command} {slash.action} {normalized}".strip(),
            color=self.color,
            fields=fields,
        )
        return SlackReply(
            text=f"Executing '{slash.action}' for {command}.",
            attachments=[attachment],
            response_type="ephemeral",
        )
