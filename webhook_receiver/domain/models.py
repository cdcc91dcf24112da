"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

# Ordered parameter name -> value mapping parsed from a command.
ParameterSet = Dict[str, str]


@dataclass(frozen=True)
class ParsedCommand:
    """Command text split into its action name and the remaining value."""

    action: str
    value: str


@dataclass(frozen=True)
class SlashCommand:
    """Action plus parsed parameters; error is set on a malformed parameter."""

    action: str
    parameters: ParameterSet = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SlackField:
    title: str
    value: str
    short: bool = True


@dataclass
class SlackAttachment:
    title: str
    text: str = ""
    fallback: str = ""
    color: Optional[str] = None
    pretext: Optional[str] = None
    fields: List[SlackField] = field(default_factory=list)


@dataclass
class SlackReply:
    """Reply returned to Slack for an outgoing webhook or slash command."""

    text: str
    attachments: List[SlackAttachment] = field(default_factory=list)
    response_type: Optional[str] = None  # "ephemeral" | "in_channel"
