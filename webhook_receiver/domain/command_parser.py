"""Slash command text parsing.

Pure Python, no framework dependencies.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from webhook_receiver.domain.models import ParameterSet, ParsedCommand, SlashCommand

# Action/value delimiter: "=" with optional surrounding whitespace, or a whitespace run.
# Alternation order matters so "a = b" splits on the "=" rather than the first space.
ACTION_SEPARATOR_RE = re.compile(r"\s*=\s*|\s+")

PARAMETER_SEPARATOR = ","
PARAMETER_ASSIGNMENT = "="


def parse_action_with_value(text: str) -> ParsedCommand:
    """Split command text into an action and the value that follows it.

    The action ends at the first "=" or whitespace, whichever comes first.
    Text without a delimiter (or with nothing before it) is all action.
    """
    text = text.strip()
    match = ACTION_SEPARATOR_RE.search(text)
    if match is None or match.start() == 0:
        return ParsedCommand(action=text, value="")
    return ParsedCommand(
        action=text[: match.start()],
        value=text[match.end():].strip(),
    )


def try_parse_parameters(
    value: str, strict: bool = True
) -> Tuple[ParameterSet, Optional[str]]:
    """Parse "k1=v1, k2=v2" into an ordered mapping.

    In strict mode parsing stops at the first entry lacking a name or a
    value and returns the entries seen so far with an error message.
    In lenient mode an entry without "=" is kept with an empty value.
    Later duplicates overwrite earlier values.
    """
    parameters: ParameterSet = {}
    for entry in value.split(PARAMETER_SEPARATOR):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, param_value = entry.partition(PARAMETER_ASSIGNMENT)
        name = name.strip()
        if not sep:
            if strict:
                return parameters, f"Parameter '{entry}' is missing a value."
            parameters[name] = ""
            continue
        if not name:
            if strict:
                return parameters, f"Parameter '{entry}' is missing a name."
            continue
        parameters[name] = param_value.strip()
    return parameters, None


def get_normalized_parameter_string(parameters: ParameterSet) -> str:
    """Render parameters as "k1=v1, k2=v2" in iteration order.

    Names and values are trimmed, matching what try_parse_parameters keeps.
    """
    return ", ".join(
        f"{name.strip()}{PARAMETER_ASSIGNMENT}{value.strip()}"
        for name, value in parameters.items()
    )


def parse_command(text: str, strict: bool = True) -> SlashCommand:
    """Parse the action and its parameter list in one step."""
    parsed = parse_action_with_value(text)
    parameters, error = try_parse_parameters(parsed.value, strict=strict)
    return SlashCommand(action=parsed.action, parameters=parameters, error=error)
