"""Action inputs and Slack settings, read from the runner environment.

The runner exposes ``with:`` inputs as ``INPUT_<NAME>`` variables, the
name upper-cased with spaces replaced by underscores (hyphens are kept).
"""
from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass

from core.errors import InputError
from models.message import DEFAULT_FIELD_LINES, DEFAULT_TEMPLATE
from models.status import StatusCode

DEFAULT_SLACK_API_URL = "https://slack.com/api/"
DEFAULT_SLACK_TIMEOUT_SECONDS = 30.0

_HEX_COLOR_RE = re.compile(r"^#[0-9A-F]{6}$", re.IGNORECASE)
_TRUE_VALUES = {"true", "True", "TRUE"}
_FALSE_VALUES = {"false", "False", "FALSE"}
_SETTABLE_STATUSES = [code.value for code in StatusCode if code is not StatusCode.UNKNOWN]


@dataclass(slots=True)
class ActionInputs:
    status: str
    color: str | None
    text: str
    fields: tuple[str, ...]
    timestamp: str
    ignore_failures: bool
    ignore_message_not_found: bool


@dataclass(slots=True)
class SlackSettings:
    token: str
    channel: str
    api_url: str
    timeout_seconds: float


def get_input(env: Mapping[str, str], name: str) -> str:
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return (env.get(key) or "").strip()


def load_inputs(env: Mapping[str, str]) -> ActionInputs:
    """Read and validate every action input.

    Raises:
        InputError: An input has a value outside its allowed shape.
    """
    return ActionInputs(
        status=_parse_status(env, "status"),
        color=_parse_hex_color(env, "color"),
        text=get_input(env, "text") or DEFAULT_TEMPLATE,
        fields=_parse_multiline(env, "fields") or DEFAULT_FIELD_LINES,
        timestamp=_parse_timestamp(env, "timestamp"),
        ignore_failures=_parse_bool(env, "ignore-failures", default=False),
        ignore_message_not_found=_parse_bool(env, "ignore-message-not-found", default=False),
    )


def load_slack_settings(env: Mapping[str, str]) -> SlackSettings:
    token = _normalize_empty(env.get("SLACK_TOKEN"))
    channel = _normalize_empty(env.get("SLACK_CHANNEL"))

    if not token:
        raise InputError("Slack token not found. Did you forget to set the SLACK_TOKEN environment variable?")
    if not channel:
        raise InputError("Slack channel not found. Did you forget to set the SLACK_CHANNEL environment variable?")

    api_url = _normalize_empty(env.get("SLACK_API_URL")) or DEFAULT_SLACK_API_URL
    if not api_url.endswith("/"):
        api_url = f"{api_url}/"

    raw_timeout = _normalize_empty(env.get("SLACK_TIMEOUT_SECONDS"))
    try:
        timeout_seconds = float(raw_timeout) if raw_timeout else DEFAULT_SLACK_TIMEOUT_SECONDS
    except ValueError as error:
        raise InputError("SLACK_TIMEOUT_SECONDS must be a number") from error
    if timeout_seconds <= 0:
        raise InputError("SLACK_TIMEOUT_SECONDS must be greater than 0")

    return SlackSettings(
        token=token,
        channel=channel,
        api_url=api_url,
        timeout_seconds=timeout_seconds,
    )


def _parse_status(env: Mapping[str, str], name: str) -> str:
    value = get_input(env, name)
    if not value or value in _SETTABLE_STATUSES:
        return value
    allowed = "|".join(_SETTABLE_STATUSES)
    raise InputError(f"Invalid {name} input value. Should be: {allowed}")


def _parse_hex_color(env: Mapping[str, str], name: str) -> str | None:
    value = get_input(env, name)
    if not value:
        return None
    if _HEX_COLOR_RE.match(value):
        return value
    raise InputError(f"Invalid {name} input value. Should be a valid HEX color")


def _parse_multiline(env: Mapping[str, str], name: str) -> tuple[str, ...]:
    lines = (line.strip() for line in get_input(env, name).splitlines())
    return tuple(line for line in lines if line)


def _parse_timestamp(env: Mapping[str, str], name: str) -> str:
    value = get_input(env, name)
    if not value:
        return value
    try:
        parsed = float(value)
    except ValueError as error:
        raise InputError(f"Invalid {name} input value. Should be a valid UNIX timestamp") from error
    if not math.isfinite(parsed) or parsed <= 0:
        raise InputError(f"Invalid {name} input value. Should be a valid UNIX timestamp")
    return value


def _parse_bool(env: Mapping[str, str], name: str, *, default: bool) -> bool:
    value = get_input(env, name)
    if not value:
        return default
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InputError(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


def _normalize_empty(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None
