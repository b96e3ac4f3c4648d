from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum

from models.status import STATUSES, StatusCode, StatusEntry

DEFAULT_FIELD_LINES: tuple[str, ...] = ("{STATUS}", "{REF}")
DEFAULT_TEMPLATE = "GitHub Actions {GITHUB_JOB} job in {GITHUB_REF} by {GITHUB_ACTOR}"


class FieldKeyword(str, Enum):
    """Reserved tokens a field line may consist of."""

    REF = "{REF}"
    STATUS = "{STATUS}"


class TextKeyword(str, Enum):
    """Reserved tokens interpolated into the message text."""

    GITHUB_ACTOR = "{GITHUB_ACTOR}"
    GITHUB_JOB = "{GITHUB_JOB}"
    GITHUB_REF = "{GITHUB_REF}"


@dataclass(frozen=True)
class KeywordField:
    """Field whose title and value are derived from the run."""

    keyword: FieldKeyword


@dataclass(frozen=True)
class LiteralField:
    name: str
    value: str


FieldSpec = KeywordField | LiteralField


@dataclass(frozen=True)
class ResolvedField:
    name: str
    value: str


@dataclass(frozen=True)
class Payload:
    """Transport-neutral notification content.

    Fields:
        text:   Resolved message text (Slack mrkdwn).
        fields: Resolved display fields, in configuration order.
        color:  Attachment color taken from the status entry.
    """

    text: str
    fields: tuple[ResolvedField, ...]
    color: str


@dataclass(frozen=True)
class Message:
    """Unresolved notification: what to say, not yet what it says.

    Resolution happens when a payload is built, so a ``Message`` can be
    configured before the run context is complete.  ``timestamp`` is the
    Slack message id; empty means the message has not been posted yet.
    """

    status: StatusEntry = STATUSES[StatusCode.UNKNOWN]
    field_lines: tuple[str, ...] = DEFAULT_FIELD_LINES
    template: str = DEFAULT_TEMPLATE
    timestamp: str = field(default="")

    @property
    def is_sent(self) -> bool:
        return bool(self.timestamp)

    def with_fields(self, lines: Iterable[str]) -> Message:
        """Return a copy configured with ``lines`` verbatim."""
        return replace(self, field_lines=tuple(lines))

    def with_timestamp(self, timestamp: str) -> Message:
        """Return a copy marked as sent under ``timestamp``.

        A sent message stays sent: an empty timestamp is rejected.
        """
        if not timestamp:
            raise ValueError("A message timestamp cannot be cleared")
        return replace(self, timestamp=timestamp)
