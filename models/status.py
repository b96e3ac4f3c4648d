from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class StatusCode(str, Enum):
    UNKNOWN = "unknown"
    IN_PROGRESS = "in-progress"
    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class StatusEntry:
    """Display title and attachment color for one job status.

    Fields:
        code:  Status code the entry is registered under.
        title: Human-readable title shown in the ``Status`` field.
        color: Attachment color in ``#RRGGBB`` format.
    """

    code: StatusCode
    title: str
    color: str

    def with_color(self, color: str) -> StatusEntry:
        """Return a copy using ``color`` instead of the catalog color."""
        return replace(self, color=color)


STATUSES: dict[StatusCode, StatusEntry] = {
    StatusCode.UNKNOWN: StatusEntry(StatusCode.UNKNOWN, "Unknown", "#1f242b"),
    StatusCode.IN_PROGRESS: StatusEntry(StatusCode.IN_PROGRESS, "In Progress", "#dcad04"),
    StatusCode.SUCCESS: StatusEntry(StatusCode.SUCCESS, "Success", "#24a943"),
    StatusCode.FAILURE: StatusEntry(StatusCode.FAILURE, "Failure", "#cc1f2d"),
    StatusCode.CANCELLED: StatusEntry(StatusCode.CANCELLED, "Cancelled", "#1f242b"),
    StatusCode.SKIPPED: StatusEntry(StatusCode.SKIPPED, "Skipped", "#1f242b"),
}


def lookup(code: str | None) -> StatusEntry:
    """Return the catalog entry for ``code``.

    Empty or unrecognised codes fall back to the ``unknown`` entry.
    """
    try:
        return STATUSES[StatusCode((code or "").strip())]
    except ValueError:
        return STATUSES[StatusCode.UNKNOWN]
