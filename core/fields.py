"""Field line parsing and resolution.

A field line is either a reserved keyword (``{STATUS}``, ``{REF}``) or a
``Name: Value`` pair with exactly one colon.  A pair whose value is a
keyword becomes that keyword field; a pair whose value is any other
``{...}`` token, and lines that are neither, are dropped so that a
partially broken ``fields`` input still produces a message.
"""
from __future__ import annotations

import re

from core import links
from models.context import ExecutionContext
from models.message import FieldKeyword, FieldSpec, KeywordField, LiteralField, ResolvedField
from models.status import StatusEntry

_KEYWORDS = {keyword.value: keyword for keyword in FieldKeyword}
_TOKEN_RE = re.compile(r"\{.*?\}")


def parse_field_line(line: str) -> FieldSpec | None:
    """Parse one configured field line, or return None if it is malformed."""
    stripped = line.strip()
    if stripped in _KEYWORDS:
        return KeywordField(_KEYWORDS[stripped])

    parts = stripped.split(":")
    if len(parts) != 2:
        return None

    name, value = (part.strip() for part in parts)
    if value in _KEYWORDS:
        return KeywordField(_KEYWORDS[value])
    if _TOKEN_RE.fullmatch(value):
        return None
    return LiteralField(name=name, value=value)


def resolve_field(
    spec: FieldSpec,
    ctx: ExecutionContext,
    status: StatusEntry,
) -> ResolvedField | None:
    """Turn a field spec into its display form.

    Raises:
        MissingContextError: ``{REF}`` needs the repository or commit and
            the context does not have it.
    """
    if isinstance(spec, LiteralField):
        return ResolvedField(spec.name, spec.value)

    if spec.keyword is FieldKeyword.REF:
        return _resolve_ref(ctx)
    if spec.keyword is FieldKeyword.STATUS:
        return ResolvedField("Status", status.title)
    return None


def _resolve_ref(ctx: ExecutionContext) -> ResolvedField:
    number = links.pull_request_number(ctx)
    if number is not None:
        return ResolvedField(
            "Pull Request",
            links.mrkdwn_link(links.pull_request_url(ctx, number), f"#{number}"),
        )

    label = links.commit_short(ctx)
    if ctx.event_name == "push":
        label = f"{label} ({ctx.branch_name or ''})"
    return ResolvedField("Commit", links.mrkdwn_link(links.commit_url(ctx), f"`{label}`"))
