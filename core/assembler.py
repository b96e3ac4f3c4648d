from __future__ import annotations

from collections.abc import Callable

from core.fields import parse_field_line, resolve_field
from core.text import resolve_text
from models.context import ExecutionContext
from models.message import Message, Payload, ResolvedField

ContextProvider = Callable[[], ExecutionContext]


class MessageAssembler:
    """Resolves a :class:`Message` into the payload a transport sends.

    The run context is read from ``context_provider`` on every call rather
    than captured once, so a message configured early in a run is resolved
    against the context as it is at send time.  Resolution itself is pure:
    the same message and context always give the same payload.
    """

    def __init__(self, context_provider: ContextProvider) -> None:
        self._context_provider = context_provider

    def get_text(self, message: Message) -> str:
        return resolve_text(message.template, self._context_provider())

    def get_fields(self, message: Message) -> list[ResolvedField]:
        """Resolve every configured field line, skipping the ones that
        produce nothing.  Order follows ``message.field_lines``.
        """
        ctx = self._context_provider()
        fields: list[ResolvedField] = []
        for line in message.field_lines:
            spec = parse_field_line(line)
            if spec is None:
                continue
            resolved = resolve_field(spec, ctx, message.status)
            if resolved is not None:
                fields.append(resolved)
        return fields

    def build_payload(self, message: Message) -> Payload:
        return Payload(
            text=self.get_text(message),
            fields=tuple(self.get_fields(message)),
            color=message.status.color,
        )
