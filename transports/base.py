from __future__ import annotations

from abc import ABC, abstractmethod

from models.message import Payload


class Transport(ABC):
    """Abstract base for messaging platform adapters.

    A transport only delivers an already resolved :class:`Payload`; it
    knows nothing about templates or the run context.  Identifiers are
    opaque strings owned by the platform (Slack message timestamps).
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable platform name (e.g. 'Slack')."""

    @abstractmethod
    async def post(self, payload: Payload) -> str:
        """Post a new message and return its identifier.

        Raises:
            TransportError: the platform rejected the call or was unreachable.
        """

    @abstractmethod
    async def update(self, payload: Payload, identifier: str) -> str:
        """Replace the content of the message ``identifier``.

        Raises:
            MessageNotFoundError: the message no longer exists.
            TransportError: any other delivery failure.
        """
