from __future__ import annotations

import logging

from core.assembler import MessageAssembler
from core.errors import MessageNotFoundError
from models.message import Message
from transports.base import Transport

log = logging.getLogger(__name__)


class Notifier:
    """Posts a message the first time and updates it afterwards.

    An unsent message (empty timestamp) is posted; a sent one is updated in
    place.  When ``ignore_message_not_found`` is set and the message to
    update has been deleted, a fresh message is posted instead.
    """

    def __init__(self, transport: Transport, assembler: MessageAssembler) -> None:
        self._transport = transport
        self._assembler = assembler

    async def send(self, message: Message, *, ignore_message_not_found: bool = False) -> Message:
        """Deliver ``message`` and return it stamped with the new identifier."""
        payload = self._assembler.build_payload(message)

        if not message.is_sent:
            log.info("Posting %s message", self._transport.name)
            ts = await self._transport.post(payload)
            return message.with_timestamp(ts)

        log.info("Updating %s message %s", self._transport.name, message.timestamp)
        try:
            ts = await self._transport.update(payload, message.timestamp)
        except MessageNotFoundError:
            if not ignore_message_not_found:
                raise
            log.warning(
                "%s message %s not found, posting a new one",
                self._transport.name,
                message.timestamp,
            )
            ts = await self._transport.post(payload)

        return message.with_timestamp(ts)
