"""Tests for post/update orchestration."""

import pytest

from core.assembler import MessageAssembler
from core.errors import MessageNotFoundError, SlackApiError
from core.notifier import Notifier
from models.context import ExecutionContext
from models.message import Message, Payload
from transports.base import Transport


class FakeTransport(Transport):
    def __init__(self, update_error: Exception | None = None) -> None:
        self.update_error = update_error
        self.calls: list[tuple[str, Payload, str | None]] = []

    @property
    def name(self) -> str:
        return "Fake"

    async def post(self, payload: Payload) -> str:
        self.calls.append(("post", payload, None))
        return "1111111111.000001"

    async def update(self, payload: Payload, identifier: str) -> str:
        self.calls.append(("update", payload, identifier))
        if self.update_error is not None:
            raise self.update_error
        return "2222222222.000002"


def _notifier(transport: Transport) -> Notifier:
    return Notifier(transport=transport, assembler=MessageAssembler(ExecutionContext))


MESSAGE = Message(template="Build", field_lines=("Env: prod",))


class TestSend:
    @pytest.mark.asyncio
    async def test_unsent_message_is_posted(self):
        transport = FakeTransport()
        sent = await _notifier(transport).send(MESSAGE)

        assert sent.timestamp == "1111111111.000001"
        assert [c[0] for c in transport.calls] == ["post"]
        assert transport.calls[0][1].text == "Build"

    @pytest.mark.asyncio
    async def test_sent_message_is_updated(self):
        transport = FakeTransport()
        sent = await _notifier(transport).send(MESSAGE.with_timestamp("1111111111.000001"))

        assert sent.timestamp == "2222222222.000002"
        assert transport.calls[0][0] == "update"
        assert transport.calls[0][2] == "1111111111.000001"

    @pytest.mark.asyncio
    async def test_not_found_reposts_when_ignored(self):
        transport = FakeTransport(update_error=MessageNotFoundError("chat.update"))
        sent = await _notifier(transport).send(
            MESSAGE.with_timestamp("1111111111.000001"),
            ignore_message_not_found=True,
        )

        assert sent.timestamp == "1111111111.000001"
        assert [c[0] for c in transport.calls] == ["update", "post"]

    @pytest.mark.asyncio
    async def test_not_found_raises_by_default(self):
        transport = FakeTransport(update_error=MessageNotFoundError("chat.update"))
        with pytest.raises(MessageNotFoundError):
            await _notifier(transport).send(MESSAGE.with_timestamp("1111111111.000001"))

    @pytest.mark.asyncio
    async def test_other_errors_are_not_swallowed(self):
        transport = FakeTransport(update_error=SlackApiError("chat.update", "channel_not_found"))
        with pytest.raises(SlackApiError):
            await _notifier(transport).send(
                MESSAGE.with_timestamp("1111111111.000001"),
                ignore_message_not_found=True,
            )
