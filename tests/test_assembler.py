"""Tests for resolving whole messages into payloads."""

from dataclasses import replace

import pytest

from core.assembler import MessageAssembler
from core.errors import MissingContextError
from models.context import ExecutionContext
from models.message import DEFAULT_FIELD_LINES, DEFAULT_TEMPLATE, Message, ResolvedField
from models.status import lookup


def _assembler(ctx: ExecutionContext) -> MessageAssembler:
    return MessageAssembler(lambda: ctx)


class TestGetFields:
    def test_push_defaults(self, push_context):
        fields = _assembler(push_context).get_fields(Message())
        assert fields == [
            ResolvedField("Status", "Unknown"),
            ResolvedField("Commit", "<https://github.com/user/repository/commit/0bf2c9e|`0bf2c9e (develop)`>"),
        ]

    def test_pull_request_defaults(self, pr_context):
        fields = _assembler(pr_context).get_fields(Message())
        assert fields[1] == ResolvedField("Pull Request", "<https://github.com/user/repository/pull/1|#1>")

    def test_unsupported_keyword_gives_no_fields(self, push_context):
        assert _assembler(push_context).get_fields(Message().with_fields(["{TEST}"])) == []

    def test_keyword_value_uses_keyword_title(self, push_context):
        fields = _assembler(push_context).get_fields(Message().with_fields(["Build: {STATUS}", "Foo: {TEST}"]))
        assert fields == [ResolvedField("Status", "Unknown")]

    def test_literal_field_without_context(self):
        message = Message().with_fields(["Field 1: Value 1"])
        assert _assembler(ExecutionContext()).get_fields(message) == [ResolvedField("Field 1", "Value 1")]

    def test_keeps_configuration_order_and_skips_malformed(self, push_context):
        message = Message(status=lookup("success")).with_fields(
            ["Field 1: Value 1", "broken", "{STATUS}", "", "Field 2: Value 2"]
        )
        fields = _assembler(push_context).get_fields(message)
        assert [f.name for f in fields] == ["Field 1", "Status", "Field 2"]
        assert fields[1].value == "Success"

    def test_missing_context_propagates(self, push_context):
        ctx = replace(push_context, sha=None)
        with pytest.raises(MissingContextError):
            _assembler(ctx).get_fields(Message())


class TestGetText:
    def test_unknown_tokens_unchanged(self):
        template = "GitHub Actions {FIRST} job in {SECOND} by {THIRD}"
        assert _assembler(ExecutionContext()).get_text(Message(template=template)) == template

    def test_resolved_against_fresh_context(self, push_context):
        contexts = [ExecutionContext(), push_context]
        assembler = MessageAssembler(lambda: contexts.pop(0))
        message = Message(template="{GITHUB_REF}")

        assert assembler.get_text(message) == "{GITHUB_REF}"
        assert assembler.get_text(message).startswith("<https://github.com/user/repository|")


class TestBuildPayload:
    def test_payload_uses_status_color(self, push_context):
        message = Message(status=lookup("failure").with_color("#ff0000"), template="Done")
        payload = _assembler(push_context).build_payload(message)
        assert payload.text == "Done"
        assert payload.color == "#ff0000"
        assert [f.name for f in payload.fields] == ["Status", "Commit"]
        assert payload.fields[0].value == "Failure"


class TestMessage:
    def test_defaults(self):
        message = Message()
        assert message.field_lines == DEFAULT_FIELD_LINES
        assert message.template == DEFAULT_TEMPLATE
        assert message.status.title == "Unknown"
        assert not message.is_sent

    def test_with_fields_replaces_lines_without_mutating(self):
        original = Message()
        updated = original.with_fields(["A: 1"])
        assert updated.field_lines == ("A: 1",)
        assert original.field_lines == DEFAULT_FIELD_LINES

    def test_timestamp_transitions(self):
        sent = Message().with_timestamp("1234567890.123456")
        assert sent.is_sent
        resent = sent.with_timestamp("1234567890.654321")
        assert resent.timestamp == "1234567890.654321"

    def test_timestamp_cannot_be_cleared(self):
        with pytest.raises(ValueError):
            Message().with_timestamp("1234567890.123456").with_timestamp("")
