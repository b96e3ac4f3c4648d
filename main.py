"""Slack CI notifier -- entry point.

Runs as one step of a GitHub Actions job:

    action inputs (INPUT_*) + Slack settings (SLACK_*)
        -> Message (status, field lines, text template, timestamp)
        -> MessageAssembler resolves it against the run context (GITHUB_*)
        -> Notifier posts or updates it through the Slack transport
        -> the message timestamp is reported as the ``slack-timestamp`` output

A later step can pass that output back as the ``timestamp`` input to
update the same message, e.g. from "In Progress" to "Success".
"""
from __future__ import annotations

import asyncio
import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path

import httpx

from core.assembler import MessageAssembler
from core.errors import InputError, NotifierError
from core.inputs import ActionInputs, SlackSettings, load_inputs, load_slack_settings
from core.notifier import Notifier
from models.context import ExecutionContext
from models.message import Message
from models.status import lookup
from reporters import ConsoleReporter, GithubOutputReporter, OutputReporter
from transports.slack import SlackTransport

log = logging.getLogger(__name__)


def configure_logging(env: Mapping[str, str]) -> None:
    level = logging.DEBUG if env.get("RUNNER_DEBUG") == "1" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_message(inputs: ActionInputs) -> Message:
    status = lookup(inputs.status)
    if inputs.color:
        status = status.with_color(inputs.color)

    message = Message(status=status, template=inputs.text).with_fields(inputs.fields)
    if inputs.timestamp:
        message = message.with_timestamp(inputs.timestamp)
    return message


def build_reporter(env: Mapping[str, str]) -> OutputReporter:
    output_path = (env.get("GITHUB_OUTPUT") or "").strip()
    if output_path:
        return GithubOutputReporter(Path(output_path))
    return ConsoleReporter()


async def send(
    inputs: ActionInputs,
    settings: SlackSettings,
    env: Mapping[str, str],
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> Message:
    message = build_message(inputs)
    assembler = MessageAssembler(lambda: ExecutionContext.from_env(env))

    async with httpx.AsyncClient(timeout=settings.timeout_seconds, transport=http_transport) as client:
        transport = SlackTransport(
            client=client,
            token=settings.token,
            channel=settings.channel,
            api_url=settings.api_url,
        )
        notifier = Notifier(transport=transport, assembler=assembler)
        return await notifier.send(
            message,
            ignore_message_not_found=inputs.ignore_message_not_found,
        )


async def run(
    env: Mapping[str, str],
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """Run one notification and return the process exit code."""
    try:
        inputs = load_inputs(env)
    except InputError as error:
        _annotate_error(f"Failed to initialize inputs: {error}")
        return 1

    try:
        settings = load_slack_settings(env)
        sent = await send(inputs, settings, env, http_transport=http_transport)
        build_reporter(env).report_timestamp(sent.timestamp)
    except NotifierError as error:
        _annotate_error(str(error))
        if inputs.ignore_failures:
            log.warning("Ignoring failure: %s", error)
            return 0
        return 1

    return 0


def _annotate_error(message: str) -> None:
    log.error("%s", message)
    print(f"::error::{message}", flush=True)


def main() -> int:
    configure_logging(os.environ)
    try:
        return asyncio.run(run(os.environ))
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
