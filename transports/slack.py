from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from core.errors import MessageNotFoundError, SlackApiError, TransportError
from models.message import Payload, ResolvedField
from transports.base import Transport

_CHANNEL_ID_RE = re.compile(r"^[CGD][A-Z0-9]{8,}$")
_CHANNELS_PAGE_SIZE = 200

log = logging.getLogger(__name__)


def render_field(field: ResolvedField) -> dict[str, str]:
    """Slack mrkdwn text object for one display field."""
    return {"type": "mrkdwn", "text": f"*{field.name}*\n{field.value}"}


def render_attachments(payload: Payload) -> list[dict[str, Any]]:
    if not payload.fields:
        return []
    return [
        {
            "color": payload.color,
            "blocks": [
                {
                    "type": "section",
                    "fields": [render_field(f) for f in payload.fields],
                },
            ],
        },
    ]


class SlackTransport(Transport):
    """Transport adapter for the Slack Web API.

    Uses the bot token for every call and resolves the configured channel
    name to a channel id once, on first use.  Channel ids are accepted
    directly and skip the lookup.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str,
        channel: str,
        api_url: str = "https://slack.com/api/",
    ) -> None:
        self._client = client
        self._token = token
        self._channel = channel.lstrip("#")
        self._api_url = api_url
        self._channel_id: str | None = None

    @property
    def name(self) -> str:
        return "Slack"

    async def post(self, payload: Payload) -> str:
        body: dict[str, Any] = {
            "channel": await self._resolve_channel_id(),
            "text": payload.text,
        }
        attachments = render_attachments(payload)
        if attachments:
            body["attachments"] = attachments

        log.debug("[%s] Posting message", self.name)
        data = await self._call("chat.postMessage", body)
        ts = self._extract_ts(data)
        log.info("[%s] Posted message (timestamp: %s)", self.name, ts)
        return ts

    async def update(self, payload: Payload, identifier: str) -> str:
        body: dict[str, Any] = {
            "channel": await self._resolve_channel_id(),
            "text": payload.text,
            "ts": identifier,
            # An empty list clears the fields of the previous version.
            "attachments": render_attachments(payload),
        }

        log.debug("[%s] Updating message (timestamp: %s)", self.name, identifier)
        data = await self._call("chat.update", body)
        ts = self._extract_ts(data)
        log.info("[%s] Updated message (timestamp: %s)", self.name, ts)
        return ts

    async def _resolve_channel_id(self) -> str:
        if self._channel_id is not None:
            return self._channel_id

        if _CHANNEL_ID_RE.match(self._channel):
            self._channel_id = self._channel
            return self._channel_id

        log.debug("[%s] Finding #%s channel", self.name, self._channel)
        cursor = ""
        while True:
            params: dict[str, Any] = {
                "exclude_archived": "true",
                "limit": _CHANNELS_PAGE_SIZE,
                "types": "public_channel,private_channel",
            }
            if cursor:
                params["cursor"] = cursor

            data = await self._call("conversations.list", params, method="GET")
            for channel in data.get("channels") or []:
                if channel.get("name") == self._channel:
                    self._channel_id = channel["id"]
                    log.info("[%s] Found #%s channel (%s)", self.name, self._channel, self._channel_id)
                    return self._channel_id

            cursor = (data.get("response_metadata") or {}).get("next_cursor") or ""
            if not cursor:
                break

        raise TransportError(f"Slack channel not found: #{self._channel}")

    async def _call(
        self,
        api_method: str,
        payload: dict[str, Any],
        *,
        method: str = "POST",
    ) -> dict[str, Any]:
        url = f"{self._api_url}{api_method}"
        headers = {"Authorization": f"Bearer {self._token}"}

        try:
            if method == "GET":
                resp = await self._client.get(url, params=payload, headers=headers)
            else:
                resp = await self._client.post(url, json=payload, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            log.error("[%s] HTTP error calling %s: %s", self.name, api_method, exc)
            raise TransportError(f"Slack API {api_method} request failed: {exc}") from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise TransportError(f"Slack API {api_method} returned invalid JSON") from exc

        if not isinstance(data, dict):
            raise TransportError(f"Slack API {api_method} returned an unexpected response")

        if not data.get("ok"):
            code = str(data.get("error") or "unknown_error")
            if code == MessageNotFoundError.CODE:
                raise MessageNotFoundError(api_method)
            raise SlackApiError(api_method, code)

        return data

    @staticmethod
    def _extract_ts(data: dict[str, Any]) -> str:
        ts = data.get("ts")
        if isinstance(ts, str) and ts:
            return ts
        raise TransportError("Slack API response has no message timestamp")
