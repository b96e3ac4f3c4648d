from __future__ import annotations


class NotifierError(Exception):
    """Base class for every error raised by the notifier."""


class MissingContextError(NotifierError):
    """A run context value needed to build a link is not available."""

    def __init__(self, name: str) -> None:
        super().__init__(f"GitHub {name} context is undefined")
        self.name = name


class InputError(NotifierError):
    """An action input or required environment variable is invalid."""


class TransportError(NotifierError):
    """Delivering a message to the messaging platform failed."""


class SlackApiError(TransportError):
    """Slack answered a Web API call with ``ok: false``."""

    def __init__(self, method: str, code: str) -> None:
        super().__init__(f"Slack API {method} failed: {code}")
        self.method = method
        self.code = code


class MessageNotFoundError(SlackApiError):
    """The message to update no longer exists in the channel."""

    CODE = "message_not_found"

    def __init__(self, method: str) -> None:
        super().__init__(method, self.CODE)
