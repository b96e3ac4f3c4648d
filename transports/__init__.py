from transports.base import Transport
from transports.slack import SlackTransport

__all__ = ["Transport", "SlackTransport"]
