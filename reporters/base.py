from __future__ import annotations

from abc import ABC, abstractmethod

SLACK_TIMESTAMP_OUTPUT = "slack-timestamp"


class OutputReporter(ABC):
    """Hands action outputs back to the invoking workflow.

    The only output today is the Slack message timestamp, which a later
    step passes back as the ``timestamp`` input to update the message.
    """

    @abstractmethod
    def report(self, name: str, value: str) -> None:
        """Publish one output value."""

    def report_timestamp(self, timestamp: str) -> None:
        self.report(SLACK_TIMESTAMP_OUTPUT, timestamp)
