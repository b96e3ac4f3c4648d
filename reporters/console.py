from __future__ import annotations

import logging

from reporters.base import OutputReporter

log = logging.getLogger(__name__)


class ConsoleReporter(OutputReporter):
    """Logs outputs when no ``GITHUB_OUTPUT`` file is available (local runs)."""

    def report(self, name: str, value: str) -> None:
        log.info("Output %s: %s", name, value)
