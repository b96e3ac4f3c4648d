from __future__ import annotations

import logging
import uuid
from pathlib import Path

from reporters.base import OutputReporter

log = logging.getLogger(__name__)


class GithubOutputReporter(OutputReporter):
    """Appends outputs to the file named by ``GITHUB_OUTPUT``.

    Multiline values use the heredoc form with a random delimiter.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def report(self, name: str, value: str) -> None:
        with open(self._path, "a", encoding="utf-8") as f:
            if "\n" in value:
                delimiter = f"EOF-{uuid.uuid4()}"
                f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                f.write(f"{name}={value}\n")
        log.info("Set output %s=%s", name, value)
