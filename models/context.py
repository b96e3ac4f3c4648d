from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

log = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "https://github.com"
BRANCH_REF_PREFIX = "refs/heads/"
SHORT_SHA_LENGTH = 7


def is_present(value: object) -> bool:
    """Return True when a context value is set (not ``None`` or blank)."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


@dataclass(frozen=True)
class ExecutionContext:
    """Read-only snapshot of the CI run a notification is about.

    Absent values are ``None``; blank strings are stored as ``None``.  Build
    one explicitly in tests or from the runner environment with
    :meth:`from_env`.

    Fields:
        event_name:    Trigger event (``push``, ``pull_request``, ...).
        issue_number:  Issue / pull request number, if the event has one.
        repo_owner:    Repository owner login.
        repo_name:     Repository name without the owner.
        server_url:    Base URL of the GitHub server.
        ref:           Full git ref (``refs/heads/main``).
        sha:           Full commit SHA.
        actor:         Login of the user that triggered the run.
        workflow_name: Workflow display name.
        job_name:      Job id inside the workflow.
        run_id:        Numeric workflow run id.
    """

    event_name: str | None = None
    issue_number: int | None = None
    repo_owner: str | None = None
    repo_name: str | None = None
    server_url: str | None = None
    ref: str | None = None
    sha: str | None = None
    actor: str | None = None
    workflow_name: str | None = None
    job_name: str | None = None
    run_id: int | None = None

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, str) and not value.strip():
                object.__setattr__(self, f.name, None)

    @property
    def branch_name(self) -> str | None:
        if self.ref is None or not self.ref.startswith(BRANCH_REF_PREFIX):
            return None
        return self.ref[len(BRANCH_REF_PREFIX):] or None

    @property
    def short_sha(self) -> str | None:
        if self.sha is None:
            return None
        return self.sha[:SHORT_SHA_LENGTH]

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> ExecutionContext:
        """Build a snapshot from GitHub Actions runner variables."""
        owner, name = _split_repository(_normalize_empty(env.get("GITHUB_REPOSITORY")))
        return cls(
            event_name=_normalize_empty(env.get("GITHUB_EVENT_NAME")),
            issue_number=_read_issue_number(_normalize_empty(env.get("GITHUB_EVENT_PATH"))),
            repo_owner=owner,
            repo_name=name,
            server_url=_normalize_empty(env.get("GITHUB_SERVER_URL")) or DEFAULT_SERVER_URL,
            ref=_normalize_empty(env.get("GITHUB_REF")),
            sha=_normalize_empty(env.get("GITHUB_SHA")),
            actor=_normalize_empty(env.get("GITHUB_ACTOR")),
            workflow_name=_normalize_empty(env.get("GITHUB_WORKFLOW")),
            job_name=_normalize_empty(env.get("GITHUB_JOB")),
            run_id=_parse_positive_int(_normalize_empty(env.get("GITHUB_RUN_ID"))),
        )


def _normalize_empty(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _split_repository(slug: str | None) -> tuple[str | None, str | None]:
    if slug is None or "/" not in slug:
        return None, None
    owner, _, name = slug.partition("/")
    return _normalize_empty(owner), _normalize_empty(name)


def _parse_positive_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def _read_issue_number(event_path: str | None) -> int | None:
    """Pull the issue / pull request number out of the webhook payload.

    Mirrors the lookup order of the Actions toolkit: ``issue.number``,
    then ``pull_request.number``, then a top-level ``number``.
    """
    if event_path is None:
        return None

    try:
        with open(event_path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError) as exc:
        log.warning("Could not read event payload %s: %s", event_path, exc)
        return None

    if not isinstance(payload, dict):
        return None

    for key in ("issue", "pull_request"):
        section = payload.get(key)
        if isinstance(section, dict) and "number" in section:
            return _parse_positive_int(section["number"])

    return _parse_positive_int(payload.get("number"))
