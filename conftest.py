"""Root pytest configuration."""

from dataclasses import replace

import pytest

from models.context import ExecutionContext
from models.status import STATUSES, StatusCode

SHA = "0bf2c9eb66d0a76fcd90b93e66074876ebc4405a"


@pytest.fixture
def push_context() -> ExecutionContext:
    return ExecutionContext(
        event_name="push",
        ref="refs/heads/develop",
        sha=SHA,
        repo_owner="user",
        repo_name="repository",
        server_url="https://github.com",
        actor="octocat",
        workflow_name="CI",
        job_name="build",
        run_id=42,
    )


@pytest.fixture
def pr_context(push_context: ExecutionContext) -> ExecutionContext:
    return replace(push_context, event_name="pull_request", ref="refs/pull/1/merge", issue_number=1)


@pytest.fixture
def unknown_status():
    return STATUSES[StatusCode.UNKNOWN]


@pytest.fixture
def success_status():
    return STATUSES[StatusCode.SUCCESS]
