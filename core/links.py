from __future__ import annotations

from core.errors import MissingContextError
from models.context import ExecutionContext, is_present


def mrkdwn_link(url: str, label: str) -> str:
    """Format a Slack mrkdwn link: ``<url|label>``."""
    return f"<{url}|{label}>"


def repo_slug(ctx: ExecutionContext) -> str:
    if not (is_present(ctx.repo_owner) and is_present(ctx.repo_name)):
        raise MissingContextError("repo")
    return f"{ctx.repo_owner}/{ctx.repo_name}"


def repo_url(ctx: ExecutionContext) -> str:
    slug = repo_slug(ctx)
    if not is_present(ctx.server_url):
        raise MissingContextError("repo")
    return f"{ctx.server_url}/{slug}"


def commit_short(ctx: ExecutionContext) -> str:
    if not is_present(ctx.short_sha):
        raise MissingContextError("sha")
    return ctx.short_sha


def commit_url(ctx: ExecutionContext) -> str:
    return f"{repo_url(ctx)}/commit/{commit_short(ctx)}"


def pull_request_number(ctx: ExecutionContext) -> int | None:
    """Return the PR number when the run was triggered by a pull request."""
    if ctx.event_name == "pull_request" and is_present(ctx.issue_number) and ctx.issue_number > 0:
        return ctx.issue_number
    return None


def pull_request_url(ctx: ExecutionContext, number: int) -> str:
    return f"{repo_url(ctx)}/pull/{number}"


def branch_url(ctx: ExecutionContext, branch: str) -> str:
    return f"{repo_url(ctx)}/tree/{branch}"


def actor_url(ctx: ExecutionContext) -> str:
    if not (is_present(ctx.actor) and is_present(ctx.server_url)):
        raise MissingContextError("actor or server URL")
    return f"{ctx.server_url}/{ctx.actor}"


def workflow_run_url(ctx: ExecutionContext) -> str:
    if not is_present(ctx.run_id):
        raise MissingContextError("run ID")
    return f"{repo_url(ctx)}/actions/runs/{ctx.run_id}"
