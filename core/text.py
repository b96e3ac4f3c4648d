from __future__ import annotations

import logging
import re

from core import links
from core.errors import MissingContextError
from models.context import ExecutionContext, is_present
from models.message import TextKeyword

log = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"{.*?}")
_KEYWORDS = {keyword.value: keyword for keyword in TextKeyword}


def _actor(ctx: ExecutionContext) -> str:
    url = links.actor_url(ctx)
    return links.mrkdwn_link(url, ctx.actor)


def _job(ctx: ExecutionContext) -> str:
    if not is_present(ctx.workflow_name):
        raise MissingContextError("workflow")
    if not is_present(ctx.job_name):
        raise MissingContextError("job")
    url = links.workflow_run_url(ctx)
    return links.mrkdwn_link(url, f"{ctx.workflow_name} / {ctx.job_name}")


def _ref(ctx: ExecutionContext) -> str | None:
    try:
        repo_url = links.repo_url(ctx)
    except MissingContextError:
        log.debug("Repository context missing, leaving %s as is", TextKeyword.GITHUB_REF.value)
        return None

    result = links.mrkdwn_link(repo_url, links.repo_slug(ctx))

    number = links.pull_request_number(ctx)
    if number is not None:
        return f"{result}#{links.mrkdwn_link(links.pull_request_url(ctx, number), str(number))}"

    branch = ctx.branch_name
    if ctx.event_name == "push" and branch:
        return f"{result}@{links.mrkdwn_link(links.branch_url(ctx, branch), branch)}"

    return result


def render_keyword(keyword: TextKeyword, ctx: ExecutionContext) -> str | None:
    """Render one text keyword; None means "leave the token as written"."""
    if keyword is TextKeyword.GITHUB_ACTOR:
        return _actor(ctx)
    if keyword is TextKeyword.GITHUB_JOB:
        return _job(ctx)
    if keyword is TextKeyword.GITHUB_REF:
        return _ref(ctx)
    raise ValueError(f"Unhandled text keyword {keyword!r}")


def resolve_text(template: str, ctx: ExecutionContext) -> str:
    """Substitute the supported ``{GITHUB_*}`` keywords in ``template``.

    Each distinct keyword is computed once.  Unknown ``{...}`` tokens are
    left untouched.

    Raises:
        MissingContextError: ``{GITHUB_ACTOR}`` or ``{GITHUB_JOB}`` cannot
            be linked with the available context.
    """
    replacements: dict[str, str | None] = {}
    for token in _TOKEN_RE.findall(template):
        if token in _KEYWORDS and token not in replacements:
            replacements[token] = render_keyword(_KEYWORDS[token], ctx)

    def _substitute(match: re.Match[str]) -> str:
        replacement = replacements.get(match.group(0))
        return match.group(0) if replacement is None else replacement

    return _TOKEN_RE.sub(_substitute, template)
