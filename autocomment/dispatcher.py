"""Post the configured comment on the issue or PR that triggered the run.

Flow: validate inputs -> classify trigger -> build body -> create comment.
Issues and pull requests share one code path: a PR is commented on
through the issue comments endpoint using its number.
"""

import logging
from typing import Callable

from pydantic import BaseModel

from autocomment.adapters.base import CommentAdapter
from autocomment.config import ActionInputs, validate_inputs
from autocomment.context import ActionContext, TriggerContext, TriggerKind
from autocomment.models import Comment

log = logging.getLogger("autocomment.dispatcher")

AdapterFactory = Callable[[str], CommentAdapter]

_TARGET_LABELS = {
    TriggerKind.ISSUE: "issue",
    TriggerKind.PULL_REQUEST: "pull request",
}


class CommentTarget(BaseModel):
    """Issue or PR to comment on, with the message for that kind."""

    kind: TriggerKind
    number: int
    message: str

    @property
    def label(self) -> str:
        return _TARGET_LABELS[self.kind]


class RunResult(BaseModel):
    """Outcome of one run: success (maybe with a comment) or failure."""

    success: bool
    message: str = ""
    comment: Comment | None = None

    @classmethod
    def ok(cls, comment: Comment | None = None) -> "RunResult":
        return cls(success=True, comment=comment)

    @classmethod
    def failed(cls, message: str) -> "RunResult":
        return cls(success=False, message=message)


def build_comment_body(message: str, footer: str) -> str:
    return f"{message}\n\n{footer}"


def select_target(trigger: TriggerContext, inputs: ActionInputs) -> CommentTarget | None:
    """Pick the message for the trigger kind; None when there is nothing to post."""
    if trigger.kind is TriggerKind.ISSUE:
        message = inputs.issue_message
    elif trigger.kind is TriggerKind.PULL_REQUEST:
        message = inputs.pr_message
    else:
        return None
    return CommentTarget(kind=trigger.kind, number=trigger.number, message=message)


def post_comment(adapter: CommentAdapter, repo: str, target: CommentTarget, footer: str) -> Comment:
    """Create the comment for target in repo (owner/name)."""
    body = build_comment_body(target.message, footer)
    log.info("Creating comment on %s #%d", target.label, target.number)
    return adapter.create_comment(repo, target.number, body)


def dispatch(inputs: ActionInputs, context: ActionContext, make_adapter: AdapterFactory) -> Comment | None:
    """Validate, classify and post. Errors propagate to the caller."""
    validate_inputs(inputs)

    target = select_target(context.trigger, inputs)
    if target is None:
        log.info("This event is neither an issue nor a pull request, no comment will be made.")
        return None
    if not target.message:
        log.info("No message configured for %s #%d, no comment will be made.", target.label, target.number)
        return None

    adapter = make_adapter(inputs.github_token)
    return post_comment(adapter, context.repo.full_name, target, inputs.footer)


def run(inputs: ActionInputs, context: ActionContext, make_adapter: AdapterFactory) -> RunResult:
    """Top-level entry: every error becomes a single failed RunResult."""
    try:
        comment = dispatch(inputs, context, make_adapter)
    except Exception as e:
        return RunResult.failed(f"Action failed: {e}")
    return RunResult.ok(comment)
