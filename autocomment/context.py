"""Workflow run context: event payload, trigger kind and repository.

The payload is the JSON document the runner writes to GITHUB_EVENT_PATH.
Only the presence of an ``issue`` or ``pull_request`` object matters here:

- issue: issues and issue_comment events (also comments on PRs)
- pull_request: pull_request and pull_request_target events
- anything else (push, schedule, ...): no comment target
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, Field, model_validator

from autocomment.config import ConfigurationError, GitHubConfig

log = logging.getLogger("autocomment.context")


class TriggerKind(str, Enum):
    ISSUE = "issue"
    PULL_REQUEST = "pull_request"
    OTHER = "other"


class TriggerContext(BaseModel):
    """What the triggering event concerns: an issue, a PR, or neither."""

    kind: TriggerKind = TriggerKind.OTHER
    number: int | None = None

    @model_validator(mode="after")
    def _number_matches_kind(self) -> "TriggerContext":
        if self.kind is TriggerKind.OTHER:
            if self.number is not None:
                raise ValueError("number is only set for issue or pull_request triggers")
        elif self.number is None:
            raise ValueError(f"{self.kind.value} trigger requires a number")
        return self


class Repo(BaseModel):
    """Repository coordinates of the workflow run."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


def load_event_payload(event_path: str | None) -> Dict[str, Any]:
    """Read the event payload; empty dict when there is none."""
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.is_file():
        log.warning("GITHUB_EVENT_PATH %s does not exist", event_path)
        return {}
    data = json.loads(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Event payload at {event_path} is not a JSON object")
    return data


def _number_of(section: Dict[str, Any], key: str) -> int:
    number = section.get("number")
    if isinstance(number, bool) or not isinstance(number, int):
        raise ValueError(f"Event payload '{key}' has no valid number")
    return number


def trigger_from_payload(payload: Dict[str, Any]) -> TriggerContext:
    """Classify the payload. ``issue`` takes precedence over ``pull_request``."""
    issue = payload.get("issue")
    if isinstance(issue, dict):
        return TriggerContext(kind=TriggerKind.ISSUE, number=_number_of(issue, "issue"))
    pull_request = payload.get("pull_request")
    if isinstance(pull_request, dict):
        return TriggerContext(kind=TriggerKind.PULL_REQUEST, number=_number_of(pull_request, "pull_request"))
    return TriggerContext()


def repo_from_env(repository: str | None, payload: Dict[str, Any]) -> Repo:
    """Resolve owner/repo from GITHUB_REPOSITORY, else from the payload."""
    if repository:
        owner, _, name = repository.partition("/")
        if owner and name:
            return Repo(owner=owner, name=name)
    repo_payload = payload.get("repository")
    if isinstance(repo_payload, dict):
        owner_login = (repo_payload.get("owner") or {}).get("login")
        name = repo_payload.get("name")
        if owner_login and name:
            return Repo(owner=owner_login, name=name)
    raise ConfigurationError("context.repo requires a GITHUB_REPOSITORY environment variable like 'owner/repo'")


class ActionContext(BaseModel):
    """Event payload plus runner metadata for one workflow run."""

    event_name: str = ""
    payload: Dict[str, Any] = Field(default_factory=dict)
    repository: str | None = None

    @classmethod
    def from_config(cls, github: GitHubConfig) -> "ActionContext":
        return cls(
            event_name=github.event_name,
            payload=load_event_payload(github.event_path),
            repository=github.repository,
        )

    @property
    def trigger(self) -> TriggerContext:
        return trigger_from_payload(self.payload)

    @property
    def repo(self) -> Repo:
        # Resolved on access so runs without a target never need it
        return repo_from_env(self.repository, self.payload)
