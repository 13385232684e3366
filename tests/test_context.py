"""Tests for autocomment.context (payload loading, trigger and repo)."""

import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from autocomment.config import ConfigurationError, GitHubConfig
from autocomment.context import (
    ActionContext,
    Repo,
    TriggerContext,
    TriggerKind,
    load_event_payload,
    repo_from_env,
    trigger_from_payload,
)


class TestLoadEventPayload:
    def test_none_path_gives_empty_payload(self) -> None:
        assert load_event_payload(None) == {}
        assert load_event_payload("") == {}

    def test_missing_file_warns(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.WARNING, logger="autocomment.context")
        missing = tmp_path / "event.json"
        assert load_event_payload(str(missing)) == {}
        assert "does not exist" in caplog.text

    def test_reads_json(self, tmp_path: Path) -> None:
        path = tmp_path / "event.json"
        path.write_text(json.dumps({"action": "opened", "issue": {"number": 7}}))
        assert load_event_payload(str(path)) == {"action": "opened", "issue": {"number": 7}}


class TestTriggerFromPayload:
    def test_issue(self) -> None:
        trigger = trigger_from_payload({"action": "opened", "issue": {"number": 42, "title": "Bug"}})
        assert trigger == TriggerContext(kind=TriggerKind.ISSUE, number=42)

    def test_pull_request(self) -> None:
        trigger = trigger_from_payload({"action": "opened", "number": 5, "pull_request": {"number": 5}})
        assert trigger.kind is TriggerKind.PULL_REQUEST
        assert trigger.number == 5

    def test_issue_wins_over_pull_request(self) -> None:
        """issue_comment on a PR carries both keys; the issue branch is taken."""
        trigger = trigger_from_payload({"issue": {"number": 3}, "pull_request": {"number": 9}})
        assert trigger.kind is TriggerKind.ISSUE
        assert trigger.number == 3

    @pytest.mark.parametrize(
        "payload",
        [{}, {"ref": "refs/heads/main", "commits": []}, {"issue": None}, {"pull_request": "x"}],
    )
    def test_other(self, payload: dict) -> None:
        trigger = trigger_from_payload(payload)
        assert trigger.kind is TriggerKind.OTHER
        assert trigger.number is None

    @pytest.mark.parametrize("section", [{}, {"number": "12"}, {"number": True}])
    def test_section_without_number_raises(self, section: dict) -> None:
        with pytest.raises(ValueError, match="no valid number"):
            trigger_from_payload({"issue": section})


class TestTriggerContext:
    def test_other_has_no_number(self) -> None:
        with pytest.raises(ValidationError):
            TriggerContext(kind=TriggerKind.OTHER, number=1)

    def test_issue_requires_number(self) -> None:
        with pytest.raises(ValidationError):
            TriggerContext(kind=TriggerKind.ISSUE)


class TestRepoFromEnv:
    def test_from_repository_variable(self) -> None:
        repo = repo_from_env("octo/hello", {})
        assert repo == Repo(owner="octo", name="hello")
        assert repo.full_name == "octo/hello"

    def test_from_payload(self) -> None:
        payload = {"repository": {"name": "hello", "owner": {"login": "octo"}}}
        assert repo_from_env(None, payload).full_name == "octo/hello"

    def test_malformed_variable_falls_back_to_payload(self) -> None:
        payload = {"repository": {"name": "hello", "owner": {"login": "octo"}}}
        assert repo_from_env("no-slash", payload).full_name == "octo/hello"

    def test_unresolvable_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="GITHUB_REPOSITORY"):
            repo_from_env(None, {})


class TestActionContext:
    def test_from_config(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        path = tmp_path / "event.json"
        path.write_text(json.dumps({"pull_request": {"number": 11}}))
        clean_env.setenv("GITHUB_EVENT_PATH", str(path))
        clean_env.setenv("GITHUB_EVENT_NAME", "pull_request")
        clean_env.setenv("GITHUB_REPOSITORY", "owner/repo")

        context = ActionContext.from_config(GitHubConfig())

        assert context.event_name == "pull_request"
        assert context.trigger == TriggerContext(kind=TriggerKind.PULL_REQUEST, number=11)
        assert context.repo.full_name == "owner/repo"

    def test_repo_resolved_lazily(self) -> None:
        """A context without repository info is fine until repo is read."""
        context = ActionContext(payload={"ref": "refs/heads/main"})
        assert context.trigger.kind is TriggerKind.OTHER
        with pytest.raises(ConfigurationError):
            context.repo


class TestLoadEventPayloadErrors:
    def test_array_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "event.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError, match="not a JSON object"):
            load_event_payload(str(path))

    def test_null_is_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "event.json"
        path.write_text("null")
        assert load_event_payload(str(path)) == {}
