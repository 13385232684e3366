"""Configuration loading from action inputs, YAML and environment.

Action inputs are passed by the Actions runner as INPUT_<NAME> environment
variables (e.g. INPUT_GITHUB-TOKEN). A YAML file may provide the same
inputs for local runs; environment values win. Never put real tokens in
config files committed to the repo.
"""

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path("autocomment.yaml")


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


def _input_env_key(name: str) -> str:
    """Environment variable the runner uses for an action input."""
    return "INPUT_" + name.replace(" ", "_").upper()


class ActionInputs(BaseModel):
    """The four inputs of the action (names as in action metadata)."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, frozen=True)

    github_token: str = Field(default="", alias="github-token", description="Token used to post comments")
    issue_message: str = Field(default="", alias="issue-message", description="Comment posted on issues")
    pr_message: str = Field(default="", alias="pr-message", description="Comment posted on pull requests")
    footer: str = Field(default="", description="Appended to every comment after a blank line")

    @classmethod
    def input_names(cls) -> list[str]:
        return [f.alias or name for name, f in cls.model_fields.items()]

    @classmethod
    def from_env(cls, env: Mapping[str, str], defaults: Mapping[str, Any] | None = None) -> "ActionInputs":
        """Build inputs from INPUT_* variables, falling back to defaults."""
        values = dict(defaults or {})
        for name in cls.input_names():
            key = _input_env_key(name)
            if key in env:
                values[name] = env[key]
        return cls(**values)


class GitHubConfig(BaseSettings):
    """Runner environment (GITHUB_* variables)."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    repository: str | None = Field(default=None, description="owner/repo of the workflow run")
    event_name: str = Field(default="", description="Name of the triggering event")
    event_path: str | None = Field(default=None, description="Path to the event payload JSON")
    api_url: str = Field(default="https://api.github.com", description="API base URL")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    inputs: ActionInputs = Field(default_factory=ActionInputs)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def validate_inputs(inputs: ActionInputs) -> None:
    """Check required inputs before any remote call.

    Raises ConfigurationError naming what is missing.
    """
    if not inputs.github_token:
        raise ConfigurationError("GitHub token is required but was not provided")
    if not inputs.issue_message and not inputs.pr_message:
        raise ConfigurationError("At least one of 'issue-message' or 'pr-message' must be provided")


def _substitute_env(value: Any, env: Mapping[str, str]) -> Any:
    """Replace ${VAR} and $VAR in strings with environment values."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return env.get(key, value)
        # Simple $VAR
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v, env) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from optional YAML file and environment.

    INPUT_* variables override the YAML ``inputs`` section.
    """
    env = dict(os.environ)

    path = config_path or DEFAULT_CONFIG_PATH
    raw: dict[str, Any] = {}
    if path.is_file():
        raw = yaml.safe_load(path.read_text()) or {}
        raw = _substitute_env(raw, env)

    inputs = ActionInputs.from_env(env, defaults=raw.get("inputs") or {})
    github = GitHubConfig(**(raw.get("github") or {}))
    logging = LoggingConfig(**(raw.get("logging") or {}))

    return AppConfig(inputs=inputs, github=github, logging=logging)
