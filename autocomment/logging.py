"""Logging for an Actions step.

Level comes from LoggingConfig (autocomment.yaml ``logging`` or
LOGGING_LEVEL / LOGGING_FORMAT). When the runner has step debug logging
enabled (RUNNER_DEBUG=1) the level is forced to DEBUG.

Inside a workflow run (GITHUB_ACTIONS=true) records go to stdout and
DEBUG / WARNING records are prefixed with the ``::debug::`` and
``::warning::`` workflow commands so the runner folds and annotates them.
"""

import logging
import os
import sys
from typing import Mapping

from autocomment.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_COMMANDS = {
    logging.DEBUG: "::debug::",
    logging.WARNING: "::warning::",
}


def _resolve_level(level: str, env: Mapping[str, str]) -> int:
    """Map level name to a logging constant; RUNNER_DEBUG=1 wins, unknown -> INFO."""
    if env.get("RUNNER_DEBUG") == "1":
        return logging.DEBUG
    return LEVELS.get(level.upper().strip(), logging.INFO)


class WorkflowCommandFormatter(logging.Formatter):
    """Prefix records with the workflow command for their level."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        prefix = _COMMANDS.get(record.levelno)
        if prefix is None:
            return text
        # One command per line, otherwise the runner only annotates the first
        return "\n".join(prefix + line for line in text.splitlines())


class AutocommentLogging:
    """Configures the root logger for a local run or a workflow step."""

    def __init__(self, config: LoggingConfig, env: Mapping[str, str] | None = None) -> None:
        env = os.environ if env is None else env
        self._level = _resolve_level(config.level, env)
        self._format = config.format or DEFAULT_FORMAT
        self._in_actions = env.get("GITHUB_ACTIONS") == "true"

    def setup(self) -> None:
        if not self._in_actions:
            logging.basicConfig(level=self._level, format=self._format, force=True)
            return
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(WorkflowCommandFormatter(self._format))
        logging.basicConfig(level=self._level, handlers=[handler], force=True)
