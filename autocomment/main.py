"""autocomment entry point.

Runs as a GitHub Actions step: reads INPUT_* and GITHUB_* from the
environment, posts the configured comment and reports failures as a
workflow ``::error::`` command. Usage: autocomment [--config PATH] [--check].
"""

import argparse
import logging
import sys
from pathlib import Path

from autocomment.adapters.github import GitHubAdapter
from autocomment.config import ConfigurationError, DEFAULT_CONFIG_PATH, load_config, validate_inputs
from autocomment.context import ActionContext
from autocomment.dispatcher import run
from autocomment.logging import AutocommentLogging

log = logging.getLogger("autocomment")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="autocomment",
        description="Post a fixed comment on the issue or pull request that triggered the workflow",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to optional YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv)


def escape_command_data(value: str) -> str:
    """Escape a workflow command value (%, CR, LF)."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def report_failure(message: str) -> None:
    """Mark the step failed: log and emit ::error:: for the runner."""
    log.error(message)
    print(f"::error::{escape_command_data(message)}", flush=True)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except Exception as e:
        logging.basicConfig(level=logging.INFO)
        report_failure(f"Action failed: {e}")
        return 1
    AutocommentLogging(config.logging).setup()

    if args.check:
        try:
            validate_inputs(config.inputs)
        except ConfigurationError as e:
            report_failure(f"Action failed: {e}")
            return 1
        print("Config OK:", config.github.repository or "-", config.github.event_name or "-")
        return 0

    try:
        context = ActionContext.from_config(config.github)
    except Exception as e:
        report_failure(f"Action failed: {e}")
        return 1
    result = run(
        config.inputs,
        context,
        lambda token: GitHubAdapter(token, api_url=config.github.api_url),
    )
    if not result.success:
        report_failure(result.message)
        return 1
    if result.comment is not None and result.comment.html_url:
        log.info("Comment created: %s", result.comment.html_url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
