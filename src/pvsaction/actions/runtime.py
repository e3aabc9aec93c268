"""Thin bridge to the GitHub Actions runner.

Inputs arrive as ``INPUT_<NAME>`` environment variables, outputs are
appended to the file named by ``GITHUB_OUTPUT``, and everything else is a
workflow command printed to stdout.
"""

import os
import sys
import uuid
from typing import Optional, TextIO

from pvsaction.log import escape_data


def is_github_actions() -> bool:
    """Check whether we are running inside a GitHub Actions runner."""
    return os.environ.get("GITHUB_ACTIONS") == "true"


def input_env_name(name: str) -> str:
    """Environment variable the runner uses for an action input."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name: str) -> str:
    """Read an action input, trimmed of surrounding whitespace."""
    return os.environ.get(input_env_name(name), "").strip()


def set_output(name: str, value: str, stream: Optional[TextIO] = None) -> None:
    """Publish a step output.

    Args:
        name: Output name as declared in action.yml
        value: Output value; multi-line values use a heredoc delimiter
        stream: Where to echo the output when not running inside Actions
    """
    output_file = os.environ.get("GITHUB_OUTPUT")
    if output_file:
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            entry = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
        else:
            entry = f"{name}={value}\n"
        with open(output_file, "a", encoding="utf-8") as f:
            f.write(entry)
        return

    print(f"{name}={value}", file=stream or sys.stdout)


def add_mask(value: str, stream: Optional[TextIO] = None) -> None:
    """Ask the runner to mask a secret in all subsequent log lines."""
    if not value or not is_github_actions():
        return
    print(f"::add-mask::{escape_data(value)}", file=stream or sys.stdout)


def set_failed(message: str, stream: Optional[TextIO] = None) -> None:
    """Report the step as failed."""
    print(f"::error::{escape_data(message)}", file=stream or sys.stdout)
