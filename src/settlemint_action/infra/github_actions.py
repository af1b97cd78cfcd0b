"""GitHub Actions implementation of :class:`~settlemint_action.core.protocols.Platform`.

This module is the **only** place that mutates the ambient process
environment (``export_variable``, ``add_path``) and the only place that
speaks the runner's workflow-command protocol.

Protocol summary
----------------
* Inputs arrive as ``INPUT_<NAME>`` environment variables.
* Log levels, masking and failures are ``::command::message`` lines on
  stdout, with ``%``, ``\\r`` and ``\\n`` percent-encoded.
* Variables and search-path entries are appended to the files named by
  ``GITHUB_ENV`` / ``GITHUB_PATH`` when the runner provides them.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Mapping, MutableMapping
from pathlib import Path

from rich.console import Console

from settlemint_action.exceptions import PlatformError


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------

def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_command(command: str, message: str, properties: Mapping[str, str] | None = None) -> str:
    """Render a workflow command line such as ``::warning::disk full``."""
    rendered = f"::{command}"
    if properties:
        rendered += " " + ",".join(
            f"{key}={escape_property(value)}" for key, value in properties.items()
        )
    return f"{rendered}::{escape_data(message)}"


def input_env_var(name: str) -> str:
    """``access-token`` → ``INPUT_ACCESS-TOKEN``."""
    return "INPUT_" + name.replace(" ", "_").upper()


# ---------------------------------------------------------------------------
# Platform adapter
# ---------------------------------------------------------------------------

class GitHubActionsPlatform:
    """Concrete :class:`Platform` for GitHub Actions runners.

    Parameters
    ----------
    environ:
        Environment mapping to read inputs from and publish variables
        into.  Defaults to :data:`os.environ`.
    console:
        Rich console receiving workflow commands.  Defaults to a plain
        stdout console with markup and highlighting disabled.
    """

    def __init__(
        self,
        environ: MutableMapping[str, str] | None = None,
        console: Console | None = None,
    ) -> None:
        self._environ: MutableMapping[str, str] = os.environ if environ is None else environ
        self._console: Console = console or Console(
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
        self.exit_code: int = 0
        """``1`` once :meth:`set_failed` has been called."""

    # ------------------------------------------------------------------
    # Inputs and secrets
    # ------------------------------------------------------------------

    def get_input(self, name: str) -> str:
        return self._environ.get(input_env_var(name), "").strip()

    def set_secret(self, value: str) -> None:
        self._issue("add-mask", value)

    # ------------------------------------------------------------------
    # Environment publication
    # ------------------------------------------------------------------

    def export_variable(self, key: str, value: str) -> None:
        self._environ[key] = value
        env_file = self._environ.get("GITHUB_ENV")
        if env_file:
            self._append_file(env_file, _heredoc(key, value))
        else:
            self._issue("set-env", value, {"name": key})

    def add_path(self, directory: Path) -> None:
        path_file = self._environ.get("GITHUB_PATH")
        if path_file:
            self._append_file(path_file, f"{directory}\n")
        else:
            self._issue("add-path", str(directory))
        current = self._environ.get("PATH", "")
        self._environ["PATH"] = f"{directory}{os.pathsep}{current}" if current else str(directory)

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    def debug(self, message: str) -> None:
        self._issue("debug", message)

    def info(self, message: str) -> None:
        self._console.print(message)

    def warning(self, message: str) -> None:
        self._issue("warning", message)

    def error(self, message: str) -> None:
        self._issue("error", message)

    def set_failed(self, message: str) -> None:
        self.exit_code = 1
        self.error(message)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _issue(self, command: str, message: str, properties: Mapping[str, str] | None = None) -> None:
        self._console.print(format_command(command, message, properties))

    @staticmethod
    def _append_file(path: str, content: str) -> None:
        try:
            with open(path, "a", encoding="utf-8") as handle:
                handle.write(content)
        except OSError as exc:
            raise PlatformError(f"Unable to write to {path}: {exc}") from exc


def _heredoc(key: str, value: str) -> str:
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in key or delimiter in value:
        raise PlatformError(
            f"Unexpected input: name or value contains the delimiter {delimiter}",
        )
    return f"{key}<<{delimiter}\n{value}\n{delimiter}\n"
