"""Dotenv-style text ingestion.

The format is permissive, not validating: lines that do not look like
``KEY=value`` are skipped silently.

Known limitation
----------------
Trailing comments are cut at the first ``#`` without regard to
quoting, so ``X="a#b"`` yields the value ``"a``.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from settlemint_action.core.models import EnvironmentAssignment
from settlemint_action.core.sanitizer import sanitize
from settlemint_action.exceptions import EnvFileParseError, PlatformError

ENV_VAR_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*=")
_QUOTE_PATTERN = re.compile(r"""^(["'])(.*)\1$""")


def parse_env_line(line: str) -> EnvironmentAssignment | None:
    """Parse one line, returning ``None`` for blanks, comments and junk."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    without_comment = stripped.split("#", 1)[0].strip()
    if not ENV_VAR_PATTERN.match(without_comment):
        return None

    key, value = without_comment.split("=", 1)
    # One layer only: greedy group keeps any inner quotes.
    value = _QUOTE_PATTERN.sub(r"\2", value)

    return EnvironmentAssignment(
        key=sanitize(key.strip()),
        value=sanitize(value.strip()),
    )


def parse_env_content(text: str) -> list[EnvironmentAssignment]:
    """Parse *text* into assignments, preserving file order."""
    assignments: list[EnvironmentAssignment] = []
    for line in text.split("\n"):
        assignment = parse_env_line(line)
        if assignment is not None:
            assignments.append(assignment)
    return assignments


def process_env_content(
    text: str,
    export: Callable[[str, str], None],
) -> list[EnvironmentAssignment]:
    """Parse *text* and publish every assignment through *export*.

    Returns the published assignments in order.

    Raises
    ------
    EnvFileParseError
        When *export* fails for any assignment.  Assignments before the
        failing one stay published.
    """
    assignments = parse_env_content(text)
    for assignment in assignments:
        try:
            export(assignment.key, assignment.value)
        except PlatformError as exc:
            raise EnvFileParseError(
                f"Could not export {assignment.key}: {exc}",
            ) from exc
    return assignments
