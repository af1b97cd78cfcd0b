"""Semantic-version validation for the ``version`` input."""

from __future__ import annotations

import re

from settlemint_action.exceptions import InvalidVersionError

LATEST: str = "latest"

# Semantic Versioning 2.0.0 grammar; the leading "v" is tolerated as npm does.
_SEMVER_PATTERN = re.compile(
    r"^v?(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)"
    r"(?:-((?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


def is_valid_semver(version: str) -> bool:
    return _SEMVER_PATTERN.fullmatch(version) is not None


def is_explicit_version(version: str) -> bool:
    """Return ``True`` when *version* names exactly one release."""
    return version != LATEST and is_valid_semver(version)


def validate_version(version: str) -> None:
    """Accept ``"latest"`` or a semantic version, else raise.

    Raises
    ------
    InvalidVersionError
        The message quotes the rejected *version*.
    """
    if version == LATEST:
        return
    if not is_valid_semver(version):
        raise InvalidVersionError(
            f"Invalid version format: {version}. "
            "Must be a valid semver version or 'latest'",
            hint="Use 'latest' or a version such as 1.2.3.",
        )
