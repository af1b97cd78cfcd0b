"""Custom exception hierarchy for settlemint-action.

All exceptions that cross layer boundaries must inherit from
:class:`SettleMintActionError`.  Raw third-party and OS exceptions
(``OSError``, ``tarfile.TarError``, ``subprocess`` failures) must NEVER
propagate beyond the infrastructure layer — they are caught there and
re-raised as a typed subclass defined here.

Hierarchy
---------
SettleMintActionError
├── InvalidVersionError
├── MissingAccessTokenError
├── CommandParseError
│   ├── DangerousInputError
│   └── UnclosedQuoteError
├── CommandExecutionError
├── CacheOperationError
├── InstallationError
├── EnvFileParseError
├── PlatformError
└── ToolNotFoundError
"""

from __future__ import annotations

from collections.abc import Sequence


class SettleMintActionError(Exception):
    """Base exception for all settlemint-action errors.

    Every failure the run can report must map to a subclass of this
    exception so that the orchestrator can hand a clean message to the
    platform's failure report.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Input validation ------------------------------------------------------

class InvalidVersionError(SettleMintActionError):
    """Raised when the ``version`` input is neither ``latest`` nor semver."""


class MissingAccessTokenError(SettleMintActionError):
    """Raised when a hosted instance is targeted without an access token."""


# --- Command parsing -------------------------------------------------------

class CommandParseError(SettleMintActionError):
    """Base class for failures turning a command string into arguments."""


class DangerousInputError(CommandParseError):
    """Raised when a command string contains shell control constructs."""


class UnclosedQuoteError(CommandParseError):
    """Raised when a command string ends inside a quoted section."""


# --- Process execution -----------------------------------------------------

class CommandExecutionError(SettleMintActionError):
    """Raised when a child process cannot be spawned or exits non-zero."""

    def __init__(
        self,
        message: str,
        *,
        command: str | None = None,
        args: Sequence[str] = (),
        exit_code: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.command: str | None = command
        self.arguments: tuple[str, ...] = tuple(args)
        self.exit_code: int | None = exit_code


# --- Tool acquisition / caching --------------------------------------------

class CacheOperationError(SettleMintActionError):
    """Raised when restoring or saving the package cache fails."""


class InstallationError(SettleMintActionError):
    """Raised when the CLI cannot be installed, even via the fallback."""


class ToolNotFoundError(SettleMintActionError):
    """Raised when a required executable (npm) is not on the PATH."""


# --- Environment files -----------------------------------------------------

class EnvFileParseError(SettleMintActionError):
    """Raised when a dotenv blob cannot be published to the environment."""


# --- Platform --------------------------------------------------------------

class PlatformError(SettleMintActionError):
    """Raised when the CI platform cannot record an output or variable."""


def append_version_pin_suggestion(hint: str, version: str) -> str:
    """Append version-pinning guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.  Nothing is added for pinned versions.
    """
    marker = "Consider pinning the CLI version:"
    if version != "latest" or marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    version: <major.minor.patch>",
        )
    )
