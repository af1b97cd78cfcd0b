"""Domain models for settlemint-action.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and zero
dependencies on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal


# ---------------------------------------------------------------------------
# Environment files
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EnvironmentAssignment:
    """A single ``KEY=value`` pair extracted from dotenv-style text."""

    key: str
    """Sanitized variable name matching ``[A-Za-z_][A-Za-z0-9_]*``."""

    value: str
    """Sanitized value with at most one layer of quotes removed."""


# ---------------------------------------------------------------------------
# Tool installation
# ---------------------------------------------------------------------------

InstallSource = Literal["cache", "install", "global"]


@dataclass(frozen=True, slots=True)
class ToolInstallation:
    """Where the CLI lives for the current run.

    A ``global`` installation has no managed path: the executable is
    resolved through the ambient search path by its bare name.
    """

    name: str
    version: str
    source: InstallSource
    executable: str
    """Absolute executable path, or the bare tool name for ``global``."""

    path: Path | None = None
    """Tool-cache directory holding the installation."""

    bin_dir: Path | None = None
    """Directory registered on the executable search path."""

    @property
    def managed(self) -> bool:
        return self.source != "global"


# ---------------------------------------------------------------------------
# Runner environment
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RunnerEnvironment:
    """Facts about the machine the step runs on.

    Platform and architecture use Node.js naming (``linux``/``darwin``/
    ``win32``, ``x64``/``arm64``) so cache keys line up with the npm
    ecosystem the CLI is installed from.
    """

    home: Path
    temp_dir: Path
    platform: str
    arch: str

    @property
    def npm_cache(self) -> Path:
        """Location of npm's download cache."""
        return self.home / ".npm"
