"""Infrastructure: Node.js / npm detection and platform guidance.

The CLI is distributed through npm, so both ``node`` and ``npm`` must be
on the PATH before anything can be installed.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No PATH modification.
* No automatic installation of Node.js.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from settlemint_action.exceptions import ToolNotFoundError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ExecutableStatus:
    """Result of looking up an executable on PATH.

    Attributes
    ----------
    name : str
        Executable that was looked up (``node`` or ``npm``).
    found : bool
        Whether the executable was located on PATH.
    path : Path | None
        Absolute path to the executable, or ``None``.
    version_hint : str
        Human-readable status string (e.g. ``"found at …"`` or ``"not found"``).
    install_commands : tuple[str, ...]
        Suggested shell commands for installing Node.js on the current
        platform.  Empty when the executable is already present.
    """

    name: str
    found: bool
    path: Path | None
    version_hint: str
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_executable(name: str) -> ExecutableStatus:
    """Look up *name* on the PATH.

    Returns an :class:`ExecutableStatus` regardless of whether the
    executable is present — the caller decides whether to abort or warn.
    """
    result = shutil.which(name)

    if result is not None:
        resolved = Path(result).resolve()
        return ExecutableStatus(
            name=name,
            found=True,
            path=resolved,
            version_hint=f"found at {resolved}",
            install_commands=(),
        )

    return ExecutableStatus(
        name=name,
        found=False,
        path=None,
        version_hint="not found",
        install_commands=_platform_install_commands(),
    )


def detect_node() -> ExecutableStatus:
    return detect_executable("node")


def detect_npm() -> ExecutableStatus:
    return detect_executable("npm")


def require_npm() -> Path:
    """Locate npm or raise :class:`ToolNotFoundError`."""
    status = detect_npm()
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append("Install Node.js (includes npm) using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise ToolNotFoundError(
            "npm is not installed or not on PATH.",
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.path


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def _platform_install_commands() -> tuple[str, ...]:
    """Return Node.js install commands appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return (
            "winget install OpenJS.NodeJS.LTS",
            "choco install nodejs-lts",
        )
    if system == "linux":
        return (
            "sudo apt install nodejs npm",
            "sudo dnf install nodejs npm",
            "sudo pacman -S nodejs npm",
        )
    if system == "darwin":
        return ("brew install node",)
    return ("Please install Node.js from https://nodejs.org/en/download",)
