"""Infrastructure: facts about the runner machine and its scratch space.

Platform and architecture names follow Node.js (``process.platform`` /
``process.arch``) so cache keys match the npm world the CLI lives in.
"""

from __future__ import annotations

import os
import platform
import sys
import tempfile
from collections.abc import Callable, Mapping
from pathlib import Path

from settlemint_action.core.models import RunnerEnvironment
from settlemint_action.exceptions import InstallationError

_ARCH_ALIASES: dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "ppc64le": "ppc64",
    "s390x": "s390x",
}


def node_platform() -> str:
    if sys.platform.startswith("win"):
        return "win32"
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform.startswith("linux"):
        return "linux"
    return platform.system().lower()


def node_arch() -> str:
    machine = platform.machine().lower()
    return _ARCH_ALIASES.get(machine, machine)


def detect_runner_environment(environ: Mapping[str, str] | None = None) -> RunnerEnvironment:
    """Describe the current runner.

    ``RUNNER_TEMP`` is preferred over the system temp directory so that
    scratch files are cleaned up with the job.
    """
    env = os.environ if environ is None else environ
    temp_dir = env.get("RUNNER_TEMP") or tempfile.gettempdir()
    return RunnerEnvironment(
        home=Path.home(),
        temp_dir=Path(temp_dir),
        platform=node_platform(),
        arch=node_arch(),
    )


def tool_cache_root(environment: RunnerEnvironment, environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    configured = env.get("RUNNER_TOOL_CACHE")
    if configured:
        return Path(configured)
    return environment.temp_dir / "tool-cache"


def cache_store_root(environment: RunnerEnvironment, environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    configured = env.get("SETTLEMINT_ACTION_CACHE_DIR")
    if configured:
        return Path(configured)
    return environment.temp_dir / "settlemint-action-cache"


def scratch_dir_factory(temp_dir: Path) -> Callable[[], Path]:
    """Return a callable creating a fresh install directory under *temp_dir*."""

    def make_scratch_dir() -> Path:
        try:
            temp_dir.mkdir(parents=True, exist_ok=True)
            return Path(tempfile.mkdtemp(prefix="settlemint-cli-", dir=temp_dir))
        except OSError as exc:
            raise InstallationError(
                f"Unable to create a scratch directory in {temp_dir}: {exc}",
            ) from exc

    return make_scratch_dir
