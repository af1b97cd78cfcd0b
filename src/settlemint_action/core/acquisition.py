"""Tool acquisition — locate a cached CLI or install it.

State machine
-------------
``UNRESOLVED``
    Look the (tool, version) pair up in the tool cache.  A hit moves to
    ``CACHE_HIT``; a miss moves to ``INSTALLING``.
``INSTALLING``
    Check npm is available, then ``npm install --prefix <scratch>``
    into a fresh scratch directory and hand it to the tool cache.  A
    missing npm raises :class:`ToolNotFoundError` with no fallback.
    Success moves to ``INSTALLED``; an install failure logs a warning
    and moves to ``GLOBAL_FALLBACK``.
``GLOBAL_FALLBACK``
    One ``npm install -g`` attempt.  The executable is then resolved by
    name through the ambient search path; nothing is registered.  A
    failure here raises :class:`InstallationError`.

``CACHE_HIT`` and ``INSTALLED`` register ``<path>/node_modules/.bin`` on
the executable search path.  At most one primary install and one
fallback run per acquisition.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from pathlib import Path

from settlemint_action.core.config import PACKAGE_NAME, TOOL_NAME
from settlemint_action.core.models import InstallSource, ToolInstallation
from settlemint_action.core.protocols import Platform, ProcessRunner, ToolCache
from settlemint_action.core.semver import is_explicit_version
from settlemint_action.exceptions import (
    CommandExecutionError,
    InstallationError,
    append_version_pin_suggestion,
)

PACKAGE_BIN_SUBPATH: tuple[str, ...] = ("node_modules", ".bin")


class AcquisitionState(enum.Enum):
    UNRESOLVED = "unresolved"
    CACHE_HIT = "cache-hit"
    INSTALLING = "installing"
    INSTALLED = "installed"
    GLOBAL_FALLBACK = "global-fallback"


class ToolAcquisitionManager:
    """Resolve the CLI for one run.

    Parameters
    ----------
    tool_cache:
        Versioned directory cache persisted across runs.
    runner:
        Process runner used for ``npm``.
    platform:
        Receives log lines and search-path registrations.
    make_scratch_dir:
        Factory returning a fresh, empty directory for the isolated
        install.
    npm_command:
        Executable used for installs.
    runner_platform:
        Node.js platform name; ``win32`` selects the ``.cmd`` shim.
    check_npm:
        Called before any install; raises
        :class:`~settlemint_action.exceptions.ToolNotFoundError` when npm
        is missing.  Cache hits never call it.
    """

    def __init__(
        self,
        tool_cache: ToolCache,
        runner: ProcessRunner,
        platform: Platform,
        *,
        make_scratch_dir: Callable[[], Path],
        npm_command: str = "npm",
        runner_platform: str = "linux",
        check_npm: Callable[[], object] | None = None,
    ) -> None:
        self._tool_cache = tool_cache
        self._runner = runner
        self._platform = platform
        self._make_scratch_dir = make_scratch_dir
        self._npm = npm_command
        self._runner_platform = runner_platform
        self._check_npm = check_npm
        self.state: AcquisitionState = AcquisitionState.UNRESOLVED

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def acquire(self, version: str) -> ToolInstallation:
        """Return a usable installation of the CLI at *version*.

        Raises
        ------
        InstallationError
            When both the isolated and the global install fail.
        ToolNotFoundError
            When the cache misses and npm is not available.
        """
        self.state = AcquisitionState.UNRESOLVED

        cached = self._find_cached(version)
        if cached is not None:
            self._transition(AcquisitionState.CACHE_HIT)
            return self._register(cached, version, "cache")

        self._transition(AcquisitionState.INSTALLING)
        if self._check_npm is not None:
            self._check_npm()
        try:
            installed = self._install_isolated(version)
        except (CommandExecutionError, InstallationError) as exc:
            self._platform.warning(
                f"Failed to install {TOOL_NAME} CLI into the tool cache, "
                f"falling back to a global install: {exc}"
            )
            self._transition(AcquisitionState.GLOBAL_FALLBACK)
            return self._install_global(version)

        self._transition(AcquisitionState.INSTALLED)
        return self._register(installed, version, "install")

    def executable_name(self) -> str:
        if self._runner_platform == "win32":
            return f"{TOOL_NAME}.cmd"
        return TOOL_NAME

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _find_cached(self, version: str) -> Path | None:
        # "latest" moves over time; only pinned versions are reusable.
        if not is_explicit_version(version):
            self._platform.debug(f"Skipping tool cache lookup for {version}")
            return None
        return self._tool_cache.find(TOOL_NAME, version)

    def _install_isolated(self, version: str) -> Path:
        scratch = self._make_scratch_dir()
        self._platform.info(f"Installing {PACKAGE_NAME}@{version} into {scratch}")
        self._runner.exec(
            self._npm,
            [
                "install",
                "--prefix",
                str(scratch),
                "--no-audit",
                "--no-fund",
                f"{PACKAGE_NAME}@{version}",
            ],
        )
        return self._tool_cache.cache_dir(scratch, TOOL_NAME, version)

    def _install_global(self, version: str) -> ToolInstallation:
        try:
            self._runner.exec(self._npm, ["install", "-g", f"{PACKAGE_NAME}@{version}"])
        except CommandExecutionError as exc:
            raise InstallationError(
                f"Failed to install {PACKAGE_NAME}@{version}: {exc}",
                hint=append_version_pin_suggestion(
                    "Check the npm registry is reachable from the runner.",
                    version,
                ),
            ) from exc
        return ToolInstallation(
            name=TOOL_NAME,
            version=version,
            source="global",
            executable=self.executable_name(),
        )

    def _register(self, path: Path, version: str, source: InstallSource) -> ToolInstallation:
        bin_dir = path.joinpath(*PACKAGE_BIN_SUBPATH)
        self._platform.add_path(bin_dir)
        return ToolInstallation(
            name=TOOL_NAME,
            version=version,
            source=source,
            executable=str(bin_dir / self.executable_name()),
            path=path,
            bin_dir=bin_dir,
        )

    def _transition(self, state: AcquisitionState) -> None:
        self._platform.debug(f"Tool acquisition: {self.state.value} -> {state.value}")
        self.state = state
