"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol


class Platform(Protocol):
    """Contract for the CI platform hosting the run.

    Covers input lookup, secret masking, environment publication,
    search-path registration, log emission and the terminal failure
    report.  Any object with these methods satisfies the protocol
    structurally.
    """

    def get_input(self, name: str) -> str:
        """Return the input *name*, or ``""`` when it was not supplied."""
        ...  # pragma: no cover

    def set_secret(self, value: str) -> None:
        """Register *value* so the platform redacts it from logs."""
        ...  # pragma: no cover

    def export_variable(self, key: str, value: str) -> None:
        """Publish an environment variable to this and later steps."""
        ...  # pragma: no cover

    def add_path(self, directory: Path) -> None:
        """Prepend *directory* to the executable search path."""
        ...  # pragma: no cover

    def debug(self, message: str) -> None: ...  # pragma: no cover

    def info(self, message: str) -> None: ...  # pragma: no cover

    def warning(self, message: str) -> None: ...  # pragma: no cover

    def error(self, message: str) -> None: ...  # pragma: no cover

    def set_failed(self, message: str) -> None:
        """Report the run as failed with *message*.

        Called at most once per run.
        """
        ...  # pragma: no cover


class CacheStore(Protocol):
    """Contract for the key-addressed blob cache persisted across runs."""

    def restore(self, paths: Sequence[Path], key: str) -> str | None:
        """Restore *paths* saved under *key*.

        Returns the matched key on a hit, ``None`` on a miss.

        Raises
        ------
        CacheOperationError
            When the cache exists but cannot be restored.
        """
        ...  # pragma: no cover

    def save(self, paths: Sequence[Path], key: str) -> None:
        """Persist *paths* under *key*.

        Raises
        ------
        CacheOperationError
            When the archive cannot be written.
        """
        ...  # pragma: no cover


class ToolCache(Protocol):
    """Contract for the versioned tool directory cache."""

    def find(self, name: str, version: str) -> Path | None:
        """Return the cached directory for (*name*, *version*) or ``None``."""
        ...  # pragma: no cover

    def cache_dir(self, source: Path, name: str, version: str) -> Path:
        """Copy *source* into the cache and return its canonical path."""
        ...  # pragma: no cover


class ProcessRunner(Protocol):
    """Contract for spawning child processes without a shell."""

    def exec(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        env: Mapping[str, str] | None = None,
    ) -> int:
        """Run *command* with *args* and return its exit code.

        *env* is layered on top of the current process environment.

        Raises
        ------
        CommandExecutionError
            When the process cannot be spawned or exits non-zero.
        """
        ...  # pragma: no cover
