"""Infrastructure: versioned tool directory cache.

Layout matches the runner's hosted tool cache so installations survive
between runs on self-hosted machines::

    <root>/<name>/<version>/<arch>/
    <root>/<name>/<version>/<arch>.complete

Only directories with their ``.complete`` marker are reported by
:meth:`LocalToolCache.find`; a half-copied directory is never reused.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from settlemint_action.exceptions import InstallationError


class LocalToolCache:
    """Concrete :class:`ToolCache` rooted at *root* for one architecture."""

    def __init__(self, root: Path, arch: str) -> None:
        self._root = root
        self._arch = arch

    @property
    def root(self) -> Path:
        return self._root

    def _tool_path(self, name: str, version: str) -> Path:
        return self._root / name / version.removeprefix("v") / self._arch

    @staticmethod
    def _marker(tool_path: Path) -> Path:
        return tool_path.with_name(f"{tool_path.name}.complete")

    def find(self, name: str, version: str) -> Path | None:
        tool_path = self._tool_path(name, version)
        if tool_path.is_dir() and self._marker(tool_path).is_file():
            return tool_path
        return None

    def cache_dir(self, source: Path, name: str, version: str) -> Path:
        """Copy *source* into the cache, replacing any previous copy.

        Raises
        ------
        InstallationError
            When the copy or the marker write fails.
        """
        tool_path = self._tool_path(name, version)
        marker = self._marker(tool_path)
        try:
            marker.unlink(missing_ok=True)
            if tool_path.exists():
                shutil.rmtree(tool_path)
            tool_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copytree(source, tool_path, symlinks=True)
            marker.write_text("", encoding="utf-8")
        except OSError as exc:
            raise InstallationError(
                f"Unable to cache {name}@{version} in {tool_path}: {exc}",
            ) from exc
        return tool_path
