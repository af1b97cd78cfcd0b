"""Infrastructure: key-addressed archive cache.

Cached paths are directories.  Each key maps to one ``<key>.tar.gz``
in the cache root.  Paths are stored by position (``0/``, ``1/``...) so
a restore writes each entry back to the path at the same position,
wherever it lives.

Keys are immutable: saving over an existing key is skipped, the same
way the hosted cache service refuses to reserve a taken key.
"""

from __future__ import annotations

import os
import re
import tarfile
import tempfile
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from settlemint_action.exceptions import CacheOperationError

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class DirectoryCacheStore:
    """Concrete :class:`CacheStore` keeping archives under *root*."""

    def __init__(self, root: Path) -> None:
        self._root = root

    def archive_path(self, key: str) -> Path:
        return self._root / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.tar.gz"

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def restore(self, paths: Sequence[Path], key: str) -> str | None:
        archive = self.archive_path(key)
        if not archive.is_file():
            return None
        try:
            with tarfile.open(archive, "r:gz") as tar:
                for member in tar.getmembers():
                    index, relative = self._split_member(member, len(paths))
                    if relative is None:
                        paths[index].mkdir(parents=True, exist_ok=True)
                        continue
                    member.name = relative
                    tar.extract(member, path=paths[index], **_extract_options())
        except (OSError, tarfile.TarError) as exc:
            raise CacheOperationError(f"Unable to restore {archive}: {exc}") from exc
        return key

    def save(self, paths: Sequence[Path], key: str) -> None:
        existing = [(index, path) for index, path in enumerate(paths) if path.is_dir()]
        if not existing:
            raise CacheOperationError(
                "Path Validation Error: Path(s) specified for caching do not "
                "exist, hence no cache is being saved.",
            )
        archive = self.archive_path(key)
        if archive.exists():
            return
        partial: str | None = None
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            fd, partial = tempfile.mkstemp(dir=self._root, suffix=".partial")
            os.close(fd)
            with tarfile.open(partial, "w:gz") as tar:
                for index, path in existing:
                    tar.add(path, arcname=str(index))
            os.replace(partial, archive)
        except (OSError, tarfile.TarError) as exc:
            if partial is not None:
                Path(partial).unlink(missing_ok=True)
            raise CacheOperationError(f"Unable to save {archive}: {exc}") from exc

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _split_member(member: tarfile.TarInfo, path_count: int) -> tuple[int, str | None]:
        """Map an archive member to (path index, relative name).

        The relative name is ``None`` for the root directory of a path.

        Raises
        ------
        CacheOperationError
            For links, absolute names, ``..`` segments or unknown indexes.
        """
        if not (member.isfile() or member.isdir()):
            raise CacheOperationError(f"Refusing to restore special member {member.name}")
        parts = PurePosixPath(member.name).parts
        if not parts or member.name.startswith("/") or ".." in parts:
            raise CacheOperationError(f"Refusing to restore unsafe member {member.name}")
        head, *rest = parts
        if not head.isdigit() or int(head) >= path_count:
            raise CacheOperationError(f"Archive member {member.name} matches no cache path")
        if not rest:
            if not member.isdir():
                raise CacheOperationError(f"Archive member {member.name} is not a directory")
            return int(head), None
        return int(head), str(PurePosixPath(*rest))


def _extract_options() -> dict[str, str]:
    # The "data" filter exists on interpreters with PEP 706 support.
    if hasattr(tarfile, "data_filter"):
        return {"filter": "data"}
    return {}
