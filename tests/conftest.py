"""Shared pytest fixtures and fakes for the settlemint-action test suite.

Guidelines
----------
* No internet access and no real npm in any test.
* Core tests run against the in-memory fakes below.
* Infra tests confine filesystem effects to ``tmp_path``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

import pytest

from settlemint_action.core.models import RunnerEnvironment
from settlemint_action.core.orchestrator import ActionOrchestrator
from settlemint_action.exceptions import CommandExecutionError


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakePlatform:
    """In-memory :class:`Platform` recording every interaction."""

    def __init__(self, inputs: Mapping[str, str] | None = None) -> None:
        self.inputs: dict[str, str] = dict(inputs or {})
        self.secrets: list[str] = []
        self.exported: list[tuple[str, str]] = []
        self.paths: list[Path] = []
        self.logs: list[tuple[str, str]] = []
        self.failures: list[str] = []
        self.export_error: Callable[[str], Exception | None] = lambda _key: None

    def get_input(self, name: str) -> str:
        return self.inputs.get(name, "")

    def set_secret(self, value: str) -> None:
        self.secrets.append(value)

    def export_variable(self, key: str, value: str) -> None:
        error = self.export_error(key)
        if error is not None:
            raise error
        self.exported.append((key, value))

    def add_path(self, directory: Path) -> None:
        self.paths.append(directory)

    def debug(self, message: str) -> None:
        self.logs.append(("debug", message))

    def info(self, message: str) -> None:
        self.logs.append(("info", message))

    def warning(self, message: str) -> None:
        self.logs.append(("warning", message))

    def error(self, message: str) -> None:
        self.logs.append(("error", message))

    def set_failed(self, message: str) -> None:
        self.failures.append(message)

    def messages(self, level: str) -> list[str]:
        return [message for lvl, message in self.logs if lvl == level]


class FakeRunner:
    """Records spawned commands; fails those matched by ``fail_when``."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str], dict[str, str] | None]] = []
        self.fail_when: Callable[[str, list[str]], BaseException | None] = (
            lambda _cmd, _args: None
        )

    def exec(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        env: Mapping[str, str] | None = None,
    ) -> int:
        arg_list = list(args)
        self.calls.append((command, arg_list, dict(env) if env is not None else None))
        error = self.fail_when(command, arg_list)
        if error is not None:
            raise error
        return 0

    def arg_lists(self) -> list[list[str]]:
        return [args for _cmd, args, _env in self.calls]

    def npm_calls(self) -> list[list[str]]:
        return [args for cmd, args, _env in self.calls if cmd == "npm"]


class FakeToolCache:
    def __init__(self, root: Path) -> None:
        self.root = root
        self.entries: dict[tuple[str, str], Path] = {}
        self.find_calls: list[tuple[str, str]] = []
        self.cached_sources: list[Path] = []
        self.cache_dir_error: Exception | None = None

    def find(self, name: str, version: str) -> Path | None:
        self.find_calls.append((name, version))
        return self.entries.get((name, version))

    def cache_dir(self, source: Path, name: str, version: str) -> Path:
        if self.cache_dir_error is not None:
            raise self.cache_dir_error
        self.cached_sources.append(source)
        path = self.root / name / version / "x64"
        self.entries[(name, version)] = path
        return path


class FakeCacheStore:
    def __init__(self) -> None:
        self.restored: list[tuple[list[Path], str]] = []
        self.saved: list[tuple[list[Path], str]] = []
        self.hit: bool = False
        self.restore_error: Exception | None = None
        self.save_error: Exception | None = None

    def restore(self, paths: Sequence[Path], key: str) -> str | None:
        self.restored.append((list(paths), key))
        if self.restore_error is not None:
            raise self.restore_error
        return key if self.hit else None

    def save(self, paths: Sequence[Path], key: str) -> None:
        self.saved.append((list(paths), key))
        if self.save_error is not None:
            raise self.save_error


def command_error(command: str, code: int = 1) -> CommandExecutionError:
    return CommandExecutionError(
        f"The process '{command}' failed with exit code {code}",
        command=command,
        exit_code=code,
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture()
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def tool_cache(tmp_path: Path) -> FakeToolCache:
    return FakeToolCache(tmp_path / "tool-cache")


@pytest.fixture()
def cache_store() -> FakeCacheStore:
    return FakeCacheStore()


@pytest.fixture()
def environment(tmp_path: Path) -> RunnerEnvironment:
    return RunnerEnvironment(
        home=tmp_path / "home",
        temp_dir=tmp_path / "tmp",
        platform="linux",
        arch="x64",
    )


@pytest.fixture()
def scratch_dirs() -> list[Path]:
    """Every scratch directory handed out, in order."""
    return []


@pytest.fixture()
def make_scratch_dir(tmp_path: Path, scratch_dirs: list[Path]) -> Callable[[], Path]:
    def factory() -> Path:
        path = tmp_path / "scratch" / str(len(scratch_dirs))
        path.mkdir(parents=True)
        scratch_dirs.append(path)
        return path

    return factory


@pytest.fixture()
def make_orchestrator(
    runner: FakeRunner,
    tool_cache: FakeToolCache,
    cache_store: FakeCacheStore,
    environment: RunnerEnvironment,
    make_scratch_dir: Callable[[], Path],
) -> Callable[..., Any]:
    """Build an orchestrator around a :class:`FakePlatform` with *inputs*.

    Extra keyword *options* are forwarded to :class:`ActionOrchestrator`.
    """

    def factory(
        inputs: Mapping[str, str], **options: Any
    ) -> tuple[ActionOrchestrator, FakePlatform]:
        fake_platform = FakePlatform(inputs)
        orchestrator = ActionOrchestrator(
            fake_platform,
            tool_cache,
            cache_store,
            runner,
            environment,
            make_scratch_dir=make_scratch_dir,
            **options,
        )
        return orchestrator, fake_platform

    return factory
