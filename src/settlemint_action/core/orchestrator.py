"""Run orchestration — the sequence executed for every CI step.

Order
-----
1. Read and validate inputs (version format, access-token policy).
2. Mask the access token.
3. Restore the npm cache (non-fatal).
4. Acquire the CLI.
5. Ingest dotenv blobs (non-fatal per blob).
6. Materialise ``SETTLEMINT_*`` variables into the child environment.
7. ``login -a`` / ``connect -a`` / the user command.
8. Save the npm cache (non-fatal).

:meth:`ActionOrchestrator.run` is the run-level error boundary: any
failure becomes exactly one :meth:`Platform.set_failed` call and the
method returns ``False`` instead of raising.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from settlemint_action.core.acquisition import ToolAcquisitionManager
from settlemint_action.core.command_parser import parse_command
from settlemint_action.core.config import (
    ActionInputs,
    build_child_environment,
    cache_key,
    read_inputs,
)
from settlemint_action.core.env_file import process_env_content
from settlemint_action.core.models import RunnerEnvironment, ToolInstallation
from settlemint_action.core.protocols import CacheStore, Platform, ProcessRunner, ToolCache
from settlemint_action.core.semver import validate_version
from settlemint_action.exceptions import (
    CacheOperationError,
    CommandExecutionError,
    CommandParseError,
    EnvFileParseError,
    MissingAccessTokenError,
)

UNKNOWN_ERROR_MESSAGE: str = "An unknown error occurred"


class ActionOrchestrator:
    """Drive one run against injected collaborators.

    Parameters
    ----------
    platform:
        Input lookup, masking, logging and failure report.
    tool_cache:
        Versioned CLI installations.
    cache_store:
        Blob cache for npm's download cache.
    runner:
        Child-process primitive; receives the explicit environment map.
    environment:
        Home, temp dir, platform and architecture of the runner.
    make_scratch_dir:
        Scratch directory factory for isolated installs.
    npm_command:
        npm executable used by the acquisition step.
    check_npm:
        npm availability check run before any install.
    """

    def __init__(
        self,
        platform: Platform,
        tool_cache: ToolCache,
        cache_store: CacheStore,
        runner: ProcessRunner,
        environment: RunnerEnvironment,
        *,
        make_scratch_dir: Callable[[], Path],
        npm_command: str = "npm",
        check_npm: Callable[[], object] | None = None,
    ) -> None:
        self._platform = platform
        self._tool_cache = tool_cache
        self._cache_store = cache_store
        self._runner = runner
        self._environment = environment
        self._make_scratch_dir = make_scratch_dir
        self._npm = npm_command
        self._check_npm = check_npm

    # ------------------------------------------------------------------
    # Error boundary
    # ------------------------------------------------------------------

    def run(self) -> bool:
        """Execute the full sequence; ``True`` when nothing failed."""
        try:
            self._run()
        except Exception as exc:  # noqa: BLE001
            hint = getattr(exc, "hint", None)
            if hint:
                self._platform.info(f"Hint: {hint}")
            self._platform.set_failed(str(exc) or UNKNOWN_ERROR_MESSAGE)
            return False
        return True

    # ------------------------------------------------------------------
    # Sequence
    # ------------------------------------------------------------------

    def _run(self) -> None:
        inputs = read_inputs(self._platform)
        validate_version(inputs.version)

        if inputs.requires_access_token and not inputs.access_token:
            raise MissingAccessTokenError(
                "access-token is required when not in standalone or local mode",
            )
        self._mask_token(inputs)

        key = cache_key(inputs.version, self._environment.platform, self._environment.arch)
        cache_paths = [self._environment.npm_cache]
        self._restore_cache(cache_paths, key)

        self._platform.debug("Using SettleMint CLI...")
        installation = ToolAcquisitionManager(
            self._tool_cache,
            self._runner,
            self._platform,
            make_scratch_dir=self._make_scratch_dir,
            npm_command=self._npm,
            runner_platform=self._environment.platform,
            check_npm=self._check_npm,
        ).acquire(inputs.version)

        child_env: dict[str, str] = {"CI": "true"}
        child_env.update(self._ingest_env_files(inputs))
        child_env.update(build_child_environment(inputs))

        token = inputs.token
        if token is not None and token.requires_login and not inputs.is_standalone:
            self._invoke(installation, ["login", "-a"], child_env)

        if inputs.should_connect:
            self._invoke(installation, ["connect", "-a"], child_env)

        if inputs.command:
            self._run_user_command(installation, inputs.command, child_env)

        self._save_cache(cache_paths, key)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _mask_token(self, inputs: ActionInputs) -> None:
        if not inputs.access_token:
            return
        self._platform.set_secret(inputs.access_token)
        token = inputs.token
        if token is not None and token.value != inputs.access_token:
            self._platform.set_secret(token.value)

    def _restore_cache(self, paths: Sequence[Path], key: str) -> None:
        try:
            matched = self._cache_store.restore(paths, key)
        except CacheOperationError as exc:
            self._platform.warning(f"Cache restore failed, proceeding with download: {exc}")
            return
        if matched is None:
            self._platform.debug(f"No cache found for key {key}")
        else:
            self._platform.debug(f"Restored npm cache from key {matched}")

    def _save_cache(self, paths: Sequence[Path], key: str) -> None:
        self._platform.debug(f"Caching npm packages from: {paths[0]}")
        try:
            self._cache_store.save(paths, key)
        except CacheOperationError as exc:
            self._platform.warning(f"Cache save failed: {exc}")

    def _ingest_env_files(self, inputs: ActionInputs) -> dict[str, str]:
        published: dict[str, str] = {}
        blobs = (
            ("dotEnvFile", inputs.dot_env_file),
            ("dotEnvLocalFile", inputs.dot_env_local_file),
        )
        for name, text in blobs:
            if not text:
                continue
            try:
                assignments = process_env_content(text, self._platform.export_variable)
            except EnvFileParseError as exc:
                self._platform.warning(f"Failed to process {name}: {exc}")
                continue
            published.update((a.key, a.value) for a in assignments)
        return published

    def _invoke(
        self,
        installation: ToolInstallation,
        args: list[str],
        env: dict[str, str],
    ) -> None:
        origin = "tool cache" if installation.managed else "global install"
        self._platform.debug(f"Running {installation.name} {' '.join(args)} from the {origin}")
        self._runner.exec(installation.executable, args, env=env)

    def _run_user_command(
        self,
        installation: ToolInstallation,
        command: str,
        env: dict[str, str],
    ) -> None:
        try:
            args = parse_command(command)
            self._invoke(installation, args, env)
        except (CommandParseError, CommandExecutionError) as exc:
            raise CommandExecutionError(
                f"Failed to execute command: {exc}",
                command=installation.executable,
                exit_code=getattr(exc, "exit_code", None),
                hint=exc.hint,
            ) from exc
