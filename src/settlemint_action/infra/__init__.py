"""Infrastructure layer — external system integration.

This layer wraps all interaction with the CI runner, the filesystem,
npm and child processes.  Every raw ``OSError`` / ``tarfile`` /
``subprocess`` exception must be caught here and re-raised as a
:class:`~settlemint_action.exceptions.SettleMintActionError` subclass.

Rules
-----
* No imports from ``cli``.
* Output only through the platform adapter's workflow commands.
* Must expose clean, typed interfaces consumed by the core layer.
"""

from settlemint_action.infra.cache_store import DirectoryCacheStore
from settlemint_action.infra.github_actions import GitHubActionsPlatform
from settlemint_action.infra.npm_detector import ExecutableStatus, detect_node, detect_npm, require_npm
from settlemint_action.infra.process import SubprocessRunner
from settlemint_action.infra.runner_environment import (
    cache_store_root,
    detect_runner_environment,
    scratch_dir_factory,
    tool_cache_root,
)
from settlemint_action.infra.tool_cache import LocalToolCache

__all__: list[str] = [
    "DirectoryCacheStore",
    "ExecutableStatus",
    "GitHubActionsPlatform",
    "LocalToolCache",
    "SubprocessRunner",
    "cache_store_root",
    "detect_node",
    "detect_npm",
    "detect_runner_environment",
    "require_npm",
    "scratch_dir_factory",
    "tool_cache_root",
]
