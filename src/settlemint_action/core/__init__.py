"""Core / service layer — pure logic and run orchestration.

Rules
-----
* No ``print()`` calls.
* No direct filesystem, network or process I/O: every external effect
  goes through a protocol from :mod:`settlemint_action.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from settlemint_action.core.acquisition import AcquisitionState, ToolAcquisitionManager
from settlemint_action.core.command_parser import parse_command
from settlemint_action.core.config import ActionInputs, read_inputs
from settlemint_action.core.env_file import parse_env_content, process_env_content
from settlemint_action.core.models import EnvironmentAssignment, RunnerEnvironment, ToolInstallation
from settlemint_action.core.orchestrator import ActionOrchestrator
from settlemint_action.core.protocols import CacheStore, Platform, ProcessRunner, ToolCache
from settlemint_action.core.sanitizer import sanitize
from settlemint_action.core.semver import validate_version
from settlemint_action.core.tokens import ApplicationToken, PersonalAccessToken, classify_token

__all__: list[str] = [
    "AcquisitionState",
    "ActionInputs",
    "ActionOrchestrator",
    "ApplicationToken",
    "CacheStore",
    "EnvironmentAssignment",
    "PersonalAccessToken",
    "Platform",
    "ProcessRunner",
    "RunnerEnvironment",
    "ToolAcquisitionManager",
    "ToolCache",
    "ToolInstallation",
    "classify_token",
    "parse_command",
    "parse_env_content",
    "process_env_content",
    "read_inputs",
    "sanitize",
    "validate_version",
]
