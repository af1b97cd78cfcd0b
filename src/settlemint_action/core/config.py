"""Action inputs and the environment they materialise into.

Inputs are read once per run into an immutable :class:`ActionInputs`
snapshot.  Everything downstream works on the snapshot, never on the
platform's input lookup.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from settlemint_action.core.protocols import Platform
from settlemint_action.core.sanitizer import sanitize
from settlemint_action.core.semver import LATEST
from settlemint_action.core.tokens import AccessToken, classify_token

TOOL_NAME: str = "settlemint"
PACKAGE_NAME: str = "@settlemint/sdk-cli"
ENV_PREFIX: str = "SETTLEMINT_"

STANDALONE_INSTANCE: str = "standalone"
LOCAL_INSTANCE: str = "local"

TOPOLOGY_INPUTS: tuple[str, ...] = (
    "application",
    "blockchain-network",
    "blockchain-node",
    "load-balancer",
    "hasura",
    "thegraph",
    "portal",
    "hd-private-key",
    "minio",
    "ipfs",
    "custom-deployment",
    "blockscout",
)
"""Deployment-topology inputs forwarded verbatim as ``SETTLEMINT_*``."""

ENV_INPUTS: tuple[str, ...] = ("instance", "workspace", *TOPOLOGY_INPUTS)
"""Every non-secret input materialised into the child environment."""


def env_var_name(input_name: str) -> str:
    """``blockchain-node`` → ``SETTLEMINT_BLOCKCHAIN_NODE``."""
    return ENV_PREFIX + input_name.replace("-", "_").upper()


def parse_flag(raw: str) -> bool | None:
    """Interpret a boolean input; ``None`` when it was not supplied."""
    normalized = raw.strip().lower()
    if not normalized:
        return None
    return normalized == "true"


def cache_key(version: str, platform: str, arch: str) -> str:
    return f"{TOOL_NAME}-cli-{version}-{platform}-{arch}"


@dataclass(frozen=True, slots=True)
class ActionInputs:
    """Snapshot of every recognised input for one run."""

    command: str = ""
    version: str = LATEST
    access_token: str = ""
    auto_connect: bool | None = None
    auto_login: bool | None = None
    """Read for compatibility; login is gated by the token kind alone."""

    instance: str = ""
    dot_env_file: str = ""
    dot_env_local_file: str = ""
    settings: dict[str, str] = field(default_factory=dict)
    """Non-empty values of :data:`ENV_INPUTS`, keyed by input name."""

    @property
    def token(self) -> AccessToken | None:
        return classify_token(self.access_token)

    @property
    def is_standalone(self) -> bool:
        return self.instance == STANDALONE_INSTANCE

    @property
    def requires_access_token(self) -> bool:
        return self.instance not in (STANDALONE_INSTANCE, LOCAL_INSTANCE)

    @property
    def should_connect(self) -> bool:
        """Explicit ``auto-connect`` wins; otherwise implied by a PAT."""
        if self.is_standalone:
            return False
        if self.auto_connect is not None:
            return self.auto_connect
        token = self.token
        return token is not None and token.requires_login


def read_inputs(platform: Platform) -> ActionInputs:
    """Build an :class:`ActionInputs` snapshot from the platform."""
    settings = {
        name: value
        for name in ENV_INPUTS
        if (value := platform.get_input(name))
    }
    return ActionInputs(
        command=platform.get_input("command"),
        version=platform.get_input("version") or LATEST,
        access_token=(
            platform.get_input("access-token")
            or platform.get_input("personal-access-token")
        ),
        auto_connect=parse_flag(platform.get_input("auto-connect")),
        auto_login=parse_flag(platform.get_input("auto-login")),
        instance=settings.get("instance", ""),
        dot_env_file=platform.get_input("dotEnvFile"),
        dot_env_local_file=platform.get_input("dotEnvLocalFile"),
        settings=settings,
    )


def build_child_environment(inputs: ActionInputs) -> dict[str, str]:
    """Return the ``SETTLEMINT_*`` variables for *inputs*.

    Values are sanitized.  The access token is routed by its variant.
    """
    env = {
        env_var_name(name): sanitize(value)
        for name, value in inputs.settings.items()
    }
    token = inputs.token
    if token is not None:
        env[token.env_var] = token.value
    return env
