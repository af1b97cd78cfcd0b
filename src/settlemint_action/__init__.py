"""settlemint-action — install, cache and run the SettleMint CLI in CI.

Built around a shell-free command parser and a layered
core / infra / cli architecture.
"""

from settlemint_action.version import __version__

__all__: list[str] = ["__version__"]
