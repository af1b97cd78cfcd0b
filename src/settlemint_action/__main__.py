"""Allow ``python -m settlemint_action`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m settlemint_action`` behaves identically to the
``settlemint-action`` console script.
"""

from __future__ import annotations

from settlemint_action.cli.app import cli

if __name__ == "__main__":
    cli()
