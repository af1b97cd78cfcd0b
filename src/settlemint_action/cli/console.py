"""Rich console for human-facing CLI output.

Workflow commands for the CI runner go through the platform adapter on
stdout; everything meant for a person reading the terminal goes here,
on stderr.
"""

from __future__ import annotations

from rich.console import Console


def get_rich_console() -> Console:
    """Create a Rich console instance targeting stderr."""
    return Console(stderr=True)


console = get_rich_console()
