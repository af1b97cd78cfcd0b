"""``settlemint-action doctor`` — runner diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runner can install and run the SettleMint CLI.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from rich.table import Table

from settlemint_action.cli import exit_codes
from settlemint_action.cli.console import console
from settlemint_action.infra.npm_detector import ExecutableStatus, detect_node, detect_npm
from settlemint_action.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _executable_check(status_obj: ExecutableStatus, *, required: bool) -> tuple[str, str, str]:
    """Return (label, value, status) for a detected executable."""
    if status_obj.found:
        path_str = str(status_obj.path) if status_obj.path else "found"
        return status_obj.name, path_str, "[green]OK[/green]"
    if required:
        return status_obj.name, "not found", "[red]FAIL[/red]"
    return status_obj.name, "not found", "[yellow]WARN[/yellow]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _package_version_check() -> tuple[str, str, str]:
    return "settlemint-action", __version__, "[green]OK[/green]"


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    npm_status = detect_npm()
    checks = [
        _package_version_check(),
        _python_version_check(),
        _executable_check(detect_node(), required=False),
        _executable_check(npm_status, required=True),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    table = Table(
        title="settlemint-action doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    # npm ships with Node.js, so the guidance targets Node.js.
    if not npm_status.found and npm_status.install_commands:
        console.print("[yellow]npm is not installed.[/yellow]")
        console.print("Install Node.js using one of the following commands:\n")
        for cmd in npm_status.install_commands:
            console.print(f"  [bold]{cmd}[/bold]")
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
