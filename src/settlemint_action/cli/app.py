"""CLI application entry point and command routing for settlemint-action.

This module is the **process-level error boundary**.  The orchestrator
already turns every run failure into a single platform failure report;
what is left here are wiring errors, ``KeyboardInterrupt`` and anything
unexpected, rendered via Rich with well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core
  orchestrator and the infrastructure adapters.
* ``print()`` is forbidden; the Rich console is used exclusively.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import os
import sys

from settlemint_action.cli import exit_codes
from settlemint_action.cli.console import console
from settlemint_action.exceptions import SettleMintActionError
from settlemint_action.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``settlemint-action``         — run the CI step (inputs from ``INPUT_*``)
    * ``settlemint-action run``     — same as above
    * ``settlemint-action doctor``  — runner diagnostics
    * ``settlemint-action --version``
    """
    parser = argparse.ArgumentParser(
        prog="settlemint-action",
        description="Install, cache and run the SettleMint CLI in a CI step.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default="run",
        choices=("run", "doctor"),
        help="'run' (default) executes the step; 'doctor' runs diagnostics.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_run() -> int:
    """Wire the GitHub Actions adapters into the orchestrator and run it."""
    from settlemint_action.core.orchestrator import ActionOrchestrator
    from settlemint_action.infra.cache_store import DirectoryCacheStore
    from settlemint_action.infra.github_actions import GitHubActionsPlatform
    from settlemint_action.infra.npm_detector import require_npm
    from settlemint_action.infra.process import SubprocessRunner
    from settlemint_action.infra.runner_environment import (
        cache_store_root,
        detect_runner_environment,
        scratch_dir_factory,
        tool_cache_root,
    )
    from settlemint_action.infra.tool_cache import LocalToolCache

    os.environ["CI"] = "true"

    environment = detect_runner_environment()
    platform = GitHubActionsPlatform()
    orchestrator = ActionOrchestrator(
        platform,
        LocalToolCache(tool_cache_root(environment), environment.arch),
        DirectoryCacheStore(cache_store_root(environment)),
        SubprocessRunner(),
        environment,
        make_scratch_dir=scratch_dir_factory(environment.temp_dir),
        check_npm=require_npm,
    )
    succeeded = orchestrator.run()
    if succeeded and platform.exit_code == exit_codes.SUCCESS:
        return exit_codes.SUCCESS
    return exit_codes.GENERAL_ERROR


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from settlemint_action.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the settlemint-action CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.target == "doctor":
        return _handle_doctor()

    return _handle_run()


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except SettleMintActionError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
