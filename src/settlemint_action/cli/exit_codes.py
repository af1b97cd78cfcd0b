"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — the run completed and no failure was reported."""

GENERAL_ERROR: int = 1
"""The run reported a failure, or a known SettleMintActionError was caught."""

KEYBOARD_INTERRUPT: int = 130
"""Run cancelled with SIGINT.  Follows POSIX convention (128 + SIGINT=2)."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""
