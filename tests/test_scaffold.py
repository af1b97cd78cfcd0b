"""Smoke tests — verify scaffold wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from settlemint_action import __version__
from settlemint_action.cli import exit_codes
from settlemint_action.cli.app import cli, main
from settlemint_action.exceptions import (
    CacheOperationError,
    CommandExecutionError,
    CommandParseError,
    DangerousInputError,
    EnvFileParseError,
    InstallationError,
    InvalidVersionError,
    MissingAccessTokenError,
    PlatformError,
    SettleMintActionError,
    ToolNotFoundError,
    UnclosedQuoteError,
    append_version_pin_suggestion,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            InvalidVersionError,
            MissingAccessTokenError,
            CommandParseError,
            CommandExecutionError,
            CacheOperationError,
            InstallationError,
            ToolNotFoundError,
            EnvFileParseError,
            PlatformError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[SettleMintActionError]
    ) -> None:
        assert issubclass(exc_class, SettleMintActionError)

    def test_parse_errors_share_a_base(self) -> None:
        assert issubclass(DangerousInputError, CommandParseError)
        assert issubclass(UnclosedQuoteError, CommandParseError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(SettleMintActionError, Exception)

    def test_hint_is_stored(self) -> None:
        err = SettleMintActionError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = SettleMintActionError("boom")
        assert err.hint is None

    def test_command_execution_details(self) -> None:
        err = CommandExecutionError("failed", command="npm", args=["install"], exit_code=1)
        assert err.command == "npm"
        assert err.arguments == ("install",)
        assert err.exit_code == 1


class TestVersionPinSuggestion:
    def test_added_for_latest(self) -> None:
        hint = append_version_pin_suggestion("Check npm.", "latest")
        assert hint.startswith("Check npm.\n")
        assert "Consider pinning the CLI version:" in hint

    def test_added_only_once(self) -> None:
        once = append_version_pin_suggestion("Check npm.", "latest")
        assert append_version_pin_suggestion(once, "latest") == once

    def test_not_added_for_pinned_version(self) -> None:
        assert append_version_pin_suggestion("Check npm.", "1.2.3") == "Check npm."


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_runs_the_step(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from settlemint_action.cli import app as app_module

        monkeypatch.setattr(app_module, "_handle_run", lambda: exit_codes.SUCCESS)
        assert main([]) == exit_codes.SUCCESS

    def test_run_failure_propagates(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from settlemint_action.cli import app as app_module

        monkeypatch.setattr(app_module, "_handle_run", lambda: exit_codes.GENERAL_ERROR)
        assert main(["run"]) == exit_codes.GENERAL_ERROR

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_unknown_target(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["deploy"])
        assert exc_info.value.code == 2

    @patch("settlemint_action.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_returns_success(self, _mock_doc: object) -> None:
        assert main(["doctor"]) == exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (ToolNotFoundError("npm missing", hint="install node"), exit_codes.GENERAL_ERROR),
            (KeyboardInterrupt(), exit_codes.KEYBOARD_INTERRUPT),
            (RuntimeError("bug"), exit_codes.UNEXPECTED_ERROR),
        ],
    )
    def test_exit_codes(
        self,
        error: BaseException,
        expected: int,
    ) -> None:
        with patch("settlemint_action.cli.app.main", side_effect=error):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == expected

    def test_domain_error_renders_hint(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch(
            "settlemint_action.cli.app.main",
            side_effect=ToolNotFoundError("npm missing", hint="install node"),
        ):
            with pytest.raises(SystemExit):
                cli()
        err = capsys.readouterr().err
        assert "npm missing" in err
        assert "install node" in err

    def test_success_exit(self) -> None:
        with patch("settlemint_action.cli.app.main", return_value=exit_codes.SUCCESS):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == exit_codes.SUCCESS
