"""Tests for the ``settlemint-action doctor`` command (cli/doctor.py).

Node.js and npm detection are mocked — no system dependency.

Coverage:
* Doctor returns SUCCESS when npm is present.
* Missing npm is a FAIL; missing node alone is a WARN.
* Individual check functions return correct tuples.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from settlemint_action.cli import exit_codes
from settlemint_action.infra.npm_detector import ExecutableStatus


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _found(name: str) -> ExecutableStatus:
    return ExecutableStatus(
        name=name,
        found=True,
        path=Path(f"/usr/bin/{name}"),
        version_hint=f"found at /usr/bin/{name}",
        install_commands=(),
    )


def _missing(name: str) -> ExecutableStatus:
    return ExecutableStatus(
        name=name,
        found=False,
        path=None,
        version_hint="not found",
        install_commands=("brew install node",),
    )


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        from settlemint_action.cli.doctor import _python_version_check

        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status or "FAIL" in status


class TestExecutableCheck:
    def test_found(self) -> None:
        from settlemint_action.cli.doctor import _executable_check

        label, value, status = _executable_check(_found("npm"), required=True)
        assert label == "npm"
        assert value == str(Path("/usr/bin/npm"))
        assert "OK" in status

    def test_missing_required(self) -> None:
        from settlemint_action.cli.doctor import _executable_check

        _label, value, status = _executable_check(_missing("npm"), required=True)
        assert value == "not found"
        assert "FAIL" in status

    def test_missing_optional(self) -> None:
        from settlemint_action.cli.doctor import _executable_check

        _label, _value, status = _executable_check(_missing("node"), required=False)
        assert "WARN" in status


class TestOsCheck:
    def test_returns_tuple(self) -> None:
        from settlemint_action.cli.doctor import _os_check

        label, value, status = _os_check()
        assert label == "OS"
        assert isinstance(value, str)
        assert "OK" in status

    @patch("settlemint_action.cli.doctor.platform.machine", return_value="arm64")
    @patch("settlemint_action.cli.doctor.platform.release", return_value="23.4.0")
    @patch("settlemint_action.cli.doctor.platform.system", return_value="Darwin")
    def test_darwin_is_displayed_as_macos(
        self,
        _mock_system: MagicMock,
        _mock_release: MagicMock,
        _mock_machine: MagicMock,
    ) -> None:
        from settlemint_action.cli.doctor import _os_check

        _label, value, _status = _os_check()
        assert "macOS" in value
        assert "Darwin" not in value


class TestPackageVersionCheck:
    def test_returns_current_version(self) -> None:
        from settlemint_action.cli.doctor import _package_version_check
        from settlemint_action.version import __version__

        label, value, status = _package_version_check()
        assert label == "settlemint-action"
        assert value == __version__
        assert "OK" in status


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

class TestRunDoctor:
    @patch("settlemint_action.cli.doctor.detect_node")
    @patch("settlemint_action.cli.doctor.detect_npm")
    def test_all_pass_returns_success(
        self, mock_npm: MagicMock, mock_node: MagicMock
    ) -> None:
        from settlemint_action.cli.doctor import run_doctor

        mock_npm.return_value = _found("npm")
        mock_node.return_value = _found("node")
        assert run_doctor() == exit_codes.SUCCESS

    @patch("settlemint_action.cli.doctor.detect_node")
    @patch("settlemint_action.cli.doctor.detect_npm")
    def test_node_missing_still_succeeds(
        self, mock_npm: MagicMock, mock_node: MagicMock
    ) -> None:
        from settlemint_action.cli.doctor import run_doctor

        mock_npm.return_value = _found("npm")
        mock_node.return_value = _missing("node")
        assert run_doctor() == exit_codes.SUCCESS

    @patch("settlemint_action.cli.doctor.detect_node")
    @patch("settlemint_action.cli.doctor.detect_npm")
    def test_npm_missing_fails_with_guidance(
        self,
        mock_npm: MagicMock,
        mock_node: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from settlemint_action.cli.doctor import run_doctor

        mock_npm.return_value = _missing("npm")
        mock_node.return_value = _missing("node")

        assert run_doctor() == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "brew install node" in err
        assert "Some checks failed." in err


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestDoctorRouting:
    @patch("settlemint_action.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_dispatches(self, mock_run: MagicMock) -> None:
        from settlemint_action.cli.app import main

        code = main(["doctor"])
        assert code == exit_codes.SUCCESS
        mock_run.assert_called_once()

    @patch("settlemint_action.cli.doctor.run_doctor", return_value=exit_codes.GENERAL_ERROR)
    def test_doctor_failure_propagates(self, mock_run: MagicMock) -> None:
        from settlemint_action.cli.app import main

        code = main(["doctor"])
        assert code == exit_codes.GENERAL_ERROR
