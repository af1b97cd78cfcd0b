"""Subprocess-backed implementation of :class:`~settlemint_action.core.protocols.ProcessRunner`.

Commands are always spawned from an argument vector — ``shell=True`` is
never used, so no metacharacter in an argument is ever interpreted.
Child output streams straight through to the CI log.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Mapping, Sequence

from settlemint_action.exceptions import CommandExecutionError


class SubprocessRunner:
    """Concrete :class:`ProcessRunner` backed by :func:`subprocess.run`."""

    @staticmethod
    def build_env(env: Mapping[str, str] | None) -> dict[str, str]:
        """Layer *env* on top of the current process environment."""
        merged = dict(os.environ)
        if env:
            merged.update(env)
        return merged

    def exec(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        env: Mapping[str, str] | None = None,
    ) -> int:
        """Run *command* with *args* and wait for it.

        Raises
        ------
        CommandExecutionError
            When the process cannot be spawned or exits non-zero.
        """
        child_env = self.build_env(env)
        # Resolve against the child's PATH so ``npm`` finds ``npm.cmd`` on Windows.
        executable = shutil.which(command, path=child_env.get("PATH")) or command

        try:
            completed = subprocess.run(
                [executable, *args],
                env=child_env,
                check=False,
            )
        except OSError as exc:
            raise CommandExecutionError(
                f"Unable to locate executable file: {command}",
                command=command,
                args=args,
                hint="Ensure Node.js and npm are installed on the runner.",
            ) from exc

        if completed.returncode != 0:
            raise CommandExecutionError(
                f"The process '{command}' failed with exit code {completed.returncode}",
                command=command,
                args=args,
                exit_code=completed.returncode,
            )
        return completed.returncode
