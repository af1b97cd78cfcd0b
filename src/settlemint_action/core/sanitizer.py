"""Shell metacharacter stripping for untrusted scalar inputs."""

from __future__ import annotations

import re

SHELL_METACHARACTERS: str = ";&|`$()<>\\"
"""Characters removed from every value that reaches a child process."""

_METACHARACTER_PATTERN = re.compile(r"[;&|`$()<>\\]")


def sanitize(value: str) -> str:
    """Return *value* with every shell metacharacter removed.

    All other characters keep their relative order.  The function is a
    fixed point on its own output: ``sanitize(sanitize(s)) == sanitize(s)``.
    """
    return _METACHARACTER_PATTERN.sub("", value)
