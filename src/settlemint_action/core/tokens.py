"""Access-token classification.

A token is exactly one of two cases, decided once when it is read:

* :class:`PersonalAccessToken` — prefixed ``sm_pat_``; exported as
  ``SETTLEMINT_PERSONAL_ACCESS_TOKEN`` and triggers ``login -a``.
* :class:`ApplicationToken` — anything else; exported as
  ``SETTLEMINT_ACCESS_TOKEN``.

Call sites dispatch on the variant instead of re-testing the prefix.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from settlemint_action.core.sanitizer import sanitize

PERSONAL_ACCESS_TOKEN_PREFIX: str = "sm_pat_"


@dataclass(frozen=True, slots=True)
class PersonalAccessToken:
    value: str

    env_var: ClassVar[str] = "SETTLEMINT_PERSONAL_ACCESS_TOKEN"
    requires_login: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class ApplicationToken:
    value: str

    env_var: ClassVar[str] = "SETTLEMINT_ACCESS_TOKEN"
    requires_login: ClassVar[bool] = False


AccessToken = PersonalAccessToken | ApplicationToken


def is_personal_access_token(token: str) -> bool:
    return token.startswith(PERSONAL_ACCESS_TOKEN_PREFIX)


def classify_token(raw: str) -> AccessToken | None:
    """Sanitize *raw* and wrap it in its variant; ``None`` when empty."""
    value = sanitize(raw)
    if not value:
        return None
    if is_personal_access_token(value):
        return PersonalAccessToken(value)
    return ApplicationToken(value)
