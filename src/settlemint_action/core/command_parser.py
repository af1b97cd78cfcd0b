"""Shell-free command-line parsing.

Turns an untrusted, single-line command string into an argument vector
that is handed straight to the process runner — no shell ever sees it.

Pipeline order (enforced by :func:`parse_command`):

1. **Reject** — refuse the whole string if it contains any shell
   control construct (chaining, piping, substitution, redirection).
2. **Tokenize** — single left-to-right scan honouring ``"`` and ``'``
   quoting so one argument may contain spaces.
3. **Sanitize** — strip residual metacharacters from every token.

This is not a shell: globbing, pipelines, redirection and
subshells are rejected, never interpreted.
"""

from __future__ import annotations

from settlemint_action.core.sanitizer import sanitize
from settlemint_action.exceptions import DangerousInputError, UnclosedQuoteError

DANGEROUS_SEQUENCES: tuple[str, ...] = ("&&", "||", ";", "|", "`", "$(", ">", "<")
"""Literal substrings that cause the whole command to be rejected."""

_QUOTE_CHARS: frozenset[str] = frozenset({'"', "'"})
_ESCAPE_CHAR = "\\"


# ---------------------------------------------------------------------------
# 1. Reject
# ---------------------------------------------------------------------------

def contains_dangerous_input(raw: str) -> bool:
    """Return ``True`` when *raw* contains any :data:`DANGEROUS_SEQUENCES`."""
    return any(sequence in raw for sequence in DANGEROUS_SEQUENCES)


# ---------------------------------------------------------------------------
# 2. Tokenize
# ---------------------------------------------------------------------------

def tokenize(raw: str) -> list[str]:
    """Split *raw* on unquoted spaces.

    Rules
    -----
    * An unescaped ``"`` or ``'`` opens a quoted section and remembers
      which character opened it.
    * Inside quotes, only the same character closes the section; the
      other quote character is kept literally.
    * A quote preceded by a backslash is kept literally.
    * Unquoted spaces end the current token; empty tokens are dropped.

    Raises
    ------
    UnclosedQuoteError
        When the input ends inside a quoted section.
    """
    tokens: list[str] = []
    current: list[str] = []
    quote_char: str | None = None
    previous = ""

    for char in raw:
        if char in _QUOTE_CHARS and previous != _ESCAPE_CHAR:
            if quote_char is None:
                quote_char = char
            elif char == quote_char:
                quote_char = None
            else:
                current.append(char)
        elif char == " " and quote_char is None:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)
        previous = char

    if quote_char is not None:
        raise UnclosedQuoteError(
            f"Command has an unclosed {quote_char} quote.",
            hint="Close every quoted argument before the end of the command.",
        )

    if current:
        tokens.append("".join(current))
    return tokens


# ---------------------------------------------------------------------------
# Composite pipeline
# ---------------------------------------------------------------------------

def parse_command(raw: str) -> list[str]:
    """Run the full reject → tokenize → sanitize pipeline.

    Raises
    ------
    DangerousInputError
        When *raw* contains a shell control construct.  No tokenization
        is attempted.
    UnclosedQuoteError
        When *raw* ends inside a quoted section.
    """
    if contains_dangerous_input(raw):
        raise DangerousInputError(
            "Command contains potentially dangerous characters. "
            "Please use simple commands only.",
        )
    return [sanitize(token) for token in tokenize(raw)]
