"""Detection of writes to the GitHub environment files from ``cmd`` scripts."""

from __future__ import annotations

import re

GITHUB_ENV_WRITE_CMD = re.compile(
    r'(?mi)^.+\s*>>?\s*"?%(?P<destination>GITHUB_ENV|GITHUB_PATH)%"?.*$'
)


def cmd_uses_github_env(script: str) -> list[tuple[str, tuple[int, int]]]:
    """Return ``(destination, (start, end))`` for each environment-file write.

    ``script`` is the body of a ``cmd`` shell step. A write is a redirection
    (``>`` or ``>>``) into ``%GITHUB_ENV%`` or ``%GITHUB_PATH%``, matched
    case-insensitively; at most one write is reported per line. The span
    covers the variable name as written in the script.
    """
    return [
        (match.group("destination"), match.span("destination"))
        for match in GITHUB_ENV_WRITE_CMD.finditer(script)
    ]