"""Parse & render htpasswd content.

Each non-blank, non-comment line is ``<username>:<hash>``. Only the first
colon separates the fields, so the hash itself may contain colons.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from libhtpasswd._logging import logger
from libhtpasswd._utils.bytes import StrOrBytes, as_str
from libhtpasswd.algorithms import Algorithm, detect_algorithm
from libhtpasswd.errors import MalformedEntryError, PlaintextEntryError

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "HtpasswdEntry",
    "parse",
    "stringify",
]

_COLON = ":"
_COMMENT = "#"


@dataclasses.dataclass
class HtpasswdEntry:
    username: str
    hash: str

    @property
    def algorithm(self) -> Algorithm:
        """Algorithm of :attr:`hash`, always re-derived from its shape."""
        return detect_algorithm(self.hash)

    def as_line(self) -> str:
        return f"{self.username}{_COLON}{self.hash}"


def parse(content: StrOrBytes, *, unsafe: bool = False) -> list[HtpasswdEntry]:
    """Parse htpasswd content into entries, preserving their order.

    Blank lines and ``#`` comments are skipped. Duplicate usernames are kept
    (a warning is logged), the file store only ever updates the first one.

    :param unsafe: accept plaintext passwords.

    :raises MalformedEntryError: if a line has no colon or an empty username.
    :raises PlaintextEntryError: if a plaintext entry is found and ``unsafe`` is false.
    """
    entries: list[HtpasswdEntry] = []
    seen: set[str] = set()
    for idx, line in enumerate(as_str(content).split("\n")):
        line = line.strip()
        if not line or line.startswith(_COMMENT):
            continue

        username, sep, hash = line.partition(_COLON)
        if not sep:
            raise MalformedEntryError("malformed htpasswd line: missing ':'", idx + 1)
        if not username:
            raise MalformedEntryError(
                "malformed htpasswd line: empty username", idx + 1
            )

        entry = HtpasswdEntry(username=username, hash=hash)
        if entry.algorithm == "plain":
            if not unsafe:
                raise PlaintextEntryError(username)
            logger.debug("plaintext password accepted for user %r", username)

        if username in seen:
            logger.warning("username occurs multiple times in source: %r", username)
        seen.add(username)
        entries.append(entry)
    return entries


def stringify(entries: Iterable[HtpasswdEntry]) -> str:
    """Render entries one per line, without a trailing newline."""
    return "\n".join(entry.as_line() for entry in entries)
