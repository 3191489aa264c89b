"""Read-modify-write operations on htpasswd files.

Every call reads the whole file, changes the parsed entries in memory, and
writes the whole file back through a temporary file that replaces the
original. Nothing is locked: concurrent writers to one path race, and the
last one to replace the file wins.
"""

from __future__ import annotations

import codecs
import os
import stat
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Union

from libhtpasswd._logging import logger
from libhtpasswd.context import htpasswd_context
from libhtpasswd.entries import HtpasswdEntry, parse, stringify
from libhtpasswd.errors import MalformedEntryError

if TYPE_CHECKING:
    from libhtpasswd.context import HtpasswdContext

__all__ = [
    "add_user",
    "add_user_async",
    "remove_user",
    "authenticate",
    "authenticate_async",
    "list_users",
]

PathLike = Union[str, "os.PathLike[str]"]

# characters that aren't allowed in usernames
_INVALID_USER_CHARS = ":\n\r\t\x00"
# characters that would split the line a hash is stored on
_INVALID_HASH_CHARS = "\n\r\x00"
_MAX_USER_SIZE = 255


def _check_encoding(encoding: str) -> None:
    # htpasswd files use a 1-byte ":" separator,
    # so only ascii-compatible encodings are allowed.
    if codecs.lookup(encoding).encode(":")[0] != b":":
        raise ValueError("encoding must be 7-bit ascii compatible")


def _validate_username(username: str, encoding: str) -> None:
    if not username:
        raise MalformedEntryError("username must not be empty")
    if any(c in _INVALID_USER_CHARS for c in username):
        raise MalformedEntryError(f"username contains invalid characters: {username!r}")
    if username != username.strip() or username.startswith("#"):
        raise MalformedEntryError(f"username would not survive a reload: {username!r}")
    if len(username.encode(encoding)) > _MAX_USER_SIZE:
        raise MalformedEntryError(
            f"username must be at most {_MAX_USER_SIZE} bytes: {username!r}"
        )


def _validate_hash(hash: str) -> None:
    # lines are stripped when parsed, plaintext passwords get here unchanged
    if any(c in _INVALID_HASH_CHARS for c in hash):
        raise MalformedEntryError("hash contains line break or NUL characters")
    if hash != hash.strip():
        raise MalformedEntryError("hash must not start or end with whitespace")


def _read_entries(
    path: PathLike, encoding: str, *, missing_ok: bool = False
) -> list[HtpasswdEntry]:
    _check_encoding(encoding)
    try:
        content = Path(path).read_text(encoding=encoding)
    except FileNotFoundError:
        if not missing_ok:
            raise
        logger.debug("htpasswd file %r not found, treating as empty", os.fspath(path))
        return []
    logger.debug("loaded htpasswd file %r", os.fspath(path))
    return parse(content, unsafe=True)


def _target_mode(path: Path) -> int:
    # temp files are created 0600; keep the existing file's mode,
    # or the one open() would give a new file
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _write_atomic(path: PathLike, content: str, encoding: str) -> None:
    """Write ``content`` to a sibling temp file, then move it over ``path``."""
    path = Path(path)
    tmp = tempfile.NamedTemporaryFile(
        mode="w",
        encoding=encoding,
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    )
    try:
        with tmp:
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp.name, _target_mode(path))
        os.replace(tmp.name, path)
    except BaseException:
        Path(tmp.name).unlink(missing_ok=True)
        raise
    logger.debug("saved htpasswd file %r", os.fspath(path))


def _save(path: PathLike, entries: list[HtpasswdEntry], encoding: str) -> None:
    _write_atomic(path, stringify(entries) + "\n", encoding)


def _set_hash(
    path: PathLike, username: str, hash: str, encoding: str, new: bool
) -> bool:
    entries = [] if new else _read_entries(path, encoding, missing_ok=True)
    for entry in entries:
        if entry.username == username:
            entry.hash = hash
            existing = True
            break
    else:
        entries.append(HtpasswdEntry(username=username, hash=hash))
        existing = False
    _save(path, entries, encoding)
    return existing


def add_user(
    path: PathLike,
    username: str,
    password: str,
    algorithm: str = "bcrypt",
    *,
    new: bool = False,
    encoding: str = "utf-8",
    context: HtpasswdContext = htpasswd_context,
) -> bool:
    """Set ``username``'s password, adding the user if needed.

    The file is created if it doesn't exist. An existing user keeps
    its position in the file.

    :param new: ignore any existing file content, leaving only this user.

    :returns:
        * ``True`` if an existing user was updated.
        * ``False`` if the user was added.

    :raises UnsupportedAlgorithmError: if ``algorithm`` can't be generated.
    :raises MalformedEntryError:
        if ``username``, or a plaintext ``password``, can't be stored.
    """
    _validate_username(username, encoding)
    hash = context.hash(password, algorithm)
    _validate_hash(hash)
    return _set_hash(path, username, hash, encoding, new)


async def add_user_async(
    path: PathLike,
    username: str,
    password: str,
    algorithm: str = "bcrypt",
    *,
    new: bool = False,
    encoding: str = "utf-8",
    context: HtpasswdContext = htpasswd_context,
) -> bool:
    """Coroutine version of :func:`add_user`.

    Only hashing is moved off the event loop, file access is still blocking.
    """
    _validate_username(username, encoding)
    hash = await context.hash_async(password, algorithm)
    _validate_hash(hash)
    return _set_hash(path, username, hash, encoding, new)


def remove_user(path: PathLike, username: str, *, encoding: str = "utf-8") -> bool:
    """Remove ``username``'s entry. The file is rewritten even if nothing changed.

    :returns: ``True`` if the user was found.

    :raises FileNotFoundError: if the file doesn't exist.
    """
    entries = _read_entries(path, encoding)
    kept = [entry for entry in entries if entry.username != username]
    _save(path, kept, encoding)
    return len(kept) != len(entries)


def _find_hash(path: PathLike, username: str, encoding: str) -> str | None:
    for entry in _read_entries(path, encoding, missing_ok=True):
        if entry.username == username:
            return entry.hash
    return None


def authenticate(
    path: PathLike,
    username: str,
    password: str,
    *,
    encoding: str = "utf-8",
    context: HtpasswdContext = htpasswd_context,
) -> bool:
    """Check ``username`` & ``password`` against the file.

    A missing file, an unknown user, and a wrong password all return ``False``,
    so callers can't tell which usernames exist.

    :raises InsecureAlgorithmError: if the user's hash is DES crypt.
    """
    hash = _find_hash(path, username, encoding)
    if hash is None:
        return False
    return context.verify(password, hash)


async def authenticate_async(
    path: PathLike,
    username: str,
    password: str,
    *,
    encoding: str = "utf-8",
    context: HtpasswdContext = htpasswd_context,
) -> bool:
    """Coroutine version of :func:`authenticate`."""
    hash = _find_hash(path, username, encoding)
    if hash is None:
        return False
    return await context.verify_async(password, hash)


def list_users(path: PathLike, *, encoding: str = "utf-8") -> list[str]:
    """Return usernames in file order, or ``[]`` if the file doesn't exist."""
    return [entry.username for entry in _read_entries(path, encoding, missing_ok=True)]
