from __future__ import annotations

import asyncio
import functools
from typing import ClassVar, Literal

import bcrypt

from libhtpasswd._utils.bytes import StrOrBytes, as_bytes, as_str
from libhtpasswd.errors import PasswordTruncateError
from libhtpasswd.hashers.abc import PasswordHasher
from libhtpasswd.inspect.bcrypt import inspect_bcrypt_hash

BcryptIdent = Literal["2a", "2b", "2y"]

__all__ = ["BcryptHasher"]


class BcryptHasher(PasswordHasher):
    """bcrypt hasher.

    :param rounds: log2 cost factor, between 4 and 31.
    :param ident:
        version tag written into new hashes. Apache writes ``2y``, which
        the bcrypt library can't generate directly; ``2y`` and ``2b``
        use the same algorithm, so hashes are generated as ``2b`` and relabeled.
    :param truncate_error:
        bcrypt only uses the first 72 bytes of a secret. By default longer
        secrets are truncated silently; with ``True``, :meth:`hash` raises
        :exc:`PasswordTruncateError` instead. :meth:`verify` always truncates.
    """

    idents: ClassVar[tuple[str, ...]] = ("2a", "2b", "2y")
    truncate_size: ClassVar[int] = 72

    def __init__(
        self,
        rounds: int = 10,
        ident: BcryptIdent = "2y",
        truncate_error: bool = False,
    ) -> None:
        if rounds < 4 or rounds > 31:
            msg = "rounds must be between 4 - 31"
            raise ValueError(msg)
        if ident not in self.idents:
            raise ValueError(f"unknown bcrypt ident: {ident!r}")
        self._rounds = rounds
        self.ident = ident
        self.truncate_error = truncate_error

    def hash(
        self,
        secret: StrOrBytes,
        *,
        salt: bytes | None = None,
    ) -> str:
        """
        :param secret: Secret to hash
        :param salt: Salt, as returned by "bcrypt" library
        :return: Hash
        """
        secret = as_bytes(secret)
        if self.truncate_error and len(secret) > self.truncate_size:
            raise PasswordTruncateError(self.truncate_size)
        prefix = b"2a" if self.ident == "2a" else b"2b"
        salt = salt or bcrypt.gensalt(rounds=self._rounds, prefix=prefix)
        hash = as_str(bcrypt.hashpw(self._truncate(secret), salt))
        return _set_ident(hash, self.ident)

    def verify(self, hash: StrOrBytes, secret: StrOrBytes) -> bool:
        hash = as_str(hash)
        if inspect_bcrypt_hash(hash) is None:
            return False
        # 2y is not accepted by every release of the bcrypt library
        if hash.startswith("$2y$"):
            hash = _set_ident(hash, "2b")
        return bcrypt.checkpw(
            password=self._truncate(as_bytes(secret)),
            hashed_password=as_bytes(hash),
        )

    def _truncate(self, secret: bytes) -> bytes:
        # newer releases of the bcrypt library refuse longer secrets
        return secret[: self.truncate_size]

    def identify(self, hash: StrOrBytes) -> bool:
        return inspect_bcrypt_hash(as_str(hash)) is not None

    async def hash_async(self, secret: StrOrBytes) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.hash, secret)

    async def verify_async(self, hash: StrOrBytes, secret: StrOrBytes) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, functools.partial(self.verify, hash=hash, secret=secret)
        )


def _set_ident(hash: str, ident: str) -> str:
    # "$2b$..." -> "$<ident>$..."
    return f"${ident}{hash[3:]}"
