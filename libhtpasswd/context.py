"""Route hash generation & verification to the right hasher."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typing_extensions

from libhtpasswd.algorithms import (
    ALGORITHMS,
    GENERATE_ALGORITHMS,
    Algorithm,
    detect_algorithm,
)
from libhtpasswd.errors import UnsupportedAlgorithmError
from libhtpasswd.hashers.apr_md5 import AprMd5Hasher
from libhtpasswd.hashers.bcrypt import BcryptHasher, BcryptIdent
from libhtpasswd.hashers.des_crypt import DesCryptHasher
from libhtpasswd.hashers.plaintext import PlaintextHasher
from libhtpasswd.hashers.sha1 import LdapSha1Hasher

if TYPE_CHECKING:
    from libhtpasswd._utils.bytes import StrOrBytes
    from libhtpasswd.hashers.abc import PasswordHasher

__all__ = [
    "HtpasswdContext",
    "htpasswd_context",
    "generate",
    "generate_async",
    "verify",
    "verify_async",
]


class HtpasswdContext:
    """One hasher per htpasswd algorithm.

    New hashes use the algorithm asked for (``default`` if none is given);
    existing hashes are verified with the algorithm :func:`detect_algorithm`
    reads from their shape.
    """

    def __init__(
        self,
        default: Algorithm = "bcrypt",
        bcrypt_rounds: int = 10,
        bcrypt_ident: BcryptIdent = "2y",
    ) -> None:
        if default not in GENERATE_ALGORITHMS:
            raise UnsupportedAlgorithmError(
                default, f"Unsupported algorithm for generation: {default!r}"
            )
        self.default = default
        self._hashers: dict[str, PasswordHasher] = {
            algorithm: _create_hasher(
                algorithm, bcrypt_rounds=bcrypt_rounds, bcrypt_ident=bcrypt_ident
            )
            for algorithm in ALGORITHMS
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} default={self.default!r}>"

    def _generate_hasher(self, algorithm: str | None) -> PasswordHasher:
        if algorithm is None:
            algorithm = self.default
        if algorithm not in GENERATE_ALGORITHMS:
            raise UnsupportedAlgorithmError(
                algorithm, f"Unsupported algorithm for generation: {algorithm!r}"
            )
        return self._hashers[algorithm]

    def _verify_hasher(self, hash: StrOrBytes) -> PasswordHasher:
        algorithm = detect_algorithm(hash)
        try:
            return self._hashers[algorithm]
        except KeyError:
            raise UnsupportedAlgorithmError(algorithm) from None

    def hash(self, secret: StrOrBytes, algorithm: str | None = None) -> str:
        """Hash ``secret`` with ``algorithm``.

        :raises UnsupportedAlgorithmError:
            if ``algorithm`` isn't one of ``bcrypt``, ``md5``, ``sha1``, ``plain``.
        """
        return self._generate_hasher(algorithm).hash(secret)

    async def hash_async(self, secret: StrOrBytes, algorithm: str | None = None) -> str:
        return await self._generate_hasher(algorithm).hash_async(secret)

    def verify(self, secret: StrOrBytes, hash: StrOrBytes) -> bool:
        """Check ``secret`` against ``hash``.

        :raises InsecureAlgorithmError: if ``hash`` looks like DES crypt.
        """
        return self._verify_hasher(hash).verify(hash=hash, secret=secret)

    async def verify_async(self, secret: StrOrBytes, hash: StrOrBytes) -> bool:
        return await self._verify_hasher(hash).verify_async(hash=hash, secret=secret)


def _create_hasher(
    algorithm: Algorithm, bcrypt_rounds: int, bcrypt_ident: BcryptIdent
) -> PasswordHasher:
    if algorithm == "bcrypt":
        return BcryptHasher(rounds=bcrypt_rounds, ident=bcrypt_ident)
    if algorithm == "md5":
        return AprMd5Hasher()
    if algorithm == "sha1":
        return LdapSha1Hasher()
    if algorithm == "plain":
        return PlaintextHasher()
    if algorithm == "crypt":
        return DesCryptHasher()
    typing_extensions.assert_never(algorithm)


#: context with the defaults ``htpasswd -B`` uses
htpasswd_context = HtpasswdContext()


def generate(password: StrOrBytes, algorithm: str = "bcrypt") -> str:
    """Hash ``password`` for storage in an htpasswd file."""
    return htpasswd_context.hash(password, algorithm)


async def generate_async(password: StrOrBytes, algorithm: str = "bcrypt") -> str:
    """Like :func:`generate`, without blocking the event loop on bcrypt."""
    return await htpasswd_context.hash_async(password, algorithm)


def verify(password: StrOrBytes, hash: StrOrBytes) -> bool:
    """Check ``password`` against a hash taken from an htpasswd file.

    :raises InsecureAlgorithmError: for DES crypt hashes.
    :raises UnsupportedAlgorithmError: for unrecognized hashes.
    """
    return htpasswd_context.verify(password, hash)


async def verify_async(password: StrOrBytes, hash: StrOrBytes) -> bool:
    """Like :func:`verify`, without blocking the event loop on bcrypt."""
    return await htpasswd_context.verify_async(password, hash)
