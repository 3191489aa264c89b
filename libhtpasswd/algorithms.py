"""Classify htpasswd hash strings by shape."""

from __future__ import annotations

from typing import Literal

from libhtpasswd._utils.bytes import StrOrBytes

__all__ = [
    "Algorithm",
    "ALGORITHMS",
    "GENERATE_ALGORITHMS",
    "detect_algorithm",
]

Algorithm = Literal["bcrypt", "md5", "sha1", "crypt", "plain"]

#: every tag :func:`detect_algorithm` can return
ALGORITHMS: tuple[Algorithm, ...] = ("bcrypt", "md5", "sha1", "crypt", "plain")

#: tags new hashes can be generated for
GENERATE_ALGORITHMS: tuple[Algorithm, ...] = ("bcrypt", "md5", "sha1", "plain")

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
APR_MD5_PREFIX = "$apr1$"
LDAP_SHA1_PREFIX = "{SHA}"
DES_CRYPT_SIZE = 13


def detect_algorithm(hash: StrOrBytes) -> Algorithm:
    """Return the algorithm a hash string was made with, judged by its shape.

    Never raises. Bytes are decoded as UTF-8, with undecodable bytes replaced.
    Anything 13 characters long without a known prefix is taken
    to be DES crypt, even if it is really a plaintext password of that length.
    """
    if isinstance(hash, bytes):
        hash = hash.decode("utf8", errors="replace")
    if hash.startswith(BCRYPT_PREFIXES):
        return "bcrypt"
    if hash.startswith(APR_MD5_PREFIX):
        return "md5"
    if hash.startswith(LDAP_SHA1_PREFIX):
        return "sha1"
    if len(hash) == DES_CRYPT_SIZE:
        return "crypt"
    return "plain"
