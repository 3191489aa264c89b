from __future__ import annotations

import base64
import hashlib

from libhtpasswd._utils.bytes import StrOrBytes, as_bytes, as_str
from libhtpasswd._utils.compare import safe_compare
from libhtpasswd.algorithms import LDAP_SHA1_PREFIX
from libhtpasswd.hashers.abc import PasswordHasher

__all__ = ["LdapSha1Hasher"]


class LdapSha1Hasher(PasswordHasher):
    """``{SHA}`` hashes: base64 of an unsalted SHA1 digest.

    Weak, kept only so existing files can be read and written.
    """

    def hash(self, secret: StrOrBytes) -> str:
        digest = hashlib.sha1(as_bytes(secret)).digest()
        return LDAP_SHA1_PREFIX + base64.b64encode(digest).decode("ascii")

    def verify(self, hash: StrOrBytes, secret: StrOrBytes) -> bool:
        return safe_compare(self.hash(secret), as_str(hash))

    def identify(self, hash: StrOrBytes) -> bool:
        return as_str(hash).startswith(LDAP_SHA1_PREFIX)
