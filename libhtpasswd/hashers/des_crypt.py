from __future__ import annotations

from libhtpasswd._utils.bytes import StrOrBytes, as_str
from libhtpasswd.algorithms import DES_CRYPT_SIZE
from libhtpasswd.errors import InsecureAlgorithmError
from libhtpasswd.hashers.abc import PasswordHasher

__all__ = ["DesCryptHasher"]


class DesCryptHasher(PasswordHasher):
    """Legacy 13-character DES crypt.

    Recognized so callers get a clear error, never generated or verified.
    """

    name = "crypt"

    def hash(self, secret: StrOrBytes) -> str:
        raise InsecureAlgorithmError(self.name)

    def verify(self, hash: StrOrBytes, secret: StrOrBytes) -> bool:
        raise InsecureAlgorithmError(self.name)

    def identify(self, hash: StrOrBytes) -> bool:
        return len(as_str(hash)) == DES_CRYPT_SIZE
