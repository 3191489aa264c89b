from __future__ import annotations

from libhtpasswd._utils.bytes import StrOrBytes, as_str
from libhtpasswd._utils.compare import safe_compare
from libhtpasswd.algorithms import detect_algorithm
from libhtpasswd.hashers.abc import PasswordHasher

__all__ = ["PlaintextHasher"]


class PlaintextHasher(PasswordHasher):
    """Stores the password as-is."""

    def hash(self, secret: StrOrBytes) -> str:
        return as_str(secret)

    def verify(self, hash: StrOrBytes, secret: StrOrBytes) -> bool:
        return safe_compare(as_str(secret), as_str(hash))

    def identify(self, hash: StrOrBytes) -> bool:
        return detect_algorithm(hash) == "plain"
