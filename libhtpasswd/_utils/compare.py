from __future__ import annotations

import hmac

from libhtpasswd._utils.bytes import StrOrBytes, as_bytes

__all__ = ["safe_compare"]


def safe_compare(left: StrOrBytes, right: StrOrBytes) -> bool:
    """Check two strings for equality in constant time.

    Runtime depends only on the length of ``right``, never on where the
    inputs first differ. When the lengths differ ``right`` is compared
    against itself, so the full scan still happens and the result is
    forced to ``False`` afterwards.
    """
    left = as_bytes(left)
    right = as_bytes(right)
    same_length = len(left) == len(right)
    if not same_length:
        left = right
    result = hmac.compare_digest(left, right)
    return result and same_length
