from __future__ import annotations

import hashlib

from libhtpasswd._salt import generate_salt
from libhtpasswd._utils.binary import h64_engine
from libhtpasswd._utils.bytes import StrOrBytes, as_bytes, as_str
from libhtpasswd._utils.compare import safe_compare
from libhtpasswd.hashers.abc import PasswordHasher
from libhtpasswd.inspect.apr_md5 import AprMd5HashInfo, inspect_apr_md5_hash

__all__ = ["AprMd5Hasher"]

_APR_MAGIC = b"$apr1$"
_MAX_SALT_SIZE = 8
_ROUNDS = 1000

# map used to transpose bytes when encoding final md5 digest
_transpose_map = (12, 6, 0, 13, 7, 1, 14, 8, 2, 15, 9, 3, 5, 10, 4, 11)


def _md5_crypt(secret: bytes, salt: bytes, magic: bytes = _APR_MAGIC) -> str:
    """perform raw md5-crypt, returning the encoded checksum.

    this is the algorithm from FreeBSD's md5-crypt; apache's variant
    differs only in the magic string mixed into digest A.
    """
    secret_len = len(secret)

    # digest B - used as filler for digest A
    db = hashlib.md5(secret + salt + secret).digest()

    # digest A - secret, magic, salt, then a filler of digest B
    a_ctx = hashlib.md5(secret + magic + salt)
    a_ctx.update((db * (secret_len // 16 + 1))[:secret_len])

    # NOTE: FreeBSD's code meant to mix in the secret's chars,
    #       but a bug mixed in NUL bytes or the first char instead;
    #       every md5-crypt implementation has to reproduce it.
    evenchar = secret[:1]
    i = secret_len
    while i:
        a_ctx.update(b"\x00" if i & 1 else evenchar)
        i >>= 1
    dc = a_ctx.digest()

    # digest C - 1000 rounds mixing digest, secret & salt
    for i in range(_ROUNDS):
        ctx = hashlib.md5(secret if i & 1 else dc)
        if i % 3:
            ctx.update(salt)
        if i % 7:
            ctx.update(secret)
        ctx.update(dc if i & 1 else secret)
        dc = ctx.digest()

    return h64_engine.encode_transposed_bytes(dc, _transpose_map).decode("ascii")


class AprMd5Hasher(PasswordHasher):
    """Apache's ``$apr1$`` variant of md5-crypt."""

    def __init__(self, salt_size: int = _MAX_SALT_SIZE) -> None:
        if salt_size < 1 or salt_size > _MAX_SALT_SIZE:
            msg = f"salt_size must be between 1 - {_MAX_SALT_SIZE}"
            raise ValueError(msg)
        self._salt_size = salt_size

    def hash(
        self,
        secret: StrOrBytes,
        *,
        salt: StrOrBytes | None = None,
    ) -> str:
        if salt is None:
            salt = generate_salt(self._salt_size)
        salt = as_str(salt)[:_MAX_SALT_SIZE]
        checksum = _md5_crypt(secret=as_bytes(secret), salt=as_bytes(salt))
        return AprMd5HashInfo(salt=salt, hash=checksum).as_str()

    def verify(self, hash: StrOrBytes, secret: StrOrBytes) -> bool:
        info = inspect_apr_md5_hash(as_str(hash))
        if info is None:
            return False
        checksum = _md5_crypt(secret=as_bytes(secret), salt=as_bytes(info.salt))
        return safe_compare(checksum, info.hash)

    def identify(self, hash: StrOrBytes) -> bool:
        return inspect_apr_md5_hash(as_str(hash)) is not None
