from __future__ import annotations

import dataclasses
import re

APR_MD5_HASH_REGEX = re.compile(
    r"^\$apr1\$(?P<salt>[./A-Za-z0-9]{0,8})\$(?P<hash>[./A-Za-z0-9]{22})$"
)


@dataclasses.dataclass
class AprMd5HashInfo:
    salt: str
    hash: str

    def as_str(self) -> str:
        return f"$apr1${self.salt}${self.hash}"


def inspect_apr_md5_hash(hash: str) -> AprMd5HashInfo | None:
    result = APR_MD5_HASH_REGEX.match(hash)
    if not result:
        return None

    return AprMd5HashInfo(
        salt=result.group("salt"),
        hash=result.group("hash"),
    )
