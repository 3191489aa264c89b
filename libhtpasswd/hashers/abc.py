from typing import Protocol

from libhtpasswd._utils.bytes import StrOrBytes

__all__ = ["PasswordHasher"]


class PasswordHasher(Protocol):
    def hash(self, secret: StrOrBytes) -> str: ...

    def verify(self, hash: StrOrBytes, secret: StrOrBytes) -> bool: ...

    def identify(self, hash: StrOrBytes) -> bool: ...

    async def hash_async(self, secret: StrOrBytes) -> str:
        """Coroutine version of :meth:`hash`.

        Runs inline by default; hashers slow enough to stall an event loop
        override this to offload the work.
        """
        return self.hash(secret)

    async def verify_async(self, hash: StrOrBytes, secret: StrOrBytes) -> bool:
        """Coroutine version of :meth:`verify`, see :meth:`hash_async`."""
        return self.verify(hash, secret)
