"""libhtpasswd.errors -- exceptions raised by libhtpasswd"""

from __future__ import annotations

__all__ = [
    "HtpasswdError",
    "ValidationError",
    "MalformedEntryError",
    "PlaintextEntryError",
    "UnsupportedAlgorithmError",
    "InsecureAlgorithmError",
    "PasswordTruncateError",
]


class HtpasswdError(Exception):
    """Base class for all errors raised by libhtpasswd"""


class ValidationError(HtpasswdError, ValueError):
    """Content or field failed validation.

    Subclass of :exc:`ValueError`, so callers treating bad input generically
    don't need to import this module.
    """


class MalformedEntryError(ValidationError):
    """Line of htpasswd content, or a username, is not well-formed.

    .. attribute:: lineno

        1-based line number within the parsed content,
        or ``None`` when not raised by the parser.
    """

    def __init__(self, message: str, lineno: int | None = None) -> None:
        self.lineno = lineno
        if lineno is not None:
            message = f"{message} (line {lineno})"
        super().__init__(message)


class PlaintextEntryError(ValidationError):
    """Plaintext password found while parsing without ``unsafe=True``."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(
            f"Plaintext password detected for user {username!r}. "
            "Pass unsafe=True to allow this."
        )


class PasswordTruncateError(ValidationError):
    """Secret is longer than the hasher can use, and truncating was disabled."""

    def __init__(self, truncate_size: int) -> None:
        self.truncate_size = truncate_size
        super().__init__(f"Password too long, only the first {truncate_size} bytes are used")


class UnsupportedAlgorithmError(HtpasswdError, ValueError):
    """Algorithm can't be used for the requested operation.

    .. attribute:: algorithm

        The offending algorithm tag.
    """

    def __init__(self, algorithm: str, message: str | None = None) -> None:
        self.algorithm = algorithm
        super().__init__(message or f"Unsupported algorithm: {algorithm!r}")


class InsecureAlgorithmError(UnsupportedAlgorithmError):
    """Algorithm was recognized, but is refused because it is insecure.

    Raised for legacy DES ``crypt`` hashes.
    """

    def __init__(self, algorithm: str) -> None:
        super().__init__(
            algorithm,
            f"Algorithm {algorithm!r} is insecure and not supported.",
        )
