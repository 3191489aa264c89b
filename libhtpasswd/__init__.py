"""libhtpasswd -- read, write & check Apache htpasswd files"""

from libhtpasswd._utils.compare import safe_compare
from libhtpasswd.algorithms import Algorithm, detect_algorithm
from libhtpasswd.context import (
    HtpasswdContext,
    generate,
    generate_async,
    htpasswd_context,
    verify,
    verify_async,
)
from libhtpasswd.entries import HtpasswdEntry, parse, stringify
from libhtpasswd.errors import (
    HtpasswdError,
    InsecureAlgorithmError,
    MalformedEntryError,
    PasswordTruncateError,
    PlaintextEntryError,
    UnsupportedAlgorithmError,
    ValidationError,
)
from libhtpasswd.file import (
    add_user,
    add_user_async,
    authenticate,
    authenticate_async,
    list_users,
    remove_user,
)

__version__ = "1.0.0"

__all__ = [
    "Algorithm",
    "HtpasswdContext",
    "HtpasswdEntry",
    "HtpasswdError",
    "InsecureAlgorithmError",
    "MalformedEntryError",
    "PasswordTruncateError",
    "PlaintextEntryError",
    "UnsupportedAlgorithmError",
    "ValidationError",
    "add_user",
    "add_user_async",
    "authenticate",
    "authenticate_async",
    "detect_algorithm",
    "generate",
    "generate_async",
    "htpasswd_context",
    "list_users",
    "parse",
    "remove_user",
    "safe_compare",
    "stringify",
    "verify",
    "verify_async",
]
