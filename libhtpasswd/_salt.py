import secrets

from libhtpasswd._utils.binary import H64_CHARS


def generate_salt(length: int, chars: str = H64_CHARS) -> str:
    return "".join(secrets.choice(chars) for _ in range(length))
