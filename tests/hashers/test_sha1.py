import pytest

from libhtpasswd.hashers.sha1 import LdapSha1Hasher


@pytest.fixture
def hasher() -> LdapSha1Hasher:
    return LdapSha1Hasher()


@pytest.mark.parametrize(
    ("secret", "hash"),
    [
        ("password", "{SHA}W6ph5Mm5Pz8GgiULbPgzG37mj9g="),
        ("pass3", "{SHA}3ipNV1GrBtxPmHFC21fCbVCSXIo="),
    ],
)
def test_known_hashes(hasher: LdapSha1Hasher, secret: str, hash: str) -> None:
    assert hasher.hash(secret) == hash
    assert hasher.verify(hash, secret)
    assert not hasher.verify(hash, "wrong")


def test_unsalted(hasher: LdapSha1Hasher) -> None:
    assert hasher.hash("password") == hasher.hash("password")


def test_verify_compares_full_string(hasher: LdapSha1Hasher) -> None:
    assert not hasher.verify("W6ph5Mm5Pz8GgiULbPgzG37mj9g=", "password")
    assert not hasher.verify("{SHA}W6ph5Mm5Pz8GgiULbPgzG37mj9g", "password")


def test_identify(hasher: LdapSha1Hasher) -> None:
    assert hasher.identify("{SHA}W6ph5Mm5Pz8GgiULbPgzG37mj9g=")
    assert not hasher.identify("W6ph5Mm5Pz8GgiULbPgzG37mj9g=")
