import pytest

from libhtpasswd.errors import InsecureAlgorithmError, UnsupportedAlgorithmError
from libhtpasswd.hashers.des_crypt import DesCryptHasher


def test_verify_refused() -> None:
    with pytest.raises(InsecureAlgorithmError, match="insecure") as exc_info:
        DesCryptHasher().verify("2CHkkwa2AtqGs", "pass2")
    assert exc_info.value.algorithm == "crypt"


def test_hash_refused() -> None:
    with pytest.raises(UnsupportedAlgorithmError):
        DesCryptHasher().hash("pass2")


@pytest.mark.asyncio
async def test_verify_async_refused() -> None:
    with pytest.raises(InsecureAlgorithmError):
        await DesCryptHasher().verify_async("2CHkkwa2AtqGs", "pass2")


def test_identify() -> None:
    assert DesCryptHasher().identify("2CHkkwa2AtqGs")
    assert not DesCryptHasher().identify("password")
