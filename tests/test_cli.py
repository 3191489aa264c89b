from __future__ import annotations

import getpass
import io
from typing import TYPE_CHECKING

import pytest

from libhtpasswd.algorithms import detect_algorithm
from libhtpasswd.cli import (
    EXIT_ERROR,
    EXIT_OK,
    EXIT_VERIFY_FAILED,
    PasswordPrompt,
    main,
)
from libhtpasswd.file import authenticate

if TYPE_CHECKING:
    from pathlib import Path


class _Terminal(io.StringIO):
    def isatty(self) -> bool:
        return True


@pytest.fixture
def password_file_path(tmp_path: Path) -> Path:
    return tmp_path.joinpath("htpasswd")


@pytest.fixture
def terminal_prompt() -> PasswordPrompt:
    return PasswordPrompt(stdin=_Terminal(), stream=io.StringIO())


def _answers(monkeypatch: pytest.MonkeyPatch, *answers: str) -> list[str]:
    prompts: list[str] = []
    pending = list(answers)

    def fake_getpass(prompt: str = "Password: ", stream=None) -> str:
        prompts.append(prompt)
        return pending.pop(0)

    monkeypatch.setattr(getpass, "getpass", fake_getpass)
    return prompts


def test_batch_add(password_file_path: Path, capsys: pytest.CaptureFixture) -> None:
    rc = main(["-b", "-p", str(password_file_path), "user1", "pass1"])
    assert rc == EXIT_OK
    assert password_file_path.read_text() == "user1:pass1\n"
    assert capsys.readouterr().out == "Adding password for user user1\n"


def test_batch_update(password_file_path: Path, capsys: pytest.CaptureFixture) -> None:
    main(["-b", "-p", str(password_file_path), "user1", "pass1"])
    capsys.readouterr()
    rc = main(["-b", "-p", str(password_file_path), "user1", "pass2"])
    assert rc == EXIT_OK
    assert password_file_path.read_text() == "user1:pass2\n"
    assert capsys.readouterr().out == "Updating password for user user1\n"


@pytest.mark.parametrize(
    ("flag", "algorithm"),
    [
        ("-B", "bcrypt"),
        ("--md5", "md5"),
        ("-s", "sha1"),
        ("--plain", "plain"),
    ],
)
def test_algorithm_flags(password_file_path: Path, flag: str, algorithm: str) -> None:
    rc = main(["-b", "-C", "4", flag, str(password_file_path), "user1", "pass1"])
    assert rc == EXIT_OK
    hash = password_file_path.read_text().rstrip("\n").split(":", 1)[1]
    assert detect_algorithm(hash) == algorithm
    assert authenticate(password_file_path, "user1", "pass1")


def test_default_bcrypt(password_file_path: Path) -> None:
    main(["-b", "-C", "4", str(password_file_path), "user1", "pass1"])
    assert password_file_path.read_text().startswith("user1:$2y$04$")


def test_conflicting_algorithms(password_file_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["-b", "-m", "-s", str(password_file_path), "user1", "pass1"])
    assert exc_info.value.code == 2


def test_invalid_cost(password_file_path: Path) -> None:
    with pytest.raises(SystemExit):
        main(["-b", "-C", "3", str(password_file_path), "user1", "pass1"])


def test_create_overwrites(password_file_path: Path) -> None:
    password_file_path.write_text("user9:pass9\n")
    rc = main(["-cb", "-p", str(password_file_path), "user1", "pass1"])
    assert rc == EXIT_OK
    assert password_file_path.read_text() == "user1:pass1\n"


def test_batch_requires_password(
    password_file_path: Path, capsys: pytest.CaptureFixture
) -> None:
    rc = main(["-b", str(password_file_path), "user1"])
    assert rc == EXIT_ERROR
    assert "Password is required in batch mode." in capsys.readouterr().err
    assert not password_file_path.exists()


def test_prompt_requires_terminal(
    password_file_path: Path, capsys: pytest.CaptureFixture
) -> None:
    prompt = PasswordPrompt(stdin=io.StringIO(), stream=io.StringIO())
    rc = main([str(password_file_path), "user1"], prompt=prompt)
    assert rc == EXIT_ERROR
    assert "requires a terminal" in capsys.readouterr().err


def test_prompt(
    password_file_path: Path,
    terminal_prompt: PasswordPrompt,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    prompts = _answers(monkeypatch, "pass1", "pass1")
    rc = main(["-p", str(password_file_path), "user1"], prompt=terminal_prompt)
    assert rc == EXIT_OK
    assert prompts == ["New password: ", "Re-type new password: "]
    assert password_file_path.read_text() == "user1:pass1\n"


def test_prompt_mismatch(
    password_file_path: Path,
    terminal_prompt: PasswordPrompt,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture,
) -> None:
    _answers(monkeypatch, "pass1", "pass2")
    rc = main(["-p", str(password_file_path), "user1"], prompt=terminal_prompt)
    assert rc == EXIT_ERROR
    assert "Passwords don't match." in capsys.readouterr().err
    assert not password_file_path.exists()


def test_delete(password_file_path: Path, capsys: pytest.CaptureFixture) -> None:
    password_file_path.write_text("user1:pass1\nuser2:pass2\n")
    assert main(["-D", str(password_file_path), "user1"]) == EXIT_OK
    assert password_file_path.read_text() == "user2:pass2\n"
    assert main(["-D", str(password_file_path), "user1"]) == EXIT_OK
    assert capsys.readouterr().out == (
        "Deleting password for user user1\nUser user1 not found\n"
    )


def test_delete_missing_file(
    password_file_path: Path, capsys: pytest.CaptureFixture
) -> None:
    assert main(["-D", str(password_file_path), "user1"]) == EXIT_ERROR
    assert capsys.readouterr().err.startswith("libhtpasswd: ")


def test_verify(password_file_path: Path) -> None:
    password_file_path.write_text("user1:{SHA}W6ph5Mm5Pz8GgiULbPgzG37mj9g=\n")
    path = str(password_file_path)
    assert main(["-vb", path, "user1", "password"]) == EXIT_OK
    assert main(["-vb", path, "user1", "wrong"]) == EXIT_VERIFY_FAILED
    assert main(["-vb", path, "user9", "password"]) == EXIT_VERIFY_FAILED


def test_verify_prompt(
    password_file_path: Path,
    terminal_prompt: PasswordPrompt,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    password_file_path.write_text("user1:{SHA}W6ph5Mm5Pz8GgiULbPgzG37mj9g=\n")
    prompts = _answers(monkeypatch, "password")
    rc = main(["-v", str(password_file_path), "user1"], prompt=terminal_prompt)
    assert rc == EXIT_OK
    assert prompts == ["Password: "]


def test_verify_crypt(password_file_path: Path, capsys: pytest.CaptureFixture) -> None:
    password_file_path.write_text("user2:2CHkkwa2AtqGs\n")
    rc = main(["-vb", str(password_file_path), "user2", "pass2"])
    assert rc == EXIT_ERROR
    assert "insecure" in capsys.readouterr().err


def test_invalid_username(
    password_file_path: Path, capsys: pytest.CaptureFixture
) -> None:
    rc = main(["-b", "-p", str(password_file_path), "user:1", "pass1"])
    assert rc == EXIT_ERROR
    assert "invalid characters" in capsys.readouterr().err
