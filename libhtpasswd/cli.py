"""htpasswd-like command line tool.

    libhtpasswd [-c] [-B|-m|-s|-p] FILE USERNAME
    libhtpasswd -b[c] [-B|-m|-s|-p] FILE USERNAME PASSWORD
    libhtpasswd -D FILE USERNAME
    libhtpasswd -v FILE USERNAME [PASSWORD]
"""

from __future__ import annotations

import argparse
import dataclasses
import getpass
import logging
import sys
from typing import TYPE_CHECKING, TextIO

from libhtpasswd._logging import logger
from libhtpasswd.context import HtpasswdContext
from libhtpasswd.file import add_user, authenticate, remove_user

if TYPE_CHECKING:
    from collections.abc import Sequence

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_VERIFY_FAILED = 3


class CommandError(Exception):
    """Problem with the command's input, reported to the user as-is."""


@dataclasses.dataclass
class PasswordPrompt:
    """Reads passwords without echoing them.

    ``stdin`` is only checked for being a terminal; ``getpass`` reads from the
    controlling terminal and writes prompts to ``stream``.
    """

    stdin: TextIO = dataclasses.field(default_factory=lambda: sys.stdin)
    stream: TextIO = dataclasses.field(default_factory=lambda: sys.stderr)

    def ask(self, prompt: str) -> str:
        if not self.stdin.isatty():
            raise CommandError("Password input requires a terminal.")
        return getpass.getpass(prompt, stream=self.stream)

    def ask_new(self) -> str:
        password = self.ask("New password: ")
        if self.ask("Re-type new password: ") != password:
            raise CommandError("Passwords don't match.")
        return password


def _cost(value: str) -> int:
    cost = int(value)
    if cost < 4 or cost > 31:
        raise argparse.ArgumentTypeError("bcrypt cost must be between 4 and 31")
    return cost


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="libhtpasswd",
        description="Manage user files for HTTP basic authentication.",
    )
    parser.add_argument("file", help="path to the htpasswd file")
    parser.add_argument("username")
    parser.add_argument(
        "password",
        nargs="?",
        help="password; prompted for on the terminal if omitted",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-c",
        "--create",
        action="store_true",
        help="create a new file, overwriting any existing file",
    )
    mode.add_argument(
        "-D",
        "--delete",
        action="store_true",
        help="remove the user from the file",
    )
    mode.add_argument(
        "-v",
        "--verify",
        action="store_true",
        help="check the user's password instead of changing it",
    )
    parser.add_argument(
        "-b",
        "--batch",
        action="store_true",
        help="batch mode; password is passed on the command line IN THE CLEAR",
    )

    algorithm = parser.add_mutually_exclusive_group()
    algorithm.add_argument(
        "-B",
        "--bcrypt",
        dest="algorithm",
        action="store_const",
        const="bcrypt",
        help="use bcrypt (default)",
    )
    algorithm.add_argument(
        "-m",
        "--md5",
        dest="algorithm",
        action="store_const",
        const="md5",
        help="use Apache's MD5 variant",
    )
    algorithm.add_argument(
        "-s",
        "--sha",
        dest="algorithm",
        action="store_const",
        const="sha1",
        help="use SHA1 (insecure)",
    )
    algorithm.add_argument(
        "-p",
        "--plain",
        dest="algorithm",
        action="store_const",
        const="plain",
        help="store the password in plaintext (insecure)",
    )
    parser.set_defaults(algorithm="bcrypt")

    parser.add_argument(
        "-C",
        "--cost",
        type=_cost,
        default=10,
        help="bcrypt cost factor, 4 to 31 (default: %(default)s)",
    )
    parser.add_argument("--verbose", action="store_true", help="log debug output")
    return parser


def _get_password(
    args: argparse.Namespace, prompt: PasswordPrompt, confirm: bool
) -> str:
    if args.password is not None:
        return args.password
    if args.batch:
        raise CommandError("Password is required in batch mode.")
    return prompt.ask_new() if confirm else prompt.ask("Password: ")


def _run(args: argparse.Namespace, prompt: PasswordPrompt) -> int:
    if args.delete:
        if remove_user(args.file, args.username):
            print(f"Deleting password for user {args.username}")
        else:
            print(f"User {args.username} not found")
        return EXIT_OK

    if args.verify:
        password = _get_password(args, prompt, confirm=False)
        if authenticate(args.file, args.username, password):
            print(f"Password for user {args.username} correct.")
            return EXIT_OK
        print("password verification failed", file=sys.stderr)
        return EXIT_VERIFY_FAILED

    password = _get_password(args, prompt, confirm=True)
    context = HtpasswdContext(default=args.algorithm, bcrypt_rounds=args.cost)
    existing = add_user(
        args.file,
        args.username,
        password,
        args.algorithm,
        new=args.create,
        context=context,
    )
    action = "Updating" if existing else "Adding"
    print(f"{action} password for user {args.username}")
    return EXIT_OK


def main(
    argv: Sequence[str] | None = None, prompt: PasswordPrompt | None = None
) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )
    try:
        return _run(args, prompt or PasswordPrompt())
    except (CommandError, ValueError, OSError) as err:
        logger.debug("command failed", exc_info=True)
        print(f"libhtpasswd: {err}", file=sys.stderr)
        return EXIT_ERROR
