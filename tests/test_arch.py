from pytest_archon import archrule


def test_core_does_not_import_cli() -> None:
    (
        archrule("forbid-cli-import")
        .match("libhtpasswd*")
        .exclude("libhtpasswd.cli")
        .exclude("libhtpasswd.__main__")
        .should_not_import("libhtpasswd.cli")
        .check("libhtpasswd")
    )


def test_hashers_do_not_import_file_store() -> None:
    (
        archrule("hashers-are-standalone")
        .match("libhtpasswd.hashers*")
        .should_not_import("libhtpasswd.file", "libhtpasswd.entries")
        .check("libhtpasswd")
    )
