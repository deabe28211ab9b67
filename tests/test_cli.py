import zipfile

import pytest

from tests.helpers import write_file, zip_comment, zip_names
from ziparchiver import __version__
from ziparchiver.__main__ import main
from ziparchiver.constants import USAGE


def _run(argv):
    """Run the CLI and return its exit status (0 when it returns normally)."""
    try:
        main(argv)
    except SystemExit as e:
        return e.code
    return 0


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["compress"],
        ["compress", "out.zip", "comment"],
        ["uncompress"],
        ["comment", "out.zip"],
        ["comment", "out.zip", "a", "b"],
        ["getcomment"],
        ["frobnicate", "out.zip"],
    ],
)
def test_malformed_input_prints_usage_and_exits_cleanly(workdir, capsys, argv):
    assert _run(argv) == 0
    assert USAGE in capsys.readouterr().out
    assert not (workdir / "out.zip").exists()


def test_compress_then_uncompress(workdir, capsys):
    write_file(workdir / "docs/a.txt", "alpha")
    write_file(workdir / "b.txt", "beta")

    assert _run(["compress", "out.zip", "v1", "docs", "b.txt"]) == 0
    assert zip_names(workdir / "out.zip") == ["docs/a.txt", "b.txt"]
    assert zip_comment(workdir / "out.zip") == b"v1"

    assert _run(["uncompress", "out.zip"]) == 0
    assert (workdir / "out/docs/a.txt").read_bytes() == b"alpha"
    assert (workdir / "out/b.txt").read_bytes() == b"beta"

    assert _run(["uncompress", "out.zip", "elsewhere"]) == 0
    assert (workdir / "elsewhere/b.txt").read_bytes() == b"beta"


def test_command_word_is_case_insensitive(workdir, capsys):
    write_file(workdir / "a.txt", "a")

    assert _run(["COMPRESS", "out.zip", "first", "a.txt"]) == 0
    assert _run(["Comment", "out.zip", "second"]) == 0
    capsys.readouterr()
    assert _run(["GetComment", "out.zip"]) == 0

    assert capsys.readouterr().out == "second\n"


def test_compress_reports_renamed_entries(workdir, capsys):
    write_file(workdir / "a.txt", "a")
    _run(["compress", "out.zip", "", "a.txt"])
    capsys.readouterr()

    assert _run(["compress", "out.zip", "", "a.txt"]) == 0

    assert capsys.readouterr().out == "a.txt -> New_a.txt\n"


def test_list_prints_entries(workdir, capsys, make_zip):
    make_zip(workdir / "out.zip", {"z.txt": b"z", "d/a.txt": b"a"})

    assert _run(["list", "out.zip"]) == 0

    assert capsys.readouterr().out == "z.txt\nd/a.txt\n"


def test_getcomment_on_missing_archive_exits_2(workdir, capsys):
    assert _run(["getcomment", "missing.zip"]) == 2
    assert capsys.readouterr().err.startswith("ziparchiver: Can't find")


def test_compress_missing_input_exits_1(workdir, capsys):
    assert _run(["compress", "out.zip", "c", "missing.txt"]) == 1
    assert "missing.txt" in capsys.readouterr().err
    assert not (workdir / "out.zip").exists()


def test_uncompress_without_extension_exits_2(workdir, capsys, make_zip):
    make_zip(workdir / "archive", {"a.txt": b"a"})
    assert _run(["uncompress", "archive"]) == 2


def test_uncompress_corrupt_archive_exits_1(workdir, capsys):
    write_file(workdir / "bad.zip", b"garbage")
    assert _run(["uncompress", "bad.zip"]) == 1
    assert "ziparchiver:" in capsys.readouterr().err


def test_verbose_flag_is_accepted(workdir):
    write_file(workdir / "a.txt", "a")
    assert _run(["-vv", "compress", "out.zip", "", "a.txt"]) == 0
    with zipfile.ZipFile(workdir / "out.zip") as zf:
        assert zf.read("a.txt") == b"a"


def test_version(capsys):
    assert _run(["--version"]) == 0
    assert __version__ in capsys.readouterr().out


def test_dash_leading_comment_and_path_are_taken_literally(workdir, capsys):
    write_file(workdir / "-notes.txt", "n")
    assert _run(["-v", "compress", "out.zip", "-draft", "-notes.txt"]) == 0
    assert zip_comment(workdir / "out.zip") == b"-draft"
    assert zip_names(workdir / "out.zip") == ["-notes.txt"]

    assert _run(["Comment", "out.zip", "--final"]) == 0
    assert zip_comment(workdir / "out.zip") == b"--final"


def test_explicit_double_dash_is_accepted(workdir):
    write_file(workdir / "a.txt", "a")
    assert _run(["compress", "--", "out.zip", "-x", "a.txt"]) == 0
    assert zip_comment(workdir / "out.zip") == b"-x"


def test_command_help(capsys):
    assert _run(["compress", "--help"]) == 0
    assert "archive" in capsys.readouterr().out
