import io
import zipfile

import pytest

from ziparchiver.constants import MAX_COMMENT_LENGTH
from ziparchiver.errors import ArchiveFormatError, ArchiveIOError, PreconditionError
from ziparchiver.utils import (
    copy_stream,
    decode_comment,
    encode_comment,
    entry_name_for_path,
    is_system_artifact,
    open_archive,
    require,
    safe_extract_path,
)


@pytest.mark.parametrize(
    "name",
    ["__MACOSX", "__MACOSX/a.txt", ".DS_Store", "docs/.DS_Store", "._x__MACOSX"],
)
def test_artifacts_are_recognised(name):
    assert is_system_artifact(name)


@pytest.mark.parametrize("name", ["a.txt", "MACOSX", "DS_Store", "docs/store.txt"])
def test_regular_names_are_not_artifacts(name):
    assert not is_system_artifact(name)


def test_copy_stream_preserves_bytes_across_chunks():
    data = bytes(range(256)) * 40
    dst = io.BytesIO()
    assert copy_stream(io.BytesIO(data), dst, buffer_size=7) == len(data)
    assert dst.getvalue() == data


def test_copy_stream_empty_source():
    dst = io.BytesIO()
    assert copy_stream(io.BytesIO(b""), dst) == 0
    assert dst.getvalue() == b""


@pytest.mark.parametrize(
    "path, expected",
    [
        ("a.txt", "a.txt"),
        ("docs/a.txt", "docs/a.txt"),
        ("./docs/a.txt", "docs/a.txt"),
        ("/abs/dir/a.txt", "abs/dir/a.txt"),
        ("../up/a.txt", "up/a.txt"),
        ("docs/../a.txt", "a.txt"),
    ],
)
def test_entry_name_for_path(path, expected):
    assert entry_name_for_path(path) == expected


def test_safe_extract_path_inside_destination(tmp_path):
    assert safe_extract_path(tmp_path, "docs/a.txt") == tmp_path / "docs/a.txt"


@pytest.mark.parametrize("name", ["../evil.txt", "docs/../../evil.txt", "/etc/evil"])
def test_safe_extract_path_refuses_traversal(tmp_path, name):
    with pytest.raises(ArchiveIOError):
        safe_extract_path(tmp_path, name)


def test_comment_round_trips_utf8():
    assert decode_comment(encode_comment("résumé ✓")) == "résumé ✓"


def test_comment_too_long_is_rejected():
    encode_comment("x" * MAX_COMMENT_LENGTH)
    with pytest.raises(PreconditionError):
        encode_comment("x" * (MAX_COMMENT_LENGTH + 1))


def test_decode_comment_replaces_invalid_bytes():
    assert decode_comment(b"ok\xff") == "ok\ufffd"


def test_require_rejects_none():
    require("", "comment")
    with pytest.raises(PreconditionError, match="comment"):
        require(None, "comment")


def test_precondition_error_is_a_value_error():
    with pytest.raises(ValueError):
        require(None, "archive path")


def test_open_archive_translates_errors(tmp_path):
    with pytest.raises(ArchiveIOError):
        open_archive(tmp_path / "missing.zip")

    bogus = tmp_path / "bogus.zip"
    bogus.write_bytes(b"not a zip at all")
    with pytest.raises(ArchiveFormatError):
        open_archive(bogus)

    good = tmp_path / "good.zip"
    with zipfile.ZipFile(good, "w") as zf:
        zf.writestr("a.txt", b"a")
    with open_archive(good) as zf:
        assert zf.namelist() == ["a.txt"]
