import zipfile
from pathlib import Path

import pytest


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test from inside an empty directory so relative paths are short."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def make_zip():
    """Build a ZIP archive from a {name: bytes} mapping with the stdlib writer."""

    def _make_zip(path: Path, entries: dict, comment: bytes = b"") -> Path:
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            zf.comment = comment
            for name, data in entries.items():
                zf.writestr(name, data)
        return path

    return _make_zip
