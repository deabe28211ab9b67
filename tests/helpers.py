import zipfile
from pathlib import Path


def write_file(path: Path, data: bytes | str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, str):
        data = data.encode()
    path.write_bytes(data)
    return path


def zip_names(path: Path) -> list:
    with zipfile.ZipFile(path) as zf:
        return zf.namelist()


def zip_comment(path: Path) -> bytes:
    with zipfile.ZipFile(path) as zf:
        return zf.comment
