"""
Copyright 2025 DNAi inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

"""
Utility functions for the archiver.

This module provides the artifact filter, chunked stream copying, entry name
derivation, safe extraction paths and archive comment encoding.
"""

import os
import posixpath
import zipfile
from pathlib import Path
from typing import Any, BinaryIO

from .constants import ARTIFACT_MARKERS, BUFFER_SIZE, MAX_COMMENT_LENGTH, TEXT_ENCODING
from .errors import ArchiveFormatError, ArchiveIOError, PreconditionError


def require(value: Any, description: str) -> None:
    """Reject a missing argument before any I/O happens.

    Args:
        value: Argument value to check.
        description: Human-readable description used in the error message.

    Raises:
        PreconditionError: If value is None.
    """
    if value is None:
        raise PreconditionError(f"Expected {description} value, but found None!")


def is_system_artifact(name: str) -> bool:
    """Check whether a name belongs to OS-generated bookkeeping.

    Only OS X artifacts are recognised: ``__MACOSX`` resource-fork
    directories and ``.DS_Store`` files. The check is a substring match, so
    it works on bare file names as well as full entry names.

    Args:
        name: File name, directory name or slash-separated entry name.

    Returns:
        True if the name matches any artifact marker.
    """
    return any(marker in name for marker in ARTIFACT_MARKERS)


def copy_stream(src: BinaryIO, dst: BinaryIO, buffer_size: int = BUFFER_SIZE) -> int:
    """Copy everything from src to dst in fixed-size chunks.

    Args:
        src: Binary file-like object to read from.
        dst: Binary file-like object to write to.
        buffer_size: Chunk size in bytes.

    Returns:
        Number of bytes copied.
    """
    total = 0
    while True:
        chunk = src.read(buffer_size)
        if not chunk:
            break
        dst.write(chunk)
        total += len(chunk)
    return total


def entry_name_for_path(path: str | os.PathLike) -> str:
    """Derive the in-archive entry name for a filesystem path.

    The path is kept as given (relative paths stay relative) but normalised
    to a slash-separated name that cannot point outside an extraction root:

    - OS separators become ``/``
    - a drive letter and leading ``/`` are dropped
    - ``.`` components are dropped and ``..`` components are folded
    - leading ``..`` components are dropped

    Args:
        path: Filesystem path of a file being added.

    Returns:
        Entry name, e.g. ``"docs/a.txt"`` for ``"./docs/a.txt"``.
    """
    raw = os.path.splitdrive(os.fspath(path))[1]
    if os.sep != "/":
        raw = raw.replace(os.sep, "/")
    if os.altsep and os.altsep != "/":
        raw = raw.replace(os.altsep, "/")

    parts = posixpath.normpath(raw).split("/")
    while parts and parts[0] in ("", ".", ".."):
        parts.pop(0)
    return "/".join(parts)


def safe_extract_path(output_dir: Path, name: str) -> Path:
    """Compute the extraction target for an entry, refusing path traversal.

    Args:
        output_dir: Destination directory of the extraction.
        name: Entry name as stored in the archive.

    Returns:
        Target path inside output_dir.

    Raises:
        ArchiveIOError: If the entry is absolute or resolves outside output_dir.
    """
    normalized = name.replace("\\", "/")
    if normalized.startswith("/") or os.path.isabs(normalized):
        raise ArchiveIOError(f"Refusing to extract absolute entry name: {name}")

    root = output_dir.resolve()
    target = (root / normalized).resolve()
    if target != root and root not in target.parents:
        raise ArchiveIOError(f"Refusing to extract entry outside destination: {name}")
    return output_dir / normalized


def encode_comment(comment: str) -> bytes:
    """Encode an archive comment for storage.

    Args:
        comment: Comment text.

    Returns:
        UTF-8 encoded comment.

    Raises:
        PreconditionError: If the encoded comment exceeds the ZIP comment field.
    """
    data = comment.encode(TEXT_ENCODING)
    if len(data) > MAX_COMMENT_LENGTH:
        raise PreconditionError(
            f"ZIP file comment too long: {len(data)} bytes (max {MAX_COMMENT_LENGTH})"
        )
    return data


def decode_comment(data: bytes) -> str:
    """Decode a stored archive comment, replacing undecodable bytes."""
    return data.decode(TEXT_ENCODING, errors="replace")


def open_archive(archive_path: str | os.PathLike) -> zipfile.ZipFile:
    """Open an existing archive for reading, translating failures.

    Args:
        archive_path: Path of the ZIP archive.

    Returns:
        Open ``zipfile.ZipFile``; use it as a context manager.

    Raises:
        ArchiveFormatError: If the file is not a ZIP archive.
        ArchiveIOError: If the file cannot be opened.
    """
    try:
        return zipfile.ZipFile(archive_path, "r")
    except zipfile.BadZipFile as e:
        raise ArchiveFormatError(f"Not a valid ZIP archive: {archive_path}: {e}") from e
    except OSError as e:
        raise ArchiveIOError(f"Cannot open archive {archive_path}: {e}") from e
