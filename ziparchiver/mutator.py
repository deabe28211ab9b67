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
Incremental archive updates.

An archive is never modified in place. Every mutation builds a complete
replacement next to the original (all existing entries copied forward, then
the new files appended, then the comment set) and only then swaps it in with
a single rename. A failure while building removes the replacement and leaves
the original untouched.

Every mutation stores the comment it is given. Adding files with an empty
comment therefore clears an existing comment; pass the current comment
(see ``reader.read_comment``) to keep it.

Concurrent mutations of the same archive path are not supported: callers
must serialize them.

Example:
    add_files("backup.zip", "nightly", ["docs", "notes.txt"])
"""

import logging
import os
import tempfile
import zipfile
import zlib
from pathlib import Path
from typing import BinaryIO, Iterable, MutableSet

from .collector import collect_files
from .constants import DEFAULT_COMMENT, TEMP_SUFFIX
from .errors import ArchiveFormatError, ArchiveIOError, AtomicReplaceError
from .naming import resolve_name
from .structures import ArchiveUpdate, PendingFile
from .utils import copy_stream, encode_comment, entry_name_for_path, open_archive, require

logger = logging.getLogger(__name__)


def _clone_info(info: zipfile.ZipInfo) -> zipfile.ZipInfo:
    """Copy the metadata of an existing entry for writing into a new archive."""
    clone = zipfile.ZipInfo(info.filename, date_time=info.date_time)
    clone.compress_type = info.compress_type
    clone.comment = info.comment
    clone.create_system = info.create_system
    clone.internal_attr = info.internal_attr
    clone.external_attr = info.external_attr
    # Lets zipfile pick ZIP64 headers for large entries up front
    clone.file_size = info.file_size
    return clone


def _copy_entries(source: zipfile.ZipFile, target: zipfile.ZipFile, used: MutableSet[str]) -> list[str]:
    """Stream every entry of *source* into *target*, recording names in *used*."""
    copied = []

    for info in source.infolist():
        used.add(info.filename)
        clone = _clone_info(info)

        if info.is_dir():
            target.writestr(clone, b"")
        else:
            try:
                src = source.open(info)
            except (NotImplementedError, RuntimeError) as e:
                # Unsupported compression method or encrypted entry
                raise ArchiveFormatError(f"Cannot copy entry '{info.filename}': {e}") from e
            with src, target.open(clone, "w") as dst:
                copy_stream(src, dst)

        logger.debug("Copied entry %s", info.filename)
        copied.append(info.filename)

    return copied


def _add_file(target: zipfile.ZipFile, source: Path, name: str) -> None:
    """Write the content of *source* into *target* under entry *name*."""
    info = zipfile.ZipInfo.from_file(source, arcname=name, strict_timestamps=False)
    info.compress_type = zipfile.ZIP_DEFLATED

    with open(source, "rb") as src, target.open(info, "w") as dst:
        copy_stream(src, dst)


def _is_same_file(path: Path, other: Path) -> bool:
    try:
        return os.path.samefile(path, other)
    except OSError:
        return False


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _write_replacement(
    handle: BinaryIO,
    archive_path: Path,
    comment: bytes,
    files: list[Path],
    update: ArchiveUpdate,
) -> None:
    """Build the complete replacement archive into the open *handle*."""
    used: set[str] = set()

    with zipfile.ZipFile(handle, "w", compression=zipfile.ZIP_DEFLATED) as target:
        target.comment = comment

        if not update.created:
            if os.stat(archive_path).st_size == 0:
                logger.debug("Treating empty file %s as an empty archive", archive_path)
            else:
                with open_archive(archive_path) as source:
                    update.copied = _copy_entries(source, target, used)

        for file_path in files:
            intended = entry_name_for_path(file_path)
            name = resolve_name(intended, used)
            _add_file(target, file_path, name)

            pending = PendingFile(source=file_path, intended_name=intended, name=name)
            if pending.renamed:
                logger.warning("Entry name %s is already taken; storing %s as %s", intended, file_path, name)
            else:
                logger.debug("Added %s as %s", file_path, name)
            update.added.append(pending)


def rebuild_archive(
    archive_path: str | os.PathLike,
    comment: str,
    files: Iterable[str | os.PathLike],
) -> ArchiveUpdate:
    """Rebuild *archive_path* with its current entries, *files* and *comment*.

    Steps:
    1. Expand *files* into a flat file list (before anything is written, so
       a missing input leaves the archive untouched).
    2. Build a replacement in a temporary file in the archive's directory:
       copy every existing entry forward, seeding the used-name set, then
       add each file under a name resolved against that set.
    3. Rename the replacement over the original.

    An existing zero-byte file at *archive_path* is treated as an archive
    with no entries and replaced; any other file that is not a ZIP archive
    is refused with ArchiveFormatError.

    Args:
        archive_path: Archive to update; created if it does not exist.
        comment: Archive comment to store (replaces any existing comment).
        files: Files and directories to add; may be empty.

    Returns:
        ArchiveUpdate describing the new archive.

    Raises:
        PreconditionError: If the comment does not fit in the archive.
        ArchiveFormatError: If the existing archive cannot be read as ZIP.
        ArchiveIOError: If reading or writing fails while building; the
            original archive is left unchanged.
        AtomicReplaceError: If the finished replacement cannot be renamed
            into place; the temporary file is left on disk.
    """
    archive_path = Path(archive_path)
    comment_bytes = encode_comment(comment)

    pending_files = []
    for file_path in collect_files(files):
        if _is_same_file(file_path, archive_path):
            logger.warning("Not adding archive %s to itself", file_path)
            continue
        pending_files.append(file_path)

    update = ArchiveUpdate(archive_path=archive_path, comment=comment, created=not archive_path.exists())

    directory = archive_path.parent
    try:
        fd, temp_name = tempfile.mkstemp(
            prefix=f"{archive_path.name}.", suffix=TEMP_SUFFIX, dir=directory
        )
    except OSError as e:
        raise ArchiveIOError(f"Cannot create temporary archive in {directory}: {e}") from e
    temp_path = Path(temp_name)
    logger.debug("Building replacement for %s in %s", archive_path, temp_path)

    try:
        try:
            with os.fdopen(fd, "wb") as handle:
                _write_replacement(handle, archive_path, comment_bytes, pending_files, update)
            if update.created:
                os.chmod(temp_path, 0o666 & ~_current_umask())
            else:
                os.chmod(temp_path, os.stat(archive_path).st_mode & 0o7777)
        except (zipfile.BadZipFile, zlib.error) as e:
            raise ArchiveFormatError(f"Corrupt entry data in {archive_path}: {e}") from e
        except OSError as e:
            raise ArchiveIOError(f"Failed to build archive {archive_path}: {e}") from e
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise

    try:
        os.replace(temp_path, archive_path)
    except OSError as e:
        raise AtomicReplaceError(
            f"Can't create the {archive_path.absolute()} file: {e}",
            archive_path=archive_path,
            temp_path=temp_path,
        ) from e

    logger.info(
        "%s %s: %d entries copied, %d added",
        "Created" if update.created else "Updated",
        archive_path,
        len(update.copied),
        len(update.added),
    )
    return update


def add_files(
    archive_path: str | os.PathLike,
    comment: str,
    files: Iterable[str | os.PathLike],
) -> ArchiveUpdate:
    """Add files to an existing archive, or create a new one with them.

    Directories are expanded recursively. Entry names come from the paths
    as given; a name already used in the archive gets ``New_`` prepended to
    its base name until it is unique, so no entry is ever overwritten.

    Args:
        archive_path: Path of the archive to update or create.
        comment: Comment stored on the resulting archive.
        files: Files and directories to add.

    Returns:
        ArchiveUpdate describing the new archive.

    Raises:
        PreconditionError: If any argument is None.
        ArchiveIOError: See ``rebuild_archive``.
    """
    require(archive_path, "archive path")
    require(comment, "comment")
    require(files, "file paths")
    if isinstance(files, (str, os.PathLike)):
        files = [files]

    return rebuild_archive(archive_path, comment, files)


def simple_add_files(archive_path: str | os.PathLike, files: Iterable[str | os.PathLike]) -> ArchiveUpdate:
    """Same as ``add_files`` with the default (empty) comment."""
    return add_files(archive_path, DEFAULT_COMMENT, files)
