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
Archive extraction and archive comment access.

Example:
    extract("backup.zip")              # into ./backup
    extract("backup.zip", "restore")   # into ./restore
    print(read_comment("backup.zip"))
    write_comment("backup.zip", "checked 2025-11-22")
"""

import logging
import os
import zipfile
import zlib
from pathlib import Path
from typing import Optional

from .constants import DEFAULT_COMMENT
from .errors import ArchiveFormatError, ArchiveIOError, PreconditionError
from .mutator import rebuild_archive
from .structures import ArchiveUpdate, ExtractionResult
from .utils import copy_stream, decode_comment, is_system_artifact, open_archive, require, safe_extract_path

logger = logging.getLogger(__name__)


def _require_existing(archive_path: str | os.PathLike) -> Path:
    require(archive_path, "archive path")
    archive_path = Path(archive_path)
    if not archive_path.is_file():
        raise PreconditionError(f"Can't find {archive_path.absolute()} file")
    return archive_path


def default_destination(archive_path: str | os.PathLike) -> Path:
    """Derive the extraction directory from the archive path.

    The last extension is stripped: ``backups/site.zip`` -> ``backups/site``.

    Raises:
        PreconditionError: If the archive file name has no extension.
    """
    text = os.fspath(archive_path)
    name = Path(text).name
    if name.rfind(".") <= 0:
        raise PreconditionError(
            f"Cannot derive a destination directory from '{text}': no extension to strip"
        )
    return Path(text[: text.rfind(".")])


def list_entries(archive_path: str | os.PathLike) -> list[str]:
    """List all entry names in the archive, in stored order."""
    archive_path = _require_existing(archive_path)
    with open_archive(archive_path) as z:
        return z.namelist()


def extract(
    archive_path: str | os.PathLike,
    destination: Optional[str | os.PathLike] = None,
) -> ExtractionResult:
    """Extract every entry of *archive_path* into *destination*.

    The destination directory is created (one level) if absent. Entries are
    written in stored order, creating intermediate directories as needed and
    overwriting existing files without warning. OS-generated artifacts
    (``__MACOSX``, ``.DS_Store``) are skipped.

    Args:
        archive_path: Archive to extract.
        destination: Target directory; defaults to the archive path without
            its extension.

    Returns:
        ExtractionResult listing the written files and skipped entries.

    Raises:
        PreconditionError: If archive_path is None, or no destination was
            given and none can be derived.
        ArchiveFormatError: If the archive or an entry cannot be decoded.
        ArchiveIOError: If the archive cannot be read, a file cannot be
            written, or an entry would land outside the destination.
    """
    require(archive_path, "archive path")
    archive_path = Path(archive_path)
    destination = default_destination(archive_path) if destination is None else Path(destination)
    result = ExtractionResult(archive_path=archive_path, destination=destination)

    with open_archive(archive_path) as z:
        try:
            if not destination.exists():
                destination.mkdir()

            for info in z.infolist():
                name = info.filename
                if is_system_artifact(name):
                    logger.debug("Skipping artifact entry %s", name)
                    result.skipped.append(name)
                    continue

                target_path = safe_extract_path(destination, name)
                if info.is_dir():
                    target_path.mkdir(parents=True, exist_ok=True)
                    continue

                target_path.parent.mkdir(parents=True, exist_ok=True)
                try:
                    src = z.open(info)
                except (NotImplementedError, RuntimeError) as e:
                    # Unsupported compression method or encrypted entry
                    raise ArchiveFormatError(f"Cannot extract entry '{name}': {e}") from e
                with src, open(target_path, "wb") as dst:
                    copy_stream(src, dst)

                logger.debug("Extracted %s to %s", name, target_path)
                result.extracted.append(target_path)
        except (zipfile.BadZipFile, zlib.error) as e:
            raise ArchiveFormatError(f"Corrupt entry data in {archive_path}: {e}") from e
        except OSError as e:
            raise ArchiveIOError(f"Failed to extract {archive_path} into {destination}: {e}") from e

    logger.info("Extracted %d files from %s into %s", len(result.extracted), archive_path, destination)
    return result


def read_comment(archive_path: str | os.PathLike) -> str:
    """Return the archive comment.

    Metadata read failures are logged and the default (empty) comment is
    returned instead of raising.

    Raises:
        PreconditionError: If archive_path is None or does not exist.
    """
    archive_path = _require_existing(archive_path)
    try:
        with open_archive(archive_path) as z:
            return decode_comment(z.comment)
    except ArchiveIOError as e:
        logger.warning("Cannot read comment of %s: %s", archive_path, e)
        return DEFAULT_COMMENT


def write_comment(archive_path: str | os.PathLike, comment: str) -> ArchiveUpdate:
    """Replace the comment of an existing archive.

    Every entry is copied forward unchanged into a replacement archive that
    carries the new comment, which is then renamed over the original.

    Raises:
        PreconditionError: If an argument is None or the archive does not exist.
        ArchiveIOError: See ``mutator.rebuild_archive``.
    """
    archive_path = _require_existing(archive_path)
    require(comment, "comment")
    return rebuild_archive(archive_path, comment, [])
