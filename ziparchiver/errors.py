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
Custom exception classes for the archiver.

This module defines specific exception types for the different ways an
archive operation can fail, so callers can tell a rejected call apart from
an I/O failure and from a failed final swap.
"""

from pathlib import Path
from typing import Optional


class ArchiverError(Exception):
    """Base exception class for all archiver errors."""

    pass


class PreconditionError(ArchiverError, ValueError):
    """Raised when a call is rejected before any I/O is attempted.

    This exception is raised when:
    - A required argument (path, comment, file list) is missing or None
    - The archive to read or comment on does not exist
    - A default extraction directory cannot be derived from the archive name
    - The comment does not fit in the archive's comment field
    """

    pass


class ArchiveIOError(ArchiverError):
    """Raised when an underlying read, write or rename fails.

    This exception is raised when:
    - An input file or the archive cannot be opened or read
    - The replacement archive or an extracted file cannot be written
    - The disk is full or permission is denied

    The original ``OSError`` is available as ``__cause__``.
    """

    pass


class ArchiveFormatError(ArchiveIOError):
    """Raised when an existing file is not a readable ZIP archive."""

    pass


class AtomicReplaceError(ArchiveIOError):
    """Raised when the fully built replacement cannot be moved into place.

    Unlike a failure while building, this can leave the original archive
    stale and the temporary replacement orphaned on disk. ``temp_path``
    names the orphan so the caller can reconcile.
    """

    def __init__(self, message: str, archive_path: Path, temp_path: Optional[Path] = None):
        super().__init__(message)
        self.archive_path = archive_path
        self.temp_path = temp_path


class NamingExhaustedError(ArchiverError):
    """Raised when no unique entry name fits in the ZIP name-length field.

    Each disambiguation attempt grows the candidate name, so this only
    happens for adversarially large used-name sets.
    """

    pass
