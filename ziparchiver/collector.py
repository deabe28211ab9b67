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
Expansion of input paths into the flat list of files to archive.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List

from .errors import ArchiveIOError, PreconditionError
from .utils import is_system_artifact

logger = logging.getLogger(__name__)


def _walk_directory(directory: Path) -> List[Path]:
    """Return every regular file below *directory*, skipping artifacts.

    A file is skipped when its own name or the name of the directory that
    directly contains it is an artifact. Artifact subdirectories are not
    descended into. Symlinked subdirectories are followed, except a link
    back to one of its own ancestors, which would loop forever.
    """
    results: List[Path] = []
    # Real paths of each walked directory and all of its ancestors
    lineage = {os.fspath(directory): {os.path.realpath(directory)}}

    for root, dirs, files in os.walk(directory, followlinks=True):
        root_path = Path(root)
        ancestors = lineage.pop(root)

        kept = []
        for name in sorted(dirs):
            if is_system_artifact(name):
                continue
            child = os.path.join(root, name)
            real = os.path.realpath(child)
            if real in ancestors:
                logger.warning("Not following %s: it links back to %s", child, real)
                continue
            lineage[child] = ancestors | {real}
            kept.append(name)
        dirs[:] = kept

        if is_system_artifact(root_path.name):
            logger.debug("Skipping files in artifact directory %s", root_path)
            continue

        for filename in sorted(files):
            file_path = root_path / filename
            if is_system_artifact(filename):
                logger.debug("Skipping artifact file %s", file_path)
                continue
            if not file_path.is_file():
                logger.debug("Skipping %s: not a regular file", file_path)
                continue
            results.append(file_path)

    return results


def collect_files(paths: Iterable[str | os.PathLike]) -> List[Path]:
    """Expand files and directories into a flat, ordered list of files.

    Directories are walked recursively (entries sorted by name at each
    level, following symlinked subdirectories); regular files are included
    directly. OS-generated artifacts such as
    ``__MACOSX`` directories and ``.DS_Store`` files are left out. Empty
    directories contribute nothing.

    The returned paths keep the form they were given in, so
    ``collect_files(["docs"])`` yields ``docs/a.txt`` rather than an
    absolute path.

    Args:
        paths: Filesystem paths of files and directories.

    Returns:
        List of regular-file paths in traversal order.

    Raises:
        PreconditionError: If paths is None.
        ArchiveIOError: If an input path does not exist or is neither a
            regular file nor a directory.
    """
    if paths is None:
        raise PreconditionError("Expected file paths value, but found None!")

    results: List[Path] = []

    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            results.extend(_walk_directory(path))
        elif path.is_file():
            if is_system_artifact(path.name):
                logger.debug("Skipping artifact file %s", path)
                continue
            results.append(path)
        elif path.exists():
            # FIFOs, sockets and devices have no fixed content to archive
            raise ArchiveIOError(f"Not a regular file or directory: {path}")
        else:
            raise ArchiveIOError(f"No such file or directory: {path}")

    return results
