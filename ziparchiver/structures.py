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
Result structures returned by archive operations.

These dataclasses describe what an operation did, so callers (and the CLI)
can report renamed entries and extracted files without re-reading the
archive.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class PendingFile:
    """A file queued for addition and the entry name it was stored under."""

    source: Path
    intended_name: str
    name: str

    @property
    def renamed(self) -> bool:
        """True if the intended name was taken and a new one was chosen."""
        return self.name != self.intended_name


@dataclass
class ArchiveUpdate:
    """Outcome of a completed copy-and-replace mutation.

    Attributes:
        archive_path: Archive that was created or replaced.
        comment: Archive comment now stored.
        created: True if the archive did not exist before the operation.
        copied: Names of the entries carried over from the previous archive.
        added: Files added by this operation, in the order they were written.
    """

    archive_path: Path
    comment: str
    created: bool
    copied: list[str] = field(default_factory=list)
    added: list[PendingFile] = field(default_factory=list)

    @property
    def renamed(self) -> list[PendingFile]:
        """Added files whose entry name had to be disambiguated."""
        return [pending for pending in self.added if pending.renamed]

    @property
    def entry_names(self) -> list[str]:
        """All entry names in the resulting archive, in stored order."""
        return self.copied + [pending.name for pending in self.added]


@dataclass
class ExtractionResult:
    """Outcome of extracting an archive.

    Attributes:
        archive_path: Archive that was read.
        destination: Directory the entries were written under.
        extracted: Paths of the files written, in stored order.
        skipped: Entry names left out by the artifact filter.
    """

    archive_path: Path
    destination: Path
    extracted: list[Path] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
