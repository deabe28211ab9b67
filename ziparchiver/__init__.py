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
ZIPARCHIVER - add files to ZIP archives, extract them and manage archive comments.

Archives are updated by building a complete replacement and renaming it over
the original, and new entries never overwrite existing ones: a colliding
name is disambiguated with a ``New_`` prefix.
"""

__version__ = "0.1.0"

from .collector import collect_files
from .mutator import add_files, rebuild_archive, simple_add_files
from .naming import resolve_name
from .reader import default_destination, extract, list_entries, read_comment, write_comment

__all__ = [
    "add_files",
    "collect_files",
    "default_destination",
    "extract",
    "list_entries",
    "read_comment",
    "rebuild_archive",
    "resolve_name",
    "simple_add_files",
    "write_comment",
]
