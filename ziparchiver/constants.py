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
Fixed values used by the archiver: buffer sizes, artifact markers, naming
tokens and ZIP format limits.

Nothing here is read from the environment; these constants are the whole
configuration surface of the library.
"""

# Chunk size used when streaming entry and file content
BUFFER_SIZE = 1024

# Substrings marking OS-generated bookkeeping files and directories (OS X)
ARTIFACT_MARKERS = ("__MACOSX", ".DS_Store")

# Token prepended to a colliding base name until it becomes unique
DISAMBIGUATION_PREFIX = "New_"

# Comment applied when the caller does not supply one
DEFAULT_COMMENT = ""

# Text encoding for entry names and archive comments
TEXT_ENCODING = "utf-8"

# Classic ZIP limits (16-bit length fields)
MAX_NAME_LENGTH = 0xFFFF  # File name length in bytes
MAX_COMMENT_LENGTH = 0xFFFF  # Archive comment length in bytes

# Suffix of the replacement archive built next to the original
TEMP_SUFFIX = ".tmp"

# CLI usage message printed for malformed invocations
USAGE = (
    "Bad input, correct format: \n"
    "(Compress <Destination File> <Comment> <Files to compress>+)\n"
    "| (Uncompress <Source File> <Destination dir>?)\n"
    "| (Comment <Destination File> <Comment>)\n"
    "| (GetComment <Source File>)\n"
    "| (List <Source File>)\n"
    "All inputs must be without brackets!"
)
