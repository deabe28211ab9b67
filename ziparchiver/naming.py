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
Entry name collision resolution.

Within one archive every entry name must be unique. When a new file would
reuse a taken name, its base name is prefixed with ``New_`` (repeatedly, if
needed) while the directory part stays the same::

    used = {"docs/a.txt"}
    resolve_name("docs/a.txt", used)  # -> "docs/New_a.txt"
    resolve_name("docs/a.txt", used)  # -> "docs/New_New_a.txt"
"""

from typing import MutableSet

from .constants import DISAMBIGUATION_PREFIX, MAX_NAME_LENGTH, TEXT_ENCODING
from .errors import NamingExhaustedError


def split_name(name: str) -> tuple[str, str]:
    """Split an entry name into its directory prefix and base name.

    The prefix keeps its trailing slash; it is empty for top-level names.

    Args:
        name: Slash-separated entry name.

    Returns:
        Tuple of (prefix, base), e.g. ``("docs/", "a.txt")``.
    """
    index = name.rfind("/")
    return name[: index + 1], name[index + 1 :]


def resolve_name(candidate: str, used: MutableSet[str]) -> str:
    """Return a name not yet in *used* and record it there.

    Every retry is strictly longer than the last, so the loop ends once the
    candidate leaves the (finite) set. The chosen name is added to *used*
    before returning, so later calls in the same operation see it as taken.

    Args:
        candidate: Intended entry name.
        used: Names already taken in the target archive; mutated in place.

    Returns:
        The candidate itself, or the candidate with its base name prefixed
        by ``New_`` as many times as needed.

    Raises:
        NamingExhaustedError: If the next candidate no longer fits in the
            ZIP file name field.
    """
    prefix, base = split_name(candidate)
    result = candidate

    while result in used:
        base = DISAMBIGUATION_PREFIX + base
        result = prefix + base
        if len(result.encode(TEXT_ENCODING)) > MAX_NAME_LENGTH:
            raise NamingExhaustedError(
                f"Cannot find a unique name for '{candidate}' within {MAX_NAME_LENGTH} bytes"
            )

    used.add(result)
    return result
