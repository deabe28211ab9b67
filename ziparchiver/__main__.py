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

from __future__ import annotations

"""
Command-line interface for the archiver (``ziparchiver``).

Supported commands (via ``python -m ziparchiver``; the command word is
case-insensitive):

- ``compress``   : Add files and directories to an archive, setting its comment
- ``uncompress`` : Extract an archive to a directory
- ``comment``    : Replace the comment of an existing archive
- ``getcomment`` : Print the comment of an archive
- ``list``       : Print the entry names of an archive

Example usages:

    # Create or extend backup.zip with everything under ./docs
    python -m ziparchiver compress backup.zip "nightly" docs notes.txt

    # Extract into ./backup (or into a given directory)
    python -m ziparchiver uncompress backup.zip
    python -m ziparchiver Uncompress backup.zip restore

    # Read and change the archive comment
    python -m ziparchiver getcomment backup.zip
    python -m ziparchiver comment backup.zip "checked"

Options (``-v``, ``--version``) go before the command word. Every argument
after it is taken literally, so ``compress backup.zip -draft docs`` stores
the comment ``-draft``.

Malformed invocations print the usage text and exit with status 0. Failed
operations print ``ziparchiver: <message>`` to stderr and exit with status 1
(I/O failure) or 2 (rejected arguments).
"""

import argparse
import logging
import sys
from typing import List, NoReturn, Optional

from . import __version__
from .constants import USAGE
from .errors import ArchiverError, AtomicReplaceError, PreconditionError
from .mutator import add_files
from .reader import extract, list_entries, read_comment, write_comment

COMMANDS = ("compress", "uncompress", "comment", "getcomment", "list")


def _print_usage() -> None:
    sys.stdout.write(USAGE + "\n")


def _print_error(message: str, exit_code: int = 1, suggestion: Optional[str] = None) -> NoReturn:
    """Print an error message to stderr and exit with the given code.

    Args:
        message: Error message to display.
        exit_code: Exit code to use.
        suggestion: Optional suggestion to help the user resolve the error.
    """
    sys.stderr.write(f"ziparchiver: {message}\n")
    if suggestion:
        sys.stderr.write(f"ziparchiver: Suggestion: {suggestion}\n")
    sys.exit(exit_code)


class _UsageArgumentParser(argparse.ArgumentParser):
    """Argument parser that answers malformed input with the fixed usage text."""

    def error(self, message: str) -> NoReturn:
        logging.getLogger(__name__).debug("Rejected arguments: %s", message)
        _print_usage()
        sys.exit(0)


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="ziparchiver: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _normalize_command(argv: List[str]) -> List[str]:
    """Prepare raw arguments for the parser.

    The command word is lower-cased so ``Compress`` and ``COMPRESS`` work.
    Everything after it is positional, so a ``--`` is inserted behind it:
    comments and paths such as ``-draft`` are then taken literally instead
    of being rejected as unknown options. ``-h``/``--help`` directly after
    the command, or an explicit ``--``, leave the arguments as they are.
    """
    argv = list(argv)
    for index, arg in enumerate(argv):
        if arg.startswith("-"):
            continue
        if arg.lower() not in COMMANDS:
            break
        argv[index] = arg.lower()
        rest = argv[index + 1 :]
        if rest[:1] not in (["-h"], ["--help"]) and "--" not in rest:
            argv.insert(index + 1, "--")
        break
    return argv


def _cmd_compress(archive: str, comment: str, paths: List[str]) -> None:
    update = add_files(archive, comment, paths)
    for pending in update.renamed:
        sys.stdout.write(f"{pending.source} -> {pending.name}\n")


def _cmd_uncompress(archive: str, destination: Optional[str]) -> None:
    extract(archive, destination)


def _cmd_comment(archive: str, comment: str) -> None:
    write_comment(archive, comment)


def _cmd_getcomment(archive: str) -> None:
    sys.stdout.write(read_comment(archive) + "\n")


def _cmd_list(archive: str) -> None:
    for name in list_entries(archive):
        sys.stdout.write(name + "\n")


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the top-level argument parser."""
    parser = _UsageArgumentParser(
        prog="ziparchiver",
        description="Add files to ZIP archives, extract them and manage archive comments.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-v for a summary, -vv for every entry).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # compress
    p_compress = subparsers.add_parser("compress", help="Add files to an archive (created if missing)")
    p_compress.add_argument("archive", help="Path to the archive to create or update")
    p_compress.add_argument("comment", help="Archive comment (replaces any existing comment)")
    p_compress.add_argument("paths", nargs="+", help="Files and directories to add")

    # uncompress
    p_uncompress = subparsers.add_parser("uncompress", help="Extract an archive")
    p_uncompress.add_argument("archive", help="Path to the archive")
    p_uncompress.add_argument(
        "destination",
        nargs="?",
        default=None,
        help="Output directory (default: the archive path without its extension)",
    )

    # comment
    p_comment = subparsers.add_parser("comment", help="Replace the archive comment")
    p_comment.add_argument("archive", help="Path to an existing archive")
    p_comment.add_argument("comment", help="New archive comment")

    # getcomment
    p_getcomment = subparsers.add_parser("getcomment", help="Print the archive comment")
    p_getcomment.add_argument("archive", help="Path to an existing archive")

    # list
    p_list = subparsers.add_parser("list", help="List entries in an archive")
    p_list.add_argument("archive", help="Path to the archive")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m ziparchiver`` and the ``ziparchiver`` script."""
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    args = parser.parse_args(_normalize_command(argv))
    _configure_logging(args.verbose)

    try:
        if args.command == "compress":
            _cmd_compress(args.archive, args.comment, args.paths)
        elif args.command == "uncompress":
            _cmd_uncompress(args.archive, args.destination)
        elif args.command == "comment":
            _cmd_comment(args.archive, args.comment)
        elif args.command == "getcomment":
            _cmd_getcomment(args.archive)
        elif args.command == "list":
            _cmd_list(args.archive)
    except PreconditionError as e:
        _print_error(str(e), exit_code=2)
    except AtomicReplaceError as e:
        suggestion = None
        if e.temp_path is not None:
            suggestion = f"The updated archive was left at {e.temp_path}"
        _print_error(str(e), exit_code=1, suggestion=suggestion)
    except ArchiverError as e:
        _print_error(str(e), exit_code=1)
    except KeyboardInterrupt:
        _print_error("Interrupted by user", exit_code=130)


if __name__ == "__main__":
    main()
