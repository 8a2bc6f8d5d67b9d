# -*- coding:utf-8 -*-

#  ************************** Copyrights and license ***************************
#
# This file is part of covrerun 1.1, a merge tool for Go coverage profiles.
#
# _____________________________________________________________________________
#
# Copyright (c) 2025-2026 the covrerun authors
#
# This software is distributed under the 3-clause BSD License.
# For more information, see the README.rst file.
#
# ****************************************************************************

import logging
import re
from typing import Iterable, Iterator, Optional

from ...data_model.container import ProfileSet
from ...data_model.profile import (
    BlockPosition,
    CoverageMode,
    FileProfile,
    ProfileBlock,
)
from ...exceptions import ProfileParseError, SanityCheckError

LOGGER = logging.getLogger("covrerun")

MODE_PREFIX = "mode: "

# The file name may contain colons, the position follows the last one.
_RE_BLOCK_LINE = re.compile(
    r"^(?P<filename>.+):"
    r"(?P<start_line>[0-9]+)\.(?P<start_col>[0-9]+),"
    r"(?P<end_line>[0-9]+)\.(?P<end_col>[0-9]+) "
    r"(?P<num_stmt>[0-9]+) (?P<count>[0-9]+)$"
)


def read_profile(path: str) -> ProfileSet:
    """
    Read the profile from the given file.

    A missing file raises FileNotFoundError, so that the caller can decide
    if that's an error.
    """
    LOGGER.debug(f"Reading coverage profile {path}.")
    with open(path, "rb") as fh_in:
        return parse_profile(_decode_lines(fh_in, path), path)


def _decode_lines(raw_lines: Iterable[bytes], filename: str) -> Iterator[str]:
    for lineno, raw_line in enumerate(raw_lines, 1):
        try:
            yield raw_line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProfileParseError(
                f"line is not valid UTF-8 ({e.reason} at byte {e.start})",
                filename,
                lineno,
            ) from None


def parse_profile(lines: Iterable[str], filename: str = "<string>") -> ProfileSet:
    r"""
    Parse the lines of a profile.

    Blocks of the same file are collected even if the file is interleaved
    with other files, blocks with the same position are folded together.

    >>> profile = parse_profile([
    ...     "mode: count",
    ...     "pkg/b.go:1.1,3.2 1 0",
    ...     "pkg/a.go:9.1,10.2 1 4",
    ...     "pkg/a.go:2.5,4.2 2 3",
    ...     "pkg/a.go:2.5,4.2 2 1",
    ... ])
    >>> profile.mode
    <CoverageMode.COUNT: 'count'>
    >>> profile.filenames()
    ['pkg/a.go', 'pkg/b.go']
    >>> profile["pkg/a.go"].blocks
    [ProfileBlock(2.5,4.2, num_stmt=2, count=4), ProfileBlock(9.1,10.2, num_stmt=1, count=4)]

    >>> parse_profile([]).is_empty()
    True
    >>> parse_profile(["mode: set", "pkg/a.go:1.1,2.2 1"], "cover.out")
    Traceback (most recent call last):
      ...
    covrerun.exceptions.ProfileParseError: cover.out: 2: line 'pkg/a.go:1.1,2.2 1' does not match the expected format <file>:<line>.<column>,<line>.<column> <statements> <count>
    """
    mode: Optional[CoverageMode] = None
    files: dict[str, FileProfile] = {}

    for lineno, line in enumerate(lines, 1):
        line = line.rstrip("\r\n")
        if mode is None:
            mode = _parse_mode_line(line, filename, lineno)
            continue

        if not line.strip():
            continue

        match = _RE_BLOCK_LINE.match(line)
        if match is None:
            raise ProfileParseError(
                f"line {line!r} does not match the expected format "
                "<file>:<line>.<column>,<line>.<column> <statements> <count>",
                filename,
                lineno,
            )

        block = ProfileBlock(
            BlockPosition(
                int(match.group("start_line")),
                int(match.group("start_col")),
                int(match.group("end_line")),
                int(match.group("end_col")),
            ),
            num_stmt=int(match.group("num_stmt")),
            count=int(match.group("count")),
        )
        block_filename = match.group("filename")
        if (fileprofile := files.get(block_filename)) is None:
            fileprofile = files[block_filename] = FileProfile(block_filename)
        fileprofile.blocks.append(block)

    profile_set = ProfileSet(mode)
    for fileprofile in files.values():
        if mode is None:
            raise SanityCheckError("Blocks without a mode.")
        _fold_duplicate_blocks(fileprofile, mode, filename)
        profile_set.files.append(fileprofile)
    profile_set.sort_files()

    LOGGER.debug(
        f"Found {len(profile_set)} file(s) in {filename} (mode: {mode or 'none'})."
    )
    return profile_set


def _parse_mode_line(line: str, filename: str, lineno: int) -> CoverageMode:
    if not line.startswith(MODE_PREFIX) or line == MODE_PREFIX:
        raise ProfileParseError(f"bad mode line: {line!r}", filename, lineno)
    try:
        return CoverageMode.from_string(line[len(MODE_PREFIX) :])
    except ValueError as e:
        raise ProfileParseError(str(e), filename, lineno) from None


def _fold_duplicate_blocks(
    fileprofile: FileProfile, mode: CoverageMode, filename: str
) -> None:
    """Fold the blocks with the same position and sort the blocks."""
    folded: dict[BlockPosition, ProfileBlock] = {}
    for block in fileprofile.blocks:
        if (first := folded.get(block.position)) is None:
            folded[block.position] = block
            continue

        if first.num_stmt != block.num_stmt:
            raise ProfileParseError(
                f"inconsistent number of statements for {fileprofile.filename}:{block.position!s}: "
                f"changed from {first.num_stmt} to {block.num_stmt}",
                filename,
            )
        if mode is CoverageMode.SET:
            first.count |= block.count
        else:
            first.count += block.count

    fileprofile.blocks = list(folded.values())
    fileprofile.sort_blocks()
