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

"""
Merge coverage profiles.

The original profile is the first run of the tests,
the rerun profile the retry of a subset of them.
All of these functions take the original first and the rerun second.
Blocks are matched by their exact source position,
the counts of matching blocks are combined depending on the mode:

* ``set``: a block is covered if it was hit in either run (bitwise OR),
* ``count`` and ``atomic``: the maximum of both runs,
  summing would count repeated invocations across independent runs twice.

The inputs are not modified, the result is built from copies.
"""

import logging

from ..exceptions import ModeMismatchError, SanityCheckError
from .container import ProfileSet
from .profile import BlockPosition, CoverageMode, FileProfile, ProfileBlock

LOGGER = logging.getLogger("covrerun")


def merge_counts(original: int, rerun: int, mode: CoverageMode) -> int:
    """
    Combine the counts of two blocks at the same position.

    >>> merge_counts(1, 0, CoverageMode.SET)
    1
    >>> merge_counts(0, 0, CoverageMode.SET)
    0
    >>> merge_counts(5, 2, CoverageMode.COUNT)
    5
    >>> merge_counts(0, 3, CoverageMode.ATOMIC)
    3
    """
    if mode is CoverageMode.SET:
        return original | rerun
    if mode in (CoverageMode.COUNT, CoverageMode.ATOMIC):
        return max(original, rerun)

    raise SanityCheckError(f"Unknown coverage mode {mode!r}.")


def merge_blocks(
    original: list[ProfileBlock],
    rerun: list[ProfileBlock],
    mode: CoverageMode,
    filename: str = "<unknown>",
) -> list[ProfileBlock]:
    """
    Merge the blocks of one file.

    Blocks at a position known from the original get the combined count,
    the number of statements is taken from the original.
    Blocks only seen in the rerun are added.
    The result is sorted by start line and column.
    """
    merged = [block.copy() for block in original]
    index: dict[BlockPosition, ProfileBlock] = {
        block.position: block for block in merged
    }

    for rerun_block in rerun:
        if (block := index.get(rerun_block.position)) is not None:
            if block.num_stmt != rerun_block.num_stmt:
                LOGGER.debug(
                    f"{filename}:{block.position!s}: number of statements differs, "
                    f"keeping {block.num_stmt} of original and ignoring {rerun_block.num_stmt} of rerun."
                )
            block.count = merge_counts(block.count, rerun_block.count, mode)
        else:
            block = rerun_block.copy()
            index[block.position] = block
            merged.append(block)

    merged.sort(key=lambda block: block.sort_key)
    return merged


def merge_profile_sets(original: ProfileSet, rerun: ProfileSet) -> ProfileSet:
    """
    Merge the rerun profile into the original profile.

    Files known from the original get their blocks merged,
    files only seen in the rerun are added.
    The result is sorted by file name.

    Raises ModeMismatchError if the profiles use different modes.
    """
    if original.mode != rerun.mode:
        raise ModeMismatchError(str(original.mode), str(rerun.mode))
    if original.mode is None:
        raise SanityCheckError("Can't merge profiles without a mode.")
    mode = original.mode

    files = [fileprofile.copy() for fileprofile in original]
    index: dict[str, FileProfile] = {
        fileprofile.filename: fileprofile for fileprofile in files
    }

    for rerun_file in rerun:
        if (fileprofile := index.get(rerun_file.filename)) is not None:
            LOGGER.debug(f"Merging blocks of {rerun_file.filename}.")
            fileprofile.blocks = merge_blocks(
                fileprofile.blocks, rerun_file.blocks, mode, rerun_file.filename
            )
        else:
            LOGGER.debug(f"Adding {rerun_file.filename} only covered by the rerun.")
            fileprofile = rerun_file.copy()
            index[fileprofile.filename] = fileprofile
            files.append(fileprofile)

    merged = ProfileSet(mode, files)
    merged.sort_files()
    return merged
