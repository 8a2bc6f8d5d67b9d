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
The covrerun data model.

This module represents the core data structures
and should not have dependencies on any other covrerun module.

The data model contains the exact same information
as the Go coverage profile text format:

* a ``ProfileBlock`` is one ``file:start.col,end.col num_stmt count`` line
  without the file name,
* a ``FileProfile`` collects the blocks of one source file,
* the ``ProfileSet`` in :mod:`covrerun.data_model.container`
  is the whole profile with its mode line.
"""

from __future__ import annotations
import enum
from typing import Iterator, NamedTuple, Optional


class CoverageMode(enum.Enum):
    """The counting discipline of a profile, given by the ``mode:`` line."""

    SET = "set"
    COUNT = "count"
    ATOMIC = "atomic"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> CoverageMode:
        """
        Get the mode from the text of a mode line.

        >>> CoverageMode.from_string("atomic")
        <CoverageMode.ATOMIC: 'atomic'>
        >>> CoverageMode.from_string("sum")
        Traceback (most recent call last):
          ...
        ValueError: unknown coverage mode 'sum', expected one of 'set', 'count', 'atomic'
        """
        try:
            return cls(value)
        except ValueError:
            expected = ", ".join(repr(mode.value) for mode in cls)
            raise ValueError(
                f"unknown coverage mode {value!r}, expected one of {expected}"
            ) from None


class BlockPosition(NamedTuple):
    """The source range of a block, used as the key to match blocks."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        """
        Format the position like it is written in a profile.

        >>> str(BlockPosition(3, 14, 7, 2))
        '3.14,7.2'
        """
        return f"{self.start_line}.{self.start_col},{self.end_line}.{self.end_col}"


class ProfileBlock:
    r"""Represent the coverage information of a single block.

    Args:
        position (BlockPosition):
            The source range of the block.
        num_stmt (int):
            The number of statements in the block.
        count (int):
            How often the block was executed, 0 or 1 in set mode.
    """

    __slots__ = ("position", "num_stmt", "count")

    def __init__(self, position: BlockPosition, num_stmt: int, count: int) -> None:
        self.position = position
        self.num_stmt = num_stmt
        self.count = count

    def __repr__(self) -> str:
        return f"ProfileBlock({self.position!s}, num_stmt={self.num_stmt}, count={self.count})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProfileBlock):
            return NotImplemented
        return (self.position, self.num_stmt, self.count) == (
            other.position,
            other.num_stmt,
            other.count,
        )

    @property
    def start_line(self) -> int:
        """The first line of the block."""
        return self.position.start_line

    @property
    def start_col(self) -> int:
        """The first column of the block."""
        return self.position.start_col

    @property
    def end_line(self) -> int:
        """The last line of the block."""
        return self.position.end_line

    @property
    def end_col(self) -> int:
        """The column after the end of the block."""
        return self.position.end_col

    @property
    def sort_key(self) -> tuple[int, int]:
        """Blocks are ordered by their start only."""
        return (self.position.start_line, self.position.start_col)

    def copy(self) -> ProfileBlock:
        """Get an independent copy of the block."""
        return ProfileBlock(self.position, self.num_stmt, self.count)


class FileProfile:
    r"""Represent the coverage blocks of a single source file.

    Args:
        filename (str):
            The file name as written in the profile, e.g. ``example.com/pkg/a.go``.
        blocks (list of ProfileBlock, optional):
            The blocks of the file.
    """

    __slots__ = ("filename", "blocks")

    def __init__(
        self, filename: str, blocks: Optional[list[ProfileBlock]] = None
    ) -> None:
        self.filename = filename
        self.blocks = list[ProfileBlock]() if blocks is None else blocks

    def __repr__(self) -> str:
        return f"FileProfile({self.filename!r}, {self.blocks!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileProfile):
            return NotImplemented
        return self.filename == other.filename and self.blocks == other.blocks

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self) -> Iterator[ProfileBlock]:
        return iter(self.blocks)

    def sort_blocks(self) -> None:
        """Sort the blocks by their start position."""
        self.blocks.sort(key=lambda block: block.sort_key)

    def copy(self) -> FileProfile:
        """Get an independent copy of the file profile."""
        return FileProfile(self.filename, [block.copy() for block in self.blocks])
