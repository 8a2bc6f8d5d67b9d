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

from __future__ import annotations
from typing import Iterator, Optional

from .profile import CoverageMode, FileProfile


class ProfileSet:
    """A whole coverage profile: the mode and the profiles of all files.

    The mode is ``None`` only for an empty profile without a mode line.
    """

    __slots__ = ("mode", "files")

    def __init__(
        self,
        mode: Optional[CoverageMode],
        files: Optional[list[FileProfile]] = None,
    ) -> None:
        self.mode = mode
        self.files = list[FileProfile]() if files is None else files

    def __repr__(self) -> str:
        return f"ProfileSet({self.mode!s}, {[f.filename for f in self.files]!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProfileSet):
            return NotImplemented
        return self.mode == other.mode and self.files == other.files

    def __getitem__(self, filename: str) -> FileProfile:
        for fileprofile in self.files:
            if fileprofile.filename == filename:
                return fileprofile
        raise KeyError(filename)

    def __len__(self) -> int:
        return len(self.files)

    def __contains__(self, filename: str) -> bool:
        return any(fileprofile.filename == filename for fileprofile in self.files)

    def __iter__(self) -> Iterator[FileProfile]:
        return iter(self.files)

    def is_empty(self) -> bool:
        """A profile without any file has nothing to merge."""
        return not self.files

    def filenames(self) -> list[str]:
        """Get the file names in the stored order."""
        return [fileprofile.filename for fileprofile in self.files]

    def sort_files(self) -> None:
        """Sort the file profiles by file name."""
        self.files.sort(key=lambda fileprofile: fileprofile.filename)
