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

"""Exceptions used in covrerun."""

from typing import Optional


class ProfileParseError(ValueError):
    """Raised when a coverage profile does not match the expected format."""

    def __init__(
        self, message: str, filename: Optional[str] = None, lineno: Optional[int] = None
    ) -> None:
        location = ": ".join(
            str(part) for part in (filename, lineno) if part is not None
        )
        super().__init__(f"{location}: {message}" if location else message)
        self.filename = filename
        self.lineno = lineno


class ModeMismatchError(ValueError):
    """Raised when the original and the rerun profile use different modes."""

    def __init__(self, original_mode: str, rerun_mode: str) -> None:
        super().__init__(
            f"coverprofile mode mismatch: original {original_mode!r}, rerun {rerun_mode!r}"
        )
        self.original_mode = original_mode
        self.rerun_mode = rerun_mode


class SanityCheckError(AssertionError):
    """Raised when a sanity check fails."""
