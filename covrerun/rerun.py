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
Merge the profile of a test rerun into the profile of the first run.

The files are handled in this order: the rerun profile is read first,
so that nothing else is touched if there is nothing to merge,
then the original profile is read, merged and written back.
Only one process may write the original profile at a time,
this is not enforced here.
"""

import logging
import os
from typing import Optional

from .data_model.container import ProfileSet
from .data_model.merging import merge_profile_sets
from .exceptions import ProfileParseError
from .formats.coverprofile import read_profile, write_profile

LOGGER = logging.getLogger("covrerun")


def merge_rerun(
    original_path: str, rerun_path: str, output_path: Optional[str] = None
) -> None:
    """
    Merge the rerun profile into the original profile.

    The result replaces the original profile, or is written to
    `output_path` if given.

    - A missing or empty rerun profile leaves the original untouched.
    - A missing or empty original profile is replaced by the rerun profile.
    - Otherwise the profiles are merged, they must use the same mode.

    Raises ProfileParseError if a profile can't be parsed,
    ModeMismatchError if the modes differ and OSError if writing fails.
    In all these cases the original profile is not modified.
    """
    if output_path is None:
        output_path = original_path
    replaces_original = _is_same_path(original_path, output_path)

    rerun = _read_optional_profile(rerun_path, "rerun")
    if rerun is None or rerun.is_empty():
        LOGGER.info(
            f"No coverage data in rerun profile {rerun_path}, keeping {original_path}."
        )
        if not replaces_original:
            original = _read_optional_profile(original_path, "original")
            if original is not None:
                write_profile(original, output_path)
        return

    original = _read_optional_profile(original_path, "original")
    if original is None or original.is_empty():
        LOGGER.info(
            f"No coverage data in original profile {original_path}, using rerun profile {rerun_path}."
        )
        write_profile(rerun, output_path)
        return

    merged = merge_profile_sets(original, rerun)
    LOGGER.info(
        f"Merged {len(rerun)} file(s) of {rerun_path} into {len(original)} file(s) of {original_path}, "
        f"got {len(merged)} file(s)."
    )
    write_profile(merged, output_path)


def _read_optional_profile(path: str, role: str) -> Optional[ProfileSet]:
    """Read a profile, a missing file returns None."""
    try:
        return read_profile(path)
    except FileNotFoundError:
        LOGGER.debug(f"The {role} profile {path} does not exist.")
        return None
    except ProfileParseError as e:
        error = ProfileParseError(f"can't parse {role} coverage profile: {e}")
        error.filename, error.lineno = e.filename, e.lineno
        raise error from e


def _is_same_path(left: str, right: str) -> bool:
    return os.path.normcase(os.path.abspath(left)) == os.path.normcase(
        os.path.abspath(right)
    )
