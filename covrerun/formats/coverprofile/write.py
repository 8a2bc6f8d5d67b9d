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
from typing import Iterator

from ...data_model.container import ProfileSet
from ...exceptions import SanityCheckError
from ...utils import open_text_for_writing
from .read import MODE_PREFIX

LOGGER = logging.getLogger("covrerun")


def format_profile(profile_set: ProfileSet) -> Iterator[str]:
    r"""
    Get the lines of the profile in the stored order.

    >>> from covrerun.formats.coverprofile.read import parse_profile
    >>> profile = parse_profile(["mode: set", "pkg/a.go:3.14,5.2 2 1"])
    >>> list(format_profile(profile))
    ['mode: set\n', 'pkg/a.go:3.14,5.2 2 1\n']
    >>> list(format_profile(parse_profile([])))
    []
    """
    if profile_set.is_empty():
        return
    if profile_set.mode is None:
        raise SanityCheckError("Files without a mode.")

    yield f"{MODE_PREFIX}{profile_set.mode!s}\n"
    for fileprofile in profile_set:
        for block in fileprofile:
            yield f"{fileprofile.filename}:{block.position!s} {block.num_stmt} {block.count}\n"


def write_profile(profile_set: ProfileSet, path: str) -> None:
    """
    Write the profile to the given file, replacing its content.

    Nothing is written for an empty profile.
    """
    if profile_set.is_empty():
        LOGGER.debug(f"Not writing empty coverage profile to {path}.")
        return

    LOGGER.debug(f"Writing coverage profile {path}.")
    with open_text_for_writing(path, encoding="utf-8", newline="\n") as fh_out:
        fh_out.writelines(format_profile(profile_set))
