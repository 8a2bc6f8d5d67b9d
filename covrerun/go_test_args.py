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

"""Find the coverage profile in the arguments of a ``go test`` call."""

from typing import Sequence

COVERPROFILE_FLAGS = (
    "-coverprofile",
    "--coverprofile",
    "-test.coverprofile",
    "--test.coverprofile",
)


def extract_flag_value(args: Sequence[str]) -> str:
    """
    Get the output path of the coverage profile, or an empty string if not set.

    Both the ``-coverprofile=file`` and the ``-coverprofile file`` form
    are handled, as well as the ``-test.coverprofile`` variant
    used when calling a compiled test binary.
    The first occurrence wins, the value is not checked.

    >>> extract_flag_value(["-v", "-coverprofile=cover.out", "./..."])
    'cover.out'
    >>> extract_flag_value(["-test.coverprofile", "cover.out"])
    'cover.out'
    >>> extract_flag_value(["-coverprofile"])
    ''
    """
    for i, arg in enumerate(args):
        flag, equals, value = arg.partition("=")
        if flag not in COVERPROFILE_FLAGS:
            continue
        if equals:
            return value
        if i + 1 < len(args):
            return args[i + 1]
        return ""
    return ""
