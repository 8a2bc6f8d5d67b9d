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
Handle the text format written by ``go test -coverprofile``.

The first line names the mode, each other line is a block::

    mode: set
    example.com/pkg/a.go:3.14,5.2 2 1

The behavior follows the reference parser in ``golang.org/x/tools/cover``.
"""

from .read import parse_profile, read_profile
from .write import format_profile, write_profile

__all__ = ["format_profile", "parse_profile", "read_profile", "write_profile"]
