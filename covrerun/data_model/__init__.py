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
