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
Script to generate the installer for covrerun.
"""

import os

from runpy import run_path
from setuptools import setup, find_packages


version = run_path("./covrerun/version.py")["__version__"]
# read the contents of your README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, "README.rst"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="covrerun",
    version=version,
    description="Merge the Go coverage profile of a test rerun into the profile of the first run.",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    license="BSD-3-Clause",
    platforms=["any"],
    python_requires=">=3.9",
    packages=find_packages(include=["covrerun*"]),
    install_requires=[
        "colorlog",
        "tomli >= 1.1.0 ; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
        "dev": [
            "mypy",
            "nox",
            "pylint",
            "pytest",
            "pytest-cov",
            "ruff",
        ],
    },
    entry_points={
        "console_scripts": [
            "covrerun=covrerun.__main__:main",
        ],
    },
)
