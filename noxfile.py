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

import os
from pathlib import Path
import shutil

import nox


DEFAULT_TEST_DIRECTORIES = ["covrerun", "tests"]
DEFAULT_LINT_ARGUMENTS = [
    "noxfile.py",
    "setup.py",
] + DEFAULT_TEST_DIRECTORIES

CI_RUN = "GITHUB_ACTION" in os.environ

nox.options.sessions = ["qa"]


@nox.session(python=False)
def qa(session: nox.Session) -> None:
    """Run the quality tests."""
    for session_id in ["lint", "tests"]:
        session.log(f"Notify session {session_id}")
        session.notify(session_id, [])


@nox.session(python=False)
def lint(session: nox.Session) -> None:
    """Run the linters."""
    session.notify("ruff_check")
    session.notify("ruff_format")
    session.notify("pylint")
    session.notify("mypy")


@nox.session
def ruff_check(session: nox.Session) -> None:
    """Run ruff check command."""
    session.install("ruff")
    if session.posargs:
        args = session.posargs
    else:
        args = ["."]
    session.run("ruff", "check", *args)


@nox.session
def ruff_format(session: nox.Session) -> None:
    """Run ruff format command."""
    session.install("ruff")
    if session.posargs:
        args = session.posargs
    else:
        args = ["--diff", "."]
    session.run("ruff", "format", *args)


@nox.session
def pylint(session: nox.Session) -> None:
    """Run pylint command."""
    session.install("pylint", "nox", "pytest")
    session.install("-e", ".")
    if session.posargs:
        args = session.posargs
    else:
        args = DEFAULT_LINT_ARGUMENTS
    session.run("pylint", *args)


@nox.session
def mypy(session: nox.Session) -> None:
    """Run mypy command."""
    session.install("mypy", "nox", "pytest")
    session.install("-e", ".")
    if session.posargs:
        args = session.posargs
    else:
        args = ["."]
    session.run("mypy", *args)


@nox.session
def tests(session: nox.Session) -> None:
    """Run the tests and the doctests."""
    use_coverage = os.environ.get("USE_COVERAGE") == "true"
    requirements = ["pytest"]
    if use_coverage:
        requirements += ["coverage", "pytest-cov"]
    session.install(*requirements)
    session.install("-e", ".")

    args = ["-m", "pytest", "--doctest-modules"]
    if use_coverage:
        args += ["--cov=covrerun", "--cov-branch"]
    args += session.posargs
    if "--" not in args:
        args += ["--"] + DEFAULT_TEST_DIRECTORIES

    # Delay the session failure,
    # even if command fail we want to get the coverage report.
    try:
        session.run(
            "python",
            *args,
        )
    finally:
        if use_coverage:
            session.run("coverage", "xml")
            if not CI_RUN:
                session.run("coverage", "html")


@nox.session
def build_distribution(session: nox.Session) -> None:
    """Build a wheel."""
    session.install("build")
    # Remove old dist if present
    dist_dir = Path("dist")
    if dist_dir.exists():
        shutil.rmtree(dist_dir)
    session.run("python", "-m", "build")
    session.notify("check_distribution")


@nox.session
def check_distribution(session: nox.Session) -> None:
    """Check the wheel and do a smoke test, should not be used directly."""
    session.install("wheel", "twine")
    with session.chdir("dist"):
        session.run("twine", "check", "*", external=True)
        session.install(str(list(Path().glob("*.whl"))[0]))
    session.run("python", "-m", "covrerun", "--help", external=True)
    session.run("covrerun", "--help", external=True)
