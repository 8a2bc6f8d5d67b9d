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
import os
import sys
from typing import Any, Callable, Optional

from colorlog import ColoredFormatter

from .options import Options

LOGGER = logging.getLogger("covrerun")
DEFAULT_LOGGING_HANDLER = logging.StreamHandler(sys.stderr)

LOG_FORMAT = "(%(levelname)s) %(message)s"
COLOR_LOG_FORMAT = f"%(log_color)s{LOG_FORMAT}"


def profile_location(filename: Optional[str], lineno: Optional[int]) -> dict[str, Any]:
    """
    Get the ``extra`` argument of a log call pointing to a line of a profile.

    >>> profile_location("cover.out", 3)
    {'profile_filename': 'cover.out', 'profile_lineno': 3}
    """
    return {"profile_filename": filename, "profile_lineno": lineno}


def _github_annotation(record: logging.LogRecord) -> Optional[str]:
    r"""
    Get the workflow command for GitHub Actions.

    >>> record = logging.makeLogRecord({"levelno": logging.ERROR})
    >>> _github_annotation(record)
    '::error::'
    >>> record.__dict__.update(profile_location("cover.out", 3))
    >>> _github_annotation(record)
    '::error file=cover.out,line=3::'
    >>> _github_annotation(logging.makeLogRecord({"levelno": logging.INFO})) is None
    True
    """
    level = {logging.WARNING: "warning", logging.ERROR: "error"}.get(record.levelno)
    if level is None:
        return None
    properties = []
    if (filename := getattr(record, "profile_filename", None)) is not None:
        properties.append(f"file={filename}")
        if (lineno := getattr(record, "profile_lineno", None)) is not None:
            properties.append(f"line={lineno}")
    if properties:
        return f"::{level} {','.join(properties)}::"
    return f"::{level}::"


def _azure_annotation(record: logging.LogRecord) -> Optional[str]:
    r"""
    Get the logging command for Azure Pipelines.

    >>> record = logging.makeLogRecord(
    ...     {"levelno": logging.WARNING, **profile_location("cover.out", None)}
    ... )
    >>> _azure_annotation(record)
    '##vso[task.logissue type=warning;sourcepath=cover.out]'
    """
    level = {logging.WARNING: "warning", logging.ERROR: "error"}.get(record.levelno)
    if level is None:
        return None
    properties = [f"type={level}"]
    if (filename := getattr(record, "profile_filename", None)) is not None:
        properties.append(f"sourcepath={filename}")
        if (lineno := getattr(record, "profile_lineno", None)) is not None:
            properties.append(f"linenumber={lineno}")
    return f"##vso[task.logissue {';'.join(properties)}]"


class CiFormatter(logging.Formatter):
    """Formatter to format messages to be captured by the CI system."""

    def __init__(
        self, annotation: Callable[[logging.LogRecord], Optional[str]]
    ) -> None:
        super().__init__(fmt=LOG_FORMAT)
        self.annotation = annotation

    def format(self, record: logging.LogRecord) -> str:
        if (prefix := self.annotation(record)) is not None:
            return f"{prefix}{super().format(record)}"

        return ""


def __colored_formatter(options: Optional[Options] = None) -> ColoredFormatter:
    """Configure the colored logging formatter."""
    if options is not None:
        force_color = getattr(options, "force_color", False)
        no_color = getattr(options, "no_color", False)
    else:
        force_color = False
        no_color = False

    return ColoredFormatter(
        COLOR_LOG_FORMAT,
        datefmt=None,
        reset=True,
        log_colors={
            "DEBUG": "cyan",
            "INFO": "blue",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
        secondary_log_colors={},
        style="%",
        force_color=force_color,
        no_color=no_color,
        stream=sys.stderr,
    )


def configure_logging() -> None:
    """Configure the logging module."""
    DEFAULT_LOGGING_HANDLER.setFormatter(__colored_formatter())
    logging.basicConfig(level=logging.INFO, handlers=[DEFAULT_LOGGING_HANDLER])
    annotation = None
    if "TF_BUILD" in os.environ:
        annotation = _azure_annotation
    elif "GITHUB_ACTIONS" in os.environ:
        annotation = _github_annotation

    if annotation is not None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(CiFormatter(annotation))
        logging.getLogger().addHandler(handler)

    def exception_hook(exc_type: Any, exc_value: Any, exc_traceback: Any) -> None:
        logging.exception(
            "Uncaught EXCEPTION", exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = exception_hook


def update_logging(options: Options) -> None:
    """Update the logger configuration depending on the options."""
    if options.verbose:
        LOGGER.setLevel(logging.DEBUG)

    # Update the formatter of the default logger depending on options
    DEFAULT_LOGGING_HANDLER.setFormatter(__colored_formatter(options))
