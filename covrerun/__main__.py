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

from argparse import ArgumentError, ArgumentParser, Namespace
from typing import Any, Optional

from .configuration import (
    argument_parser_setup,
    config_entries_from_dict,
    merge_options_and_set_defaults,
    parse_config_file,
    parse_config_into_dict,
)
from .exceptions import ModeMismatchError, ProfileParseError
from .go_test_args import extract_flag_value
from .logging import (
    configure_logging,
    profile_location,
    update_logging,
)
from .rerun import merge_rerun
from .version import __version__

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

LOGGER = logging.getLogger("covrerun")


EXIT_SUCCESS = 0
EXIT_CMDLINE_ERROR = 1
EXIT_MODE_MISMATCH = 2
EXIT_READ_ERROR = 64
EXIT_WRITE_ERROR = 128


def create_argument_parser() -> ArgumentParser:
    """Create the argument parser."""

    parser = ArgumentParser(add_help=False, exit_on_error=False)
    parser.usage = "covrerun [options] [ORIGINAL] RERUN"
    parser.description = (
        "Merge the Go coverage profile of a test rerun "
        "into the coverage profile of the first run."
    )

    options = parser.add_argument_group("Options")
    options.add_argument(
        "-h", "--help", help="Show this help message, then exit.", action="help"
    )
    options.add_argument(
        "--version",
        help="Print the version number, then exit.",
        action="store_true",
        dest="version",
        default=False,
    )

    argument_parser_setup(options)

    return parser


COPYRIGHT = "Copyright (c) 2025-2026 the covrerun authors\n"


def find_config_name(filename: str) -> Optional[str]:
    """Find the configuration to use."""
    if os.path.isfile(filename):
        return filename

    return None


def load_config(partial_options: Namespace) -> dict[str, Any]:
    """Load a config file if configured or found by default names"""
    filename = getattr(partial_options, "config", None)
    if filename is not None:
        if filename.endswith(".toml"):
            with open(filename, "rb") as buf:
                data = tomllib.load(buf)
            return parse_config_into_dict(config_entries_from_dict(data, filename))
        with open(filename, encoding="UTF-8") as buf:
            return parse_config_into_dict(parse_config_file(buf, filename))

    if filename := find_config_name("covrerun.cfg"):
        with open(filename, encoding="UTF-8") as buf:
            return parse_config_into_dict(parse_config_file(buf, filename))

    if filename := find_config_name("covrerun.toml"):
        with open(filename, "rb") as buf:
            data = tomllib.load(buf)
        return parse_config_into_dict(config_entries_from_dict(data, filename))

    if filename := find_config_name("pyproject.toml"):
        with open(filename, "rb") as buf:
            data = tomllib.load(buf)
        if (covrerun_section := data.get("tool", {}).get("covrerun")) is not None:
            return parse_config_into_dict(
                config_entries_from_dict(covrerun_section, filename)
            )

    return {}


def main(args: Optional[list[str]] = None) -> int:  # pylint: disable=too-many-return-statements
    """The main entry point of covrerun."""
    configure_logging()
    try:
        parser = create_argument_parser()
        cli_options = parser.parse_args(args=args)
    except SystemExit as e:
        # Help was printed or argparse rejected the arguments.
        return EXIT_SUCCESS if e.code == 0 else EXIT_CMDLINE_ERROR
    except ArgumentError as e:
        sys.stderr.write(f"covrerun: error: {e}\n")
        return EXIT_CMDLINE_ERROR

    if cli_options.version:
        sys.stdout.write(f"covrerun {__version__}\n\n{COPYRIGHT}")
        return EXIT_SUCCESS

    # load the config
    try:
        cfg_options = load_config(cli_options)
    except (OSError, SyntaxError, ValueError, tomllib.TOMLDecodeError) as e:
        LOGGER.error(f"Error while loading the configuration: {e}")
        return EXIT_CMDLINE_ERROR
    options = merge_options_and_set_defaults([cfg_options, cli_options.__dict__])

    # Reconfigure the logging.
    update_logging(options)

    if len(options.profiles) == 2:
        original, rerun = options.profiles
    elif len(options.profiles) == 1:
        rerun = options.profiles[0]
        original = extract_flag_value(options.go_test_args)
        if not original:
            LOGGER.error(
                "the original profile must be given as argument "
                "or with a -coverprofile flag in --go-test-args."
            )
            return EXIT_CMDLINE_ERROR
        LOGGER.debug(f"Original profile taken from --go-test-args: {original}")
    else:
        LOGGER.error(
            f"expected the arguments [ORIGINAL] RERUN, got {len(options.profiles)} profile(s)."
        )
        return EXIT_CMDLINE_ERROR

    try:
        merge_rerun(original, rerun, options.output)
    except ModeMismatchError as e:
        LOGGER.error(str(e))
        return EXIT_MODE_MISMATCH
    except ProfileParseError as e:
        LOGGER.error(str(e), extra=profile_location(e.filename, e.lineno))
        return EXIT_READ_ERROR
    except OSError as e:
        LOGGER.error(f"Error occurred while merging the profiles: {e}")
        return EXIT_WRITE_ERROR

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
