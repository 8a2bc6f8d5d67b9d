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

from __future__ import annotations
from argparse import ArgumentTypeError, SUPPRESS, _ArgumentGroup
from typing import Any, Callable, Iterable, Optional, TextIO
from dataclasses import dataclass
import os
import re

from .options import (
    CovrerunConfigOption,
    Options,
    relative_path,
    shell_arguments,
)


def argument_parser_setup(default_group: _ArgumentGroup) -> None:
    r"""Add all options to the given argparse argument group."""

    for opt in COVRERUN_CONFIG_OPTIONS:
        kwargs: dict[str, Any] = {
            "action": opt.action,
            "const": opt.const,
            "default": SUPPRESS,  # default will be assigned manually
            "help": opt.help,
            "metavar": opt.metavar,
        }

        # To avoid store_const problems, optionally set nargs, type:
        if opt.nargs is not None:
            kwargs["nargs"] = opt.nargs
        if opt.type is not None:
            kwargs["type"] = opt.type

        # We only want to set dest for non-positional.
        if opt.flags:
            kwargs["dest"] = opt.name
            default_group.add_argument(*opt.flags, **kwargs)

        elif opt.positional:
            default_group.add_argument(opt.name, **kwargs)

        elif opt.config_keys is None:
            raise AssertionError("Oops, sanity check failed: Unexpected option.")


def parse_config_into_dict(
    config_entry_source: Iterable[ConfigEntry],
    all_options: Optional[Iterable[CovrerunConfigOption]] = None,
) -> dict[str, Any]:
    """Convert the config entries into a partial options dictionary."""
    cfg_dict: dict[str, Any] = {}

    if all_options is None:
        all_options = COVRERUN_CONFIG_OPTIONS

    options_lookup = {}
    for option in all_options:
        if option.config_keys is not None:
            for config_key in option.config_keys:
                options_lookup[config_key] = option

    for cfg_entry in config_entry_source:
        try:
            option: CovrerunConfigOption = options_lookup[cfg_entry.key]
        except KeyError:
            raise cfg_entry.error("unknown config option") from None

        cfg_dict[option.name] = _get_value_from_config_entry(cfg_entry, option)

    return cfg_dict


def _get_value_from_config_entry(
    cfg_entry: ConfigEntry,
    option: CovrerunConfigOption,
) -> Any:
    # special case: store_const expects a boolean
    if option.action == "store_const":
        return option.const if cfg_entry.value_as_bool else option.default

    if option.type is None:
        return cfg_entry.value

    if cfg_entry.filename is None:
        raise AssertionError(
            "Conversion function must derive base directory from filename"
        )
    basedir = os.path.dirname(cfg_entry.filename)
    converter = _get_converter_function(option.type, basedir=basedir)

    try:
        return converter(cfg_entry.value)
    except (ValueError, ArgumentTypeError) as err:
        raise cfg_entry.error(str(err)) from None


def _get_converter_function(
    option_type: Callable[[str], Any],
    *,
    basedir: str,
) -> Callable[[str], Any]:
    """
    Obtain a converter function that corresponds to `option.type`.

    Usually, `option.type` already is that converter function.
    But paths in a config file are relative to the file itself.
    """

    if option_type is relative_path:
        return lambda value: relative_path(value, basedir)

    return option_type


def merge_options_and_set_defaults(
    partial_namespaces: list[dict[str, Any]],
    all_options: Optional[list[CovrerunConfigOption]] = None,
) -> Options:
    """Merge the partial namespaces, later ones win, and fill in the defaults."""
    if not partial_namespaces:
        raise AssertionError("At least one namespace required")

    if all_options is None:
        all_options = COVRERUN_CONFIG_OPTIONS

    target: dict[str, Any] = {}
    for namespace in partial_namespaces:
        for option in all_options:
            if option.name in namespace:
                target[option.name] = namespace[option.name]

    # if no value was provided, set the default.
    for option in all_options:
        target.setdefault(option.name, option.default)

    return Options(**target)


# Style guide for option descriptions:
# - Prefer complete sentences.
# - Phrase first sentence as a command:
#   “Print report”, not “Prints report”.

COVRERUN_CONFIG_OPTIONS = [
    CovrerunConfigOption(
        "verbose",
        ["-v", "--verbose"],
        help="Print progress messages. Please include this output in bug reports.",
        action="store_true",
    ),
    CovrerunConfigOption(
        "no_color",
        ["--no-color"],
        help=(
            "Turn off colored logging."
            " Is also set if environment variable NO_COLOR is present."
            " Ignored if --force-color is used."
        ),
        action="store_true",
    ),
    CovrerunConfigOption(
        "force_color",
        ["--force-color"],
        help=(
            "Force colored logging, this is the default for a terminal."
            " Is also set if environment variable FORCE_COLOR is present."
            " Has precedence over --no-color."
        ),
        action="store_true",
    ),
    CovrerunConfigOption(
        "config",
        ["--config"],
        config=False,
        help=(
            "Load that configuration file. "
            "Defaults to covrerun.cfg, covrerun.toml or the [tool.covrerun] "
            "section of pyproject.toml in the current directory."
        ),
        type=relative_path,
    ),
    CovrerunConfigOption(
        "output",
        ["-o", "--output"],
        metavar="OUTPUT",
        help=(
            "Write the merged profile to OUTPUT "
            "instead of replacing the original profile."
        ),
        type=relative_path,
    ),
    CovrerunConfigOption(
        "go_test_args",
        ["--go-test-args"],
        metavar="ARGS",
        help=(
            "The arguments of the 'go test' call that wrote the original profile. "
            "The original profile is taken from the -coverprofile flag "
            "if no ORIGINAL is given."
        ),
        type=shell_arguments,
        default=[],
    ),
    CovrerunConfigOption(
        "profiles",
        positional=True,
        config=False,
        metavar="PROFILE",
        help=(
            "The profiles to merge, given as ORIGINAL RERUN, "
            "or only RERUN together with --go-test-args."
        ),
        nargs="*",
        type=relative_path,
        default=[],
    ),
]


CONFIG_HASH_COMMENT = re.compile(r"(?:^|\s+) [#] .* $", re.X)
CONFIG_SEMICOLON_COMMENT = re.compile(r"(?:^|\s+) [;] .* $", re.X)

# kebab-case word, separated from value (rest of line) by "=" with optional space
CONFIG_KV = re.compile(r"^((?=\w)[\w-]+) \s* = \s* (.*) $", re.X)


def parse_config_file(
    open_file: TextIO,
    filename: str,
    first_lineno: int = 1,
) -> Iterable[ConfigEntry]:
    r"""
    Parse an ini-style configuration format.

    Yields: ConfigEntry

    Example: basic syntax.

    >>> import io
    >>> cfg = u'''
    ... # this is a comment
    ... key =   value  # trailing comment
    ... # the next line is empty
    ...
    ... key = can have multiple values
    ... another-key =  # can be empty
    ... optional=spaces
    ... '''
    >>> open_file = io.StringIO(cfg[1:])
    >>> for entry in parse_config_file(open_file, 'test.cfg'):
    ...     print(entry)
    test.cfg: 2: key = value
    test.cfg: 5: key = can have multiple values
    test.cfg: 6: another-key = # empty
    test.cfg: 7: optional = spaces
    """

    for lineno, line in enumerate(open_file, first_lineno):
        line = line.rstrip()

        def error(pattern: str, *args: Any, **kwargs: Any) -> SyntaxError:
            # pylint: disable=cell-var-from-loop
            message = pattern.format(*args, **kwargs)
            message += "\non this line: " + line
            return SyntaxError(": ".join([filename, str(lineno), message]))

        # strip (trailing) comments
        line = CONFIG_HASH_COMMENT.sub("", line)

        if CONFIG_SEMICOLON_COMMENT.search(line):
            raise error("semicolon comment ; ... is reserved")

        if line.isspace() or not line:  # skip empty lines
            continue

        match = CONFIG_KV.match(line)
        if not match:
            raise error('expected "key = value" entry')

        key: str = match.group(1).strip()
        value: str = match.group(2)

        if value.endswith("\\"):
            raise error("trailing backslash \\ is reserved")

        yield ConfigEntry(key, value, filename=filename, lineno=lineno)


def config_entries_from_dict(
    config: dict[str, Any],
    filename: str,
) -> Iterable[ConfigEntry]:
    r"""
    Generate config entries from a dictionary

    Yields: ConfigEntry

    Example: basic syntax.

    >>> cfg = {
    ...     'verbose': True,
    ...     'go-test-args': '-v -coverprofile=cover.out',
    ... }
    >>> for entry in config_entries_from_dict(cfg, 'covrerun.toml'):
    ...     print(entry)
    covrerun.toml: ??: verbose = True
    covrerun.toml: ??: go-test-args = -v -coverprofile=cover.out
    """

    for key, value in config.items():
        yield ConfigEntry(key, value, filename=filename)


@dataclass
class ConfigEntry:
    """A "key = value" config file entry."""

    key: str
    """The key."""

    value: Any
    """The un-parsed value, a boolean is possible for TOML files."""

    filename: Optional[str] = None
    """Path of the config file, for error messages."""

    lineno: Optional[int] = None
    """Line of the entry in the config file, for error messages."""

    def __str__(self) -> str:
        r"""
        Display the config entry.

        >>> print(ConfigEntry("the-key", "value",
        ...                   filename="foo.cfg", lineno=17))
        foo.cfg: 17: the-key = value
        """
        filename = self.filename or "<config>"
        lineno = self.lineno or "??"
        key = self.key
        value = self.value if self.value != "" else "# empty"
        return f"{filename}: {lineno}: {key} = {value}"

    @property
    def value_as_bool(self) -> bool:
        r"""
        The value converted to a boolean.

        >>> ConfigEntry("k", "yes").value_as_bool
        True

        >>> ConfigEntry("k", "no").value_as_bool
        False

        >>> ConfigEntry("k", "foo").value_as_bool
        Traceback (most recent call last):
        ValueError: <config>: ??: k: boolean option must be "yes" or "no"
        """
        if isinstance(self.value, bool):
            return self.value
        value = self.value
        if value == "yes":
            return True
        if value == "no":
            return False
        raise self.error('boolean option must be "yes" or "no"')

    def error(self, pattern: str, *args: Any, **kwargs: Any) -> ValueError:
        r"""
        Format but NOT RAISE a ValueError.

        >>> entry = ConfigEntry('output', '', lineno=3)
        >>> raise entry.error("expected a path but got {value!r}")
        Traceback (most recent call last):
        ValueError: <config>: 3: output: expected a path but got ''
        """
        filename = self.filename or "<config>"
        lineno = str(self.lineno or "??")
        kwargs.update(key=self.key, value=self.value)
        message = pattern.format(*args, **kwargs)
        return ValueError(": ".join([filename, lineno, self.key, message]))
