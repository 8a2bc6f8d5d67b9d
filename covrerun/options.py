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
from argparse import ArgumentTypeError
import os
import shlex
from typing import Any, Callable, Optional, Union


def relative_path(value: str, basedir: Optional[str] = None) -> str:
    r"""
    Make a absolute path if value is a relative path.
    """
    if not isinstance(value, str):
        raise ArgumentTypeError(f"Expected a path, got {value!r}.")
    if not value:
        raise ArgumentTypeError("Should not be set to an empty string.") from None

    if basedir is None:
        basedir = os.getcwd()

    if not os.path.isabs(value):
        value = os.path.join(basedir, value)
    value = os.path.normpath(value)
    return os.path.relpath(value, os.getcwd())


def shell_arguments(value: Union[str, list[str]]) -> list[str]:
    r"""
    Split a command line string into its arguments.

    A list, e.g. from a TOML configuration, is already split.

    >>> shell_arguments("-v -coverprofile='my cover.out' ./...")
    ['-v', '-coverprofile=my cover.out', './...']
    >>> shell_arguments(["-v", "-coverprofile=my cover.out"])
    ['-v', '-coverprofile=my cover.out']
    >>> shell_arguments("-run 'unterminated")
    Traceback (most recent call last):
      ...
    argparse.ArgumentTypeError: Could not split arguments: No closing quotation
    >>> shell_arguments(["-count", 1])
    Traceback (most recent call last):
      ...
    argparse.ArgumentTypeError: Expected a string or a list of strings, got ['-count', 1].
    """
    if isinstance(value, list):
        if not all(isinstance(item, str) for item in value):
            raise ArgumentTypeError(
                f"Expected a string or a list of strings, got {value!r}."
            )
        return list(value)
    if not isinstance(value, str):
        raise ArgumentTypeError(
            f"Expected a string or a list of strings, got {value!r}."
        )
    try:
        return shlex.split(value)
    except ValueError as e:
        raise ArgumentTypeError(f"Could not split arguments: {e}") from None


class Options:
    """Wrapper for holding the configuration."""

    def __init__(self, **kwargs: Any) -> None:
        self.__dict__.update(kwargs)

    def get(self, name: str) -> Any:
        """Function to get an option by name."""
        return self.__dict__.get(name)


class CovrerunConfigOption:
    # pylint: disable=too-many-instance-attributes
    # pylint: disable=too-few-public-methods
    # pylint: disable=redefined-builtin
    r"""
    Represents a single setting for a covrerun runtime parameter.

    Each setting is declared once and then used for the command line
    parser and for the configuration file parser. This is implemented
    in a way similar to how options are defined in argparse. The converter
    keyword argument is expected to return a valid conversion of a string
    value or throw an error.

    Arguments:
        name (str):
            Destination (options object field),
            must be valid Python identifier.
        flags (list of str, optional):
            Any command line flags.

    Keyword Arguments:
        action (str, optional):
            What to do when the option is parsed:
            - store (default): store the option argument
            - store_const: store the const value
            - store_true, store_false: shortcuts for store_const
            (Compare also the *argparse* documentation.)
        config (str or bool, optional):
            Configuration file key.
            If absent, the first ``--flag`` is used without the leading dashes.
            If explicitly set to False,
            the option cannot be set from a config file.
        const (any, optional):
            Assigned by the "store_const" action.
        default (any, optional):
            Default value if the option is not found, defaults to None.
        help (str):
            Help message.
            Any named curly-brace placeholders
            are filled in from the option attributes via ``str.format()``.
        metavar (str, optional):
            Name of the value in help messages, defaults to the name.
        nargs (int or '?', optional):
            How often the option may occur.
        positional (bool, optional):
            Whether this is a positional option, defaults to False.
            A positional argument cannot have flags.
        type (function, optional):
            Check and convert the option value, may throw exceptions.

    Constraint: an option must be either have a flag or be positional
    or have a config key, or a combination thereof.
    """

    def __init__(
        self,
        name: str,
        flags: Optional[list[str]] = None,
        *,
        help: str,
        action: str = "store",
        const: Any = None,
        config: Union[str, bool] = True,
        default: Any = None,
        metavar: Optional[str] = None,
        nargs: Union[int, str, None] = None,
        positional: bool = False,
        type: Optional[Callable[[str], Any]] = None,
    ) -> None:
        if flags is None:
            flags = []

        if flags and positional:
            raise AssertionError("Option cannot have flags and be positional")

        config_keys = _derive_configuration_key(config, flags=flags)
        del config

        if not (flags or positional or config_keys):
            raise AssertionError(
                "Option must be named, positional, or config argument."
            )

        if not help:
            raise AssertionError("help required")
        if (flags or positional) and config_keys:
            help += f" Config key(s): {', '.join(config_keys)}."

        # the store_true and store_false actions have hardcoded boolean
        # constants in their definitions so they need switched to the generic
        # store_const in order for the logic here to work correctly.
        if action == "store_true":
            if const is not None:
                raise AssertionError("action=store_true and const conflict")
            if default is not None:
                raise AssertionError("action=store_true and default conflict")
            action = "store_const"
            const = True
            default = False
        elif action == "store_false":
            if const is not None:
                raise AssertionError("action=store_false and const conflict")
            if default is not None:
                raise AssertionError("action=store_false and default conflict")
            action = "store_const"
            const = False
            default = True

        if action not in ("store", "store_const"):
            raise AssertionError(f"Unknown action {action!r}")

        self.name = name
        self.flags = flags

        self.action = action
        self.config_keys = config_keys
        self.const = const
        self.default = default
        self.help = ""  # assigned later
        self.metavar = metavar
        self.nargs = nargs
        self.positional = positional
        self.type = type

        # format the help
        self.help = help.format(**self.__dict__)

    def __repr__(self) -> str:
        r"""String representation of instance.

        >>> CovrerunConfigOption('foo', ['-f', '--foo'], help="foo text.") # doctest: +ELLIPSIS
        CovrerunConfigOption('foo', [-f, --foo], ..., help='foo text. Config key(s): foo.', ...)
        """
        name = self.name
        flags = ", ".join(self.flags)
        kwargs = ", ".join(
            f"{k}={v!r}"
            for k, v in sorted(self.__dict__.items())
            if k not in ("name", "flags")
        )

        return f"CovrerunConfigOption({name!r}, [{flags}], {kwargs})"


def _derive_configuration_key(
    config: Union[str, bool],
    *,
    flags: list[str],
) -> Optional[list[str]]:
    if config is True:
        config_keys = []
        for flag in flags:
            if flag.startswith("--"):
                config_keys.append(flag.lstrip("-"))
        if not config_keys:
            raise AssertionError(f"Could not autogenerate config key from {flags!r}.")
        return config_keys
    if config is False:
        return None
    if isinstance(config, str):
        return [config]

    raise AssertionError(
        f"Sanity check failed, unexpected config entry type {config!r}"
    )
