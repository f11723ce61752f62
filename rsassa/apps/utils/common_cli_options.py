#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""CLI helpers for Click."""

import logging
from typing import Any, Callable, TypeVar, Union

import click

from rsassa import RSASSA_DEFAULT_PROVIDER
from rsassa import __version__ as rsassa_version
from rsassa.crypto.hash import EnumHashAlgorithm

FC = TypeVar("FC", bound=Union[Callable[..., Any], click.Command])


def rsassa_apps_common_options(options: FC) -> FC:
    """Common click options.

    Sets --help, --version; provides: `log_level: int` for logging.

    :return: click decorator
    """
    options = click.help_option("--help")(options)
    options = click.version_option(rsassa_version, "--version")(options)
    options = click.option(
        "-vv",
        "--debug",
        "log_level",
        flag_value=logging.DEBUG,
        help="Display more debugging information.",
    )(options)
    options = click.option(
        "-v",
        "--verbose",
        "log_level",
        flag_value=logging.INFO,
        help="Print more detailed information",
    )(options)
    return options


def rsassa_plugin_option(options: FC) -> FC:
    """Plugin click option decorator.

    Provides: `plugin: str` a full path to plugin file.

    :return: Click decorator
    """
    return click.option(
        "--plugin",
        required=False,
        type=click.Path(resolve_path=True, dir_okay=False, exists=True),
        help="External python file containing a custom provider implementation.",
    )(options)


def rsassa_provider_option(options: FC) -> FC:
    """Provider click option decorator.

    Provides: `provider: str` configuration string of the cryptographic provider.

    :return: Click decorator
    """
    return click.option(
        "--provider",
        metavar="CONFIG",
        default=RSASSA_DEFAULT_PROVIDER,
        show_default=True,
        help="Cryptographic provider configuration, e.g. 'type=cryptography'.",
    )(options)


def rsassa_hash_option(options: FC) -> FC:
    """Hash algorithm click option decorator.

    Provides: `hash_algorithm: str` label of the hash binding.

    :return: Click decorator
    """
    return click.option(
        "-a",
        "--hash-algorithm",
        type=click.Choice(EnumHashAlgorithm.labels(), case_sensitive=False),
        default=EnumHashAlgorithm.SHA256.label,
        show_default=True,
        help="Hash algorithm bound to the key. Signing and verification must use the same.",
    )(options)
