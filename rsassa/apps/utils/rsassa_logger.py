#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Logging setup of RSASSA applications with colored console output."""

import logging
import logging.config
import logging.handlers
import os
import platform
import sys
from datetime import datetime
from typing import Optional, TextIO

import colorama

from rsassa import (
    RSASSA_CONFIG_DIR,
    RSASSA_DEBUG,
    RSASSA_DEBUG_LOG_FILE,
    RSASSA_DEBUG_LOGGING_DISABLED,
    __version__,
)
from rsassa.utils.misc import load_configuration

colorama.just_fix_windows_console()

LOGGING_CONFIG_FILE = os.path.join(RSASSA_CONFIG_DIR, "logging.yaml")


class ColoredFormatter(logging.Formatter):
    """Logging formatter coloring records by their level.

    :cvar COLORED_FORMATS: Color-coded format strings for each logging level.
    :cvar FORMATS: Plain text format strings for each logging level.
    """

    FORMAT = logging.BASIC_FORMAT
    FORMAT_DEBUG = FORMAT + " (%(relativeCreated)dms since start, %(filename)s:%(lineno)d)"

    COLORED_FORMATS = {
        logging.DEBUG: colorama.Fore.BLUE + FORMAT_DEBUG + colorama.Fore.RESET,
        logging.INFO: colorama.Fore.WHITE
        + colorama.Style.BRIGHT
        + FORMAT
        + colorama.Fore.RESET
        + colorama.Style.RESET_ALL,
        logging.WARNING: colorama.Fore.YELLOW + FORMAT_DEBUG + colorama.Fore.RESET,
        logging.ERROR: colorama.Fore.RED + FORMAT_DEBUG + colorama.Fore.RESET,
        logging.CRITICAL: colorama.Fore.RED
        + colorama.Style.BRIGHT
        + FORMAT_DEBUG
        + colorama.Fore.RESET
        + colorama.Style.RESET_ALL,
    }
    FORMATS = {
        logging.DEBUG: FORMAT_DEBUG,
        logging.INFO: FORMAT,
        logging.WARNING: FORMAT_DEBUG,
        logging.ERROR: FORMAT_DEBUG,
        logging.CRITICAL: FORMAT_DEBUG,
    }

    def __init__(self, colored: bool = True) -> None:
        """Initialize the formatter.

        :param colored: Use colored format strings.
        """
        super().__init__()
        self.colored = colored
        self.formats = self.COLORED_FORMATS if colored else self.FORMATS

    def format(self, record: logging.LogRecord) -> str:
        """Format the record with the format string of its level."""
        formatter = logging.Formatter(self.formats.get(record.levelno))
        return formatter.format(record)


def load_logging_config(path: str = LOGGING_CONFIG_FILE) -> bool:
    """Apply logging configuration from a YAML or JSON file if it exists.

    :param path: Path to the configuration file.
    :return: True if a configuration was applied.
    """
    if not os.path.isfile(path):
        return False
    logging.config.dictConfig(load_configuration(path))
    return True


def _has_debug_handler(target_logger: logging.Logger) -> bool:
    return any(
        isinstance(h, logging.handlers.RotatingFileHandler)
        and h.baseFilename == os.path.abspath(RSASSA_DEBUG_LOG_FILE)
        for h in target_logger.handlers
    )


def install(
    level: Optional[int] = None,
    stream: TextIO = sys.stderr,
    colored: Optional[bool] = None,
    logger: Optional[logging.Logger] = None,
    create_debug_logger: bool = True,
) -> None:
    """Install RSASSA log handlers.

    :param level: Logging level of the console, defaults to logging.WARNING,
        logging.DEBUG when RSASSA_DEBUG is set
    :param stream: Stream of the console output, defaults to sys.stderr
    :param colored: Force colored output on or off, detected from the stream if not set
    :param logger: Logger to configure, defaults to the "rsassa" logger
    :param create_debug_logger: Add rotating debug log file handler
    """
    level = logging.DEBUG if RSASSA_DEBUG else level or logging.WARNING
    target_logger = logger or logging.getLogger("rsassa")
    target_logger.setLevel(logging.DEBUG)

    color = hasattr(stream, "isatty") and stream.isatty() and "NO_COLOR" not in os.environ
    if colored is not None:
        color = colored

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(color))
    target_logger.addHandler(handler)
    target_logger.propagate = True

    if load_logging_config():
        target_logger.debug(f"Logging config loaded from {LOGGING_CONFIG_FILE}")

    if not create_debug_logger or RSASSA_DEBUG_LOGGING_DISABLED:
        return
    if _has_debug_handler(target_logger):
        return

    try:
        os.makedirs(os.path.dirname(RSASSA_DEBUG_LOG_FILE), exist_ok=True)
        debug_handler = logging.handlers.RotatingFileHandler(
            RSASSA_DEBUG_LOG_FILE, mode="a", maxBytes=1_000_000, backupCount=5, encoding="utf-8"
        )
    except OSError as exc:
        target_logger.warning(f"Failed to initialize debug logging: {str(exc)}")
        return
    debug_handler.setFormatter(ColoredFormatter(colored=False))
    debug_handler.setLevel(logging.DEBUG)
    target_logger.addHandler(debug_handler)

    starter = f"* RSASSA DEBUG LOGGING STARTED {datetime.now().strftime('%Y-%m-%d %H:%M:%S')} *"
    padding = len(starter) - 2
    target_logger.debug("*" * len(starter))
    target_logger.debug(starter)
    target_logger.debug(f"* RSASSA version: {__version__}".ljust(padding) + " *")
    target_logger.debug(f"* Python version: {sys.version.split()[0]}".ljust(padding) + " *")
    target_logger.debug(f"* OS version: {platform.platform()}".ljust(padding) + " *")
    target_logger.debug(f"* Last command: {sys.argv}".ljust(padding) + " *")
    target_logger.debug("*" * len(starter))
