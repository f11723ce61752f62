#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""RSASSA - RSA-SSA-PKCS1v15 signing over pluggable cryptographic providers.

The package keeps RSA key material in a portable, provider independent form
and adapts it into opaque handles of an external cryptographic provider.
Imported handles are cached per key and hash binding, so repeated signing
and verification with the same key do not re-import the key material.

The behavior of the library can be tuned by environment variables, see the
constants defined below.
"""

import os
from typing import Optional, Union

from packaging.version import Version, parse
from platformdirs import PlatformDirs

from .__version__ import __version__ as rsassa_version


def value_to_bool(value: Optional[Union[bool, int, str]]) -> bool:
    """Convert value to boolean from various input formats.

    Supports conversion from string representations like "True", "true", "T", "1"
    and standard Python truthy/falsy values for other types.

    :param value: Value to convert to boolean (string, int, bool, or None).
    :return: Boolean representation of the input value.
    """
    if isinstance(value, str):
        return value in ("True", "true", "T", "1")
    return bool(value)


def value_to_int(value: Optional[str], default: int) -> int:
    """Convert environment value to integer.

    :param value: Raw value, None when the variable is not set.
    :param default: Value used when the variable is not set or empty.
    :return: Integer value.
    """
    if not value:
        return default
    return int(value, 0)


version: Version = parse(rsassa_version)

__author__ = "NXP"
__license__ = "BSD-3-Clause"
__version__ = str(version)

RSASSA_VERSION_BASE = version.base_version

RSASSA_PLATFORM_DIRS = PlatformDirs(
    appauthor="nxp",
    appname="rsassa",
    version=RSASSA_VERSION_BASE,
)

# Provider used when the caller does not pass one explicitly
RSASSA_DEFAULT_PROVIDER = os.environ.get("RSASSA_DEFAULT_PROVIDER", "type=cryptography")

# Imported handles are not reused when the cache is disabled
RSASSA_HANDLE_CACHE_DISABLED = value_to_bool(os.environ.get("RSASSA_HANDLE_CACHE_DISABLED"))

# Maximal count of public key handles kept per adapter, 0 means unlimited
RSASSA_PUBLIC_HANDLE_CACHE_SIZE = value_to_int(
    os.environ.get("RSASSA_PUBLIC_HANDLE_CACHE_SIZE"), 256
)

# Console log of the applications shows debug messages
RSASSA_DEBUG = value_to_bool(os.environ.get("RSASSA_DEBUG"))
RSASSA_DEBUG_LOGGING_DISABLED = value_to_bool(os.environ.get("RSASSA_DEBUG_LOGGING_DISABLED"))
RSASSA_DEBUG_LOG_FILE = os.environ.get(
    "RSASSA_DEBUG_LOG_FILE", os.path.join(RSASSA_PLATFORM_DIRS.user_log_dir, "debug.log")
)
RSASSA_CONFIG_DIR = os.path.expanduser("~/.rsassa")
