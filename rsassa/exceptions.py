#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""RSASSA exception classes.

All errors raised by the library derive from :class:`RSASSAError`, so callers
may catch the whole family at once.
"""

from typing import Optional

#######################################################################
# # RSASSA Exceptions
#######################################################################


class RSASSAError(Exception):
    """RSASSA Base Exception.

    :cvar fmt: Default error message format template.
    """

    fmt = "RSASSA: {description}"

    def __init__(self, desc: Optional[str] = None) -> None:
        """Initialize the base RSASSA Exception.

        :param desc: Optional description of the exception.
        """
        super().__init__()
        self.description = desc

    def __str__(self) -> str:
        """Return formatted exception message, "Unknown Error" if no description is set."""
        return self.fmt.format(description=self.description or "Unknown Error")


class RSASSAKeyError(RSASSAError, KeyError):
    """Missing or unknown lookup key."""


class RSASSAValueError(RSASSAError, ValueError):
    """Invalid value passed to an RSASSA operation."""


class RSASSATypeError(RSASSAError, TypeError):
    """Value of an unexpected type passed to an RSASSA operation."""


class RSASSAUnsupportedOperation(RSASSAError):
    """Operation is not supported by the current provider or configuration."""
