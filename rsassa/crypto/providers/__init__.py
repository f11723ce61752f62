#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Cryptographic providers executing the RSA primitives."""

import logging
from typing import Optional

from rsassa import RSASSA_DEFAULT_PROVIDER
from rsassa.crypto.exceptions import RSASSAProviderError
from rsassa.crypto.providers.base import CryptoProvider, KeyPairHandle, ProviderHandle
from rsassa.crypto.providers.cryptography_provider import CryptographyProvider

logger = logging.getLogger(__name__)

__all__ = [
    "CryptoProvider",
    "CryptographyProvider",
    "KeyPairHandle",
    "ProviderHandle",
    "get_provider",
]


def get_provider(config: Optional[str] = None) -> CryptoProvider:
    """Create provider from configuration string.

    :param config: Configuration string, ``RSASSA_DEFAULT_PROVIDER`` if not given.
    :raises RSASSAProviderError: No provider matches the configuration.
    :return: Provider instance.
    """
    config = config or RSASSA_DEFAULT_PROVIDER
    provider = CryptoProvider.create(config)
    if provider is None:
        raise RSASSAProviderError(f"Cryptographic provider could not be created from: {config}")
    logger.debug(f"Using cryptographic provider {provider.info()}")
    return provider
