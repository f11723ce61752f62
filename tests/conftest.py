#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""RSASSA pytest configuration and shared test fixtures."""

import logging
import os
from collections import Counter
from typing import Any

import pytest

os.environ["RSASSA_DEBUG_LOGGING_DISABLED"] = "True"

# pylint: disable=wrong-import-position
from cryptography.hazmat.primitives.asymmetric import rsa

from rsassa.crypto.keys import PortableRsaPrivateKey
from rsassa.crypto.providers.cryptography_provider import CryptographyProvider
from tests.cli_runner import CliRunner


class CountingProvider(CryptographyProvider):
    """In-process provider recording how many times each operation was called.

    :cvar identifier: Unique identifier of the test provider type.
    """

    identifier = "counting"

    def __init__(self, skip_key_validation: Any = False) -> None:
        super().__init__(skip_key_validation=skip_key_validation)
        self.calls: Counter = Counter()
        self.imported_usages: list[frozenset] = []

    async def generate_key_pair(self, *args: Any, **kwargs: Any) -> Any:
        self.calls["generate_key_pair"] += 1
        return await super().generate_key_pair(*args, **kwargs)

    async def import_key(self, *args: Any, **kwargs: Any) -> Any:
        self.calls["import_key"] += 1
        handle = await super().import_key(*args, **kwargs)
        self.imported_usages.append(handle.usages)
        return handle

    async def export_key(self, *args: Any, **kwargs: Any) -> Any:
        self.calls["export_key"] += 1
        return await super().export_key(*args, **kwargs)

    async def sign(self, *args: Any, **kwargs: Any) -> Any:
        self.calls["sign"] += 1
        return await super().sign(*args, **kwargs)

    async def verify(self, *args: Any, **kwargs: Any) -> Any:
        self.calls["verify"] += 1
        return await super().verify(*args, **kwargs)

    def total_calls(self) -> int:
        """Count of all provider calls."""
        return sum(self.calls.values())


class OtherCountingProvider(CountingProvider):
    """Counting provider of another type, its handles are foreign to ``CountingProvider``."""

    identifier = "other-counting"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Get CLI runner instance for testing."""
    return CliRunner()


@pytest.fixture(scope="module")
def data_dir(request: Any) -> str:
    """Get test data directory path for the current test module.

    :param request: Pytest request fixture containing test execution context.
    :return: Absolute path to the test data directory.
    """
    logging.debug(f"data_dir for module: {request.fspath}")
    data_path = os.path.join(os.path.dirname(request.fspath), "data")
    logging.debug(f"data_dir: {data_path}")
    return data_path


@pytest.fixture
def counting_provider() -> CountingProvider:
    """Get fresh provider counting its calls."""
    return CountingProvider()


@pytest.fixture(scope="session")
def rsa_private_numbers() -> rsa.RSAPrivateNumbers:
    """Private numbers of one RSA2048 key shared by the whole session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048).private_numbers()


@pytest.fixture
def portable_private_key(rsa_private_numbers: rsa.RSAPrivateNumbers) -> PortableRsaPrivateKey:
    """Get new portable private key object with the session key material.

    Every test gets its own object, identity based caches start empty.
    """
    numbers = rsa_private_numbers
    return PortableRsaPrivateKey.from_numbers(
        n=numbers.public_numbers.n,
        e=numbers.public_numbers.e,
        d=numbers.d,
        p=numbers.p,
        q=numbers.q,
        dp=numbers.dmp1,
        dq=numbers.dmq1,
        qi=numbers.iqmp,
    )
