#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Hash bindings supported by RSA-SSA-PKCS1v15 providers.

PKCS#1 v1.5 embeds the identity of the hash function into every signature,
so a key handle is always bound to exactly one hash. Only a closed set of
hash functions is supported; anything else is rejected before any provider
is contacted.
"""

from typing import Any, Union

from cryptography.hazmat.primitives import hashes

from rsassa.crypto.exceptions import RSASSAUnsupportedAlgorithm
from rsassa.exceptions import RSASSAKeyError
from rsassa.utils.rsassa_enum import RSASSAEnum


class EnumHashAlgorithm(RSASSAEnum):
    """Hash algorithms usable as a PKCS#1 v1.5 hash binding.

    The description holds the algorithm name used in the key exchange with
    providers.
    """

    SHA1 = (0, "sha1", "SHA-1")
    SHA256 = (1, "sha256", "SHA-256")
    SHA384 = (2, "sha384", "SHA-384")
    SHA512 = (3, "sha512", "SHA-512")


HashBinding = EnumHashAlgorithm

_PROVIDER_HASH_NAMES = {
    EnumHashAlgorithm.SHA1: "SHA-1",
    EnumHashAlgorithm.SHA256: "SHA-256",
    EnumHashAlgorithm.SHA384: "SHA-384",
    EnumHashAlgorithm.SHA512: "SHA-512",
}

_CRYPTOGRAPHY_HASHES = {
    EnumHashAlgorithm.SHA1: hashes.SHA1,
    EnumHashAlgorithm.SHA256: hashes.SHA256,
    EnumHashAlgorithm.SHA384: hashes.SHA384,
    EnumHashAlgorithm.SHA512: hashes.SHA512,
}


def resolve_hash_binding(algorithm: Any) -> EnumHashAlgorithm:
    """Resolve hash binding from any of the accepted representations.

    Accepted are enum members, labels ("sha256") and provider names
    ("SHA-256") as strings, and instances of ``cryptography`` hash algorithms.

    :param algorithm: Hash algorithm in one of the accepted representations.
    :raises RSASSAUnsupportedAlgorithm: The hash is not supported.
    :return: Hash binding enum member.
    """
    if isinstance(algorithm, EnumHashAlgorithm):
        return algorithm
    if isinstance(algorithm, str):
        try:
            return EnumHashAlgorithm.from_label(algorithm.replace("-", ""))
        except RSASSAKeyError:
            pass
    if isinstance(algorithm, hashes.HashAlgorithm):
        for binding, hash_cls in _CRYPTOGRAPHY_HASHES.items():
            if type(algorithm) is hash_cls:  # pylint: disable=unidiomatic-typecheck
                return binding
    raise RSASSAUnsupportedAlgorithm(
        f"Hash function not supported by RSA-SSA-PKCS1v15: {algorithm!r}"
    )


def get_provider_hash_name(algorithm: Union[EnumHashAlgorithm, Any]) -> str:
    """Get hash name expected by cryptographic providers.

    :param algorithm: Hash binding, see :func:`resolve_hash_binding`.
    :raises RSASSAUnsupportedAlgorithm: The hash is not supported.
    :return: Provider hash identifier such as "SHA-256".
    """
    return _PROVIDER_HASH_NAMES[resolve_hash_binding(algorithm)]


def get_hash_algorithm(algorithm: Union[EnumHashAlgorithm, Any]) -> hashes.HashAlgorithm:
    """Get ``cryptography`` hash algorithm instance for the hash binding.

    :param algorithm: Hash binding or provider hash name.
    :raises RSASSAUnsupportedAlgorithm: The hash is not supported.
    :return: Instance of the corresponding hash algorithm class.
    """
    return _CRYPTOGRAPHY_HASHES[resolve_hash_binding(algorithm)]()

