#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""RSA-SSA-PKCS1v15 key adaptation, signing and verification.

The commonly used names are re-exported here.
"""

from rsassa.crypto.hash import EnumHashAlgorithm, HashBinding, get_provider_hash_name
from rsassa.crypto.key_pair import ProviderRsaKeyPair, ProviderRsaPublicKey
from rsassa.crypto.keys import (
    EnumKeyType,
    KeyPair,
    PortableRsaPrivateKey,
    PortableRsaPublicKey,
    PublicKey,
    Signature,
    SimplePublicKey,
)
from rsassa.crypto.rsa_ssa_pkcs1v15 import RsaSsaPkcs1v15

__all__ = [
    "EnumHashAlgorithm",
    "EnumKeyType",
    "HashBinding",
    "KeyPair",
    "PortableRsaPrivateKey",
    "PortableRsaPublicKey",
    "ProviderRsaKeyPair",
    "ProviderRsaPublicKey",
    "PublicKey",
    "RsaSsaPkcs1v15",
    "Signature",
    "SimplePublicKey",
    "get_provider_hash_name",
]
