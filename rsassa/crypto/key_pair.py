#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Key pairs and public keys backed by provider handles.

A generated key pair lives inside the provider; its portable forms are
exported lazily on the first extraction and kept for later calls.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from rsassa.crypto.exceptions import RSASSAExportDenied
from rsassa.crypto.jwk import private_key_from_jwk, public_key_from_jwk
from rsassa.crypto.keys import EnumKeyType, KeyPair, PortableRsaPrivateKey, PortableRsaPublicKey
from rsassa.crypto.providers.base import CryptoProvider, HandleTag, KeyPairHandle, ProviderHandle

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False, repr=False)
class ProviderRsaPublicKey(PortableRsaPublicKey):
    """Portable RSA public key that remembers the provider handle it came from.

    Equality and hashing stay structural, neither the handle nor its provider
    take part in them.
    """

    handle: Optional[ProviderHandle] = field(default=None, compare=False)
    provider: Optional[CryptoProvider] = field(default=None, compare=False)

    @property
    def tag(self) -> Optional[HandleTag]:
        """Binding of the carried handle, None if there is no handle."""
        return self.handle.tag if self.handle else None


class ProviderRsaKeyPair(KeyPair):
    """RSA key pair held by a cryptographic provider."""

    def __init__(self, handles: KeyPairHandle, provider: CryptoProvider) -> None:
        """Initialize the key pair.

        :param handles: Private and public handle of the pair.
        :param provider: Provider owning the handles.
        """
        self.handles = handles
        self.provider = provider
        self._private_key: Optional[PortableRsaPrivateKey] = None
        self._public_key: Optional[ProviderRsaPublicKey] = None

    @property
    def key_type(self) -> EnumKeyType:
        """Variant of the key pair."""
        return EnumKeyType.RSA_PRIVATE

    @property
    def tag(self) -> HandleTag:
        """Binding both handles were created under."""
        return self.handles.tag

    @property
    def private_handle(self) -> ProviderHandle:
        """Provider handle of the private key."""
        return self.handles.private_key

    @property
    def public_handle(self) -> ProviderHandle:
        """Provider handle of the public key."""
        return self.handles.public_key

    @property
    def extractable(self) -> bool:
        """Private key material may be exported."""
        return self.handles.private_key.extractable

    async def extract(self) -> PortableRsaPrivateKey:
        """Export portable private key, the result is kept for later calls.

        :raises RSASSAExportDenied: The key pair was created as non-extractable.
        :return: Portable private key.
        """
        if self._private_key is None:
            if not self.extractable:
                raise RSASSAExportDenied(
                    f"Key pair bound to {self.tag} is not extractable, "
                    "regenerate it as extractable to export the private key"
                )
            logger.debug(f"Exporting private key bound to {self.tag}")
            fields = await self.provider.export_key(self.handles.private_key)
            self._private_key = private_key_from_jwk(fields)
        return self._private_key

    async def extract_public_key(self) -> ProviderRsaPublicKey:
        """Export public key, the result is kept for later calls.

        :return: Public key carrying the provider's public handle.
        """
        if self._public_key is None:
            logger.debug(f"Exporting public key bound to {self.tag}")
            fields = await self.provider.export_key(self.handles.public_key)
            public_key = public_key_from_jwk(fields)
            self._public_key = ProviderRsaPublicKey(
                n=public_key.n,
                e=public_key.e,
                handle=self.handles.public_key,
                provider=self.provider,
            )
        return self._public_key

    def __repr__(self) -> str:
        return f"ProviderRsaKeyPair({self.tag}, extractable={self.extractable})"
