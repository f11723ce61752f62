#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""RSA-SSA-PKCS1v15 signing and verification over a cryptographic provider.

The hash binding is chosen when the :class:`RsaSsaPkcs1v15` object is
created. Signatures don't carry the binding, so the same binding has to be
used to verify them.

Example::

    scheme = RsaSsaPkcs1v15(EnumHashAlgorithm.SHA256)
    key_pair = await scheme.new_key_pair(modulus_length=2048)
    signature = await scheme.sign(b"message", key_pair)
    assert await scheme.verify(b"message", signature)
"""

import asyncio
import logging
from typing import Any, Optional

from rsassa.crypto.exceptions import (
    RSASSAInvalidAccess,
    RSASSASigningFailed,
    RSASSAVerificationError,
)
from rsassa.crypto.handle_cache import KeyHandleAdapter, make_tag
from rsassa.crypto.hash import EnumHashAlgorithm, resolve_hash_binding
from rsassa.crypto.jwk import private_key_to_jwk, public_key_to_jwk
from rsassa.crypto.key_pair import ProviderRsaKeyPair
from rsassa.crypto.keys import (
    EnumKeyType,
    KeyPair,
    PortableRsaPrivateKey,
    PublicKey,
    Signature,
    require_key_type,
)
from rsassa.crypto.providers import get_provider
from rsassa.crypto.providers.base import (
    JWK_FORMAT,
    RSASSA_PKCS1_V1_5,
    USAGE_SIGN,
    USAGE_VERIFY,
    CryptoProvider,
    HandleTag,
    KeyPairHandle,
)
from rsassa.exceptions import RSASSAError, RSASSAValueError
from rsassa.utils.misc import BytesLike, to_bytes

logger = logging.getLogger(__name__)


class RsaSsaPkcs1v15:
    """RSA-SSA-PKCS1v15 signature scheme bound to one hash algorithm.

    :cvar DEFAULT_MODULUS_LENGTH: Modulus length of new key pairs in bits.
    :cvar DEFAULT_PUBLIC_EXPONENT: Public exponent of new key pairs (65537).
    """

    DEFAULT_MODULUS_LENGTH = 4096
    DEFAULT_PUBLIC_EXPONENT = b"\x01\x00\x01"

    def __init__(
        self,
        hash_algorithm: Any,
        provider: Optional[CryptoProvider] = None,
        adapter: Optional[KeyHandleAdapter] = None,
    ) -> None:
        """Initialize the scheme.

        :param hash_algorithm: Hash binding as enum member, name ("sha256", "SHA-256")
            or ``cryptography`` hash instance.
        :param provider: Cryptographic provider, the adapter's provider or the default
            provider if not specified.
        :param adapter: Handle adapter, possibly shared with other schemes.
        :raises RSASSAUnsupportedAlgorithm: The hash is not supported.
        :raises RSASSAValueError: The adapter serves another provider.
        """
        self.hash_algorithm: EnumHashAlgorithm = resolve_hash_binding(hash_algorithm)
        if adapter and provider and adapter.provider is not provider:
            raise RSASSAValueError("Adapter must serve the same provider as the scheme")
        self.provider = provider or (adapter.provider if adapter else get_provider())
        self.adapter = adapter or KeyHandleAdapter(self.provider)
        self.tag: HandleTag = make_tag(self.hash_algorithm)

    def __repr__(self) -> str:
        return f"RsaSsaPkcs1v15({self.hash_algorithm.label}, provider={self.provider.identifier})"

    @property
    def hash_name(self) -> str:
        """Provider name of the bound hash."""
        return self.tag.hash_name

    async def new_key_pair(
        self,
        modulus_length: int = DEFAULT_MODULUS_LENGTH,
        public_exponent: BytesLike = DEFAULT_PUBLIC_EXPONENT,
    ) -> ProviderRsaKeyPair:
        """Generate new extractable key pair bound to the hash of the scheme.

        :param modulus_length: Modulus length in bits.
        :param public_exponent: Public exponent as big-endian bytes.
        :raises RSASSAUnsupportedModulusLength: Modulus length is rejected.
        :raises RSASSAGenerationFailed: Provider failed to create the key pair.
        :return: Provider-backed key pair.
        """
        handles = await self.provider.generate_key_pair(
            RSASSA_PKCS1_V1_5,
            modulus_length=modulus_length,
            public_exponent=to_bytes(public_exponent, "public_exponent"),
            hash_name=self.hash_name,
            extractable=True,
            usages=[USAGE_SIGN, USAGE_VERIFY],
        )
        if handles.tag != self.tag:
            raise RSASSAInvalidAccess(f"Provider created key pair bound to {handles.tag}, not {self.tag}")
        logger.debug(f"Generated RSA{modulus_length} key pair bound to {self.tag}")
        return ProviderRsaKeyPair(handles, self.provider)

    async def import_key_pair(
        self, private_key: PortableRsaPrivateKey, extractable: bool = True
    ) -> ProviderRsaKeyPair:
        """Import portable private key as provider-backed key pair.

        :param private_key: Portable private key.
        :param extractable: Whether the private key may be exported again.
        :raises RSASSAKeyTypeMismatch: The value is not an RSA private key.
        :raises RSASSAKeyMaterialInvalid: The key material is incomplete or rejected.
        :return: Key pair bound to the hash of the scheme.
        """
        require_key_type(private_key, EnumKeyType.RSA_PRIVATE, "private_key")
        private_handle = await self.provider.import_key(
            JWK_FORMAT,
            private_key_to_jwk(private_key),
            algorithm=RSASSA_PKCS1_V1_5,
            hash_name=self.hash_name,
            extractable=extractable,
            usages=[USAGE_SIGN],
        )
        public_handle = await self.provider.import_key(
            JWK_FORMAT,
            public_key_to_jwk(private_key.public_key),
            algorithm=RSASSA_PKCS1_V1_5,
            hash_name=self.hash_name,
            extractable=True,
            usages=[USAGE_VERIFY],
        )
        return ProviderRsaKeyPair(KeyPairHandle(private_handle, public_handle), self.provider)

    async def extract_private(self, key_pair: KeyPair) -> PortableRsaPrivateKey:
        """Extract portable private key of the key pair.

        :param key_pair: RSA key pair.
        :raises RSASSAExportDenied: The key pair is not extractable.
        :return: Portable private key.
        """
        require_key_type(key_pair, EnumKeyType.RSA_PRIVATE, "key_pair")
        return await key_pair.extract()

    async def extract_public(self, key_pair: KeyPair) -> PublicKey:
        """Extract public key of the key pair."""
        require_key_type(key_pair, EnumKeyType.RSA_PRIVATE, "key_pair")
        return await key_pair.extract_public_key()

    async def sign(self, message: BytesLike, key_pair: KeyPair) -> Signature:
        """Sign message.

        The public key of the pair is extracted while the private handle is
        resolved and the message signed.

        :param message: Message to sign.
        :param key_pair: RSA key pair.
        :raises RSASSAKeyTypeMismatch: The value is not an RSA key pair.
        :raises RSASSASigningFailed: Provider failed to compute the signature.
        :return: Signature with the public key of the pair.
        """
        require_key_type(key_pair, EnumKeyType.RSA_PRIVATE, "key_pair")
        data = to_bytes(message, "message")

        public_key_task = asyncio.ensure_future(key_pair.extract_public_key())
        try:
            handle = await self.adapter.private_handle(key_pair, self.hash_algorithm)
            try:
                signature = await self.provider.sign(RSASSA_PKCS1_V1_5, handle, data)
            except RSASSAError:
                raise
            except Exception as exc:
                raise RSASSASigningFailed(f"Signing failed: {exc}") from exc
            public_key = await public_key_task
        except BaseException:
            public_key_task.cancel()
            if public_key_task.done() and not public_key_task.cancelled():
                public_key_task.exception()
            raise

        return Signature(signature, public_key)

    async def verify(self, message: BytesLike, signature: Signature) -> bool:
        """Verify signature of the message.

        :param message: Signed message.
        :param signature: Signature with the RSA public key to verify it with.
        :raises RSASSAKeyTypeMismatch: The signature key is not an RSA public key.
        :raises RSASSAVerificationError: Provider failed to run the verification.
        :return: True if the signature is valid, False otherwise.
        """
        require_key_type(getattr(signature, "public_key", None), EnumKeyType.RSA_PUBLIC, "public_key")
        data = to_bytes(message, "message")
        handle = await self.adapter.public_handle(signature.public_key, self.hash_algorithm)
        try:
            return await self.provider.verify(RSASSA_PKCS1_V1_5, handle, signature.bytes, data)
        except RSASSAError:
            raise
        except Exception as exc:
            raise RSASSAVerificationError(f"Verification failed: {exc}") from exc
