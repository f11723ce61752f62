#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""In-process cryptographic provider backed by the ``cryptography`` package.

The RSA arithmetic is done by OpenSSL through ``cryptography``. CPU heavy
operations run in a worker thread so the event loop is not blocked while a
key is generated or a signature computed.
"""

import asyncio
import logging
from typing import Any, Iterable, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from rsassa import value_to_bool
from rsassa.crypto.exceptions import (
    RSASSAExportDenied,
    RSASSAGenerationFailed,
    RSASSAInvalidAccess,
    RSASSAKeyMaterialInvalid,
    RSASSASigningFailed,
    RSASSAUnsupportedAlgorithm,
    RSASSAUnsupportedModulusLength,
    RSASSAVerificationError,
)
from rsassa.crypto.hash import get_hash_algorithm, get_provider_hash_name
from rsassa.crypto.jwk import (
    is_private_jwk,
    private_key_from_jwk,
    private_key_to_jwk,
    public_key_from_jwk,
    public_key_to_jwk,
)
from rsassa.crypto.keys import PortableRsaPrivateKey, PortableRsaPublicKey
from rsassa.crypto.providers.base import (
    JWK_FORMAT,
    KEY_TYPE_PRIVATE,
    KEY_TYPE_PUBLIC,
    RSASSA_PKCS1_V1_5,
    USAGE_SIGN,
    USAGE_VERIFY,
    CryptoProvider,
    HandleTag,
    KeyPairHandle,
    ProviderHandle,
)
from rsassa.utils.misc import bytes_to_int, to_bytes

logger = logging.getLogger(__name__)

RsaKey = Union[rsa.RSAPrivateKey, rsa.RSAPublicKey]


class CryptographyKeyHandle(ProviderHandle):
    """Handle wrapping a ``cryptography`` RSA key object."""

    def __init__(
        self,
        key: RsaKey,
        tag: HandleTag,
        key_type: str,
        extractable: bool,
        usages: Iterable[str],
    ) -> None:
        super().__init__(tag=tag, key_type=key_type, extractable=extractable, usages=usages)
        self._key = key


class CryptographyProvider(CryptoProvider):
    """Provider executing RSA-SSA-PKCS1v15 with ``cryptography``.

    :cvar identifier: Provider identifier used in configuration strings.
    :cvar MIN_MODULUS_LENGTH: Smallest modulus accepted by generation.
    :cvar MAX_MODULUS_LENGTH: Largest modulus accepted by generation.
    """

    identifier = "cryptography"

    MIN_MODULUS_LENGTH = 1024
    MAX_MODULUS_LENGTH = 16384

    def __init__(self, skip_key_validation: Union[bool, str] = False) -> None:
        """Initialize the provider.

        :param skip_key_validation: Skip consistency checks of imported private keys.
            Only safe for key material coming from a trusted source.
        """
        self.skip_key_validation = value_to_bool(skip_key_validation)

    def info(self) -> str:
        """Provide information about the provider."""
        msg = super().info()
        if self.skip_key_validation:
            msg += " (key validation skipped)"
        return msg

    @staticmethod
    def _make_tag(algorithm: str, hash_name: str) -> HandleTag:
        if algorithm != RSASSA_PKCS1_V1_5:
            raise RSASSAUnsupportedAlgorithm(f"Algorithm not supported: {algorithm!r}")
        return HandleTag(algorithm=algorithm, hash_name=get_provider_hash_name(hash_name))

    @staticmethod
    def _check_usages(key_type: str, usages: Iterable[str]) -> frozenset[str]:
        usages = frozenset(usages)
        allowed = {USAGE_SIGN} if key_type == KEY_TYPE_PRIVATE else {USAGE_VERIFY}
        if not usages or not usages <= allowed:
            raise RSASSAInvalidAccess(
                f"Usages {sorted(usages)} are not valid for a {key_type} RSA key"
            )
        return usages

    @staticmethod
    def _native_key(handle: ProviderHandle, algorithm: str, usage: str) -> Any:
        if not isinstance(handle, CryptographyKeyHandle):
            raise RSASSAInvalidAccess(f"Handle was not created by this provider: {handle!r}")
        if algorithm != handle.tag.algorithm:
            raise RSASSAInvalidAccess(
                f"Handle bound to {handle.tag.algorithm} can't be used for {algorithm}"
            )
        if not handle.permits(usage):
            raise RSASSAInvalidAccess(f"Handle {handle!r} doesn't permit '{usage}'")
        return handle._key  # pylint: disable=protected-access

    async def generate_key_pair(
        self,
        algorithm: str,
        modulus_length: int,
        public_exponent: bytes,
        hash_name: str,
        extractable: bool,
        usages: Iterable[str],
    ) -> KeyPairHandle:
        tag = self._make_tag(algorithm, hash_name)
        if (
            modulus_length % 8
            or not self.MIN_MODULUS_LENGTH <= modulus_length <= self.MAX_MODULUS_LENGTH
        ):
            raise RSASSAUnsupportedModulusLength(
                f"Modulus length must be a multiple of 8 in range "
                f"{self.MIN_MODULUS_LENGTH}-{self.MAX_MODULUS_LENGTH}, got {modulus_length}"
            )
        exponent = bytes_to_int(to_bytes(public_exponent, "public_exponent"))
        usages = frozenset(usages)

        logger.debug(f"Generating RSA{modulus_length} key pair bound to {tag}")
        try:
            key = await asyncio.to_thread(
                rsa.generate_private_key, public_exponent=exponent, key_size=modulus_length
            )
        except (ValueError, TypeError) as exc:
            raise RSASSAGenerationFailed(f"Key pair generation failed: {exc}") from exc

        return KeyPairHandle(
            private_key=CryptographyKeyHandle(
                key, tag, KEY_TYPE_PRIVATE, extractable, usages & {USAGE_SIGN}
            ),
            public_key=CryptographyKeyHandle(
                key.public_key(), tag, KEY_TYPE_PUBLIC, True, usages & {USAGE_VERIFY}
            ),
        )

    def _load_private_key(self, key_data: PortableRsaPrivateKey) -> rsa.RSAPrivateKey:
        n, e, d, p, q = (bytes_to_int(getattr(key_data, name)) for name in ("n", "e", "d", "p", "q"))
        try:
            numbers = rsa.RSAPrivateNumbers(
                p=p,
                q=q,
                d=d,
                dmp1=bytes_to_int(key_data.dp) if key_data.dp else rsa.rsa_crt_dmp1(d, p),
                dmq1=bytes_to_int(key_data.dq) if key_data.dq else rsa.rsa_crt_dmq1(d, q),
                iqmp=bytes_to_int(key_data.qi) if key_data.qi else rsa.rsa_crt_iqmp(p, q),
                public_numbers=rsa.RSAPublicNumbers(e=e, n=n),
            )
            return numbers.private_key(unsafe_skip_rsa_key_validation=self.skip_key_validation)
        except (ValueError, TypeError, ZeroDivisionError) as exc:
            raise RSASSAKeyMaterialInvalid(f"Invalid RSA private key: {exc}") from exc

    @staticmethod
    def _load_public_key(key_data: PortableRsaPublicKey) -> rsa.RSAPublicKey:
        try:
            return rsa.RSAPublicNumbers(
                e=bytes_to_int(key_data.e), n=bytes_to_int(key_data.n)
            ).public_key()
        except (ValueError, TypeError) as exc:
            raise RSASSAKeyMaterialInvalid(f"Invalid RSA public key: {exc}") from exc

    async def import_key(
        self,
        exchange_format: str,
        key_fields: dict[str, Any],
        algorithm: str,
        hash_name: str,
        extractable: bool,
        usages: Iterable[str],
    ) -> ProviderHandle:
        if exchange_format != JWK_FORMAT:
            raise RSASSAUnsupportedAlgorithm(f"Key exchange format not supported: {exchange_format}")
        tag = self._make_tag(algorithm, hash_name)

        if is_private_jwk(key_fields):
            usages = self._check_usages(KEY_TYPE_PRIVATE, usages)
            key_data = private_key_from_jwk(key_fields)
            logger.debug(f"Importing {key_data!r} bound to {tag}")
            private_key = await asyncio.to_thread(self._load_private_key, key_data)
            return CryptographyKeyHandle(private_key, tag, KEY_TYPE_PRIVATE, extractable, usages)

        usages = self._check_usages(KEY_TYPE_PUBLIC, usages)
        public_data = public_key_from_jwk(key_fields)
        logger.debug(f"Importing {public_data!r} bound to {tag}")
        public_key = self._load_public_key(public_data)
        return CryptographyKeyHandle(public_key, tag, KEY_TYPE_PUBLIC, True, usages)

    async def export_key(self, handle: ProviderHandle) -> dict[str, Any]:
        if not isinstance(handle, CryptographyKeyHandle):
            raise RSASSAInvalidAccess(f"Handle was not created by this provider: {handle!r}")
        key = handle._key  # pylint: disable=protected-access

        if isinstance(key, rsa.RSAPrivateKey):
            if not handle.extractable:
                raise RSASSAExportDenied(f"Key is not extractable: {handle!r}")
            numbers = key.private_numbers()
            return private_key_to_jwk(
                PortableRsaPrivateKey.from_numbers(
                    n=numbers.public_numbers.n,
                    e=numbers.public_numbers.e,
                    d=numbers.d,
                    p=numbers.p,
                    q=numbers.q,
                    dp=numbers.dmp1,
                    dq=numbers.dmq1,
                    qi=numbers.iqmp,
                )
            )

        public_numbers = key.public_numbers()
        return public_key_to_jwk(PortableRsaPublicKey.from_numbers(public_numbers.n, public_numbers.e))

    async def sign(self, algorithm: str, handle: ProviderHandle, message: bytes) -> bytes:
        key = self._native_key(handle, algorithm, USAGE_SIGN)
        hash_alg = get_hash_algorithm(handle.tag.hash_name)
        try:
            return await asyncio.to_thread(key.sign, message, padding.PKCS1v15(), hash_alg)
        except (ValueError, TypeError) as exc:
            raise RSASSASigningFailed(f"Signing failed: {exc}") from exc

    async def verify(
        self, algorithm: str, handle: ProviderHandle, signature: bytes, message: bytes
    ) -> bool:
        key = self._native_key(handle, algorithm, USAGE_VERIFY)
        hash_alg = get_hash_algorithm(handle.tag.hash_name)
        try:
            await asyncio.to_thread(key.verify, signature, message, padding.PKCS1v15(), hash_alg)
        except InvalidSignature:
            return False
        except (ValueError, TypeError) as exc:
            raise RSASSAVerificationError(f"Verification failed: {exc}") from exc
        return True
