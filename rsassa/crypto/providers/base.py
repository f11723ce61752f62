#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Contract of external cryptographic providers.

A provider owns the key material it generates or imports and hands out only
opaque handles. Key material moves in and out of a provider in an exchange
format (JWK). Every handle is tagged with the algorithm and hash it was
created under and may only be used for operations matching that tag.
"""

import abc
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from rsassa.crypto.exceptions import RSASSAInvalidAccess
from rsassa.utils.service_provider import ServiceProvider

RSASSA_PKCS1_V1_5 = "RSASSA-PKCS1-v1_5"
JWK_FORMAT = "jwk"

USAGE_SIGN = "sign"
USAGE_VERIFY = "verify"

KEY_TYPE_PRIVATE = "private"
KEY_TYPE_PUBLIC = "public"


@dataclass(frozen=True)
class HandleTag:
    """Algorithm and hash binding a handle was created under."""

    algorithm: str
    hash_name: str

    def __str__(self) -> str:
        return f"{self.algorithm}/{self.hash_name}"


class ProviderHandle:
    """Opaque reference to key material held by a provider.

    Callers may inspect the tag, role and usages of the handle, the key
    material itself is accessible to the owning provider only.
    """

    def __init__(
        self,
        tag: HandleTag,
        key_type: str,
        extractable: bool,
        usages: Iterable[str],
    ) -> None:
        """Initialize the handle.

        :param tag: Algorithm and hash binding of the handle.
        :param key_type: Role of the handle, "private" or "public".
        :param extractable: Whether the key material may be exported.
        :param usages: Operations the handle may be used for.
        """
        self.tag = tag
        self.key_type = key_type
        self.extractable = extractable
        self.usages = frozenset(usages)

    @property
    def is_private(self) -> bool:
        """Handle refers to private key material."""
        return self.key_type == KEY_TYPE_PRIVATE

    def permits(self, usage: str, tag: Optional[HandleTag] = None) -> bool:
        """Check whether the handle may be used for the operation.

        :param usage: Requested usage, "sign" or "verify".
        :param tag: Required tag, any tag is accepted if not specified.
        :return: True if the usage is allowed and the tag matches.
        """
        if usage not in self.usages:
            return False
        if usage == USAGE_SIGN and not self.is_private:
            return False
        return tag is None or tag == self.tag

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.key_type}, {self.tag}, "
            f"usages={sorted(self.usages)}, extractable={self.extractable})"
        )


@dataclass(frozen=True)
class KeyPairHandle:
    """Private and public handle of one key pair, both share a single tag."""

    private_key: ProviderHandle
    public_key: ProviderHandle

    def __post_init__(self) -> None:
        if self.private_key.tag != self.public_key.tag:
            raise RSASSAInvalidAccess(
                f"Key pair handles must share one tag: {self.private_key.tag} != "
                f"{self.public_key.tag}"
            )
        if not self.private_key.is_private or self.public_key.is_private:
            raise RSASSAInvalidAccess("Key pair needs one private and one public handle")

    @property
    def tag(self) -> HandleTag:
        """Tag shared by both handles."""
        return self.private_key.tag


class CryptoProvider(ServiceProvider):
    """Abstract cryptographic provider.

    All operations are coroutines: they may suspend while the provider works.
    Errors are reported by :mod:`rsassa.crypto.exceptions` classes.

    :cvar plugin_identifier: Entry point group of provider plugins.
    """

    plugin_identifier = "rsassa.provider"

    @abc.abstractmethod
    async def generate_key_pair(
        self,
        algorithm: str,
        modulus_length: int,
        public_exponent: bytes,
        hash_name: str,
        extractable: bool,
        usages: Iterable[str],
    ) -> KeyPairHandle:
        """Generate a new key pair.

        :param algorithm: Provider algorithm name.
        :param modulus_length: Modulus length in bits.
        :param public_exponent: Public exponent as big-endian bytes.
        :param hash_name: Provider hash name the handles are bound to.
        :param extractable: Whether the private key may be exported.
        :param usages: Usages of the key pair.
        :raises RSASSAUnsupportedModulusLength: Modulus length is rejected.
        :raises RSASSAGenerationFailed: Provider failed to create the key pair.
        :return: Handles of the new key pair.
        """

    @abc.abstractmethod
    async def import_key(
        self,
        exchange_format: str,
        key_fields: dict[str, Any],
        algorithm: str,
        hash_name: str,
        extractable: bool,
        usages: Iterable[str],
    ) -> ProviderHandle:
        """Import key material.

        :param exchange_format: Format of the key fields, "jwk".
        :param key_fields: Key material in the exchange format.
        :param algorithm: Provider algorithm name.
        :param hash_name: Provider hash name the handle is bound to.
        :param extractable: Whether the key may be exported again.
        :param usages: Usages of the handle.
        :raises RSASSAKeyMaterialInvalid: The key material is rejected.
        :return: New handle.
        """

    @abc.abstractmethod
    async def export_key(self, handle: ProviderHandle) -> dict[str, Any]:
        """Export key material in the exchange format.

        :param handle: Handle to export.
        :raises RSASSAExportDenied: The handle is not extractable.
        :return: Key fields.
        """

    @abc.abstractmethod
    async def sign(self, algorithm: str, handle: ProviderHandle, message: bytes) -> bytes:
        """Sign message with private handle.

        :param algorithm: Provider algorithm name.
        :param handle: Private handle permitted to sign.
        :param message: Message to sign.
        :raises RSASSAProviderError: Signing failed.
        :return: Signature bytes.
        """

    @abc.abstractmethod
    async def verify(
        self, algorithm: str, handle: ProviderHandle, signature: bytes, message: bytes
    ) -> bool:
        """Verify signature with public handle.

        :param algorithm: Provider algorithm name.
        :param handle: Public handle permitted to verify.
        :param signature: Signature bytes.
        :param message: Signed message.
        :raises RSASSAProviderError: Verification could not run.
        :return: True if the signature is valid.
        """

