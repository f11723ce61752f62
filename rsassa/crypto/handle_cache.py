#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Adaptation of portable RSA keys into provider handles.

Imported handles are cached in two tables:

* private handles by the identity of the key-pair object and the binding,
  the entry disappears together with the object,
* public handles by the modulus and exponent bytes and the binding, so equal
  public keys arriving as different objects share one handle.

Handles are never shared across bindings. A failed import leaves no entry.
"""

import logging
import weakref
from collections import OrderedDict
from typing import Optional

from rsassa import RSASSA_HANDLE_CACHE_DISABLED, RSASSA_PUBLIC_HANDLE_CACHE_SIZE
from rsassa.crypto.hash import EnumHashAlgorithm, get_provider_hash_name
from rsassa.crypto.jwk import private_key_to_jwk, public_key_to_jwk
from rsassa.crypto.key_pair import ProviderRsaKeyPair, ProviderRsaPublicKey
from rsassa.crypto.keys import EnumKeyType, KeyPair, PortableRsaPublicKey, require_key_type
from rsassa.crypto.providers.base import (
    JWK_FORMAT,
    RSASSA_PKCS1_V1_5,
    USAGE_SIGN,
    USAGE_VERIFY,
    CryptoProvider,
    HandleTag,
    ProviderHandle,
)

logger = logging.getLogger(__name__)

PublicCacheKey = tuple[bytes, bytes, HandleTag]


def make_tag(binding: EnumHashAlgorithm) -> HandleTag:
    """Create RSA-SSA-PKCS1v15 handle tag for the hash binding."""
    return HandleTag(algorithm=RSASSA_PKCS1_V1_5, hash_name=get_provider_hash_name(binding))


class KeyHandleAdapter:
    """Get-or-import of provider handles for portable keys.

    One adapter serves one provider. It may be shared by orchestrators using
    different hash bindings.
    """

    def __init__(
        self,
        provider: CryptoProvider,
        public_cache_size: Optional[int] = None,
        disabled: Optional[bool] = None,
    ) -> None:
        """Initialize the adapter.

        :param provider: Provider importing the keys.
        :param public_cache_size: Maximal count of cached public handles, 0 for unlimited,
            ``RSASSA_PUBLIC_HANDLE_CACHE_SIZE`` if not specified.
        :param disabled: Don't reuse imported handles, ``RSASSA_HANDLE_CACHE_DISABLED``
            if not specified.
        """
        self.provider = provider
        self.public_cache_size = (
            RSASSA_PUBLIC_HANDLE_CACHE_SIZE if public_cache_size is None else public_cache_size
        )
        self.disabled = RSASSA_HANDLE_CACHE_DISABLED if disabled is None else disabled
        self._private_handles: dict[int, dict[HandleTag, ProviderHandle]] = {}
        self._public_handles: OrderedDict[PublicCacheKey, ProviderHandle] = OrderedDict()

    @property
    def private_entries(self) -> int:
        """Count of cached private handles."""
        return sum(len(handles) for handles in self._private_handles.values())

    @property
    def public_entries(self) -> int:
        """Count of cached public handles."""
        return len(self._public_handles)

    def clear(self) -> None:
        """Drop all cached handles."""
        self._private_handles.clear()
        self._public_handles.clear()

    async def private_handle(self, key_pair: KeyPair, binding: EnumHashAlgorithm) -> ProviderHandle:
        """Get sign-capable handle of the key pair for the binding.

        The handle of a provider-backed key pair is used directly when it was
        created by this provider under the same binding and permits signing.
        Otherwise the portable private key is extracted and imported as
        non-extractable, sign-only handle.

        :param key_pair: Key-pair object.
        :param binding: Hash binding.
        :raises RSASSAKeyTypeMismatch: The value is not an RSA key pair.
        :raises RSASSAExportDenied: The key pair can't be extracted for re-import.
        :return: Private provider handle.
        """
        require_key_type(key_pair, EnumKeyType.RSA_PRIVATE, "key_pair")
        tag = make_tag(binding)

        if (
            isinstance(key_pair, ProviderRsaKeyPair)
            and key_pair.provider is self.provider
            and key_pair.tag == tag
            and key_pair.private_handle.permits(USAGE_SIGN, tag)
        ):
            return key_pair.private_handle

        key_id = id(key_pair)
        if not self.disabled:
            handle = self._private_handles.get(key_id, {}).get(tag)
            if handle is not None:
                logger.debug(f"Private handle cache hit for {key_pair!r} bound to {tag}")
                return handle

        logger.debug(f"Private handle cache miss for {key_pair!r} bound to {tag}, importing")
        portable = await key_pair.extract()
        handle = await self.provider.import_key(
            JWK_FORMAT,
            private_key_to_jwk(portable),
            algorithm=tag.algorithm,
            hash_name=tag.hash_name,
            extractable=False,
            usages=[USAGE_SIGN],
        )
        if not self.disabled:
            self._store_private(key_pair, key_id, tag, handle)
        return handle

    def _store_private(
        self, key_pair: KeyPair, key_id: int, tag: HandleTag, handle: ProviderHandle
    ) -> None:
        handles = self._private_handles.get(key_id)
        if handles is None:
            try:
                weakref.finalize(key_pair, self._private_handles.pop, key_id, None)
            except TypeError:
                logger.debug(f"{key_pair!r} doesn't support weak references, handle not cached")
                return
            handles = self._private_handles.setdefault(key_id, {})
        handles[tag] = handle

    async def public_handle(
        self, public_key: PortableRsaPublicKey, binding: EnumHashAlgorithm
    ) -> ProviderHandle:
        """Get verify-capable handle of the public key for the binding.

        A handle carried by the public key is reused only when it belongs to
        this provider, handles of other providers are never passed on.

        :param public_key: RSA public key.
        :param binding: Hash binding.
        :raises RSASSAKeyTypeMismatch: The value is not an RSA public key.
        :raises RSASSAKeyMaterialInvalid: The provider rejected the key.
        :return: Public provider handle.
        """
        require_key_type(public_key, EnumKeyType.RSA_PUBLIC, "public_key")
        tag = make_tag(binding)

        if (
            isinstance(public_key, ProviderRsaPublicKey)
            and public_key.provider is self.provider
            and public_key.handle is not None
            and public_key.handle.permits(USAGE_VERIFY, tag)
        ):
            return public_key.handle

        cache_key = (public_key.n, public_key.e, tag)
        if not self.disabled:
            handle = self._public_handles.get(cache_key)
            if handle is not None:
                logger.debug(f"Public handle cache hit for {public_key!r} bound to {tag}")
                self._public_handles.move_to_end(cache_key)
                return handle

        logger.debug(f"Public handle cache miss for {public_key!r} bound to {tag}, importing")
        handle = await self.provider.import_key(
            JWK_FORMAT,
            public_key_to_jwk(public_key),
            algorithm=tag.algorithm,
            hash_name=tag.hash_name,
            extractable=True,
            usages=[USAGE_VERIFY],
        )
        if not self.disabled:
            self._public_handles[cache_key] = handle
            self._public_handles.move_to_end(cache_key)
            if self.public_cache_size and len(self._public_handles) > self.public_cache_size:
                self._public_handles.popitem(last=False)
        return handle
