#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of RSA-SSA-PKCS1v15 signing and verification."""

import asyncio
from typing import Any

import pytest
from cryptography.hazmat.primitives import hashes

from rsassa.crypto import (
    EnumHashAlgorithm,
    PortableRsaPrivateKey,
    PortableRsaPublicKey,
    ProviderRsaKeyPair,
    ProviderRsaPublicKey,
    RsaSsaPkcs1v15,
    Signature,
    SimplePublicKey,
)
from rsassa.crypto.exceptions import (
    RSASSAExportDenied,
    RSASSAKeyTypeMismatch,
    RSASSASigningFailed,
    RSASSAUnsupportedAlgorithm,
    RSASSAUnsupportedModulusLength,
)
from rsassa.crypto.handle_cache import KeyHandleAdapter
from rsassa.crypto.providers import CryptographyProvider
from rsassa.exceptions import RSASSAValueError
from tests.conftest import CountingProvider, OtherCountingProvider

SHA256 = EnumHashAlgorithm.SHA256


def flip_bit(data: bytes, bit: int) -> bytes:
    buffer = bytearray(data)
    buffer[bit // 8] ^= 1 << (bit % 8)
    return bytes(buffer)


class FailingSignProvider(CountingProvider):
    """Provider failing every signature with a native error."""

    identifier = "failing-sign"

    async def sign(self, *args: Any, **kwargs: Any) -> Any:
        self.calls["sign"] += 1
        raise RuntimeError("engine is busy")


@pytest.mark.asyncio
@pytest.mark.parametrize("hash_algorithm", list(EnumHashAlgorithm))
async def test_generate_sign_verify(hash_algorithm: EnumHashAlgorithm) -> None:
    scheme = RsaSsaPkcs1v15(hash_algorithm)
    key_pair = await scheme.new_key_pair(modulus_length=1024)
    assert isinstance(key_pair, ProviderRsaKeyPair)
    assert key_pair.tag.hash_name == hash_algorithm.description

    signature = await scheme.sign(b"message", key_pair)
    assert len(signature.bytes) == 128
    assert isinstance(signature.public_key, ProviderRsaPublicKey)
    assert await scheme.verify(b"message", signature)


@pytest.mark.asyncio
async def test_verify_failure_is_false(portable_private_key: PortableRsaPrivateKey) -> None:
    scheme = RsaSsaPkcs1v15(EnumHashAlgorithm.SHA256, provider=CryptographyProvider())
    signature = await scheme.sign(b"message", portable_private_key)

    assert await scheme.verify(b"message", signature)
    assert await scheme.verify(b"message2", signature) is False
    assert await scheme.verify(b"", signature) is False
    for bit in (0, 7, 1000, len(signature.bytes) * 8 - 1):
        flipped = Signature(flip_bit(signature.bytes, bit), signature.public_key)
        assert await scheme.verify(b"message", flipped) is False


@pytest.mark.asyncio
async def test_verify_with_other_binding_fails(portable_private_key: PortableRsaPrivateKey) -> None:
    provider = CryptographyProvider()
    signature = await RsaSsaPkcs1v15("sha256", provider).sign(b"message", portable_private_key)
    assert not await RsaSsaPkcs1v15("sha384", provider).verify(b"message", signature)


@pytest.mark.asyncio
async def test_sign_imports_private_key_once(
    counting_provider: CountingProvider, portable_private_key: PortableRsaPrivateKey
) -> None:
    scheme = RsaSsaPkcs1v15(EnumHashAlgorithm.SHA256, provider=counting_provider)
    first = await scheme.sign(b"message", portable_private_key)
    second = await scheme.sign(b"message", portable_private_key)

    assert first == second
    assert counting_provider.calls["import_key"] == 1
    assert counting_provider.calls["sign"] == 2
    assert counting_provider.imported_usages == [frozenset({"sign"})]


@pytest.mark.asyncio
async def test_verify_imports_public_key_once(
    counting_provider: CountingProvider, portable_private_key: PortableRsaPrivateKey
) -> None:
    scheme = RsaSsaPkcs1v15(EnumHashAlgorithm.SHA512, provider=counting_provider)
    signature = await scheme.sign(b"message", portable_private_key)
    imports = counting_provider.calls["import_key"]

    for _ in range(2):
        public_key = PortableRsaPublicKey(n=portable_private_key.n, e=portable_private_key.e)
        assert await scheme.verify(b"message", Signature(signature.bytes, public_key))
    assert counting_provider.calls["import_key"] == imports + 1
    assert counting_provider.calls["verify"] == 2


@pytest.mark.asyncio
async def test_generated_key_pair_needs_no_import(counting_provider: CountingProvider) -> None:
    scheme = RsaSsaPkcs1v15(EnumHashAlgorithm.SHA256, provider=counting_provider)
    key_pair = await scheme.new_key_pair(1024)
    signature = await scheme.sign(b"message", key_pair)
    assert await scheme.verify(b"message", signature)

    assert counting_provider.calls["import_key"] == 0
    # Only the public key of the generated pair was exported
    assert counting_provider.calls["export_key"] == 1


@pytest.mark.asyncio
async def test_binding_isolation(
    counting_provider: CountingProvider, portable_private_key: PortableRsaPrivateKey
) -> None:
    adapter = KeyHandleAdapter(counting_provider)
    sha256 = RsaSsaPkcs1v15(EnumHashAlgorithm.SHA256, adapter=adapter)
    sha384 = RsaSsaPkcs1v15(hashes.SHA384(), adapter=adapter)
    assert sha384.provider is counting_provider

    sig256 = await sha256.sign(b"message", portable_private_key)
    sig384 = await sha384.sign(b"message", portable_private_key)
    assert sig256.bytes != sig384.bytes
    assert counting_provider.calls["import_key"] == 2
    assert adapter.private_entries == 2

    await sha256.sign(b"other message", portable_private_key)
    await sha384.sign(b"other message", portable_private_key)
    assert counting_provider.calls["import_key"] == 2

    assert await sha256.verify(b"message", sig256)
    assert await sha384.verify(b"message", sig384)
    assert not await sha256.verify(b"message", sig384)


@pytest.mark.asyncio
async def test_extract_import_extract_roundtrip(counting_provider: CountingProvider) -> None:
    scheme = RsaSsaPkcs1v15(EnumHashAlgorithm.SHA256, provider=counting_provider)
    key_pair = await scheme.new_key_pair(1024)
    extracted = await scheme.extract_private(key_pair)
    assert await scheme.extract_private(key_pair) is extracted
    assert counting_provider.calls["export_key"] == 1

    imported = await scheme.import_key_pair(extracted)
    assert imported.tag == key_pair.tag
    extracted_again = await scheme.extract_private(imported)
    for name in ("n", "e", "d", "p", "q", "dp", "dq", "qi"):
        assert getattr(extracted_again, name) == getattr(extracted, name)

    public_key = await scheme.extract_public(imported)
    assert public_key == extracted.public_key
    assert public_key == await scheme.extract_public(key_pair)


@pytest.mark.asyncio
async def test_imported_pair_signs_like_portable_key(
    counting_provider: CountingProvider, portable_private_key: PortableRsaPrivateKey
) -> None:
    scheme = RsaSsaPkcs1v15(EnumHashAlgorithm.SHA1, provider=counting_provider)
    key_pair = await scheme.import_key_pair(portable_private_key, extractable=False)
    imports = counting_provider.calls["import_key"]

    signature = await scheme.sign(b"message", key_pair)
    assert signature == await scheme.sign(b"message", portable_private_key)
    assert counting_provider.calls["import_key"] == imports + 1

    with pytest.raises(RSASSAExportDenied):
        await scheme.extract_private(key_pair)


@pytest.mark.parametrize("hash_algorithm", ["md5", hashes.MD5(), "sha3_256", hashes.SHA224(), None])
def test_unsupported_hash_before_provider_call(
    counting_provider: CountingProvider, hash_algorithm: Any
) -> None:
    with pytest.raises(RSASSAUnsupportedAlgorithm):
        RsaSsaPkcs1v15(hash_algorithm, provider=counting_provider)
    assert counting_provider.total_calls() == 0


@pytest.mark.asyncio
async def test_unsupported_modulus_length(counting_provider: CountingProvider) -> None:
    scheme = RsaSsaPkcs1v15(EnumHashAlgorithm.SHA256, provider=counting_provider)
    with pytest.raises(RSASSAUnsupportedModulusLength):
        await scheme.new_key_pair(modulus_length=1023)


@pytest.mark.asyncio
async def test_key_type_mismatch(
    counting_provider: CountingProvider, portable_private_key: PortableRsaPrivateKey
) -> None:
    scheme = RsaSsaPkcs1v15(EnumHashAlgorithm.SHA256, provider=counting_provider)
    signature = await scheme.sign(b"message", portable_private_key)
    calls = counting_provider.total_calls()

    with pytest.raises(RSASSAKeyTypeMismatch):
        await scheme.verify(b"message", Signature(signature.bytes, SimplePublicKey(b"\x00" * 32)))
    with pytest.raises(RSASSAKeyTypeMismatch):
        await scheme.sign(b"message", portable_private_key.public_key)  # type: ignore[arg-type]
    with pytest.raises(RSASSAKeyTypeMismatch):
        await scheme.extract_private(portable_private_key.public_key)  # type: ignore[arg-type]
    assert counting_provider.total_calls() == calls


@pytest.mark.asyncio
async def test_signing_failure_wrapped(portable_private_key: PortableRsaPrivateKey) -> None:
    provider = FailingSignProvider()
    scheme = RsaSsaPkcs1v15(EnumHashAlgorithm.SHA256, provider=provider)
    with pytest.raises(RSASSASigningFailed, match="engine is busy") as exc:
        await scheme.sign(b"message", portable_private_key)
    assert isinstance(exc.value.__cause__, RuntimeError)

    # The handle import succeeded, the next attempt reuses it
    with pytest.raises(RSASSASigningFailed):
        await scheme.sign(b"message", portable_private_key)
    assert provider.calls["import_key"] == 1


@pytest.mark.asyncio
async def test_concurrent_signing(
    counting_provider: CountingProvider, portable_private_key: PortableRsaPrivateKey
) -> None:
    scheme = RsaSsaPkcs1v15(EnumHashAlgorithm.SHA256, provider=counting_provider)
    messages = [f"message {i}".encode() for i in range(4)]
    signatures = await asyncio.gather(
        *(scheme.sign(message, portable_private_key) for message in messages)
    )
    results = await asyncio.gather(
        *(scheme.verify(message, sig) for message, sig in zip(messages, signatures))
    )
    assert all(results)
    # Racing imports are allowed, every one of them yields an equivalent handle
    private_imports = counting_provider.imported_usages.count(frozenset({"sign"}))
    assert 1 <= private_imports <= len(messages)
    assert scheme.adapter.private_entries == 1


def test_adapter_of_other_provider_rejected() -> None:
    adapter = KeyHandleAdapter(CryptographyProvider())
    with pytest.raises(RSASSAValueError):
        RsaSsaPkcs1v15(EnumHashAlgorithm.SHA256, provider=CryptographyProvider(), adapter=adapter)


def test_scheme_defaults() -> None:
    scheme = RsaSsaPkcs1v15("SHA-256")
    assert scheme.hash_algorithm is EnumHashAlgorithm.SHA256
    assert scheme.hash_name == "SHA-256"
    assert scheme.DEFAULT_MODULUS_LENGTH == 4096
    assert scheme.DEFAULT_PUBLIC_EXPONENT == b"\x01\x00\x01"
    assert isinstance(scheme.provider, CryptographyProvider)
    assert "sha256" in repr(scheme)


@pytest.mark.asyncio
async def test_verify_with_other_provider(counting_provider: CountingProvider) -> None:
    key_pair = await RsaSsaPkcs1v15(SHA256, provider=counting_provider).new_key_pair(1024)
    signature = await RsaSsaPkcs1v15(SHA256, provider=counting_provider).sign(b"message", key_pair)
    assert signature.public_key.provider is counting_provider

    other_provider = OtherCountingProvider()
    other_scheme = RsaSsaPkcs1v15(SHA256, provider=other_provider)
    assert await other_scheme.verify(b"message", signature)
    assert not await other_scheme.verify(b"other message", signature)
    assert other_provider.calls["import_key"] == 1
    assert counting_provider.calls["verify"] == 0
