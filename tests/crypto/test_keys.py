#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the portable key model."""

import pytest

from rsassa.crypto.exceptions import RSASSAKeyMaterialInvalid, RSASSAKeyTypeMismatch
from rsassa.crypto.key_pair import ProviderRsaPublicKey
from rsassa.crypto.keys import (
    EnumKeyType,
    PortableRsaPrivateKey,
    PortableRsaPublicKey,
    Signature,
    SimplePublicKey,
    require_key_type,
)
from rsassa.exceptions import RSASSATypeError
from rsassa.utils.misc import bytes_to_int


def test_public_key_normalises_fields() -> None:
    key = PortableRsaPublicKey(n=bytearray(b"\xc3\x01"), e=[1, 0, 1])
    assert key.n == b"\xc3\x01"
    assert key.e == b"\x01\x00\x01"
    assert isinstance(key.n, bytes)
    assert key.key_type == EnumKeyType.RSA_PUBLIC


def test_public_key_rejects_text() -> None:
    with pytest.raises(RSASSATypeError):
        PortableRsaPublicKey(n="c301", e=b"\x03")  # type: ignore[arg-type]


def test_public_key_structural_equality() -> None:
    plain = PortableRsaPublicKey(n=b"\xaa\xbb", e=b"\x03")
    same = PortableRsaPublicKey.from_numbers(0xAABB, 3)
    provider_backed = ProviderRsaPublicKey(n=b"\xaa\xbb", e=b"\x03")

    assert plain == same
    assert plain is not same
    assert hash(plain) == hash(same)
    assert plain == provider_backed
    assert provider_backed == plain
    assert len({plain, same, provider_backed}) == 1
    assert plain != PortableRsaPublicKey(n=b"\xaa\xbb", e=b"\x01\x00\x01")
    assert plain != b"\xaa\xbb"


def test_private_key(portable_private_key: PortableRsaPrivateKey) -> None:
    key = portable_private_key
    assert key.key_type == EnumKeyType.RSA_PRIVATE
    assert key.modulus_length == 2048
    assert key.is_valid()
    assert key.public_key == PortableRsaPublicKey(n=key.n, e=key.e)
    assert bytes_to_int(key.e) == 65537


def test_private_key_repr_hides_material(portable_private_key: PortableRsaPrivateKey) -> None:
    text = repr(portable_private_key) + str(portable_private_key)
    assert text == "RSA2048 Private KeyRSA2048 Private Key"
    assert portable_private_key.d.hex() not in text


def test_private_key_missing_fields() -> None:
    key = PortableRsaPrivateKey(n=b"\x0f", e=b"\x03", d=b"", p=b"\x03", q=b"")
    assert not key.is_valid()
    assert key.missing_fields() == ["d", "q"]
    assert key.dp is None


@pytest.mark.parametrize("absent", ["n", "e", "d", "p", "q"])
def test_private_key_absent_field(absent: str) -> None:
    fields = {"n": b"\x0f", "e": b"\x03", "d": b"\x03", "p": b"\x03", "q": b"\x05"}
    fields[absent] = None
    with pytest.raises(RSASSAKeyMaterialInvalid, match=f"lacks fields: {absent}$"):
        PortableRsaPrivateKey(**fields)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_private_key_is_key_pair(portable_private_key: PortableRsaPrivateKey) -> None:
    assert await portable_private_key.extract() is portable_private_key
    public_key = await portable_private_key.extract_public_key()
    assert public_key == portable_private_key.public_key


def test_require_key_type(portable_private_key: PortableRsaPrivateKey) -> None:
    require_key_type(portable_private_key, EnumKeyType.RSA_PRIVATE)
    require_key_type(portable_private_key.public_key, EnumKeyType.RSA_PUBLIC)

    with pytest.raises(RSASSAKeyTypeMismatch):
        require_key_type(portable_private_key, EnumKeyType.RSA_PUBLIC)
    with pytest.raises(RSASSAKeyTypeMismatch):
        require_key_type(SimplePublicKey(b"\x00" * 32), EnumKeyType.RSA_PUBLIC)
    with pytest.raises(RSASSAKeyTypeMismatch):
        require_key_type(b"not a key", EnumKeyType.RSA_PUBLIC)


def test_simple_public_key() -> None:
    key = SimplePublicKey([1, 2, 3], EnumKeyType.X25519_PUBLIC)
    assert key.data == b"\x01\x02\x03"
    assert key.key_type == EnumKeyType.X25519_PUBLIC


def test_signature() -> None:
    public_key = PortableRsaPublicKey(n=b"\xaa\xbb", e=b"\x03")
    signature = Signature(bytearray(b"\x01\x02"), public_key)
    assert signature.bytes == b"\x01\x02"
    assert signature.public_key is public_key
    assert signature == Signature(b"\x01\x02", PortableRsaPublicKey.from_numbers(0xAABB, 3))
    assert "0102" in repr(signature)
