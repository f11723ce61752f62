#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the JWK exchange format."""

import pytest

from rsassa.crypto import jwk
from rsassa.crypto.exceptions import RSASSAKeyMaterialInvalid
from rsassa.crypto.keys import PortableRsaPrivateKey, PortableRsaPublicKey


def test_base64url() -> None:
    assert jwk.base64url_encode(b"\x01\x00\x01") == "AQAB"
    assert jwk.base64url_encode(b"\xfb\xff") == "-_8"
    assert jwk.base64url_decode("-_8") == b"\xfb\xff"
    assert jwk.base64url_decode("-_8=") == b"\xfb\xff"


@pytest.mark.parametrize("value", ["A", "AAAAA", 5])
def test_base64url_invalid(value: object) -> None:
    with pytest.raises(RSASSAKeyMaterialInvalid):
        jwk.base64url_decode(value)  # type: ignore[arg-type]


def test_public_key_jwk() -> None:
    key = PortableRsaPublicKey(n=b"\xaa\xbb", e=b"\x01\x00\x01")
    fields = jwk.public_key_to_jwk(key)
    assert fields == {"kty": "RSA", "n": "qrs", "e": "AQAB"}
    assert jwk.public_key_from_jwk(fields) == key
    assert not jwk.is_private_jwk(fields)


def test_private_key_jwk(portable_private_key: PortableRsaPrivateKey) -> None:
    fields = jwk.private_key_to_jwk(portable_private_key)
    assert set(fields) == {"kty", "n", "e", "d", "p", "q", "dp", "dq", "qi"}
    assert jwk.is_private_jwk(fields)

    decoded = jwk.private_key_from_jwk(fields)
    assert decoded == portable_private_key
    assert jwk.public_key_from_jwk(fields) == portable_private_key.public_key


def test_private_key_jwk_without_crt(portable_private_key: PortableRsaPrivateKey) -> None:
    key = PortableRsaPrivateKey(
        n=portable_private_key.n,
        e=portable_private_key.e,
        d=portable_private_key.d,
        p=portable_private_key.p,
        q=portable_private_key.q,
    )
    fields = jwk.private_key_to_jwk(key)
    assert "dp" not in fields and "qi" not in fields
    assert jwk.private_key_from_jwk(fields).dq is None


def test_private_key_jwk_missing_field() -> None:
    key = PortableRsaPrivateKey(n=b"\x0f", e=b"\x03", d=b"", p=b"\x03", q=b"\x05")
    with pytest.raises(RSASSAKeyMaterialInvalid, match="d"):
        jwk.private_key_to_jwk(key)

    with pytest.raises(RSASSAKeyMaterialInvalid, match="'q'"):
        jwk.private_key_from_jwk({"kty": "RSA", "n": "Dw", "e": "Aw", "d": "Aw", "p": "Aw"})


def test_not_rsa_jwk() -> None:
    with pytest.raises(RSASSAKeyMaterialInvalid, match="kty"):
        jwk.public_key_from_jwk({"kty": "EC", "crv": "P-256", "x": "AA", "y": "AA"})


def test_dumps_loads() -> None:
    fields = {"kty": "RSA", "n": "qrs", "e": "AQAB"}
    assert jwk.loads(jwk.dumps(fields)) == fields
    with pytest.raises(RSASSAKeyMaterialInvalid):
        jwk.loads("[1, 2]")
    with pytest.raises(RSASSAKeyMaterialInvalid):
        jwk.loads("{not json")
