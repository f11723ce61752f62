#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""JSON Web Key exchange format of RSA keys (RFC 7517, RFC 7518 section 6.3).

Every integer is an unsigned big-endian byte sequence encoded by unpadded
base64url.
"""

import base64
import binascii
import json
from typing import Any, Optional

from rsassa.crypto.exceptions import RSASSAKeyMaterialInvalid
from rsassa.crypto.keys import PortableRsaPrivateKey, PortableRsaPublicKey

KTY_RSA = "RSA"


def base64url_encode(data: bytes) -> str:
    """Encode bytes by base64url without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_encode_maybe(data: Optional[bytes]) -> Optional[str]:
    """Encode optional bytes, None stays None."""
    return None if data is None else base64url_encode(data)


def base64url_decode(value: str) -> bytes:
    """Decode base64url text, the padding is optional.

    :param value: Encoded text.
    :raises RSASSAKeyMaterialInvalid: The text is not valid base64url.
    :return: Decoded bytes.
    """
    if not isinstance(value, str):
        raise RSASSAKeyMaterialInvalid(f"JWK field must be a string, not {type(value).__name__}")
    padded = value + "=" * (-len(value) % 4)
    try:
        return base64.urlsafe_b64decode(padded.encode("ascii"))
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise RSASSAKeyMaterialInvalid(f"Invalid base64url value in JWK: {exc}") from exc


def base64url_decode_maybe(value: Optional[str]) -> Optional[bytes]:
    """Decode optional base64url text, None stays None."""
    return None if value is None else base64url_decode(value)


def _check_kty(fields: dict[str, Any]) -> None:
    if fields.get("kty") != KTY_RSA:
        raise RSASSAKeyMaterialInvalid(f"JWK is not an RSA key: kty={fields.get('kty')!r}")


def _required(fields: dict[str, Any], name: str) -> bytes:
    value = fields.get(name)
    if value is None:
        raise RSASSAKeyMaterialInvalid(f"JWK field '{name}' is missing")
    return base64url_decode(value)


def private_key_to_jwk(key: PortableRsaPrivateKey) -> dict[str, str]:
    """Package portable private key into JWK fields.

    Optional CRT parameters are omitted when not present.

    :param key: Portable private key.
    :raises RSASSAKeyMaterialInvalid: A mandatory field is empty.
    :return: JWK dictionary.
    """
    missing = key.missing_fields()
    if missing:
        raise RSASSAKeyMaterialInvalid(f"RSA private key lacks fields: {', '.join(missing)}")
    fields = {
        "kty": KTY_RSA,
        "n": base64url_encode(key.n),
        "e": base64url_encode(key.e),
        "d": base64url_encode(key.d),
        "p": base64url_encode(key.p),
        "q": base64url_encode(key.q),
    }
    for name in PortableRsaPrivateKey.CRT_FIELDS:
        value = base64url_encode_maybe(getattr(key, name))
        if value is not None:
            fields[name] = value
    return fields


def public_key_to_jwk(key: PortableRsaPublicKey) -> dict[str, str]:
    """Package portable public key into JWK fields."""
    return {"kty": KTY_RSA, "n": base64url_encode(key.n), "e": base64url_encode(key.e)}


def private_key_from_jwk(fields: dict[str, Any]) -> PortableRsaPrivateKey:
    """Decode JWK fields into portable private key.

    :param fields: JWK dictionary.
    :raises RSASSAKeyMaterialInvalid: The JWK is not a complete RSA private key.
    :return: Portable private key.
    """
    _check_kty(fields)
    return PortableRsaPrivateKey(
        n=_required(fields, "n"),
        e=_required(fields, "e"),
        d=_required(fields, "d"),
        p=_required(fields, "p"),
        q=_required(fields, "q"),
        dp=base64url_decode_maybe(fields.get("dp")),
        dq=base64url_decode_maybe(fields.get("dq")),
        qi=base64url_decode_maybe(fields.get("qi")),
    )


def public_key_from_jwk(fields: dict[str, Any]) -> PortableRsaPublicKey:
    """Decode JWK fields into portable public key.

    :param fields: JWK dictionary, private fields are ignored.
    :raises RSASSAKeyMaterialInvalid: The JWK is not an RSA key.
    :return: Portable public key.
    """
    _check_kty(fields)
    return PortableRsaPublicKey(n=_required(fields, "n"), e=_required(fields, "e"))


def is_private_jwk(fields: dict[str, Any]) -> bool:
    """Check whether the JWK carries the private exponent."""
    return "d" in fields


def dumps(fields: dict[str, Any]) -> str:
    """Serialize JWK into JSON text."""
    return json.dumps(fields, indent=2, sort_keys=True)


def loads(text: str) -> dict[str, Any]:
    """Parse JWK from JSON text.

    :param text: JSON text.
    :raises RSASSAKeyMaterialInvalid: The text is not a JSON object.
    :return: JWK dictionary.
    """
    try:
        fields = json.loads(text)
    except ValueError as exc:
        raise RSASSAKeyMaterialInvalid(f"Invalid JWK: {exc}") from exc
    if not isinstance(fields, dict):
        raise RSASSAKeyMaterialInvalid("JWK must be a JSON object")
    return fields
