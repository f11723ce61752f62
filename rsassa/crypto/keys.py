#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Portable, provider independent key model.

RSA key material is held as unsigned big-endian byte sequences which are
never modified after construction. Key values are tagged with
:class:`EnumKeyType`, operations check the tag instead of the Python type,
so any object with a matching ``key_type`` and fields is accepted.
"""

import abc
from dataclasses import dataclass, field
from typing import Any, Optional

from rsassa.crypto.exceptions import RSASSAKeyMaterialInvalid, RSASSAKeyTypeMismatch
from rsassa.utils.misc import BytesLike, bytes_to_int, int_to_bytes, optional_bytes, to_bytes
from rsassa.utils.rsassa_enum import RSASSAEnum


class EnumKeyType(RSASSAEnum):
    """Variants of portable keys."""

    RSA_PRIVATE = (0, "rsa_private", "RSA key pair")
    RSA_PUBLIC = (1, "rsa_public", "RSA public key")
    EC_PUBLIC = (2, "ec_public", "Elliptic curve public key")
    ED25519_PUBLIC = (3, "ed25519_public", "Ed25519 public key")
    X25519_PUBLIC = (4, "x25519_public", "X25519 public key")


def require_key_type(key: Any, key_type: EnumKeyType, name: str = "key") -> None:
    """Check that the value is the requested key variant.

    :param key: Value presented as a key.
    :param key_type: Expected key variant.
    :param name: Name of the value used in the error message.
    :raises RSASSAKeyTypeMismatch: The value is a different variant or no key at all.
    """
    actual = getattr(key, "key_type", None)
    if not isinstance(actual, EnumKeyType) or actual != key_type:
        raise RSASSAKeyTypeMismatch(
            f"{name} should be {key_type.description}, not: {key!r}"
        )


class PublicKey(abc.ABC):
    """Public key of any supported variant."""

    @property
    @abc.abstractmethod
    def key_type(self) -> EnumKeyType:
        """Variant of the key."""


class KeyPair(abc.ABC):
    """Key pair whose material may live in memory or inside a provider.

    Extraction of the portable forms may need a provider round trip, hence
    both methods are coroutines.
    """

    @property
    @abc.abstractmethod
    def key_type(self) -> EnumKeyType:
        """Variant of the key pair."""

    @abc.abstractmethod
    async def extract(self) -> "PortableRsaPrivateKey":
        """Extract portable private key material."""

    @abc.abstractmethod
    async def extract_public_key(self) -> PublicKey:
        """Extract public key of the pair."""


@dataclass(frozen=True, eq=False)
class PortableRsaPublicKey(PublicKey):
    """RSA public key as modulus and public exponent bytes.

    Two public keys are equal when their modulus and exponent bytes are equal,
    regardless of the concrete class, so a provider-backed public key equals a
    plain one carrying the same numbers.
    """

    n: bytes
    e: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "n", to_bytes(self.n, "n"))
        object.__setattr__(self, "e", to_bytes(self.e, "e"))

    @property
    def key_type(self) -> EnumKeyType:
        """Variant of the key."""
        return EnumKeyType.RSA_PUBLIC

    @classmethod
    def from_numbers(cls, n: int, e: int) -> "PortableRsaPublicKey":
        """Create the key from integers."""
        return cls(n=int_to_bytes(n), e=int_to_bytes(e))

    @property
    def modulus_length(self) -> int:
        """Modulus length in bits."""
        return bytes_to_int(self.n).bit_length()

    def __eq__(self, obj: Any) -> bool:
        return isinstance(obj, PortableRsaPublicKey) and (self.n, self.e) == (obj.n, obj.e)

    def __hash__(self) -> int:
        return hash((self.n, self.e))

    def __repr__(self) -> str:
        return f"RSA{self.modulus_length} Public Key"

    def __str__(self) -> str:
        return (
            f"RSA{self.modulus_length} Public key: \n"
            f"e({hex(bytes_to_int(self.e))}) \nn({hex(bytes_to_int(self.n))})"
        )


@dataclass(frozen=True, repr=False)
class PortableRsaPrivateKey(KeyPair):
    """RSA key pair material.

    The CRT parameters dp, dq and qi are optional, providers compute them when
    missing. The object is a key pair on its own: extraction returns the
    object itself.
    """

    n: bytes
    e: bytes
    d: bytes
    p: bytes
    q: bytes
    dp: Optional[bytes] = None
    dq: Optional[bytes] = None
    qi: Optional[bytes] = None

    REQUIRED_FIELDS = ("n", "e", "d", "p", "q")
    CRT_FIELDS = ("dp", "dq", "qi")

    def __post_init__(self) -> None:
        absent = [name for name in self.REQUIRED_FIELDS if getattr(self, name) is None]
        if absent:
            raise RSASSAKeyMaterialInvalid(f"RSA private key lacks fields: {', '.join(absent)}")
        for name in self.REQUIRED_FIELDS:
            object.__setattr__(self, name, to_bytes(getattr(self, name), name))
        for name in self.CRT_FIELDS:
            object.__setattr__(self, name, optional_bytes(getattr(self, name), name))

    @property
    def key_type(self) -> EnumKeyType:
        """Variant of the key pair."""
        return EnumKeyType.RSA_PRIVATE

    @classmethod
    def from_numbers(
        cls,
        n: int,
        e: int,
        d: int,
        p: int,
        q: int,
        dp: Optional[int] = None,
        dq: Optional[int] = None,
        qi: Optional[int] = None,
    ) -> "PortableRsaPrivateKey":
        """Create the key pair from integers."""
        return cls(
            n=int_to_bytes(n),
            e=int_to_bytes(e),
            d=int_to_bytes(d),
            p=int_to_bytes(p),
            q=int_to_bytes(q),
            dp=None if dp is None else int_to_bytes(dp),
            dq=None if dq is None else int_to_bytes(dq),
            qi=None if qi is None else int_to_bytes(qi),
        )

    def missing_fields(self) -> list[str]:
        """Get names of mandatory fields that are empty."""
        return [name for name in self.REQUIRED_FIELDS if not getattr(self, name)]

    def is_valid(self) -> bool:
        """Check that all mandatory fields are present."""
        return not self.missing_fields()

    @property
    def modulus_length(self) -> int:
        """Modulus length in bits."""
        return bytes_to_int(self.n).bit_length()

    @property
    def public_key(self) -> PortableRsaPublicKey:
        """Public part of the key pair."""
        return PortableRsaPublicKey(n=self.n, e=self.e)

    async def extract(self) -> "PortableRsaPrivateKey":
        return self

    async def extract_public_key(self) -> PortableRsaPublicKey:
        return self.public_key

    def __repr__(self) -> str:
        return f"RSA{self.modulus_length} Private Key"

    def __str__(self) -> str:
        return repr(self)


@dataclass(frozen=True)
class SimplePublicKey(PublicKey):
    """Public key of a non-RSA algorithm held as raw bytes."""

    data: bytes
    type: EnumKeyType = field(default=EnumKeyType.ED25519_PUBLIC)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", to_bytes(self.data, "data"))

    @property
    def key_type(self) -> EnumKeyType:
        """Variant of the key."""
        return self.type


@dataclass(frozen=True)
class Signature:
    """Signature bytes paired with the public key that should verify them."""

    bytes: bytes
    public_key: PublicKey

    def __init__(self, data: BytesLike, public_key: PublicKey) -> None:
        object.__setattr__(self, "bytes", to_bytes(data, "signature"))
        object.__setattr__(self, "public_key", public_key)

    def __repr__(self) -> str:
        return f"Signature({self.bytes.hex()}, public_key={self.public_key!r})"
