#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Cryptographic exceptions of the RSASSA package.

None of these errors is retried by the library. Faults reported by a
provider keep the provider's diagnostic text and chain the original error.
Verification mismatch is not an error, it is reported as ``False``.
"""

from rsassa.exceptions import RSASSAError, RSASSATypeError, RSASSAValueError


class RSASSACryptoError(RSASSAError):
    """General RSASSA Crypto Error."""


class RSASSAUnsupportedAlgorithm(RSASSACryptoError, RSASSAValueError):
    """Requested hash binding, algorithm or exchange format is not supported."""


class RSASSAKeyMaterialInvalid(RSASSACryptoError, RSASSAValueError):
    """Portable key material is incomplete or inconsistent."""


class RSASSAKeyTypeMismatch(RSASSACryptoError, RSASSATypeError):
    """Value presented as a key is not the expected key variant."""


class RSASSAExportDenied(RSASSACryptoError):
    """Private key handle was created as non-extractable.

    The key pair must be regenerated (or imported) as extractable.
    """


class RSASSAUnsupportedModulusLength(RSASSACryptoError, RSASSAValueError):
    """Requested RSA modulus length is rejected."""


class RSASSAProviderError(RSASSACryptoError):
    """Fault reported by the cryptographic provider."""


class RSASSAGenerationFailed(RSASSAProviderError):
    """Provider failed to generate a key pair."""


class RSASSASigningFailed(RSASSAProviderError):
    """Provider failed to compute a signature."""


class RSASSAVerificationError(RSASSAProviderError):
    """Provider failed to run the verification (not a signature mismatch)."""


class RSASSAInvalidAccess(RSASSAProviderError):
    """Handle role, usage or algorithm doesn't permit the requested operation."""
