#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Provider plugin loaded from a source file in tests."""

from rsassa.crypto.providers import CryptographyProvider


class TracingProvider(CryptographyProvider):
    """In-process provider remembering the size of signed messages."""

    identifier = "tracing"

    def __init__(self, label: str = "default") -> None:
        super().__init__()
        self.label = label
        self.signed_sizes: list[int] = []

    def info(self) -> str:
        return f"TracingProvider({self.label})"

    async def sign(self, algorithm, handle, message):  # type: ignore[no-untyped-def]
        self.signed_sizes.append(len(message))
        return await super().sign(algorithm, handle, message)
