#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Miscellaneous helpers for byte handling and file access."""

import json
import logging
import os
from enum import Enum
from math import ceil
from typing import Any, Iterable, Optional, Type, TypeVar, Union

import yaml

from rsassa.exceptions import RSASSAError, RSASSATypeError, RSASSAValueError

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview, Iterable[int]]


class Endianness(str, Enum):
    """Byte order of multi-byte integers."""

    BIG = "big"
    LITTLE = "little"


def to_bytes(value: BytesLike, name: str = "value") -> bytes:
    """Convert bytes-like value into immutable bytes.

    Lists of integers are accepted as well, each item must fit into one byte.

    :param value: Input value.
    :param name: Name of the value used in the error message.
    :raises RSASSATypeError: Value can't be interpreted as a byte sequence.
    :return: Copy of the value as bytes.
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, (str, int)) or value is None:
        raise RSASSATypeError(f"{name} must be a byte sequence, not {type(value).__name__}")
    try:
        return bytes(value)
    except (TypeError, ValueError) as exc:
        raise RSASSATypeError(f"{name} is not a valid byte sequence: {exc}") from exc


def optional_bytes(value: Optional[BytesLike], name: str = "value") -> Optional[bytes]:
    """Convert optional bytes-like value into bytes, None stays None."""
    if value is None:
        return None
    return to_bytes(value, name)


def int_to_bytes(value: int, byte_cnt: Optional[int] = None) -> bytes:
    """Convert non-negative integer into unsigned big-endian bytes.

    :param value: Integer to convert.
    :param byte_cnt: Requested length, minimal length is used if not specified.
    :raises RSASSAValueError: Value is negative or doesn't fit into byte_cnt.
    :return: Big-endian representation of the value.
    """
    if value < 0:
        raise RSASSAValueError("Negative integers can't be encoded as unsigned bytes")
    minimal = max(1, ceil(value.bit_length() / 8))
    if byte_cnt is not None and byte_cnt < minimal:
        raise RSASSAValueError(f"Value takes more bytes than required byte count {byte_cnt}")
    return value.to_bytes(byte_cnt or minimal, Endianness.BIG.value)


def bytes_to_int(data: bytes) -> int:
    """Convert unsigned big-endian bytes into integer."""
    return int.from_bytes(data, Endianness.BIG.value)


def load_binary(path: str) -> bytes:
    """Load binary file into bytes.

    :param path: Path to the file.
    :return: Content of the file.
    """
    logger.debug(f"Loading binary file from {path}")
    with open(path, "rb") as f:
        return f.read()


def load_text(path: str) -> str:
    """Load text file into string.

    :param path: Path to the file.
    :return: Content of the file.
    """
    logger.debug(f"Loading text file from {path}")
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def load_configuration(path: str) -> dict:
    """Load configuration from YAML or JSON file.

    :param path: Path to the configuration file.
    :raises RSASSAError: The file can't be read or doesn't hold a mapping.
    :return: Content of the configuration.
    """
    try:
        config = load_text(path)
    except OSError as exc:
        raise RSASSAError(f"Can't load configuration file: {str(exc)}") from exc

    config_data: Optional[dict] = None
    try:
        config_data = json.loads(config)
    except json.JSONDecodeError:
        try:
            config_data = yaml.safe_load(config)
        except yaml.YAMLError as exc:
            raise RSASSAError(f"Can't parse configuration file: {path}") from exc

    if not isinstance(config_data, dict):
        raise RSASSAError(f"Invalid configuration file: {path}")
    return config_data


def write_file(data: Union[str, bytes], path: str, mode: str = "w") -> int:
    """Write data to a file, parent directories are created when missing.

    :param data: Data to write.
    :param path: Path to the target file.
    :param mode: File writing mode ('w' for text, 'wb' for binary), defaults to 'w'.
    :return: Number of characters or bytes written to the file.
    """
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)

    logger.debug(f"Storing {'binary' if 'b' in mode else 'text'} file at {path}")
    with open(path, mode, encoding=None if "b" in mode else "utf-8") as f:
        return f.write(data)


TS = TypeVar("TS", bound="SingletonMeta")  # pylint: disable=invalid-name


class SingletonMeta(type):
    """Metaclass ensuring a single instance of the class."""

    _instance = None

    def __call__(cls: Type[TS], *args: Any, **kwargs: Any) -> TS:  # type: ignore
        if cls._instance is None:
            instance = super().__call__(*args, **kwargs)
            cls._instance = instance
        return cls._instance
