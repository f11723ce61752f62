#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Enumeration with numeric tags, labels and descriptions.

Members compare equal to their tag and to their label, lookup by label is
case insensitive.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from typing_extensions import Self

from rsassa.exceptions import RSASSAKeyError, RSASSATypeError


@dataclass(frozen=True)
class RSASSAEnumMember:
    """Single member of an RSASSA enumeration."""

    tag: int
    label: str
    description: Optional[str] = None


class RSASSAEnum(RSASSAEnumMember, Enum):
    """Enumeration of tagged and labelled members."""

    def __eq__(self, __value: object) -> bool:
        return self.tag == __value or self.label == __value

    def __hash__(self) -> int:
        return hash((self.tag, self.label, self.description))

    @classmethod
    def labels(cls) -> list[str]:
        """Get list of labels of all enum members."""
        return [value.label for value in cls.__members__.values()]

    @classmethod
    def tags(cls) -> list[int]:
        """Get list of tags of all enum members."""
        return [value.tag for value in cls.__members__.values()]

    @classmethod
    def contains(cls, obj: Union[int, str]) -> bool:
        """Check if member with given tag/label exists in enum.

        :param obj: Label or tag of enum member.
        :raises RSASSATypeError: Object must be either string or integer.
        :return: True if member exists, False otherwise.
        """
        if not isinstance(obj, (int, str)):
            raise RSASSATypeError("Object must be either string or integer")
        try:
            cls.from_attr(obj)
            return True
        except RSASSAKeyError:
            return False

    @classmethod
    def from_attr(cls, attribute: Union[int, str]) -> Self:
        """Get enum member by tag (int) or label (str)."""
        if isinstance(attribute, int):
            return cls.from_tag(attribute)
        return cls.from_label(attribute)

    @classmethod
    def from_tag(cls, tag: int) -> Self:
        """Get enum member with given tag.

        :param tag: Tag to be used for searching.
        :raises RSASSAKeyError: If enum with given tag is not found.
        :return: Found enum member.
        """
        for item in cls.__members__.values():
            if item.tag == tag:
                return item
        raise RSASSAKeyError(f"There is no {cls.__name__} item with tag {tag} defined")

    @classmethod
    def from_label(cls, label: str) -> Self:
        """Get enum member with given label, the search is case insensitive.

        :param label: Label to be used for searching.
        :raises RSASSAKeyError: If enum with given label is not found or label is not string.
        :return: Found enum member.
        """
        if not isinstance(label, str):
            raise RSASSAKeyError("Label must be string")
        for item in cls.__members__.values():
            if item.label.upper() == label.upper():
                return item
        raise RSASSAKeyError(f"There is no {cls.__name__} item with label {label} defined")
