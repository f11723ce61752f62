#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Base class for named, pluggable service providers.

Concrete providers declare an ``identifier`` and are instantiated from a
configuration string such as ``type=cryptography;option=value``.
"""

import abc
import inspect
import logging
from typing import Iterator, Optional, Type, Union

from typing_extensions import Self

from rsassa.exceptions import RSASSAError, RSASSAKeyError, RSASSAValueError
from rsassa.utils.plugins import PluginsManager

logger = logging.getLogger(__name__)


class ServiceProvider(abc.ABC):
    """Service Provider abstract base class.

    Every concrete subclass is discoverable by its identifier through
    :meth:`create`. Subclasses defined in plugins become available once the
    plugin module is imported.

    :cvar identifier: Unique identifier of the provider type.
    :cvar plugin_identifier: Entry point group searched for plugins.
    :cvar reserved_keys: Parameter keys consumed by the framework.
    """

    identifier: str
    plugin_identifier: str
    reserved_keys = ["type"]

    def __init_subclass__(cls) -> None:
        if not inspect.isabstract(cls) and not hasattr(cls, "identifier"):
            raise RSASSAError(f"{cls.__name__}.identifier is not set")
        return super().__init_subclass__()

    def info(self) -> str:
        """Provide information about the Service provider."""
        return self.__class__.__name__

    @classmethod
    def get_types(cls, include_abstract: bool = False) -> list[str]:
        """Get identifiers of all available provider types.

        :param include_abstract: Whether to include abstract provider types in the result.
        :return: List of provider type identifiers.
        """
        return [
            sub_class.identifier
            for sub_class in cls.get_all_providers(include_abstract=include_abstract)
        ]

    @staticmethod
    def convert_params(params: str) -> dict[str, str]:
        """Convert creation params from string into dictionary.

        :param params: Semicolon-separated key-value pairs (e.g. "type=cryptography").
        :raises RSASSAKeyError: Duplicate key found in the parameters.
        :raises RSASSAValueError: Parameter format is invalid.
        :return: Dictionary containing the parsed key-value pairs.
        """
        result: dict[str, str] = {}
        try:
            for p in params.split(";"):
                key, value = p.split("=")
                if key in result:
                    raise RSASSAKeyError(f"Duplicate key found: {key}")
                result[key] = value
        except ValueError as e:
            raise RSASSAValueError(
                "Parameter must meet the following pattern: type=cryptography;key=value"
            ) from e
        return result

    @classmethod
    def create(cls, params: Union[str, dict]) -> Optional[Self]:
        """Create a concrete instance of the provider.

        :param params: Configuration string or dictionary with mandatory 'type' key.
        :raises RSASSAValueError: The 'type' key is missing.
        :return: Instance of the matching provider class, or None if not found.
        """
        cls.load_plugins()
        if isinstance(params, str):
            params = cls.convert_params(params)
        else:
            params = dict(params)
        if "type" not in params:
            raise RSASSAValueError("Provider configuration must contain 'type'")
        for klass in cls.get_all_providers():
            if klass.identifier == params["type"]:
                kwargs = {k: v for k, v in params.items() if k not in cls.reserved_keys}
                return klass(**kwargs)

        logger.info(f"{cls.__name__} of type {params['type']} was not found.")
        return None

    @classmethod
    def load_plugins(cls) -> None:
        """Load all plugins implementing this service."""
        if hasattr(cls, "plugin_identifier"):
            PluginsManager().load_from_entrypoints(cls.plugin_identifier)

    @classmethod
    def get_all_providers(cls, include_abstract: bool = False) -> list[Type[Self]]:
        """Get list of all provider classes derived from this class.

        :param include_abstract: Whether to include abstract classes in the result.
        :return: List of provider classes.
        """

        def get_subclasses(base_class: Type[Self]) -> Iterator[Type[Self]]:
            for subclass in base_class.__subclasses__():
                yield subclass
                yield from get_subclasses(subclass)

        if include_abstract:
            return list(get_subclasses(cls))
        return list(filter(lambda x: not inspect.isabstract(x), get_subclasses(cls)))
