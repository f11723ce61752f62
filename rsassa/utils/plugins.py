#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Plugin loading for third-party cryptographic providers.

Plugins are either installed packages announcing themselves in the
``rsassa.provider`` entry point group, or plain Python source files. Importing
a plugin module is enough to register the provider classes it defines.
"""

import logging
import os
import sys
from importlib.util import module_from_spec, spec_from_file_location
from types import ModuleType
from typing import Optional

import importlib_metadata

from rsassa.exceptions import RSASSAError, RSASSATypeError
from rsassa.utils.misc import SingletonMeta

logger = logging.getLogger(__name__)

PROVIDER_ENTRY_POINT_GROUP = "rsassa.provider"


class PluginsManager(metaclass=SingletonMeta):
    """Registry of loaded plugin modules."""

    def __init__(self) -> None:
        self.plugins: dict[str, ModuleType] = {}

    def load_from_entrypoints(self, group_name: str = PROVIDER_ENTRY_POINT_GROUP) -> int:
        """Load modules from given entry point group.

        Modules that fail to import are logged as warnings and skipped.

        :param group_name: Entry point group to load plugins from.
        :raises RSASSATypeError: When group_name is not a string.
        :return: The number of newly loaded plugins.
        """
        if not isinstance(group_name, str):
            raise RSASSATypeError("Group name must be of string type.")

        count = 0
        for ep in importlib_metadata.entry_points(group=group_name):
            try:
                plugin = ep.load()
            except (ModuleNotFoundError, ImportError) as exc:
                logger.warning(f"Module {ep.module} could not be loaded: {exc}")
                continue
            if self.register(plugin):
                logger.info(f"Plugin {ep.name}-{ep.group} has been loaded.")
                count += 1
        return count

    def load_from_source_file(self, source_file: str, module_name: Optional[str] = None) -> None:
        """Import Python source file and register it as a plugin.

        :param source_file: Path to python source file: absolute or relative to cwd
        :param module_name: Name for the new module, default is basename of the source file
        :raises RSASSAError: If importing of source file failed
        """
        name = module_name or os.path.splitext(os.path.basename(source_file))[0]
        spec = spec_from_file_location(name=name, location=source_file)
        if not spec or not spec.loader:
            raise RSASSAError(f"Source '{source_file}' does not exist.")

        module = module_from_spec(spec)
        try:
            sys.modules[spec.name] = module
            spec.loader.exec_module(module)
        except Exception as exc:
            del sys.modules[spec.name]
            raise RSASSAError(f"Failed to load plugin {source_file}: {exc}") from exc
        self.register(module)

    def register(self, plugin: ModuleType) -> bool:
        """Register a plugin module.

        :param plugin: Plugin as a module to be registered.
        :return: False if the plugin is already registered.
        """
        name = getattr(plugin, "__name__", None)
        if name is None:
            raise RSASSAError("Plugin name could not be determined.")
        if name in self.plugins:
            logger.debug(f"Plugin {name} has been already registered.")
            return False
        self.plugins[name] = plugin
        logger.debug(f"A plugin {name} has been registered.")
        return True
