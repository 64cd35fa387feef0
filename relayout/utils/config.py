#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""RELAYOUT configuration management utilities.

This module provides the configuration dictionary used to load layout
descriptions from YAML/JSON files, including nested key addressing, typed
getters and schema validation.
"""

import logging
import os
from typing import Any, Optional, Union

from typing_extensions import Self

from relayout.exceptions import RelayoutError, RelayoutKeyError
from relayout.utils.misc import STD_STREAM, load_configuration, value_to_int
from relayout.utils.schema_validator import check_config

logger = logging.getLogger(__name__)


class Config(dict):
    """RELAYOUT Configuration Manager.

    This class extends Python's dictionary with nested key addressing using a path
    separator, file-based loading and knowledge of the configuration source.

    :cvar SEP: Path separator used for nested key addressing in configuration.
    """

    SEP = "/"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize configuration dictionary with default settings.

        :param args: Variable length argument list passed to parent dictionary constructor.
        :param kwargs: Arbitrary keyword arguments passed to parent dictionary constructor.
        """
        super().__init__(*args, **kwargs)
        self.config_dir = os.getcwd()
        self.config_name = ""

    @classmethod
    def create_from_file(cls, file_path: str) -> Self:
        """Create configuration object from file.

        The path "-" loads the configuration from standard input.

        :param file_path: Path to the configuration file to load.
        :return: Configuration object with loaded data and its directory.
        """
        if file_path == STD_STREAM:
            cfg = cls(load_configuration(file_path))
            cfg.config_name = "<stdin>"
            return cfg
        cfg_abs_path = os.path.abspath(file_path).replace("\\", "/")
        cfg = cls(load_configuration(cfg_abs_path))
        cfg_dir = os.path.dirname(cfg_abs_path)
        cfg.config_dir = cfg_dir
        cfg.config_name = os.path.basename(cfg_abs_path)
        logger.debug(f"Configuration loaded from {cfg_abs_path}")
        return cfg

    @classmethod
    def get_path(cls, key: Union[str, int]) -> list:
        """Get keypath in list format.

        String keys are split by the separator and each component is converted to
        integer if possible, otherwise kept as string.

        :param key: Key to convert - either string path with separators or single integer.
        :return: List of path components as integers or strings.
        """
        ret: list[Union[int, str]] = []

        if isinstance(key, int):
            return [str(key)]
        for k in key.split(cls.SEP):
            try:
                ret.append(value_to_int(k))
            except RelayoutError:
                ret.append(k)
        return ret

    def get(self, key: str, defaults: Optional[Any] = None) -> Any:
        """Get configuration value with nested key support.

        :param key: Key name including support of key path with '/'.
        :param defaults: Default value in case that item doesn't exist, defaults to None.
        :return: Configuration value or default if key not found.
        """
        try:
            return self.__getitem__(key)
        except RelayoutError:
            return defaults

    def __getitem__(self, key: str) -> Any:
        """Get configuration value by key path.

        A key holding None is treated as missing.

        :param key: Configuration key or '/' separated path to nested value
        :raises RelayoutError: Invalid key path or unsupported data type in path
        :raises RelayoutKeyError: Key doesn't exist in configuration
        :return: Configuration value at the specified key path
        """

        def gets(source: Any, key_path: list) -> Any:
            key = key_path.pop(0)
            if isinstance(source, list):
                if not isinstance(key, int):
                    raise RelayoutError("Invalid key path - from list must be used number as key")
                if key >= len(source):
                    raise RelayoutKeyError(f"The index {key} is out of range")
                ret = source[key]
            elif isinstance(source, dict):
                ret = dict.get(source, key)
            else:
                raise RelayoutError("Invalid configuration key path.")

            if ret is None:
                raise RelayoutKeyError(f"The {key} doesn't exists in configuration")

            if len(key_path):
                return gets(ret, key_path)

            return ret

        try:
            return gets(self, self.get_path(key))
        except RelayoutKeyError:
            return gets(self, [key])

    def get_config(self, key: str, default: Optional["Config"] = None) -> "Config":
        """Get the key value as Config object.

        The returned Config object inherits the config directory from the parent.

        :param key: Key name of the sub configuration.
        :param default: Default value if configuration doesn't contain the key.
        :raises RelayoutKeyError: The key is not found in configuration and no default provided.
        :return: Sub configuration as Config object.
        """
        cfg = self.get(key, default)
        if cfg is None:
            raise RelayoutKeyError(f"The value is not in config at key: {key}")
        ret = Config(cfg)
        ret.config_dir = self.config_dir
        return ret

    def get_list_of_configs(
        self, key: str, default: Optional[list["Config"]] = None
    ) -> list["Config"]:
        """Get list of sub configurations.

        :param key: Key name of the list of sub configuration.
        :param default: Default value if configuration doesn't contain the key.
        :raises RelayoutError: When the key is not found and no default value is provided.
        :return: List of sub configuration objects.
        """
        if key not in self:
            if default is not None:
                return default
            raise RelayoutError(f"The value is not in config at key: {key}")

        return [self.get_config(f"{key}{self.SEP}{i}") for i in range(len(self.get_list(key)))]

    def get_list(self, key: str, default: Optional[list] = None) -> list:
        """Get the key value as list.

        :param key: Key name of the configuration entry.
        :param default: Default value if configuration doesn't contain the key.
        :raises RelayoutError: If the value at the specified key is not a list.
        :return: Configuration value as list.
        """
        ret = self.get(key, default)
        if not isinstance(ret, list):
            raise RelayoutError(f"The value is not list at key: {key}")
        return ret

    def get_int(self, key: str, default: Optional[int] = None) -> int:
        """Get the key value as integer.

        :param key: Key name of the sub configuration.
        :param default: Default value if configuration doesn't contain it.
        :raises RelayoutError: The value is not integer at specified key.
        :return: Integer loaded from configuration.
        """
        ret = self.get(key, default)
        if ret is None:
            raise RelayoutError(f"The value is not integer at key: {key}")
        return value_to_int(ret)

    def get_str(self, key: str, default: Optional[str] = None) -> str:
        """Get the key value as string.

        :param key: Key name of the configuration entry.
        :param default: Default value to return if the key doesn't exist in configuration.
        :raises RelayoutError: If the retrieved value is not a string type.
        :return: Configuration value as string.
        """
        ret = self.get(key, default)
        if not isinstance(ret, str):
            raise RelayoutError(f"The value is not string at key: {key}")
        return ret

    def check(self, schemas: list[dict[str, Any]], check_unknown_props: bool = False) -> None:
        """Check configuration against validation schemas.

        :param schemas: List of validation schemas.
        :param check_unknown_props: If True, check for unknown properties in config
            and print warnings.
        """
        check_config(self, schemas, check_unknown_props=check_unknown_props)
