#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""RELAYOUT schema-based configuration validation utilities.

This module validates configuration data against JSON schemas stored in the
RELAYOUT data folder.
"""

import copy
import logging
import os
import re
from functools import lru_cache
from typing import Any, Callable

import fastjsonschema
import yaml

from relayout import RELAYOUT_DATA_FOLDER, RELAYOUT_SCHEMA_STRICT
from relayout.exceptions import RelayoutError
from relayout.utils.misc import value_to_int

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _load_schema_file(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def get_schema_file(feature: str) -> dict[str, Any]:
    """Get JSON Schema file for the requested feature.

    :param feature: Name of the feature to get schema for.
    :raises RelayoutError: If the schema file cannot be found.
    :return: Deep copy of the loaded schema dictionary.
    """
    path = os.path.join(RELAYOUT_DATA_FOLDER, "jsonschemas", f"sch_{feature}.yaml")
    if not os.path.isfile(path):
        raise RelayoutError(f"Validation schema for '{feature}' doesn't exist: {path}")
    return copy.deepcopy(_load_schema_file(path))


def _is_number(param: Any) -> bool:
    """Check if the input parameter represents a number.

    :param param: Input value to analyze for numeric representation.
    :return: True if input represents a number, False otherwise.
    """
    try:
        value_to_int(param)
        return True
    except RelayoutError:
        return False


def _print_validation_fail_reason(exc: fastjsonschema.JsonSchemaValueException) -> str:
    """Format JSON schema validation failure into human-readable error message.

    :param exc: The JSON schema validation exception to process.
    :return: Formatted error message explaining the validation failure reason.
    """
    message = str(exc)
    if exc.rule == "required":
        missing = filter(lambda x: x not in exc.value.keys(), exc.rule_definition)
        message += f"; Missing field(s): {', '.join(missing)}"
    elif exc.rule == "format" and exc.rule_definition == "number":
        message += f"; Value '{exc.value}' is not a valid number"
    elif exc.rule == "enum":
        message += f"; Allowed values: {', '.join(str(x) for x in exc.rule_definition)}"
    return message


def check_unknown_properties(config_dict: dict, schema_dict: dict, path: str = "") -> None:
    """Recursively check for unknown properties in configuration against schema.

    Unknown properties raise an exception in strict mode (RELAYOUT_SCHEMA_STRICT),
    otherwise they are only reported as warnings.

    :param config_dict: Configuration dictionary to validate
    :param schema_dict: JSON schema dictionary defining allowed properties
    :param path: Current path in the configuration for error reporting
    :raises RelayoutError: When unknown property is found and strict mode is enabled
    """
    if "properties" not in schema_dict and "patternProperties" not in schema_dict:
        return

    schema_props = schema_dict.get("properties", {})
    pattern_props = schema_dict.get("patternProperties", {})

    for key, value in config_dict.items():
        current_path = f"{path}.{key}" if path else key

        if key in schema_props:
            if isinstance(value, dict):
                check_unknown_properties(value, schema_props[key], current_path)
            elif isinstance(value, list) and "items" in schema_props[key]:
                for i, item in enumerate(value):
                    if isinstance(item, dict):
                        check_unknown_properties(
                            item, schema_props[key]["items"], f"{current_path}[{i}]"
                        )
            continue

        if any(re.match(pattern, key) for pattern in pattern_props):
            continue

        error_msg = f"Unknown property found in configuration: '{current_path}'"
        if RELAYOUT_SCHEMA_STRICT:
            raise RelayoutError(error_msg)
        logger.warning(error_msg)


def check_config(
    config: dict[str, Any],
    schemas: list[dict[str, Any]],
    check_unknown_props: bool = False,
) -> None:
    """Check the configuration by provided list of validation schemas.

    Top-level properties and required keys of all schemas are merged before the
    validation.

    :param config: Configuration dictionary to validate.
    :param schemas: List of JSON schema dictionaries for validation.
    :param check_unknown_props: Whether to check and warn about unknown properties in config.
    :raises RelayoutError: Invalid validation schema or configuration validation failed.
    """
    formats: dict[str, Callable[[str], bool]] = {"number": _is_number}

    schema: dict[str, Any] = {}
    for sch in schemas:
        sch = copy.deepcopy(sch)
        properties = sch.pop("properties", {})
        required = sch.pop("required", [])
        schema.update(sch)
        schema.setdefault("properties", {}).update(properties)
        schema["required"] = schema.get("required", []) + [
            req for req in required if req not in schema.get("required", [])
        ]

    config_to_check = copy.deepcopy(config)
    if check_unknown_props:
        check_unknown_properties(config_to_check, schema)

    try:
        validator = fastjsonschema.compile(schema, formats=formats)
    except (TypeError, fastjsonschema.JsonSchemaDefinitionException) as exc:
        raise RelayoutError(f"Invalid validation schema to check config: {str(exc)}") from exc
    try:
        validator(config_to_check)
    except fastjsonschema.JsonSchemaValueException as exc:
        message = _print_validation_fail_reason(exc)
        raise RelayoutError(f"Configuration validation failed: {message}") from exc
