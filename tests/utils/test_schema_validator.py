#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the configuration validation against JSON schemas."""

import logging
from typing import Any
from unittest import mock

import pytest

from relayout.exceptions import RelayoutError
from relayout.utils.schema_validator import check_config, get_schema_file

SCHEMA = {
    "type": "object",
    "properties": {
        "number": {"type": ["integer", "string"], "format": "number"},
        "mode": {"type": "string", "enum": ["a", "b"]},
        "items": {
            "type": "array",
            "items": {"type": "object", "properties": {"name": {"type": "string"}}},
        },
    },
    "required": ["number"],
}


@pytest.mark.parametrize(
    "config,result",
    [
        ({"number": 1}, True),
        ({"number": "0x10"}, True),
        ({"number": "ten"}, False),
        ({"number": 1, "mode": "a"}, True),
        ({"number": 1, "mode": "c"}, False),
        ({"mode": "a"}, False),
        ({"number": 1.5}, False),
    ],
)
def test_check_config(config: dict, result: bool) -> None:
    if result:
        check_config(config, [SCHEMA])
    else:
        with pytest.raises(RelayoutError, match="Configuration validation failed"):
            check_config(config, [SCHEMA])


def test_check_config_messages() -> None:
    with pytest.raises(RelayoutError, match="Missing field"):
        check_config({}, [SCHEMA])
    with pytest.raises(RelayoutError, match="Allowed values: a, b"):
        check_config({"number": 1, "mode": "x"}, [SCHEMA])


def test_check_config_merged_schemas() -> None:
    extra = {"properties": {"name": {"type": "string"}}, "required": ["name"]}
    with pytest.raises(RelayoutError, match="Missing field"):
        check_config({"number": 1}, [SCHEMA, extra])
    check_config({"number": 1, "name": "x"}, [SCHEMA, extra])


def test_unknown_properties_warning(caplog: Any) -> None:
    """Test that unknown properties are reported only when the check is enabled."""
    caplog.set_level(logging.WARNING)
    config = {"number": 1, "extra": 2, "items": [{"name": "a", "size": 4}]}

    check_config(config, [SCHEMA], check_unknown_props=True)
    messages = [record.message for record in caplog.records if record.levelname == "WARNING"]
    assert "Unknown property found in configuration: 'extra'" in messages
    assert "Unknown property found in configuration: 'items[0].size'" in messages

    caplog.clear()
    check_config(config, [SCHEMA], check_unknown_props=False)
    assert not [record for record in caplog.records if record.levelname == "WARNING"]


@mock.patch("relayout.utils.schema_validator.RELAYOUT_SCHEMA_STRICT", True)
def test_check_unknown_properties_strict_mode() -> None:
    with pytest.raises(RelayoutError, match="Unknown property found in configuration"):
        check_config({"number": 1, "extra": 2}, [SCHEMA], check_unknown_props=True)


def test_get_schema_file() -> None:
    schema = get_schema_file("relayout")
    assert "sections" in schema["properties"]
    schema["properties"].clear()
    assert "sections" in get_schema_file("relayout")["properties"]
    with pytest.raises(RelayoutError):
        get_schema_file("nonexistent")
