#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the layout run context and its configuration loading."""

from typing import Any

import pytest

from relayout.exceptions import RelayoutError, RelayoutMalformedInputError
from relayout.layout.context import LayoutContext
from relayout.layout.section import KeptSpacingPolicy, ResolutionStrategy, Section
from relayout.utils.config import Config


def test_add_section() -> None:
    ctx = LayoutContext(base=0x10, spacing=2)
    first = ctx.add_section("first", 0x10, 4)
    second = ctx.add_section("second", None, 8)
    assert (first.index, second.index) == (0, 1)
    assert len(ctx) == 2
    assert ctx.get_section("second") is second
    assert ctx.get_section(0) is first
    assert list(ctx) == [first, second]


@pytest.mark.parametrize(
    "name,address,size",
    [
        ("", 0, 4),
        (None, 0, 4),
        ("a", 0, 0),
        ("a", 0, -4),
        ("a", 0, True),
        ("a", 0, "4"),
        ("a", -1, 4),
        ("a", "0x10", 4),
        ("a", False, 4),
    ],
)
def test_add_section_invalid(name: Any, address: Any, size: Any) -> None:
    ctx = LayoutContext()
    with pytest.raises(RelayoutMalformedInputError):
        ctx.add_section(name, address, size)


def test_add_section_duplicate() -> None:
    ctx = LayoutContext()
    ctx.add_section("a", 0, 4)
    with pytest.raises(RelayoutMalformedInputError, match="Duplicate"):
        ctx.add_section("a", 8, 4)


@pytest.mark.parametrize(
    "base,spacing",
    [(-1, 0), (0, -1), (True, 0), (0, "2"), (1.5, 0)],
)
def test_invalid_parameters(base: Any, spacing: Any) -> None:
    with pytest.raises(RelayoutMalformedInputError):
        LayoutContext(base=base, spacing=spacing)


def test_unknown_section() -> None:
    with pytest.raises(RelayoutError, match="Unknown section"):
        LayoutContext().get_section("missing")


def test_from_records() -> None:
    ctx = LayoutContext.from_records(
        [("a", 0, 4), ("b", None, 8)],
        base=0,
        spacing=4,
        strategy=ResolutionStrategy.FIXED_POINT,
        kept_spacing="evict",  # type: ignore[arg-type]
    )
    assert ctx.strategy is ResolutionStrategy.FIXED_POINT
    assert ctx.kept_spacing is KeptSpacingPolicy.EVICT
    assert [s.name for s in ctx] == ["a", "b"]


def test_load_from_config() -> None:
    """Test loading of the context from a configuration dictionary.

    Numbers may be integers or strings, a missing or null address is unknown.
    """
    config = Config(
        {
            "base": "0x1000",
            "spacing": 16,
            "resolution": "fixed-point",
            "kept_spacing": "reject",
            "sections": [
                {"name": "boot", "address": 0x1000, "size": "0x100"},
                {"name": "app", "address": None, "size": 0x400},
                {"name": "data", "size": 0x200},
            ],
        }
    )
    ctx = LayoutContext.load_from_config(config)
    assert ctx.base == 0x1000
    assert ctx.spacing == 16
    assert ctx.strategy is ResolutionStrategy.FIXED_POINT
    assert ctx.kept_spacing is KeptSpacingPolicy.REJECT
    assert [(s.name, s.old_address, s.size) for s in ctx] == [
        ("boot", 0x1000, 0x100),
        ("app", None, 0x400),
        ("data", None, 0x200),
    ]


def test_load_from_config_defaults() -> None:
    ctx = LayoutContext.load_from_config(Config({"sections": [{"name": "a", "size": 1}]}))
    assert ctx.base == 0
    assert ctx.spacing == 0
    assert ctx.strategy is ResolutionStrategy.SINGLE_PASS
    assert ctx.kept_spacing is KeptSpacingPolicy.IGNORE


@pytest.mark.parametrize(
    "config",
    [
        {},
        {"sections": [{"name": "a"}]},
        {"sections": [{"name": "", "size": 4}]},
        {"sections": [{"name": "a", "size": 0}]},
        {"sections": [{"name": "a", "size": "big"}]},
        {"sections": [{"name": "a", "size": 4, "address": -4}]},
        {"base": -1, "sections": []},
        {"resolution": "twice", "sections": []},
        {"kept_spacing": "maybe", "sections": []},
        {"sections": [{"name": "a", "size": 4}, {"name": "a", "size": 4}]},
    ],
)
def test_load_from_config_invalid(config: dict) -> None:
    with pytest.raises(RelayoutMalformedInputError):
        LayoutContext.load_from_config(Config(config))


def test_section() -> None:
    section = Section(3, "s", None, 0x10)
    assert not section.is_known
    assert not section.is_assigned
    with pytest.raises(RelayoutError):
        section.keep()
    with pytest.raises(RelayoutError):
        section.old_end  # pylint: disable=expression-not-assigned
    with pytest.raises(RelayoutError, match="no assigned address"):
        section.assigned_address  # pylint: disable=expression-not-assigned
    with pytest.raises(RelayoutError, match="no assigned address"):
        section.new_end  # pylint: disable=expression-not-assigned
    section.new_address = 0x20
    assert section.assigned_address == 0x20
    assert section.new_end == 0x30
    assert section.relocated
    assert not section.kept
    assert repr(section) == "<Section s (16) at unknown>"


def test_section_keep() -> None:
    section = Section(0, "s", 0x100, 0x10)
    section.keep()
    assert section.kept
    assert section.new_address == 0x100
    assert section.old_end == section.new_end == 0x110
    assert not section.relocated
