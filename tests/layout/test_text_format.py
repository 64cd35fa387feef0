#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the plain text layout description."""

import pytest

from relayout.exceptions import RelayoutMalformedInputError
from relayout.layout.section import KeptSpacingPolicy, ResolutionStrategy
from relayout.layout.text_format import (
    format_description,
    format_records,
    parse_description,
    tokenize,
)

DESCRIPTION = """
# count base spacing
3 0x1000 0x10
boot     0x1000  0x100   # kept
"my app" 0x1200  1_024
config   -       0b1000
"""


def test_parse_description() -> None:
    """Test parsing of the header, quoted names, comments and number formats."""
    ctx = parse_description(DESCRIPTION)
    assert ctx.base == 0x1000
    assert ctx.spacing == 0x10
    assert ctx.strategy is ResolutionStrategy.SINGLE_PASS
    assert ctx.kept_spacing is KeptSpacingPolicy.IGNORE
    assert [(s.index, s.name, s.old_address, s.size) for s in ctx] == [
        (0, "boot", 0x1000, 0x100),
        (1, "my app", 0x1200, 1024),
        (2, "config", None, 8),
    ]


def test_parse_description_options() -> None:
    ctx = parse_description(
        "0 0 0", ResolutionStrategy.FIXED_POINT, KeptSpacingPolicy.REJECT
    )
    assert len(ctx) == 0
    assert ctx.strategy is ResolutionStrategy.FIXED_POINT
    assert ctx.kept_spacing is KeptSpacingPolicy.REJECT


@pytest.mark.parametrize("token", ["-", "?", "unknown", "UNKNOWN", "None", "none"])
def test_parse_unknown_address(token: str) -> None:
    ctx = parse_description(f"1 0 0 sec {token} 4")
    assert ctx.get_section("sec").old_address is None


def test_parse_single_line() -> None:
    ctx = parse_description("2 0 2 A 0 10 B 5 10")
    assert [s.name for s in ctx] == ["A", "B"]


@pytest.mark.parametrize(
    "text,error",
    [
        ("", "must start with"),
        ("1 0", "must start with"),
        ("2 0 0 a 0 4", "Expected 2 section record"),
        ("1 0 0 a 0 4 b", "Expected 1 section record"),
        ("1 0 0 a 0", "Expected 1 section record"),
        ("x 0 0", "Invalid section count"),
        ("0 -1 0", "Invalid base"),
        ("0 0 0xZZ", "Invalid spacing"),
        ("1 0 0 a 0x1G 4", "Invalid address of section 'a'"),
        ("1 0 0 a 0 four", "Invalid size of section 'a'"),
        ("1 0 0 a 0 0", "invalid size"),
        ("2 0 0 a 0 4 a 8 4", "Duplicate section name"),
        ('1 0 0 "" 0 4', "Invalid section name"),
        ('1 0 0 "a 0 4', "Can't tokenize"),
    ],
)
def test_parse_invalid(text: str, error: str) -> None:
    with pytest.raises(RelayoutMalformedInputError, match=error):
        parse_description(text)


def test_tokenize() -> None:
    assert tokenize("a 'b c' # d\n e") == ["a", "b c", "e"]


def test_format_records() -> None:
    text = format_records([("A", 0), ("my app", 0x12), ("", 0x24)])
    assert text == "A 0x00000000\n'my app' 0x00000012\n'' 0x00000024\n"


def test_format_description() -> None:
    text = format_description(0x100, 4, [("A", 0x100, 16), ("B", None, 8)])
    assert text == "2 0x00000100 4\nA 0x00000100 16\nB - 8\n"
    ctx = parse_description(text)
    assert [(s.name, s.old_address, s.size) for s in ctx] == [("A", 0x100, 16), ("B", None, 8)]
