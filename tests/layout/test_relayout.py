#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the complete layout computation.

The layouts are checked for the properties every computed layout has to
satisfy: no overlaps, no section below the base, spacing around relocated
sections and stable addresses of kept sections.
"""

import pytest

from relayout.exceptions import RelayoutError
from relayout.layout import (
    KeptSpacingPolicy,
    LayoutContext,
    LayoutResult,
    ResolutionStrategy,
    compute_layout,
    parse_description,
)
from relayout.layout.context import SectionRecord

MIXED_RECORDS: list[SectionRecord] = [
    ("boot", 0x1000, 0x100),
    ("app", 0x1080, 0x400),
    ("data", 0x2000, 0x200),
    ("old", 0x0800, 0x40),
    ("new", None, 0x80),
]


def _check_properties(result: LayoutResult, base: int, spacing: int) -> None:
    sections = result.sections
    for section in sections:
        assert section.new_address is not None
        assert section.new_address >= base
        if section.kept:
            assert section.new_address == section.old_address
    for first, second in zip(sections, sections[1:]):
        assert first.new_end <= second.new_address
        if not (first.kept and second.kept):
            assert first.new_end + spacing <= second.new_address
    assert result.base >= max((s.new_end for s in sections), default=base)
    assert not result.verify().has_errors


def test_overlap_example() -> None:
    """Test that the later of two equal overlapping sections is relocated.

    A(0, 10) stays in place, B(5, 10) is moved behind A with the spacing 2 and
    the new base is the end of B plus the spacing.
    """
    ctx = LayoutContext.from_records([("A", 0, 10), ("B", 5, 10)], base=0, spacing=2)
    result = compute_layout(ctx)
    assert list(result.records()) == [("A", 0), ("B", 12), ("", 24)]
    assert result.kept_count == 1
    assert result.relocated_count == 1
    _check_properties(result, 0, 2)


def test_disjoint_sections_unchanged() -> None:
    ctx = LayoutContext.from_records([("A", 0, 4), ("B", 6, 4), ("C", 12, 4)], spacing=2)
    result = compute_layout(ctx)
    assert list(result.records()) == [("A", 0), ("B", 6), ("C", 12), ("", 18)]
    assert result.relocated_count == 0


def test_mixed_layout() -> None:
    """Test kept, evicted, below-base and unknown sections together.

    'boot' overlaps the larger 'app' and is evicted, 'old' lies below the base,
    'new' has no previous address. The largest section is placed first.
    """
    ctx = LayoutContext.from_records(MIXED_RECORDS, base=0x1000, spacing=0x10)
    result = compute_layout(ctx)
    assert list(result.records()) == [
        ("old", 0x1000),
        ("app", 0x1080),
        ("boot", 0x1490),
        ("new", 0x15A0),
        ("data", 0x2000),
        ("", 0x2210),
    ]
    assert result.kept_count == 2
    assert result.relocated_count == 3
    _check_properties(result, 0x1000, 0x10)


def test_all_unknown() -> None:
    ctx = LayoutContext.from_records([("a", None, 4), ("b", None, 8)], base=0x100)
    result = compute_layout(ctx)
    assert list(result.records()) == [("b", 0x100), ("a", 0x108), ("", 0x10C)]


def test_empty() -> None:
    result = compute_layout(LayoutContext(base=0x40, spacing=4))
    assert list(result.records()) == [("", 0x40)]
    assert len(result) == 0


def test_below_base_relocated() -> None:
    ctx = LayoutContext.from_records([("low", 0x10, 4), ("high", 0x200, 4)], base=0x100)
    result = compute_layout(ctx)
    assert list(result.records()) == [("low", 0x100), ("high", 0x200), ("", 0x204)]


@pytest.mark.parametrize("strategy", list(ResolutionStrategy))
@pytest.mark.parametrize("kept_spacing", [KeptSpacingPolicy.IGNORE, KeptSpacingPolicy.EVICT])
def test_properties(strategy: ResolutionStrategy, kept_spacing: KeptSpacingPolicy) -> None:
    records: list[SectionRecord] = [
        ("s0", 0x0, 0x30),
        ("s1", 0x20, 0x10),
        ("s2", 0x34, 0x8),
        ("s3", None, 0x4),
        ("s4", 0x60, 0x20),
        ("s5", 0x70, 0x40),
        ("s6", None, 0x18),
        ("s7", 0x100, 0x2),
        ("s8", 0x104, 0x2),
        ("s9", None, 0x1),
    ]
    ctx = LayoutContext.from_records(
        records, base=0x10, spacing=4, strategy=strategy, kept_spacing=kept_spacing
    )
    result = compute_layout(ctx)
    assert len(result) == len(records)
    _check_properties(result, 0x10, 4)
    if kept_spacing is KeptSpacingPolicy.EVICT:
        for first, second in zip(result.sections, result.sections[1:]):
            assert first.new_end + 4 <= second.new_address


def test_idempotence() -> None:
    """Test that a computed layout used as the next input stays unchanged."""
    ctx = LayoutContext.from_records(MIXED_RECORDS, base=0x1000, spacing=0x10)
    first = compute_layout(ctx)

    second = compute_layout(parse_description(first.export_description()))

    assert list(second.records()) == list(first.records())
    assert second.relocated_count == 0


def test_context_used_once() -> None:
    ctx = LayoutContext.from_records([("A", 0, 10)])
    compute_layout(ctx)
    with pytest.raises(RelayoutError, match="already computed"):
        compute_layout(ctx)


def test_address_assigned_once() -> None:
    ctx = LayoutContext.from_records([("A", 0, 10)])
    compute_layout(ctx)
    with pytest.raises(RelayoutError, match="already assigned"):
        ctx.get_section("A").new_address = 0x20
