#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Minimal-delta layout of image sections.

The package keeps as many sections as possible at their previous addresses and
fits the others into the free space, so that the new image differs from the old
one as little as possible.
"""

from relayout.layout.context import LayoutContext
from relayout.layout.relayout import compute_layout
from relayout.layout.result import LayoutResult
from relayout.layout.section import (
    UNKNOWN_ADDRESS,
    KeptSpacingPolicy,
    ResolutionStrategy,
    Section,
)
from relayout.layout.text_format import parse_description

__all__ = [
    "UNKNOWN_ADDRESS",
    "KeptSpacingPolicy",
    "LayoutContext",
    "LayoutResult",
    "ResolutionStrategy",
    "Section",
    "compute_layout",
    "parse_description",
]
