#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Placement of sections without a usable previous address into holes."""

import logging

from relayout.exceptions import RelayoutError
from relayout.layout.holes import HoleList
from relayout.layout.section import Section

logger = logging.getLogger(__name__)


def place_sections(to_place: list[Section], holes: HoleList, spacing: int) -> int:
    """Assign addresses to sections using tightest fit, largest section first.

    After a placement the hole keeps the rest behind the section and one spacing,
    unless the rest is not larger than the spacing; then the hole is dropped.

    :param to_place: Sections without an address.
    :param holes: Free intervals, updated in place.
    :param spacing: Minimal gap between sections.
    :raises RelayoutError: No hole is large enough (the holes have no end hole).
    :return: New base, the start of the unbounded hole at the top.
    """
    for section in sorted(to_place, key=lambda s: (-s.size, s.index)):
        hole = holes.best_fit(section.size)
        if hole is None:
            raise RelayoutError(f"No free space found for {section!r}")
        section.new_address = hole.start
        consumed = section.size + spacing
        if hole.usable_size is None or hole.usable_size - consumed > spacing:
            holes.shrink(hole.start, consumed)
        else:
            holes.remove(hole.start)
        logger.debug(f"Placed {section!r} at 0x{section.new_address:08X}")
    return holes.end_hole.start
