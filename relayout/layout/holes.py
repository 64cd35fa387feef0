#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Free address intervals left between kept sections.

A hole describes where a section may start and how large it can be. The spacing
required before the next kept section is already subtracted from the usable
size. The last hole starts after the top kept section and is unbounded, so any
placement request can be satisfied.
"""

import bisect
import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from relayout.exceptions import RelayoutError
from relayout.layout.section import Section

logger = logging.getLogger(__name__)


@dataclass
class Hole:
    """Free interval available for placement."""

    # First usable address
    start: int
    # Usable size, None for the unbounded hole at the top of the address space
    usable_size: Optional[int] = None

    @property
    def unbounded(self) -> bool:
        """The hole has no upper limit."""
        return self.usable_size is None

    def fits(self, size: int) -> bool:
        """Check whether a section of given size fits into the hole.

        :param size: Size of the section.
        :return: True if the usable size is large enough.
        """
        return self.usable_size is None or self.usable_size >= size

    def __str__(self) -> str:
        size = "unbounded" if self.usable_size is None else f"{self.usable_size}"
        return f"Hole at 0x{self.start:08X} ({size})"


class HoleList:
    """Address ordered collection of holes."""

    def __init__(self) -> None:
        """Initialize empty collection."""
        self._holes: list[Hole] = []

    def _position(self, start: int) -> int:
        """Get position of the hole with requested start.

        :param start: Start address of the hole.
        :raises RelayoutError: No hole starts at the address.
        :return: Index into the internal list.
        """
        starts = [hole.start for hole in self._holes]
        pos = bisect.bisect_left(starts, start)
        if pos == len(starts) or starts[pos] != start:
            raise RelayoutError(f"No hole starts at 0x{start:08X}")
        return pos

    def add(self, hole: Hole) -> None:
        """Insert a hole keeping the address order.

        :param hole: Hole to add.
        :raises RelayoutError: A hole with the same start already exists.
        """
        starts = [h.start for h in self._holes]
        pos = bisect.bisect_left(starts, hole.start)
        if pos < len(starts) and starts[pos] == hole.start:
            raise RelayoutError(f"Hole at 0x{hole.start:08X} already exists")
        self._holes.insert(pos, hole)

    def find_all(self, min_size: int) -> list[Hole]:
        """Get all holes with usable size at least the requested one.

        :param min_size: Required usable size.
        :return: Matching holes in address order.
        """
        return [hole for hole in self._holes if hole.fits(min_size)]

    def best_fit(self, size: int) -> Optional[Hole]:
        """Get the tightest hole for a section of given size.

        The smallest sufficient hole wins, the lower address on equal size.

        :param size: Size of the section.
        :return: Selected hole or None if nothing fits.
        """
        candidates = self.find_all(size)
        if not candidates:
            return None
        bounded = [hole for hole in candidates if not hole.unbounded]
        if not bounded:
            return candidates[0]
        return min(bounded, key=lambda h: (h.usable_size, h.start))

    def remove(self, start: int) -> Hole:
        """Remove the hole starting at the address.

        :param start: Start address of the hole.
        :return: The removed hole.
        """
        return self._holes.pop(self._position(start))

    def shrink(self, start: int, amount: int) -> Hole:
        """Move the start of a hole up, reducing its usable size.

        :param start: Current start address of the hole.
        :param amount: Number of address units to consume from the bottom.
        :raises RelayoutError: The hole is smaller than the amount.
        :return: The updated hole.
        """
        hole = self._holes[self._position(start)]
        if hole.usable_size is not None:
            if amount > hole.usable_size:
                raise RelayoutError(f"Can't shrink {hole} by {amount}")
            hole.usable_size -= amount
        hole.start += amount
        return hole

    @property
    def end_hole(self) -> Hole:
        """The unbounded hole at the top of the address space."""
        if not self._holes or not self._holes[-1].unbounded:
            raise RelayoutError("The list of holes has no unbounded end hole")
        return self._holes[-1]

    def __len__(self) -> int:
        return len(self._holes)

    def __iter__(self) -> Iterator[Hole]:
        return iter(self._holes)

    def __str__(self) -> str:
        return "\n".join(str(hole) for hole in self._holes)


def find_holes(kept: list[Section], base: int, spacing: int) -> HoleList:
    """Compute free intervals between kept sections.

    The walk starts at the base. A gap wider than the spacing before the next kept
    section becomes a hole whose usable size leaves the spacing free in front of
    that section. The next gap starts one spacing after the end of the section.

    :param kept: Kept sections with assigned addresses.
    :param base: Lowest permitted address.
    :param spacing: Minimal gap between sections.
    :return: Collection of holes including the unbounded end hole.
    """
    holes = HoleList()
    cursor = base
    for section in sorted(kept, key=lambda s: (s.new_address, s.index)):
        gap = section.assigned_address - cursor
        if gap > spacing:
            holes.add(Hole(start=cursor, usable_size=gap - spacing))
        cursor = max(cursor, section.new_end + spacing)
    holes.add(Hole(start=cursor))
    logger.debug(f"Found {len(holes)} hole(s) for {len(kept)} kept section(s)")
    return holes
