#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Section record and run options of the layout computation."""

from enum import Enum
from typing import Optional

from relayout.exceptions import RelayoutError

# Old address of a section that has never been placed
UNKNOWN_ADDRESS: Optional[int] = None


class ResolutionStrategy(str, Enum):
    """Overlap resolution strategy.

    :cvar SINGLE_PASS: One greedy eviction pass, remaining conflicts are fatal.
    :cvar FIXED_POINT: Repeat detection and eviction until no conflict remains.
    """

    SINGLE_PASS = "single-pass"
    FIXED_POINT = "fixed-point"

    @classmethod
    def values(cls) -> list[str]:
        """Get enumeration values."""
        return [mem.value for mem in cls.__members__.values()]


class KeptSpacingPolicy(str, Enum):
    """Handling of kept sections closer to each other than the spacing.

    :cvar IGNORE: Accept the gaps from the input as they are.
    :cvar EVICT: Treat a too narrow gap as a conflict and relocate one of the sections.
    :cvar REJECT: Refuse the input.
    """

    IGNORE = "ignore"
    EVICT = "evict"
    REJECT = "reject"

    @classmethod
    def values(cls) -> list[str]:
        """Get enumeration values."""
        return [mem.value for mem in cls.__members__.values()]


class Section:
    """Named, sized unit that needs a non-overlapping address range.

    The section is identified by its index in the run context; conflicts are kept
    as a set of indices of other sections of the same context.
    """

    def __init__(self, index: int, name: str, old_address: Optional[int], size: int) -> None:
        """Initialize the section.

        :param index: Position of the section in the input.
        :param name: Unique section name.
        :param old_address: Previous address, None if unknown.
        :param size: Size in address units.
        """
        self.index = index
        self.name = name
        self.old_address = old_address
        self._size = size
        self._new_address: Optional[int] = None
        self.kept = False
        self.conflicts: set[int] = set()

    @property
    def size(self) -> int:
        """Size of the section in address units."""
        return self._size

    @property
    def new_address(self) -> Optional[int]:
        """Address assigned by the layout computation, None until assigned."""
        return self._new_address

    @new_address.setter
    def new_address(self, value: int) -> None:
        if self._new_address is not None:
            raise RelayoutError(
                f"Address of section '{self.name}' already assigned to 0x{self._new_address:08X}"
            )
        self._new_address = value

    @property
    def is_known(self) -> bool:
        """The section has a previous address."""
        return self.old_address is not None

    @property
    def is_assigned(self) -> bool:
        """The section already has its new address."""
        return self._new_address is not None

    @property
    def old_end(self) -> int:
        """First address after the previous range."""
        if self.old_address is None:
            raise RelayoutError(f"Section '{self.name}' has no previous address")
        return self.old_address + self.size

    @property
    def assigned_address(self) -> int:
        """Assigned address, raises when the section has none yet."""
        if self._new_address is None:
            raise RelayoutError(f"Section '{self.name}' has no assigned address")
        return self._new_address

    @property
    def new_end(self) -> int:
        """First address after the assigned range."""
        return self.assigned_address + self.size

    @property
    def relocated(self) -> bool:
        """The assigned address differs from the previous one."""
        return self._new_address != self.old_address

    def keep(self) -> None:
        """Assign the previous address as the new one."""
        if self.old_address is None:
            raise RelayoutError(f"Section '{self.name}' with unknown address can't be kept")
        self.new_address = self.old_address
        self.kept = True

    def __repr__(self) -> str:
        old = "unknown" if self.old_address is None else f"0x{self.old_address:08X}"
        return f"<Section {self.name} ({self.size}) at {old}>"
