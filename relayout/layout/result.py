#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Result of a layout computation.

The result holds all sections ordered by their new address together with the
new base, the top of the used address space. It can be exported as text, JSON
or YAML, drawn as an address map and verified against the layout invariants.
"""

import json
import os
import sys
from typing import Any, Iterator

import colorama
import yaml

from relayout import RELAYOUT_YML_INDENT
from relayout.layout.section import Section
from relayout.layout.text_format import format_description, format_records
from relayout.utils.misc import format_value, size_fmt
from relayout.utils.verifier import Verifier, VerifierResult

# Name of the terminal record that carries the new base
BASE_RECORD_NAME = ""


class LayoutResult:
    """Sections with assigned addresses and the new top of the address space."""

    MINIMAL_DRAW_WIDTH = 40

    def __init__(
        self,
        kept: list[Section],
        placed: list[Section],
        base: int,
        initial_base: int,
        spacing: int,
    ) -> None:
        """Merge kept and placed sections into one address ordered layout.

        :param kept: Sections that stayed at their previous address.
        :param placed: Sections placed into holes.
        :param base: New base, the top of the used address space.
        :param initial_base: Base the run started with.
        :param spacing: Spacing used by the run.
        """
        self.sections = sorted(kept + placed, key=lambda s: (s.new_address, s.index))
        self.base = base
        self.initial_base = initial_base
        self.spacing = spacing

    @property
    def kept_count(self) -> int:
        """Number of sections that stayed at their previous address."""
        return sum(1 for section in self.sections if section.kept)

    @property
    def relocated_count(self) -> int:
        """Number of sections that got a new address."""
        return len(self.sections) - self.kept_count

    def records(self) -> Iterator[tuple[str, int]]:
        """Get the (name, address) pairs terminated by the base record.

        :return: Iterator over records in address order, last one has an empty name.
        """
        for section in self.sections:
            yield section.name, section.assigned_address
        yield BASE_RECORD_NAME, self.base

    def export_text(self) -> str:
        """Export the result in the plain text format."""
        return format_records(self.records())

    def export_description(self) -> str:
        """Export the new layout as a description for a next run.

        All addresses are known, base and spacing are the ones of this run.
        """
        return format_description(
            self.initial_base,
            self.spacing,
            ((section.name, section.assigned_address, section.size) for section in self.sections),
        )

    def export_dict(self) -> dict[str, Any]:
        """Export the result as a dictionary."""
        return {
            "base": self.base,
            "spacing": self.spacing,
            "sections": [
                {
                    "name": section.name,
                    "address": section.new_address,
                    "size": section.size,
                    "old_address": section.old_address,
                    "kept": section.kept,
                }
                for section in self.sections
            ],
        }

    def export_json(self) -> str:
        """Export the result in JSON format."""
        return json.dumps(self.export_dict(), indent=RELAYOUT_YML_INDENT) + "\n"

    def export_yaml(self) -> str:
        """Export the result in YAML format."""
        return yaml.safe_dump(
            self.export_dict(),
            indent=RELAYOUT_YML_INDENT,
            sort_keys=False,
            default_flow_style=False,
        )

    def __len__(self) -> int:
        return len(self.sections)

    def __repr__(self) -> str:
        return (
            f"<LayoutResult {len(self)} sections, {self.relocated_count} relocated, "
            f"base=0x{self.base:08X}>"
        )

    def __str__(self) -> str:
        ret = f"Sections:  {len(self)}\n"
        ret += f"Kept:      {self.kept_count}\n"
        ret += f"Relocated: {self.relocated_count}\n"
        ret += f"New base:  {format_value(self.base, 32)}\n"
        return ret

    def verify(self) -> Verifier:
        """Verify the structural invariants of the layout.

        :return: Verifier with the results of all checks.
        """
        ver = Verifier("Layout", description=repr(self))
        ver.add_record("Sections", VerifierResult.SUCCEEDED, len(self), important=False)

        names = [section.name for section in self.sections]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        ver.add_record(
            "Unique names", not duplicates, ", ".join(duplicates) if duplicates else None
        )

        below = [s.name for s in self.sections if s.assigned_address < self.initial_base]
        ver.add_record(
            "Floor",
            not below,
            f"below 0x{self.initial_base:08X}: {', '.join(below)}" if below else None,
        )

        overlaps: list[str] = []
        too_close: list[str] = []
        for first, second in zip(self.sections, self.sections[1:]):
            if first.new_end > second.assigned_address:
                overlaps.append(f"{first.name}/{second.name}")
            elif not (first.kept and second.kept) and (
                first.new_end + self.spacing > second.assigned_address
            ):
                too_close.append(f"{first.name}/{second.name}")
        ver.add_record("No overlap", not overlaps, ", ".join(overlaps) if overlaps else None)
        ver.add_record(
            "Spacing of placed sections",
            not too_close,
            ", ".join(too_close) if too_close else None,
        )

        moved = [s.name for s in self.sections if s.kept and s.new_address != s.old_address]
        ver.add_record("Kept sections stable", not moved, ", ".join(moved) if moved else None)

        top = max((section.new_end for section in self.sections), default=self.initial_base)
        ver.add_record(
            "New base above sections",
            self.base >= top,
            format_value(self.base, 32),
        )
        return ver

    def draw(self, no_color: bool = False, use_unicode: bool = True) -> str:
        """Draw the layout as an address map.

        :param no_color: Disable adding colors into output.
        :param use_unicode: Use Unicode box drawing characters instead of ASCII.
        :return: Text art representation of the layout.
        """
        use_unicode &= os.name != "nt" or (sys.stdout.isatty() and sys.stderr.isatty())
        if use_unicode:
            top_left, top_right, bottom_left, bottom_right = "┌", "┐", "└", "┘"
            horizontal, vertical = "─", "│"
        else:
            top_left = top_right = bottom_left = bottom_right = "+"
            horizontal, vertical = "=", "|"

        def _line(text: str, color: str) -> str:
            spaces = width - len(text) - 2
            padding_l = spaces // 2
            return (
                f"{color}{vertical}{' ' * padding_l}{text}{' ' * (spaces - padding_l)}"
                f"{vertical}{reset}\n"
            )

        def _state(section: Section) -> str:
            if section.kept:
                return "kept"
            if section.old_address is None:
                return "new"
            return f"moved from {format_value(section.old_address, 32)}"

        reset = "" if no_color else colorama.Fore.RESET
        header_len = len(f"{top_left}{horizontal * 2}0x0000_0000{horizontal}  ") + 1
        width = max(
            [self.MINIMAL_DRAW_WIDTH]
            + [header_len + len(section.name) for section in self.sections]
            + [len(_state(section)) + 4 for section in self.sections]
        )

        block = "\n"
        cursor = self.initial_base
        for section in self.sections:
            address = section.assigned_address
            if no_color:
                color = ""
            else:
                color = colorama.Fore.GREEN if section.kept else colorama.Fore.YELLOW
            if address > cursor:
                block += _line(f"Gap: {size_fmt(address - cursor)}", "")
            cursor = section.new_end
            # - Title line
            header = f"{top_left}{horizontal * 2}{format_value(address, 32)}{horizontal}"
            header += f" {section.name} "
            block += color + f"{header}{horizontal * (width - len(header) - 1)}{top_right}"
            block += reset + "\n"
            block += _line(f"Size: {size_fmt(section.size)}", color)
            block += _line(_state(section), color)
            # - Closing line
            footer = f"{bottom_left}{horizontal * 2}{format_value(section.new_end - 1, 32)}"
            footer += horizontal * 2
            block += color + f"{footer}{horizontal * (width - len(footer) - 1)}{bottom_right}"
            block += reset + "\n"
        block += f"New base: {format_value(self.base, 32)}\n"
        return block
