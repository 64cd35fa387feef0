#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Run context of one layout computation.

The context owns every Section of the run together with the run parameters. All
stages of the computation receive it explicitly, nothing survives between runs.
"""

import logging
from typing import Any, Iterable, Iterator, Optional, Union

from typing_extensions import Self

from relayout.exceptions import RelayoutError, RelayoutMalformedInputError
from relayout.layout.section import KeptSpacingPolicy, ResolutionStrategy, Section
from relayout.utils.config import Config
from relayout.utils.schema_validator import get_schema_file

logger = logging.getLogger(__name__)

# One input record: name, old address (None if unknown), size
SectionRecord = tuple[str, Optional[int], int]


class LayoutContext:
    """Sections and parameters of a single layout run."""

    def __init__(
        self,
        base: int = 0,
        spacing: int = 0,
        strategy: ResolutionStrategy = ResolutionStrategy.SINGLE_PASS,
        kept_spacing: KeptSpacingPolicy = KeptSpacingPolicy.IGNORE,
    ) -> None:
        """Initialize an empty run context.

        :param base: Lowest permitted address.
        :param spacing: Minimal gap between placed sections.
        :param strategy: Overlap resolution strategy.
        :param kept_spacing: Handling of kept sections closer than spacing.
        :raises RelayoutMalformedInputError: Negative or non-integer base or spacing.
        """
        for param_name, value in (("base", base), ("spacing", spacing)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise RelayoutMalformedInputError(f"The {param_name} must be an integer: {value!r}")
            if value < 0:
                raise RelayoutMalformedInputError(f"The {param_name} can't be negative: {value}")
        self.base = base
        self.spacing = spacing
        self.strategy = ResolutionStrategy(strategy)
        self.kept_spacing = KeptSpacingPolicy(kept_spacing)
        self.sections: list[Section] = []
        self._names: dict[str, int] = {}

    def add_section(self, name: str, old_address: Optional[int], size: int) -> Section:
        """Validate the input record and add a new section.

        :param name: Unique non-empty section name.
        :param old_address: Previous address or None for unknown.
        :param size: Positive size.
        :raises RelayoutMalformedInputError: The record is not valid.
        :return: Created section.
        """
        if not isinstance(name, str) or not name:
            raise RelayoutMalformedInputError(f"Invalid section name: {name!r}")
        if name in self._names:
            raise RelayoutMalformedInputError(f"Duplicate section name: '{name}'")
        if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
            raise RelayoutMalformedInputError(f"Section '{name}' has invalid size: {size!r}")
        if old_address is not None and (
            not isinstance(old_address, int) or isinstance(old_address, bool) or old_address < 0
        ):
            raise RelayoutMalformedInputError(
                f"Section '{name}' has invalid address: {old_address!r}"
            )
        section = Section(index=len(self.sections), name=name, old_address=old_address, size=size)
        self._names[name] = section.index
        self.sections.append(section)
        return section

    @classmethod
    def from_records(
        cls,
        records: Iterable[SectionRecord],
        base: int = 0,
        spacing: int = 0,
        strategy: ResolutionStrategy = ResolutionStrategy.SINGLE_PASS,
        kept_spacing: KeptSpacingPolicy = KeptSpacingPolicy.IGNORE,
    ) -> Self:
        """Create the context from plain input records.

        :param records: Iterable of (name, old_address, size) tuples.
        :param base: Lowest permitted address.
        :param spacing: Minimal gap between placed sections.
        :param strategy: Overlap resolution strategy.
        :param kept_spacing: Handling of kept sections closer than spacing.
        :return: Populated run context.
        """
        ctx = cls(base=base, spacing=spacing, strategy=strategy, kept_spacing=kept_spacing)
        for name, old_address, size in records:
            ctx.add_section(name, old_address, size)
        return ctx

    @classmethod
    def get_validation_schemas(cls) -> list[dict[str, Any]]:
        """Get list of validation schemas for the layout configuration."""
        return [get_schema_file("relayout")]

    @classmethod
    def load_from_config(cls, config: Config) -> Self:
        """Create the context from a YAML/JSON configuration.

        :param config: Layout configuration.
        :raises RelayoutMalformedInputError: The configuration is not valid.
        :return: Populated run context.
        """
        try:
            config.check(cls.get_validation_schemas(), check_unknown_props=True)
        except RelayoutError as exc:
            raise RelayoutMalformedInputError(exc.description) from exc
        ctx = cls(
            base=config.get_int("base", 0),
            spacing=config.get_int("spacing", 0),
            strategy=ResolutionStrategy(
                config.get_str("resolution", ResolutionStrategy.SINGLE_PASS.value)
            ),
            kept_spacing=KeptSpacingPolicy(
                config.get_str("kept_spacing", KeptSpacingPolicy.IGNORE.value)
            ),
        )
        for section_cfg in config.get_list_of_configs("sections", []):
            address = section_cfg.get("address")
            ctx.add_section(
                name=section_cfg.get_str("name"),
                old_address=None if address is None else section_cfg.get_int("address"),
                size=section_cfg.get_int("size"),
            )
        logger.debug(f"Loaded {len(ctx)} sections from configuration {config.config_name}")
        return ctx

    def get_section(self, name_or_index: Union[str, int]) -> Section:
        """Get section by its name or index.

        :param name_or_index: Section name or arena index.
        :raises RelayoutError: No such section.
        :return: The section.
        """
        if isinstance(name_or_index, str):
            if name_or_index not in self._names:
                raise RelayoutError(f"Unknown section '{name_or_index}'")
            return self.sections[self._names[name_or_index]]
        return self.sections[name_or_index]

    def __len__(self) -> int:
        return len(self.sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def __repr__(self) -> str:
        return (
            f"<LayoutContext {len(self)} sections, base=0x{self.base:08X}, "
            f"spacing={self.spacing}, {self.strategy.value}, kept spacing {self.kept_spacing.value}>"
        )
