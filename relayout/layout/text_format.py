#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Plain text layout description and result format.

The description is a whitespace separated token stream (``#`` starts a comment,
names may be quoted)::

    <count> <base> <spacing>
    <name> <old address | -> <size>
    ...

Numbers accept decimal, ``0x``, ``0o`` and ``0b`` notation. The result lists
``<name> <address>`` lines sorted by address and ends with a record with an
empty name holding the new base.
"""

import logging
import shlex
from typing import Iterable, Optional

from relayout.exceptions import RelayoutError, RelayoutMalformedInputError
from relayout.layout.context import LayoutContext
from relayout.layout.section import KeptSpacingPolicy, ResolutionStrategy
from relayout.utils.misc import value_to_int

logger = logging.getLogger(__name__)

UNKNOWN_TOKENS = ("-", "?", "unknown", "none")
HEADER_LENGTH = 3
RECORD_LENGTH = 3


def _parse_int(token: str, what: str) -> int:
    try:
        return value_to_int(token)
    except RelayoutError as exc:
        raise RelayoutMalformedInputError(f"Invalid {what}: '{token}'") from exc


def _parse_address(token: str, name: str) -> Optional[int]:
    if token.lower() in UNKNOWN_TOKENS:
        return None
    return _parse_int(token, f"address of section '{name}'")


def tokenize(text: str) -> list[str]:
    """Split the description into tokens.

    :param text: Description text.
    :raises RelayoutMalformedInputError: Unbalanced quotes.
    :return: List of tokens without comments.
    """
    try:
        return shlex.split(text, comments=True)
    except ValueError as exc:
        raise RelayoutMalformedInputError(f"Can't tokenize layout description: {exc}") from exc


def parse_description(
    text: str,
    strategy: ResolutionStrategy = ResolutionStrategy.SINGLE_PASS,
    kept_spacing: KeptSpacingPolicy = KeptSpacingPolicy.IGNORE,
) -> LayoutContext:
    """Parse the text description into a run context.

    :param text: Description text.
    :param strategy: Overlap resolution strategy of the run.
    :param kept_spacing: Handling of kept sections closer than spacing.
    :raises RelayoutMalformedInputError: The description is not valid.
    :return: Populated run context.
    """
    tokens = tokenize(text)
    if len(tokens) < HEADER_LENGTH:
        raise RelayoutMalformedInputError(
            "The layout description must start with '<count> <base> <spacing>'"
        )
    count = _parse_int(tokens[0], "section count")
    base = _parse_int(tokens[1], "base")
    spacing = _parse_int(tokens[2], "spacing")
    body = tokens[HEADER_LENGTH:]
    if len(body) != count * RECORD_LENGTH:
        raise RelayoutMalformedInputError(
            f"Expected {count} section record(s) of {RECORD_LENGTH} fields, "
            f"got {len(body)} field(s)"
        )

    ctx = LayoutContext(base=base, spacing=spacing, strategy=strategy, kept_spacing=kept_spacing)
    for pos in range(0, len(body), RECORD_LENGTH):
        name, address, size = body[pos : pos + RECORD_LENGTH]
        ctx.add_section(
            name=name,
            old_address=_parse_address(address, name),
            size=_parse_int(size, f"size of section '{name}'"),
        )
    logger.debug(f"Parsed layout description: {ctx!r}")
    return ctx


def format_records(records: Iterable[tuple[str, int]]) -> str:
    """Format result records, one ``name address`` line each.

    :param records: Pairs of section name and address, including the base record.
    :return: Text with trailing new line.
    """
    return "".join(f"{shlex.quote(name)} 0x{address:08X}\n" for name, address in records)


def format_description(
    base: int, spacing: int, records: Iterable[tuple[str, Optional[int], int]]
) -> str:
    """Format a layout description that can be parsed again.

    :param base: Lowest permitted address.
    :param spacing: Minimal gap between sections.
    :param records: Triplets of name, address (None if unknown) and size.
    :return: Description text.
    """
    records = list(records)
    lines = [f"{len(records)} 0x{base:08X} {spacing}"]
    for name, address, size in records:
        addr = UNKNOWN_TOKENS[0] if address is None else f"0x{address:08X}"
        lines.append(f"{shlex.quote(name)} {addr} {size}")
    return "\n".join(lines) + "\n"
