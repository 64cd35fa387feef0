#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Overlap detection and greedy resolution among keep candidates.

Two candidates conflict when their previous address ranges overlap. The
resolution evicts conflicting sections, smallest first, until the remaining
candidates are pairwise disjoint. Evicted sections are appended to the list of
sections to place.
"""

import logging
from typing import Iterable

from relayout.exceptions import RelayoutMalformedInputError, RelayoutUnresolvedOverlapError
from relayout.layout.context import LayoutContext
from relayout.layout.section import KeptSpacingPolicy, ResolutionStrategy, Section

logger = logging.getLogger(__name__)


def _by_old_address(sections: Iterable[Section]) -> list[Section]:
    return sorted(sections, key=lambda s: (s.old_address, s.index))


def detect_conflicts(sections: list[Section], gap: int = 0) -> int:
    """Record every pair of overlapping sections in their conflict sets.

    Section A placed before section B conflicts with it when
    ``A.old_address + A.size + gap > B.old_address``.

    :param sections: Sections with known previous addresses.
    :param gap: Minimal distance the sections must keep, 0 means only true overlaps.
    :return: Number of conflicting pairs.
    """
    ordered = _by_old_address(sections)
    pairs = 0
    for i, first in enumerate(ordered):
        for second in ordered[i + 1 :]:
            if first.old_end + gap <= second.old_address:
                break
            first.conflicts.add(second.index)
            second.conflicts.add(first.index)
            pairs += 1
            logger.debug(f"Conflict: {first!r} with {second!r}")
    return pairs


def _clear_conflicts(sections: Iterable[Section]) -> None:
    for section in sections:
        section.conflicts.clear()


def _eviction_pass(
    context: LayoutContext, candidates: list[Section], to_place: list[Section]
) -> list[Section]:
    """Run one greedy eviction pass over the conflicting candidates.

    Conflicting sections are visited once, by ascending size; on equal size the
    later listed section goes first. A visited section that still has a conflict
    is evicted and removed from the conflict sets of its partners.

    :param context: Run context owning the sections.
    :param candidates: Keep candidates with populated conflict sets.
    :param to_place: List of sections to place, evicted sections are appended.
    :return: Candidates that were not evicted.
    """
    queue = sorted(
        (section for section in candidates if section.conflicts),
        key=lambda s: (s.size, -s.index),
    )
    evicted: set[int] = set()
    for section in queue:
        if not section.conflicts:
            logger.debug(f"{section!r} has no conflicts left, stays in place")
            continue
        for partner_index in section.conflicts:
            context.sections[partner_index].conflicts.discard(section.index)
        section.conflicts.clear()
        evicted.add(section.index)
        to_place.append(section)
        logger.debug(f"Evicted {section!r}")
    return [section for section in candidates if section.index not in evicted]


def _check_kept_spacing(kept: list[Section], spacing: int) -> None:
    """Reject kept sections closer to each other than the spacing.

    :param kept: Pairwise disjoint kept sections.
    :param spacing: Required gap.
    :raises RelayoutMalformedInputError: Two neighbours are too close.
    """
    ordered = _by_old_address(kept)
    for first, second in zip(ordered, ordered[1:]):
        if first.old_end + spacing > second.old_address:
            raise RelayoutMalformedInputError(
                f"Sections '{first.name}' and '{second.name}' are closer than the spacing {spacing}"
            )


def resolve_overlaps(
    context: LayoutContext, kept_candidates: list[Section], to_place: list[Section]
) -> list[Section]:
    """Evict conflicting keep candidates until the rest is conflict free.

    The surviving candidates get their previous address assigned as the new one.

    :param context: Run context.
    :param kept_candidates: Sections that may stay at their previous address.
    :param to_place: Sections that need a new address, evicted sections are appended.
    :raises RelayoutUnresolvedOverlapError: A kept section still has a conflict after resolution.
    :raises RelayoutMalformedInputError: Kept sections violate spacing with REJECT policy.
    :return: Kept sections sorted by address.
    """
    gap = context.spacing if context.kept_spacing is KeptSpacingPolicy.EVICT else 0
    survivors = _by_old_address(kept_candidates)
    pairs = detect_conflicts(survivors, gap)
    passes = 0
    while pairs:
        passes += 1
        logger.debug(f"Resolution pass {passes}: {pairs} conflicting pairs")
        survivors = _eviction_pass(context, survivors, to_place)
        unresolved = [section for section in survivors if section.conflicts]
        if unresolved:
            _clear_conflicts(survivors)
            if context.strategy is ResolutionStrategy.SINGLE_PASS:
                raise RelayoutUnresolvedOverlapError(
                    "Unresolved overlap of sections: "
                    + ", ".join(section.name for section in unresolved)
                )
        if context.strategy is ResolutionStrategy.SINGLE_PASS:
            break
        pairs = detect_conflicts(survivors, gap)

    if context.kept_spacing is KeptSpacingPolicy.REJECT:
        _check_kept_spacing(survivors, context.spacing)

    for section in survivors:
        section.keep()
    logger.debug(
        f"Kept {len(survivors)} of {len(kept_candidates)} candidates after {passes} pass(es)"
    )
    return survivors
