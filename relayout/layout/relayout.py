#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Layout computation pipeline.

Partition, resolve overlaps, find holes, place the rest and project the result.
Every stage works on the explicit run context; a context is consumed by one run.
"""

import logging

from relayout.exceptions import RelayoutError
from relayout.layout.context import LayoutContext
from relayout.layout.holes import find_holes
from relayout.layout.overlap import resolve_overlaps
from relayout.layout.partitioner import partition
from relayout.layout.placer import place_sections
from relayout.layout.result import LayoutResult

logger = logging.getLogger(__name__)


def compute_layout(context: LayoutContext) -> LayoutResult:
    """Compute the new layout of all sections in the context.

    :param context: Run context with sections and parameters.
    :raises RelayoutError: The context was already used by another run.
    :raises RelayoutUnresolvedOverlapError: Overlaps of kept sections remained.
    :raises RelayoutMalformedInputError: Kept sections violate spacing with REJECT policy.
    :return: Sections with new addresses and the new base.
    """
    if any(section.is_assigned for section in context.sections):
        raise RelayoutError("The layout context has been already computed")
    logger.debug(f"Computing layout: {context!r}")

    kept_candidates, to_place = partition(context)
    kept = resolve_overlaps(context, kept_candidates, to_place)
    holes = find_holes(kept, context.base, context.spacing)
    new_base = place_sections(to_place, holes, context.spacing)

    result = LayoutResult(
        kept=kept,
        placed=to_place,
        base=new_base,
        initial_base=context.base,
        spacing=context.spacing,
    )
    logger.info(
        f"Layout of {len(result)} sections: {result.kept_count} kept, "
        f"{result.relocated_count} relocated, new base 0x{result.base:08X}"
    )
    return result
