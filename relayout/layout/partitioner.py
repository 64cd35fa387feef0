#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Split sections into keep-in-place candidates and sections to place."""

import logging

from relayout.layout.context import LayoutContext
from relayout.layout.section import Section

logger = logging.getLogger(__name__)


def partition(context: LayoutContext) -> tuple[list[Section], list[Section]]:
    """Partition the sections of the run by their previous address.

    Sections with a known previous address at or above the base are candidates to
    stay in place, all others need a fresh address. Both lists keep input order.

    :param context: Run context.
    :return: Tuple of keep candidates and sections to place.
    """
    kept_candidates: list[Section] = []
    to_place: list[Section] = []
    for section in context.sections:
        if section.old_address is not None and section.old_address >= context.base:
            kept_candidates.append(section)
        else:
            to_place.append(section)
    logger.debug(
        f"Partitioned {len(context)} sections: {len(kept_candidates)} keep candidates, "
        f"{len(to_place)} to place"
    )
    return kept_candidates, to_place
