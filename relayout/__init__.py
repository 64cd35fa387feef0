#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""RELAYOUT - minimal-delta memory layout revision for image sections.

The library computes a new memory layout for named, sized sections that may
already occupy known addresses. Sections that can stay where they were are
kept in place; the remaining ones are fitted into free holes so that diffing
the old and the new image produces as small a patch as possible.

MULTIPLE INTERFACES:
    - Pure Python library (see relayout.layout)
    - nxprelayout command line tool
"""

import os
from typing import Optional, Union

from packaging.version import Version, parse
from platformdirs import PlatformDirs


def get_relayout_version() -> Version:
    """Get RELAYOUT version information.

    :return: Parsed version object containing RELAYOUT version information.
    """
    from .__version__ import __version__ as relayout_version

    return parse(relayout_version)


def value_to_bool(value: Optional[Union[bool, int, str]]) -> bool:
    """Convert value to boolean from various input formats.

    Supports conversion from string representations like "True", "true", "T", "1"
    and standard Python truthy/falsy values for other types.

    :param value: Value to convert to boolean (string, int, bool, or None).
    :return: Boolean representation of the input value.
    """
    if isinstance(value, str):
        return value in ("True", "true", "T", "1")
    return bool(value)


version = get_relayout_version()

__author__ = "NXP"
__license__ = "BSD-3-Clause"
__version__ = str(version)
__release__ = "beta"


# The RELAYOUT behavior settings
RELAYOUT_VERSION_BASE = version.base_version
RELAYOUT_DATA_FOLDER = os.environ.get("RELAYOUT_DATA_FOLDER") or os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "data"
)
RELAYOUT_PLATFORM_DIRS = PlatformDirs(
    appauthor="nxp",
    appname="relayout",
    version=RELAYOUT_VERSION_BASE,
)

RELAYOUT_DEBUG_LOGGING_DISABLED = value_to_bool(os.environ.get("RELAYOUT_DEBUG_LOGGING_DISABLED"))
RELAYOUT_DEBUG_LOG_FILE = os.environ.get(
    "RELAYOUT_DEBUG_LOG_FILE", os.path.join(RELAYOUT_PLATFORM_DIRS.user_log_dir, "debug.log")
)
RELAYOUT_SCHEMA_STRICT = value_to_bool(os.environ.get("RELAYOUT_SCHEMA_STRICT"))

RELAYOUT_YML_INDENT = 2
