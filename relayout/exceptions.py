#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""RELAYOUT exception classes.

This module defines the hierarchy of custom exception classes used throughout
the RELAYOUT library for consistent error handling and reporting.
"""

from typing import Optional

#######################################################################
# # Relayout Exceptions
#######################################################################


class RelayoutError(Exception):
    """Relayout Base Exception.

    Base exception class for all RELAYOUT related errors. It provides consistent
    error formatting across the library; every other RELAYOUT exception inherits
    from it.

    :cvar fmt: Default error message format template.
    """

    fmt = "RELAYOUT: {description}"

    def __init__(self, desc: Optional[str] = None) -> None:
        """Initialize the base RELAYOUT Exception.

        :param desc: Optional description of the exception.
        """
        super().__init__()
        self.description = desc

    def __str__(self) -> str:
        """Return string representation of the exception.

        :return: Formatted exception message as string.
        """
        return self.fmt.format(description=self.description or "Unknown Error")


class RelayoutKeyError(RelayoutError, KeyError):
    """RELAYOUT Key Error exception for missing or invalid keys."""


class RelayoutValueError(RelayoutError, ValueError):
    """RELAYOUT standard value error exception."""


class RelayoutMalformedInputError(RelayoutError, ValueError):
    """RELAYOUT exception for invalid layout descriptions.

    Raised for duplicate or empty section names, non-positive sizes, negative base
    or spacing, addresses that are neither a non-negative integer nor unknown, and
    text descriptions that cannot be parsed.
    """


class RelayoutUnresolvedOverlapError(RelayoutError, ValueError):
    """RELAYOUT exception for overlaps left after conflict resolution.

    Raised when at least one kept section still carries a conflict once the
    overlap resolution has finished. The run is aborted and no layout is produced.
    """


class RelayoutVerificationError(RelayoutError):
    """RELAYOUT verification error exception.

    Raised when a computed layout fails one of its structural checks.
    """
