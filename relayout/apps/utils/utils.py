#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Relayout application utilities.

This module provides the application error, the decorator that turns exceptions
into exit codes and console helpers shared by the command line tools.
"""

import logging
import sys
from functools import wraps
from typing import Any, Callable, Optional

import click

from relayout import RELAYOUT_DEBUG_LOG_FILE, RELAYOUT_DEBUG_LOGGING_DISABLED
from relayout.exceptions import RelayoutError
from relayout.utils.verifier import Verifier, VerifierResult

logger = logging.getLogger(__name__)


class RelayoutAppError(RelayoutError):
    """Relayout application error exception for CLI tools.

    The error is reported on the command line without a traceback and its error
    code is passed to the operating system.

    :cvar fmt: Format string template for error message display.
    """

    fmt = "{description}"

    def __init__(self, desc: Optional[str] = None, error_code: int = 1) -> None:
        """Initialize the AppError.

        :param desc: Description to print out on command line, defaults to None
        :param error_code: Error code passed to OS, defaults to 1
        """
        super().__init__(desc)
        self.description = desc
        self.error_code = error_code


def catch_relayout_error(function: Callable) -> Callable:
    """Catch and handle RelayoutError and other exceptions.

    RelayoutAppError prints its message and exits with its error code (1 by
    default). RelayoutError and AssertionError exit with 2, any other exception
    (including KeyboardInterrupt) exits with 3. Tracebacks go to the debug log.

    :param function: The function to be decorated.
    :return: The decorated function.
    """

    @wraps(function)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            retval = function(*args, **kwargs)
            return retval
        except RelayoutAppError as app_exc:
            if app_exc.description:
                click.echo(f"{app_exc.__class__.__name__}: {app_exc}", err=True)
            if 0 < app_exc.error_code < 256:
                sys.exit(app_exc.error_code)
            sys.exit(1)
        except (AssertionError, RelayoutError) as relayout_exc:
            click.echo(f"{relayout_exc.__class__.__name__}: {relayout_exc}", err=True)
            logger.debug(str(relayout_exc), exc_info=True)
            if not RELAYOUT_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {RELAYOUT_DEBUG_LOG_FILE} for more info",
                    fg="yellow",
                    err=True,
                )
            sys.exit(2)
        except (Exception, KeyboardInterrupt) as base_exc:  # pylint: disable=broad-except
            click.echo(f"GENERAL ERROR: {type(base_exc).__name__}: {base_exc}", err=True)
            logger.debug(str(base_exc), exc_info=True)
            if not RELAYOUT_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {RELAYOUT_DEBUG_LOG_FILE} for more info.",
                    fg="yellow",
                    err=True,
                )
            sys.exit(3)

    return wrapper


def print_verifier_to_console(v: Verifier, problems: bool = False) -> None:
    """Print verifier results to console.

    :param v: The Verifier object containing the results to print.
    :param problems: If True, only print WARNING and ERROR results.
    """
    results = None
    if problems:
        results = [VerifierResult.WARNING, VerifierResult.ERROR]
    click.echo(v.draw(results))

    click.echo("Summary table of verifier results:\n" + v.get_summary_table() + "\n")
    click.echo("Overall  result: " + VerifierResult.draw(v.result))
