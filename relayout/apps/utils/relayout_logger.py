#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Relayout logging utilities with colored console output.

The console handler shows messages from the requested level up, the optional
rotating debug log file captures everything from the debug level.
"""

import logging
import logging.handlers
import os
import platform
import re
import sys
from datetime import datetime
from typing import Optional, TextIO

import colorama

from relayout import RELAYOUT_DEBUG_LOG_FILE, RELAYOUT_DEBUG_LOGGING_DISABLED, __version__

colorama.just_fix_windows_console()

LOGGER_NAME = "relayout"


class ColoredFormatter(logging.Formatter):
    """Relayout colored logging formatter.

    :cvar COLORED_FORMATS: Color-coded format strings for each logging level.
    :cvar FORMATS: Plain text format strings for each logging level.
    """

    FORMAT = logging.BASIC_FORMAT
    FORMAT_DEBUG = FORMAT + " (%(relativeCreated)dms since start, %(filename)s:%(lineno)d)"

    COLORED_FORMATS = {
        logging.DEBUG: colorama.Fore.BLUE + FORMAT_DEBUG + colorama.Fore.RESET,
        logging.INFO: colorama.Fore.WHITE
        + colorama.Style.BRIGHT
        + FORMAT
        + colorama.Fore.RESET
        + colorama.Style.RESET_ALL,
        logging.WARNING: colorama.Fore.YELLOW + FORMAT_DEBUG + colorama.Fore.RESET,
        logging.ERROR: colorama.Fore.RED + FORMAT_DEBUG + colorama.Fore.RESET,
        logging.CRITICAL: colorama.Fore.RED
        + colorama.Style.BRIGHT
        + FORMAT_DEBUG
        + colorama.Fore.RESET
        + colorama.Style.RESET_ALL,
    }
    FORMATS = {
        logging.DEBUG: FORMAT_DEBUG,
        logging.INFO: FORMAT,
        logging.WARNING: FORMAT_DEBUG,
        logging.ERROR: FORMAT_DEBUG,
        logging.CRITICAL: FORMAT_DEBUG,
    }

    def __init__(self, colored: bool = True) -> None:
        """Initialize the formatter.

        :param colored: Use colored formats.
        """
        super().__init__()
        self.colored = colored
        self.formats = self.COLORED_FORMATS if colored else self.FORMATS

    def format(self, record: logging.LogRecord) -> str:
        """Format the record with the format of its level.

        :param record: Input logging record to print.
        :return: Formatted logging string.
        """
        formatter = logging.Formatter(self.formats.get(record.levelno))
        if not self.colored and isinstance(record.msg, str):
            record.msg = re.sub(r"\x1b\[\d{1,3}m", "", record.msg)
        return formatter.format(record)


def _install_debug_logger(target_logger: logging.Logger) -> None:
    """Add rotating debug log file handler to the logger.

    :param target_logger: Logger to extend.
    """
    for handler in target_logger.handlers:
        if (
            isinstance(handler, logging.handlers.RotatingFileHandler)
            and handler.baseFilename == RELAYOUT_DEBUG_LOG_FILE
        ):
            return
    os.makedirs(os.path.dirname(RELAYOUT_DEBUG_LOG_FILE), exist_ok=True)
    debug_handler = logging.handlers.RotatingFileHandler(
        RELAYOUT_DEBUG_LOG_FILE, mode="a", maxBytes=1_000_000, backupCount=5, encoding="utf-8"
    )
    debug_handler.setFormatter(ColoredFormatter(colored=False))
    debug_handler.setLevel(logging.DEBUG)
    target_logger.addHandler(debug_handler)

    starter = f"* RELAYOUT DEBUG LOGGING STARTED {datetime.now().strftime('%Y-%m-%d %H:%M:%S')} *"
    padding = len(starter) - 2
    target_logger.debug("*" * len(starter))
    target_logger.debug(starter)
    target_logger.debug(f"* Relayout version: {__version__}".ljust(padding) + " *")
    target_logger.debug(f"* Python version: {sys.version.split()[0]}".ljust(padding) + " *")
    target_logger.debug(f"* OS version: {platform.platform()}".ljust(padding) + " *")
    target_logger.debug(f"* Last command: {sys.argv}".ljust(padding) + " *")
    target_logger.debug("*" * len(starter))


def install(
    level: Optional[int] = None,
    stream: TextIO = sys.stderr,
    colored: Optional[bool] = None,
    logger: Optional[logging.Logger] = None,
    create_debug_logger: bool = True,
) -> None:
    """Install relayout log handler for colored output.

    :param level: Logging level of the console, defaults to logging.WARNING
    :param stream: Stream to output logging, defaults to sys.stderr
    :param colored: Colored output, detected from the stream if None
    :param logger: Logger to install to, defaults to the relayout logger
    :param create_debug_logger: Create the debug log file handler
    """
    if not level:
        level = logging.WARNING
    target_logger = logger or logging.getLogger(LOGGER_NAME)
    target_logger.setLevel(logging.DEBUG)

    color = True
    if "NO_COLOR" in os.environ:
        # For details see https://no-color.org/
        color = False
    if not hasattr(stream, "isatty") or not stream.isatty():
        color = False
    if colored is not None:
        color = colored

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(color))
    target_logger.addHandler(handler)
    target_logger.propagate = True

    if create_debug_logger and not RELAYOUT_DEBUG_LOGGING_DISABLED:
        try:
            _install_debug_logger(target_logger)
        except OSError as exc:
            target_logger.warning(f"Failed to initialize debug logging: {str(exc)}")
