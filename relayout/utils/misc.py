#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""RELAYOUT miscellaneous utilities and helper functions.

This module provides file operations, configuration loading, number parsing and
formatting helpers used throughout the RELAYOUT library.
"""

import json
import logging
import os
import re
import sys
import textwrap
from pathlib import Path
from typing import Callable, Optional, Union

import yaml

from relayout.exceptions import RelayoutError

logger = logging.getLogger(__name__)

# File name used on command line for standard input/output
STD_STREAM = "-"


def get_abs_path(file_path: str, base_dir: Optional[str] = None) -> str:
    """Convert relative or absolute file path to normalized absolute path.

    :param file_path: File path to be converted to absolute path.
    :param base_dir: Base directory to create absolute path, if not specified the system CWD is used.
    :return: Absolute file path with normalized separators.
    """
    if os.path.isabs(file_path):
        return file_path.replace("\\", "/")

    return os.path.abspath(os.path.join(base_dir or os.getcwd(), file_path)).replace("\\", "/")


def _find_path(
    path: str,
    check_func: Callable[[str], bool],
    use_cwd: bool = True,
    search_paths: Optional[list[str]] = None,
    raise_exc: bool = True,
) -> str:
    """Find and return the full path to a file or directory.

    Search paths take precedence over current working directory when both are specified.

    :param path: File name, part of file path or full path to search for.
    :param check_func: Function to validate if the found path exists and meets criteria.
    :param use_cwd: Try current working directory to find the file, defaults to True.
    :param search_paths: List of paths where to search for the file, defaults to None.
    :param raise_exc: Raise exception if file is not found, defaults to True.
    :return: Full absolute path to the found file or empty string if not found and raise_exc is False.
    :raises RelayoutError: File not found in any of the searched locations.
    """
    path = path.replace("\\", "/")

    if os.path.isabs(path):
        if not check_func(path):
            if raise_exc:
                raise RelayoutError(f"Path '{path}' not found")
            return ""
        return path
    if search_paths:
        for dir_candidate in search_paths:
            if not dir_candidate:
                continue
            dir_candidate = dir_candidate.replace("\\", "/")
            path_candidate = get_abs_path(path, base_dir=dir_candidate)
            if check_func(path_candidate):
                return path_candidate
    if use_cwd and check_func(path):
        return get_abs_path(path)
    # list all directories in error message
    searched_in: list[str] = []
    if use_cwd:
        searched_in.append(os.path.abspath(os.curdir))
    if search_paths:
        searched_in.extend(filter(None, search_paths))
    searched_in = [s.replace("\\", "/") for s in searched_in]
    err_str = f"Path '{path}' not found, Searched in: {', '.join(searched_in)}"
    if not raise_exc:
        logger.debug(err_str)
        return ""
    raise RelayoutError(err_str)


def find_file(
    file_path: str,
    use_cwd: bool = True,
    search_paths: Optional[list[str]] = None,
    raise_exc: bool = True,
) -> str:
    """Find file in filesystem using multiple search strategies.

    :param file_path: File name, part of file path or full path to search for.
    :param use_cwd: Try current working directory to find the file, defaults to True.
    :param search_paths: List of paths where to search for the file, defaults to None.
    :param raise_exc: Raise exception if file is not found, defaults to True.
    :return: Full absolute path to the found file.
    :raises RelayoutError: File not found in any of the search locations.
    """
    return _find_path(
        path=file_path,
        check_func=os.path.isfile,
        use_cwd=use_cwd,
        search_paths=search_paths,
        raise_exc=raise_exc,
    )


def load_text(path: str, search_paths: Optional[list[str]] = None) -> str:
    """Load text file content into string.

    The path "-" reads the whole standard input instead of a file.

    :param path: Path to the text file to load.
    :param search_paths: List of directories to search for the file, defaults to None.
    :return: Content of the text file as string.
    """
    if path == STD_STREAM:
        logger.debug("Loading text from standard input")
        return sys.stdin.read()
    path = find_file(path, search_paths=search_paths)
    logger.debug(f"Loading text file from {path}")
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_file(
    data: Union[str, bytes],
    path: str,
    mode: str = "w",
    encoding: str = "utf-8",
) -> int:
    """Write data to a file with automatic directory creation.

    :param data: Data to write to the file.
    :param path: Path to the target file.
    :param mode: File writing mode ('w' for text, 'wb' for binary), defaults to 'w'.
    :param encoding: Text encoding ('ascii', 'utf-8'), defaults to 'utf-8'.
    :return: Number of characters or bytes written to the file.
    """
    path = path.replace("\\", "/")
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)

    logger.debug(f"Storing {'binary' if 'b' in mode else 'text'} file at {path}")
    with open(path, mode, encoding=None if "b" in mode else encoding) as f:
        return f.write(data)


def format_value(value: int, size: int, delimiter: str = "_", use_prefix: bool = True) -> str:
    """Convert integer value to formatted binary or hexadecimal string representation.

    The function selects binary format when size is not divisible by 8, otherwise
    hexadecimal. Digits are grouped by 4 characters using the delimiter.

    :param value: Integer value to be converted.
    :param size: Bit size that determines output format and padding.
    :param delimiter: Character used to separate digit groups, defaults to underscore.
    :param use_prefix: Whether to include format prefix (0b/0x), defaults to True.
    :return: Formatted string representation of the value.
    """
    padding = size if size % 8 else (size // 8) * 2
    infix = "b" if size % 8 else "x"
    sign = "-" if value < 0 else ""
    parts = re.findall(".{1,4}", f"{abs(value):0{padding}{infix}}"[::-1])
    rev = delimiter.join(parts)[::-1]
    prefix = f"0{infix}" if use_prefix else ""
    return f"{sign}{prefix}{rev}"


def value_to_int(value: Union[bytes, bytearray, int, str], default: Optional[int] = None) -> int:
    """Convert value from multiple formats to integer.

    Supports integers, big-endian bytes and string representations in binary, octal,
    decimal and hexadecimal format with optional prefixes and '_' separators.

    :param value: Input value to convert (int, bytes, bytearray, or str).
    :param default: Default value returned when conversion fails.
    :return: Converted integer value.
    :raises RelayoutError: Unsupported input type or invalid conversion without default.
    """
    if isinstance(value, bool):
        if default is not None:
            return default
        raise RelayoutError(f"Invalid input number type({type(value)}) with value ({value})")

    if isinstance(value, int):
        return value

    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, "big")

    if isinstance(value, str) and value != "":
        match = re.match(
            r"(?P<prefix>0[box])?(?P<number>[0-9a-f_]+)(?P<suffix>[ul]{0,3})$",
            value.strip().lower(),
        )
        if match:
            base = {"0b": 2, "0o": 8, "0": 10, "0x": 16, None: 10}[match.group("prefix")]
            try:
                return int(match.group("number"), base=base)
            except ValueError:
                pass

    if default is not None:
        return default
    raise RelayoutError(f"Invalid input number type({type(value)}) with value ({value})")


def size_fmt(num: Union[float, int], use_kibibyte: bool = True) -> str:
    """Format byte size into human-readable string representation.

    :param num: The byte size value to format.
    :param use_kibibyte: If True, use binary prefixes (1024-based) with 'iB' suffix,
                         if False, use decimal prefixes (1000-based) with 'B' suffix.
    :return: Formatted size string with value and unit (e.g., "1.5 MiB", "1024 B").
    """
    base, suffix = [(1000.0, "B"), (1024.0, "iB")][use_kibibyte]
    i = "B"
    for i in ["B"] + [i + suffix for i in list("kMGTP")]:
        if num < base:
            break
        num /= base

    return f"{int(num)} {i}" if i == "B" else f"{num:3.1f} {i}"


def load_configuration(path: str, search_paths: Optional[list[str]] = None) -> dict:
    """Load configuration from YAML or JSON file.

    The method attempts to parse the file content as JSON first, then falls back
    to YAML parsing if JSON parsing fails.

    :param path: Path to configuration file (relative or absolute).
    :param search_paths: List of paths where to search for the file, defaults to None.
    :raises RelayoutError: When file cannot be loaded, parsed, or contains invalid format.
    :return: Content of configuration as dictionary.
    """
    try:
        config = load_text(path, search_paths=search_paths)
    except Exception as exc:
        raise RelayoutError(f"Can't load configuration file: {str(exc)}") from exc

    config_data: Optional[dict] = None
    try:
        config_data = json.loads(config)
    except json.JSONDecodeError:
        try:
            config_data = yaml.safe_load(config)
        except (yaml.YAMLError, UnicodeDecodeError):
            pass

    if not config_data:
        raise RelayoutError(f"Can't parse configuration file: {path}")
    if not isinstance(config_data, dict):
        raise RelayoutError(f"Invalid configuration file: {path}")

    return config_data


def wrap_text(text: str, max_line: int = 100) -> str:
    """Wrap text while preserving existing line breaks.

    :param text: Input text to be wrapped.
    :param max_line: Maximum line length for wrapped output, defaults to 100.
    :return: Formatted text with appropriate line breaks inserted.
    """
    lines = text.splitlines()
    return "\n".join([textwrap.fill(text=line, width=max_line) for line in lines])


def get_printable_path(path: str) -> str:
    """Get printable path for file display purposes.

    :param path: Absolute or relative file path to convert.
    :return: Display-friendly file path string.
    """
    if path == STD_STREAM:
        return "<stdin>"
    try:
        return Path(os.path.relpath(path, os.getcwd())).as_posix()
    except ValueError:
        # different drive on Windows
        return path
