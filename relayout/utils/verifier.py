#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""RELAYOUT verification and validation utilities.

A verifier collects named check results, draws them as a colored report with a
summary table and turns errors into an exception on request.
"""

import textwrap
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

import colorama
import prettytable

from relayout.exceptions import RelayoutVerificationError
from relayout.utils.misc import wrap_text


class VerifierResult(Enum):
    """Verifier result enumeration.

    Each member holds its severity tag, printable label and console color.
    """

    SUCCEEDED = (0, "Succeeded", colorama.Fore.GREEN)
    WARNING = (1, "Warning", colorama.Fore.YELLOW)
    ERROR = (2, "Error", colorama.Fore.RED)

    def __init__(self, tag: int, label: str, color: str) -> None:
        self.tag = tag
        self.label = label
        self.color = color

    @classmethod
    def draw(cls, res: "VerifierResult", colorize: bool = True) -> str:
        """Get string representation with optional color formatting.

        :param res: Verifier result.
        :param colorize: Whether to add ANSI escape characters for colored output.
        :return: Formatted string representation of the verifier result.
        """
        if not colorize:
            return res.label
        return res.color + res.label + colorama.Fore.RESET


@dataclass
class VerifierRecord:
    """One named check and its result."""

    name: str
    result: VerifierResult = VerifierResult.ERROR
    value: Optional[Union[str, int, bool]] = None
    # Succeeded records that are not important are left out of the report
    important: bool = True


class Verifier:
    """Collection of check results with a printable report."""

    MAX_LINE_LENGTH = 120
    TITLE_FG_COLOR = colorama.Fore.CYAN

    def __init__(self, name: str, indent: int = 2, description: Optional[str] = None) -> None:
        """Initialize a verifier instance.

        :param name: Name of the verifier instance.
        :param indent: Indentation of the records in the report, defaults to 2.
        :param description: Optional description printed under the title, defaults to None.
        """
        self.name = name
        self.records: list[VerifierRecord] = []
        self.description = description
        self.indent = indent

    @property
    def max_line(self) -> int:
        """Get maximal line length of the indented records."""
        return self.MAX_LINE_LENGTH - self.indent

    def __repr__(self) -> str:
        return f"{self.name} verifier object"

    def __str__(self) -> str:
        return self.draw(colorize=False)

    def _get_title_block(self, colorize: bool = True) -> str:
        fg_color = self.TITLE_FG_COLOR if colorize else ""
        rst_color = colorama.Fore.RESET if colorize else ""
        rest_len = self.max_line - len(self.name + "  () " + self.result.label)
        fill = "=" * (rest_len // 2)
        ret = (
            f"{fg_color}{fill}{rst_color} {self.name} "
            f"({VerifierResult.draw(self.result, colorize=colorize)}) {fg_color}"
            f"{fill}{'=' * (rest_len % 2)}{rst_color}\n"
        )
        if self.description:
            ret += fg_color + wrap_text(self.description, self.max_line) + "\n"
            ret += "=" * self.max_line + rst_color + "\n"
        return ret

    def draw(self, results: Optional[list[VerifierResult]] = None, colorize: bool = True) -> str:
        """Draw the results of the verifier.

        :param results: Filter for selected results to display, defaults to None for all results.
        :param colorize: Enable colored text output using ANSI escape characters.
        :return: Formatted string representation of the verifier results.
        """
        ret = self._get_title_block(colorize)
        for record in self.records:
            if (record.result == VerifierResult.SUCCEEDED and not record.important) or (
                results and record.result not in results
            ):
                continue
            ret += textwrap.indent(self._draw_record(record, colorize) + "\n", " " * self.indent)
        return ret

    def _draw_record(self, record: VerifierRecord, colorize: bool = True) -> str:
        ret = f"{record.name}({VerifierResult.draw(record.result, colorize)}): "
        if record.value is not None:
            ret += str(record.value)
        subsequent_indent = len(record.name + "(): " + record.result.label)
        return "\n".join(
            textwrap.wrap(text=ret, width=self.max_line, subsequent_indent=" " * subsequent_indent)
        )

    def add_record(
        self,
        name: str,
        result: Union[VerifierResult, bool],
        value: Optional[Union[str, int, bool]] = None,
        important: bool = True,
    ) -> None:
        """Add one verifying record to verifier.

        :param name: Name of verifying condition/expression.
        :param result: Result of verifying condition/expression, boolean values are converted
            (True == SUCCEEDED, False == ERROR).
        :param value: Optional value associated with the verification result.
        :param important: Flag indicating if this record should be marked as important.
        """
        if isinstance(result, bool):
            result = VerifierResult.SUCCEEDED if result else VerifierResult.ERROR
        self.records.append(
            VerifierRecord(name=name, result=result, value=value, important=important)
        )

    def get_count(self, results: Optional[list[VerifierResult]] = None) -> int:
        """Get count of records of requested result state.

        :param results: List of types of result to count, defaults to None (get all)
        :return: Count of records matching the specified result types.
        """
        return sum(1 for record in self.records if results is None or record.result in results)

    @property
    def has_errors(self) -> bool:
        """Check if the verifier contains any error."""
        return bool(self.get_count([VerifierResult.ERROR]))

    @property
    def result(self) -> VerifierResult:
        """Get the most severe verification result from all records."""
        return max(
            (record.result for record in self.records),
            key=lambda res: res.tag,
            default=VerifierResult.SUCCEEDED,
        )

    def validate(self, colorize: bool = False) -> None:
        """Validate the object for errors.

        :param colorize: Make the text colored with ANSI escape characters.
        :raises RelayoutVerificationError: If validation errors are found in the object.
        """
        if self.has_errors:
            raise RelayoutVerificationError(
                self.draw(results=[VerifierResult.ERROR], colorize=colorize)
            )

    def get_summary_table(self, colorize: bool = True) -> str:
        """Get the summary table with verification results.

        :param colorize: Enable colored text output using ANSI escape characters, defaults to True
        :return: Formatted string table containing summary of verification results
        """
        header: list[str] = []
        row: list[int] = []
        for res in VerifierResult:
            header.append(VerifierResult.draw(res, colorize=colorize))
            row.append(self.get_count([res]))
        pt = prettytable.PrettyTable(header)
        pt.align = "c"
        pt.add_row(row)
        return str(pt)
