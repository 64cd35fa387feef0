#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""CLI helper for Click."""

import logging
import os
from gettext import gettext
from typing import Any, Callable, Optional, Sequence, TypeVar, Union

import click
from click_command_tree import _build_command_tree, _CommandWrapper

from relayout import __version__ as relayout_version
from relayout.layout.section import KeptSpacingPolicy, ResolutionStrategy

FC = TypeVar("FC", bound=Union[Callable[..., Any], click.Command])
logger = logging.getLogger(__name__)


def relayout_apps_common_options(options: FC) -> FC:
    """Common click options.

    Sets --help, --version; provides: `log_level: int` for logging.

    :return: click decorator
    """
    options = click.help_option("--help")(options)
    options = click.version_option(relayout_version, "--version")(options)
    options = click.option(
        "-vv",
        "--debug",
        "log_level",
        flag_value=logging.DEBUG,
        help="Display more debugging information.",
    )(options)
    options = click.option(
        "-v",
        "--verbose",
        "log_level",
        flag_value=logging.INFO,
        help="Print more detailed information",
    )(options)
    return options


def relayout_input_options(options: FC) -> FC:
    """Click decorator handling the layout description source.

    Provides: `input_file: str` a text description ("-" for standard input) and
    `config: str` a YAML/JSON configuration. Exactly one of them has to be used,
    the check is done by the command.

    :return: Click decorator
    """
    options = click.option(
        "-c",
        "--config",
        type=click.Path(resolve_path=True, exists=True, dir_okay=False),
        help="Path to the YAML/JSON layout configuration.",
    )(options)
    options = click.option(
        "-i",
        "--input",
        "input_file",
        type=click.Path(allow_dash=True, dir_okay=False),
        help="Path to the text layout description, use '-' for standard input.",
    )(options)
    return options


def relayout_run_options(options: FC) -> FC:
    """Click decorator handling the options of the layout computation.

    Provides: `resolution: Optional[str]` and `kept_spacing: Optional[str]`.
    None means the value from the configuration (or the default) is used.

    :return: Click decorator
    """
    options = click.option(
        "--kept-spacing",
        type=click.Choice(KeptSpacingPolicy.values(), case_sensitive=False),
        help="Handling of kept sections closer to each other than the spacing.",
    )(options)
    options = click.option(
        "--resolution",
        type=click.Choice(ResolutionStrategy.values(), case_sensitive=False),
        help="Strategy of the overlap resolution.",
    )(options)
    return options


_DEFAULT_OUTPUT_HELP = "Path to a file, where to store the output."


def relayout_output_option(
    required: bool = True,
    force: bool = False,
    help: Optional[str] = None,  # pylint: disable=redefined-builtin
) -> Callable:
    """Click decorator handling the output file.

    Provides: `output: str` a full path to the file.
    The force option is not passed to click command.

    :param required: Output option is required, defaults to True
    :param force: Include --force option, defaults to False
    :param help: Customized help message, defaults to None
    :return: Click decorator
    """

    def callback(
        ctx: click.Context,
        param: click.Parameter,  # pylint: disable=unused-argument  # click's callback signature
        value: str,
    ) -> str:
        if ctx.resilient_parsing:
            return value
        if force and value and os.path.exists(value) and not ctx.params["force"]:
            click.echo(
                "Output file already exists. "
                "Please use --force is you want to overwrite existing files."
            )
            ctx.abort()
        if "force" in ctx.params:
            del ctx.params["force"]
        return value

    def decorator(func: Callable[[FC], FC]) -> Callable[[FC], FC]:
        if force:
            func = click.option(
                "--force",
                default=False,
                is_flag=True,
                help="Force overwriting of existing files.",
                is_eager=True,
            )(func)
        func = click.option(
            "-o",
            "--output",
            type=click.Path(resolve_path=True, dir_okay=False),
            required=required,
            help=help or _DEFAULT_OUTPUT_HELP,
            callback=callback,
        )(func)
        return func

    return decorator


class CommandsTreeGroup(click.Group):
    """Custom help formatter, overrides click group standard formatter.

    Provides command section in help as command tree
    """

    def format_commands(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Extra format methods for multi methods that adds all the commands after the options.

        :param ctx: click Context
        :param formatter: click HelpFormatter
        """
        root_cmd = _build_command_tree(ctx.find_root().command)
        rows = _get_tree(root_cmd)

        with formatter.section(gettext("Commands")):
            formatter.width = 160
            formatter.write_dl(rows, col_max=80)


def _get_tree(
    command: _CommandWrapper,
    rows: Optional[list] = None,
    depth: int = 0,
    is_last_item: bool = False,
    is_last_parent: bool = False,
    parent_prefix: str = "",
) -> Sequence[tuple[str, str]]:
    """Generate tree of commands to be used with Click HelpFormatter.

    :param command: command wrapper
    :param rows: list of str lines to be printed, defaults to None
    :param depth: tree depth, defaults to 0
    :param is_last_item: last item has different formatting, defaults to False
    :param is_last_parent: last parent item, defaults to False
    :param parent_prefix: visual prefix used by parent node
    :return: definition list to be used with click HelpFormatter
    """
    if rows is None:
        rows = []
    if depth == 0:
        prefix = ""
        tree_item = ""
    else:
        prefix = "    " if is_last_parent else "│   "
        tree_item = "└── " if is_last_item else "├── "

    parent_prefix = parent_prefix + (prefix if depth > 1 else "")
    col1 = parent_prefix + tree_item + command.name
    col2 = str()
    doc: str = command.command.__doc__
    if doc:
        formatted_doc = doc.partition("\n")[0]  # take just first line of doc
        # truncate length to be compliant with max width
        formatted_doc = formatted_doc[:78] + (formatted_doc[78:] and "..")
        col2 += formatted_doc

    rows.append((col1, col2))

    for i, child in enumerate(sorted(command.children, key=lambda x: x.name)):
        _get_tree(
            child,
            rows,
            depth=(depth + 1),
            is_last_item=(i == (len(command.children) - 1)),
            is_last_parent=is_last_item,
            parent_prefix=parent_prefix,
        )
    return rows
