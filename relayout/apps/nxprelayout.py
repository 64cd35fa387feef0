#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause
"""NXP tool for minimal-delta relayout of image sections."""

import logging
import os
import sys
from typing import Optional

import click

from relayout import RELAYOUT_DATA_FOLDER
from relayout.apps.utils import relayout_logger
from relayout.apps.utils.common_cli_options import (
    CommandsTreeGroup,
    relayout_apps_common_options,
    relayout_input_options,
    relayout_output_option,
    relayout_run_options,
)
from relayout.apps.utils.utils import (
    RelayoutAppError,
    catch_relayout_error,
    print_verifier_to_console,
)
from relayout.layout import (
    KeptSpacingPolicy,
    LayoutContext,
    LayoutResult,
    ResolutionStrategy,
    compute_layout,
    parse_description,
)
from relayout.utils.config import Config
from relayout.utils.misc import get_printable_path, load_text, write_file

logger = logging.getLogger(__name__)

TEMPLATE_FILE = "relayout_template.yaml"

OUTPUT_FORMATS = {
    "text": LayoutResult.export_text,
    "description": LayoutResult.export_description,
    "json": LayoutResult.export_json,
    "yaml": LayoutResult.export_yaml,
}


def load_context(
    input_file: Optional[str],
    config: Optional[str],
    resolution: Optional[str] = None,
    kept_spacing: Optional[str] = None,
) -> LayoutContext:
    """Load the run context from the text description or the configuration.

    Options given on the command line override the configuration values.

    :param input_file: Path to the text description, "-" for standard input.
    :param config: Path to the YAML/JSON configuration.
    :param resolution: Overlap resolution strategy, None keeps the loaded one.
    :param kept_spacing: Kept spacing policy, None keeps the loaded one.
    :raises RelayoutAppError: None or both of the sources were specified.
    :return: Populated run context.
    """
    if bool(input_file) == bool(config):
        raise RelayoutAppError("Exactly one of the --input or --config options must be specified.")
    if input_file:
        ctx = parse_description(load_text(input_file))
        logger.info(f"Loaded layout description from {get_printable_path(input_file)}")
    else:
        assert config
        ctx = LayoutContext.load_from_config(Config.create_from_file(config))
        logger.info(f"Loaded layout configuration from {get_printable_path(config)}")
    if resolution:
        ctx.strategy = ResolutionStrategy(resolution.lower())
    if kept_spacing:
        ctx.kept_spacing = KeptSpacingPolicy(kept_spacing.lower())
    return ctx


@click.group(name="nxprelayout", no_args_is_help=True, cls=CommandsTreeGroup)
@relayout_apps_common_options
def main(log_level: int) -> None:
    """NXP tool to lay out image sections with minimal changes to the previous layout."""
    relayout_logger.install(level=log_level)


@main.command(name="place", no_args_is_help=True)
@relayout_input_options
@relayout_run_options
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS), case_sensitive=False),
    default="text",
    show_default=True,
    help=(
        "Format of the result: 'text' lists names and new addresses, 'description' "
        "is a description for the next run, 'json' and 'yaml' hold all details."
    ),
)
@relayout_output_option(required=False, help="Path to the result file, standard output if omitted.")
def place(
    input_file: Optional[str],
    config: Optional[str],
    resolution: Optional[str],
    kept_spacing: Optional[str],
    output_format: str,
    output: Optional[str],
) -> None:
    """Compute new addresses of all sections."""
    ctx = load_context(input_file, config, resolution, kept_spacing)
    result = compute_layout(ctx)
    data = OUTPUT_FORMATS[output_format.lower()](result)
    if output:
        write_file(data, output)
        click.echo(f"Layout of {len(result)} sections written to {get_printable_path(output)}")
    else:
        click.echo(data, nl=False)


@main.command(name="verify", no_args_is_help=True)
@relayout_input_options
@relayout_run_options
@click.option(
    "-p",
    "--problems",
    is_flag=True,
    default=False,
    help="Show just problems in the layout.",
)
def verify(
    input_file: Optional[str],
    config: Optional[str],
    resolution: Optional[str],
    kept_spacing: Optional[str],
    problems: bool,
) -> None:
    """Compute the layout and verify its properties."""
    ctx = load_context(input_file, config, resolution, kept_spacing)
    result = compute_layout(ctx)
    verifier = result.verify()
    print_verifier_to_console(verifier, problems)
    verifier.validate()


@main.command(name="draw", no_args_is_help=True)
@relayout_input_options
@relayout_run_options
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colors in the drawing.",
)
def draw(
    input_file: Optional[str],
    config: Optional[str],
    resolution: Optional[str],
    kept_spacing: Optional[str],
    no_color: bool,
) -> None:
    """Compute the layout and draw it as an address map."""
    ctx = load_context(input_file, config, resolution, kept_spacing)
    result = compute_layout(ctx)
    click.echo(result.draw(no_color=no_color))
    click.echo(str(result))


@main.command(name="get-template", no_args_is_help=True)
@relayout_output_option(force=True)
def get_template(output: str) -> None:
    """Generate a template of the layout configuration."""
    template = load_text(os.path.join(RELAYOUT_DATA_FOLDER, TEMPLATE_FILE))
    write_file(template, output)
    click.echo(f"The configuration template has been saved into {get_printable_path(output)}")


@catch_relayout_error
def safe_main() -> None:
    """Call the main function."""
    sys.exit(main())  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    safe_main()
