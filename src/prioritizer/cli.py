#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Prioritizer orders the test cases of a test suite by their code coverage.

This module provides the main entry location for the program execution from the command
line.
"""

from __future__ import annotations

import logging
import sys

from pathlib import Path
from typing import TYPE_CHECKING

import simple_parsing

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install

import prioritizer.configuration as config

from prioritizer.__version__ import __version__
from prioritizer.generator import run_prioritizer
from prioritizer.generator import set_configuration
from prioritizer.utils.configuration_writer import write_configuration


if TYPE_CHECKING:
    import argparse


def _create_argument_parser() -> argparse.ArgumentParser:
    parser = simple_parsing.ArgumentParser(
        add_option_string_dash_variants=simple_parsing.DashVariant.UNDERSCORE_AND_DASH,
        description="Prioritizer orders test cases such that they cover the code early",
        fromfile_prefix_chars="@",
    )
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        dest="verbosity",
        default=0,
        help="verbose output (repeat for increased verbosity)",
    )
    parser.add_argument(
        "--no-rich",
        "--no_rich",
        dest="no_rich",
        action="store_true",
        default=False,
        help="Don't use rich for nicer console output.",
    )
    parser.add_argument(
        "--log-file",
        "--log_file",
        help="Path to an optional log file.",
        type=Path,
    )
    parser.add_arguments(config.Configuration, dest="config")

    return parser


def _expand_arguments_if_necessary(arguments: list[str]) -> list[str]:
    """Expand command-line arguments, if necessary.

    This allows to pass the algorithms separated by colons or commas, e.g.,
    ``--algorithms SIMULATED_ANNEALING:RANDOM_SEARCH``, besides separated by spaces.

    Args:
        arguments: The list of command-line arguments

    Returns:
        The (potentially) processed list of command-line arguments
    """
    if "--algorithms" not in arguments:
        return arguments
    return _parse_separated_option(arguments, "--algorithms")


def _parse_separated_option(arguments: list[str], option: str) -> list[str]:
    index = arguments.index(option)
    if index + 1 >= len(arguments):
        return arguments
    value = arguments[index + 1].replace(":", ",")
    if "," not in value:
        return arguments
    variables = [variable for variable in value.split(",") if variable]
    return arguments[: index + 1] + variables + arguments[index + 2 :]


def _setup_logging(
    verbosity: int,
    no_rich: bool,  # noqa: FBT001
    log_file: Path | None,
) -> Console | None:
    level = logging.WARNING
    if log_file is not None:
        level = logging.INFO
    if verbosity == 1:
        level = logging.INFO
    if verbosity >= 2:  # noqa: PLR2004
        level = logging.DEBUG

    console = None
    handler: logging.Handler
    if no_rich:
        handler = logging.StreamHandler()
    else:
        install()
        console = Console(tab_size=4)
        handler = RichHandler(rich_tracebacks=True, log_time_format="[%X]", console=console)
        handler.setFormatter(logging.Formatter("%(message)s"))

    if log_file is not None:
        handler = logging.FileHandler(log_file)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s](%(name)s:%(funcName)s:%(lineno)d): %(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )
    return console


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI of the prioritizer.

    This method behaves like a standard UNIX command-line application, i.e.,
    the return value `0` signals a successful execution.  Any other return value
    signals some errors.  This is, e.g., the case if the coverage matrix could not
    be loaded.

    Args:
        argv: List of command-line arguments

    Returns:
        An integer representing the success of the program run.  0 means
        success, all non-zero exit codes indicate errors.
    """
    if argv is None:
        argv = sys.argv
    if len(argv) <= 1:
        argv.append("--help")
    argv = _expand_arguments_if_necessary(argv[1:])

    argument_parser = _create_argument_parser()
    parsed = argument_parser.parse_args(argv)

    console = _setup_logging(
        verbosity=parsed.verbosity,
        no_rich=parsed.no_rich,
        log_file=parsed.log_file,
    )

    set_configuration(parsed.config)
    if parsed.config.output.export_csv:
        write_configuration()
    if console is not None:
        with console.status("Running prioritizer..."):
            return run_prioritizer().value
    else:
        return run_prioritizer().value


if __name__ == "__main__":
    sys.exit(main(sys.argv))
