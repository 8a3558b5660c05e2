"""CLI entry point for prnotes.

Commands:
  build  : print release notes built from merged pull requests
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from prnotes_cli.commands.build import build_cmd

err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )
    # PyGithub and urllib3 are chatty at DEBUG.
    logging.getLogger("github").setLevel(logging.INFO)
    logging.getLogger("urllib3").setLevel(logging.INFO)


@click.group()
@click.version_option(
    version=importlib.metadata.version("prnotes"),
    prog_name="prnotes",
)
@click.option(
    "--config",
    "config_path",
    default=".prnotes.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRNOTES_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log pagination and boundary resolution to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Release notes from merged GitHub pull requests."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(build_cmd)
