"""build command: print release notes for a repository."""

from __future__ import annotations

import contextlib
import dataclasses
import signal
import threading

import click
from rich.console import Console

from prnotes_core.errors import Cancelled, ConfigError, ReleaseNotesError
from prnotes_core.notes import build_release_notes

err_console = Console(stderr=True)


@contextlib.contextmanager
def _cancel_on_sigint():
    """Yield an Event that is set on Ctrl-C instead of raising KeyboardInterrupt.

    The run then stops at the next page fetch with Cancelled.
    """
    cancel = threading.Event()
    if threading.current_thread() is not threading.main_thread():
        yield cancel
        return

    previous = signal.signal(signal.SIGINT, lambda signum, frame: cancel.set())
    try:
        yield cancel
    finally:
        signal.signal(signal.SIGINT, previous)


@click.command("build")
@click.option("--org", default=None, help="GitHub organization or user. (Required)")
@click.option("--repo", default=None, help="GitHub repository name. (Required)")
@click.option("--stop-at", "stop_at", type=int, default=None, help="PR number to stop at (not included).")
@click.option(
    "--include-commits/--no-include-commits",
    default=None,
    help="List each PR's commits under it.",
)
@click.option(
    "--since-latest-release/--no-since-latest-release",
    default=None,
    help="Stop at the first PR with no commits since the latest release.",
)
@click.option(
    "--include-author/--no-include-author",
    default=None,
    help="Prefix each PR title with its author.",
)
@click.option(
    "--github-token",
    default=None,
    help="GitHub token. Defaults to GITHUB_TOKEN, then the gh CLI session.",
)
@click.option(
    "--output",
    "-o",
    type=click.File("w"),
    default="-",
    show_default=True,
    help="File to write the notes to.",
)
@click.pass_context
def build_cmd(
    ctx,
    org: str | None,
    repo: str | None,
    stop_at: int | None,
    include_commits: bool | None,
    since_latest_release: bool | None,
    include_author: bool | None,
    github_token: str | None,
    output,
):
    """Print release notes built from merged pull requests, newest first.

    \b
    Without a stop condition every closed PR of the repository is listed.
    Use --stop-at with the first PR of the previous release, or
    --since-latest-release to stop at the latest GitHub release.
    """
    from prnotes_core.config import build_notes_config, load_config
    from prnotes_cli.auth import resolve_github_token

    config_path = ctx.obj.get("config_path", ".prnotes.yml") if ctx.obj else ".prnotes.yml"

    try:
        config = load_config(
            config_path,
            cli_overrides={
                "org": org,
                "repo": repo,
                "stop_at": stop_at,
                "include_commits": include_commits,
                "since_latest_release": since_latest_release,
                "include_author": include_author,
                "github_token": github_token,
            },
        )
        notes_config = build_notes_config(config)
    except ConfigError as e:
        raise click.UsageError(str(e))

    token = resolve_github_token(notes_config.github_token)
    if token != notes_config.github_token:
        notes_config = dataclasses.replace(notes_config, github_token=token)

    with _cancel_on_sigint() as cancel:
        try:
            build_release_notes(output, notes_config, cancel=cancel)
        except ConfigError as e:
            raise click.UsageError(str(e))
        except Cancelled as e:
            err_console.print("[yellow]Cancelled. The notes above are incomplete.[/yellow]")
            raise click.ClickException(f"Cancelled: {e}")
        except ReleaseNotesError as e:
            err_console.print("[yellow]The notes above are incomplete.[/yellow]")
            raise click.ClickException(str(e))
        finally:
            output.flush()
