from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import typer
from rich.logging import RichHandler

from .console import echo, echo_error, err_console
from .errors import TiciError
from .identity import SessionIdentity, resolve_identity
from .launch import open_session, switch_to
from .restore import restore as restore_session
from .snapshot import snapshot
from .tmux import TmuxDriver

logger = logging.getLogger(__name__)

app = typer.Typer(help="tici: save and restore a tmux session per directory", add_completion=False)


@dataclass
class Options:
    working_dir: Path | None
    dry_run: bool


def _log_level(verbose: bool) -> int:
    if verbose:
        return logging.DEBUG
    level = logging.getLevelName(os.environ.get("TICI_LOG_LEVEL", "WARNING").upper())
    return level if isinstance(level, int) else logging.WARNING


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=_log_level(verbose),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )


@contextmanager
def _reporting_errors() -> Iterator[None]:
    try:
        yield
    except TiciError as e:
        logger.debug("command failed", exc_info=True)
        echo_error(f"Error: {e}")
        raise typer.Exit(1) from e


def _identity(opts: Options) -> SessionIdentity:
    identity = resolve_identity(opts.working_dir)
    echo(f"Using directory: {identity.canonical_dir}")
    return identity


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    working_dir: Path | None = typer.Option(None, "-d", "--dir", help="Directory to use instead of the current one"),
    dry_run: bool = typer.Option(False, "-n", "--dry-run", help="Print what would happen without changing anything"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log every tmux command"),
) -> None:
    """Open the tmux session for this directory, restoring it from its save file if needed."""

    _configure_logging(verbose)
    ctx.obj = Options(working_dir=working_dir, dry_run=dry_run)

    if ctx.invoked_subcommand is not None:
        return

    with _reporting_errors():
        identity = _identity(ctx.obj)
        open_session(identity, dry_run=dry_run, driver=TmuxDriver())


@app.command("save")
def save(ctx: typer.Context) -> None:
    """Save the directory's tmux session."""

    opts: Options = ctx.obj
    with _reporting_errors():
        identity = _identity(opts)
        snapshot(identity, dry_run=opts.dry_run, driver=TmuxDriver())


@app.command("restore")
def restore(ctx: typer.Context) -> None:
    """Restore the directory's tmux session and switch to it."""

    opts: Options = ctx.obj
    with _reporting_errors():
        identity = _identity(opts)
        driver = TmuxDriver()
        restore_session(identity, dry_run=opts.dry_run, driver=driver)
        if not opts.dry_run:
            switch_to(driver, identity.session_name)


@app.command("version")
def version() -> None:
    from . import __version__

    echo(__version__)


def main() -> None:
    app()
