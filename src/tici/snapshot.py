from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

from . import codec
from .console import echo
from .errors import EmptySession
from .identity import SessionIdentity
from .model import Session
from .store import atomic_write_text
from .tmux import TmuxDriver
from .tmux_target import WindowTarget

logger = logging.getLogger(__name__)


def capture_session(driver: TmuxDriver, session_name: str) -> Session:
    """Enumerate the live windows and panes of `session_name`."""

    windows = []
    for window in driver.list_windows(session_name):
        if window.session_name != session_name:
            continue
        panes = driver.list_panes(WindowTarget(session_name, window.index))
        if not panes:
            logger.warning("window %s:%d reported no panes; skipping", session_name, window.index)
            continue
        windows.append(dataclasses.replace(window, panes=tuple(panes)))

    if not windows:
        raise EmptySession(cause=f"tmux session {session_name!r} has no windows")
    return Session(name=session_name, windows=tuple(windows))


def snapshot(identity: SessionIdentity, *, dry_run: bool = False, driver: TmuxDriver | None = None) -> Path:
    driver = driver or TmuxDriver()

    session = capture_session(driver, identity.session_name)
    text = codec.serialize(session)
    logger.debug("captured %d windows, %d panes", len(session.windows), session.pane_count)

    if dry_run:
        echo(f"Would save session to: {identity.save_path}")
        echo(text.rstrip("\n"))
        return identity.save_path

    atomic_write_text(identity.save_path, text)
    echo(f"Session saved to: {identity.save_path}")
    return identity.save_path
