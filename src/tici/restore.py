from __future__ import annotations

import logging
from pathlib import Path

from . import codec
from .console import echo
from .identity import SessionIdentity
from .model import Session, Window
from .store import read_text
from .tmux import TmuxDriver
from .tmux_target import WindowTarget

logger = logging.getLogger(__name__)


def load_session(path: Path) -> Session:
    return codec.parse(read_text(path))


def describe_session(session: Session) -> str:
    lines = [f"Session: {session.name}"]
    for window in session.windows:
        lines.append("")
        lines.append(f"Window {window.index} ({window.name}){' [active]' if window.active else ''}")
        lines.append(f"Layout: {window.layout}")
        for pane in window.panes:
            lines.append(f"  Pane {pane.index}{' [active]' if pane.active else ''}:")
            lines.append(f"    Title: {pane.title}")
            lines.append(f"    Path: {pane.current_path}")
            lines.append(f"    Command: {pane.current_command}")
            lines.append(f"    PID: {pane.pid}")
    return "\n".join(lines)


def _purge_stale_windows(driver: TmuxDriver, session_name: str) -> dict[int, Window]:
    """Kill every live window but one and return the survivor by index.

    Window 0 survives when present, otherwise the lowest index does: tmux
    destroys a session that loses its last window.
    """

    live = sorted(
        (w for w in driver.list_windows(session_name) if w.session_name == session_name),
        key=lambda w: w.index,
    )
    if not live:
        return {}

    keep = next((w for w in live if w.index == 0), live[0])
    for window in live:
        if window.index == keep.index:
            continue
        logger.info("killing stale window %s:%d (%s)", session_name, window.index, window.name)
        driver.kill_window(WindowTarget(session_name, window.index))
    return {keep.index: keep}


def _build_window(driver: TmuxDriver, session_name: str, window: Window, kept: dict[int, Window]) -> int:
    if window.index in kept:
        index = window.index
        target = WindowTarget(session_name, index)
        if kept[index].name != window.name:
            driver.rename_window(target, window.name)

        live = sorted(driver.list_panes(target), key=lambda p: p.index)
        # A layout token only applies to the pane count it was saved with.
        for pane in reversed(live[max(len(window.panes), 1) :]):
            logger.info("killing surplus pane %s", target.pane(pane.index))
            driver.kill_pane(target.pane(pane.index))
        missing = window.panes[len(live) :] if live else window.panes[1:]
    else:
        index = driver.new_window(session_name, window.index, window.name, cwd=window.first_pane_path)
        if index != window.index:
            logger.warning("tmux placed window %r at index %d instead of %d", window.name, index, window.index)
        missing = window.panes[1:]

    target = WindowTarget(session_name, index)
    for pane in missing:
        driver.split_window(target, cwd=pane.current_path)

    if window.layout:
        driver.select_layout(target, window.layout)

    active = window.active_pane
    if active is not None:
        driver.select_pane(target.pane(active.index))
    return index


def restore(identity: SessionIdentity, *, dry_run: bool = False, driver: TmuxDriver | None = None) -> Session:
    """Rebuild the saved layout in the directory's tmux session.

    Stale windows are purged first, so repeating a restore (or retrying a
    partial one) converges on the saved structure.
    """

    session = load_session(identity.save_path)

    if dry_run:
        echo(describe_session(session))
        return session

    driver = driver or TmuxDriver()
    name = identity.session_name

    if not driver.has_session(name):
        logger.info("session %r is not running; creating it in %s", name, identity.canonical_dir)
        driver.new_session(name, detached=True, cwd=identity.canonical_dir)

    kept = _purge_stale_windows(driver, name)
    placed: dict[int, int] = {}
    for window in sorted(session.windows, key=lambda w: w.index):
        placed[window.index] = _build_window(driver, name, window, kept)

    active = session.active_window
    if active is not None:
        driver.select_window(WindowTarget(name, placed[active.index]))

    logger.info("restored %d windows into session %r", len(session.windows), name)
    return session
