from __future__ import annotations

import logging

from .console import echo
from .errors import NoSavedSession
from .identity import SessionIdentity
from .restore import restore
from .snapshot import snapshot
from .tmux import TmuxDriver
from .tmux_target import inside_tmux

logger = logging.getLogger(__name__)


def switch_to(driver: TmuxDriver, name: str) -> None:
    """Hand the user's terminal to `name`.

    Inside tmux the current client switches over and we return immediately.
    Outside tmux we attach and block until the user detaches.
    """

    if inside_tmux():
        logger.debug("switching client to %r", name)
        driver.switch_client(name)
    else:
        logger.debug("attaching to %r", name)
        driver.attach_session(name)


def open_session(identity: SessionIdentity, *, dry_run: bool = False, driver: TmuxDriver | None = None) -> None:
    """Switch to the directory's session, rebuilding it from its save file first if needed."""

    driver = driver or TmuxDriver()
    name = identity.session_name

    if driver.has_session(name):
        logger.info("session %r already running", name)
        if dry_run:
            echo(f"Would switch to session: {name}")
            return
        switch_to(driver, name)
        return

    if dry_run:
        echo(f"Would create new session: {name} in {identity.canonical_dir}")
        try:
            restore(identity, dry_run=True, driver=driver)
        except NoSavedSession:
            echo("No saved session to restore")
        return

    driver.new_session(name, detached=True, cwd=identity.canonical_dir)
    try:
        restore(identity, driver=driver)
    except NoSavedSession:
        logger.info("no saved session for %s; starting fresh", identity.canonical_dir)

    switch_to(driver, name)

    # After an attach returns the user may have closed every window.
    if not driver.has_session(name):
        logger.info("session %r ended; nothing to save", name)
        return
    snapshot(identity, driver=driver)
