from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Any, Callable

from .errors import EnvironmentMissing, MalformedMultiplexerOutput, MultiplexerOperationFailed
from .listing import (
    LIST_PANES_FORMAT,
    LIST_WINDOWS_FORMAT,
    parse_list_panes_payload,
    parse_list_windows_payload,
)
from .model import Pane, Window
from .tmux_target import PaneTarget, WindowTarget, check_session_name, exact_session

logger = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


def default_tmux_binary() -> str:
    return os.environ.get("TICI_TMUX") or "tmux"


class TmuxDriver:
    """Typed wrapper around the tmux command line.

    Every call runs tmux to completion and checks its exit status before
    returning; tmux cannot address a window before the command creating it
    has finished. `run` is `subprocess.run` unless a test injects a fake.
    """

    def __init__(self, *, binary: str | None = None, run: Runner = subprocess.run) -> None:
        self.binary = binary or default_tmux_binary()
        self._run = run

    def _exec(self, op: str, args: list[str], *, interactive: bool = False) -> subprocess.CompletedProcess[str]:
        argv = [self.binary, op, *args]
        logger.debug("exec: %s", shlex.join(argv))

        # Interactive commands inherit our terminal; everything else is captured.
        kwargs: dict[str, Any] = {} if interactive else {"capture_output": True, "text": True}
        try:
            return self._run(argv, check=False, **kwargs)
        except (FileNotFoundError, PermissionError) as e:
            raise EnvironmentMissing(f"Cannot run {self.binary!r}", cause=str(e)) from e

    def _call(
        self,
        op: str,
        args: list[str],
        *,
        target: object | None = None,
        interactive: bool = False,
    ) -> str:
        result = self._exec(op, args, interactive=interactive)
        if result.returncode != 0:
            stderr = (result.stderr or "").strip() if not interactive else ""
            raise MultiplexerOperationFailed(
                op,
                str(target) if target is not None else None,
                cause=stderr or f"exit status {result.returncode}",
            )
        return result.stdout or ""

    # Queries

    def has_session(self, name: str) -> bool:
        result = self._exec("has-session", ["-t", exact_session(name)])
        return result.returncode == 0

    def list_windows(self, session: str | None = None) -> list[Window]:
        if session is None:
            out = self._call("list-windows", ["-a", "-F", LIST_WINDOWS_FORMAT])
        else:
            out = self._call(
                "list-windows",
                ["-t", exact_session(session), "-F", LIST_WINDOWS_FORMAT],
                target=session,
            )
        return parse_list_windows_payload(out)

    def list_panes(self, target: WindowTarget) -> list[Pane]:
        out = self._call("list-panes", ["-t", target.exact, "-F", LIST_PANES_FORMAT], target=target)
        return parse_list_panes_payload(out)

    # Mutations

    def new_session(self, name: str, *, detached: bool, cwd: Path | str | None = None) -> None:
        args = ["-s", check_session_name(name)]
        if detached:
            args.insert(0, "-d")
        if cwd is not None:
            args += ["-c", str(cwd)]
        # Attached sessions block here until the user detaches.
        self._call("new-session", args, target=name, interactive=not detached)

    def new_window(self, session: str, index: int, name: str, cwd: Path | str | None = None) -> int:
        """Create a window at `index` and return the index tmux assigned.

        tmux may renumber windows (renumber-windows, base-index), so callers
        address the new window through the returned index.
        """

        target = WindowTarget(session, index)
        args = ["-d", "-t", target.exact, "-n", name, "-P", "-F", "#{window_index}"]
        if cwd is not None:
            args += ["-c", str(cwd)]
        out = self._call("new-window", args, target=target).strip()
        try:
            return int(out)
        except ValueError:
            raise MalformedMultiplexerOutput("new-window", out) from None

    def split_window(self, target: WindowTarget, cwd: Path | str | None = None) -> None:
        args = ["-t", target.exact]
        if cwd is not None:
            args += ["-c", str(cwd)]
        self._call("split-window", args, target=target)

    def select_layout(self, target: WindowTarget, layout: str) -> None:
        self._call("select-layout", ["-t", target.exact, layout], target=target)

    def select_pane(self, target: PaneTarget) -> None:
        self._call("select-pane", ["-t", target.exact], target=target)

    def select_window(self, target: WindowTarget) -> None:
        self._call("select-window", ["-t", target.exact], target=target)

    def kill_window(self, target: WindowTarget) -> None:
        self._call("kill-window", ["-t", target.exact], target=target)

    def kill_pane(self, target: PaneTarget) -> None:
        self._call("kill-pane", ["-t", target.exact], target=target)

    def rename_window(self, target: WindowTarget, name: str) -> None:
        self._call("rename-window", ["-t", target.exact, name], target=target)

    # Terminal hand-off

    def attach_session(self, name: str) -> None:
        self._call("attach-session", ["-t", exact_session(name)], target=name, interactive=True)

    def switch_client(self, name: str) -> None:
        self._call("switch-client", ["-t", exact_session(name)], target=name)
