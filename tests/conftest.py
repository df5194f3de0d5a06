from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from tici.errors import MultiplexerOperationFailed
from tici.identity import SessionIdentity
from tici.model import Pane, Session, Window

WRITE_OPS = {
    "new_session",
    "new_window",
    "split_window",
    "select_layout",
    "select_pane",
    "select_window",
    "kill_window",
    "kill_pane",
    "rename_window",
    "attach_session",
    "switch_client",
}


class FakeDriver:
    """In-memory stand-in for TmuxDriver that records every call."""

    def __init__(self) -> None:
        self.sessions: dict[str, dict[int, Window]] = {}
        # layout token -> pane count it was saved with; tmux refuses a mismatch
        self.layout_panes: dict[str, int] = {}
        self.calls: list[tuple[object, ...]] = []

    def writes(self) -> list[tuple[object, ...]]:
        return [c for c in self.calls if c[0] in WRITE_OPS]

    def ops(self) -> list[str]:
        return [str(c[0]) for c in self.calls]

    def add_window(self, window: Window) -> None:
        self.sessions.setdefault(window.session_name, {})[window.index] = window

    def has_session(self, name: str) -> bool:
        self.calls.append(("has_session", name))
        return name in self.sessions

    def list_windows(self, session: str | None = None) -> list[Window]:
        self.calls.append(("list_windows", session))
        windows = self.sessions.get(session or "", {})
        return [dataclasses.replace(w, panes=()) for _, w in sorted(windows.items())]

    def list_panes(self, target) -> list[Pane]:
        self.calls.append(("list_panes", str(target)))
        return list(self.sessions[target.session][target.index].panes)

    def new_session(self, name: str, *, detached: bool, cwd=None) -> None:
        self.calls.append(("new_session", name, detached, str(cwd)))
        pane = Pane(index=0, active=True, title="host", current_path=str(cwd), current_command="bash", pid=100)
        self.add_window(Window(name, 0, "bash", True, "deadbeef", (pane,)))

    def new_window(self, session: str, index: int, name: str, cwd=None) -> int:
        self.calls.append(("new_window", session, index, name, cwd))
        pane = Pane(index=0, active=True, title="host", current_path=str(cwd), current_command="bash", pid=200)
        self.add_window(Window(session, index, name, False, "deadbeef", (pane,)))
        return index

    def split_window(self, target, cwd=None) -> None:
        self.calls.append(("split_window", str(target), cwd))
        window = self.sessions[target.session][target.index]
        pane = Pane(index=len(window.panes), active=False, title="host", current_path=str(cwd), current_command="bash")
        self.add_window(dataclasses.replace(window, panes=window.panes + (pane,)))

    def select_layout(self, target, layout: str) -> None:
        self.calls.append(("select_layout", str(target), layout))
        window = self.sessions[target.session][target.index]
        need = self.layout_panes.get(layout)
        if need is not None and need != len(window.panes):
            raise MultiplexerOperationFailed(
                "select-layout", str(target), cause=f"have {len(window.panes)} panes but need {need}"
            )
        self.add_window(dataclasses.replace(window, layout=layout))

    def select_pane(self, target) -> None:
        self.calls.append(("select_pane", str(target)))

    def select_window(self, target) -> None:
        self.calls.append(("select_window", str(target)))

    def kill_window(self, target) -> None:
        self.calls.append(("kill_window", str(target)))
        del self.sessions[target.session][target.index]

    def kill_pane(self, target) -> None:
        self.calls.append(("kill_pane", str(target)))
        window = self.sessions[target.session][target.window]
        panes = tuple(p for p in window.panes if p.index != target.index)
        self.add_window(dataclasses.replace(window, panes=panes))

    def rename_window(self, target, name: str) -> None:
        self.calls.append(("rename_window", str(target), name))
        window = self.sessions[target.session][target.index]
        self.add_window(dataclasses.replace(window, name=name))

    def attach_session(self, name: str) -> None:
        self.calls.append(("attach_session", name))

    def switch_client(self, name: str) -> None:
        self.calls.append(("switch_client", name))


@pytest.fixture
def fake_driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def identity(tmp_path: Path) -> SessionIdentity:
    proj = tmp_path / "h" / "proj"
    proj.mkdir(parents=True)
    return SessionIdentity(
        canonical_dir=proj,
        save_path=tmp_path / "h" / ".tici" / "session_0123456789abcdef_proj.tmux",
        session_name="proj",
    )


@pytest.fixture
def proj_session() -> Session:
    """Two windows: 'edit' with one pane, 'logs' (active) with two."""

    edit = Window(
        session_name="proj",
        index=0,
        name="edit",
        active=False,
        layout="L0",
        panes=(Pane(0, True, "vim", "/h/proj", "vim", 101),),
    )
    logs = Window(
        session_name="proj",
        index=1,
        name="logs",
        active=True,
        layout="L1",
        panes=(
            Pane(0, True, "host", "/h/proj", "bash", 102),
            Pane(1, False, "host", "/var/log", "tail", 103, 2000),
        ),
    )
    return Session(name="proj", windows=(edit, logs))
