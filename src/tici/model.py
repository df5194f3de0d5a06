from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Pane:
    index: int
    active: bool
    title: str
    current_path: str
    current_command: str
    pid: int = 0
    history_size: int = 0


@dataclass(frozen=True, slots=True)
class Window:
    session_name: str
    index: int
    name: str
    active: bool
    layout: str  # opaque tmux layout token, never interpreted
    panes: tuple[Pane, ...] = field(default_factory=tuple)

    @property
    def active_pane(self) -> Pane | None:
        """First pane flagged active; saved files may flag more than one."""

        return next((p for p in self.panes if p.active), None)

    @property
    def first_pane_path(self) -> str | None:
        return self.panes[0].current_path if self.panes else None


@dataclass(frozen=True, slots=True)
class Session:
    name: str
    windows: tuple[Window, ...] = field(default_factory=tuple)

    @property
    def active_window(self) -> Window | None:
        return next((w for w in self.windows if w.active), None)

    @property
    def pane_count(self) -> int:
        return sum(len(w.panes) for w in self.windows)
