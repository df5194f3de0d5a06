from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import InvalidSessionName

# tmux reads these as session:window.pane separators.
RESERVED_TARGET_CHARS = frozenset(":.")


def check_session_name(name: str) -> str:
    if not name or any(ch in RESERVED_TARGET_CHARS for ch in name):
        raise InvalidSessionName(name)
    return name


def exact_session(name: str) -> str:
    # A bare name is matched by prefix ("proj" finds "project"); '=' forces an exact match.
    return "=" + check_session_name(name)


@dataclass(frozen=True)
class WindowTarget:
    session: str
    index: int

    def __post_init__(self) -> None:
        check_session_name(self.session)

    def __str__(self) -> str:
        return f"{self.session}:{self.index}"

    @property
    def exact(self) -> str:
        return f"{exact_session(self.session)}:{self.index}"

    def pane(self, index: int) -> "PaneTarget":
        return PaneTarget(session=self.session, window=self.index, index=index)


@dataclass(frozen=True)
class PaneTarget:
    session: str
    window: int
    index: int

    def __post_init__(self) -> None:
        check_session_name(self.session)

    def __str__(self) -> str:
        return f"{self.session}:{self.window}.{self.index}"

    @property
    def exact(self) -> str:
        return f"{exact_session(self.session)}:{self.window}.{self.index}"


def inside_tmux() -> bool:
    return bool(os.environ.get("TMUX"))
