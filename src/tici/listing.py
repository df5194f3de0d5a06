from __future__ import annotations

from .errors import MalformedMultiplexerOutput
from .model import Pane, Window

# We use tab as a delimiter to avoid ambiguity in paths/commands.
# Fields that may be empty or start with whitespace get a ':' sentinel so
# tmux never emits a bare empty column; the parser strips exactly one.
LIST_WINDOWS_FORMAT = "#{session_name}\t#{window_index}\t:#{window_name}\t#{window_active}\t#{window_layout}"
LIST_PANES_FORMAT = (
    "#{pane_index}\t:#{pane_title}\t:#{pane_current_path}\t#{pane_active}"
    "\t#{pane_current_command}\t#{pane_pid}\t#{history_size}"
)

WINDOW_FIELDS = 5
PANE_FIELDS = 6  # history_size is optional


def strip_sentinel(value: str) -> str:
    return value[1:] if value.startswith(":") else value


def _int_or_zero(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def _lines(payload: str) -> list[str]:
    return [line for line in payload.splitlines() if line]


def parse_list_windows_payload(payload: str) -> list[Window]:
    """Parse `list-windows -F LIST_WINDOWS_FORMAT` output into pane-less windows."""

    windows: list[Window] = []
    for line in _lines(payload):
        parts = line.split("\t")
        if len(parts) < WINDOW_FIELDS:
            raise MalformedMultiplexerOutput("list-windows", line)
        session_name, index_s, name, active, layout = parts[:WINDOW_FIELDS]
        try:
            index = int(index_s)
        except ValueError:
            raise MalformedMultiplexerOutput("list-windows", line) from None
        windows.append(
            Window(
                session_name=session_name,
                index=index,
                name=strip_sentinel(name),
                active=active == "1",
                layout=layout,
            )
        )
    return windows


def parse_list_panes_payload(payload: str) -> list[Pane]:
    """Parse `list-panes -F LIST_PANES_FORMAT` output.

    pid and history_size are informational; unparsable values become 0.
    """

    panes: list[Pane] = []
    for line in _lines(payload):
        parts = line.split("\t")
        if len(parts) < PANE_FIELDS:
            raise MalformedMultiplexerOutput("list-panes", line)
        index_s, title, path, active, cmd, pid_s = parts[:PANE_FIELDS]
        try:
            index = int(index_s)
        except ValueError:
            raise MalformedMultiplexerOutput("list-panes", line) from None
        history = parts[PANE_FIELDS] if len(parts) > PANE_FIELDS else ""
        panes.append(
            Pane(
                index=index,
                active=active == "1",
                title=strip_sentinel(title),
                current_path=strip_sentinel(path),
                current_command=cmd,
                pid=_int_or_zero(pid_s),
                history_size=_int_or_zero(history),
            )
        )
    return panes
