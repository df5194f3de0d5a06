"""Text format of a saved session.

One record per line, fields separated by '|'::

    # Window: <session>|<index>|<name>|<active>|<layout>
    # Pane: <index>|<active>|<title>|<path>|<command>|<pid>|<history_size>

Pane records belong to the closest preceding window record. Fields are not
escaped; values containing '|' are refused when writing so an ambiguous file
is never produced. Only structure is kept, never pane contents.
"""

from __future__ import annotations

import logging

from .errors import EmptySession, MalformedRecord, UnserializableField
from .model import Pane, Session, Window

logger = logging.getLogger(__name__)

WINDOW_TAG = "# Window: "
PANE_TAG = "# Pane: "
SEP = "|"

WINDOW_FIELDS = 5
PANE_FIELDS = 6  # a seventh field (history_size) is optional


def _field(name: str, value: str) -> str:
    if SEP in value or "\n" in value or "\r" in value:
        raise UnserializableField(name, value)
    return value


def _flag(value: bool) -> str:
    return "1" if value else "0"


def serialize_window(window: Window) -> str:
    fields = [
        _field("session name", window.session_name),
        str(window.index),
        _field("window name", window.name),
        _flag(window.active),
        _field("layout", window.layout),
    ]
    return WINDOW_TAG + SEP.join(fields)


def serialize_pane(pane: Pane) -> str:
    fields = [
        str(pane.index),
        _flag(pane.active),
        _field("pane title", pane.title),
        _field("pane path", pane.current_path),
        _field("pane command", pane.current_command),
        str(pane.pid),
        str(pane.history_size),
    ]
    return PANE_TAG + SEP.join(fields)


def serialize(session: Session) -> str:
    lines: list[str] = []
    for window in session.windows:
        lines.append(serialize_window(window))
        lines.extend(serialize_pane(p) for p in window.panes)
    return "\n".join(lines) + "\n" if lines else ""


def _int(value: str, line: str, what: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise MalformedRecord(line, cause=f"{what} {value!r} is not a number") from None
    if n < 0:
        raise MalformedRecord(line, cause=f"{what} {n} is negative")
    return n


def _int_or_zero(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def parse_window(line: str) -> Window:
    parts = line[len(WINDOW_TAG) :].split(SEP)
    if len(parts) < WINDOW_FIELDS:
        raise MalformedRecord(line, cause=f"expected {WINDOW_FIELDS} fields, got {len(parts)}")
    session_name, index, name, active, layout = parts[:WINDOW_FIELDS]
    return Window(
        session_name=session_name,
        index=_int(index, line, "window index"),
        name=name,
        active=active == "1",
        layout=layout,
    )


def parse_pane(line: str) -> Pane:
    parts = line[len(PANE_TAG) :].split(SEP)
    if len(parts) < PANE_FIELDS:
        raise MalformedRecord(line, cause=f"expected {PANE_FIELDS} fields, got {len(parts)}")
    index, active, title, path, cmd, pid = parts[:PANE_FIELDS]
    history = parts[PANE_FIELDS] if len(parts) > PANE_FIELDS else ""
    return Pane(
        index=_int(index, line, "pane index"),
        active=active == "1",
        title=title,
        current_path=path,
        current_command=cmd,
        pid=_int_or_zero(pid),
        history_size=_int_or_zero(history),
    )


def parse(text: str) -> Session:
    """Parse a saved session.

    Unknown and blank lines are skipped, panes that precede every window are
    dropped, extra trailing fields are ignored. Raises MalformedRecord for a
    record missing required fields or carrying a bad/duplicate index, and
    EmptySession when no window record is found.
    """

    # (window, panes) in file order; tuples are only built at the end.
    records: list[tuple[Window, list[Pane]]] = []

    for raw_line in text.splitlines():
        line = raw_line.rstrip("\r")
        if line.startswith(WINDOW_TAG):
            window = parse_window(line)
            if any(w.index == window.index for w, _ in records):
                raise MalformedRecord(line, cause=f"duplicate window index {window.index}")
            records.append((window, []))
        elif line.startswith(PANE_TAG):
            if not records:
                logger.debug("dropping pane record outside any window: %r", line)
                continue
            pane = parse_pane(line)
            panes = records[-1][1]
            if any(p.index == pane.index for p in panes):
                raise MalformedRecord(line, cause=f"duplicate pane index {pane.index}")
            panes.append(pane)

    if not records:
        raise EmptySession()

    windows = tuple(
        Window(
            session_name=w.session_name,
            index=w.index,
            name=w.name,
            active=w.active,
            layout=w.layout,
            panes=tuple(panes),
        )
        for w, panes in records
    )
    return Session(name=windows[0].session_name, windows=windows)
