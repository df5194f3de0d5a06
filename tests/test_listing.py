from __future__ import annotations

import pytest


def test_formats_use_tabs_and_sentinels() -> None:
    from tici.listing import LIST_PANES_FORMAT, LIST_WINDOWS_FORMAT

    assert "\t:#{window_name}\t" in LIST_WINDOWS_FORMAT
    assert "\t:#{pane_current_path}\t" in LIST_PANES_FORMAT
    assert LIST_PANES_FORMAT.endswith("#{history_size}")


def test_parse_list_windows_payload() -> None:
    from tici.listing import parse_list_windows_payload

    payload = (
        "proj\t0\t:edit\t0\tb25d,80x24,0,0,1\n"
        "proj\t1\t:logs\t1\tc3e1,80x24,0,0{40x24,0,0,2,39x24,41,0,3}\n"
    )
    windows = parse_list_windows_payload(payload)

    assert [w.index for w in windows] == [0, 1]
    assert windows[0].name == "edit"
    assert windows[0].active is False
    assert windows[1].active is True
    assert windows[1].layout == "c3e1,80x24,0,0{40x24,0,0,2,39x24,41,0,3}"
    assert all(w.panes == () for w in windows)


def test_sentinel_is_stripped_exactly_once() -> None:
    from tici.listing import parse_list_windows_payload, strip_sentinel

    assert strip_sentinel(":") == ""
    assert strip_sentinel("::x") == ":x"
    assert strip_sentinel("x") == "x"

    windows = parse_list_windows_payload("proj\t0\t:\t1\tL\nproj\t1\t:  spaced\t0\tL\n")
    assert windows[0].name == ""
    assert windows[1].name == "  spaced"


def test_parse_list_panes_payload() -> None:
    from tici.listing import parse_list_panes_payload

    payload = (
        "0\t:host\t:/home/alice/proj\t1\tvim\t111\t42\n"
        "1\t:\t:/var/log\t0\ttail\tnot-a-number\n"
    )
    panes = parse_list_panes_payload(payload)

    assert panes[0].index == 0
    assert panes[0].title == "host"
    assert panes[0].current_path == "/home/alice/proj"
    assert panes[0].active is True
    assert panes[0].pid == 111
    assert panes[0].history_size == 42

    assert panes[1].title == ""
    assert panes[1].pid == 0
    assert panes[1].history_size == 0


def test_blank_lines_are_skipped() -> None:
    from tici.listing import parse_list_panes_payload, parse_list_windows_payload

    assert parse_list_windows_payload("") == []
    assert parse_list_panes_payload("\n\n") == []


def test_extra_tab_fields_are_ignored() -> None:
    from tici.listing import parse_list_windows_payload

    windows = parse_list_windows_payload("proj\t2\t:w\t0\tL\textra\n")
    assert windows[0].index == 2
    assert windows[0].layout == "L"


@pytest.mark.parametrize(
    "payload",
    [
        "proj\t0\t:edit\t1\n",
        "proj\tzero\t:edit\t1\tL\n",
    ],
)
def test_malformed_window_lines_raise(payload: str) -> None:
    from tici.errors import MalformedMultiplexerOutput
    from tici.listing import parse_list_windows_payload

    with pytest.raises(MalformedMultiplexerOutput) as exc:
        parse_list_windows_payload(payload)
    assert exc.value.op == "list-windows"


def test_malformed_pane_lines_raise() -> None:
    from tici.errors import MalformedMultiplexerOutput
    from tici.listing import parse_list_panes_payload

    with pytest.raises(MalformedMultiplexerOutput):
        parse_list_panes_payload("0\t:host\t:/tmp\t1\n")
