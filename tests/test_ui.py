from __future__ import annotations

import theme
from ui import Ui


def test_palette_reads_hex_override(monkeypatch) -> None:
    monkeypatch.setenv("PLANNER_TEST", "#ffffff")
    assert theme._palette("TEST", "#000000") == "\033[38;5;231m"

    monkeypatch.setenv("PLANNER_TEST", "not-a-color")
    assert theme._palette("TEST", "#000000") == "\033[38;5;16m"


def test_rows_are_tinted_by_status(monkeypatch, capsys) -> None:
    monkeypatch.setattr(theme, "ENABLED", True)

    Ui().show_to_user("1. [X] done thing\n2. [ ] open thing", "plain")

    out = capsys.readouterr().out.splitlines()
    assert out[0] == theme.DONE_COLOR + "1. [X] done thing" + theme.RESET
    assert out[1] == theme.PENDING_COLOR + "2. [ ] open thing" + theme.RESET
    assert out[2] == "plain"


def test_no_color_when_disabled(monkeypatch, capsys) -> None:
    monkeypatch.setattr(theme, "ENABLED", False)

    Ui().show_error("boom")

    assert capsys.readouterr().out == "boom\n"
