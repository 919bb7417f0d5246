from __future__ import annotations

from datetime import date, datetime

import pytest

from errors import InvalidTaskError
from models import Frequency, Task

from .fakes import make_task


def test_window_needs_both_ends() -> None:
    with pytest.raises(InvalidTaskError):
        Task(identifier=1, description="x", do_on_start=datetime(2024, 1, 1, 9))
    with pytest.raises(InvalidTaskError):
        make_task(1, "x", "2024-01-01T10:00", "2024-01-01T09:00")


def test_sort_key_prefers_window_then_deadline() -> None:
    both = make_task(1, "x", "2024-01-05T09:00", "2024-01-05T10:00", by_date=date(2024, 1, 1))
    deadline = make_task(2, "y", by_date=date(2024, 1, 2))

    assert both.sort_key() == datetime(2024, 1, 5, 9)
    assert deadline.sort_key() == datetime(2024, 1, 2)
    assert make_task(3, "z").sort_key() == datetime.max


def test_set_do_on_date_keeps_times() -> None:
    task = make_task(1, "late shift", "2024-01-01T22:00", "2024-01-02T02:00")
    task.set_do_on_date(date(2024, 2, 10))

    assert task.do_on_start == datetime(2024, 2, 10, 22)
    assert task.do_on_end == datetime(2024, 2, 11, 2)


def test_set_do_on_date_without_window() -> None:
    with pytest.raises(InvalidTaskError):
        make_task(1, "x").set_do_on_date(date(2024, 1, 1))


def test_str_rendering() -> None:
    task = make_task(1, "gym", "2024-03-01T09:00", "2024-03-01T10:00",
                     by_date=date(2024, 3, 2), frequency=Frequency.WEEKLY)
    assert str(task) == "[ ] gym (by: 2024-03-02) (on: 2024-03-01 09:00 - 10:00) [weekly]"

    task.mark_as_done()
    assert str(task).startswith("[X] gym")
    assert str(make_task(2, "plain")) == "[ ] plain"


def test_dict_conversion_keeps_every_field() -> None:
    task = make_task(42, "gym", "2024-03-01T09:00", "2024-03-01T10:00",
                     by_date=date(2024, 3, 2), frequency=Frequency.DAILY)
    task.mark_as_done()

    raw = task.to_dict()
    assert raw["do_on_start"] == "2024-03-01T09:00:00"
    assert raw["repeat_frequency"] == "daily"

    restored = Task.from_dict(raw)
    assert restored == task


@pytest.mark.parametrize(
    "raw",
    [
        {"description": "no id"},
        {"identifier": 1},
        {"identifier": 1, "description": "x", "by_date": "tomorrow"},
        {"identifier": 1, "description": "x", "repeat_frequency": "hourly"},
        {"identifier": 1, "description": "x", "is_done": "false"},
        {"identifier": 1, "description": "x", "do_on_start": "2024-01-01T09:00:00+00:00",
         "do_on_end": "2024-01-01T10:00:00+00:00"},
    ],
)
def test_from_dict_rejects_malformed(raw) -> None:
    with pytest.raises(InvalidTaskError):
        Task.from_dict(raw)


def test_frequency_parse() -> None:
    assert Frequency.parse(None) is Frequency.NONE
    assert Frequency.parse(" Monthly ") is Frequency.MONTHLY
