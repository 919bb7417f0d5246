from __future__ import annotations

from datetime import date, datetime

import pytest

from command_parser import parse_command
from errors import ParseError
from models import Frequency


def test_add_with_everything() -> None:
    command = parse_command(
        "add team sync /by 2024-03-08 /do 2024-03-01 /start 09:00 /end 10:30 /repeat Weekly"
    )

    assert command.name == "add"
    assert command.description == "team sync"
    assert command.by_date == date(2024, 3, 8)
    assert command.do_on_start == datetime(2024, 3, 1, 9)
    assert command.do_on_end == datetime(2024, 3, 1, 10, 30)
    assert command.frequency is Frequency.WEEKLY


def test_add_description_only() -> None:
    command = parse_command("add   Buy milk  ")
    assert command.description == "Buy milk"
    assert command.do_on_start is None
    assert command.frequency is Frequency.NONE


@pytest.mark.parametrize(
    "line",
    [
        "add",
        "add /by 2024-03-01",
        "add x /by 01/03/2024",
        "add x /do 2024-03-01 /start 09:00",
        "add x /do 2024-03-01 /start 10:00 /end 09:00",
        "add x /do 2024-03-01 /start 9am /end 10:00",
        "add x /repeat daily",
        "add x /do 2024-03-01 /start 09:00 /end 10:00 /repeat yearly",
        "add x /do 2024-03-01 /start 09:00 /end 10:00 /repeat none",
        "add x /by 2024-03-01 /by 2024-03-02",
        "add x /by",
    ],
)
def test_bad_add(line: str) -> None:
    with pytest.raises(ParseError):
        parse_command(line)


def test_edit_numbers_are_one_based() -> None:
    command = parse_command("edit 3 new words /do 2024-04-01")
    assert command.index == 2
    assert command.description == "new words"
    assert command.do_on_date == date(2024, 4, 1)
    assert command.by_date is None


@pytest.mark.parametrize("line", ["edit", "edit 2", "edit x new", "edit 0 new", "edit 1 x /start 09:00"])
def test_bad_edit(line: str) -> None:
    with pytest.raises(ParseError):
        parse_command(line)


def test_index_commands() -> None:
    assert parse_command("mark 1").index == 0
    assert parse_command("UNMARK 2").name == "unmark"
    assert parse_command("delete 4.").index == 3
    assert parse_command("delete all").everything is True


def test_list_variants() -> None:
    assert parse_command("list").day is None
    assert parse_command("list pending").pending is True
    assert parse_command("list 2024-03-01").day == date(2024, 3, 1)


@pytest.mark.parametrize("line", ["", "mark", "mark -1", "delete", "list tomorrow", "exit now", "frobnicate"])
def test_bad_commands(line: str) -> None:
    with pytest.raises(ParseError):
        parse_command(line)
