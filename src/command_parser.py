"""Turns one REPL line into a Command.

Task numbers typed by the user are 1-based; Command.index is 0-based.
Dates are YYYY-MM-DD and times HH:MM.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Dict, Optional, Tuple

from errors import ParseError
from models import DATE_FORMAT, Frequency, TIME_FORMAT

FLAG_RE = re.compile(r'\s/(by|do|start|end|repeat)\b\s*')

ADD_USAGE = ('Usage: add <description> [/by YYYY-MM-DD] '
             '[/do YYYY-MM-DD /start HH:MM /end HH:MM] [/repeat daily|weekly|monthly]')
EDIT_USAGE = 'Usage: edit <n> [<description>] [/by YYYY-MM-DD] [/do YYYY-MM-DD]'


@dataclass
class Command:
    name: str
    index: Optional[int] = None
    description: Optional[str] = None
    by_date: Optional[date] = None
    do_on_date: Optional[date] = None
    do_on_start: Optional[datetime] = None
    do_on_end: Optional[datetime] = None
    frequency: Frequency = Frequency.NONE
    day: Optional[date] = None
    everything: bool = False
    pending: bool = False


def parse_date(raw: str) -> date:
    try:
        return datetime.strptime(raw.strip(), DATE_FORMAT).date()
    except ValueError:
        raise ParseError(f'Invalid date "{raw}". Use YYYY-MM-DD.') from None


def parse_time(raw: str) -> time:
    try:
        return datetime.strptime(raw.strip(), TIME_FORMAT).time()
    except ValueError:
        raise ParseError(f'Invalid time "{raw}". Use HH:MM.') from None


def parse_index(raw: str) -> int:
    raw = raw.strip().rstrip('.')
    if not raw.isdigit() or int(raw) < 1:
        raise ParseError('Invalid task number.')
    return int(raw) - 1


def _split_flags(rest: str, allowed: Tuple[str, ...], usage: str) -> Tuple[str, Dict[str, str]]:
    parts = FLAG_RE.split(' ' + rest)
    text = parts[0].strip()
    flags: Dict[str, str] = {}
    for name, value in zip(parts[1::2], parts[2::2]):
        if name not in allowed or name in flags:
            raise ParseError(usage)
        value = value.strip()
        if not value:
            raise ParseError(f'Missing value for /{name}.')
        flags[name] = value
    return text, flags


def _parse_add(rest: str) -> Command:
    text, flags = _split_flags(rest, ('by', 'do', 'start', 'end', 'repeat'), ADD_USAGE)
    if not text:
        raise ParseError('The description of a task cannot be empty.')
    command = Command('add', description=text)
    if 'by' in flags:
        command.by_date = parse_date(flags['by'])
    window_flags = [name for name in ('do', 'start', 'end') if name in flags]
    if window_flags and len(window_flags) != 3:
        raise ParseError('A do-on window needs /do, /start and /end.')
    if window_flags:
        day = parse_date(flags['do'])
        command.do_on_start = datetime.combine(day, parse_time(flags['start']))
        command.do_on_end = datetime.combine(day, parse_time(flags['end']))
        if command.do_on_end <= command.do_on_start:
            raise ParseError('The end time must be after the start time.')
    if 'repeat' in flags:
        if not window_flags:
            raise ParseError('A repeating task needs a do-on window.')
        try:
            command.frequency = Frequency(flags['repeat'].lower())
        except ValueError:
            raise ParseError('Repeat must be one of: daily, weekly, monthly.') from None
        if command.frequency is Frequency.NONE:
            raise ParseError('Repeat must be one of: daily, weekly, monthly.')
    return command


def _parse_edit(rest: str) -> Command:
    text, flags = _split_flags(rest, ('by', 'do'), EDIT_USAGE)
    if not text:
        raise ParseError(EDIT_USAGE)
    number, _, description = text.partition(' ')
    command = Command('edit', index=parse_index(number), description=description.strip() or None)
    if 'by' in flags:
        command.by_date = parse_date(flags['by'])
    if 'do' in flags:
        command.do_on_date = parse_date(flags['do'])
    if command.description is None and command.by_date is None and command.do_on_date is None:
        raise ParseError('Nothing to edit. ' + EDIT_USAGE)
    return command


def parse_command(line: str) -> Command:
    line = line.strip()
    if not line:
        raise ParseError('Please enter a command.')
    word, _, rest = line.partition(' ')
    word = word.lower()
    rest = rest.strip()
    if word == 'add':
        return _parse_add(rest)
    if word == 'edit':
        return _parse_edit(rest)
    if word in ('mark', 'unmark'):
        if not rest:
            raise ParseError(f'Usage: {word} <n>')
        return Command(word, index=parse_index(rest))
    if word == 'delete':
        if rest.lower() == 'all':
            return Command('delete', everything=True)
        if not rest:
            raise ParseError('Usage: delete <n> | delete all')
        return Command('delete', index=parse_index(rest))
    if word == 'list':
        if not rest:
            return Command('list')
        if rest.lower() == 'pending':
            return Command('list', pending=True)
        return Command('list', day=parse_date(rest))
    if word in ('help', 'exit'):
        if rest:
            raise ParseError(f'"{word}" takes no arguments.')
        return Command(word)
    raise ParseError("Unknown command. Type 'help' for instructions.")
