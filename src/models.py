"""Data models for the terminal planner.

Exposes the Frequency enum and the Task dataclass. A task carries an
optional deadline ("by" date) and an optional do-on window; recurring
tasks are stored as one Task per occurrence, all sharing an identifier.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from errors import InvalidTaskError

DATE_FORMAT = '%Y-%m-%d'
TIME_FORMAT = '%H:%M'


class Frequency(str, Enum):
    NONE = 'none'
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'

    @classmethod
    def parse(cls, raw: Optional[str]) -> Frequency:
        if not raw:
            return cls.NONE
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise InvalidTaskError(f'Unknown repeat frequency: {raw}') from None


@dataclass
class Task:
    """A single schedulable task (or one occurrence of a series).

    Fields:
        identifier: Random id in [0, 65536); shared by a whole series.
        description: Free text.
        by_date: Optional deadline (date only).
        do_on_start / do_on_end: Optional window; both set or both None.
        repeat_frequency: Recurrence of the series this task belongs to.
        is_done: Completion flag.
        index: 1-based display position, rewritten by the task list.
    """
    identifier: int
    description: str
    by_date: Optional[date] = None
    do_on_start: Optional[datetime] = None
    do_on_end: Optional[datetime] = None
    repeat_frequency: Frequency = Frequency.NONE
    is_done: bool = False
    index: int = 0

    def __post_init__(self) -> None:
        if (self.do_on_start is None) != (self.do_on_end is None):
            raise InvalidTaskError('A do-on window needs both a start and an end.')
        if self.do_on_start is not None and self.do_on_end < self.do_on_start:
            raise InvalidTaskError('The do-on window ends before it starts.')

    # -------------------- state --------------------
    def mark_as_done(self) -> None:
        self.is_done = True

    def mark_as_undone(self) -> None:
        self.is_done = False

    def set_description(self, description: str) -> None:
        self.description = description

    def set_by_date(self, by_date: date) -> None:
        self.by_date = by_date

    def set_do_on_date(self, new_date: date) -> None:
        """Move the window to another day, keeping its times of day."""
        if self.do_on_start is None or self.do_on_end is None:
            raise InvalidTaskError('This task has no do-on window to move.')
        shift = new_date - self.do_on_start.date()
        self.do_on_start += shift
        self.do_on_end += shift

    # -------------------- queries --------------------
    def has_do_on(self) -> bool:
        return self.do_on_start is not None

    @property
    def do_on_date(self) -> Optional[date]:
        return self.do_on_start.date() if self.do_on_start is not None else None

    @property
    def is_repeating(self) -> bool:
        return self.repeat_frequency is not Frequency.NONE

    def sort_key(self) -> datetime:
        if self.do_on_start is not None:
            return self.do_on_start
        if self.by_date is not None:
            return datetime.combine(self.by_date, time.min)
        return datetime.max

    # -------------------- serialization --------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            'identifier': self.identifier,
            'description': self.description,
            'by_date': self.by_date.isoformat() if self.by_date else None,
            'do_on_start': self.do_on_start.isoformat() if self.do_on_start else None,
            'do_on_end': self.do_on_end.isoformat() if self.do_on_end else None,
            'repeat_frequency': self.repeat_frequency.value,
            'is_done': self.is_done,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Task:
        identifier = raw.get('identifier')
        description = raw.get('description')
        if not isinstance(identifier, int) or description is None:
            raise InvalidTaskError(f'Malformed task entry: {dict(raw)!r}')
        try:
            by_date = date.fromisoformat(raw['by_date']) if raw.get('by_date') else None
            start = datetime.fromisoformat(raw['do_on_start']) if raw.get('do_on_start') else None
            end = datetime.fromisoformat(raw['do_on_end']) if raw.get('do_on_end') else None
        except (TypeError, ValueError) as exc:
            raise InvalidTaskError(f'Malformed date in task entry: {exc}') from exc
        # windows are naive local times; an offset would not compare with them
        if any(dt is not None and dt.tzinfo is not None for dt in (start, end)):
            raise InvalidTaskError(f'Do-on window must not carry a UTC offset: {dict(raw)!r}')
        is_done = raw.get('is_done', False)
        if not isinstance(is_done, bool):
            raise InvalidTaskError(f'Malformed done flag in task entry: {is_done!r}')
        return cls(
            identifier=identifier,
            description=str(description),
            by_date=by_date,
            do_on_start=start,
            do_on_end=end,
            repeat_frequency=Frequency.parse(raw.get('repeat_frequency')),
            is_done=is_done,
        )

    # -------------------- display --------------------
    def __str__(self) -> str:
        parts = [f"[{'X' if self.is_done else ' '}] {self.description}"]
        if self.by_date is not None:
            parts.append(f'(by: {self.by_date.strftime(DATE_FORMAT)})')
        if self.do_on_start is not None and self.do_on_end is not None:
            start = self.do_on_start.strftime(f'{DATE_FORMAT} {TIME_FORMAT}')
            if self.do_on_end.date() == self.do_on_start.date():
                end = self.do_on_end.strftime(TIME_FORMAT)
            else:
                end = self.do_on_end.strftime(f'{DATE_FORMAT} {TIME_FORMAT}')
            parts.append(f'(on: {start} - {end})')
        if self.is_repeating:
            parts.append(f'[{self.repeat_frequency.value}]')
        return ' '.join(parts)
