"""Task list engine: ordering, identifiers, clash detection and recurrence.

The list is kept sorted by schedule time (do-on start, else by-date) and
every task's display index matches its 1-based position. Results are
reported through a message sink and the list is handed to a persistence
sink after each mutation; neither sink is inspected for failure.
"""
from __future__ import annotations
import logging
import random
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Set

from dateutil.relativedelta import relativedelta

from errors import (IdentifierExhaustedError, InvalidTaskError, ScheduleClashError,
                    TaskIndexError)
from models import Frequency, Task

logger = logging.getLogger(__name__)

IDENTIFIER_SPACE = 65536

Present = Callable[[str], None]
Persist = Callable[['TaskList'], None]

# one step between occurrences, and how far a series reaches from its first start
STEP: Dict[Frequency, relativedelta] = {
    Frequency.DAILY: relativedelta(days=1),
    Frequency.WEEKLY: relativedelta(weeks=1),
    Frequency.MONTHLY: relativedelta(months=1),
}
SERIES_SPAN: Dict[Frequency, relativedelta] = {
    Frequency.DAILY: relativedelta(months=1),
    Frequency.WEEKLY: relativedelta(months=2),
    Frequency.MONTHLY: relativedelta(years=1),
}


def get_end_date_for_recurrence(start: datetime, frequency: Frequency) -> datetime:
    """Exclusive boundary for a series starting at ``start``."""
    return start + SERIES_SPAN[frequency]


def prepare_next_task(current: Task) -> Task:
    """Next occurrence of ``current``; start and end advance independently."""
    step = STEP[current.repeat_frequency]
    return Task(
        identifier=current.identifier,
        description=current.description,
        do_on_start=current.do_on_start + step,
        do_on_end=current.do_on_end + step,
        repeat_frequency=current.repeat_frequency,
    )


def windows_clash(new_task: Task, task: Task) -> bool:
    """Same-day overlap test between two do-on windows."""
    if not (new_task.has_do_on() and task.has_do_on()):
        return False
    if new_task.do_on_date != task.do_on_date:
        return False
    new_start, new_end = new_task.do_on_start, new_task.do_on_end
    start, end = task.do_on_start, task.do_on_end
    return (new_start == start
            or (new_end > start and new_start < start)
            or (new_start < end and new_end > end)
            or (new_start > start and new_end < end)
            or (start > new_start and end < new_end))


def expand_series(first: Task, existing: Sequence[Task], strict: bool = False) -> List[Task]:
    """Generate every occurrence of the series beginning with ``first``.

    Each occurrence is checked against ``existing`` only, unless ``strict``
    is set, in which case it is also checked against earlier occurrences of
    the same series. Raises ScheduleClashError on the first clash.
    """
    if not first.has_do_on():
        raise InvalidTaskError('A repeating task needs a do-on window.')
    if first.repeat_frequency is Frequency.NONE:
        raise InvalidTaskError('A repeating task needs a frequency.')
    boundary = get_end_date_for_recurrence(first.do_on_start, first.repeat_frequency)
    occurrences: List[Task] = []
    current = first
    while True:
        others = list(existing) + occurrences if strict else existing
        if any(windows_clash(current, task) for task in others):
            raise ScheduleClashError()
        occurrences.append(current)
        current = prepare_next_task(current)
        if current.do_on_start >= boundary:
            break
    return occurrences


class TaskList:
    def __init__(self,
                 saved_tasks: Optional[Iterable[Mapping[str, Any]]] = None,
                 present: Present = print,
                 persist: Optional[Persist] = None,
                 strict_series: bool = False,
                 strict_edit: bool = False,
                 rng: Optional[random.Random] = None):
        self._tasks: List[Task] = []
        self._identifiers: Set[int] = set()
        self._present = present
        self._persist = persist
        self.strict_series = strict_series
        self.strict_edit = strict_edit
        self._rng = rng or random.Random()
        if saved_tasks:
            self._load_from_dicts(saved_tasks)

    # -------------------- loading --------------------
    def _load_from_dicts(self, saved_tasks: Iterable[Mapping[str, Any]]) -> None:
        for raw in saved_tasks:
            try:
                task = Task.from_dict(raw)
            except InvalidTaskError as exc:
                logger.warning('Skipping saved task: %s', exc)
                continue
            self._tasks.append(task)
        self._refresh_identifiers()
        self._sort_and_reindex()
        logger.debug('Loaded %d task(s), %d identifier(s)', len(self._tasks), len(self._identifiers))

    def _refresh_identifiers(self) -> None:
        self._identifiers = {task.identifier for task in self._tasks}

    # -------------------- derived state --------------------
    def _sort_and_reindex(self) -> None:
        self._tasks.sort(key=Task.sort_key)
        self._update_index()

    def _update_index(self) -> None:
        for position, task in enumerate(self._tasks, start=1):
            task.index = position

    def _check_index(self, index: int) -> None:
        if not self.is_task_exist(index):
            raise TaskIndexError(index, len(self._tasks))

    def _save(self) -> None:
        if self._persist is not None:
            self._persist(self)

    # -------------------- queries --------------------
    @property
    def tasks(self) -> Sequence[Task]:
        return tuple(self._tasks)

    @property
    def identifiers(self) -> frozenset:
        return frozenset(self._identifiers)

    @property
    def size(self) -> int:
        return len(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def is_task_exist(self, index: int) -> bool:
        return 0 <= index < len(self._tasks)

    def get_task(self, index: int) -> Task:
        self._check_index(index)
        return self._tasks[index]

    def is_task_done(self, index: int) -> bool:
        return self.get_task(index).is_done

    def has_date_time_clash(self, new_task: Task, tasks: Optional[Sequence[Task]] = None) -> bool:
        pool = self._tasks if tasks is None else tasks
        return any(windows_clash(new_task, task) for task in pool)

    def get_filtered_tasks_by_date(self, day: date) -> List[Task]:
        return [t for t in self._tasks if t.has_do_on() and t.do_on_date == day]

    def get_pending_tasks_count(self) -> int:
        return sum(1 for t in self._tasks if not t.is_done)

    def get_tasks(self) -> List[Dict[str, Any]]:
        return [task.to_dict() for task in self._tasks]

    # -------------------- identifiers --------------------
    def generate_identifier(self) -> int:
        if len(self._identifiers) >= IDENTIFIER_SPACE:
            raise IdentifierExhaustedError('All task identifiers are in use.')
        while True:
            candidate = self._rng.randrange(IDENTIFIER_SPACE)
            if candidate not in self._identifiers:
                return candidate

    # -------------------- task operations --------------------
    def add_task(self, new_task: Task, is_repeat: Optional[bool] = None) -> bool:
        """Insert a task, or a whole series when repeating.

        Returns False (and reports the clash) if any new occurrence would
        double-book an existing task; nothing is inserted in that case.
        """
        if is_repeat is None:
            is_repeat = new_task.is_repeating
        try:
            if is_repeat:
                to_add = expand_series(new_task, self._tasks, strict=self.strict_series)
            else:
                if self.has_date_time_clash(new_task):
                    raise ScheduleClashError()
                to_add = [new_task]
        except ScheduleClashError as exc:
            logger.info('Rejected task %r: schedule clash', new_task.description)
            self._present(str(exc))
            return False
        self._tasks.extend(to_add)
        self._identifiers.add(new_task.identifier)
        self._sort_and_reindex()
        logger.info('Added %d occurrence(s) of task %d', len(to_add), new_task.identifier)
        self._save()
        label = 'repeated task' if is_repeat else 'task'
        self._present(f"Got it! I've added this {label}:\n   {to_add[0]}\n"
                      f"Now you have {len(self._tasks)} task(s) in your schedule!")
        return True

    def edit_task(self, index: int,
                  description: Optional[str] = None,
                  by_date: Optional[date] = None,
                  do_on_date: Optional[date] = None) -> Task:
        self._check_index(index)
        task = self._tasks[index]
        if do_on_date is not None:
            if not task.has_do_on():
                raise InvalidTaskError('This task has no do-on window to move.')
            if self.strict_edit:
                moved = Task(identifier=task.identifier, description=task.description,
                             do_on_start=task.do_on_start, do_on_end=task.do_on_end)
                moved.set_do_on_date(do_on_date)
                others = [t for t in self._tasks if t is not task]
                if self.has_date_time_clash(moved, others):
                    raise ScheduleClashError()
        if description is not None and description.strip():
            task.set_description(description.strip())
        if by_date is not None:
            task.set_by_date(by_date)
        if do_on_date is not None:
            task.set_do_on_date(do_on_date)
        self._sort_and_reindex()
        logger.info('Edited task %d', task.identifier)
        self._present(f"Ok, I've edited this task as such!\n  {task}")
        self._save()
        return task

    def mark_task(self, index: int) -> Task:
        task = self.get_task(index)
        task.mark_as_done()
        self._present(f"Nice! I've marked this task as done:\n  {task}")
        self._save()
        return task

    def unmark_task(self, index: int) -> Task:
        task = self.get_task(index)
        task.mark_as_undone()
        self._present(f"Ok, I've marked this task as not done yet:\n  {task}")
        self._save()
        return task

    def remove_task(self, index: int) -> Task:
        self._check_index(index)
        removed = self._tasks.pop(index)
        if all(t.identifier != removed.identifier for t in self._tasks):
            self._identifiers.discard(removed.identifier)
        self._update_index()
        logger.info('Removed task %d', removed.identifier)
        self._save()
        self._present(f"Okay. I've removed this task:\n  {removed}\n"
                      f"Now you have {len(self._tasks)} task(s) in the list.")
        return removed

    def delete_all_tasks(self) -> None:
        self._tasks.clear()
        self._identifiers.clear()
        logger.info('Deleted all tasks')
        self._save()
        self._present(f'Done! Now you have {len(self._tasks)} task(s) in the list.')

    # -------------------- display --------------------
    def _present_numbered(self, tasks: Iterable[Task]) -> None:
        for task in tasks:
            self._present(f'{task.index}. {task}')

    def print_all_tasks(self) -> None:
        if not self._tasks:
            self._present('Your schedule is empty.')
            return
        self._present('Here are the tasks in your list:')
        self._present_numbered(self._tasks)
        self._present(f'You have {len(self._tasks)} task(s) in your list.')

    def print_pending_tasks(self) -> None:
        pending = [t for t in self._tasks if not t.is_done]
        if not pending:
            self._present('You have no pending tasks.')
            return
        self._present('Here are your pending tasks:')
        self._present_numbered(pending)
        self._present(f'You have {len(pending)} pending task(s).')

    def print_tasks_on_date(self, day: date) -> None:
        on_day = self.get_filtered_tasks_by_date(day)
        if not on_day:
            self._present(f'You have nothing scheduled on {day.isoformat()}.')
            return
        self._present(f'Here is your schedule for {day.isoformat()}:')
        self._present_numbered(on_day)

    def __str__(self) -> str:
        return f'{len(self._tasks)} task(s), {self.get_pending_tasks_count()} pending'
