"""Persistence helpers (load/save) for the task list.

Tasks are stored as {"tasks": [...]} in a pretty-printed JSON file. A
file holding a bare list (older layout) is still accepted on load.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, TYPE_CHECKING, Union

from errors import StorageError

if TYPE_CHECKING:  # pragma: no cover
    from task_list import TaskList

logger = logging.getLogger(__name__)

DEFAULT_TASKS_FILE = Path(__file__).parent.parent / 'data' / 'tasks.json'

TaskEntry = Dict[str, Any]


class Storage:
    def __init__(self, path: Union[str, Path] = DEFAULT_TASKS_FILE):
        self.path = Path(path)

    def load_tasks(self) -> List[TaskEntry]:
        """Load raw task entries from disk.

        Missing file -> empty list. Unreadable JSON raises StorageError.
        """
        if not self.path.exists():
            logger.info('No data file at %s; starting empty', self.path)
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:  # JSONDecodeError, UnicodeDecodeError
            raise StorageError(f'Could not read {self.path}: {exc}') from exc
        if isinstance(data, list):  # legacy layout
            entries = data
        elif isinstance(data, dict):
            entries = data.get('tasks', [])
        else:
            raise StorageError(f'Unexpected data in {self.path}')
        if not isinstance(entries, list):
            raise StorageError(f'Unexpected data in {self.path}')
        return [e for e in entries if isinstance(e, dict)]

    def save_tasks(self, tasks_data: List[TaskEntry]) -> None:
        """Persist task entries to disk (pretty-printed)."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump({'tasks': tasks_data}, f, indent=4)
        except OSError as exc:
            raise StorageError(f'Could not write {self.path}: {exc}') from exc
        logger.debug('Saved %d task(s) to %s', len(tasks_data), self.path)

    def persist(self, task_list: TaskList) -> None:
        self.save_tasks(task_list.get_tasks())
