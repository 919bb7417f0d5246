from __future__ import annotations

import random
from pathlib import Path

import pytest

from storage import Storage
from task_list import TaskList

from .fakes import Recorder


@pytest.fixture()
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture()
def task_list(recorder: Recorder) -> TaskList:
    return TaskList(present=recorder.present, persist=recorder.persist, rng=random.Random(1234))


@pytest.fixture()
def storage(tmp_path: Path) -> Storage:
    return Storage(tmp_path / "data" / "tasks.json")
