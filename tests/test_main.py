from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from config import Settings
from main import main


@pytest.fixture()
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


def test_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PLANNER_DATA_FILE", str(tmp_path / "t.json"))
    monkeypatch.setenv("PLANNER_STRICT_SERIES", "yes")
    monkeypatch.setenv("PLANNER_STRICT_EDIT", "0")
    monkeypatch.setenv("PLANNER_LOG_LEVEL", "debug")
    monkeypatch.delenv("PLANNER_ALT_SCREEN", raising=False)

    settings = Settings.from_env()

    assert settings.data_file == tmp_path / "t.json"
    assert settings.strict_series is True
    assert settings.strict_edit is False
    assert settings.alt_screen is False
    assert settings.log_level == "DEBUG"


def test_main_runs_a_session(monkeypatch, tmp_path: Path, restore_logging) -> None:
    data_file = tmp_path / "tasks.json"
    monkeypatch.setenv("PLANNER_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("PLANNER_ALT_SCREEN", "0")

    result = CliRunner().invoke(
        main,
        ["--data-file", str(data_file)],
        input="add gym /do 2024-03-01 /start 09:00 /end 10:00\nlist\nexit\n",
    )

    assert result.exit_code == 0, result.output
    assert "Now you have 1 task(s) in your schedule!" in result.output
    assert "Goodbye" in result.output
    saved = json.loads(data_file.read_text(encoding="utf-8"))
    assert [t["description"] for t in saved["tasks"]] == ["gym"]
    assert (tmp_path / "logs" / "planner.log").exists()


def test_main_rejects_corrupt_data_file(monkeypatch, tmp_path: Path, restore_logging) -> None:
    data_file = tmp_path / "tasks.json"
    data_file.write_text("{oops", encoding="utf-8")
    monkeypatch.setenv("PLANNER_LOG_DIR", str(tmp_path / "logs"))

    result = CliRunner().invoke(main, ["--data-file", str(data_file)], input="exit\n")

    assert result.exit_code == 1
    assert "Could not read" in result.output
