"""Settings loaded from environment variables (+ optional .env).

Every variable uses the PLANNER_ prefix. Command-line options given to
the entry point take precedence over these values.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from storage import DEFAULT_TASKS_FILE

ENV_PREFIX = 'PLANNER'

load_dotenv(override=False)


def _k(suffix: str) -> str:
    return f'{ENV_PREFIX}_{suffix}'


def _truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {'0', 'false', 'no', 'off', ''}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    data_file: Path
    log_dir: Path
    log_level: str
    alt_screen: bool
    strict_series: bool
    strict_edit: bool

    @staticmethod
    def from_env() -> Settings:
        return Settings(
            data_file=_env_path(_k('DATA_FILE'), DEFAULT_TASKS_FILE),
            log_dir=_env_path(_k('LOG_DIR'), Path('.local/planner')),
            log_level=(os.getenv(_k('LOG_LEVEL')) or 'WARNING').strip().upper(),
            alt_screen=_truthy_env(os.getenv(_k('ALT_SCREEN')), False),
            strict_series=_truthy_env(os.getenv(_k('STRICT_SERIES')), False),
            strict_edit=_truthy_env(os.getenv(_k('STRICT_EDIT')), False),
        )


def get_settings() -> Settings:
    return Settings.from_env()
