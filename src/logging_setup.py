"""Logging configuration for the planner.

The console only shows warnings from our own modules (the REPL owns the
terminal); the log file receives everything at the file level.
"""
from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Union

OWN_MODULES = ('task_list', 'storage', 'cli', 'command_parser', 'main', 'config', 'models')


class _ConsoleNoiseFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.split('.')[0] in OWN_MODULES:
            return True
        # third party: only errors to console
        return record.levelno >= logging.ERROR


def setup_logging(*,
                  log_dir: Union[str, Path] = '.local/planner',
                  console_level: Union[int, str] = logging.WARNING,
                  file_level: Union[int, str] = logging.DEBUG) -> Path:
    """Install a filtered stderr handler and a file handler on the root logger.

    Call once, before the first log record. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / 'planner.log'

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt='%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding='utf-8')
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
