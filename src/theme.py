"""Color helpers for planner output.

Rows are tinted by status (pending / done), errors in red. Colors are
off when stdout is not a TTY (override with FORCE_COLOR=1) or when
NO_COLOR is set. Each color can be replaced through PLANNER_PRIMARY,
PLANNER_PENDING, PLANNER_DONE or PLANNER_ERROR as a hex code.
"""
from __future__ import annotations
import os
import sys

import config  # noqa: F401  (loads .env before the palette is read)

ENABLED = (os.environ.get('FORCE_COLOR', '').lower() in {'1', 'true', 'yes', 'on'}
           or sys.stdout.isatty()) and 'NO_COLOR' not in os.environ

RESET = '\033[0m'
BOLD = '\033[1m'
DIM = '\033[2m'


def _palette(name: str, default: str) -> str:
    """Return an xterm-256 foreground code for PLANNER_<name> or the default hex."""
    raw = (os.environ.get(f'PLANNER_{name}') or '').strip().lstrip('#')
    if len(raw) != 6 or any(c not in '0123456789abcdefABCDEF' for c in raw):
        raw = default.lstrip('#')
    r, g, b = (round(int(raw[i:i + 2], 16) / 255 * 5) for i in (0, 2, 4))
    return f'\033[38;5;{16 + 36 * r + 6 * g + b}m'


PRIMARY = _palette('PRIMARY', '#476EAE')
HEADER_COLOR = PRIMARY + BOLD
LINE_COLOR = DIM + PRIMARY
PENDING_COLOR = _palette('PENDING', '#48B3AF')
DONE_COLOR = _palette('DONE', '#A7E399')
ERROR_COLOR = _palette('ERROR', '#E36A6A') + BOLD


def color(text: str, *styles: str) -> str:
    if not ENABLED:
        return text
    return ''.join(styles) + text + RESET
