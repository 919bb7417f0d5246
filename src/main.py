"""Main entry point for the terminal planner."""
import logging
from pathlib import Path
from typing import Optional

import click

from cli import CLI
from config import get_settings
from errors import StorageError
from logging_setup import setup_logging
from storage import Storage
from task_list import TaskList
from ui import Ui

logger = logging.getLogger(__name__)


def build_task_list(storage: Storage, ui: Ui, strict_series: bool = False,
                    strict_edit: bool = False) -> TaskList:
    return TaskList(
        storage.load_tasks(),
        present=ui.show_to_user,
        persist=storage.persist,
        strict_series=strict_series,
        strict_edit=strict_edit,
    )


@click.command()
@click.option('--data-file', type=click.Path(dir_okay=False, path_type=Path),
              help='JSON file holding the task list.')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                                               case_sensitive=False),
              help='Console log level.')
@click.option('--strict-series/--no-strict-series', default=None,
              help='Also reject a repeated task whose occurrences clash with each other.')
@click.option('--strict-edit/--no-strict-edit', default=None,
              help='Reject edits that move a task onto a clashing window.')
def main(data_file: Optional[Path], log_level: Optional[str],
         strict_series: Optional[bool], strict_edit: Optional[bool]) -> None:
    """Schedule, track and complete tasks from the terminal."""
    settings = get_settings()
    setup_logging(log_dir=settings.log_dir, console_level=(log_level or settings.log_level).upper())
    storage = Storage(data_file or settings.data_file)
    ui = Ui()
    try:
        task_list = build_task_list(
            storage, ui,
            strict_series=settings.strict_series if strict_series is None else strict_series,
            strict_edit=settings.strict_edit if strict_edit is None else strict_edit,
        )
    except StorageError as exc:
        logger.error('%s', exc)
        raise click.ClickException(str(exc))
    logger.info('Starting with %s from %s', task_list, storage.path)
    CLI(task_list, ui, alt_screen=settings.alt_screen).run()


if __name__ == "__main__":
    main()
