"""Command-line interface loop for the planner.

Every line is parsed into a Command and dispatched to the TaskList; the
task list reports through the Ui and persists itself after mutations.
"""
import logging
from datetime import date
from typing import Optional

from command_parser import Command, parse_command
from errors import (IdentifierExhaustedError, InvalidTaskError, ParseError, ScheduleClashError,
                    StorageError, TaskIndexError)
from models import Task
from task_list import TaskList
from ui import Ui

logger = logging.getLogger(__name__)

HELP_LINES = (
    "Commands:",
    "  add <desc> [/by YYYY-MM-DD]              Add a task, optionally with a deadline",
    "      [/do YYYY-MM-DD /start HH:MM /end HH:MM]  ...and a do-on window",
    "      [/repeat daily|weekly|monthly]       ...repeated over a month, two months or a year",
    "  edit <n> [<desc>] [/by DATE] [/do DATE]  Change description, deadline or do-on day",
    "  mark <n> / unmark <n>                    Mark task n as done / not done",
    "  delete <n>                               Delete task n",
    "  delete all                               Delete every task",
    "  list                                     Show every task",
    "  list pending                             Show tasks not done yet",
    "  list YYYY-MM-DD                          Show tasks scheduled on a day",
    "  help                                     Show this help",
    "  exit                                     Save and exit",
)


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


class CLI:
    def __init__(self, task_list: TaskList, ui: Ui, alt_screen: bool = False):
        self.task_list: TaskList = task_list
        self.ui: Ui = ui
        self.alt_screen: bool = alt_screen

    def run(self) -> None:
        """Main REPL loop; ends on 'exit', EOF or Ctrl-C."""
        exit_message: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        try:
            self.ui.show_welcome()
            self._show_today()
            while True:
                line = input("\n: ").strip()
                if not line:
                    continue
                if not self.execute(line):
                    exit_message = "Goodbye. See you soon!"
                    break
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False when the loop should stop."""
        try:
            command = parse_command(line)
            if command.name == 'exit':
                return False
            self._dispatch(command)
        except ParseError as exc:
            self.ui.show_error(str(exc))
        except TaskIndexError as exc:
            logger.debug('%s', exc)
            self.ui.show_error('Invalid task number.')
        except (InvalidTaskError, ScheduleClashError, IdentifierExhaustedError) as exc:
            self.ui.show_error(str(exc))
        except StorageError as exc:
            logger.error('Saving failed: %s', exc)
            self.ui.show_error(f'Your change was applied but could not be saved: {exc}')
        return True

    # -------------------- command dispatch --------------------
    def _dispatch(self, command: Command) -> None:
        if command.name == 'add':
            self._cmd_add(command)
        elif command.name == 'edit':
            self.task_list.edit_task(command.index, command.description,
                                     command.by_date, command.do_on_date)
        elif command.name == 'mark':
            self.task_list.mark_task(command.index)
        elif command.name == 'unmark':
            self.task_list.unmark_task(command.index)
        elif command.name == 'delete':
            if command.everything:
                self.task_list.delete_all_tasks()
            else:
                self.task_list.remove_task(command.index)
        elif command.name == 'list':
            self._cmd_list(command)
        elif command.name == 'help':
            self.ui.show_to_user(*HELP_LINES)

    def _cmd_add(self, command: Command) -> None:
        task = Task(
            identifier=self.task_list.generate_identifier(),
            description=command.description,
            by_date=command.by_date,
            do_on_start=command.do_on_start,
            do_on_end=command.do_on_end,
            repeat_frequency=command.frequency,
        )
        self.task_list.add_task(task, task.is_repeating)

    def _cmd_list(self, command: Command) -> None:
        if command.pending:
            self.task_list.print_pending_tasks()
        elif command.day is not None:
            self.task_list.print_tasks_on_date(command.day)
        else:
            self.task_list.print_all_tasks()
        self.ui.show_line()

    def _show_today(self) -> None:
        today = date.today()
        count = len(self.task_list.get_filtered_tasks_by_date(today))
        self.ui.show_to_user(
            f"You have {count} task(s) scheduled today and "
            f"{self.task_list.get_pending_tasks_count()} pending task(s) overall."
        )
