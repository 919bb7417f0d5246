"""Exception types raised by the planner.

Engine operations validate before they mutate, so any of these means the
task list was left exactly as it was.
"""


class PlannerError(Exception):
    """Base class for every planner failure."""


class ScheduleClashError(PlannerError):
    def __init__(self, message: str = "Sorry, the task clashes with another task in your schedule!"):
        super().__init__(message)


class TaskIndexError(PlannerError, IndexError):
    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Task index {index} out of range for {size} task(s).")


class IdentifierExhaustedError(PlannerError):
    pass


class InvalidTaskError(PlannerError, ValueError):
    pass


class StorageError(PlannerError):
    pass


class ParseError(PlannerError, ValueError):
    pass
