"""Terminal output for the planner; ``Ui.show_to_user`` is the message sink."""
from theme import color, DONE_COLOR, ERROR_COLOR, HEADER_COLOR, LINE_COLOR, PENDING_COLOR

LINE_WIDTH = 60


class Ui:
    def show_to_user(self, *messages: str) -> None:
        for message in messages:
            for line in message.split('\n'):
                print(self._colorize(line))

    def show_line(self) -> None:
        print(color('_' * LINE_WIDTH, LINE_COLOR))

    def show_error(self, message: str) -> None:
        print(color(message, ERROR_COLOR))

    def show_welcome(self) -> None:
        print(color('Planner', HEADER_COLOR) + " - type 'help' for the list of commands.")

    @staticmethod
    def _colorize(line: str) -> str:
        # task rows contain a status box; tint the whole row by it
        if '[X]' in line:
            return color(line, DONE_COLOR)
        if '[ ]' in line:
            return color(line, PENDING_COLOR)
        return line
