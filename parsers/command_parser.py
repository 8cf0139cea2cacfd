"""Parser for chat commands typed by the user"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from core.exceptions import EmptyDescription, InvalidEventRange, UnrecognizedCommand
from core.models import AnyTask, Deadline, Event, TaskKind, ToDo, parse_timestamp


class CommandKind(Enum):
    """What a command line asks for"""
    HELLO = "hello"
    HELP = "help"
    LIST = "list"
    BYE = "bye"
    THANKS = "thanks"
    ADD = "add"
    MARK = "mark"
    UNMARK = "unmark"
    DELETE = "delete"
    FIND = "find"


@dataclass
class ParsedCommand:
    """Result of parsing one line"""
    kind: CommandKind
    task: Optional[AnyTask] = None
    index: Optional[int] = None
    keyword: Optional[str] = None


class CommandParser:
    """Turns one line of chat input into a ParsedCommand"""

    # Commands that take no arguments
    BARE_COMMANDS = {
        'hello': CommandKind.HELLO,
        'hi': CommandKind.HELLO,
        'help': CommandKind.HELP,
        'list': CommandKind.LIST,
        'bye': CommandKind.BYE,
        'thanks': CommandKind.THANKS,
    }

    # Commands addressing a task by its 1-based number
    INDEX_COMMANDS = {
        'mark ': CommandKind.MARK,
        'unmark ': CommandKind.UNMARK,
        'delete ': CommandKind.DELETE,
    }

    TASK_PREFIXES = {
        'todo': TaskKind.TODO,
        'deadline': TaskKind.DEADLINE,
        'event': TaskKind.EVENT,
    }

    FIND_PREFIX = 'find '
    BY_MARKER = '/by '
    FROM_MARKER = '/from '
    TO_MARKER = '/to '

    def parse(self, line: str) -> ParsedCommand:
        """
        Parse a command line.

        Examples:
            todo buy milk
            deadline submit report /by 10-02-2025 2359
            event team sync /from 05-02-2025 1000 /to 05-02-2025 1100
            mark 2

        Raises:
            UnrecognizedCommand, EmptyDescription, MalformedTimestamp,
            InvalidEventRange
        """
        command = line.strip()

        if command in self.BARE_COMMANDS:
            return ParsedCommand(self.BARE_COMMANDS[command])

        for word, kind in self.TASK_PREFIXES.items():
            if command == word:
                raise EmptyDescription(kind.value)
            if command.startswith(word + ' '):
                body = command[len(word) + 1:]
                return ParsedCommand(CommandKind.ADD, task=self._parse_task(kind, body))

        for prefix, kind in self.INDEX_COMMANDS.items():
            if command.startswith(prefix):
                return ParsedCommand(kind, index=self._parse_index(command))

        if command.startswith(self.FIND_PREFIX):
            keyword = command[len(self.FIND_PREFIX):]
            if keyword.strip():
                return ParsedCommand(CommandKind.FIND, keyword=keyword)

        raise UnrecognizedCommand(command)

    def _parse_task(self, kind: TaskKind, body: str) -> AnyTask:
        if kind is TaskKind.TODO:
            return self._parse_todo(body)
        if kind is TaskKind.DEADLINE:
            return self._parse_deadline(body)
        return self._parse_event(body)

    def _parse_todo(self, body: str) -> ToDo:
        name = body.strip()
        if not name:
            raise EmptyDescription(TaskKind.TODO.value)
        return ToDo(name=name)

    def _parse_deadline(self, body: str) -> Deadline:
        name, marker, due_text = body.partition(self.BY_MARKER)
        name = name.strip()
        if not marker or not name:
            raise EmptyDescription(TaskKind.DEADLINE.value)
        return Deadline(name=name, due_at=parse_timestamp(due_text))

    def _parse_event(self, body: str) -> Event:
        name, from_marker, period = body.partition(self.FROM_MARKER)
        start_text, to_marker, end_text = period.partition(self.TO_MARKER)
        name = name.strip()
        if not from_marker or not to_marker or not name:
            raise EmptyDescription(TaskKind.EVENT.value)

        start_at = parse_timestamp(start_text)
        end_at = parse_timestamp(end_text)
        if start_at > end_at:
            raise InvalidEventRange()
        return Event(name=name, start_at=start_at, end_at=end_at)

    @staticmethod
    def _parse_index(command: str) -> int:
        """Trailing token of the line as the task number"""
        token = command.split()[-1]
        try:
            return int(token)
        except ValueError:
            raise UnrecognizedCommand(command)
