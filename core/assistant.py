"""Chat session facade: the one place where user input becomes a reply"""
from typing import Optional

from pydantic import ValidationError

from core.exceptions import StorageFailure, TallyError
from core.storage import TaskStorage
from core.task_list import TaskList
from parsers.command_parser import CommandKind, CommandParser
from utils.logging_config import get_logger

logger = get_logger('assistant')

ASSISTANT_NAME = "Tally"

GREETING = f"Hello I am {ASSISTANT_NAME} :D\nHow can I help you?"
HELLO_REPLY = "Hello! What would you like me to do today?"
THANKS_REPLY = "You're welcome! Anything else I can do?"
FORMAT_HINT = "Please refer to the proper command formats"
FAREWELL = "\n".join([
    "Bye-bye!",
    "  /\\_/\\",
    " ( o.o )",
    "  > ^ <",
])
HELP_TEXT = "\n".join([
    "Here are the list of commands:",
    "\t- hello",
    "\t- list",
    "\t- todo [task description]",
    "\t- deadline [task description] /by [dd-mm-yyyy hhmm]",
    "\t- event [task description] /from [dd-mm-yyyy hhmm] /to [dd-mm-yyyy hhmm]",
    "\t- mark [task number] / unmark [task number]",
    "\t- delete [task number]",
    "\t- find [keyword in task]",
    "\t- thanks",
    "\t- bye",
])


class Assistant:
    """
    One chat session over one task list.

    ``respond`` never raises for bad input: every error the parser, the
    task list or the storage can produce comes back as reply text.
    """

    def __init__(self, storage: Optional[TaskStorage] = None):
        self.storage = storage or TaskStorage()
        self.parser = CommandParser()
        self.tasks = TaskList(self.storage)
        self.is_exit = False

    def greet(self) -> str:
        return GREETING

    def respond(self, line: str) -> str:
        """Reply to one line of user input"""
        try:
            command = self.parser.parse(line)
            logger.debug(f"Parsed {command.kind.value}", extra={'command': line.strip()})

            if command.kind is CommandKind.HELLO:
                return HELLO_REPLY
            if command.kind is CommandKind.HELP:
                return HELP_TEXT
            if command.kind is CommandKind.THANKS:
                return THANKS_REPLY
            if command.kind is CommandKind.BYE:
                self.is_exit = True
                return FAREWELL
            return self.tasks.execute(command)
        except StorageFailure as e:
            logger.error(str(e), extra={'command': line.strip()})
            return str(e)
        except TallyError as e:
            logger.warning(f"{type(e).__name__}: {e}", extra={'command': line.strip()})
            return str(e)
        except ValidationError as e:
            logger.warning(f"Rejected task fields: {e}", extra={'command': line.strip()})
            return FORMAT_HINT
