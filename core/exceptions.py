"""Errors raised while interpreting commands and touching the task file.

Each error carries the text shown to the user, so the assistant can turn
any of them into a reply with ``str(error)``.
"""


class TallyError(Exception):
    """Base class for every error the assistant reports back to the user"""


class UnrecognizedCommand(TallyError):
    """The line matches no known command shape"""

    def __init__(self, command: str = ""):
        self.command = command
        super().__init__(self._message())

    def _message(self) -> str:
        if any(ch.isupper() for ch in self.command):
            return "No need to shout at me :( Only lowercase please"
        return "Oh dear :( I don't understand you"


class EmptyDescription(TallyError):
    """A task command came without a usable description"""

    def __init__(self, variant: str):
        self.variant = variant
        super().__init__(f"Oh no! {variant} description is wrong")


class MalformedTimestamp(TallyError):
    """A date/time argument is not in DD-MM-YYYY HHMM form"""

    EXPECTED_FORMAT = "DD-MM-YYYY HHMM"

    def __init__(self, text: str):
        self.text = text
        super().__init__(
            f"Please write dates as {self.EXPECTED_FORMAT}, e.g. 10-02-2025 2359"
        )


class InvalidEventRange(TallyError):
    """Event starts after it ends"""

    def __init__(self):
        super().__init__("Start date should be before end date.")


class DuplicateTask(TallyError):
    """An equal task is already in the list"""

    def __init__(self, task=None):
        self.task = task
        super().__init__("This task already exists.")


class StorageFailure(TallyError):
    """Reading or writing the task file failed"""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Something went wrong with the file: {detail}")
