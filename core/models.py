"""Task models for Tally with Pydantic validation"""
import re
from enum import Enum
from datetime import datetime
from typing import Literal, Optional, Tuple, Union
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict

from core.exceptions import MalformedTimestamp


# Input form: 10-02-2025 2359
INPUT_TIMESTAMP_PATTERN = re.compile(r'^\d{2}-\d{2}-\d{4} \d{4}$')
INPUT_TIMESTAMP_FORMAT = "%d-%m-%Y %H%M"

# Display form: 10 Feb 2025 23:59. Month names are fixed so the output
# does not depend on the process locale.
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                       "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
DISPLAY_TIMESTAMP_PATTERN = re.compile(
    r'^(\d{2}) (' + '|'.join(MONTH_ABBREVIATIONS) + r') (\d{4}) (\d{2}):(\d{2})$'
)

# Everything str.splitlines() breaks on. A name holding one of these
# would come back from the task file as two lines.
LINE_BREAKS = frozenset("\n\r\x0b\x0c\x1c\x1d\x1e\x85\u2028\u2029")


class TaskKind(Enum):
    """Task variants. Values double as the primary sort key."""
    TODO = "ToDo"
    DEADLINE = "Deadline"
    EVENT = "Event"

    @property
    def tag(self) -> str:
        """Single-letter type tag used in the display form"""
        return {
            TaskKind.TODO: "T",
            TaskKind.DEADLINE: "D",
            TaskKind.EVENT: "E",
        }[self]

    @classmethod
    def from_tag(cls, tag: str) -> 'TaskKind':
        for kind in cls:
            if kind.tag == tag:
                return kind
        raise ValueError(f"Unknown task tag: {tag!r}")


def parse_timestamp(text: str) -> datetime:
    """Parse a user-typed ``DD-MM-YYYY HHMM`` timestamp"""
    text = text.strip()
    if not INPUT_TIMESTAMP_PATTERN.match(text):
        raise MalformedTimestamp(text)
    try:
        return datetime.strptime(text, INPUT_TIMESTAMP_FORMAT)
    except ValueError:
        # Right shape but not a real moment, e.g. 31-02-2025 or 2460
        raise MalformedTimestamp(text)


def format_timestamp(moment: datetime) -> str:
    """Render a timestamp as ``DD Mon YYYY HH:MM``"""
    month = MONTH_ABBREVIATIONS[moment.month - 1]
    return f"{moment.day:02d} {month} {moment.year:04d} {moment.hour:02d}:{moment.minute:02d}"


def read_display_timestamp(text: str) -> datetime:
    """Inverse of format_timestamp, used when loading the task file"""
    match = DISPLAY_TIMESTAMP_PATTERN.match(text.strip())
    if not match:
        raise ValueError(f"Not a display timestamp: {text!r}")
    day, month, year, hour, minute = match.groups()
    return datetime(int(year), MONTH_ABBREVIATIONS.index(month) + 1, int(day),
                    int(hour), int(minute))


class Task(BaseModel):
    """Shared record of every task variant.

    Rendering, equality and ordering look at ``kind`` and the variant's
    timestamps, so subclasses only declare their fields.
    """
    model_config = ConfigDict(validate_assignment=True)

    kind: TaskKind
    name: str = Field(..., min_length=1)
    is_done: bool = False

    @field_validator('name')
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Task name cannot be only whitespace')
        if any(ch in LINE_BREAKS for ch in v):
            raise ValueError('Task name must fit on one line')
        return v

    @property
    def timestamps(self) -> Tuple[datetime, ...]:
        """Variant timestamps in sort order: due, or start then end"""
        if self.kind is TaskKind.DEADLINE:
            return (self.due_at,)
        if self.kind is TaskKind.EVENT:
            return (self.start_at, self.end_at)
        return ()

    def identity(self) -> tuple:
        """Fields that decide equality (completion state excluded)"""
        return (self.kind.value, self.name) + self.timestamps

    def sort_key(self) -> tuple:
        """Canonical order: type name, start/due, end, name"""
        return (self.kind.value,) + self.timestamps + (self.name,)

    def mark_done(self):
        self.is_done = True

    def mark_undone(self):
        self.is_done = False

    def __eq__(self, other) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.identity() == other.identity()

    def __str__(self) -> str:
        marker = "X" if self.is_done else " "
        text = f"[{self.kind.tag}] [{marker}] {self.name}"
        if self.kind is TaskKind.DEADLINE:
            text += f" (by: {format_timestamp(self.due_at)})"
        elif self.kind is TaskKind.EVENT:
            text += f" (from: {format_timestamp(self.start_at)} to: {format_timestamp(self.end_at)})"
        return text


def _to_minute(v: datetime) -> datetime:
    return v.replace(second=0, microsecond=0)


class ToDo(Task):
    """Plain to-do without dates"""
    kind: Literal[TaskKind.TODO] = TaskKind.TODO


class Deadline(Task):
    """Task that has to be done by a given moment"""
    kind: Literal[TaskKind.DEADLINE] = TaskKind.DEADLINE
    due_at: datetime

    @field_validator('due_at')
    @classmethod
    def truncate_to_minute(cls, v: datetime) -> datetime:
        return _to_minute(v)


class Event(Task):
    """Task that spans a time range"""
    kind: Literal[TaskKind.EVENT] = TaskKind.EVENT
    start_at: datetime
    end_at: datetime

    @field_validator('start_at', 'end_at')
    @classmethod
    def truncate_to_minute(cls, v: datetime) -> datetime:
        return _to_minute(v)

    @model_validator(mode='after')
    def validate_range(self) -> 'Event':
        if self.start_at > self.end_at:
            raise ValueError('Start date should be before end date.')
        return self


AnyTask = Union[ToDo, Deadline, Event]


def build_task(kind: TaskKind, name: str, is_done: bool = False,
               timestamps: Tuple[datetime, ...] = ()) -> AnyTask:
    """Construct the variant for ``kind`` from its positional timestamps"""
    if kind is TaskKind.TODO:
        return ToDo(name=name, is_done=is_done)
    if kind is TaskKind.DEADLINE:
        (due_at,) = timestamps
        return Deadline(name=name, is_done=is_done, due_at=due_at)
    start_at, end_at = timestamps
    return Event(name=name, is_done=is_done, start_at=start_at, end_at=end_at)


def find_position(tasks, task: Task) -> Optional[int]:
    """1-based position of an equal task, or None"""
    for position, existing in enumerate(tasks, 1):
        if existing == task:
            return position
    return None
