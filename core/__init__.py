"""Core module for Tally"""
from core.exceptions import (
    TallyError,
    UnrecognizedCommand,
    EmptyDescription,
    MalformedTimestamp,
    InvalidEventRange,
    DuplicateTask,
    StorageFailure,
)
from core.models import Task, TaskKind, ToDo, Deadline, Event, AnyTask
from core.storage import TaskStorage

__all__ = [
    # Errors
    'TallyError',
    'UnrecognizedCommand',
    'EmptyDescription',
    'MalformedTimestamp',
    'InvalidEventRange',
    'DuplicateTask',
    'StorageFailure',
    # Models
    'Task',
    'TaskKind',
    'ToDo',
    'Deadline',
    'Event',
    'AnyTask',
    # Storage
    'TaskStorage',
]
