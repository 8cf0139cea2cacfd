"""Task list engine: owns the tasks and answers task commands"""
from typing import Iterator, List, Optional

from core.exceptions import DuplicateTask, StorageFailure
from core.models import AnyTask, find_position
from core.storage import TaskStorage
from parsers.command_parser import CommandKind, ParsedCommand
from utils.logging_config import get_logger, LogTimer

logger = get_logger('task_list')

MISSING_TASK_MESSAGE = "Task of this number does not exist"
NO_MATCHES_MESSAGE = "There are no matching tasks in the list"


class TaskList:
    """
    Ordered, duplicate-free collection of tasks.

    The list is kept in canonical order (type name, date, end date, name)
    after every change and written to storage right away. Numbers given by
    and shown to the user are 1-based.

    Usage:
        tasks = TaskList(TaskStorage("tasks.txt"))
        tasks.add(ToDo(name="buy milk"))
        tasks.mark(1)
    """

    def __init__(self, storage: TaskStorage, tasks: Optional[List[AnyTask]] = None):
        self._storage = storage
        self._tasks: List[AnyTask] = []

        initial = storage.load() if tasks is None else tasks
        for task in initial:
            if find_position(self._tasks, task) is not None:
                logger.warning(f"Dropping duplicate task: {task}")
                continue
            self._tasks.append(task)
        self._sort()

    # ==================== Read access ====================

    @property
    def tasks(self) -> List[AnyTask]:
        """Copy of the tasks in canonical order"""
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[AnyTask]:
        return iter(list(self._tasks))

    # ==================== Commands ====================

    def execute(self, command: ParsedCommand) -> str:
        """Run a parsed task command and return the reply"""
        if command.kind is CommandKind.ADD:
            return self.add(command.task)
        if command.kind is CommandKind.DELETE:
            return self.delete(command.index)
        if command.kind is CommandKind.MARK:
            return self.mark(command.index)
        if command.kind is CommandKind.UNMARK:
            return self.unmark(command.index)
        if command.kind is CommandKind.FIND:
            return self.find(command.keyword)
        if command.kind is CommandKind.LIST:
            return self.list()
        raise ValueError(f"Not a task list command: {command.kind}")

    def add(self, task: AnyTask) -> str:
        with LogTimer(logger, f"add: {task}", command='add'):
            if find_position(self._tasks, task) is not None:
                raise DuplicateTask(task)

            self._tasks.append(task)
            self._sort()
            position = find_position(self._tasks, task)

            reply = (f"Added: {task}\n"
                     f"It is task number {position} on your list\n"
                     f"{self._count_line()}")
            return self._commit(reply)

    def delete(self, index: int) -> str:
        if not self._exists(index):
            return MISSING_TASK_MESSAGE

        with LogTimer(logger, f"delete: {index}", command='delete'):
            task = self._tasks.pop(index - 1)
            reply = f"Deleted task: {task}\n{self._count_line()}"
            return self._commit(reply)

    def mark(self, index: int) -> str:
        if not self._exists(index):
            return MISSING_TASK_MESSAGE

        with LogTimer(logger, f"mark: {index}", command='mark'):
            task = self._tasks[index - 1]
            task.mark_done()
            return self._commit(f"Alright! This task is done: {task}")

    def unmark(self, index: int) -> str:
        if not self._exists(index):
            return MISSING_TASK_MESSAGE

        with LogTimer(logger, f"unmark: {index}", command='unmark'):
            task = self._tasks[index - 1]
            task.mark_undone()
            return self._commit(f"Okay! This task is not done: {task}")

    def find(self, keyword: str) -> str:
        """Tasks whose name contains ``keyword`` (case-sensitive), with their numbers"""
        matches = [(position, task) for position, task in enumerate(self._tasks, 1)
                   if keyword in task.name]
        if not matches:
            return NO_MATCHES_MESSAGE

        lines = ["Here are the matching task(s):"]
        lines += [f"\t{position}. {task}" for position, task in matches]
        return "\n".join(lines)

    def list(self) -> str:
        """
        Rewrite the task file from memory, then show the file.

        If the write fails the reply shows whatever the file still holds,
        followed by the storage error.
        """
        try:
            self._storage.save(self._tasks)
        except StorageFailure as e:
            return f"{self._storage.render()}\n{e}"
        return self._storage.render()

    # ==================== Helpers ====================

    def _exists(self, index: Optional[int]) -> bool:
        return index is not None and 1 <= index <= len(self._tasks)

    def _sort(self):
        self._tasks.sort(key=lambda task: task.sort_key())

    def _count_line(self) -> str:
        return f"Now you have {len(self._tasks)} task(s) in the list"

    def _commit(self, reply: str) -> str:
        """Save after a change; a failed save is reported but the change is kept"""
        try:
            self._storage.save(self._tasks)
        except StorageFailure as e:
            return f"{reply}\n{e}"
        logger.info(reply.splitlines()[0], extra={'task_count': len(self._tasks)})
        return reply

