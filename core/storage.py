"""Task file storage for Tally.

One task per line, numbered from 1, in the same form the chat shows::

    1. [D] [ ] submit report (by: 10 Feb 2025 23:59)
    2. [E] [X] team sync (from: 05 Feb 2025 10:00 to: 05 Feb 2025 11:00)
    3. [T] [ ] buy milk
"""
import re
from pathlib import Path
from typing import List, Optional

from core.exceptions import StorageFailure
from core.models import AnyTask, TaskKind, build_task, read_display_timestamp
from config import Config
from utils.logging_config import get_logger, log_call

logger = get_logger('storage')

EMPTY_LIST_MESSAGE = "Task list is empty"

LINE_PATTERN = re.compile(r'^(\d+)\. \[([TDE])\] \[([X ])\] (.+)$')
DEADLINE_SUFFIX_PATTERN = re.compile(r'^(.+) \(by: ([^()]+)\)$')
EVENT_SUFFIX_PATTERN = re.compile(r'^(.+) \(from: ([^()]+) to: ([^()]+)\)$')


class TaskStorage:
    """Reads and writes the task list file"""

    def __init__(self, file_path: Optional[str] = None):
        if file_path:
            self.file_path = Path(file_path)
        else:
            self.file_path = Config.get_tasks_file()

    @log_call()
    def save(self, tasks: List[AnyTask]):
        """Overwrite the file with the given tasks"""
        lines = [f"{position}. {task}\n" for position, task in enumerate(tasks, 1)]
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.file_path, 'w', encoding='utf-8', newline='\n') as f:
                f.writelines(lines)
        except OSError as e:
            logger.error(f"Could not write {self.file_path}: {e}")
            raise StorageFailure(str(e)) from e

    def load(self) -> List[AnyTask]:
        """Read tasks back; a missing or malformed file gives an empty list"""
        if not self.file_path.exists():
            return []

        tasks = []
        for line_number, line in enumerate(self._read_lines(), 1):
            if not line.strip():
                continue
            try:
                tasks.append(self.parse_line(line))
            except ValueError as e:
                logger.warning(
                    f"Ignoring malformed task file {self.file_path} (line {line_number}): {e}"
                )
                return []

        logger.debug(f"Loaded {len(tasks)} task(s) from {self.file_path}",
                     extra={'task_count': len(tasks)})
        return tasks

    def render(self) -> str:
        """File content as shown by the ``list`` command"""
        if not self.file_path.exists():
            return EMPTY_LIST_MESSAGE

        content = "\n".join(line for line in self._read_lines() if line.strip())
        return content or EMPTY_LIST_MESSAGE

    @staticmethod
    def parse_line(line: str) -> AnyTask:
        """
        Parse one stored line into a task.

        Raises:
            ValueError: line is not in the stored display form
                (pydantic's ValidationError is a ValueError too)
        """
        match = LINE_PATTERN.match(line.rstrip('\n'))
        if not match:
            raise ValueError(f"Unrecognized task line: {line!r}")

        _, tag, marker, rest = match.groups()
        kind = TaskKind.from_tag(tag)
        is_done = marker == 'X'

        if kind is TaskKind.TODO:
            return build_task(kind, rest, is_done)

        if kind is TaskKind.DEADLINE:
            suffix = DEADLINE_SUFFIX_PATTERN.match(rest)
            if not suffix:
                raise ValueError(f"Deadline without '(by: ...)': {line!r}")
            name, due_text = suffix.groups()
            return build_task(kind, name, is_done, (read_display_timestamp(due_text),))

        suffix = EVENT_SUFFIX_PATTERN.match(rest)
        if not suffix:
            raise ValueError(f"Event without '(from: ... to: ...)': {line!r}")
        name, start_text, end_text = suffix.groups()
        return build_task(kind, name, is_done, (read_display_timestamp(start_text),
                                                read_display_timestamp(end_text)))

    def _read_lines(self) -> List[str]:
        # Only \n ends a line. splitlines() would also break on form feeds
        # and Unicode separators inside a task name.
        try:
            with open(self.file_path, 'r', encoding='utf-8', newline='') as f:
                return [line.rstrip('\r') for line in f.read().split('\n')]
        except UnicodeDecodeError as e:
            logger.warning(f"Task file {self.file_path} is not UTF-8: {e}")
            return []
        except OSError as e:
            logger.error(f"Could not read {self.file_path}: {e}")
            raise StorageFailure(str(e)) from e
