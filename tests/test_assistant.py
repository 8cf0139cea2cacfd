"""Tests for core/assistant.py: full command round trips"""
import os
import pytest

from core.assistant import Assistant, FAREWELL, FORMAT_HINT, GREETING, HELLO_REPLY, HELP_TEXT, THANKS_REPLY
from core.storage import TaskStorage


@pytest.fixture
def assistant(storage):
    return Assistant(storage)


class TestChatCommands:
    """Replies that do not touch the task list"""

    def test_greet(self, assistant):
        assert assistant.greet() == GREETING
        assert "How can I help you?" in GREETING

    @pytest.mark.parametrize("line", ["hello", "hi"])
    def test_hello(self, assistant, line):
        assert assistant.respond(line) == HELLO_REPLY

    def test_help_lists_every_command(self, assistant):
        reply = assistant.respond("help")
        assert reply == HELP_TEXT
        for word in ["todo", "deadline", "event", "mark", "unmark", "delete", "find", "list", "bye"]:
            assert word in reply

    def test_thanks(self, assistant):
        assert assistant.respond("thanks") == THANKS_REPLY

    def test_bye_sets_exit(self, assistant):
        assert assistant.is_exit is False
        assert assistant.respond("bye") == FAREWELL
        assert assistant.is_exit is True


class TestScenarios:
    """End-to-end command scenarios"""

    def test_todo_on_empty_list(self, assistant):
        reply = assistant.respond("todo buy milk")
        assert "Added" in reply
        assert "[T] [ ] buy milk" in reply
        assert len(assistant.tasks) == 1

    def test_deadline_rendering(self, assistant):
        reply = assistant.respond("deadline submit report /by 10-02-2025 2359")
        assert "[D] [ ] submit report (by: 10 Feb 2025 23:59)" in reply

    def test_event_backwards(self, assistant):
        reply = assistant.respond("event team sync /from 05-02-2025 1000 /to 05-02-2025 0900")
        assert reply == "Start date should be before end date."
        assert len(assistant.tasks) == 0

    def test_find(self, assistant):
        assistant.respond("todo buy milk")
        assistant.respond("event team sync /from 05-02-2025 1000 /to 05-02-2025 1100")

        reply = assistant.respond("find sync")
        assert "1. [E] [ ] team sync" in reply
        assert "buy milk" not in reply

    def test_mark_missing_task(self, assistant):
        assistant.respond("todo buy milk")
        assistant.respond("todo call mum")

        assert assistant.respond("mark 5") == "Task of this number does not exist"
        assert not any(t.is_done for t in assistant.tasks)

    def test_duplicate(self, assistant):
        assistant.respond("todo buy milk")
        assert assistant.respond("todo buy milk") == "This task already exists."
        assert len(assistant.tasks) == 1

    def test_list(self, assistant):
        assistant.respond("todo buy milk")
        assistant.respond("mark 1")
        assert assistant.respond("list") == "1. [T] [X] buy milk"

    def test_list_empty(self, assistant):
        assert assistant.respond("list") == "Task list is empty"

    def test_session_survives_restart(self, tasks_file):
        first = Assistant(TaskStorage(tasks_file))
        first.respond("todo buy milk")
        first.respond("deadline submit report /by 10-02-2025 2359")

        second = Assistant(TaskStorage(tasks_file))
        assert [str(t) for t in second.tasks] == [
            "[D] [ ] submit report (by: 10 Feb 2025 23:59)",
            "[T] [ ] buy milk",
        ]


    def test_multi_line_name_does_not_wipe_list(self, tasks_file):
        first = Assistant(TaskStorage(tasks_file))
        first.respond("todo buy milk")
        first.respond("todo call mum")
        assert first.respond("todo page\x0cbreak") == FORMAT_HINT
        assert first.respond("todo line\u2028break") == FORMAT_HINT

        second = Assistant(TaskStorage(tasks_file))
        assert [t.name for t in second.tasks] == ["buy milk", "call mum"]


class TestErrorReplies:
    """Every error becomes a reply"""

    @pytest.mark.parametrize("line, reply", [
        ("blah", "Oh dear :( I don't understand you"),
        ("TODO buy milk", "No need to shout at me :( Only lowercase please"),
        ("todo", "Oh no! ToDo description is wrong"),
        ("deadline submit report", "Oh no! Deadline description is wrong"),
        ("event party", "Oh no! Event description is wrong"),
        ("mark first", "Oh dear :( I don't understand you"),
    ])
    def test_error_messages(self, assistant, line, reply):
        assert assistant.respond(line) == reply

    def test_malformed_timestamp_mentions_format(self, assistant):
        reply = assistant.respond("deadline submit report /by next friday")
        assert "DD-MM-YYYY HHMM" in reply

    def test_storage_failure_on_list(self, assistant):
        # Turn the task file path into a directory so it can be neither written nor read
        os.mkdir(assistant.storage.file_path)
        reply = assistant.respond("list")
        assert "Something went wrong with the file" in reply

    def test_validation_error_becomes_format_hint(self, assistant, monkeypatch):
        from pydantic import BaseModel

        class Strict(BaseModel):
            value: int

        def broken_parse(line):
            Strict(value="not a number")
        monkeypatch.setattr(assistant.parser, "parse", broken_parse)
        assert assistant.respond("todo x") == FORMAT_HINT
