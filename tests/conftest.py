"""Pytest configuration and fixtures"""
import pytest
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import Config
from core.storage import TaskStorage


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    import tempfile
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def tasks_file(temp_dir):
    """Path of a task file that does not exist yet"""
    return os.path.join(temp_dir, "tasks.txt")


@pytest.fixture
def storage(tasks_file):
    """TaskStorage on a temporary file"""
    return TaskStorage(tasks_file)


@pytest.fixture
def sample_tasks_text():
    """Task file content in stored form"""
    return (
        "1. [D] [ ] submit report (by: 10 Feb 2025 23:59)\n"
        "2. [E] [X] team sync (from: 05 Feb 2025 10:00 to: 05 Feb 2025 11:00)\n"
        "3. [T] [ ] buy milk\n"
    )


@pytest.fixture
def populated_tasks_file(tasks_file, sample_tasks_text):
    """Task file holding the three sample tasks"""
    with open(tasks_file, 'w', encoding='utf-8') as f:
        f.write(sample_tasks_text)
    return tasks_file


@pytest.fixture(autouse=True)
def no_log_files(monkeypatch, temp_dir):
    """Keep test runs from writing log files into the project"""
    monkeypatch.setattr(Config, "LOG_JSON", False)
    monkeypatch.setattr(Config, "LOG_DIR", Path(temp_dir) / "logs")
