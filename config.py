"""Application configuration for Tally"""
import logging
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


class Config:
    """Application configuration"""

    # Paths
    PROJECT_ROOT = Path(__file__).parent
    DATA_DIR = Path(os.getenv("TALLY_DATA_DIR", str(PROJECT_ROOT / "data")))
    TASKS_FILE_NAME = os.getenv("TALLY_TASKS_FILE", "tasks.txt")
    LOG_DIR = Path(os.getenv("TALLY_LOG_DIR", str(PROJECT_ROOT / "logs")))

    # Logging
    LOG_LEVEL = os.getenv("TALLY_LOG_LEVEL", "INFO")
    LOG_JSON = _env_flag("TALLY_LOG_JSON", True)

    @classmethod
    def validate(cls):
        """Check settings and create the directories the app writes to"""
        if not isinstance(logging.getLevelName(cls.LOG_LEVEL.upper()), int):
            raise ValueError(
                f"TALLY_LOG_LEVEL '{cls.LOG_LEVEL}' is not a logging level. "
                "Use DEBUG, INFO, WARNING, ERROR or CRITICAL."
            )

        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_tasks_file(cls) -> Path:
        """Path to the task list file"""
        tasks_file = Path(cls.TASKS_FILE_NAME)
        if tasks_file.is_absolute():
            return tasks_file
        return cls.DATA_DIR / tasks_file

    @classmethod
    def get_log_level(cls) -> int:
        """Numeric logging level"""
        level = logging.getLevelName(cls.LOG_LEVEL.upper())
        return level if isinstance(level, int) else logging.INFO
