"""
Configuration settings for the CPM scheduler.
Load configuration from environment variables or a .env file.
"""
import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_file = Path(__file__).parent.parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)


class Settings:
    """Application settings loaded from environment variables."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    DATA_DIR = Path(os.getenv('DATA_DIR', '.'))

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', '')

    # ============================================================================
    # Input / Output Files
    # ============================================================================
    TASKS_FILE = os.getenv('TASKS_FILE', 'tasks.csv')
    OUTPUT_FILE = os.getenv('OUTPUT_FILE', 'output.csv')
    TIMELINE_FILE = os.getenv('TIMELINE_FILE', 'timeline.csv')
    DEPENDENCY_SEPARATOR = os.getenv('DEPENDENCY_SEPARATOR', ';')

    # ============================================================================
    # Analysis
    # ============================================================================
    NEAR_CRITICAL_THRESHOLD = int(os.getenv('NEAR_CRITICAL_THRESHOLD', '2'))

    @classmethod
    def resolve(cls, filename: str) -> Path:
        """Resolve a file name against DATA_DIR unless it is already absolute."""
        path = Path(filename)
        if path.is_absolute():
            return path
        return cls.DATA_DIR / path

    @staticmethod
    def check_separator(separator: str, name: str = 'DEPENDENCY_SEPARATOR') -> list[str]:
        """Return problems with a dependency separator value."""
        problems = []
        if len(separator) != 1:
            problems.append(f'{name} must be a single character')
        elif separator == ',':
            problems.append(f'{name} cannot be the CSV delimiter ","')
        return problems

    @classmethod
    def validate_required_settings(cls) -> list[str]:
        """
        Validate that settings are usable.
        Returns list of problems found.
        """
        problems = cls.check_separator(cls.DEPENDENCY_SEPARATOR)

        # setLevel only accepts registered level names
        if not isinstance(logging.getLevelName(cls.LOG_LEVEL), int):
            problems.append(f'LOG_LEVEL {cls.LOG_LEVEL!r} is not a logging level name')
        if cls.NEAR_CRITICAL_THRESHOLD < 0:
            problems.append('NEAR_CRITICAL_THRESHOLD must be >= 0')

        return problems


# Create settings instance
settings = Settings()
