"""
Configuration settings for the Chronos schedule engine.
Load configuration from environment variables or a .env file.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_file = Path(__file__).parent.parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'y')


class Settings:
    """Application settings loaded from environment variables."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    DATA_DIR = Path(os.getenv('CHRONOS_DATA_DIR', str(PROJECT_ROOT / 'data')))
    OUTPUT_DATA_DIR = Path(os.getenv('CHRONOS_OUTPUT_DIR', str(DATA_DIR / 'output')))

    # Logging
    LOG_LEVEL = os.getenv('CHRONOS_LOG_LEVEL', 'INFO')
    LOG_DIR = Path(os.getenv('CHRONOS_LOG_DIR', str(PROJECT_ROOT / 'logs')))
    LOG_TO_FILE = _env_flag('CHRONOS_LOG_TO_FILE')

    # ============================================================================
    # XER Input
    # ============================================================================
    XER_ENCODING = os.getenv('CHRONOS_XER_ENCODING', 'utf-8')

    # ============================================================================
    # Analytics
    # ============================================================================
    CURVE_BUCKET_DAYS = int(os.getenv('CHRONOS_CURVE_BUCKET_DAYS', '7'))
    DRILLDOWN_LIMIT = int(os.getenv('CHRONOS_DRILLDOWN_LIMIT', '50'))

    @classmethod
    def validate_required_settings(cls) -> list[str]:
        """
        Validate that all settings hold usable values.
        Returns list of problems (empty when valid).
        """
        problems = []

        if cls.CURVE_BUCKET_DAYS <= 0:
            problems.append('CHRONOS_CURVE_BUCKET_DAYS must be positive')
        if cls.DRILLDOWN_LIMIT <= 0:
            problems.append('CHRONOS_DRILLDOWN_LIMIT must be positive')
        if cls.LOG_LEVEL.upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            problems.append(f'Unknown CHRONOS_LOG_LEVEL: {cls.LOG_LEVEL}')

        return problems


# Create settings instance
settings = Settings()
