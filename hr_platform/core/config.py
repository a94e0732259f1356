# Standard library imports
import os
from typing import Final, Optional
from dotenv import load_dotenv


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the platform.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Load environment variables from .env file
        load_dotenv()

        # Database Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("DB_NAME", "hr_platform")
        self.server_selection_timeout_ms: Final[int] = int(
            os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000")
        )

        # Reporting Configuration
        # Used when neither the caller nor the project supplies an hourly rate
        self.default_hourly_rate: Final[float] = float(
            os.getenv("DEFAULT_HOURLY_RATE", "120")
        )
        self.planned_hours_per_day: Final[float] = float(
            os.getenv("PLANNED_HOURS_PER_DAY", "8")
        )
        self.top_consultants_limit: Final[int] = int(
            os.getenv("TOP_CONSULTANTS_LIMIT", "5")
        )

        # Logging Configuration
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
