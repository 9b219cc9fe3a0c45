import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Data file
    data_file: str = os.getenv("LIBRARY_DATA_FILE", "library.txt")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    # Application
    app_name: str = os.getenv("APP_NAME", "Library Inventory")
    debug: bool = _env_flag("DEBUG")


settings = Settings()
