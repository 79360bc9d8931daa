"""
Runtime configuration for the bootcamp app.

Values come from the environment, optionally seeded from a .env file.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from bootcamp.classroom import DEFAULT_ADVANCE_DELAY, DEFAULT_PROGRESS_DB


PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_CATALOG_PATH = PROJECT_ROOT / "data" / "catalog.yaml"


@dataclass
class Settings:
    catalog_path: Path = DEFAULT_CATALOG_PATH
    progress_db: Path = DEFAULT_PROGRESS_DB
    advance_delay: float = DEFAULT_ADVANCE_DELAY
    final_code_secret: str = "bootcamp"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """
        Build settings from BOOTCAMP_* environment variables.

        Args:
            dotenv: Load the nearest .env file from the working directory first
                (existing variables win)
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        return cls(
            catalog_path=Path(os.getenv("BOOTCAMP_CATALOG_PATH", str(DEFAULT_CATALOG_PATH))),
            progress_db=Path(os.getenv("BOOTCAMP_PROGRESS_DB", str(DEFAULT_PROGRESS_DB))).expanduser(),
            advance_delay=float(os.getenv("BOOTCAMP_ADVANCE_DELAY", str(DEFAULT_ADVANCE_DELAY))),
            final_code_secret=os.getenv("BOOTCAMP_FINAL_CODE_SECRET", "bootcamp"),
            log_level=os.getenv("BOOTCAMP_LOG_LEVEL", "INFO").upper(),
        )
