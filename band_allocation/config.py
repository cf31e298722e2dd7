# config.py
"""Application settings read from the environment.

Values are read once, when this module is first imported, after loading
an optional ``.env`` file. Set environment variables before importing the
application.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from the .env file
load_dotenv()


@dataclass
class Settings:
    """Environment-backed configuration for the band allocation API."""

    project_name: str = os.getenv("PROJECT_NAME", "Band Allocation API")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Store connection string, e.g. postgresql://user:pw@host/event_bands_db
    database_url: Optional[str] = os.getenv("DATABASE_URL")
    # Optional schema holding both tables (created on first connection)
    database_schema: Optional[str] = os.getenv("DATABASE_SCHEMA") or None
    entries_table: str = os.getenv("ENTRIES_TABLE", "entries")
    users_table: str = os.getenv("USERS_TABLE", "users")


settings = Settings()
