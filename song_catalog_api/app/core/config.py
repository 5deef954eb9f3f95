"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any environment at all.  In a production
deployment you should override these via environment variables or a
dedicated configuration service.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Song Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  When empty only the console handler
    # is installed by ``setup_logging``.
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Header carrying the caller's account id.  It is set by a trusted
    # layer in front of the API (or by ``SongCatalogAPI`` after login)
    # and is not verified by the service itself.
    caller_id_header: str = os.getenv("CALLER_ID_HEADER", "X-User-Id")

    min_password_length: int = int(os.getenv("MIN_PASSWORD_LENGTH", "6"))

    # Earliest accepted song year.  The latest accepted year is always
    # the current calendar year.
    min_song_year: int = int(os.getenv("MIN_SONG_YEAR", "1900"))

    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at instantiation time, environment variables should
# be set before importing this module.
settings = Settings()
