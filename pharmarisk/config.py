"""Application configuration loaded from environment variables."""

import os
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

# Check if .env file exists and is readable
_env_file = None
try:
    env_path = Path(".env")
    if env_path.exists() and os.access(env_path, os.R_OK):
        _env_file = ".env"
except (OSError, PermissionError):
    # If we can't access .env, continue without it
    pass


class Settings(BaseSettings):
    """All configuration for the risk scoring engine.

    Values are loaded from environment variables or a .env file.
    """

    # Application
    app_name: str = "pharmarisk"
    debug: bool = False

    # Logging
    json_logs: bool = False
    log_level: str = "INFO"

    # Reference data (None → bundled catalog)
    catalog_path: Optional[str] = None

    # Price anomaly scoring
    price_strategy: str = "isolation_depth"  # isolation_depth | zscore_sigmoid | iqr
    contamination: float = 0.1
    num_trees: int = 100

    # None → system-seeded; set an int to make scores reproducible
    random_seed: Optional[int] = None

    # HTTP surface
    allowed_origins: list[str] = ["http://localhost:8081", "http://localhost:19006"]

    model_config = {
        "env_file": _env_file,
        "env_file_encoding": "utf-8",
        "env_file_ignore_empty": True,
    }
