"""
Configuration management.

The ``Settings`` dataclass is filled from environment variables by
``Settings.from_env``.  A ``.env`` file in the working directory is
loaded first (via python-dotenv) so local deployments can keep the
database path and signing secret out of the shell profile.  Tests build
``Settings`` directly and pass them to ``create_app``.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


DEFAULT_SECRET = "change_me"


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings."""

    project_name: str = "BeeTrail API"
    api_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 3000

    # Path to the SQLite database file.  Relative paths are resolved
    # against the current working directory by ``Database``.
    database_url: str = "beetrail.db"

    jwt_secret: str = DEFAULT_SECRET
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Build settings from the process environment.

        Values missing from the environment fall back to the dataclass
        defaults.
        """
        if dotenv:
            load_dotenv()
        return cls(
            project_name=os.getenv("PROJECT_NAME", cls.project_name),
            api_version=os.getenv("API_VERSION", cls.api_version),
            debug=_env_bool("DEBUG"),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            log_file=os.getenv("LOG_FILE") or None,
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", str(cls.port))),
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            jwt_secret=os.getenv("JWT_SECRET", cls.jwt_secret),
            access_token_expire_minutes=int(
                os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(cls.access_token_expire_minutes))
            ),
        )

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_SECRET
