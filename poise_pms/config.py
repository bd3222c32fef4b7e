"""
Configuration loading and validation.

Settings come from environment variables (``POISE_`` prefix, ``__`` for
nested keys) or from a YAML file. The database password is never stored in
config files; it is read from the environment variable named by
``database.password_env``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url


class DatabaseConfig(BaseModel):
    url: str = "mysql+pymysql://otheruser@localhost:3306/PoisePMS"
    password_env: str = "POISE_DB_PASSWORD"
    echo: bool = False
    create_schema: bool = False

    @property
    def password(self) -> str | None:
        return os.environ.get(self.password_env)

    def resolved_url(self) -> URL:
        """Return the connection URL with the password from the environment applied."""
        url = make_url(self.url)
        password = self.password
        if password:
            url = url.set(password=password)
        return url


class LoggingConfig(BaseModel):
    level: str = "warning"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    """Poise PMS configuration."""

    model_config = SettingsConfigDict(
        env_prefix="POISE_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> Settings:
    """Load settings from the environment, or from a YAML file when a path is given.

    Values in the YAML file take precedence over environment variables.
    """
    if path is None:
        return Settings()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    return Settings(**raw)
