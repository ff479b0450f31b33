# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Application settings loaded from the environment."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration.

    Values are read from environment variables (case-insensitive) or a
    local ``.env`` file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./timeclock.db"
    log_level: str = "INFO"

    # Country assigned to company locations created without one
    default_country_code: str = "ES"

    cors_origins: list[str] = ["http://localhost:5173"]


settings = Settings()
