"""
Configuration settings for the Gym Management System.

Uses Pydantic Settings to load environment variables (or a ``.env`` file) for
data file locations and logging.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Data files
    data_dir: Path = Field(Path("."), alias="GYM_DATA_DIR")
    members_file: str = Field("members.dat", alias="GYM_MEMBERS_FILE")
    equipment_file: str = Field("equipment.dat", alias="GYM_EQUIPMENT_FILE")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def members_path(self) -> Path:
        return self.data_dir / self.members_file

    @property
    def equipment_path(self) -> Path:
        return self.data_dir / self.equipment_file


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
