# config.py
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackerSettings(BaseSettings):
    """Runtime configuration, overridable through TRACKER_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="TRACKER_", env_file=".env", case_sensitive=False)

    data_directory: Path = Field(Path("data"), description="Directory holding the key-value files.")
    log_level: str = Field("INFO", description="Root logging level name.")
    lock_timeout: float = Field(5.0, gt=0, description="Seconds to wait for a storage file lock.")
    probe_host: str = Field("1.1.1.1", description="Host contacted to decide online/offline.")
    probe_port: int = Field(53, ge=1, le=65535)
    probe_timeout: float = Field(1.5, gt=0)
    probe_interval: float = Field(30.0, ge=0, description="Minimum seconds between connectivity probes.")

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value):
        return Path(value).expanduser()

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache()
def get_settings() -> TrackerSettings:
    return TrackerSettings()
