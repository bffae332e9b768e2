from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ROOT_DIR = Path(__file__).parents[1]

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Manages library-wide configuration settings using Pydantic.
    This class centralizes every tunable of the cache and its logging. It
    inherits from `pydantic_settings.BaseSettings`, which allows it to
    automatically read settings from environment variables and a `.env` file
    located at the project root.
    The settings are structured into logical groups:
    - Directory Paths: where rotated log files are written.
    - Logging: console level and optional rotating file sink.
    - Cache: initial metadata caching flag and lock striping of the maps.
    Attributes:
        ROOT_DIR (Path): The absolute path to the project's root directory.
        LOGS_DIR (Path): Path to the directory for log files.
        LOG_LEVEL (str): Console logging level (loguru level name).
        LOG_TO_FILE (bool): If true, a rotating file sink is added under LOGS_DIR.
        LOG_ROTATION (str): Loguru rotation policy for the file sink.
        LOG_RETENTION (str): Loguru retention policy for the file sink.
        DISABLE_RICH (bool): Use a plain stderr sink instead of Rich.
        CACHE_ATTRIBUTE_INFO (bool): Whether attribute metadata is cached initially.
        CACHE_SHARDS (int): Number of independently locked stripes per map.
    """

    ROOT_DIR: Path = ROOT_DIR
    LOGS_DIR: Path = ROOT_DIR / "logs"

    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_ROTATION: str = "100 MB"
    LOG_RETENTION: str = "30 days"
    DISABLE_RICH: bool = False

    # Attribute metadata is usually immutable for the lifetime of a bean, but
    # applications may change it at runtime, so caching it is opt-in.
    CACHE_ATTRIBUTE_INFO: bool = False
    CACHE_SHARDS: int = 16

    # Pydantic -> .env
    model_config = SettingsConfigDict(
        env_file=ROOT_DIR / ".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {v!r}")
        return level

    @field_validator("CACHE_SHARDS")
    @classmethod
    def check_shards(cls, v: int) -> int:
        if v < 1:
            raise ValueError("CACHE_SHARDS must be >= 1")
        return v


settings = Settings()
