from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="REGISTRAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    # Console only unless set
    log_file: Optional[str] = None
    log_max_bytes: int = 5 * 1024 * 1024
    log_backup_count: int = 5

    default_passing_grade: float = 0.0

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level

    @field_validator("default_passing_grade")
    @classmethod
    def check_passing_grade(cls, value: float) -> float:
        if value < 0 or value > 100:
            raise ValueError("default passing grade should be between 0 and 100")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
