# pandora_client/config.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOGDB_URL = "https://logdb.qiniu.com"
DEFAULT_PIPELINE_URL = "https://pipeline.qiniu.com"
DEFAULT_TIMEOUT_S = 20.0
DEFAULT_RETRIES = 2
# points at or above this many serialized bytes are flagged by Point.is_too_large()
DEFAULT_MAX_POINT_SIZE = 1 * 1024 * 1024
DEFAULT_MAX_BATCH_SIZE = 2 * 1024 * 1024


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_LOGDB_URL
    pipeline_url: str = DEFAULT_PIPELINE_URL
    api_key: str | None = None    # sent verbatim as the Authorization header
    timeout_s: float = DEFAULT_TIMEOUT_S
    retries: int = DEFAULT_RETRIES
    max_point_size: int = DEFAULT_MAX_POINT_SIZE
    max_batch_size: int = DEFAULT_MAX_BATCH_SIZE


class Settings(BaseSettings):
    # --- Endpoints ---
    base_url: str = DEFAULT_LOGDB_URL
    pipeline_url: str = DEFAULT_PIPELINE_URL
    api_key: Optional[str] = None

    # --- HTTP ---
    timeout_s: float = DEFAULT_TIMEOUT_S
    retries: int = DEFAULT_RETRIES

    # --- Points ---
    max_point_size: int = DEFAULT_MAX_POINT_SIZE
    max_batch_size: int = DEFAULT_MAX_BATCH_SIZE

    # --- Logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="PANDORA_",
        env_file=str(Path.cwd() / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("max_point_size", "max_batch_size")
    @classmethod
    def _validate_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("size limits must be positive")
        return v

    @field_validator("retries")
    @classmethod
    def _validate_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("PANDORA_RETRIES must be >= 0")
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        return v.upper()

    def to_client_config(self) -> ClientConfig:
        return ClientConfig(
            base_url=self.base_url,
            pipeline_url=self.pipeline_url,
            api_key=self.api_key,
            timeout_s=self.timeout_s,
            retries=self.retries,
            max_point_size=self.max_point_size,
            max_batch_size=self.max_batch_size,
        )
