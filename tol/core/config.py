from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tol.core.errors import ConfigurationError

_LOG_LEVELS = {"debug", "info", "warning", "error", "critical"}


class RuntimeConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TOL_", case_sensitive=False)

    log_level: str = "warning"
    log_format: Literal["json", "text"] = "json"
    log_file: bool = False
    log_dir: Path | None = None
    color: Literal["auto", "always", "never"] = "auto"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"unknown log level '{value}'")
        return normalized


@lru_cache
def get_runtime_config() -> RuntimeConfig:
    return RuntimeConfig()


def load_runtime_config() -> RuntimeConfig:
    """Resolve the runtime config, turning validation errors into TolErrors."""
    try:
        return get_runtime_config()
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) for error in exc.errors()
        )
        raise ConfigurationError(
            code="invalid_config",
            message="Invalid TOL_* environment settings",
            detail=fields or str(exc),
        ) from exc
