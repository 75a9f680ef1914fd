"""Pydantic models used across the wxproduct configuration flow."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator


class GlobalConfig(BaseModel):
    """Controls shared by every product store built from configuration."""

    age_ceiling: int = Field(
        default=0,
        description="Maximum product age in hours before automatic purge; 0 disables it.",
    )
    fetch_timeout: float = 15.0
    fetch_retries: int = 0
    user_agent: str | None = None
    sources: list[str] = Field(default_factory=list)
    logs_dir: Path | None = None

    @field_validator("sources", mode="before")
    @classmethod
    def _coerce_sources(cls, value: Any) -> list[str]:
        if value in (None, ""):
            return []
        if isinstance(value, str):
            return [value]
        return [str(item).strip() for item in value if str(item).strip()]

    @field_validator("logs_dir", mode="before")
    @classmethod
    def _coerce_dir(cls, value: Any) -> Path | None:
        if value in (None, ""):
            return None
        return Path(value)

    @model_validator(mode="after")
    def _validate_ranges(self) -> "GlobalConfig":
        if self.age_ceiling < 0:
            raise ValueError("age_ceiling must be >= 0")
        if self.fetch_timeout <= 0:
            raise ValueError("fetch_timeout must be > 0")
        if self.fetch_retries < 0:
            raise ValueError("fetch_retries must be >= 0")
        return self


__all__ = ["GlobalConfig"]
