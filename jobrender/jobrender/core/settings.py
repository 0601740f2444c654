from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import RedactMode


class RenderSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="JOBRENDER_", case_sensitive=False)

    redact_mode: RedactMode = RedactMode.REDACT
    dest_root: Path = Field(default_factory=Path.cwd)
    file_mode: int = 0o644
    script_mode: int = 0o755
    secret_mode: int = 0o600

    @field_validator("file_mode", "script_mode", "secret_mode", mode="before")
    @classmethod
    def _parse_octal(cls, value: object) -> object:
        # Modes from the environment are written the way chmod takes them.
        if isinstance(value, str):
            try:
                return int(value, 8)
            except ValueError as e:
                raise ValueError(f"Invalid octal mode: {value!r}") from e
        return value
