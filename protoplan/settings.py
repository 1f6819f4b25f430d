from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PROTOPLAN_", case_sensitive=False)

    source: str = "."
    destination: str = "./pkg/"
    extension: str = ".proto"
    timeout: float | None = None
    targets_file: Path | None = None
