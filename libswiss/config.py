"""Settings for the binding, stored as YAML and validated with pydantic."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, field_validator

__all__ = [
    "CONFIG_FILENAME",
    "LibSwissSettings",
    "config_path",
    "get_config_home",
    "load_settings",
    "save_settings",
]

CONFIG_FILENAME = "config.yaml"

_BACKEND_ENV = "LIBSWISS_BACKEND"
_LIBRARY_ENV = "LIBSWISS_LIBRARY"


class LibSwissSettings(BaseModel):
    """Engine backend and path configuration."""

    backend: Literal["auto", "native", "pyswisseph"] = "auto"
    library_path: Optional[str] = None
    ephe_path: Optional[str] = None
    log_level: Optional[str] = None

    @field_validator("backend", mode="before")
    @classmethod
    def _normalize_backend(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower() or "auto"
        return value

    @field_validator("library_path", "ephe_path", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def get_config_home() -> Path:
    """Return the directory holding ``config.yaml``."""

    return Path(os.environ.get("LIBSWISS_HOME", str(Path.home() / ".libswiss")))


def config_path() -> Path:
    return get_config_home() / CONFIG_FILENAME


def _apply_env_overrides(data: dict[str, object]) -> dict[str, object]:
    backend = os.environ.get(_BACKEND_ENV)
    if backend:
        data["backend"] = backend
    library = os.environ.get(_LIBRARY_ENV)
    if library:
        data["library_path"] = library
    return data


def load_settings(path: Optional[Path] = None) -> LibSwissSettings:
    """Load settings from disk when present, then apply environment overrides.

    A missing file yields defaults; nothing is written back.
    """

    source_path = Path(path) if path else config_path()
    raw: object = {}
    if source_path.exists():
        with source_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{source_path} must contain a mapping, got {type(raw).__name__}")
    return LibSwissSettings(**_apply_env_overrides(dict(raw)))


def save_settings(settings: LibSwissSettings, path: Optional[Path] = None) -> Path:
    """Persist ``settings`` to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(settings.model_dump(), handle, sort_keys=False, allow_unicode=True)
    return target_path
